# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/clustercli/ansible/errors.py
class ClusterCliError(RuntimeError):
    """Base class for failures raised before or while launching Ansible."""

class UnknownServiceError(ClusterCliError):
    """Raised when a service operation names a service we have no playbooks for."""

    def __init__(self, service: str, action: str = "deploy"):
        self.service = service
        super().__init__(f"Unknown service '{service}', can't {action}")

class PlaybookWriteError(ClusterCliError):
    """Raised when a playbook cannot be written to its temporary file."""

class AnsibleLaunchError(ClusterCliError):
    """Raised when an Ansible executable is missing or cannot be started."""
