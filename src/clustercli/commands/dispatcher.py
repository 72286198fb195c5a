# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/clustercli/commands/dispatcher.py

from __future__ import annotations

import logging
import subprocess
from typing import Callable, Dict, Type

from ..ansible.cli_runner import AnsibleCliRunner
from ..ansible.command import AdhocCommand
from .models import (
    ActionRequest,
    CopyDirection,
    CopyFile,
    InventoryList,
    Ping,
    Reboot,
    RunCommand,
    ServiceAction,
    ServiceOp,
    Shutdown,
    Ssh,
    Update,
    Uptime,
)
from .services import service_batch

log = logging.getLogger("clustercli")

Handler = Callable[[ActionRequest, AnsibleCliRunner], subprocess.CompletedProcess]

_HANDLERS: Dict[Type, Handler] = {}


def handles(request_type: Type):
    def decorator(fn: Handler) -> Handler:
        _HANDLERS[request_type] = fn
        return fn
    return decorator


def dispatch(request: ActionRequest, runner: AnsibleCliRunner) -> subprocess.CompletedProcess:
    """Run ``request`` with the handler registered for its type."""
    handler = _HANDLERS.get(type(request))
    if handler is None:
        raise TypeError(f"no handler registered for {type(request).__name__}")
    return handler(request, runner)


# ------------------------- ad-hoc commands -------------------------

@handles(Ping)
def _ping(request: Ping, runner: AnsibleCliRunner) -> subprocess.CompletedProcess:
    return runner.run_adhoc(AdhocCommand.named("ping", False, runner.settings.host_pattern))


@handles(Reboot)
def _reboot(request: Reboot, runner: AnsibleCliRunner) -> subprocess.CompletedProcess:
    return runner.run_adhoc(AdhocCommand.named("reboot", True, runner.settings.host_pattern))


@handles(Shutdown)
def _shutdown(request: Shutdown, runner: AnsibleCliRunner) -> subprocess.CompletedProcess:
    return runner.run_adhoc(AdhocCommand.named("community.general.shutdown", True, runner.settings.host_pattern))


@handles(Ssh)
def _ssh(request: Ssh, runner: AnsibleCliRunner) -> subprocess.CompletedProcess:
    return runner.run_adhoc(AdhocCommand.named("ssh", False, runner.settings.host_pattern))


@handles(Uptime)
def _uptime(request: Uptime, runner: AnsibleCliRunner) -> subprocess.CompletedProcess:
    return runner.run_adhoc(AdhocCommand.run("uptime", False, runner.settings.host_pattern))


@handles(RunCommand)
def _run_command(request: RunCommand, runner: AnsibleCliRunner) -> subprocess.CompletedProcess:
    cmd = AdhocCommand.run(request.command, request.needs_become, runner.settings.host_pattern, request.chdir)
    return runner.run_adhoc(cmd)


@handles(CopyFile)
def _copy_file(request: CopyFile, runner: AnsibleCliRunner) -> subprocess.CompletedProcess:
    if request.direction is CopyDirection.FROM_REMOTE:
        cmd = AdhocCommand.fetch(request.src, request.dest, False, runner.settings.host_pattern)
    else:
        cmd = AdhocCommand.copy(request.src, request.dest, False, runner.settings.host_pattern)
    return runner.run_adhoc(cmd)


@handles(Update)
def _update(request: Update, runner: AnsibleCliRunner) -> subprocess.CompletedProcess:
    return runner.run_adhoc(AdhocCommand.update(runner.settings.host_pattern))


# ------------------------- playbooks / inventory -------------------------

@handles(ServiceOp)
def _service(request: ServiceOp, runner: AnsibleCliRunner) -> subprocess.CompletedProcess:
    verb = "Deploying" if request.action is ServiceAction.DEPLOY else "Deleting"
    log.info("%s service '%s' on cluster", verb, request.service)
    batch = service_batch(request.action, request.service)
    return batch.run(runner)


@handles(InventoryList)
def _inventory_list(request: InventoryList, runner: AnsibleCliRunner) -> subprocess.CompletedProcess:
    return runner.list_inventory()
