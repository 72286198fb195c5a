# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/clustercli/commands/services.py

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Tuple

from ..ansible.errors import UnknownServiceError
from ..ansible.playbook import (
    INSTALL_DOCKER,
    INSTALL_KUBERNETES,
    PLAYBOOK_DIR,
    SETUP_KUBERNETES_CLUSTER,
    UNINSTALL_DOCKER,
    UNINSTALL_KUBERNETES,
    BatchMode,
    Playbook,
    PlaybookBatch,
)
from .models import ServiceAction

log = logging.getLogger("clustercli")

SERVICE_NAME_DOCKER = "docker"
SERVICE_NAME_KUBERNETES = "kubernetes"

# (action, service) -> playbooks, in the order they must run
SERVICE_PLAYBOOKS: Dict[Tuple[ServiceAction, str], List[str]] = {
    (ServiceAction.DEPLOY, SERVICE_NAME_KUBERNETES): [INSTALL_KUBERNETES, SETUP_KUBERNETES_CLUSTER],
    (ServiceAction.DEPLOY, SERVICE_NAME_DOCKER): [INSTALL_DOCKER],
    (ServiceAction.DELETE, SERVICE_NAME_KUBERNETES): [UNINSTALL_KUBERNETES],
    (ServiceAction.DELETE, SERVICE_NAME_DOCKER): [UNINSTALL_DOCKER],
}


def known_services() -> List[str]:
    return sorted({service for _, service in SERVICE_PLAYBOOKS})


def service_batch(action: ServiceAction, service: str, playbook_dir: Path = PLAYBOOK_DIR) -> PlaybookBatch:
    """
    Playbooks for a service lifecycle step, as a fail-fast sequence.

    Raises UnknownServiceError before anything is loaded or launched.
    """
    names = SERVICE_PLAYBOOKS.get((action, service))
    if names is None:
        err = UnknownServiceError(service, action.value)
        log.debug("%s", err)
        raise err

    batch = PlaybookBatch(mode=BatchMode.SEQUENTIAL)
    for name in names:
        batch.add_playbook(Playbook.load(name, playbook_dir))
    return batch
