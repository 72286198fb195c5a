# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/clustercli/commands/models.py

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class CopyDirection(str, Enum):
    TO_REMOTE = "to-remote"
    FROM_REMOTE = "from-remote"


class ServiceAction(str, Enum):
    DEPLOY = "deploy"
    DELETE = "delete"


@dataclass(frozen=True)
class Ping:
    pass

@dataclass(frozen=True)
class Reboot:
    pass

@dataclass(frozen=True)
class Shutdown:
    pass

@dataclass(frozen=True)
class Ssh:
    pass

@dataclass(frozen=True)
class Uptime:
    pass

@dataclass(frozen=True)
class Update:
    pass

@dataclass(frozen=True)
class InventoryList:
    pass

@dataclass(frozen=True)
class RunCommand:
    command: str
    needs_become: bool = False
    chdir: Optional[str] = None

@dataclass(frozen=True)
class CopyFile:
    src: str
    dest: str
    direction: CopyDirection = CopyDirection.TO_REMOTE

@dataclass(frozen=True)
class ServiceOp:
    service: str
    action: ServiceAction


ActionRequest = Union[
    Ping,
    Reboot,
    Shutdown,
    Ssh,
    Uptime,
    Update,
    InventoryList,
    RunCommand,
    CopyFile,
    ServiceOp,
]
