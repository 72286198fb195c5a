# src/clustercli/observers/events.py

from __future__ import annotations
from dataclasses import dataclass, asdict, field
from typing import List, Dict, Any, Optional
from datetime import datetime, timezone
import uuid


# ---------------------------------------------------------------------
# Base context and helper
# ---------------------------------------------------------------------
@dataclass(frozen=True)
class BaseEvent:
    ts: str                    # ISO timestamp
    run_id: str                # correlates all events in a single CLI invocation
    inventory: Optional[str]   # inventory the command ran against

    def dict(self) -> Dict[str, Any]:
        return asdict(self)


def new_ctx(inventory: Optional[str], run_id: Optional[str] = None) -> Dict[str, Any]:
    return {
        "ts": datetime.now(timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z"),
        "run_id": run_id or str(uuid.uuid4()),
        "inventory": inventory,
    }


# ---------------------------------------------------------------------
# Subprocess lifecycle
# ---------------------------------------------------------------------
@dataclass(frozen=True)
class CommandStarted(BaseEvent):
    program: str
    argv: List[str] = field(default_factory=list)

@dataclass(frozen=True)
class CommandFinished(BaseEvent):
    program: str
    returncode: int
    duration_ms: int
    dry_run: bool = False

@dataclass(frozen=True)
class CommandLaunchFailed(BaseEvent):
    program: str
    error: str


# ---------------------------------------------------------------------
# Playbook batches
# ---------------------------------------------------------------------
@dataclass(frozen=True)
class BatchAborted(BaseEvent):
    failed: str
    returncode: Optional[int]    # None when the playbook never launched
    skipped: List[str] = field(default_factory=list)
