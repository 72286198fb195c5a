# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/clustercli/ansible/cli_runner.py

from __future__ import annotations

import logging
import subprocess
import time
import uuid
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from .command import AdhocCommand
from .errors import AnsibleLaunchError
from .playbook import Playbook
from .verbosity import verbosity_flag
from ..config.models import ClusterSettings
from ..observers.dispatcher import EventBus
from ..observers.events import CommandFinished, CommandLaunchFailed, CommandStarted, new_ctx
from ..utils.execution import ExecutionContext

log = logging.getLogger("clustercli")

ANSIBLE = "ansible"
ANSIBLE_PLAYBOOK = "ansible-playbook"
ANSIBLE_INVENTORY = "ansible-inventory"


class AnsibleCliRunner:
    """
    A thin wrapper around the ``ansible``, ``ansible-playbook`` and
    ``ansible-inventory`` executables.
    - One blocking subprocess at a time, no timeout.
    - Non-zero exit codes are returned, not raised.
    - Testable by mocking subprocess.run.
    """

    def __init__(
        self,
        settings: ClusterSettings,
        *,
        ctx: Optional[ExecutionContext] = None,
        bus: Optional[EventBus] = None,
        run_id: Optional[str] = None,
    ):
        self.settings = settings
        self.ctx = ctx or ExecutionContext()
        self.bus = bus or EventBus()
        self.run_id = run_id or str(uuid.uuid4())

    # ------------------------- internal helpers -------------------------

    def event_ctx(self) -> Dict[str, Any]:
        return new_ctx(self.settings.inventory, run_id=self.run_id)

    def _run(self, argv: List[str]) -> subprocess.CompletedProcess:
        program = argv[0]
        log.info("Executing %s", " ".join(argv))
        self.bus.emit(CommandStarted(program=program, argv=list(argv), **self.event_ctx()))

        if self.ctx.dry_run:
            log.info("[dry-run] skipped execution of %s", program)
            self.bus.emit(CommandFinished(program=program, returncode=0, duration_ms=0, dry_run=True, **self.event_ctx()))
            return subprocess.CompletedProcess(args=argv, returncode=0, stdout="", stderr="")

        start = time.monotonic()
        try:
            cp = subprocess.run(
                argv,
                check=False,
                text=True,
                capture_output=self.settings.capture_output,
                env=self.ctx.process_env(),
            )
        except OSError as exc:
            log.error("could not launch %s: %s", program, exc)
            self.bus.emit(CommandLaunchFailed(program=program, error=str(exc), **self.event_ctx()))
            raise AnsibleLaunchError(f"could not launch {program}: {exc}") from exc

        duration_ms = int((time.monotonic() - start) * 1000)
        if cp.returncode != 0:
            log.error("%s exited with rc=%s", program, cp.returncode)
        else:
            log.debug("%s completed in %sms", program, duration_ms)
        self.bus.emit(
            CommandFinished(program=program, returncode=cp.returncode, duration_ms=duration_ms, **self.event_ctx())
        )
        return cp

    def _verbosity(self) -> List[str]:
        flag = verbosity_flag(self.settings.verbose)
        return [flag] if flag else []

    # ------------------------- public API -------------------------

    def adhoc_argv(self, command: AdhocCommand) -> List[str]:
        return [ANSIBLE] + command.arguments(self.settings.inventory, self.settings.verbose)

    def run_adhoc(self, command: AdhocCommand) -> subprocess.CompletedProcess:
        return self._run(self.adhoc_argv(command))

    def playbook_argv(self, paths: Sequence[str | Path]) -> List[str]:
        argv = [ANSIBLE_PLAYBOOK] + self._verbosity() + ["-K", "--inventory", self.settings.inventory]
        return argv + [str(p) for p in paths]

    def run_playbook_files(self, paths: Sequence[str | Path]) -> subprocess.CompletedProcess:
        return self._run(self.playbook_argv(paths))

    def list_inventory(self) -> subprocess.CompletedProcess:
        """Lists all hosts and groups in the configured inventory."""
        return self._run([ANSIBLE_INVENTORY, "--graph", "--vars", "--inventory", self.settings.inventory])

    def check_syntax(self, playbook: Playbook) -> subprocess.CompletedProcess:
        with playbook.materialize() as path:
            return self._run([ANSIBLE_PLAYBOOK, "--syntax-check", str(path)])
