# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/clustercli/ansible/playbook.py

from __future__ import annotations

import logging
import os
import subprocess
import tempfile
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Iterator, List, Optional

from .errors import AnsibleLaunchError, PlaybookWriteError
from ..observers.events import BatchAborted

if TYPE_CHECKING:
    from .cli_runner import AnsibleCliRunner

log = logging.getLogger("clustercli")

PLAYBOOK_DIR = Path(__file__).resolve().parent.parent / "playbooks"

INSTALL_DOCKER = "install-docker"
UNINSTALL_DOCKER = "uninstall-docker"
INSTALL_KUBERNETES = "install-kubernetes"
SETUP_KUBERNETES_CLUSTER = "setup-kubernetes-cluster"
UNINSTALL_KUBERNETES = "uninstall-kubernetes"

BUNDLED_PLAYBOOKS = [
    INSTALL_DOCKER,
    INSTALL_KUBERNETES,
    SETUP_KUBERNETES_CLUSTER,
    UNINSTALL_DOCKER,
    UNINSTALL_KUBERNETES,
]


class Playbook:
    """A single playbook held in memory and written to a temp file only when run."""

    def __init__(self, content: str, name: str = "playbook"):
        self.name = name
        self.content = content
        self.path: Optional[Path] = None

    @classmethod
    def load(cls, name: str, playbook_dir: Path = PLAYBOOK_DIR) -> "Playbook":
        return cls((playbook_dir / f"{name}.yaml").read_text(encoding="utf-8"), name=name)

    def save_to_file(self) -> Path:
        """
        Write the playbook to a new temporary file and return its path.

        Every call creates a fresh file. The caller owns it; see
        :meth:`materialize` for the scoped variant.
        """
        tmp_name: Optional[str] = None
        try:
            with tempfile.NamedTemporaryFile(
                "w", prefix="clustercli-", suffix=".yaml", delete=False, encoding="utf-8"
            ) as tf:
                tmp_name = tf.name
                tf.write(self.content)
        except OSError as exc:
            if tmp_name:
                _unlink_quietly(Path(tmp_name))
            raise PlaybookWriteError(f"Failed saving playbook '{self.name}' to temporary file: {exc}") from exc

        self.path = Path(tmp_name)
        log.debug("Wrote Ansible playbook %s to %s", self.name, self.path)
        return self.path

    @contextmanager
    def materialize(self) -> Iterator[Path]:
        path = self.save_to_file()
        try:
            yield path
        finally:
            _unlink_quietly(path)
            self.path = None
            log.debug("Removed playbook file %s", path)


def _unlink_quietly(path: Path) -> None:
    try:
        os.unlink(path)
    except FileNotFoundError:
        pass


def available_playbooks(playbook_dir: Path = PLAYBOOK_DIR) -> List[Playbook]:
    return [Playbook.load(name, playbook_dir) for name in BUNDLED_PLAYBOOKS]


class BatchMode(str, Enum):
    COMBINED = "combined"
    SEQUENTIAL = "sequential"


@dataclass
class PlaybookBatch:
    """
    Playbooks run together against the same inventory.

    COMBINED passes every file to one ``ansible-playbook`` call.
    SEQUENTIAL runs them one call at a time and stops at the first failure.
    """

    mode: BatchMode = BatchMode.SEQUENTIAL
    playbooks: List[Playbook] = field(default_factory=list)

    def add_playbook(self, playbook: Playbook) -> "PlaybookBatch":
        self.playbooks.append(playbook)
        return self

    def __len__(self) -> int:
        return len(self.playbooks)

    def names(self) -> List[str]:
        return [pb.name for pb in self.playbooks]

    def run(self, runner: "AnsibleCliRunner") -> subprocess.CompletedProcess:
        if not self.playbooks:
            log.info("No playbooks to run")
            return subprocess.CompletedProcess(args=[], returncode=0, stdout="", stderr="")
        if self.mode is BatchMode.COMBINED:
            return self._run_combined(runner)
        return self._run_sequential(runner)

    def _run_combined(self, runner: "AnsibleCliRunner") -> subprocess.CompletedProcess:
        log.info("Executing Ansible playbooks %s", ", ".join(self.names()))
        with ExitStack() as stack:
            paths = [stack.enter_context(pb.materialize()) for pb in self.playbooks]
            return runner.run_playbook_files(paths)

    def _run_sequential(self, runner: "AnsibleCliRunner") -> subprocess.CompletedProcess:
        cp: Optional[subprocess.CompletedProcess] = None
        for i, pb in enumerate(self.playbooks):
            log.info("Executing Ansible playbook %s (%d/%d)", pb.name, i + 1, len(self.playbooks))
            try:
                with pb.materialize() as path:
                    cp = runner.run_playbook_files([path])
            except AnsibleLaunchError:
                skipped = [p.name for p in self.playbooks[i + 1:]]
                runner.bus.emit(BatchAborted(failed=pb.name, returncode=None, skipped=skipped, **runner.event_ctx()))
                raise

            if cp.returncode != 0:
                skipped = [p.name for p in self.playbooks[i + 1:]]
                log.error("Playbook %s failed (rc=%s); skipping %s", pb.name, cp.returncode, skipped or "nothing")
                runner.bus.emit(
                    BatchAborted(failed=pb.name, returncode=cp.returncode, skipped=skipped, **runner.event_ctx())
                )
                return cp
        return cp
