# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Dict, Optional

@dataclass(frozen=True)
class ExecutionContext:
    """
    controls how Ansible processes are launched

    dry_run: log the argv, launch nothing
    env: extra environment variables for the Ansible process (e.g. ANSIBLE_CONFIG)
    """

    dry_run: bool = False
    env: Dict[str, str] = field(default_factory=dict)

    def process_env(self) -> Optional[Dict[str, str]]:
        if not self.env:
            return None
        merged = os.environ.copy()
        merged.update(self.env)
        return merged
