# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from typing import Optional

MAX_VERBOSITY = 4


def verbosity_flag(count: int) -> Optional[str]:
    """
    Map a ``-v`` occurrence count to the flag passed to Ansible.

    0 -> None, 1 -> "-v", ... Anything above 4 collapses to "-vvvv".
    """
    if count <= 0:
        return None
    return "-" + "v" * min(count, MAX_VERBOSITY)
