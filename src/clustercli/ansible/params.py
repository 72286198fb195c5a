# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/clustercli/ansible/params.py

from __future__ import annotations

import shlex
from typing import Dict, List, Mapping, Optional

ARGS_FLAG = "-a"


def quote_value(value: str) -> str:
    """Double-quote ``value`` so Ansible's k=v splitter keeps it as one token."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def render_parameters(params: Mapping[str, Optional[str]]) -> List[str]:
    """
    Render each parameter as a single token, in insertion order.

    - empty names are dropped
    - empty or missing values give a bare ``name``
    - anything else gives ``name="value"``
    """
    tokens: List[str] = []
    for name, value in params.items():
        if not name:
            continue
        if value:
            tokens.append(f"{name}={quote_value(value)}")
        else:
            tokens.append(name)
    return tokens


def encode_parameters(params: Mapping[str, Optional[str]], *, prefix: Optional[str] = None) -> List[str]:
    """
    Build the ``-a "<args>"`` fragment for an ad-hoc call.

    ``prefix`` is free-form text placed before the k=v tokens (used for the
    command line of the ``command`` module). Returns ``[]`` when there is
    nothing to pass.
    """
    tokens = render_parameters(params)
    if prefix:
        tokens.insert(0, prefix)
    if not tokens:
        return []
    return [ARGS_FLAG, " ".join(tokens)]


def decode_parameters(fragment: str) -> Dict[str, Optional[str]]:
    """Inverse of :func:`render_parameters` joined with spaces. Bare tokens map to None."""
    decoded: Dict[str, Optional[str]] = {}
    for token in shlex.split(fragment):
        name, sep, value = token.partition("=")
        decoded[name] = value if sep else None
    return decoded
