# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/clustercli/config/loader.py

import logging
import os
import yaml
from pathlib import Path
from typing import Any, Optional

from .models import ClusterSettings

log = logging.getLogger("clustercli")


def _load_yaml(path: Path) -> dict:
    """Load a YAML file, expanding ${ENV_VAR} references."""
    raw = path.read_text()
    expanded = os.path.expandvars(raw)
    return yaml.safe_load(expanded) or {}


def load_config(path: str | Path) -> ClusterSettings:
    return ClusterSettings.model_validate(_load_yaml(Path(path)))


def resolve_settings(config_path: Optional[str | Path] = None, **overrides: Any) -> ClusterSettings:
    """
    Build settings from an optional YAML file plus CLI overrides.

    Overrides only win when they are not None, so an unset CLI option
    never hides a value from the file.
    """
    data: dict = {}
    if config_path:
        log.debug("Loading settings from %s", config_path)
        data = _load_yaml(Path(config_path))

    for key, value in overrides.items():
        if value is not None:
            data[key] = value

    return ClusterSettings.model_validate(data)
