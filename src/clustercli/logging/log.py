# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

#src/clustercli/logging/log.py

from __future__ import annotations

import logging
from pathlib import Path
from datetime import datetime, timezone
from typing import Optional
import uuid

def init_logging(
    *,
    verbose: int = 0,
    base_dir: Path | None = None,
    name: str = "clustercli",
    log_to_file: bool = True,
) -> tuple[logging.Logger, str, Optional[Path]]:
    """
    Initializes:
      - console logging, INFO by default and DEBUG from one -v up
      - optional full-trace log file under ~/.clustercli/logs
      - returns run_id so observers can reuse it
    """
    run_id = str(uuid.uuid4())

    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)
    logger.handlers.clear()
    logger.propagate = False

    formatter = logging.Formatter(
        "%(asctime)s | %(levelname)-7s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    log_path: Optional[Path] = None
    if log_to_file:
        if base_dir is None:
            base_dir = Path.home() / ".clustercli" / "logs"
        base_dir.mkdir(parents=True, exist_ok=True)

        ts = datetime.now(timezone.utc).strftime("%Y%m%d-%H%M%S")
        log_path = base_dir / f"{name}-{ts}-{run_id}.log"

        # File = FULL TRACE
        fh = logging.FileHandler(log_path)
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(formatter)
        logger.addHandler(fh)

    # Console = INFO by default, DEBUG when -v is passed
    ch = logging.StreamHandler()
    ch.setLevel(logging.DEBUG if verbose >= 1 else logging.INFO)
    ch.setFormatter(formatter)
    logger.addHandler(ch)

    logger.debug("run_id=%s", run_id)
    if log_path:
        logger.debug("log_file=%s", log_path)

    return logger, run_id, log_path
