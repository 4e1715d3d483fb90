# detsched/utils/logger.py

"""Logging utilities.

Library modules log through ``logging.getLogger(__name__)`` so every record
ends up under the ``detsched`` namespace; ``build_logger`` attaches handlers
to that namespace once:
- console output for interactive fitting sessions
- optional file output next to experiment artifacts
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def build_logger(name: str = "detsched",
                 level: str = "INFO",
                 log_file: Optional[str | Path] = None) -> logging.Logger:
    """Create (or fetch) the configured package logger."""
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Calling twice must not duplicate output
    if logger.handlers:
        return logger

    fmt = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    ch = logging.StreamHandler()
    ch.setFormatter(fmt)
    logger.addHandler(ch)

    if log_file is not None:
        p = Path(log_file)
        p.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(p, encoding="utf-8")
        fh.setFormatter(fmt)
        logger.addHandler(fh)

    logger.propagate = False
    return logger
