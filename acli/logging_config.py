# MIT License © 2025 Motohiro Suzuki
"""
logging_config.py

One stderr handler on the "acli" logger. stdout is reserved for command
results (signatures, ciphertexts, decoded bytes) so it stays pipeable.
"""

from __future__ import annotations

import logging
import sys
from typing import Union

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
ROOT_LOGGER = "acli"


class StderrHandler(logging.StreamHandler):
    """Writes to whatever sys.stderr is at emit time, not at setup time."""

    def __init__(self, level: int = logging.NOTSET) -> None:
        logging.Handler.__init__(self, level)

    @property
    def stream(self):
        return sys.stderr


def _to_level(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    n = logging.getLevelName(level.strip().upper())
    if not isinstance(n, int):
        raise ValueError(f"unknown log level: {level}")
    return n


def setup_logging(level: Union[int, str] = logging.WARNING) -> logging.Logger:
    lv = _to_level(level)
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(lv)

    # re-entrant: adjust the existing handler instead of stacking another
    for h in logger.handlers:
        if isinstance(h, StderrHandler):
            h.setLevel(lv)
            return logger

    handler = StderrHandler(lv)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(handler)
    return logger
