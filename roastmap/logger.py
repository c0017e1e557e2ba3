# === FILE: roastmap/logger.py ===
"""Process-wide logging configuration for **Roastmap**.

Highlights
----------
* Unified format for console and optional file output (with rotation).
* Level picked once at startup from the ``DEBUG`` environment toggle,
  see :func:`level_from_env`.
* Core components never reach for a global logger; they get one injected::

      from roastmap.logger import get_logger
      fetcher = RetryingFetcher(session, logger=get_logger())
"""
from __future__ import annotations

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, Mapping, Optional, Union

from roastmap.config import LOG_CHANNEL

# --------------------------------------------------------------------------- #
# Constants & basic types                                                     #
# --------------------------------------------------------------------------- #

_DEFAULT_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DEBUG_ENV: Final[str] = "DEBUG"
_TRUTHY: Final[frozenset[str]] = frozenset({"1", "true"})

_LevelT = Union[int, str]


# --------------------------------------------------------------------------- #
# Helper builders                                                             #
# --------------------------------------------------------------------------- #


def _stdout_handler(fmt: str) -> logging.StreamHandler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(fmt))
    return handler


def _file_handler(file: Path | str, fmt: str) -> RotatingFileHandler:
    handler = RotatingFileHandler(
        filename=str(file),
        maxBytes=5 * 1024 * 1024,
        backupCount=3,
        encoding="utf-8",
    )
    handler.setFormatter(logging.Formatter(fmt))
    return handler


# --------------------------------------------------------------------------- #
# Public API                                                                  #
# --------------------------------------------------------------------------- #


def level_from_env(environ: Optional[Mapping[str, str]] = None) -> str:
    """Return ``"DEBUG"`` when ``DEBUG`` is ``1``/``true``, ``"INFO"`` otherwise."""
    env = os.environ if environ is None else environ
    value = env.get(_DEBUG_ENV, "").strip().lower()
    return "DEBUG" if value in _TRUTHY else "INFO"


def get_logger() -> logging.Logger:
    """Return the project logger (configured or not)."""
    return logging.getLogger(LOG_CHANNEL)


def configure(
    *,
    level: _LevelT | None = None,
    log_file: str | Path | None = None,
    log_format: str = _DEFAULT_FORMAT,
    replace_handlers: bool = True,
) -> logging.Logger:
    """(Re)configure the project logger.

    Parameters
    ----------
    level
        Numeric or textual logging level (e.g. ``"DEBUG"``).
        *None* → resolved from the environment via :func:`level_from_env`.
    log_file
        Path to a logfile. *None* → console-only output.
    log_format
        Format string for :class:`logging.Formatter`.
    replace_handlers
        *True* – remove existing handlers; *False* – just append new one(s).
    """
    lg = get_logger()
    lg.setLevel(level if level is not None else level_from_env())

    if replace_handlers:
        for handler in list(lg.handlers):
            lg.removeHandler(handler)
            handler.close()

    lg.addHandler(_stdout_handler(log_format))

    if log_file is not None:
        lg.addHandler(_file_handler(log_file, log_format))

    lg.propagate = False
    return lg


__all__ = ["configure", "get_logger", "level_from_env"]
