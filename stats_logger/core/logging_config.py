"""Diagnostic logging setup for the stats logger.

This configures Python ``logging`` for messages *about* the logger (file
errors, config warnings). The session log file itself is written by
:class:`stats_logger.core.session_logger.SessionLogger` and never goes
through these handlers.
"""

from __future__ import annotations

import contextlib
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import List, Optional, Union

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"
DIAGNOSTIC_MAX_BYTES = 500 * 1024
DIAGNOSTIC_BACKUPS = 2

# Third-party loggers too chatty at the host's level
NOISY_LOGGERS = ("asyncio",)

_installed: List[logging.Handler] = []


def _resolve_level(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level '{level}'")
    return resolved


def _diagnostic_handlers(console: bool, log_file: Optional[Path]) -> List[logging.Handler]:
    handlers: List[logging.Handler] = []
    if console:
        handlers.append(logging.StreamHandler(sys.stdout))
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            RotatingFileHandler(
                log_file,
                maxBytes=DIAGNOSTIC_MAX_BYTES,
                backupCount=DIAGNOSTIC_BACKUPS,
                encoding="utf-8",
            )
        )
    return handlers


def configure_logging(
    level: Union[int, str] = logging.INFO,
    *,
    force: bool = False,
    console: bool = True,
    log_file: Optional[Union[str, Path]] = None,
) -> None:
    """Route diagnostics to stdout and/or a rotating file.

    A second call only changes the level unless ``force`` is set, in which
    case every root handler is replaced.
    """
    numeric_level = _resolve_level(level)
    root = logging.getLogger()
    root.setLevel(numeric_level)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.ERROR)

    if _installed and not force:
        return

    for handler in list(root.handlers):
        root.removeHandler(handler)
        with contextlib.suppress(Exception):
            handler.close()
    _installed.clear()

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT)
    handlers = _diagnostic_handlers(console, Path(log_file) if log_file else None)
    if not handlers:
        handlers = [logging.NullHandler()]

    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)
    _installed.extend(handlers)


__all__ = ["configure_logging", "LOG_FORMAT", "LOG_DATEFMT"]
