"""Centralized path constants for the stats logger."""

from __future__ import annotations

import os
import sys
from pathlib import Path


def _is_nuitka() -> bool:
    """Check if running as a Nuitka compiled binary."""
    return '__compiled__' in globals() or (getattr(sys, 'frozen', False) and not hasattr(sys, '_MEIPASS'))


def _is_pyinstaller() -> bool:
    """Check if running as a PyInstaller bundle."""
    return getattr(sys, 'frozen', False) and hasattr(sys, '_MEIPASS')


def is_frozen() -> bool:
    """Check if running as a built application (PyInstaller or Nuitka).

    Anything that is not frozen is treated as running from source, which the
    session logger reports as the editor environment.
    """
    return _is_pyinstaller() or _is_nuitka()


def _get_base_path() -> Path:
    """Get the base path, handling normal, PyInstaller, and Nuitka environments."""
    if _is_pyinstaller():
        return Path(sys._MEIPASS)
    return Path(__file__).resolve().parents[2]


PROJECT_ROOT = _get_base_path()
PACKAGE_ROOT = PROJECT_ROOT / "stats_logger"

# Session output (overridable so built apps can write next to user data)
_DATA_DIR_ENV = os.environ.get("STATS_LOGGER_DATA_DIR")
DATA_DIR = Path(_DATA_DIR_ENV).expanduser() if _DATA_DIR_ENV else PROJECT_ROOT
LOGGER_ROOT = DATA_DIR / "Logger"
CONFIG_FILE_NAME = "config.txt"

# Diagnostic logging for the logger itself
LOGS_DIR = DATA_DIR / "logs"
DIAGNOSTIC_LOG_FILE = LOGS_DIR / "stats_logger.log"


def ensure_directories() -> None:
    """Create necessary directories if they don't exist."""

    LOGS_DIR.mkdir(parents=True, exist_ok=True)
    LOGGER_ROOT.mkdir(parents=True, exist_ok=True)


__all__ = [
    'PROJECT_ROOT',
    'PACKAGE_ROOT',
    'DATA_DIR',
    'LOGGER_ROOT',
    'CONFIG_FILE_NAME',
    'LOGS_DIR',
    'DIAGNOSTIC_LOG_FILE',
    'ensure_directories',
    'is_frozen',
]
