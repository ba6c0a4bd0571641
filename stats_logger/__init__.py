"""Frame-rate and session metadata logger for interactive applications."""

from __future__ import annotations

from importlib import metadata
from typing import Optional, Sequence

from .core import (
    FpsSummary,
    LoggerConfig,
    LoggerSettings,
    SampleAggregator,
    SessionData,
    SessionLogger,
    SessionState,
)

try:
    __version__ = metadata.version("stats-logger")
except metadata.PackageNotFoundError:  # pragma: no cover - local dev
    __version__ = "0.0.0"


def run(argv: Optional[Sequence[str]] = None) -> int:
    """Run a simulated session from the command line."""
    from .app.master import run as run_master

    return run_master(list(argv) if argv is not None else None)


__all__ = [
    "__version__",
    "FpsSummary",
    "LoggerConfig",
    "LoggerSettings",
    "SampleAggregator",
    "SessionData",
    "SessionLogger",
    "SessionState",
    "run",
]
