from __future__ import annotations

import argparse
import logging
from pathlib import Path


LOG_LEVELS: dict[str, int] = {
    "critical": logging.CRITICAL,
    "error": logging.ERROR,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}


def add_logging_arguments(parser: argparse.ArgumentParser, *, default_level: str = "info") -> None:
    parser.add_argument(
        "--log-level",
        choices=list(LOG_LEVELS),
        default=default_level,
        help=f"Diagnostic logging level (default: {default_level})",
    )
    parser.add_argument(
        "--console",
        dest="console_output",
        action="store_true",
        default=True,
        help="Also log diagnostics to console",
    )
    parser.add_argument(
        "--no-console",
        dest="console_output",
        action="store_false",
        help="Log diagnostics to file only",
    )


def add_output_arguments(parser: argparse.ArgumentParser, *, default_output: Path | str) -> None:
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=Path(default_output),
        help="Directory where session logs are written",
    )
    parser.add_argument(
        "--note",
        default="",
        help="Note written into the header",
    )
    parser.add_argument(
        "--note-in-name",
        action="store_true",
        help="Append the note to the log file name",
    )
    parser.add_argument(
        "--overwrite",
        action="store_true",
        help="Reuse one file name instead of a timestamped one",
    )
    parser.add_argument(
        "--unique-id-folder",
        action="store_true",
        help="Write into a folder named after the device identifier",
    )
    parser.add_argument(
        "--no-hardware-info",
        dest="include_hardware_info",
        action="store_false",
        default=True,
        help="Leave the hardware block out of the header",
    )


def _positive_number(value: str, typ: type, name: str):
    """Generic positive number validator for argparse."""
    try:
        parsed = typ(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Value must be a {name}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("Value must be positive")
    return parsed


def positive_int(value: str) -> int:
    return _positive_number(value, int, "integer")


def positive_float(value: str) -> float:
    return _positive_number(value, float, "number")
