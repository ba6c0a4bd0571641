"""Options controlling where and how a session log is written."""

from __future__ import annotations

from dataclasses import dataclass, field
from importlib import metadata
from pathlib import Path
from typing import Dict, Optional

from stats_logger.core.config_manager import ConfigManager, get_config_manager
from stats_logger.core.logging_utils import get_module_logger
from stats_logger.core.paths import CONFIG_FILE_NAME, LOGGER_ROOT

logger = get_module_logger("LoggerConfig")

# Keys of the on-disk config file
KEY_LOG_NOTE = "log_note"
KEY_INCLUDE_NOTE_IN_FILE_NAME = "include_note_in_file_name"
KEY_OVERWRITE_OUTPUT = "overwrite_output"
KEY_OUTPUT_IN_UNIQUE_ID_FOLDER = "output_in_unique_id_folder"
KEY_INCLUDE_HARDWARE_INFO = "include_hardware_info"

CONFIG_FILE_KEYS = (
    KEY_LOG_NOTE,
    KEY_INCLUDE_NOTE_IN_FILE_NAME,
    KEY_OVERWRITE_OUTPUT,
    KEY_OUTPUT_IN_UNIQUE_ID_FOLDER,
    KEY_INCLUDE_HARDWARE_INFO,
)


def _package_version() -> str:
    try:
        return metadata.version("stats-logger")
    except metadata.PackageNotFoundError:  # pragma: no cover - local dev
        return "0.0.0"


@dataclass
class LoggerConfig:
    """Session log options, resolved once when the session is opened."""

    log_file_name: str = "Stats"
    log_note: str = ""
    include_note_in_file_name: bool = False
    overwrite_output: bool = False
    output_in_unique_id_folder: bool = False
    include_hardware_info: bool = True
    generate_config_in_build: bool = False
    root_dir: Path = field(default_factory=lambda: LOGGER_ROOT)
    app_name: str = "stats-logger"
    app_version: str = field(default_factory=_package_version)

    def __post_init__(self) -> None:
        self.root_dir = Path(self.root_dir)

    @property
    def config_path(self) -> Path:
        return self.root_dir / CONFIG_FILE_NAME

    def to_config_values(self) -> Dict[str, object]:
        """Values written to a freshly generated config file."""
        return {
            KEY_LOG_NOTE: self.log_note,
            KEY_INCLUDE_NOTE_IN_FILE_NAME: self.include_note_in_file_name,
            KEY_OVERWRITE_OUTPUT: self.overwrite_output,
            KEY_OUTPUT_IN_UNIQUE_ID_FOLDER: self.output_in_unique_id_folder,
            KEY_INCLUDE_HARDWARE_INFO: self.include_hardware_info,
        }

    def apply_config_file(
        self,
        path: Optional[Path] = None,
        manager: Optional[ConfigManager] = None,
    ) -> bool:
        """Load overrides from ``path``, or write the current values there.

        A missing file is generated from the current values and not read back.
        From an existing file only the note, note-in-name, overwrite and
        hardware-info fields are applied. ``output_in_unique_id_folder`` is
        read but never applied; the folder always follows the in-memory value.

        Returns:
            True if values were loaded from an existing file.
        """
        path = path or self.config_path
        manager = manager or get_config_manager()

        if not path.exists():
            if manager.write_config(path, self.to_config_values()):
                logger.info("Generated default config at %s", path)
            return False

        values = manager.read_config(path)
        if not values:
            return False

        if KEY_LOG_NOTE in values:
            self.log_note = manager.get_str(values, KEY_LOG_NOTE)
        self.include_note_in_file_name = manager.get_bool(
            values, KEY_INCLUDE_NOTE_IN_FILE_NAME, self.include_note_in_file_name
        )
        self.overwrite_output = manager.get_bool(values, KEY_OVERWRITE_OUTPUT, self.overwrite_output)
        self.include_hardware_info = manager.get_bool(
            values, KEY_INCLUDE_HARDWARE_INFO, self.include_hardware_info
        )

        ignored = manager.get_bool(values, KEY_OUTPUT_IN_UNIQUE_ID_FOLDER, self.output_in_unique_id_folder)
        if ignored != self.output_in_unique_id_folder:
            logger.debug(
                "%s=%s in %s is not applied from config files",
                KEY_OUTPUT_IN_UNIQUE_ID_FOLDER,
                ignored,
                path,
            )

        logger.info("Loaded config overrides from %s", path)
        return True
