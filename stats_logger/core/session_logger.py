"""
Session Logger - owns the text log written over one application session.

Lifecycle:
1. ``open(config)`` resolves the output path and writes the header
2. ``append(...)`` adds timestamped lines while the session runs
3. ``close()`` lets subscribers publish their results, then writes the footer

Every write is its own open/write/close cycle so a crash loses at most the
line being written. Failures are logged and reported through the return
value; nothing here raises into the host.
"""

import asyncio
import math
import re
import threading
import time
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Callable, List, Optional, Sequence, TextIO, Union

import aiofiles

from stats_logger.core.logger_config import LoggerConfig
from stats_logger.core.logging_utils import LoggerLike, ensure_structured_logger
from stats_logger.core.platform_info import SystemInfo, SystemInfoProvider, detect_system_info
from stats_logger.core.session_data import SessionData
from stats_logger.core.settings import LoggerSettings

LOOP_START_MARKER = "====== Update Loop Start ======"
LOOP_END_MARKER = "====== Update Loop End   ======"
EDITOR_MARKER = "===!#! EDITOR !#!==="
UNIQUE_ID_FALLBACK_FOLDER = "[Logs]"
UNSUPPORTED_DEVICE_ID = "Unsupported"
FPS_NOT_RECORDED_MESSAGE = (
    "FPS counter did not appear to be enabled. If unintentional, check "
    "SampleAggregator is started for this session and its values are set correctly."
)

_UNSAFE_FILE_NAME_CHARS = re.compile(r'[\\/:*?"<>|\x00-\x1f]')

SessionCallback = Callable[[], None]
Lines = Union[str, Sequence[str]]


class SessionState(Enum):
    UNOPENED = "unopened"
    READY = "ready"
    CLOSED = "closed"


def format_line(message: str) -> str:
    """Render one log line; blank messages become an empty line."""
    if not message or message.isspace():
        return "\n"
    return f"[{datetime.now().strftime('%H:%M:%S')}] -> {message}\n"


def format_duration(seconds: float) -> str:
    seconds = max(0.0, seconds)
    hours = math.floor(seconds / 3600)
    minutes = math.floor((seconds % 3600) / 60)
    secs = math.floor(seconds % 60)
    return f"Session Length: {hours} hours : {minutes} mins : {secs} secs"


class SessionLogger:
    """Append-only session log with a header/footer lifecycle."""

    def __init__(
        self,
        settings: LoggerSettings,
        system_info_provider: Optional[SystemInfoProvider] = None,
        clock: Callable[[], float] = time.monotonic,
        logger: LoggerLike = None,
    ):
        self.logger = ensure_structured_logger(logger, fallback_name="SessionLogger")
        self.settings = settings
        self.system_info_provider = system_info_provider or detect_system_info
        self.clock = clock
        self.session_data = SessionData()

        self.config: Optional[LoggerConfig] = None
        self.log_file_path: Optional[Path] = None
        self._state = SessionState.UNOPENED
        self._started_at: Optional[float] = None
        self._subscribers: List[SessionCallback] = []
        self._write_lock = threading.Lock()
        self._async_write_lock: Optional[asyncio.Lock] = None

    # ------------------------------------------------------------------
    # State

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_ready(self) -> bool:
        return self._state is SessionState.READY

    # ------------------------------------------------------------------
    # Subscribers

    def subscribe(self, callback: SessionCallback) -> SessionCallback:
        """Register ``callback`` to run when the session is closed."""
        self._subscribers.append(callback)
        return callback

    def unsubscribe(self, callback: SessionCallback) -> bool:
        try:
            self._subscribers.remove(callback)
        except ValueError:
            return False
        return True

    def _publish_session_data(self) -> None:
        for callback in list(self._subscribers):
            try:
                callback()
            except Exception as e:
                self.logger.error(
                    "Session data subscriber %s failed: %s",
                    getattr(callback, "__qualname__", callback),
                    e,
                    exc_info=True,
                )

    # ------------------------------------------------------------------
    # Opening

    def open(self, config: Optional[LoggerConfig] = None) -> Optional[Path]:
        """Resolve the output file and write the header.

        A provider failure falls back to default system info. Characters
        that cannot appear in a file name are replaced when the note is
        added to it.

        Returns:
            The log file path, or None if recording is not permitted or the
            file could not be created.
        """
        if self._state is not SessionState.UNOPENED:
            self.logger.warning("Session log already %s, ignoring open()", self._state.value)
            return self.log_file_path if self.is_ready else None

        if not self.settings.can_record:
            self.logger.debug("Recording not permitted, session log disabled")
            return None

        config = config or LoggerConfig()
        system_info = self._collect_system_info()

        try:
            folder = self._resolve_folder(config, system_info)
            folder.mkdir(parents=True, exist_ok=True)

            if not self.settings.is_editor and config.generate_config_in_build:
                config.apply_config_file()

            path = self._resolve_file_path(config, folder)
            with open(path, "w", encoding="utf-8") as writer:
                self._write_header(writer, config, system_info)
        except OSError as e:
            self.logger.error("Failed to set up session log: %s", e)
            return None

        self.config = config
        self.log_file_path = path
        self._started_at = self.clock()
        self._state = SessionState.READY
        self.logger.info("Setup @ %s", path)
        return path

    def _collect_system_info(self) -> SystemInfo:
        try:
            return self.system_info_provider()
        except Exception as e:
            self.logger.error("System info unavailable, header uses defaults: %s", e, exc_info=True)
            return SystemInfo()

    def _resolve_folder(self, config: LoggerConfig, system_info: SystemInfo) -> Path:
        if not config.output_in_unique_id_folder:
            return config.root_dir
        return config.root_dir / (system_info.device_id or UNIQUE_ID_FALLBACK_FOLDER)

    def _resolve_file_path(self, config: LoggerConfig, folder: Path) -> Path:
        name = config.log_file_name
        if config.include_note_in_file_name:
            name = f"{name}-{_safe_file_name_part(config.log_note)}"

        if config.overwrite_output:
            return folder / f"{name}.txt"
        return folder / f"{name}_{datetime.now().strftime('%Y-%m-%d_%H-%M')}.txt"

    def _write_header(self, writer: TextIO, config: LoggerConfig, info: SystemInfo) -> None:
        lines = [
            datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
            f"{config.app_name} v{config.app_version}",
        ]
        if config.log_note:
            lines.append(f"Note: {config.log_note}")
        lines.append(f"Unique System Identifier: {info.device_id or UNSUPPORTED_DEVICE_ID}")
        lines.append("")

        if self.settings.is_editor:
            lines.append(EDITOR_MARKER)

        lines += [
            "",
            "# System Info...",
            f"OS: {info.operating_system}",
            f"Graphics Driver: {info.graphics_driver}",
        ]
        if info.battery_status:
            lines.append(f"Battery Status: {info.battery_status}")
        lines.append("")

        if config.include_hardware_info:
            lines += [
                "## Hardware...",
                "- CPU -",
                f"Model: {info.cpu_model}",
                f"Hardware Threads: {info.cpu_threads}",
                f"Frequency: {info.cpu_frequency_mhz} MHz",
                "- GPU -",
                f"Device Vendor: {info.gpu_vendor}",
                f"Device Vendor ID: {info.gpu_vendor_id}",
                f"Model: {info.gpu_model}",
                f"Device ID: {info.gpu_device_id}",
                "- Memory -",
                f"RAM: {info.ram_mb} MB",
                f"VRAM: {info.vram_mb} MB",
                "",
            ]

        lines.append(LOOP_START_MARKER)
        writer.writelines(f"{line}\n" for line in lines)

    # ------------------------------------------------------------------
    # Appending

    def append(self, messages: Lines) -> bool:
        """Append one line, or several lines with a single open.

        Each non-blank line is prefixed with ``[HH:MM:SS] ->``.

        Returns:
            True if the write succeeded; False before ``open()``, after
            ``close()`` or on an I/O error.
        """
        if not self.is_ready:
            return False

        if isinstance(messages, str):
            messages = [messages]

        with self._write_lock:
            try:
                with open(self.log_file_path, "a", encoding="utf-8") as writer:
                    for message in messages:
                        writer.write(format_line(message))
            except OSError as e:
                self.logger.error("Failed to write to session log: %s", e)
                return False

        return True

    async def append_async(self, messages: Lines) -> bool:
        """Async version of :meth:`append` for hosts running an event loop."""
        if not self.is_ready:
            return False

        if isinstance(messages, str):
            messages = [messages]

        if self._async_write_lock is None:
            self._async_write_lock = asyncio.Lock()

        async with self._async_write_lock:
            try:
                async with aiofiles.open(self.log_file_path, "a", encoding="utf-8") as writer:
                    await writer.write("".join(format_line(m) for m in messages))
            except OSError as e:
                self.logger.error("Failed to write to session log: %s", e)
                return False

        return True

    # ------------------------------------------------------------------
    # Closing

    def close(self) -> bool:
        """Collect session data from subscribers and write the footer.

        Returns:
            True if the footer was written.
        """
        if not self.is_ready:
            return False

        self._publish_session_data()
        duration = self.clock() - self._started_at
        footer = self._render_footer(duration)

        try:
            with self._write_lock:
                with open(self.log_file_path, "a", encoding="utf-8") as writer:
                    writer.writelines(footer)
        except OSError as e:
            self.logger.error("Failed to write session footer: %s", e)
            return False
        finally:
            self._state = SessionState.CLOSED

        self.logger.info("Session log closed after %.1fs", duration)
        return True

    def _render_footer(self, duration: float) -> List[str]:
        footer = [
            f"{LOOP_END_MARKER}\n",
            "\n",
            f"{format_duration(duration)}\n",
            "\n",
        ]

        fps = self.session_data.fps
        if not fps.recorded:
            footer.append(format_line(FPS_NOT_RECORDED_MESSAGE))
            return footer

        footer += [
            "# FPS...\n",
            f"Average: {_format_rate(fps.mean)}\n",
            f"Median: {_format_rate(fps.median)}\n",
            f"Highest: {_format_rate(fps.highest)}\n",
            f"Lowest: {_format_rate(fps.lowest)}\n",
        ]
        return footer

    def __enter__(self) -> "SessionLogger":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def _safe_file_name_part(text: str) -> str:
    """Replace characters that are not allowed in a file name with ``_``."""
    return _UNSAFE_FILE_NAME_CHARS.sub("_", text).strip()


def _format_rate(value: Optional[float]) -> str:
    if value is None:
        return "n/a"
    return f"{value:.2f}"


__all__ = [
    "SessionLogger",
    "SessionState",
    "LOOP_START_MARKER",
    "LOOP_END_MARKER",
    "EDITOR_MARKER",
    "FPS_NOT_RECORDED_MESSAGE",
    "format_line",
    "format_duration",
]
