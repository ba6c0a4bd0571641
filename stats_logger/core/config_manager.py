"""Flat ``key = value`` config files.

Lines starting with ``#`` are comments. A quoted value runs to its last
matching quote, so it may hold ``#`` and surrounding spaces; in an unquoted
value anything after ``#`` is dropped. Strings are written quoted.

Values are always returned as strings; the typed getters convert them and
fall back to a default on bad input.
"""

import asyncio
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

import aiofiles

from stats_logger.core.logging_utils import get_module_logger


logger = get_module_logger("ConfigManager")

_TRUE_VALUES = ('true', '1', 'yes', 'on')
_FALSE_VALUES = ('false', '0', 'no', 'off')


class ConfigManager:

    def __init__(self):
        self.logger = get_module_logger("ConfigManager")

    # ------------------------------------------------------------------
    # Internal helpers

    @staticmethod
    def _stringify_value(value: Any) -> str:
        if isinstance(value, bool):
            return str(value).lower()
        if isinstance(value, str):
            # Quoted so "#" and surrounding spaces survive a read back
            return f'"{value}"'
        return str(value)

    @staticmethod
    def _parse_value(raw: str) -> str:
        quote = raw[:1]
        if quote in ('"', "'"):
            end = raw.rfind(quote)
            if end > 0:
                return raw[1:end]
        return raw.split('#', 1)[0].strip()

    def _parse_config_lines(self, lines: Iterable[str]) -> Dict[str, str]:
        config: Dict[str, str] = {}

        for raw_line in lines:
            line = raw_line.strip()
            if not line or line.startswith('#'):
                continue
            if '=' not in line:
                continue

            key, value = line.split('=', 1)
            config[key.strip()] = self._parse_value(value.strip())

        return config

    def _render_lines(self, lines: list[str], updates: Dict[str, Any]) -> list[str]:
        updated_keys = set()

        for i, line in enumerate(lines):
            stripped = line.strip()
            if not stripped or stripped.startswith('#') or '=' not in stripped:
                continue

            key = stripped.split('=')[0].strip()
            if key in updates:
                indent = len(line) - len(line.lstrip())
                lines[i] = ' ' * indent + f"{key} = {self._stringify_value(updates[key])}\n"
                updated_keys.add(key)

        for key, value in updates.items():
            if key not in updated_keys:
                value_str = self._stringify_value(value)
                lines.append(f"{key} = {value_str}\n")
                self.logger.debug("Added new config key: %s = %s", key, value_str)

        return lines

    # ------------------------------------------------------------------
    # Reading

    def read_config(self, config_path: Path) -> Dict[str, str]:
        """Read a config file; a missing or unreadable file yields ``{}``."""
        if not config_path.exists():
            self.logger.debug("Config file not found: %s", config_path)
            return {}

        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                return self._parse_config_lines(f)
        except (OSError, UnicodeDecodeError) as e:
            self.logger.error("Failed to read config %s: %s", config_path, e)
            return {}

    async def read_config_async(self, config_path: Path) -> Dict[str, str]:
        """Async version for use in async contexts."""
        if not await asyncio.to_thread(config_path.exists):
            self.logger.debug("Config file not found: %s", config_path)
            return {}

        try:
            lines: list[str] = []
            async with aiofiles.open(config_path, 'r', encoding='utf-8') as f:
                async for line in f:
                    lines.append(line)
            return self._parse_config_lines(lines)
        except (OSError, UnicodeDecodeError) as e:
            self.logger.error("Failed to read config %s: %s", config_path, e)
            return {}

    # ------------------------------------------------------------------
    # Writing

    def write_config(self, config_path: Path, updates: Dict[str, Any]) -> bool:
        """Update ``updates`` keys in place, creating the file when missing.

        Existing lines, comments and unrelated keys are preserved.
        """
        try:
            lines: list[str] = []
            if config_path.exists():
                with open(config_path, 'r', encoding='utf-8') as f:
                    lines = f.readlines()

            lines = self._render_lines(lines, updates)

            config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(config_path, 'w', encoding='utf-8') as f:
                f.writelines(lines)
            return True

        except (OSError, UnicodeDecodeError) as e:
            self.logger.error("Failed to write config %s: %s", config_path, e, exc_info=True)
            return False

    # ------------------------------------------------------------------
    # Typed getters

    def get_bool(self, config: Dict[str, str], key: str, default: bool = False) -> bool:
        parsed = self.parse_bool(config.get(key))
        if parsed is None:
            if key in config:
                self.logger.warning("Invalid bool value for %s: %s, using default %s", key, config[key], default)
            return default
        return parsed

    @staticmethod
    def parse_bool(value: Optional[str]) -> Optional[bool]:
        """Parse boolean text, returning ``None`` when it is not recognized."""
        if value is None:
            return None
        lowered = value.strip().lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False
        return None

    def get_str(self, config: Dict[str, str], key: str, default: str = "") -> str:
        return config.get(key, default)

    def get_int(self, config: Dict[str, str], key: str, default: int = 0) -> int:
        if key not in config:
            return default

        try:
            return int(config[key])
        except ValueError:
            self.logger.warning("Invalid int value for %s: %s, using default %d", key, config[key], default)
            return default

    def get_float(self, config: Dict[str, str], key: str, default: float = 0.0) -> float:
        if key not in config:
            return default

        try:
            return float(config[key])
        except ValueError:
            self.logger.warning("Invalid float value for %s: %s, using default %s", key, config[key], default)
            return default


_config_manager: Optional[ConfigManager] = None


def get_config_manager() -> ConfigManager:
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager
