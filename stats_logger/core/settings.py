"""Process-wide switch deciding whether a session may be recorded."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from stats_logger.core.paths import is_frozen

EDITOR_ENV_VAR = "STATS_LOGGER_EDITOR"


def detect_editor() -> bool:
    """Return True when running from source rather than a built app.

    ``STATS_LOGGER_EDITOR`` overrides detection when it holds a boolean.
    """
    override = os.environ.get(EDITOR_ENV_VAR, "").strip().lower()
    if override in ("1", "true", "yes", "on"):
        return True
    if override in ("0", "false", "no", "off"):
        return False
    return not is_frozen()


@dataclass
class LoggerSettings:
    """Recording permission shared by the session logger and its collaborators.

    Recording is always allowed in a built app. In the editor it is allowed
    only when ``record_in_editor`` is set.
    """

    record_in_editor: bool = False
    is_editor: Optional[bool] = None

    def __post_init__(self) -> None:
        if self.is_editor is None:
            self.is_editor = detect_editor()

    @property
    def can_record(self) -> bool:
        if self.record_in_editor:
            return True
        return not self.is_editor
