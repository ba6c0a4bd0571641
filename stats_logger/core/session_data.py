"""Results collected from subscribers when a session ends."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class FpsSummary:
    """Frame-rate statistics for a whole session.

    All fields stay ``None`` until a sample aggregator publishes its summary.
    ``mean`` and ``median`` are also ``None`` when the sample window is empty.
    """

    mean: Optional[float] = None
    median: Optional[float] = None
    highest: Optional[float] = None
    lowest: Optional[float] = None

    @property
    def recorded(self) -> bool:
        """False when no frame-rate sample was ever taken."""
        return self.highest is not None


@dataclass
class SessionData:
    """Shared structure subscribers fill in before the footer is written."""

    fps: FpsSummary = field(default_factory=FpsSummary)
