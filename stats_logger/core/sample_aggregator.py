"""Frame-rate sampling for a running session.

The host calls :meth:`SampleAggregator.tick` once per frame with the time
that frame took. Every ``update_interval`` the per-frame rates collected so
far are averaged into one sample, which updates the session-wide extremes
and is appended to a bounded window. When the session logger closes, the
aggregator publishes mean/median/highest/lowest into the logger's
:class:`~stats_logger.core.session_data.SessionData`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional, Sequence

import numpy as np

from stats_logger.core.logging_utils import LoggerLike, ensure_structured_logger
from stats_logger.core.session_data import FpsSummary
from stats_logger.core.settings import LoggerSettings

if TYPE_CHECKING:
    from stats_logger.core.session_logger import SessionLogger

DEFAULT_UPDATE_INTERVAL = 0.5
DEFAULT_MAX_RECORDED_SAMPLES = 100

# Absorbs float drift when the countdown lands on the boundary (5 x 0.1 != 0.5)
_BOUNDARY_TOLERANCE = 1e-9


def calculate_mean(samples: Sequence[float]) -> Optional[float]:
    if len(samples) == 0:
        return None
    return float(np.mean(np.asarray(samples, dtype=np.float64)))


def calculate_median(samples: Sequence[float]) -> Optional[float]:
    """Middle value of the sorted samples.

    An even count gives the mean of the two central values.
    """
    if len(samples) == 0:
        return None
    return float(np.median(np.asarray(samples, dtype=np.float64)))


class SampleAggregator:
    """Turns per-frame elapsed times into periodic frame-rate samples."""

    def __init__(
        self,
        session_logger: "SessionLogger",
        settings: LoggerSettings,
        update_interval: float = DEFAULT_UPDATE_INTERVAL,
        max_recorded_samples: int = DEFAULT_MAX_RECORDED_SAMPLES,
        logger: LoggerLike = None,
    ):
        if update_interval <= 0:
            raise ValueError("update_interval must be positive")
        if max_recorded_samples < 1:
            raise ValueError("max_recorded_samples must be at least 1")

        self.logger = ensure_structured_logger(logger, fallback_name="SampleAggregator")
        self.session_logger = session_logger
        self.settings = settings
        self.update_interval = update_interval
        self.max_recorded_samples = max_recorded_samples

        self.accumulator = 0.0
        self.frame_count = 0
        self.time_left = update_interval
        self.highest: Optional[float] = None
        self.lowest: Optional[float] = None
        self.samples: List[float] = []

        self._active = False

    @property
    def active(self) -> bool:
        return self._active

    def start(self) -> bool:
        """Subscribe to the session logger if recording is permitted.

        Returns:
            True if the aggregator is now sampling.
        """
        if self._active:
            return True
        if not self.settings.can_record:
            self.logger.debug("Recording not permitted, aggregator stays idle")
            return False

        self.time_left = self.update_interval
        self.session_logger.subscribe(self.on_session_end)
        self._active = True
        self.session_logger.append(f"{type(self).__name__}: loaded!")
        return True

    def stop(self) -> None:
        if not self._active:
            return
        self.session_logger.unsubscribe(self.on_session_end)
        self._active = False

    def tick(self, elapsed_time: float, time_scale: float = 1.0) -> Optional[float]:
        """Account for one frame.

        Frames with a non-positive ``elapsed_time`` carry no rate and are
        ignored entirely.

        Returns:
            The new sample if this frame closed an interval, else None.
        """
        if not self._active:
            return None
        if elapsed_time <= 0:
            self.logger.debug("Ignoring frame with elapsed time %s", elapsed_time)
            return None

        self.time_left -= elapsed_time
        self.accumulator += time_scale / elapsed_time
        self.frame_count += 1

        if self.time_left > _BOUNDARY_TOLERANCE:
            return None

        current = self.accumulator / self.frame_count
        self._record(current)

        self.accumulator = 0.0
        self.frame_count = 0
        self.time_left = self.update_interval
        return current

    def _record(self, sample: float) -> None:
        if self.highest is None or sample > self.highest:
            self.highest = sample
        if self.lowest is None or sample < self.lowest:
            self.lowest = sample

        self.samples.append(sample)
        excess = len(self.samples) - self.max_recorded_samples
        if excess > 0:
            del self.samples[:excess]

    def summary(self) -> FpsSummary:
        return FpsSummary(
            mean=calculate_mean(self.samples),
            median=calculate_median(self.samples),
            highest=self.highest,
            lowest=self.lowest,
        )

    def on_session_end(self) -> None:
        """Publish the session summary into the logger's shared results."""
        self.session_logger.session_data.fps = self.summary()
