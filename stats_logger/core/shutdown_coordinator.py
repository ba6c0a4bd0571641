"""
Shutdown Coordinator - ends one recording session exactly once.

The host creates one coordinator per session. Whichever path ends the
session first (frame loop done, SIGINT/SIGTERM, an exception) runs the
registered cleanups; later requests are ignored.
"""

import asyncio
import time
from enum import Enum
from typing import Awaitable, Callable

from stats_logger.core.logging_utils import get_module_logger


class ShutdownState(Enum):
    RUNNING = "running"
    IN_PROGRESS = "in_progress"
    COMPLETE = "complete"


CleanupCallback = Callable[[], Awaitable[None]]


class ShutdownCoordinator:
    """Runs a session's async cleanups once, in registration order."""

    def __init__(self, name: str = "session"):
        self.logger = get_module_logger("ShutdownCoordinator")
        self.name = name
        self._state = ShutdownState.RUNNING
        self._cleanups: list[CleanupCallback] = []
        self._lock = asyncio.Lock()

    @property
    def state(self) -> ShutdownState:
        return self._state

    @property
    def is_complete(self) -> bool:
        return self._state is ShutdownState.COMPLETE

    def register_cleanup(self, callback: CleanupCallback) -> None:
        self._cleanups.append(callback)

    async def initiate_shutdown(self, source: str = "unknown") -> bool:
        """End the session on behalf of ``source``.

        A failing cleanup is logged and the remaining ones still run.

        Returns:
            True if this call ran the cleanups, False if shutdown had
            already been started.
        """
        async with self._lock:
            if self._state is not ShutdownState.RUNNING:
                self.logger.debug("%s already %s, ignoring %s", self.name, self._state.value, source)
                return False
            self._state = ShutdownState.IN_PROGRESS

        started = time.perf_counter()
        self.logger.info("Ending %s (%s)", self.name, source)

        for callback in self._cleanups:
            name = getattr(callback, "__name__", repr(callback))
            try:
                await callback()
            except Exception as e:
                self.logger.error("Cleanup %s failed: %s", name, e, exc_info=True)

        self._state = ShutdownState.COMPLETE
        self.logger.info("Ended %s in %.3fs", self.name, time.perf_counter() - started)
        return True
