"""Unit test fixtures for isolated, fast test execution.

The root conftest provides the session logger fixtures; this file keeps
unit tests independent of the caller's environment.
"""

from __future__ import annotations

import pytest


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Drop environment overrides that change editor detection."""
    monkeypatch.delenv("STATS_LOGGER_EDITOR", raising=False)
