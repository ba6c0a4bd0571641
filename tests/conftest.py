"""Shared pytest configuration and fixtures for the stats logger test suite."""

import sys
from pathlib import Path

import pytest

# Ensure the project root is in the path for imports
PROJECT_ROOT = Path(__file__).parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from stats_logger.core.logger_config import LoggerConfig
from stats_logger.core.platform_info import SystemInfo
from stats_logger.core.session_logger import SessionLogger
from stats_logger.core.settings import LoggerSettings


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "slow: mark test as slow running"
    )


# =============================================================================
# Shared Fixtures
# =============================================================================

class FakeClock:
    """Monotonic clock the tests move by hand."""

    def __init__(self, start: float = 100.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def system_info() -> SystemInfo:
    return SystemInfo(
        operating_system="TestOS 1.0",
        graphics_driver="OpenGL 4.6",
        cpu_model="Test CPU",
        cpu_threads=8,
        cpu_frequency_mhz=3200,
        gpu_vendor="TestVendor",
        gpu_vendor_id=4318,
        gpu_model="Test GPU",
        gpu_device_id=7,
        ram_mb=16384,
        vram_mb=4096,
        device_id="abc123",
    )


@pytest.fixture
def build_settings() -> LoggerSettings:
    """Settings of a built (non-editor) app, where recording is always on."""
    return LoggerSettings(record_in_editor=False, is_editor=False)


@pytest.fixture
def logger_config(tmp_path: Path) -> LoggerConfig:
    return LoggerConfig(root_dir=tmp_path / "Logger", app_name="TestApp", app_version="1.2.3")


@pytest.fixture
def session_logger(build_settings, system_info, fake_clock) -> SessionLogger:
    return SessionLogger(build_settings, system_info_provider=lambda: system_info, clock=fake_clock)


@pytest.fixture
def open_logger(session_logger, logger_config) -> SessionLogger:
    """A session logger that has written its header."""
    assert session_logger.open(logger_config) is not None
    return session_logger
