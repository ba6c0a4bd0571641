from .logger_config import LoggerConfig
from .sample_aggregator import SampleAggregator, calculate_mean, calculate_median
from .session_data import FpsSummary, SessionData
from .session_logger import SessionLogger, SessionState
from .settings import LoggerSettings
from .shutdown_coordinator import ShutdownCoordinator

__all__ = [
    'LoggerConfig',
    'LoggerSettings',
    'SampleAggregator',
    'calculate_mean',
    'calculate_median',
    'FpsSummary',
    'SessionData',
    'SessionLogger',
    'SessionState',
    'ShutdownCoordinator',
]
