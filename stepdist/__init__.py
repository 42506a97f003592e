# stepdist
"""
Walking distance estimation from step counts, with the step length
calibrated on straight GPS segments.
"""

from .config import LocalizationConfig
from .engine import CalibrationEngine
from .exceptions import ConfigurationError, DegenerateGeometryError
from .models import (
    DEFAULT_STEP_LENGTH,
    CalibrationState,
    DistanceSnapshot,
    LocationFix,
    StatusSnapshot,
    StepSample,
)
from .session import MeasurementSession
from .session_log import ReplayResult, load_session_log, replay_session

__version__ = "0.1.0"
__all__ = [
    "LocalizationConfig",
    "CalibrationEngine",
    "ConfigurationError",
    "DegenerateGeometryError",
    "DEFAULT_STEP_LENGTH",
    "CalibrationState",
    "DistanceSnapshot",
    "LocationFix",
    "StatusSnapshot",
    "StepSample",
    "MeasurementSession",
    "ReplayResult",
    "load_session_log",
    "replay_session",
]
