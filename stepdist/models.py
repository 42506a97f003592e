"""
Data Models
Sensor messages, calibration state and the snapshots reported to the host.
"""

import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple


DEFAULT_STEP_LENGTH = 0.78  # meters per step until the first calibration
NOT_CALIBRATED = "not calibrated"


@dataclass(frozen=True)
class LocationFix:
    """One reported device position with its accuracy estimate."""
    latitude: float
    longitude: float
    horizontal_accuracy: float  # meters
    timestamp: datetime

    @property
    def rounded_accuracy(self) -> float:
        """Horizontal accuracy rounded to one decimal place."""
        return round_accuracy(self.horizontal_accuracy)

    @property
    def point(self) -> Tuple[float, float]:
        """(longitude, latitude) pair used by the line fit."""
        return (self.longitude, self.latitude)


@dataclass(frozen=True)
class StepSample:
    """Cumulative step count reported by the pedometer since measuring began."""
    steps: Any
    timestamp: Optional[datetime] = None


@dataclass
class CalibrationState:
    """Mutable state of one measurement, from start to stop.

    Attributes:
        step_length: Meters per step, always > 0. Default: 0.78
        last_calibration: When step_length was last derived from GPS.
            None means the factory default is in use.
        calibration_in_progress: True while the walker is on a straight
            segment that has already covered the distance threshold
        steps_taken_persistent: Steps committed at the last segment close
        distance_traveled_persistent: Meters committed at the last segment close
        steps_taken_provisional: Steps since that boundary
        distance_traveled_provisional: Meters since that boundary
        location_events: Fixes believed to lie on the current straight segment
    """
    step_length: float = DEFAULT_STEP_LENGTH
    last_calibration: Optional[datetime] = None
    calibration_in_progress: bool = False
    steps_taken_persistent: int = 0
    distance_traveled_persistent: int = 0
    steps_taken_provisional: int = 0
    distance_traveled_provisional: int = 0
    location_events: List[LocationFix] = field(default_factory=list)

    @property
    def steps_taken(self) -> int:
        return self.steps_taken_persistent + self.steps_taken_provisional

    @property
    def distance_traveled(self) -> int:
        return self.distance_traveled_persistent + self.distance_traveled_provisional

    def commit_provisional(self) -> None:
        """Fold provisional counters into the persistent ones."""
        self.steps_taken_persistent += self.steps_taken_provisional
        self.distance_traveled_persistent += self.distance_traveled_provisional
        self.steps_taken_provisional = 0
        self.distance_traveled_provisional = 0


@dataclass(frozen=True)
class StatusSnapshot:
    """Readiness and calibration status.

    step_length and last_calibrated are None while no measurement is running
    or, for last_calibrated, while the default step length is in use.
    """
    is_ready_to_start: bool
    is_calibrating: bool
    last_calibrated: Optional[datetime]
    step_length: Optional[float]

    def to_dict(self) -> Dict[str, Any]:
        """Render the payload sent to the host."""
        if self.last_calibrated is None:
            last_calibrated = NOT_CALIBRATED
        else:
            last_calibrated = self.last_calibrated.isoformat()
        return {
            "isReadyToStart": self.is_ready_to_start,
            "isCalibrating": self.is_calibrating,
            "lastCalibrated": last_calibrated,
            "stepLength": self.step_length,
        }


@dataclass(frozen=True)
class DistanceSnapshot:
    """Total distance (meters) and steps since measuring began."""
    distance_traveled: int
    steps_taken: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "distanceTraveled": self.distance_traveled,
            "stepsTaken": self.steps_taken,
        }


def round_accuracy(accuracy: float) -> float:
    """Round an accuracy value to one decimal place.

    Unknown (NaN or infinite) accuracy maps to infinity, which no filter accepts.
    """
    if not math.isfinite(accuracy):
        return math.inf
    return round(accuracy * 10) / 10
