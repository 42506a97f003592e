"""
Shared builders for the test modules.
"""

import math
from datetime import datetime, timedelta, timezone

from stepdist.config import LocalizationConfig
from stepdist.models import LocationFix

# Meters per degree of latitude, and of longitude on the equator
METERS_PER_DEGREE = 6371000.0 * math.pi / 180.0

START_TIME = datetime(2024, 5, 1, 9, 0, 0, tzinfo=timezone.utc)


def make_fix(east: float = 0.0, north: float = 0.0, accuracy: float = 5.0,
             seconds: float = 0.0) -> LocationFix:
    """Fix at an (east, north) offset in meters from (0, 0)."""
    return LocationFix(
        latitude=north / METERS_PER_DEGREE,
        longitude=east / METERS_PER_DEGREE,
        horizontal_accuracy=accuracy,
        timestamp=START_TIME + timedelta(seconds=seconds),
    )


def make_config(**overrides) -> LocalizationConfig:
    values = dict(
        distance_filter=5.0,
        accuracy_filter=10.0,
        perpendicular_distance_filter=0.0001,
        locations_sequence_filter=5,
        locations_sequence_distance_filter=100.0,
    )
    values.update(overrides)
    return LocalizationConfig(**values)
