"""
Distance Accumulator
Cumulative great-circle length of a sequence of fixes.
"""

from typing import Sequence

from .geometry import haversine_distance
from .models import LocationFix


def cumulative_distance(window: Sequence[LocationFix]) -> float:
    """
    Sum the distances between consecutive fixes in arrival order.

    Args:
        window: Fixes, oldest first

    Returns:
        Total distance in meters, 0.0 for fewer than two fixes
    """
    fixes = list(window)
    total = 0.0
    for previous, current in zip(fixes, fixes[1:]):
        total += haversine_distance(
            previous.latitude, previous.longitude,
            current.latitude, current.longitude,
        )
    return total
