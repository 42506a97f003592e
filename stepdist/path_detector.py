"""
Path Detector
Decides whether a new fix continues the straight segment of recent fixes.
"""

import logging
from typing import Sequence

from .exceptions import DegenerateGeometryError
from .geometry import fit_line, perpendicular_distance
from .models import LocationFix

_LOGGER = logging.getLogger(__name__)


def is_on_path(
    candidate: LocationFix,
    window: Sequence[LocationFix],
    max_window_size: int,
    threshold: float,
) -> bool:
    """
    Check whether a fix lies on the line through the most recent fixes.

    Args:
        candidate: Fix being classified
        window: Fixes of the current segment, oldest first
        max_window_size: Maximum number of recent fixes used for the fit
        threshold: Maximum perpendicular deviation, in degrees

    Returns:
        True if the candidate is on the path. Always True with fewer than
        two fixes in the window.
    """
    if len(window) < 2:
        return True

    sample = list(window)[-max_window_size:]
    points = [fix.point for fix in sample]

    try:
        slope, intercept = fit_line(points)
    except DegenerateGeometryError:
        longitudes = [fix.longitude for fix in sample]
        if all(lon == longitudes[0] for lon in longitudes):
            # Single meridian: only an exact longitude match stays on it
            on_path = candidate.longitude == longitudes[0]
        else:
            # Vertical principal axis through the mean longitude
            mean_longitude = sum(longitudes) / len(longitudes)
            on_path = abs(candidate.longitude - mean_longitude) <= threshold
        _LOGGER.debug("Degenerate sample of %d fixes, on path: %s", len(sample), on_path)
        return on_path

    distance = perpendicular_distance(candidate.point, slope, intercept)
    _LOGGER.debug(
        "Perpendicular deviation %.8f (threshold %.8f) over %d fixes",
        distance, threshold, len(sample),
    )
    return distance <= threshold
