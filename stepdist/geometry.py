"""
Geometry Module
Line fitting and distance primitives over (longitude, latitude) points.
"""

import math
import numpy as np
from sklearn.decomposition import PCA
from typing import Sequence, Tuple

from .exceptions import DegenerateGeometryError


EARTH_RADIUS_METERS = 6371000.0


def fit_line(points: Sequence[Tuple[float, float]]) -> Tuple[float, float]:
    """
    Fit a straight line through 2-D points.

    The line is the principal axis of the centered points, i.e. the
    perpendicular (total least squares) regression. Unlike ordinary least
    squares it does not depend on which axis is treated as independent.

    Args:
        points: Sequence of (x, y) pairs, x = longitude, y = latitude

    Returns:
        Tuple of (slope, intercept) for y = slope * x + intercept

    Raises:
        DegenerateGeometryError: If fewer than 2 points are given, all x
            values are equal, or the principal axis is vertical.
    """
    data = np.asarray(points, dtype=float)
    if data.ndim != 2 or data.shape[0] < 2 or data.shape[1] != 2:
        raise DegenerateGeometryError("At least two (x, y) points are required")

    if np.var(data[:, 0]) == 0.0:
        raise DegenerateGeometryError("Zero variance along the x axis")

    pca = PCA(n_components=2)
    pca.fit(data)
    direction_x, direction_y = pca.components_[0]

    if direction_x == 0.0:
        raise DegenerateGeometryError("Principal axis is vertical")

    mean_x, mean_y = pca.mean_
    slope = direction_y / direction_x
    intercept = mean_y - slope * mean_x
    return float(slope), float(intercept)


def perpendicular_distance(
    point: Tuple[float, float],
    slope: float,
    intercept: float,
) -> float:
    """
    Distance from a point to the line y = slope * x + intercept.

    Args:
        point: (x, y) pair in the same units as the fitted line
        slope: Line slope
        intercept: Line intercept

    Returns:
        Euclidean distance between the point and its foot of perpendicular
    """
    x, y = point
    foot_x = (x + slope * (y - intercept)) / (slope ** 2 + 1.0)
    foot_y = slope * foot_x + intercept
    return math.hypot(x - foot_x, y - foot_y)


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Great-circle distance between two coordinates.

    Args:
        lat1, lon1: First coordinate in degrees
        lat2, lon2: Second coordinate in degrees

    Returns:
        Distance in meters
    """
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    delta_phi = math.radians(lat2 - lat1)
    delta_lambda = math.radians(lon2 - lon1)

    a = (math.sin(delta_phi / 2) ** 2 +
         math.cos(phi1) * math.cos(phi2) * math.sin(delta_lambda / 2) ** 2)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_METERS * c
