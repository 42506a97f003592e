#!/usr/bin/env python3
"""
Generate a synthetic sensor log for testing the calibration engine.

The walker follows straight legs joined by sharp turns. GPS fixes carry
gaussian position noise and a reported accuracy; the pedometer reports the
cumulative step count derived from a fixed true step length.
"""

import math
import numpy as np
import pandas as pd
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

EARTH_RADIUS_METERS = 6371000.0

# (heading in degrees clockwise from north, length in meters)
DEFAULT_LEGS: List[Tuple[float, float]] = [
    (90.0, 220.0),
    (0.0, 160.0),
    (270.0, 240.0),
]


def meters_to_latlon(
    x: np.ndarray,
    y: np.ndarray,
    origin_lat: float,
    origin_lon: float,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Convert local east/north offsets to coordinates (equirectangular).

    Args:
        x: East offsets in meters
        y: North offsets in meters
        origin_lat, origin_lon: Origin coordinate in degrees

    Returns:
        Tuple of (latitudes, longitudes) in degrees
    """
    lat = origin_lat + np.degrees(y / EARTH_RADIUS_METERS)
    lon = origin_lon + np.degrees(
        x / (EARTH_RADIUS_METERS * math.cos(math.radians(origin_lat)))
    )
    return lat, lon


def generate_walk(
    legs: Optional[Sequence[Tuple[float, float]]] = None,
    origin: Tuple[float, float] = (52.5200, 13.4050),
    walking_speed: float = 1.3,
    true_step_length: float = 0.72,
    fix_interval_seconds: float = 2.0,
    position_noise_meters: float = 1.0,
    low_accuracy_ratio: float = 0.1,
    seed: int = 0,
    start_time: str = "2024-05-01T09:00:00Z",
) -> pd.DataFrame:
    """
    Generate an interleaved location/steps log.

    Args:
        legs: Sequence of (heading_deg, length_m) straight legs
        origin: Starting (latitude, longitude)
        walking_speed: Speed in m/s
        true_step_length: Step length used to derive step counts (m)
        fix_interval_seconds: Seconds between GPS fixes
        position_noise_meters: Standard deviation of GPS noise (m)
        low_accuracy_ratio: Fraction of fixes reported with poor accuracy
        seed: Random seed
        start_time: Timestamp of the first event

    Returns:
        DataFrame in the session log format
    """
    if legs is None:
        legs = DEFAULT_LEGS

    rng = np.random.default_rng(seed)
    dt = fix_interval_seconds

    # Ground-truth path sampled at the fix interval
    xs, ys, travelled = [0.0], [0.0], [0.0]
    for heading, length in legs:
        n_samples = max(1, int(round(length / (walking_speed * dt))))
        step = length / n_samples
        dx = step * math.sin(math.radians(heading))
        dy = step * math.cos(math.radians(heading))
        for _ in range(n_samples):
            xs.append(xs[-1] + dx)
            ys.append(ys[-1] + dy)
            travelled.append(travelled[-1] + step)

    xs = np.array(xs) + rng.normal(0.0, position_noise_meters, len(xs))
    ys = np.array(ys) + rng.normal(0.0, position_noise_meters, len(ys))
    lat, lon = meters_to_latlon(xs, ys, origin[0], origin[1])

    accuracy = rng.uniform(3.0, 8.0, len(xs))
    poor = rng.random(len(xs)) < low_accuracy_ratio
    accuracy[poor] = rng.uniform(20.0, 60.0, int(poor.sum()))

    start = pd.Timestamp(start_time)
    rows = []
    for i in range(len(xs)):
        fix_time = start + pd.Timedelta(seconds=i * dt)
        rows.append({
            "timestamp": fix_time.isoformat(),
            "kind": "location",
            "latitude": round(float(lat[i]), 8),
            "longitude": round(float(lon[i]), 8),
            "horizontal_accuracy": round(float(accuracy[i]), 2),
            "steps": None,
        })
        rows.append({
            "timestamp": (fix_time + pd.Timedelta(seconds=dt / 2)).isoformat(),
            "kind": "steps",
            "latitude": None,
            "longitude": None,
            "horizontal_accuracy": None,
            "steps": int(travelled[i] / true_step_length),
        })

    return pd.DataFrame(rows)


def main():
    """Generate a sample session log."""
    output_dir = Path(__file__).parent.parent / "data"
    output_dir.mkdir(parents=True, exist_ok=True)

    print("=" * 60)
    print("Generating sample session log")
    print("=" * 60)

    df = generate_walk()
    output_path = output_dir / "sample_walk.csv"
    df.to_csv(output_path, index=False)

    n_fixes = int((df["kind"] == "location").sum())
    print(f"   Saved to: {output_path}")
    print(f"   Fixes: {n_fixes}, Steps: {int(df['steps'].max())}")
    print(f"\n  python main.py -i {output_path} --plot output/sample_walk.png")


if __name__ == "__main__":
    main()
