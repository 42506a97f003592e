"""
Session Log
Loads recorded sensor logs and replays them through a calibration engine.

Expected CSV format (one row per sensor event):
    timestamp, kind, latitude, longitude, horizontal_accuracy, steps
    2024-05-01T09:00:00Z, location, 52.5200, 13.4050, 6.0,
    2024-05-01T09:00:01Z, steps, , , , 2

Location rows leave `steps` empty; step rows leave the coordinates empty.
`steps` is the cumulative pedometer count since measuring began.
"""

import pandas as pd
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union

from .config import LocalizationConfig
from .engine import CalibrationEngine
from .models import DistanceSnapshot, LocationFix, StatusSnapshot


REQUIRED_COLUMNS = [
    "timestamp", "kind", "latitude", "longitude", "horizontal_accuracy", "steps",
]
EVENT_KINDS = ("location", "steps")


@dataclass
class ReplayResult:
    """Output of an offline replay.

    Attributes:
        locations: One row per location event with the status after it
        distances: One row per accepted step event with the reported totals
        final_status: Status when the log ran out
        final_distance: Distance totals when the log ran out
    """
    locations: pd.DataFrame
    distances: pd.DataFrame
    final_status: StatusSnapshot
    final_distance: Optional[DistanceSnapshot]

    @property
    def calibration_count(self) -> int:
        """Number of distinct calibrations committed during the replay."""
        calibrated = self.locations["last_calibrated"].dropna()
        return int(calibrated.nunique())


def load_session_log(filepath: Union[str, Path]) -> pd.DataFrame:
    """
    Load a recorded sensor log from CSV.

    Args:
        filepath: Path to the CSV file

    Returns:
        DataFrame sorted by timestamp (stable for equal timestamps)
    """
    filepath = Path(filepath)
    if not filepath.exists():
        raise FileNotFoundError(f"File not found: {filepath}")

    df = pd.read_csv(filepath)

    missing = [col for col in REQUIRED_COLUMNS if col not in df.columns]
    if missing:
        raise ValueError(f"Missing columns in {filepath.name}: {missing}")

    df["kind"] = df["kind"].astype(str).str.strip().str.lower()
    unknown = sorted(set(df["kind"]) - set(EVENT_KINDS))
    if unknown:
        raise ValueError(f"Unknown event kinds in {filepath.name}: {unknown}")

    df["timestamp"] = pd.to_datetime(df["timestamp"], utc=True)
    df = df.sort_values("timestamp", kind="mergesort").reset_index(drop=True)

    return df


def replay_session(
    log: pd.DataFrame,
    config: LocalizationConfig,
) -> ReplayResult:
    """
    Feed a recorded log through a fresh engine, in order.

    Calibration timestamps come from the log, not the wall clock.

    Args:
        log: DataFrame as returned by load_session_log
        config: Localization parameters

    Returns:
        ReplayResult with per-event records
    """
    current_time = {"value": None}
    engine = CalibrationEngine(config, clock=lambda: current_time["value"])
    engine.start_measuring()

    location_rows: List[dict] = []
    distance_rows: List[dict] = []

    for event in log.itertuples(index=False):
        timestamp = pd.Timestamp(event.timestamp).to_pydatetime()
        current_time["value"] = timestamp

        if event.kind == "location":
            fix = LocationFix(
                latitude=float(event.latitude),
                longitude=float(event.longitude),
                horizontal_accuracy=float(event.horizontal_accuracy),
                timestamp=timestamp,
            )
            engine.on_location_fix(fix)
            status = engine.status_snapshot()
            location_rows.append({
                "timestamp": timestamp,
                "latitude": fix.latitude,
                "longitude": fix.longitude,
                "horizontal_accuracy": fix.horizontal_accuracy,
                "accepted": fix.rounded_accuracy <= config.accuracy_filter,
                "is_calibrating": status.is_calibrating,
                "step_length": status.step_length,
                "last_calibrated": status.last_calibrated,
            })
        else:
            snapshot = engine.on_step_sample(_as_step_count(event.steps))
            if snapshot is None:
                continue
            distance_rows.append({
                "timestamp": timestamp,
                "steps_taken": snapshot.steps_taken,
                "distance_traveled": snapshot.distance_traveled,
                "step_length": engine.status_snapshot().step_length,
            })

    final_status = engine.status_snapshot()
    final_distance = engine.distance_snapshot()
    engine.stop_measuring()

    return ReplayResult(
        locations=pd.DataFrame(location_rows, columns=[
            "timestamp", "latitude", "longitude", "horizontal_accuracy",
            "accepted", "is_calibrating", "step_length", "last_calibrated",
        ]),
        distances=pd.DataFrame(distance_rows, columns=[
            "timestamp", "steps_taken", "distance_traveled", "step_length",
        ]),
        final_status=final_status,
        final_distance=final_distance,
    )


def _as_step_count(value):
    """Convert a CSV cell to an int step count; anything else passes through."""
    if pd.isna(value):
        return None
    try:
        value = float(value)
    except (TypeError, ValueError):
        return value
    if value.is_integer():
        return int(value)
    return value
