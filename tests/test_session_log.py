#!/usr/bin/env python3
"""
Tests for session log loading and offline replay.

Run with: pytest tests/test_session_log.py -v
"""

import pytest
import numpy as np
import pandas as pd
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).parent.parent))

from scripts.generate_sample_session import generate_walk
from stepdist.session_log import load_session_log, replay_session

from helpers import METERS_PER_DEGREE, make_config

PROFILE_FILE = Path(__file__).parent.parent / "config" / "localization.yaml"


def write_log(tmp_path, rows, name="log.csv"):
    path = tmp_path / name
    pd.DataFrame(rows).to_csv(path, index=False)
    return path


def straight_log_rows():
    """Collinear fixes 40 m apart on the equator with 50 steps between."""
    rows = []
    for i in range(6):
        rows.append({
            "timestamp": f"2024-05-01T09:00:{i * 10:02d}Z",
            "kind": "location",
            "latitude": 0.0,
            "longitude": i * 40.0 / METERS_PER_DEGREE,
            "horizontal_accuracy": 5.0,
            "steps": None,
        })
        rows.append({
            "timestamp": f"2024-05-01T09:00:{i * 10 + 5:02d}Z",
            "kind": "steps",
            "latitude": None,
            "longitude": None,
            "horizontal_accuracy": None,
            "steps": (i + 1) * 50,
        })
    return rows


class TestLoadSessionLog:
    """Test load_session_log function."""

    def test_sorted_by_timestamp(self, tmp_path):
        """Test events are ordered by time."""
        rows = straight_log_rows()
        path = write_log(tmp_path, list(reversed(rows)))

        log = load_session_log(path)

        assert log["timestamp"].is_monotonic_increasing
        assert len(log) == len(rows)
        assert log.loc[0, "kind"] == "location"

    def test_kind_normalized(self, tmp_path):
        """Test event kinds are stripped and lower-cased."""
        rows = straight_log_rows()
        rows[0]["kind"] = " Location "
        path = write_log(tmp_path, rows)

        log = load_session_log(path)

        assert set(log["kind"]) == {"location", "steps"}

    def test_missing_file(self, tmp_path):
        """Test a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_session_log(tmp_path / "missing.csv")

    def test_missing_column(self, tmp_path):
        """Test a log without the steps column is rejected."""
        rows = [{k: v for k, v in row.items() if k != "steps"}
                for row in straight_log_rows()]
        path = write_log(tmp_path, rows)

        with pytest.raises(ValueError, match="steps"):
            load_session_log(path)

    def test_unknown_kind(self, tmp_path):
        """Test unknown event kinds are rejected."""
        rows = straight_log_rows()
        rows[1]["kind"] = "heading"
        path = write_log(tmp_path, rows)

        with pytest.raises(ValueError, match="heading"):
            load_session_log(path)


class TestReplaySession:
    """Test replay_session function."""

    def test_straight_walk(self, tmp_path):
        """Test a straight walk calibrates from the log."""
        log = load_session_log(write_log(tmp_path, straight_log_rows()))

        result = replay_session(log, make_config())

        # Fix 5 arrives with 160 m behind it and 250 provisional steps
        assert result.final_status.step_length == pytest.approx(160.0 / 250)
        assert result.final_status.is_calibrating
        assert result.calibration_count == 2
        assert result.final_distance.steps_taken == 300
        assert len(result.locations) == 6
        assert len(result.distances) == 6

    def test_calibration_time_from_log(self, tmp_path):
        """Test calibration timestamps come from the log events."""
        log = load_session_log(write_log(tmp_path, straight_log_rows()))

        result = replay_session(log, make_config())

        last = result.final_status.last_calibrated
        assert last == pd.Timestamp("2024-05-01T09:00:50Z").to_pydatetime()

    def test_bad_step_cells_dropped(self, tmp_path):
        """Test fractional and empty step cells are skipped."""
        rows = straight_log_rows()
        rows[1]["steps"] = 12.5
        rows[3]["steps"] = None
        log = load_session_log(write_log(tmp_path, rows))

        result = replay_session(log, make_config())

        assert len(result.distances) == 4
        assert result.final_distance.steps_taken == 300

    def test_synthetic_walk(self):
        """Test replay of a generated walk with turns and poor fixes."""
        log = generate_walk(position_noise_meters=0.3, seed=3)
        log["timestamp"] = pd.to_datetime(log["timestamp"], utc=True)

        from stepdist.config import LocalizationConfig
        config = LocalizationConfig.from_yaml(PROFILE_FILE)

        result = replay_session(log, config)

        assert result.calibration_count >= 1
        assert 0.6 < result.final_status.step_length < 0.9
        assert result.final_distance.steps_taken == int(log["steps"].max())
        assert not result.locations["accepted"].all()
        assert result.locations["is_calibrating"].any()

        distances = result.distances["distance_traveled"].to_numpy()
        assert np.all(np.diff(result.distances["steps_taken"].to_numpy()) >= 0)
        assert distances[-1] > 0
