#!/usr/bin/env python3
"""
Tests for the replay command line entry point.

Run with: pytest tests/test_main.py -v
"""

import pytest
import pandas as pd
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).parent.parent))

from main import main
from scripts.generate_sample_session import generate_walk

PROFILE_FILE = Path(__file__).parent.parent / "config" / "localization.yaml"


@pytest.fixture
def log_path(tmp_path):
    path = tmp_path / "walk.csv"
    generate_walk(seed=2).to_csv(path, index=False)
    return path


class TestMain:
    """Test the replay CLI."""

    def test_replay_prints_summary(self, log_path, capsys):
        """Test a replay reports the calibration results."""
        code = main(["--input", str(log_path), "--config", str(PROFILE_FILE)])

        out = capsys.readouterr().out
        assert code == 0
        assert "Step length:" in out
        assert "Distance traveled:" in out
        assert "Done!" in out

    def test_replay_writes_report(self, log_path, tmp_path):
        """Test the distance report CSV is written."""
        output = tmp_path / "out" / "distances.csv"

        code = main([
            "--input", str(log_path),
            "--config", str(PROFILE_FILE),
            "--profile", "urban",
            "--output", str(output),
        ])

        assert code == 0
        report = pd.read_csv(output)
        assert list(report.columns) == [
            "timestamp", "steps_taken", "distance_traveled", "step_length",
        ]
        assert report["steps_taken"].is_monotonic_increasing

    def test_unknown_profile(self, log_path, capsys):
        """Test an unknown profile exits with an error code."""
        code = main([
            "--input", str(log_path),
            "--config", str(PROFILE_FILE),
            "--profile", "missing",
        ])

        assert code == 1
        assert "Error:" in capsys.readouterr().out

    def test_missing_log(self, tmp_path, capsys):
        """Test a missing log file exits with an error code."""
        code = main([
            "--input", str(tmp_path / "missing.csv"),
            "--config", str(PROFILE_FILE),
        ])

        assert code == 1
        assert "Error: File not found" in capsys.readouterr().out

    def test_log_missing_columns(self, tmp_path, capsys):
        """Test a log without the required columns exits with an error code."""
        path = tmp_path / "broken.csv"
        pd.DataFrame({"timestamp": ["2024-05-01T09:00:00Z"], "kind": ["steps"]}).to_csv(
            path, index=False
        )

        code = main(["--input", str(path), "--config", str(PROFILE_FILE)])

        assert code == 1
        assert "Missing columns" in capsys.readouterr().out
