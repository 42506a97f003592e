#!/usr/bin/env python3
"""
Tests for the straight path detector.

Run with: pytest tests/test_path_detector.py -v
"""

import pytest
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).parent.parent))

from stepdist.exceptions import DegenerateGeometryError
from stepdist.path_detector import is_on_path

from helpers import make_fix

THRESHOLD = 0.0001  # degrees, about 11 m


class TestShortWindow:
    """Test windows with fewer than two fixes."""

    def test_empty_window(self):
        """Test any fix is on path for an empty window."""
        assert is_on_path(make_fix(0.0, 5000.0), [], 5, THRESHOLD)

    def test_single_fix_window(self):
        """Test any fix is on path for a single-fix window."""
        window = [make_fix(0.0)]

        assert is_on_path(make_fix(-300.0, 9000.0), window, 5, THRESHOLD)


class TestStraightSegment:
    """Test classification against a fitted line."""

    def setup_method(self):
        self.window = [make_fix(east) for east in (0.0, 40.0, 80.0)]

    def test_collinear_candidate(self):
        """Test a fix continuing the line is on path."""
        assert is_on_path(make_fix(120.0), self.window, 5, THRESHOLD)

    def test_small_deviation(self):
        """Test a fix 5 m off the line is on path."""
        assert is_on_path(make_fix(120.0, 5.0), self.window, 5, THRESHOLD)

    def test_large_deviation(self):
        """Test a fix 50 m off the line is off path."""
        assert not is_on_path(make_fix(120.0, 50.0), self.window, 5, THRESHOLD)

    def test_diagonal_segment(self):
        """Test a north-east segment."""
        window = [make_fix(d, d) for d in (0.0, 30.0, 60.0, 90.0)]

        assert is_on_path(make_fix(120.0, 121.0), window, 5, THRESHOLD)
        assert not is_on_path(make_fix(120.0, 160.0), window, 5, THRESHOLD)


class TestWindowSize:
    """Test that only the most recent fixes are fitted."""

    def test_recent_fixes_define_line(self):
        """Test old fixes beyond the window size are ignored."""
        # Walked north, then turned east
        window = [make_fix(0.0, 0.0), make_fix(0.0, 100.0),
                  make_fix(40.0, 100.0), make_fix(80.0, 100.0)]
        candidate = make_fix(120.0, 100.0)

        assert is_on_path(candidate, window, 2, THRESHOLD)
        assert not is_on_path(candidate, window, 4, THRESHOLD)


class TestDegenerateSample:
    """Test samples sharing one longitude."""

    def setup_method(self):
        self.window = [make_fix(0.0, north) for north in (0.0, 40.0, 80.0)]

    def test_same_longitude_on_path(self):
        """Test a candidate on the same meridian is on path."""
        assert is_on_path(make_fix(0.0, 120.0), self.window, 5, THRESHOLD)

    def test_other_longitude_off_path(self):
        """Test any longitude change leaves the vertical line."""
        assert not is_on_path(make_fix(0.5, 120.0), self.window, 5, THRESHOLD)

    def test_coincident_fixes(self):
        """Test a window of identical fixes."""
        window = [make_fix(10.0, 10.0), make_fix(10.0, 10.0)]

        assert is_on_path(make_fix(10.0, 10.0), window, 5, THRESHOLD)
        assert not is_on_path(make_fix(11.0, 10.0), window, 5, THRESHOLD)

    def test_vertical_axis_with_spread(self, monkeypatch):
        """Test a vertical fit with spread longitudes uses the mean meridian."""
        def vertical_fit(points):
            raise DegenerateGeometryError("Principal axis is vertical")

        monkeypatch.setattr("stepdist.path_detector.fit_line", vertical_fit)
        window = [make_fix(-1.0, 0.0), make_fix(1.0, 40.0), make_fix(0.0, 80.0)]

        assert is_on_path(make_fix(0.0, 120.0), window, 5, THRESHOLD)
        assert is_on_path(make_fix(5.0, 120.0), window, 5, THRESHOLD)
        assert not is_on_path(make_fix(50.0, 120.0), window, 5, THRESHOLD)
