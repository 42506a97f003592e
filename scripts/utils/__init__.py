"""
Shared utilities for stepdist scripts.
"""

from scripts.utils.plotting import (
    setup_matplotlib,
    plot_track,
    plot_calibration_timeline,
    save_replay_figure,
    PlotConfig,
)

__all__ = [
    "setup_matplotlib",
    "plot_track",
    "plot_calibration_timeline",
    "save_replay_figure",
    "PlotConfig",
]
