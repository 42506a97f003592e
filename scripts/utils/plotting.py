#!/usr/bin/env python3
"""
Plotting utilities for replayed measurement sessions.

Usage:
    from scripts.utils.plotting import save_replay_figure, PlotConfig

    result = replay_session(load_session_log("walk.csv"), config)
    save_replay_figure(result, "walk.png")
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Tuple, Union

# Lazy import matplotlib to allow backend configuration
_plt = None


def setup_matplotlib(backend: Optional[str] = None) -> None:
    """Configure matplotlib with specified backend.

    Args:
        backend: Matplotlib backend name. Defaults to 'Agg'.
                 Can be overridden via MATPLOTLIB_BACKEND env variable.
    """
    import matplotlib

    if backend is None:
        backend = os.environ.get('MATPLOTLIB_BACKEND', 'Agg')

    matplotlib.use(backend)


def _get_plt():
    """Lazy import matplotlib.pyplot with the configured backend."""
    global _plt
    if _plt is None:
        setup_matplotlib()
        import matplotlib.pyplot as plt
        _plt = plt
    return _plt


@dataclass
class PlotConfig:
    """Configuration for plot styling.

    Attributes:
        figsize: Figure size as (width, height) tuple.
        dpi: Resolution for saved figures.
        line_width: Default line width.
        grid_alpha: Grid line transparency.
        title_fontsize: Font size for titles.
        label_fontsize: Font size for axis labels.
        calibrating_color: Color of fixes on a calibrating segment.
        tracking_color: Color of accepted fixes off calibration.
        rejected_color: Color of fixes discarded for poor accuracy.
        marker_size: Scatter point size.
    """
    figsize: Tuple[float, float] = (14, 6)
    dpi: int = 150
    line_width: float = 1.0
    grid_alpha: float = 0.3
    title_fontsize: int = 11
    label_fontsize: int = 10
    calibrating_color: str = "tab:green"
    tracking_color: str = "tab:blue"
    rejected_color: str = "lightgray"
    marker_size: float = 12.0


def plot_track(
    ax: Any,
    locations,
    title: str = "GPS track",
    config: Optional[PlotConfig] = None,
) -> None:
    """Scatter the replayed fixes, colored by calibration status.

    Args:
        ax: Matplotlib axes
        locations: ReplayResult.locations DataFrame
        title: Axes title
        config: PlotConfig object
    """
    if config is None:
        config = PlotConfig()

    rejected = locations[~locations["accepted"]]
    calibrating = locations[locations["accepted"] & locations["is_calibrating"]]
    tracking = locations[locations["accepted"] & ~locations["is_calibrating"]]

    ax.plot(locations["longitude"], locations["latitude"],
            color=config.tracking_color, linewidth=config.line_width, alpha=0.4)
    ax.scatter(rejected["longitude"], rejected["latitude"],
               s=config.marker_size, c=config.rejected_color, label="Low accuracy")
    ax.scatter(tracking["longitude"], tracking["latitude"],
               s=config.marker_size, c=config.tracking_color, label="Tracking")
    ax.scatter(calibrating["longitude"], calibrating["latitude"],
               s=config.marker_size, c=config.calibrating_color, label="Calibrating")

    ax.set_xlabel("Longitude (deg)", fontsize=config.label_fontsize)
    ax.set_ylabel("Latitude (deg)", fontsize=config.label_fontsize)
    ax.set_title(title, fontsize=config.title_fontsize)
    ax.grid(True, alpha=config.grid_alpha)
    ax.legend(loc="best", fontsize=config.label_fontsize - 2)


def plot_calibration_timeline(
    ax: Any,
    distances,
    title: str = "Distance and step length",
    config: Optional[PlotConfig] = None,
) -> Any:
    """Plot reported distance and the step length in use over time.

    Args:
        ax: Matplotlib axes for the distance curve
        distances: ReplayResult.distances DataFrame
        title: Axes title
        config: PlotConfig object

    Returns:
        Twin axes holding the step length curve
    """
    if config is None:
        config = PlotConfig()

    ax.plot(distances["timestamp"], distances["distance_traveled"],
            color=config.tracking_color, linewidth=config.line_width)
    ax.set_xlabel("Time", fontsize=config.label_fontsize)
    ax.set_ylabel("Distance (m)", fontsize=config.label_fontsize)
    ax.set_title(title, fontsize=config.title_fontsize)
    ax.grid(True, alpha=config.grid_alpha)

    step_ax = ax.twinx()
    step_ax.step(distances["timestamp"], distances["step_length"], where="post",
                 color=config.calibrating_color, linewidth=config.line_width)
    step_ax.set_ylabel("Step length (m)", fontsize=config.label_fontsize)
    return step_ax


def save_replay_figure(
    result,
    output_path: Union[str, Path],
    config: Optional[PlotConfig] = None,
) -> Path:
    """Save a two-panel figure of a replayed session.

    Args:
        result: ReplayResult from replay_session
        output_path: Output image path
        config: PlotConfig object

    Returns:
        Path of the saved figure
    """
    if config is None:
        config = PlotConfig()

    plt = _get_plt()
    fig, (track_ax, timeline_ax) = plt.subplots(1, 2, figsize=config.figsize)

    plot_track(track_ax, result.locations, config=config)
    plot_calibration_timeline(timeline_ax, result.distances, config=config)

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.tight_layout()
    fig.savefig(output_path, dpi=config.dpi)
    plt.close(fig)
    return output_path
