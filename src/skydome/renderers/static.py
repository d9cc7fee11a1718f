"""Matplotlib static PNG renderer for a body's track and its orientation over time."""

from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.figure import Figure

from skydome.models import TrackSample

_ROOT = Path(__file__).parent.parent.parent.parent

_BG = "#050a1a"
_FG = "#e8e8e8"
_ELEVATION_COLOR = "#f0e0b0"
_AZIMUTH_COLOR = "#7ec8e3"
_PITCH_COLOR = "#c9a96e"
_ROLL_COLOR = "#e37e9b"


def _style(ax) -> None:
    ax.set_facecolor(_BG)
    ax.tick_params(colors=_FG, labelsize=8)
    for spine in ax.spines.values():
        spine.set_color("#334466")
    ax.grid(color="#334466", linewidth=0.5, alpha=0.6)


def render_track_chart(track: tuple[TrackSample, ...], chart_size: int = 10) -> Figure:
    """Render a track as a two-panel chart.

    Top panel: elevation and azimuth from the ephemeris. Bottom panel: the
    pitch and roll the transform derived from them. The x axis is hours
    since the first sample.

    Args:
        track: Samples from compute_track. Must not be empty.
        chart_size: Figure width in inches.

    Returns:
        matplotlib Figure object.

    Raises:
        ValueError: Empty track.
    """
    if not track:
        raise ValueError("Cannot render an empty track")

    start = track[0].utc_dt
    hours = np.array([(s.utc_dt - start).total_seconds() / 3600.0 for s in track])
    elevation = np.array([s.position.elevation for s in track])
    azimuth = np.array([s.position.normalized().azimuth for s in track])
    pitch = np.array([s.orientation.pitch for s in track])
    roll = np.array([s.orientation.roll for s in track])

    fig, (ax_pos, ax_rot) = plt.subplots(
        2, 1, figsize=(chart_size, chart_size * 0.6), sharex=True
    )
    fig.patch.set_facecolor(_BG)

    _style(ax_pos)
    ax_pos.axhline(0.0, color="#334466", linewidth=1)  # horizon
    ax_pos.plot(hours, elevation, color=_ELEVATION_COLOR, label="elevation")
    ax_pos.set_ylabel("elevation (°)", color=_FG)
    ax_pos.set_ylim(-90, 90)
    ax_az = ax_pos.twinx()
    ax_az.scatter(hours, azimuth, s=4, color=_AZIMUTH_COLOR, label="azimuth")
    ax_az.set_ylabel("azimuth (°)", color=_FG)
    ax_az.set_ylim(0, 360)
    ax_az.tick_params(colors=_FG, labelsize=8)

    _style(ax_rot)
    ax_rot.plot(hours, pitch, color=_PITCH_COLOR, label="pitch")
    ax_rot.plot(hours, roll, color=_ROLL_COLOR, label="roll")
    ax_rot.set_ylabel("degrees", color=_FG)
    ax_rot.set_xlabel(f"hours since {start.strftime('%Y-%m-%d %H:%M')} UTC", color=_FG)
    ax_rot.legend(loc="upper right", fontsize=8, facecolor=_BG, labelcolor=_FG)

    return fig


def save_track_chart(
    track: tuple[TrackSample, ...], output_path: Path | None = None
) -> Path:
    """Save a track chart as a PNG file.

    Args:
        track: Samples from compute_track.
        output_path: Destination path. Auto-generated under results/ if None.

    Returns:
        Path to the saved file.
    """
    if output_path is None:
        when_str = track[0].utc_dt.strftime("%Y_%m_%d_%H_%M") if track else "empty"
        output_path = _ROOT / "results" / f"track__{when_str}.png"

    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig = render_track_chart(track)
    try:
        fig.savefig(output_path, facecolor=_BG)
    finally:
        plt.close(fig)
    return output_path
