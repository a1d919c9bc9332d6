#!/usr/bin/env python3
"""Ground-track plotting.

Draws the tabulated ground track from
:meth:`~overpass.tracker.PositionTracker.ground_track` on a plain
longitude/latitude grid, with targets marked and colored by whether a
near-term pass was estimated.
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional

import numpy as np
import pandas as pd
import matplotlib.pyplot as plt


plt.rcParams.update({
    "figure.facecolor": "white",
    "axes.facecolor": "#fafafa",
    "axes.grid": True,
    "grid.alpha": 0.3,
    "font.family": "sans-serif",
    "font.size": 10,
})

TRACK_COLOR = "#2c3e50"
PASS_COLOR = "#2ecc71"
FALLBACK_COLOR = "#95a5a6"


def plot_ground_track(
    track_df: pd.DataFrame,
    estimates_df: Optional[pd.DataFrame] = None,
    title: str = "Ground Track",
    save_path: Optional[str | Path] = None,
    figsize: tuple = (12, 6),
) -> plt.Figure:
    """Plot a ground track with optional target estimates.

    Args:
        track_df: DataFrame from ``PositionTracker.ground_track()``.
        estimates_df: DataFrame from ``estimate_batch()`` (optional).
        title: Plot title.
        save_path: Path to save figure (optional).

    Returns:
        matplotlib Figure
    """
    fig, ax = plt.subplots(figsize=figsize)

    lon = track_df["longitude"].to_numpy(dtype=float)
    lat = track_df["latitude"].to_numpy(dtype=float)

    # Break the line where it wraps across the antimeridian
    wraps = np.where(np.abs(np.diff(lon)) > 180.0)[0] + 1
    lon = np.insert(lon, wraps, np.nan)
    lat = np.insert(lat, wraps, np.nan)

    ax.plot(lon, lat, linewidth=1.0, color=TRACK_COLOR, label="Ground track")
    if len(track_df):
        ax.scatter(
            track_df["longitude"].iloc[0],
            track_df["latitude"].iloc[0],
            marker="o", s=40, color=TRACK_COLOR, zorder=3,
        )

    if estimates_df is not None and not estimates_df.empty:
        colors = np.where(estimates_df["fallback"], FALLBACK_COLOR, PASS_COLOR)
        ax.scatter(
            estimates_df["longitude"],
            estimates_df["latitude"],
            c=colors, marker="*", s=120, edgecolors="black", linewidths=0.5, zorder=4,
        )
        for _, row in estimates_df.iterrows():
            ax.annotate(
                f"{row['target']} ({row['hours']:.1f} h)",
                (row["longitude"], row["latitude"]),
                textcoords="offset points", xytext=(6, 6), fontsize=8,
            )

    ax.set_xlim(-180, 180)
    ax.set_ylim(-90, 90)
    ax.set_xlabel("Longitude (°)")
    ax.set_ylabel("Latitude (°)")
    ax.set_title(title)
    ax.legend(loc="lower left", fontsize=8)

    plt.tight_layout()
    if save_path:
        fig.savefig(save_path, dpi=150, bbox_inches="tight")

    return fig
