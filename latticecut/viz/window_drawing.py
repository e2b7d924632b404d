"""Static matplotlib figures of a lattice and an extraction window."""
from __future__ import annotations

import os
from typing import Optional

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.patches import Rectangle
import numpy as np

from latticecut.errors import IOFailure
from latticecut.geometry.alignment import Corner
from latticecut.geometry.window import (
    Window, check_window_size, window_bounds, window_record_indices,
)
from latticecut.records.store import RecordStore

STATE_COLORS = {
    False: "#3498db",  # blue
    True: "#e74c3c",  # red
}
WINDOW_COLOR = "#2ecc71"
MOMENT_COLOR = "#34495e"


def compute_layout_bounds(positions: np.ndarray, padding: float = 0.5):
    """Compute axis bounds from record positions with padding."""
    if len(positions) == 0:
        return (-padding, padding, -padding, padding)
    xmin, ymin = positions[:, :2].min(axis=0)
    xmax, ymax = positions[:, :2].max(axis=0)
    return (xmin - padding, xmax + padding, ymin - padding, ymax + padding)


def draw_store(ax, store: RecordStore, window: Optional[Window] = None, title=None):
    """Draw records (colored by state) and moments; outline ``window``.

    The window outline is the bounding box of the records it selects.
    """
    pos = store.positions
    mom = store.moments

    for state, color in STATE_COLORS.items():
        mask = store.states == state
        if np.any(mask):
            ax.scatter(pos[mask, 0], pos[mask, 1], c=color, s=12, zorder=2,
                       label=f"state={int(state)}", edgecolors="white", linewidths=0.3)

    has_moment = np.any(mom[:, :2] != 0.0, axis=1)
    if np.any(has_moment):
        ax.quiver(pos[has_moment, 0], pos[has_moment, 1],
                  mom[has_moment, 0], mom[has_moment, 1],
                  color=MOMENT_COLOR, angles="xy", scale_units="xy", scale=3.0,
                  width=0.004, zorder=3)

    if window is not None and store.n_records > 0:
        selected = pos[window_record_indices(store.side, window)]
        (x0, y0), (x1, y1) = selected[:, :2].min(axis=0), selected[:, :2].max(axis=0)
        ax.add_patch(Rectangle((x0 - 0.1, y0 - 0.1), x1 - x0 + 0.2, y1 - y0 + 0.2,
                               fill=False, edgecolor=WINDOW_COLOR, linewidth=1.5, zorder=4))

    xmin, xmax, ymin, ymax = compute_layout_bounds(pos)
    ax.set_xlim(xmin, xmax)
    ax.set_ylim(ymin, ymax)
    ax.set_aspect("equal")
    if title:
        ax.set_title(title)
    return ax


def save_window_figure(path: str, store: RecordStore, size: int, corner: Corner) -> str:
    """Render ``store`` with the size x size window at ``corner`` to ``path``."""
    check_window_size(store.side, size, strict=False)
    window = window_bounds(store.side, size, corner)
    fig, ax = plt.subplots(figsize=(6, 6))
    try:
        draw_store(ax, store, window=window,
                   title=f"{size}x{size} window at {corner.token} ({store.n_sites} sites)")
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        fig.savefig(path)
    except OSError as e:
        raise IOFailure(f"Cannot write {path}: {e}") from e
    finally:
        plt.close(fig)
    return path
