"""Matplotlib static PNG house wheel renderer."""

from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.figure import Figure
from matplotlib.patches import Wedge

from fullmoonhouse.compute import SIGNS
from fullmoonhouse.models import DerivedResult
from fullmoonhouse.renderers.plotly_wheel import wheel_angle

_BG = "#0d1b35"
_LINE_COLOR = "#c9a96e"
_ACTIVE_COLOR = "#5a4a2e"
_MOON_COLOR = "#f5e6b8"


def render_static_wheel(result: DerivedResult, chart_size: int = 8) -> Figure:
    """Render a DerivedResult as a static matplotlib house wheel.

    Args:
        result: Fully computed house result.
        chart_size: Output image size in inches.

    Returns:
        matplotlib Figure object.
    """
    fig, ax = plt.subplots(figsize=(chart_size, chart_size))
    fig.patch.set_facecolor(_BG)
    ax.set_facecolor(_BG)

    rising = result.selection.rising
    # House 1 starts at 180° (the ascendant, 9 o'clock) and runs counter-clockwise.
    for house in range(1, 13):
        start = 180 + (house - 1) * 30
        face = _ACTIVE_COLOR if house == result.house else _BG
        ax.add_patch(
            Wedge((0, 0), 1.0, start, start + 30, width=0.45,
                  facecolor=face, edgecolor=_LINE_COLOR, linewidth=0.8)
        )
        mid = np.radians(start + 15)
        ax.text(0.68 * np.cos(mid), 0.68 * np.sin(mid), str(house),
                color=_LINE_COLOR, ha="center", va="center", fontsize=14)
        sign = SIGNS[(rising + house - 1) % 12]
        ax.text(0.9 * np.cos(mid), 0.9 * np.sin(mid), sign[:3],
                color=_LINE_COLOR, ha="center", va="center", fontsize=9, alpha=0.8)

    moon = np.radians(180 + wheel_angle(result.used_longitude, rising))
    ax.scatter([0.3 * np.cos(moon)], [0.3 * np.sin(moon)], s=300,
               color=_MOON_COLOR, zorder=3)
    ax.plot([0, 0.3 * np.cos(moon)], [0, 0.3 * np.sin(moon)],
            color=_MOON_COLOR, linewidth=0.6, alpha=0.6)

    ax.set_xlim(-1.05, 1.05)
    ax.set_ylim(-1.05, 1.05)
    ax.set_aspect("equal")
    ax.axis("off")
    return fig


def save_static_wheel(result: DerivedResult, output_path: Path | None = None) -> Path:
    """Save the house wheel as a PNG file.

    Args:
        result: Fully computed house result.
        output_path: Destination path. Auto-generated under results/ if None.

    Returns:
        Path to the saved file.
    """
    if output_path is None:
        sel = result.selection
        filename = f"{sel.date_key}__{sel.system}__{SIGNS[sel.rising]}.png"
        output_path = Path("results") / filename

    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig = render_static_wheel(result)
    fig.savefig(output_path, facecolor=_BG)
    plt.close(fig)
    return output_path
