"""Plotly interactive house wheel renderer.

Whole-sign houses drawn as 12 equal sectors. The rising sign's sector
starts at the ascendant point on the left (9 o'clock) and houses run
counter-clockwise, as in a conventional chart wheel.
"""

import plotly.graph_objects as go

from fullmoonhouse.compute import SIGNS
from fullmoonhouse.models import DerivedResult

_BG = "#0d1b35"
_SECTOR_COLOR = "rgba(201,169,110,0.10)"
_ACTIVE_COLOR = "rgba(201,169,110,0.55)"
_LINE_COLOR = "#c9a96e"
_MOON_COLOR = "#f5e6b8"


def wheel_angle(longitude: float, rising: int) -> float:
    """Chart angle for a longitude, with 0° at the start of the rising sign."""
    return (longitude - rising * 30) % 360


def render_house_wheel(result: DerivedResult) -> go.Figure:
    """Render a DerivedResult as a Plotly polar house wheel.

    The sector holding the Moon is highlighted and the Moon is drawn at its
    used longitude (tropical or sidereal, whichever was selected).

    Args:
        result: Fully computed house result.

    Returns:
        Plotly Figure object.
    """
    rising = result.selection.rising
    houses = list(range(1, 13))
    signs = [(rising + h - 1) % 12 for h in houses]

    sectors = go.Barpolar(
        r=[1.0] * 12,
        theta=[(h - 1) * 30 + 15 for h in houses],
        width=[30] * 12,
        marker=dict(
            color=[_ACTIVE_COLOR if h == result.house else _SECTOR_COLOR for h in houses],
            line=dict(color=_LINE_COLOR, width=1),
        ),
        text=[f"House {h} · {SIGNS[s]}" for h, s in zip(houses, signs)],
        hoverinfo="text",
        name="houses",
    )

    labels = go.Scatterpolar(
        r=[0.8] * 12,
        theta=[(h - 1) * 30 + 15 for h in houses],
        mode="text",
        text=[str(h) for h in houses],
        textfont=dict(color=_LINE_COLOR, size=14),
        hoverinfo="skip",
        name="house numbers",
    )

    moon = go.Scatterpolar(
        r=[0.95],
        theta=[wheel_angle(result.used_longitude, rising)],
        mode="markers",
        marker=dict(size=16, color=_MOON_COLOR, line=dict(width=0)),
        text=[f"Moon {result.used_longitude:.2f}°"],
        hoverinfo="text",
        name="moon",
    )

    fig = go.Figure(data=[sectors, labels, moon])
    fig.update_layout(
        paper_bgcolor=_BG,
        plot_bgcolor=_BG,
        showlegend=False,
        margin=dict(l=20, r=20, t=20, b=20),
        polar=dict(
            bgcolor=_BG,
            radialaxis=dict(visible=False, range=[0, 1]),
            angularaxis=dict(
                visible=False,
                rotation=180,
                direction="counterclockwise",
            ),
        ),
    )
    return fig
