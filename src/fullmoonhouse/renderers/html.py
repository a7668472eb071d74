"""HTML result card for st.markdown(..., unsafe_allow_html=True)."""

import html

from fullmoonhouse.models import DerivedResult
from fullmoonhouse.renderers.text import (
    extras,
    house_title,
    nakshatra_line,
    sign_line,
)

_ACCENT = "#c9a96e"
_TEXT = "#e8d5a3"


def render_result_html(result: DerivedResult) -> str:
    """House title, sign line, and house meaning as a styled block."""
    return (
        f"<div class='result-card'>"
        f"<h2 style='color:{_ACCENT};margin-bottom:0.2rem;'>{html.escape(house_title(result))}</h2>"
        f"<p style='color:{_TEXT};opacity:0.85;margin:0 0 0.8rem;'>{html.escape(sign_line(result))}</p>"
        f"<p style='color:{_TEXT};line-height:1.7;'>{html.escape(result.house_meaning)}</p>"
        f"</div>"
    )


def render_more_html(result: DerivedResult, display_tz: str | None = None) -> str:
    """Extras list, plus the nakshatra block on the sidereal path."""
    items = "".join(f"<li>{html.escape(item)}</li>" for item in extras(result, display_tz))
    parts = [f"<ul style='color:{_TEXT};'>{items}</ul>"]
    nak = result.nakshatra
    if nak is not None:
        parts.append(
            f"<div class='sidereal-only'>"
            f"<h4 style='color:{_ACCENT};'>{html.escape(nakshatra_line(nak))}</h4>"
            f"<p style='color:{_TEXT};'>{html.escape(nak.meaning)}</p>"
            f"</div>"
        )
    return "".join(parts)
