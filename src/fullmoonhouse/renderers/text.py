"""Plain-text renderer, and the line formatting shared by the other renderers."""

from datetime import datetime

from pytz import timezone, utc

from fullmoonhouse.compute import SIGNS
from fullmoonhouse.models import DerivedResult, FullMoonRecord, Nakshatra

NO_TIME = "—"


def fmt_deg(deg: float) -> str:
    return f"{deg:.2f}°"


def house_title(result: DerivedResult) -> str:
    return f"House {result.house}"


def sign_line(result: DerivedResult) -> str:
    """Zodiac and sign of the Moon, plus its degree on the sidereal path."""
    label = "Sidereal" if result.is_sidereal else "Tropical"
    line = f"{label} Moon in {SIGNS[result.used_sign]}"
    if result.is_sidereal:
        line += f" · {fmt_deg(result.degree_in_sign)} of the sign"
    return line


def nakshatra_line(nak: Nakshatra) -> str:
    return f"{nak.index + 1}. {nak.name} — symbol: {nak.symbol}"


def peak_time(record: FullMoonRecord, display_tz: str | None = None) -> str:
    """Peak time as published, or converted to display_tz.

    Published times are "HH:MM" in UTC. Anything else is shown verbatim.
    """
    raw = record.tropical.time
    if not raw:
        return NO_TIME
    if display_tz is None:
        return raw
    try:
        naive = datetime.strptime(f"{record.date} {raw}", "%Y-%m-%d %H:%M")
    except ValueError:
        return raw
    local = utc.localize(naive).astimezone(timezone(display_tz))
    return local.strftime("%Y-%m-%d %H:%M %Z")


def extras(result: DerivedResult, display_tz: str | None = None) -> list[str]:
    """Bullet lines for the "more" section."""
    time_label = display_tz or "source tz"
    return [
        f"Numerology (date): {result.numerology.description}",
        f"Peak time ({time_label}): {peak_time(result.record, display_tz)}",
    ]


def render_text(result: DerivedResult, display_tz: str | None = None) -> str:
    """Render a DerivedResult as a multi-line string for the terminal."""
    lines = [
        house_title(result),
        sign_line(result),
        result.house_meaning,
        "",
    ]
    lines += [f"- {item}" for item in extras(result, display_tz)]
    if result.nakshatra is not None:
        lines += ["", nakshatra_line(result.nakshatra), result.nakshatra.meaning]
    return "\n".join(lines)
