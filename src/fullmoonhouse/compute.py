"""House computation layer — sign resolution, house mapping, nakshatras, and date numerology.

Everything here is pure: the reference tables arrive as an explicit
ReferenceData, and no function performs I/O.
"""

import logging
import math
from datetime import date, datetime

from fullmoonhouse.models import (
    DerivedResult,
    Nakshatra,
    Numerology,
    ReferenceData,
    Selection,
    Sign,
    ZodiacSystem,
)

logger = logging.getLogger(__name__)

SIGNS: tuple[str, ...] = (
    "Aries",
    "Taurus",
    "Gemini",
    "Cancer",
    "Leo",
    "Virgo",
    "Libra",
    "Scorpio",
    "Sagittarius",
    "Capricorn",
    "Aquarius",
    "Pisces",
)
ZODIAC: tuple[Sign, ...] = tuple(Sign(index=i, name=n) for i, n in enumerate(SIGNS))
SIGN_INDEX: dict[str, int] = {name: i for i, name in enumerate(SIGNS)}

SYSTEMS: tuple[ZodiacSystem, ...] = ("tropical", "sidereal")

# Lahiri ayanamsa, approximate for 2025 (degrees)
AYANAMSA_LAHIRI_2025 = 24.1

# 13°20′ = 40/3 degrees; mansion_of works in thirds of a degree so
# boundaries k * 40/3 land exactly.
NAKSHATRA_ARC = 13 + 20 / 60
NAKSHATRA_COUNT = 27

NUMEROLOGY_PHRASES: dict[int, str] = {
    1: "initiate / start fresh",
    2: "partnerships & balance",
    3: "expression & creativity",
    4: "structure & discipline",
    5: "change & movement",
    6: "care, duty, harmony",
    7: "insight & spirituality",
    8: "power, finances, results",
    9: "completion & release",
}


class InvalidSelectionError(ValueError):
    """Selection outside the closed enumeration (system, sign ordinal, sign name)."""


def sign_ordinal(name: str) -> int:
    """Return the 0..11 ordinal of a sign name ("Leo" -> 4).

    Raises:
        InvalidSelectionError: If name is not one of the 12 signs.
    """
    try:
        return SIGN_INDEX[name]
    except KeyError:
        raise InvalidSelectionError(f"Unknown sign: {name!r}") from None


def _check_sign_ordinal(value: int, what: str) -> None:
    if not 0 <= value <= 11:
        raise InvalidSelectionError(f"{what} must be in 0..11, got {value}")


def norm360(lon: float) -> float:
    """Normalize a longitude into [0, 360).

    A float that rounds up to exactly 360.0 (e.g. -1e-15 % 360) comes out as 0.0.
    """
    lon = lon % 360.0
    return 0.0 if lon >= 360.0 else lon


def tropical_longitude(sign: int, degree: float) -> float:
    """Absolute tropical longitude from sign ordinal and degree within the sign."""
    return sign * 30 + degree


def resolve_longitude(
    system: ZodiacSystem,
    tropical_sign: int,
    tropical_degree: float,
    ayanamsa: float = AYANAMSA_LAHIRI_2025,
) -> tuple[float, int]:
    """Convert a tropical placement into the longitude used for house computation.

    Args:
        system: "tropical" or "sidereal".
        tropical_sign: Tropical sign ordinal (0..11).
        tropical_degree: Degree within the tropical sign, 0 <= degree < 30.
        ayanamsa: Tropical-to-sidereal offset in degrees. Ignored for tropical.

    Returns:
        (used_longitude, used_sign) in the selected zodiac.

    Raises:
        InvalidSelectionError: On an unknown system, out-of-range sign, or a
            non-finite degree or ayanamsa.
    """
    _check_sign_ordinal(tropical_sign, "tropical sign")
    if not (math.isfinite(tropical_degree) and math.isfinite(ayanamsa)):
        raise InvalidSelectionError(
            f"degree and ayanamsa must be finite, got {tropical_degree}, {ayanamsa}"
        )
    t_lon = tropical_longitude(tropical_sign, tropical_degree)
    if system == "tropical":
        return t_lon, tropical_sign
    if system == "sidereal":
        s_lon = norm360(t_lon - ayanamsa)
        return s_lon, int(s_lon // 30)
    raise InvalidSelectionError(f"Unknown zodiac system: {system!r}")


def house_of(used_sign: int, rising: int) -> int:
    """Whole-sign house (1..12) of used_sign counted from the rising sign."""
    return 1 + ((used_sign - rising + 12) % 12)


def mansion_of(sidereal_longitude: float) -> int:
    """Nakshatra ordinal (0..26) of a sidereal longitude in [0, 360)."""
    index = math.floor(sidereal_longitude * 3 / 40)
    return min(max(index, 0), NAKSHATRA_COUNT - 1)


def digital_root(n: int) -> int:
    """Reduce n to a single digit via repeated digit summation."""
    while n > 9:
        n = sum(int(d) for d in str(n))
    return n


def date_digits(d: date) -> str:
    """Canonical "YYYYMMDD" digit string built from the date's own calendar fields.

    A datetime is reduced to its date in whatever zone it carries; no
    conversion to UTC happens here.
    """
    if isinstance(d, datetime):
        d = d.date()
    return f"{d.year:04d}{d.month:02d}{d.day:02d}"


def numerology_of(d: date) -> Numerology:
    """Date numerology: digit sum of YYYYMMDD reduced to 1..9.

    Example — 2025-05-12: 2+0+2+5+0+5+1+2 = 17 → 1+7 = 8.
    """
    total = sum(int(ch) for ch in date_digits(d))
    figure = digital_root(total)
    return Numerology(figure=figure, phrase=NUMEROLOGY_PHRASES[figure])


def nakshatra_for(reference: ReferenceData, index: int) -> Nakshatra:
    """Look up the static nakshatra entry for an ordinal."""
    assert 0 <= index < len(reference.nakshatras), f"no nakshatra #{index}"
    nak = reference.nakshatras[index]
    assert nak.index == index, f"nakshatra table out of order at #{index}"
    return nak


def house_meaning_for(reference: ReferenceData, house: int) -> str:
    """Look up the static house meaning for a house number."""
    meaning = reference.house_meanings.get(str(house))
    assert meaning is not None, f"no meaning for house {house}"
    return meaning


def validate_selection(selection: Selection) -> None:
    """Raise InvalidSelectionError if selection falls outside its enumerations."""
    if selection.system not in SYSTEMS:
        raise InvalidSelectionError(f"Unknown zodiac system: {selection.system!r}")
    _check_sign_ordinal(selection.rising, "rising sign")


def compute_all(
    reference: ReferenceData,
    selection: Selection,
    ayanamsa: float = AYANAMSA_LAHIRI_2025,
) -> DerivedResult | None:
    """Compute house, nakshatra, and numerology for a selection.

    Args:
        reference: Loaded reference tables.
        selection: Chosen system, rising sign ordinal, and full moon date key.
        ayanamsa: Offset used on the sidereal path.

    Returns:
        DerivedResult, or None when no full moon record matches the date key.

    Raises:
        InvalidSelectionError: On an unknown system or out-of-range rising sign.
    """
    validate_selection(selection)
    record = reference.find_full_moon(selection.date_key)
    if record is None:
        logger.debug("No full moon record for %s", selection.date_key)
        return None

    t_sign = sign_ordinal(record.tropical.sign)
    used_lon, used_sign = resolve_longitude(
        selection.system, t_sign, record.tropical.degree, ayanamsa
    )

    nakshatra: Nakshatra | None = None
    if selection.system == "sidereal":
        nakshatra = nakshatra_for(reference, mansion_of(used_lon))

    house = house_of(used_sign, selection.rising)
    return DerivedResult(
        selection=selection,
        record=record,
        used_longitude=used_lon,
        used_sign=used_sign,
        house=house,
        house_meaning=house_meaning_for(reference, house),
        numerology=numerology_of(record.calendar_date),
        nakshatra=nakshatra,
    )


def run(
    reference: ReferenceData,
    system: ZodiacSystem,
    rising: int,
    date_key: str,
    ayanamsa: float = AYANAMSA_LAHIRI_2025,
) -> DerivedResult | None:
    """Top-level entry point: takes the three raw selections and returns a DerivedResult.

    Args:
        reference: Loaded reference tables.
        system: "tropical" or "sidereal".
        rising: Rising sign ordinal (0 = Aries).
        date_key: Full moon date ("YYYY-MM-DD").
        ayanamsa: Offset used on the sidereal path.

    Returns:
        DerivedResult, or None if date_key has no record.
    """
    selection = Selection(system=system, rising=rising, date_key=date_key)
    return compute_all(reference, selection, ayanamsa=ayanamsa)
