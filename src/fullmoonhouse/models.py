"""Data model definitions — explicit boundaries between loader, compute, and render layers."""

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date
from typing import Literal

ZodiacSystem = Literal["tropical", "sidereal"]


@dataclass(frozen=True)
class Sign:
    """One of the 12 zodiac signs."""

    index: int  # 0 = Aries ... 11 = Pisces
    name: str

    @property
    def start_longitude(self) -> float:
        return self.index * 30.0


@dataclass(frozen=True)
class TropicalPlacement:
    """Tropical position of the Moon at a full moon."""

    sign: str  # Sign name ("Leo")
    degree: float  # Degree within the sign, 0 <= degree < 30
    time: str | None = None  # Peak time as published by the source ("22:27")


@dataclass(frozen=True)
class FullMoonRecord:
    """A single full moon. The ISO date string is the unique key."""

    date: str  # "YYYY-MM-DD"
    tropical: TropicalPlacement

    @property
    def calendar_date(self) -> date:
        return date.fromisoformat(self.date)


@dataclass(frozen=True)
class Nakshatra:
    """A lunar mansion spanning 13°20′ of the ecliptic."""

    index: int  # 0..26, ascending along the ecliptic
    name: str
    symbol: str
    meaning: str


@dataclass(frozen=True)
class ReferenceData:
    """Static tables. Loaded once per process, read-only afterwards."""

    full_moons: tuple[FullMoonRecord, ...]
    house_meanings: Mapping[str, str]  # "1".."12" -> text
    nakshatras: tuple[Nakshatra, ...]  # 27 entries in ordinal order

    def find_full_moon(self, date_key: str) -> FullMoonRecord | None:
        """Return the record for date_key, or None if there is none."""
        for record in self.full_moons:
            if record.date == date_key:
                return record
        return None


@dataclass(frozen=True)
class Selection:
    """What the user picked. Replaced wholesale on every input change."""

    system: ZodiacSystem
    rising: int  # Rising sign ordinal, 0..11
    date_key: str  # FullMoonRecord.date


@dataclass(frozen=True)
class Numerology:
    """Single-digit date numerology figure."""

    figure: int  # 1..9
    phrase: str

    @property
    def description(self) -> str:
        return f"{self.figure} — {self.phrase}"


@dataclass(frozen=True)
class DerivedResult:
    """The sole input to renderers. Fully computed state."""

    selection: Selection
    record: FullMoonRecord
    used_longitude: float  # [0, 360) in the selected zodiac
    used_sign: int  # 0..11
    house: int  # 1..12
    house_meaning: str
    numerology: Numerology
    nakshatra: Nakshatra | None = None  # Sidereal only

    @property
    def is_sidereal(self) -> bool:
        return self.selection.system == "sidereal"

    @property
    def degree_in_sign(self) -> float:
        return self.used_longitude % 30
