"""Reference table loading — full moons, house meanings, and nakshatras from JSON."""

import asyncio
import json
import logging
from collections.abc import Mapping
from datetime import date
from pathlib import Path
from types import MappingProxyType
from typing import Any

import httpx

from fullmoonhouse.compute import NAKSHATRA_COUNT, SIGN_INDEX
from fullmoonhouse.models import (
    FullMoonRecord,
    Nakshatra,
    ReferenceData,
    TropicalPlacement,
)

logger = logging.getLogger(__name__)

_RESOURCES = Path(__file__).parent / "resources"

FULL_MOONS_FILE = "fullmoons.json"
HOUSES_FILE = "houses.json"
NAKSHATRAS_FILE = "nakshatras.json"
_TABLE_FILES = (FULL_MOONS_FILE, HOUSES_FILE, NAKSHATRAS_FILE)


class ReferenceDataError(Exception):
    """A reference table could not be fetched or has the wrong shape."""


def parse_full_moons(raw: Any) -> tuple[FullMoonRecord, ...]:
    """Parse ``[{date, tropical: {sign, degree, time?}}, ...]`` sorted by date.

    Raises:
        ReferenceDataError: On a bad date, unknown sign, degree outside [0, 30),
            or a duplicate date key.
    """
    if not isinstance(raw, list):
        raise ReferenceDataError("full moon table must be a list")
    records: dict[str, FullMoonRecord] = {}
    for row in raw:
        try:
            key = str(row["date"])
            tropical = row["tropical"]
            sign = str(tropical["sign"])
            degree = tropical["degree"]
            time = tropical.get("time")
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise ReferenceDataError(f"malformed full moon row: {row!r}") from e
        if isinstance(degree, bool) or not isinstance(degree, (int, float)):
            raise ReferenceDataError(f"{key}: degree must be a number, got {degree!r}")
        degree = float(degree)
        try:
            date.fromisoformat(key)
        except ValueError:
            raise ReferenceDataError(f"full moon date is not ISO: {key!r}") from None
        if sign not in SIGN_INDEX:
            raise ReferenceDataError(f"{key}: unknown sign {sign!r}")
        if not 0 <= degree < 30:
            raise ReferenceDataError(f"{key}: degree {degree} outside [0, 30)")
        if key in records:
            raise ReferenceDataError(f"duplicate full moon date {key}")
        records[key] = FullMoonRecord(
            date=key,
            tropical=TropicalPlacement(
                sign=sign, degree=degree, time=str(time) if time else None
            ),
        )
    return tuple(records[k] for k in sorted(records))


def parse_house_meanings(raw: Any) -> Mapping[str, str]:
    """Parse ``{"1": text, ..., "12": text}`` into a read-only mapping.

    Raises:
        ReferenceDataError: If any of the 12 house keys is missing.
    """
    if not isinstance(raw, dict):
        raise ReferenceDataError("house table must be an object")
    meanings = {str(k): str(v) for k, v in raw.items()}
    missing = [str(h) for h in range(1, 13) if str(h) not in meanings]
    if missing:
        raise ReferenceDataError(f"house table missing keys: {', '.join(missing)}")
    return MappingProxyType(meanings)


def parse_nakshatras(raw: Any) -> tuple[Nakshatra, ...]:
    """Parse the 27 ``{index, name, symbol, meaning}`` entries.

    Entries must be in ascending ordinal order, index 0 through 26.

    Raises:
        ReferenceDataError: On a wrong count, order, or missing field.
    """
    if not isinstance(raw, list) or len(raw) != NAKSHATRA_COUNT:
        raise ReferenceDataError(f"nakshatra table must list {NAKSHATRA_COUNT} entries")
    nakshatras: list[Nakshatra] = []
    for expected, row in enumerate(raw):
        try:
            nak = Nakshatra(
                index=int(row["index"]),
                name=str(row["name"]),
                symbol=str(row["symbol"]),
                meaning=str(row["meaning"]),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ReferenceDataError(f"malformed nakshatra row: {row!r}") from e
        if nak.index != expected:
            raise ReferenceDataError(
                f"nakshatra {nak.name!r} has index {nak.index}, expected {expected}"
            )
        nakshatras.append(nak)
    return tuple(nakshatras)


def build_reference_data(full_moons: Any, houses: Any, nakshatras: Any) -> ReferenceData:
    """Validate the three decoded JSON tables and bundle them."""
    return ReferenceData(
        full_moons=parse_full_moons(full_moons),
        house_meanings=parse_house_meanings(houses),
        nakshatras=parse_nakshatras(nakshatras),
    )


def _read_json(path: Path) -> Any:
    try:
        with path.open(encoding="utf-8") as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ReferenceDataError(f"cannot read {path}: {e}") from e


async def _fetch_tables(
    base_url: str,
    timeout: float,
    transport: httpx.AsyncBaseTransport | None = None,
) -> list[Any]:
    """Fetch the three tables concurrently. No ordering among them."""
    base = base_url.rstrip("/")

    async def fetch(client: httpx.AsyncClient, name: str) -> Any:
        resp = await client.get(f"{base}/{name}")
        resp.raise_for_status()
        return resp.json()

    async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
        return await asyncio.gather(*(fetch(client, name) for name in _TABLE_FILES))


def load_reference_data(
    source: str | Path | None = None,
    timeout: float = 10,
    transport: httpx.AsyncBaseTransport | None = None,
) -> ReferenceData:
    """Load and validate the three reference tables.

    Args:
        source: Directory holding the JSON files, or an http(s) base URL.
            None loads the tables bundled with the package.
        timeout: HTTP timeout in seconds (URL sources only).
        transport: Optional httpx transport for URL sources.

    Returns:
        ReferenceData, read-only for the rest of the process.

    Raises:
        ReferenceDataError: If a table cannot be fetched, decoded, or validated.
    """
    if isinstance(source, str) and source.startswith(("http://", "https://")):
        logger.info("Fetching reference tables from %s", source)
        try:
            tables = asyncio.run(_fetch_tables(source, timeout, transport))
        except (httpx.HTTPError, json.JSONDecodeError) as e:
            raise ReferenceDataError(f"cannot fetch reference tables: {e}") from e
    else:
        directory = Path(source) if source is not None else _RESOURCES
        logger.info("Reading reference tables from %s", directory)
        tables = [_read_json(directory / name) for name in _TABLE_FILES]

    reference = build_reference_data(*tables)
    logger.info(
        "Loaded %d full moons, %d house meanings, %d nakshatras",
        len(reference.full_moons),
        len(reference.house_meanings),
        len(reference.nakshatras),
    )
    return reference


def full_moon_dates(reference: ReferenceData) -> list[str]:
    """Date keys in calendar order, for option lists."""
    return [record.date for record in reference.full_moons]


def format_date_label(date_key: str) -> str:
    """Option label for a date key, e.g. "Mon, Jan 13, 2025"."""
    d = date.fromisoformat(date_key)
    return f"{d:%a}, {d:%b} {d.day}, {d.year}"
