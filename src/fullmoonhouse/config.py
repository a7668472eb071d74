"""Environment-driven settings. Entry points call load_dotenv() before load_settings()."""

import logging
import math
import os
from dataclasses import dataclass

import pytz

from fullmoonhouse.compute import AYANAMSA_LAHIRI_2025

_PREFIX = "FULLMOONHOUSE_"


class ConfigError(Exception):
    """An environment variable holds a value that cannot be used."""


@dataclass(frozen=True)
class Settings:
    ayanamsa: float = AYANAMSA_LAHIRI_2025
    data_source: str | None = None  # Directory or http(s) base URL; None = bundled tables
    display_tz: str | None = None  # IANA zone for peak times; None = as published
    log_level: str = "WARNING"


def _env(name: str) -> str | None:
    value = os.environ.get(_PREFIX + name)
    if value is None or not value.strip():
        return None
    return value.strip()


def load_settings() -> Settings:
    """Read FULLMOONHOUSE_* variables into a Settings.

    Raises:
        ConfigError: If a variable is set to an unusable value.
    """
    ayanamsa = AYANAMSA_LAHIRI_2025
    raw = _env("AYANAMSA")
    if raw is not None:
        try:
            ayanamsa = float(raw)
        except ValueError:
            raise ConfigError(f"{_PREFIX}AYANAMSA is not a number: {raw!r}") from None
        if not (math.isfinite(ayanamsa) and 0 <= ayanamsa < 360):
            raise ConfigError(f"{_PREFIX}AYANAMSA must be in [0, 360): {raw!r}")

    display_tz = _env("DISPLAY_TZ")
    if display_tz is not None and display_tz not in pytz.all_timezones_set:
        raise ConfigError(f"{_PREFIX}DISPLAY_TZ is not a known time zone: {display_tz!r}")

    log_level = (_env("LOG_LEVEL") or "WARNING").upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise ConfigError(f"{_PREFIX}LOG_LEVEL is not a logging level: {log_level!r}")

    return Settings(
        ayanamsa=ayanamsa,
        data_source=_env("DATA_SOURCE"),
        display_tz=display_tz,
        log_level=log_level,
    )


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
