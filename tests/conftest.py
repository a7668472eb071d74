"""Shared fixtures and Hypothesis profiles for the full moon house tests."""

import os
from dataclasses import replace

import pytest
from hypothesis import HealthCheck, settings

from fullmoonhouse.models import FullMoonRecord, ReferenceData, TropicalPlacement
from fullmoonhouse.reference import load_reference_data

settings.register_profile(
    "dev",
    settings(deadline=None, max_examples=60, suppress_health_check=[HealthCheck.too_slow]),
)
settings.register_profile(
    "ci",
    settings(deadline=None, max_examples=200, suppress_health_check=[HealthCheck.too_slow]),
)
settings.load_profile(
    "ci" if os.getenv("CI") else os.getenv("HYPOTHESIS_PROFILE", "dev")
)


@pytest.fixture
def clean_env(monkeypatch):
    """Keep a developer's FULLMOONHOUSE_* variables out of the tests."""
    for name in list(os.environ):
        if name.startswith("FULLMOONHOUSE_"):
            monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture(scope="session")
def bundled() -> ReferenceData:
    """The tables shipped with the package."""
    return load_reference_data()


@pytest.fixture
def leo_reference(bundled) -> ReferenceData:
    """Bundled house/nakshatra tables with a single full moon at Leo 15°."""
    record = FullMoonRecord(
        date="2025-02-12",
        tropical=TropicalPlacement(sign="Leo", degree=15.0, time="13:53"),
    )
    return replace(bundled, full_moons=(record,))
