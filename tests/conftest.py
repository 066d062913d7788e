"""
Pytest configuration and fixtures for holidaycore tests.

Provides helper factories for holiday definitions and isolates the cached
settings between tests.
"""
from __future__ import annotations

from datetime import date

import pytest

from holidaycore.config import reset_settings
from holidaycore.models import (
    FixedHoliday,
    HolidayType,
    KnownHoliday,
    MoveableFromBaseHoliday,
    MoveableHoliday,
    ObservedHoliday,
    brazil,
    united_states,
)


# =============================================================================
# Factory Helpers
# =============================================================================

def make_fixed(
    name: str = "Christmas Day",
    day: int = 25,
    month: int = 12,
    localities=None,
    type: HolidayType = HolidayType.RELIGIOUS,
) -> FixedHoliday:
    """Create a FixedHoliday with sensible defaults."""
    return FixedHoliday(name, day, month, localities or (brazil(),), type)


def make_observed(
    name: str = "Christmas Day",
    nominal: date = date(2024, 12, 25),
    observed: date = None,
    mondayisation: bool = True,
    localities=None,
    type: HolidayType = HolidayType.NATIONAL,
) -> ObservedHoliday:
    """Create an ObservedHoliday; observed defaults to the nominal date."""
    return ObservedHoliday(
        name=name,
        nominal_date=nominal,
        observed_date=observed or nominal,
        localities=localities or (united_states(),),
        type=type,
        mondayisation=mondayisation,
    )


def make_moveable(
    known: KnownHoliday = KnownHoliday.EASTER,
    name: str = None,
    mondayisation: bool = False,
    localities=None,
) -> MoveableHoliday:
    """Create a MoveableHoliday named after its known holiday."""
    return MoveableHoliday(
        name or known.display_name,
        known,
        localities or (brazil(),),
        HolidayType.RELIGIOUS,
        mondayisation,
    )


def make_derived(
    base=None,
    day_offset: int = -2,
    name: str = "Good Friday",
    known: KnownHoliday = KnownHoliday.GOOD_FRIDAY,
    mondayisation: bool = False,
) -> MoveableFromBaseHoliday:
    """Create a MoveableFromBaseHoliday; the base defaults to Easter."""
    base = base or make_moveable()
    return MoveableFromBaseHoliday(
        name,
        known,
        base,
        day_offset,
        base.localities,
        base.type,
        mondayisation,
    )


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    """Each test reads settings from a clean environment."""
    for var in (
        "HOLIDAYCORE_LOG_LEVEL",
        "HOLIDAYCORE_LOG_FORMAT",
        "HOLIDAYCORE_MAX_DERIVATION_DEPTH",
        "HOLIDAYCORE_REFERENCE_YEAR",
        "HOLIDAYCORE_PACKS_DIR",
    ):
        monkeypatch.delenv(var, raising=False)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def easter() -> MoveableHoliday:
    return make_moveable()


@pytest.fixture
def good_friday(easter) -> MoveableFromBaseHoliday:
    return make_derived(easter)


@pytest.fixture
def christmas_observed() -> ObservedHoliday:
    return make_observed()
