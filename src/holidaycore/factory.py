"""
Holiday Factory

Convenience constructors for common holiday definitions.

Country arguments accept either a Country value or a country name
("Brazil", "United States", "Canada"); unknown names get a code built
from their first two letters.

Observed holidays are materialised for a reference year (default:
settings.reference_year); recalculate them with the engine for any
other year.
"""
from __future__ import annotations

from datetime import date
from typing import Optional, Sequence, Union

from .config import get_settings
from .engine.operations import mondayise
from .models.enums import HolidayType, KnownHoliday
from .models.holiday import (
    FixedHoliday,
    Holiday,
    MoveableFromBaseHoliday,
    MoveableHoliday,
    ObservedHoliday,
)
from .models.locality import (
    City,
    Country,
    Locality,
    Subdivision,
    brazil,
    canada,
    united_states,
)

CountryLike = Union[Country, str]

_COUNTRIES_BY_NAME = {
    "brazil": brazil,
    "united states": united_states,
    "canada": canada,
}

_STATE_NAMES = {
    "SP": "São Paulo",
    "RJ": "Rio de Janeiro",
    "MG": "Minas Gerais",
    "RS": "Rio Grande do Sul",
    "PR": "Paraná",
    "SC": "Santa Catarina",
    "BA": "Bahia",
    "GO": "Goiás",
    "ES": "Espírito Santo",
    "DF": "Distrito Federal",
    "CA": "California",
    "NY": "New York",
    "TX": "Texas",
    "FL": "Florida",
}


# =============================================================================
# Locality Helpers
# =============================================================================

def country(value: CountryLike) -> Country:
    """Resolve a Country from a Country value or a country name."""
    if isinstance(value, Country):
        return value
    if not value or not value.strip():
        raise ValueError("Country name cannot be blank")
    known = _COUNTRIES_BY_NAME.get(value.strip().lower())
    if known is not None:
        return known()
    name = value.strip()
    return Country(name[:2].upper(), name)


def state_name(code: str) -> str:
    """Full name for a state code, the code itself if unknown."""
    return _STATE_NAMES.get(code.upper(), code)


def subdivision(country_value: CountryLike, code: str) -> Subdivision:
    return Subdivision(country(country_value), code, state_name(code))


def city(country_value: CountryLike, state_code: str, name: str) -> City:
    sub = subdivision(country_value, state_code)
    return City(name, sub, sub.country)


# =============================================================================
# Generic Constructors
# =============================================================================

def fixed(
    name: str,
    day: int,
    month: int,
    localities: Sequence[Locality],
    type: HolidayType,
    description: str = "",
) -> FixedHoliday:
    return FixedHoliday(name, day, month, tuple(localities), type, description)


def observed(
    name: str,
    day: int,
    month: int,
    localities: Sequence[Locality],
    type: HolidayType,
    mondayisation: bool = True,
    description: str = "",
    year: Optional[int] = None,
) -> ObservedHoliday:
    """
    Create an observed holiday materialised for a year.

    Raises:
        ValueError: If day/month does not exist in the year
    """
    if year is None:
        year = get_settings().reference_year
    try:
        nominal = date(year, month, day)
    except ValueError as e:
        raise ValueError(f"Invalid day/month combination: day={day}, month={month}") from e
    return ObservedHoliday(
        name=name,
        nominal_date=nominal,
        observed_date=mondayise(nominal, mondayisation),
        localities=tuple(localities),
        type=type,
        mondayisation=mondayisation,
        description=description,
    )


def moveable(
    name: str,
    known_holiday: KnownHoliday,
    localities: Sequence[Locality],
    type: HolidayType,
    mondayisation: bool = False,
    description: str = "",
) -> MoveableHoliday:
    return MoveableHoliday(name, known_holiday, tuple(localities), type, mondayisation, description)


def relative_to(
    name: str,
    base_holiday: Holiday,
    day_offset: int,
    localities: Sequence[Locality],
    type: HolidayType,
    known_holiday: Optional[KnownHoliday] = None,
    mondayisation: bool = False,
    description: str = "",
) -> MoveableFromBaseHoliday:
    return MoveableFromBaseHoliday(
        name,
        known_holiday,
        base_holiday,
        day_offset,
        tuple(localities),
        type,
        mondayisation,
        description,
    )


def derived(known_holiday: KnownHoliday, base_holiday: Holiday) -> MoveableFromBaseHoliday:
    """
    Create a catalogued derived holiday (Good Friday, Easter Monday, Palm
    Sunday) from its base, sharing the base's localities and type.
    """
    return relative_to(
        known_holiday.display_name,
        base_holiday,
        known_holiday.day_offset,
        base_holiday.localities,
        base_holiday.type,
        known_holiday=known_holiday,
        description=known_holiday.description,
    )


# =============================================================================
# Common Holidays
# =============================================================================

def christmas(country_value: CountryLike) -> ObservedHoliday:
    return observed(
        "Christmas Day",
        25,
        12,
        [country(country_value)],
        HolidayType.RELIGIOUS,
        mondayisation=True,
        description="Christian holiday celebrating the birth of Jesus Christ",
    )


def new_year(country_value: CountryLike) -> ObservedHoliday:
    return observed(
        "New Year's Day",
        1,
        1,
        [country(country_value)],
        HolidayType.NATIONAL,
        mondayisation=True,
        description="First day of the Gregorian calendar year",
    )


def brazil_independence_day() -> FixedHoliday:
    return fixed(
        "Independence Day", 7, 9, [brazil()], HolidayType.NATIONAL,
        description="Brazil's independence from Portugal",
    )


def us_independence_day() -> FixedHoliday:
    return fixed(
        "Independence Day", 4, 7, [united_states()], HolidayType.NATIONAL,
        description="Celebrates the Declaration of Independence",
    )


def easter_sunday(country_value: CountryLike) -> MoveableHoliday:
    return moveable(
        "Easter Sunday",
        KnownHoliday.EASTER,
        [country(country_value)],
        HolidayType.RELIGIOUS,
        description="Christian holiday celebrating the resurrection of Jesus Christ",
    )


def good_friday(country_value: CountryLike) -> MoveableFromBaseHoliday:
    return derived(KnownHoliday.GOOD_FRIDAY, easter_sunday(country_value))


def easter_monday(country_value: CountryLike) -> MoveableFromBaseHoliday:
    return derived(KnownHoliday.EASTER_MONDAY, easter_sunday(country_value))


def palm_sunday(country_value: CountryLike) -> MoveableFromBaseHoliday:
    return derived(KnownHoliday.PALM_SUNDAY, easter_sunday(country_value))


def us_thanksgiving() -> MoveableHoliday:
    return moveable(
        "Thanksgiving Day",
        KnownHoliday.THANKSGIVING_US,
        [united_states()],
        HolidayType.NATIONAL,
        description="National day of giving thanks, traditionally celebrated with family gatherings",
    )


def us_labor_day() -> MoveableHoliday:
    return moveable(
        "Labor Day",
        KnownHoliday.LABOR_DAY_US,
        [united_states()],
        HolidayType.NATIONAL,
        description="Federal holiday honoring the American labor movement",
    )


def us_memorial_day() -> MoveableHoliday:
    return moveable(
        "Memorial Day",
        KnownHoliday.MEMORIAL_DAY_US,
        [united_states()],
        HolidayType.NATIONAL,
        description="Federal holiday honoring military personnel who died in service",
    )


def state_holiday(
    name: str,
    day: int,
    month: int,
    country_value: CountryLike,
    state: str,
    mondayisation: bool = False,
    description: str = "",
) -> Union[FixedHoliday, ObservedHoliday]:
    """State holiday; observed when mondayisation is requested, fixed otherwise."""
    localities = [subdivision(country_value, state)]
    if mondayisation:
        return observed(name, day, month, localities, HolidayType.STATE, True, description)
    return fixed(name, day, month, localities, HolidayType.STATE, description)


def city_holiday(
    name: str,
    day: int,
    month: int,
    country_value: CountryLike,
    state: str,
    city_name: str,
    mondayisation: bool = False,
    description: str = "",
) -> Union[FixedHoliday, ObservedHoliday]:
    """City holiday; observed when mondayisation is requested, fixed otherwise."""
    localities = [city(country_value, state, city_name)]
    if mondayisation:
        return observed(name, day, month, localities, HolidayType.MUNICIPAL, True, description)
    return fixed(name, day, month, localities, HolidayType.MUNICIPAL, description)
