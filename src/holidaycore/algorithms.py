"""
Known-Holiday Algorithms

Each algorithmic KnownHoliday maps to exactly one pure `year -> date`
function:

- Easter Sunday (Anonymous Gregorian computus, valid from 1583)
- Thanksgiving (US): 4th Thursday in November
- Memorial Day (US): last Monday in May
- Labor Day (US): 1st Monday in September
- Mother's Day: 2nd Sunday in May
- Father's Day: 3rd Sunday in June

Good Friday, Easter Monday and Palm Sunday are not algorithms here: they are
MoveableFromBaseHoliday offsets from Easter.
"""
from __future__ import annotations

from datetime import date, timedelta
from types import MappingProxyType
from typing import Callable, Mapping, Optional

from .exceptions import CalendarRangeError, UnsupportedKnownHoliday
from .models.enums import KnownHoliday

# First full year of the Gregorian calendar
FIRST_GREGORIAN_YEAR = 1583

MONDAY, TUESDAY, WEDNESDAY, THURSDAY, FRIDAY, SATURDAY, SUNDAY = range(7)


# =============================================================================
# Weekday Rules
# =============================================================================

def nth_weekday_of_month(year: int, month: int, weekday: int, n: int) -> date:
    """
    Get the nth occurrence of a weekday in a month.

    Args:
        year: Year
        month: Month (1-12)
        weekday: Day of week (0=Monday, 6=Sunday)
        n: Which occurrence (1=first, 2=second, etc.)

    Returns:
        The date of the nth weekday

    Raises:
        ValueError: If the month has no nth occurrence of the weekday
    """
    if not 1 <= n <= 5:
        raise ValueError(f"Occurrence must be between 1 and 5, got: {n}")

    first_day = date(year, month, 1)
    days_until_weekday = (weekday - first_day.weekday()) % 7
    result = first_day + timedelta(days=days_until_weekday, weeks=n - 1)
    if result.month != month:
        raise ValueError(f"No occurrence {n} of weekday {weekday} in {year}-{month:02d}")
    return result


def last_weekday_of_month(year: int, month: int, weekday: int) -> date:
    """
    Get the last occurrence of a weekday in a month.

    Args:
        year: Year
        month: Month (1-12)
        weekday: Day of week (0=Monday, 6=Sunday)

    Returns:
        The date of the last weekday
    """
    if month == 12:
        last_day = date(year, 12, 31)
    else:
        last_day = date(year, month + 1, 1) - timedelta(days=1)

    days_since_weekday = (last_day.weekday() - weekday) % 7
    return last_day - timedelta(days=days_since_weekday)


# =============================================================================
# Computus
# =============================================================================

def easter_sunday(year: int) -> date:
    """
    Calculate Easter Sunday using the Anonymous Gregorian algorithm.

    Also known as the Meeus/Jones/Butcher algorithm.

    Args:
        year: Year (>= 1583)

    Returns:
        Date of Easter Sunday

    Raises:
        CalendarRangeError: For years before the first full Gregorian year
    """
    if year < FIRST_GREGORIAN_YEAR:
        raise CalendarRangeError(
            message=f"Easter computus is only defined from {FIRST_GREGORIAN_YEAR}",
            details={"min_year": FIRST_GREGORIAN_YEAR},
            holiday_name=KnownHoliday.EASTER.display_name,
            year=year,
        )

    a = year % 19
    b, c = divmod(year, 100)
    d, e = divmod(b, 4)
    f = (b + 8) // 25
    g = (b - f + 1) // 3
    h = (19 * a + b - d - g + 15) % 30
    i, k = divmod(c, 4)
    l = (32 + 2 * e + 2 * i - h - k) % 7
    m = (a + 11 * h + 22 * l) // 451
    month, day = divmod(h + l - 7 * m + 114, 31)
    return date(year, month, day + 1)


# =============================================================================
# Named Weekday Holidays
# =============================================================================

def thanksgiving_us(year: int) -> date:
    """4th Thursday in November."""
    return nth_weekday_of_month(year, 11, THURSDAY, 4)


def memorial_day_us(year: int) -> date:
    """Last Monday in May."""
    return last_weekday_of_month(year, 5, MONDAY)


def labor_day_us(year: int) -> date:
    """1st Monday in September."""
    return nth_weekday_of_month(year, 9, MONDAY, 1)


def mothers_day(year: int) -> date:
    """2nd Sunday in May."""
    return nth_weekday_of_month(year, 5, SUNDAY, 2)


def fathers_day(year: int) -> date:
    """3rd Sunday in June."""
    return nth_weekday_of_month(year, 6, SUNDAY, 3)


# =============================================================================
# Registry
# =============================================================================

ALGORITHMS: Mapping[KnownHoliday, Callable[[int], date]] = MappingProxyType({
    KnownHoliday.EASTER: easter_sunday,
    KnownHoliday.THANKSGIVING_US: thanksgiving_us,
    KnownHoliday.MEMORIAL_DAY_US: memorial_day_us,
    KnownHoliday.LABOR_DAY_US: labor_day_us,
    KnownHoliday.MOTHERS_DAY: mothers_day,
    KnownHoliday.FATHERS_DAY: fathers_day,
})

_CALCULATION_INFO: dict[KnownHoliday, str] = {
    KnownHoliday.EASTER: "Calculated using lunar calendar (Meeus algorithm)",
    KnownHoliday.THANKSGIVING_US: "4th Thursday of November",
    KnownHoliday.MEMORIAL_DAY_US: "Last Monday of May",
    KnownHoliday.LABOR_DAY_US: "1st Monday of September",
    KnownHoliday.MOTHERS_DAY: "2nd Sunday of May",
    KnownHoliday.FATHERS_DAY: "3rd Sunday of June",
}

_TYPICAL_MONTH: dict[KnownHoliday, int] = {
    KnownHoliday.THANKSGIVING_US: 11,
    KnownHoliday.MEMORIAL_DAY_US: 5,
    KnownHoliday.LABOR_DAY_US: 9,
    KnownHoliday.MOTHERS_DAY: 5,
    KnownHoliday.FATHERS_DAY: 6,
}


def has_algorithm(known_holiday: KnownHoliday) -> bool:
    """Check whether a date algorithm is registered for the holiday."""
    return known_holiday in ALGORITHMS


def get_algorithm(known_holiday: KnownHoliday) -> Callable[[int], date]:
    """
    Look up the date algorithm for a known holiday.

    Raises:
        UnsupportedKnownHoliday: If the holiday is fixed or derived
    """
    try:
        return ALGORITHMS[known_holiday]
    except KeyError:
        raise UnsupportedKnownHoliday(
            message=f"Unsupported moveable holiday: {known_holiday.name}",
            details={"known_holiday": known_holiday.value},
            holiday_name=known_holiday.display_name,
        ) from None


def calculation_info(known_holiday: KnownHoliday) -> str:
    """Human-readable description of how the date is calculated."""
    return _CALCULATION_INFO.get(known_holiday, "Calculated using specific algorithm")


def is_lunar_based(known_holiday: KnownHoliday) -> bool:
    return known_holiday == KnownHoliday.EASTER


def is_weekday_based(known_holiday: KnownHoliday) -> bool:
    return known_holiday in _TYPICAL_MONTH


def typical_month(known_holiday: KnownHoliday) -> Optional[int]:
    """Month the holiday always falls in, None if it varies (Easter)."""
    return _TYPICAL_MONTH.get(known_holiday)


def calculation_category(known_holiday: KnownHoliday) -> str:
    if is_lunar_based(known_holiday):
        return "Lunar-based"
    if is_weekday_based(known_holiday):
        return "Weekday-based"
    return "Algorithm-based"
