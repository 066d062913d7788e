"""
Holiday Calculation Engine

Pure functions that resolve holiday definitions to concrete dates for a
year. Inputs are never mutated; every result is a new value.

Observed-date rule (mondayisation):
- Saturday holidays observed on Friday
- Sunday holidays observed on Monday
- Weekdays unchanged

Derived holidays (MoveableFromBaseHoliday) are resolved by computing the
base holiday for the same year and adding the day offset. A base that
cannot be resolved is an error, never a default date.
"""
from __future__ import annotations

import logging
from datetime import MAXYEAR, MINYEAR, date, timedelta
from typing import Optional

from ..algorithms import calculation_info, get_algorithm
from ..config import get_settings
from ..exceptions import (
    CalendarError,
    DerivationDepthExceeded,
    InvalidCalendarDate,
    InvalidHolidayDefinition,
    InvalidYear,
)
from ..models.holiday import (
    HOLIDAY_TYPES,
    FixedHoliday,
    Holiday,
    MoveableFromBaseHoliday,
    MoveableHoliday,
    ObservedHoliday,
    holiday_applies_to,
    summary,
)
from ..models.locality import Locality

logger = logging.getLogger("holidaycore.engine")

SATURDAY = 5
SUNDAY = 6


# =============================================================================
# Preconditions
# =============================================================================

def _check_holiday(holiday: object) -> None:
    if holiday is None:
        raise InvalidHolidayDefinition(message="Holiday cannot be None")
    if not isinstance(holiday, HOLIDAY_TYPES):
        raise InvalidHolidayDefinition(
            message=f"Not a holiday definition: {type(holiday).__name__}",
        )


def _check_year(year: object, holiday_name: Optional[str] = None) -> None:
    if isinstance(year, bool) or not isinstance(year, int):
        raise InvalidYear(
            message=f"Year must be an integer, got {type(year).__name__}",
            holiday_name=holiday_name,
        )
    if not MINYEAR <= year <= MAXYEAR:
        raise InvalidYear(
            message=f"Year must be between {MINYEAR} and {MAXYEAR}",
            details={"min_year": MINYEAR, "max_year": MAXYEAR},
            holiday_name=holiday_name,
            year=year,
        )


def _check_depth(holiday: Holiday, year: int) -> None:
    if not isinstance(holiday, MoveableFromBaseHoliday):
        return
    max_depth = get_settings().max_derivation_depth
    depth = holiday.derivation_depth
    if depth > max_depth:
        raise DerivationDepthExceeded(
            message=f"Base holiday chain is {depth} levels deep (max {max_depth})",
            details={"depth": depth, "max_depth": max_depth},
            holiday_name=holiday.name,
            year=year,
        )


def _validate(holiday: object, year: object) -> None:
    _check_holiday(holiday)
    _check_year(year, holiday.name)  # type: ignore[union-attr]
    _check_depth(holiday, year)  # type: ignore[arg-type]


# =============================================================================
# Mondayisation
# =============================================================================

def mondayise(d: date, enabled: bool = True) -> date:
    """
    Shift a weekend date to the adjacent weekday.

    Args:
        d: Nominal date
        enabled: When False the date is returned unchanged

    Returns:
        Friday for a Saturday, Monday for a Sunday, otherwise d
    """
    if not enabled:
        return d
    weekday = d.weekday()
    if weekday == SATURDAY:
        return d - timedelta(days=1)
    if weekday == SUNDAY:
        return d + timedelta(days=1)
    return d


# =============================================================================
# Nominal Date Resolution
# =============================================================================

def _month_day_date(holiday: Holiday, year: int, month: int, day: int) -> date:
    try:
        return date(year, month, day)
    except ValueError as e:
        raise InvalidCalendarDate(
            message=f"Invalid date {year}-{month:02d}-{day:02d}: {e}",
            details={"day": day, "month": month},
            holiday_name=holiday.name,
            year=year,
        ) from e


def _nominal_date(holiday: Holiday, year: int) -> date:
    """Resolve the scheduled (pre-mondayisation) date for a year."""
    if isinstance(holiday, FixedHoliday):
        return _month_day_date(holiday, year, holiday.month, holiday.day)

    if isinstance(holiday, ObservedHoliday):
        nominal = holiday.nominal_date
        return _month_day_date(holiday, year, nominal.month, nominal.day)

    if isinstance(holiday, MoveableHoliday):
        algorithm = get_algorithm(holiday.known_holiday)
        try:
            return algorithm(year)
        except CalendarError as e:
            # Report the definition's own name rather than the algorithm's
            raise type(e)(
                message=e.message,
                details=e.details,
                holiday_name=holiday.name,
                year=year,
            ) from e

    if isinstance(holiday, MoveableFromBaseHoliday):
        try:
            base_date = _nominal_date(holiday.base_holiday, year)
        except CalendarError as e:
            # Name the requested holiday, keep the innermost failing base in details
            raise type(e)(
                message=e.message,
                details={"base_holiday": e.holiday_name, **e.details},
                holiday_name=holiday.name,
                year=year,
            ) from e
        try:
            return base_date + timedelta(days=holiday.day_offset)
        except OverflowError as e:
            raise InvalidCalendarDate(
                message=(
                    f"Offset {holiday.day_offset} from {base_date.isoformat()} "
                    "is outside the supported date range"
                ),
                details={"base_date": base_date.isoformat(), "day_offset": holiday.day_offset},
                holiday_name=holiday.name,
                year=year,
            ) from e

    raise InvalidHolidayDefinition(
        message=f"Not a holiday definition: {type(holiday).__name__}",
        year=year,
    )


# =============================================================================
# Public Operations
# =============================================================================

def calculate_date(holiday: Holiday, year: int) -> Holiday:
    """
    Calculate the date of a holiday for a specific year.

    The result has the same variant as the input with its date(s) populated.
    ObservedHoliday inputs are re-derived from their nominal month/day, so
    recalculating a calculated value for the same year is a no-op.

    Args:
        holiday: Holiday definition
        year: Target year (1-9999)

    Returns:
        New holiday value of the same variant

    Raises:
        InvalidHolidayDefinition: holiday is None or not a holiday variant
        InvalidYear: year is not an integer in range
        DerivationDepthExceeded: base chain longer than the configured bound
        InvalidCalendarDate: the date does not exist in that year
        CalendarRangeError: the algorithm is undefined for that year
    """
    _validate(holiday, year)
    nominal = _nominal_date(holiday, year)

    if isinstance(holiday, ObservedHoliday):
        result: Holiday = holiday.with_dates(nominal, mondayise(nominal, holiday.mondayisation))
    else:
        result = holiday.with_date(nominal)

    logger.debug(
        "Calculated %s for %d: %s",
        holiday.name,
        year,
        nominal.isoformat(),
        extra={"holiday": holiday.name, "year": year},
    )
    return result


def calculate_observed_date(holiday: Holiday, year: int) -> ObservedHoliday:
    """
    Calculate nominal and observed dates of a holiday for a year.

    Always returns an ObservedHoliday. FixedHoliday carries no
    mondayisation flag, so its observed date equals the nominal date.
    """
    _validate(holiday, year)
    if isinstance(holiday, ObservedHoliday):
        return calculate_date(holiday, year)  # type: ignore[return-value]

    nominal = _nominal_date(holiday, year)
    enabled = False if isinstance(holiday, FixedHoliday) else holiday.mondayisation
    observed = mondayise(nominal, enabled)

    logger.debug(
        "Observed %s for %d: %s -> %s",
        holiday.name,
        year,
        nominal.isoformat(),
        observed.isoformat(),
        extra={"holiday": holiday.name, "year": year},
    )
    return ObservedHoliday(
        name=holiday.name,
        nominal_date=nominal,
        observed_date=observed,
        localities=holiday.localities,
        type=holiday.type,
        mondayisation=enabled,
        description=holiday.description,
    )


def get_date_only(holiday: Holiday, year: int) -> date:
    """Nominal date of the holiday for a year."""
    _validate(holiday, year)
    return _nominal_date(holiday, year)


def get_observed_date_only(holiday: Holiday, year: int) -> date:
    """Observed date of the holiday for a year."""
    return calculate_observed_date(holiday, year).observed_date


def is_weekend(holiday: Holiday, year: int) -> bool:
    """Check whether the nominal date falls on Saturday or Sunday."""
    return get_date_only(holiday, year).weekday() in (SATURDAY, SUNDAY)


def applies_to(holiday: Holiday, locality: Optional[Locality]) -> bool:
    """Check whether any of the holiday's localities contains the target."""
    _check_holiday(holiday)
    return holiday_applies_to(holiday, locality)


def format_holiday_info(holiday: Holiday) -> str:
    """
    One-line description of a holiday definition.

    Example:
        >>> format_holiday_info(christmas)
        'Christmas Day - religious holiday in Brazil (fixed on 12-25)'
    """
    _check_holiday(holiday)
    prefix = summary(holiday)

    if isinstance(holiday, FixedHoliday):
        return f"{prefix} (fixed on {holiday.month:02d}-{holiday.day:02d})"
    if isinstance(holiday, ObservedHoliday):
        return (
            f"{prefix} (observed on {holiday.observed_date.isoformat()}, "
            f"nominal {holiday.nominal_date.isoformat()})"
        )
    if isinstance(holiday, MoveableHoliday):
        return f"{prefix} ({calculation_info(holiday.known_holiday)})"
    return f"{prefix} ({holiday.relationship_description})"
