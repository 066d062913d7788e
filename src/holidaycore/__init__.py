"""
holidaycore - Holiday Date Calculation Engine

Computes the concrete date(s) on which a holiday occurs in a given year,
including the mondayised "observed" date and holidays derived from
another computed holiday (Good Friday relative to Easter).

Key Features:
- Four immutable holiday variants: fixed, observed, moveable, derived
- Country / subdivision / city locality hierarchy with containment
- Easter computus and weekday-rule algorithms (Thanksgiving, Memorial Day)
- Typed errors separating calendar failures from caller mistakes
- YAML/JSON holiday packs and business-day calendars

Quick Start:
    from holidaycore import factory
    from holidaycore.engine import calculate_date, calculate_observed_date

    good_friday = calculate_date(factory.good_friday("Brazil"), 2024)
    good_friday.date  # date(2024, 3, 29)

    christmas = calculate_observed_date(factory.christmas("United States"), 2022)
    christmas.observed_date  # date(2022, 12, 26)

Version: 0.1.0
"""
from __future__ import annotations

__version__ = "0.1.0"

# =============================================================================
# Core Models (Re-exported for convenience)
# =============================================================================
from .models import (
    # Enums
    HolidayType,
    HolidayVariant,
    KnownHoliday,
    LocalityKind,
    # Localities
    City,
    Country,
    Locality,
    Subdivision,
    contains,
    # Holidays
    FixedHoliday,
    Holiday,
    MoveableFromBaseHoliday,
    MoveableHoliday,
    ObservedHoliday,
)

# =============================================================================
# Engine
# =============================================================================
from .engine import (
    applies_to,
    calculate_date,
    calculate_observed_date,
    format_holiday_info,
    get_date_only,
    get_observed_date_only,
    is_weekend,
    mondayise,
)

# =============================================================================
# Exceptions
# =============================================================================
from .exceptions import (
    BaseHolidayCycleError,
    CalendarError,
    CalendarRangeError,
    DerivationDepthExceeded,
    HolidayCoreError,
    InvalidCalendarDate,
    InvalidHolidayDefinition,
    InvalidYear,
    PackError,
    PackLoadError,
    PackValidationError,
    PackVersionMismatch,
    PreconditionError,
    UnknownBaseHolidayError,
    UnsupportedKnownHoliday,
)

__all__ = [
    "__version__",
    # Enums
    "HolidayType",
    "HolidayVariant",
    "KnownHoliday",
    "LocalityKind",
    # Localities
    "City",
    "Country",
    "Locality",
    "Subdivision",
    "contains",
    # Holidays
    "FixedHoliday",
    "Holiday",
    "MoveableFromBaseHoliday",
    "MoveableHoliday",
    "ObservedHoliday",
    # Engine
    "applies_to",
    "calculate_date",
    "calculate_observed_date",
    "format_holiday_info",
    "get_date_only",
    "get_observed_date_only",
    "is_weekend",
    "mondayise",
    # Exceptions
    "BaseHolidayCycleError",
    "CalendarError",
    "CalendarRangeError",
    "DerivationDepthExceeded",
    "HolidayCoreError",
    "InvalidCalendarDate",
    "InvalidHolidayDefinition",
    "InvalidYear",
    "PackError",
    "PackLoadError",
    "PackValidationError",
    "PackVersionMismatch",
    "PreconditionError",
    "UnknownBaseHolidayError",
    "UnsupportedKnownHoliday",
]
