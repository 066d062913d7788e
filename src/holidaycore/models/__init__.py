"""
holidaycore Models

Immutable value types for holiday definitions and their geographic scope:

    from holidaycore.models import (
        # Enums
        HolidayType, KnownHoliday, HolidayVariant, LocalityKind,
        # Localities
        Country, Subdivision, City, Locality, contains,
        # Holidays
        FixedHoliday, ObservedHoliday, MoveableHoliday, MoveableFromBaseHoliday,
    )
"""
from __future__ import annotations

# =============================================================================
# Enums
# =============================================================================
from .enums import (
    HolidayType,
    HolidayVariant,
    KnownHoliday,
    LocalityKind,
)

# =============================================================================
# Localities
# =============================================================================
from .locality import (
    LOCALITY_TYPES,
    City,
    Country,
    Locality,
    Subdivision,
    brazil,
    california,
    canada,
    contains,
    country_of,
    format_locality,
    san_francisco,
    sao_paulo_city,
    sao_paulo_state,
    united_states,
)

# =============================================================================
# Holidays
# =============================================================================
from .holiday import (
    HOLIDAY_TYPES,
    FixedHoliday,
    Holiday,
    MoveableFromBaseHoliday,
    MoveableHoliday,
    ObservedHoliday,
    display_name,
    holiday_applies_to,
    is_governmental,
    is_holiday,
    is_observed_in_country,
    summary,
)

__all__ = [
    # Enums
    "HolidayType",
    "HolidayVariant",
    "KnownHoliday",
    "LocalityKind",
    # Localities
    "LOCALITY_TYPES",
    "City",
    "Country",
    "Locality",
    "Subdivision",
    "brazil",
    "california",
    "canada",
    "contains",
    "country_of",
    "format_locality",
    "san_francisco",
    "sao_paulo_city",
    "sao_paulo_state",
    "united_states",
    # Holidays
    "HOLIDAY_TYPES",
    "FixedHoliday",
    "Holiday",
    "MoveableFromBaseHoliday",
    "MoveableHoliday",
    "ObservedHoliday",
    "display_name",
    "holiday_applies_to",
    "is_governmental",
    "is_holiday",
    "is_observed_in_country",
    "summary",
]
