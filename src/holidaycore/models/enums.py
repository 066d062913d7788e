"""
holidaycore Enumerations

All enumeration types used by the holiday models.

All enums inherit from (str, Enum) for JSON serialization compatibility.
"""
from __future__ import annotations

from enum import Enum
from typing import Optional


# =============================================================================
# Holiday Type
# =============================================================================

class HolidayType(str, Enum):
    """Category of a holiday."""
    NATIONAL = "national"
    STATE = "state"
    MUNICIPAL = "municipal"
    RELIGIOUS = "religious"
    COMMERCIAL = "commercial"

    @property
    def is_governmental(self) -> bool:
        """National, state and municipal holidays are set by a government."""
        return self in (HolidayType.NATIONAL, HolidayType.STATE, HolidayType.MUNICIPAL)


# =============================================================================
# Variant Tags
# =============================================================================

class HolidayVariant(str, Enum):
    """Discriminant of the Holiday union."""
    FIXED = "fixed"
    OBSERVED = "observed"
    MOVEABLE = "moveable"
    MOVEABLE_FROM_BASE = "moveable_from_base"


class LocalityKind(str, Enum):
    """Discriminant of the Locality union."""
    COUNTRY = "country"
    SUBDIVISION = "subdivision"
    CITY = "city"


# =============================================================================
# Known Holidays
# =============================================================================

class KnownHoliday(str, Enum):
    """
    Well-known holidays with standardized names.

    Moveable members map to a date algorithm (see holidaycore.algorithms).
    Derived members (Good Friday, Easter Monday, Palm Sunday) are offsets
    from a base member and have no algorithm of their own.
    """
    # Fixed holidays
    NEW_YEAR = "new_year"
    CHRISTMAS = "christmas"
    INDEPENDENCE_DAY_US = "independence_day_us"
    INDEPENDENCE_DAY_BRAZIL = "independence_day_brazil"

    # Moveable holidays (calculated)
    EASTER = "easter"
    GOOD_FRIDAY = "good_friday"
    EASTER_MONDAY = "easter_monday"
    PALM_SUNDAY = "palm_sunday"

    # Weekday-based holidays
    THANKSGIVING_US = "thanksgiving_us"
    MEMORIAL_DAY_US = "memorial_day_us"
    LABOR_DAY_US = "labor_day_us"
    MOTHERS_DAY = "mothers_day"
    FATHERS_DAY = "fathers_day"

    # International holidays
    LABOR_DAY_INTERNATIONAL = "labor_day_international"
    WOMENS_DAY = "womens_day"
    VALENTINES_DAY = "valentines_day"

    # Religious holidays
    EPIPHANY = "epiphany"
    ALL_SAINTS_DAY = "all_saints_day"
    ALL_SOULS_DAY = "all_souls_day"

    # Cultural holidays
    HALLOWEEN = "halloween"
    ST_PATRICKS_DAY = "st_patricks_day"
    CINCO_DE_MAYO = "cinco_de_mayo"

    @property
    def display_name(self) -> str:
        """Standardized display name."""
        return _KNOWN_HOLIDAY_INFO[self][0]

    @property
    def description(self) -> str:
        """Short description of the holiday."""
        return _KNOWN_HOLIDAY_INFO[self][1]

    @property
    def is_fixed(self) -> bool:
        """Occurs on the same month/day every year."""
        return self in _FIXED_MONTH_DAY

    @property
    def is_moveable(self) -> bool:
        """Date is determined by a rule rather than the calendar."""
        return not self.is_fixed

    @property
    def is_derived(self) -> bool:
        """Date is an offset from another known holiday."""
        return self in _DERIVED

    @property
    def base_holiday(self) -> KnownHoliday:
        """Base holiday of a derived member."""
        if not self.is_derived:
            raise ValueError(f"Holiday {self.name} is not derived from another holiday")
        return _DERIVED[self][0]

    @property
    def day_offset(self) -> int:
        """Day offset from the base holiday of a derived member."""
        if not self.is_derived:
            raise ValueError(f"Holiday {self.name} is not derived from another holiday")
        return _DERIVED[self][1]

    @property
    def fixed_month_day(self) -> Optional[tuple[int, int]]:
        """(month, day) of a fixed member, None for moveable ones."""
        return _FIXED_MONTH_DAY.get(self)


_KNOWN_HOLIDAY_INFO: dict[KnownHoliday, tuple[str, str]] = {
    KnownHoliday.NEW_YEAR: ("New Year's Day", "First day of the Gregorian calendar year"),
    KnownHoliday.CHRISTMAS: ("Christmas Day", "Christian celebration of the birth of Jesus Christ"),
    KnownHoliday.INDEPENDENCE_DAY_US: ("Independence Day", "United States independence celebration"),
    KnownHoliday.INDEPENDENCE_DAY_BRAZIL: ("Independence Day", "Brazil's independence from Portugal"),
    KnownHoliday.EASTER: ("Easter Sunday", "Christian celebration of the resurrection of Jesus Christ"),
    KnownHoliday.GOOD_FRIDAY: ("Good Friday", "Christian observance of the crucifixion of Jesus Christ"),
    KnownHoliday.EASTER_MONDAY: ("Easter Monday", "Christian holiday following Easter Sunday"),
    KnownHoliday.PALM_SUNDAY: ("Palm Sunday", "Christian holiday commemorating Jesus' entry into Jerusalem"),
    KnownHoliday.THANKSGIVING_US: ("Thanksgiving Day", "United States harvest celebration"),
    KnownHoliday.MEMORIAL_DAY_US: ("Memorial Day", "United States day of remembrance"),
    KnownHoliday.LABOR_DAY_US: ("Labor Day", "United States workers' celebration"),
    KnownHoliday.MOTHERS_DAY: ("Mother's Day", "Celebration honoring mothers"),
    KnownHoliday.FATHERS_DAY: ("Father's Day", "Celebration honoring fathers"),
    KnownHoliday.LABOR_DAY_INTERNATIONAL: ("International Workers' Day", "International celebration of workers"),
    KnownHoliday.WOMENS_DAY: ("International Women's Day", "Celebration of women's rights and achievements"),
    KnownHoliday.VALENTINES_DAY: ("Valentine's Day", "Celebration of romantic love"),
    KnownHoliday.EPIPHANY: ("Epiphany", "Christian celebration of the revelation of God incarnate"),
    KnownHoliday.ALL_SAINTS_DAY: ("All Saints' Day", "Christian celebration honoring all saints"),
    KnownHoliday.ALL_SOULS_DAY: ("All Souls' Day", "Christian day of prayer for the souls of the dead"),
    KnownHoliday.HALLOWEEN: ("Halloween", "Traditional celebration with costumes and trick-or-treating"),
    KnownHoliday.ST_PATRICKS_DAY: ("St. Patrick's Day", "Cultural celebration of Irish heritage"),
    KnownHoliday.CINCO_DE_MAYO: ("Cinco de Mayo", "Mexican celebration of victory over French forces"),
}

# (month, day)
_FIXED_MONTH_DAY: dict[KnownHoliday, tuple[int, int]] = {
    KnownHoliday.NEW_YEAR: (1, 1),
    KnownHoliday.CHRISTMAS: (12, 25),
    KnownHoliday.INDEPENDENCE_DAY_US: (7, 4),
    KnownHoliday.INDEPENDENCE_DAY_BRAZIL: (9, 7),
    KnownHoliday.LABOR_DAY_INTERNATIONAL: (5, 1),
    KnownHoliday.WOMENS_DAY: (3, 8),
    KnownHoliday.VALENTINES_DAY: (2, 14),
    KnownHoliday.EPIPHANY: (1, 6),
    KnownHoliday.ALL_SAINTS_DAY: (11, 1),
    KnownHoliday.ALL_SOULS_DAY: (11, 2),
    KnownHoliday.HALLOWEEN: (10, 31),
    KnownHoliday.ST_PATRICKS_DAY: (3, 17),
    KnownHoliday.CINCO_DE_MAYO: (5, 5),
}

# derived -> (base, day offset)
_DERIVED: dict[KnownHoliday, tuple[KnownHoliday, int]] = {
    KnownHoliday.GOOD_FRIDAY: (KnownHoliday.EASTER, -2),
    KnownHoliday.EASTER_MONDAY: (KnownHoliday.EASTER, 1),
    KnownHoliday.PALM_SUNDAY: (KnownHoliday.EASTER, -7),
}
