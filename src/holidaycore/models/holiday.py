"""
holidaycore Holiday Models

A holiday definition is one of four immutable variants:

- FixedHoliday: same day/month every year (no year stored)
- ObservedHoliday: a resolved nominal/observed date pair
- MoveableHoliday: date produced by a named algorithm (Easter, Thanksgiving)
- MoveableFromBaseHoliday: a day offset from another holiday (Good Friday)

Definitions hold the data needed to compute a date, never a date itself;
the optional `date` field is only populated on values returned by the
calculation engine. Calculating for a year never mutates the input.
"""
from __future__ import annotations

import calendar
from dataclasses import dataclass, replace
from datetime import date as Date
from typing import ClassVar, Optional, Union

from .enums import HolidayType, HolidayVariant, KnownHoliday
from .locality import LOCALITY_TYPES, Locality, contains, country_of, format_locality


def _normalize_common(holiday: object) -> None:
    """Validate and freeze the fields shared by every variant."""
    name = getattr(holiday, "name")
    if not isinstance(name, str) or not name.strip():
        raise ValueError("Holiday name cannot be blank")

    description = getattr(holiday, "description")
    if description is None:
        object.__setattr__(holiday, "description", "")

    localities = getattr(holiday, "localities")
    if localities is None:
        raise ValueError("Holiday localities cannot be None")
    localities = tuple(localities)
    if not localities:
        raise ValueError("Holiday must have at least one locality")
    for loc in localities:
        if not isinstance(loc, LOCALITY_TYPES):
            raise ValueError(f"Not a locality: {loc!r}")
    object.__setattr__(holiday, "localities", localities)

    holiday_type = getattr(holiday, "type")
    if not isinstance(holiday_type, HolidayType):
        object.__setattr__(holiday, "type", HolidayType(holiday_type))


def _is_weekend(d: Date) -> bool:
    return d.weekday() >= 5


# =============================================================================
# Fixed Holiday
# =============================================================================

@dataclass(frozen=True)
class FixedHoliday:
    """
    Holiday on the same day and month every year.

    Feb 29 is accepted here and checked per year at calculation time.

    Attributes:
        name: Holiday name
        day: Day of month (1-31)
        month: Month (1-12)
        localities: Where the holiday is observed (non-empty)
        type: Holiday category
        description: Free text
        date: Resolved date, set only on calculated values
    """
    name: str
    day: int
    month: int
    localities: tuple[Locality, ...]
    type: HolidayType
    description: str = ""
    date: Optional[Date] = None

    variant: ClassVar[HolidayVariant] = HolidayVariant.FIXED

    def __post_init__(self) -> None:
        _normalize_common(self)
        if not 1 <= self.month <= 12:
            raise ValueError(f"Month must be between 1 and 12, got {self.month}")
        if not 1 <= self.day <= 31:
            raise ValueError(f"Day must be between 1 and 31, got {self.day}")
        # 2000 is a leap year, so Feb 29 passes here
        max_days = calendar.monthrange(2000, self.month)[1]
        if self.day > max_days:
            raise ValueError(
                f"Invalid day {self.day} for month {self.month}. Maximum days: {max_days}"
            )
        if self.date is not None and (self.date.day != self.day or self.date.month != self.month):
            raise ValueError("Date must match day and month fields")

    def with_date(self, new_date: Date) -> FixedHoliday:
        return replace(self, date=new_date, day=new_date.day, month=new_date.month)


# =============================================================================
# Observed Holiday
# =============================================================================

@dataclass(frozen=True)
class ObservedHoliday:
    """
    Holiday carrying both its nominal date and the date it is observed on.

    Attributes:
        name: Holiday name
        nominal_date: Scheduled date
        observed_date: Date the holiday is actually taken
        localities: Where the holiday is observed (non-empty)
        type: Holiday category
        mondayisation: Whether weekend dates shift to a weekday
        description: Free text
    """
    name: str
    nominal_date: Date
    observed_date: Date
    localities: tuple[Locality, ...]
    type: HolidayType
    mondayisation: bool = False
    description: str = ""

    variant: ClassVar[HolidayVariant] = HolidayVariant.OBSERVED

    def __post_init__(self) -> None:
        _normalize_common(self)
        if self.nominal_date is None or self.observed_date is None:
            raise ValueError("Observed holiday requires nominal and observed dates")
        if (
            self.mondayisation
            and self.observed_date == self.nominal_date
            and _is_weekend(self.nominal_date)
        ):
            raise ValueError(
                "Mondayisation is enabled but observed date equals original weekend date"
            )

    @property
    def date(self) -> Date:
        """Nominal date (same accessor as the other variants)."""
        return self.nominal_date

    @property
    def is_shifted(self) -> bool:
        """True when the observed date differs from the nominal one."""
        return self.observed_date != self.nominal_date

    def with_dates(self, nominal_date: Date, observed_date: Date) -> ObservedHoliday:
        return replace(self, nominal_date=nominal_date, observed_date=observed_date)


# =============================================================================
# Moveable Holiday
# =============================================================================

@dataclass(frozen=True)
class MoveableHoliday:
    """
    Holiday whose date is produced by a named algorithm.

    Attributes:
        name: Holiday name
        known_holiday: Algorithm selector (must have an algorithm)
        localities: Where the holiday is observed (non-empty)
        type: Holiday category
        mondayisation: Whether weekend dates shift to a weekday
        description: Free text
        date: Resolved date, set only on calculated values
    """
    name: str
    known_holiday: KnownHoliday
    localities: tuple[Locality, ...]
    type: HolidayType
    mondayisation: bool = False
    description: str = ""
    date: Optional[Date] = None

    variant: ClassVar[HolidayVariant] = HolidayVariant.MOVEABLE

    def __post_init__(self) -> None:
        _normalize_common(self)
        # Local import: algorithms imports the models package
        from ..algorithms import has_algorithm

        known = KnownHoliday(self.known_holiday)
        object.__setattr__(self, "known_holiday", known)
        if not has_algorithm(known):
            raise ValueError(f"Unsupported moveable holiday: {known.name}")

    def with_date(self, new_date: Date) -> MoveableHoliday:
        return replace(self, date=new_date)


# =============================================================================
# Moveable From Base Holiday
# =============================================================================

@dataclass(frozen=True)
class MoveableFromBaseHoliday:
    """
    Holiday calculated as a day offset from another holiday.

    Examples: Good Friday (-2 from Easter), Easter Monday (+1 from Easter),
    Black Friday (+1 from Thanksgiving).

    Attributes:
        name: Holiday name
        known_holiday: Identity of the derived holiday (None for holidays
            outside the KnownHoliday catalogue, e.g. Carnival)
        base_holiday: Holiday the offset is applied to
        day_offset: Days after (positive) or before (negative) the base
        localities: Where the holiday is observed (non-empty)
        type: Holiday category
        mondayisation: Whether weekend dates shift to a weekday
        description: Free text
        date: Resolved date, set only on calculated values
    """
    name: str
    known_holiday: Optional[KnownHoliday]
    base_holiday: Holiday
    day_offset: int
    localities: tuple[Locality, ...]
    type: HolidayType
    mondayisation: bool = False
    description: str = ""
    date: Optional[Date] = None

    variant: ClassVar[HolidayVariant] = HolidayVariant.MOVEABLE_FROM_BASE

    def __post_init__(self) -> None:
        _normalize_common(self)
        if self.known_holiday is not None:
            object.__setattr__(self, "known_holiday", KnownHoliday(self.known_holiday))
        if not isinstance(self.base_holiday, HOLIDAY_TYPES):
            raise ValueError("Base holiday must be a holiday definition")
        if isinstance(self.day_offset, bool) or not isinstance(self.day_offset, int):
            raise ValueError(f"Day offset must be an integer, got {self.day_offset!r}")

    def with_date(self, new_date: Date) -> MoveableFromBaseHoliday:
        return replace(self, date=new_date)

    @property
    def occurs_before(self) -> bool:
        return self.day_offset < 0

    @property
    def occurs_after(self) -> bool:
        return self.day_offset > 0

    @property
    def occurs_same_day(self) -> bool:
        return self.day_offset == 0

    @property
    def relationship_description(self) -> str:
        """E.g. "2 days before Easter Sunday"."""
        base = self.base_holiday.name
        offset = self.day_offset
        if offset == 0:
            return f"same day as {base}"
        unit = "day" if abs(offset) == 1 else "days"
        direction = "after" if offset > 0 else "before"
        return f"{abs(offset)} {unit} {direction} {base}"

    @property
    def root_base_holiday(self) -> Holiday:
        """Follow the base chain to the first non-derived holiday."""
        current: Holiday = self.base_holiday
        while isinstance(current, MoveableFromBaseHoliday):
            current = current.base_holiday
        return current

    @property
    def derivation_depth(self) -> int:
        """1 for a direct derivation, 2+ for nested ones."""
        depth = 1
        current = self.base_holiday
        while isinstance(current, MoveableFromBaseHoliday):
            depth += 1
            current = current.base_holiday
        return depth

    @property
    def is_ultimately_lunar_based(self) -> bool:
        root = self.root_base_holiday
        return isinstance(root, MoveableHoliday) and root.known_holiday == KnownHoliday.EASTER

    @property
    def calculation_category(self) -> str:
        root = self.root_base_holiday
        if isinstance(root, MoveableHoliday):
            from ..algorithms import calculation_category

            return f"Derived from {calculation_category(root.known_holiday)}"
        return "Derived from Fixed"


Holiday = Union[FixedHoliday, ObservedHoliday, MoveableHoliday, MoveableFromBaseHoliday]

HOLIDAY_TYPES: tuple[type, ...] = (
    FixedHoliday,
    ObservedHoliday,
    MoveableHoliday,
    MoveableFromBaseHoliday,
)


# =============================================================================
# Shared Helpers
# =============================================================================

def is_holiday(value: object) -> bool:
    """Check whether a value is one of the holiday variants."""
    return isinstance(value, HOLIDAY_TYPES)


def display_name(holiday: Holiday) -> str:
    """E.g. "Christmas Day (religious)"."""
    return f"{holiday.name} ({holiday.type.value})"


def is_governmental(holiday: Holiday) -> bool:
    return holiday.type.is_governmental


def is_observed_in_country(holiday: Holiday, country_code: Optional[str]) -> bool:
    """Check whether any of the holiday's localities lies in the country."""
    if not country_code or not country_code.strip():
        return False
    code = country_code.strip().upper()
    return any(country_of(loc).code == code for loc in holiday.localities)


def holiday_applies_to(holiday: Holiday, target: Optional[Locality]) -> bool:
    """Hierarchical match: any holiday locality contains the target."""
    if target is None:
        return False
    return any(contains(loc, target) for loc in holiday.localities)


def summary(holiday: Holiday) -> str:
    """E.g. "Carnival - state holiday in São Paulo, Brazil"."""
    if len(holiday.localities) == 1:
        locality_info = format_locality(holiday.localities[0])
    else:
        locality_info = f"{len(holiday.localities)} localities"
    return f"{holiday.name} - {holiday.type.value} holiday in {locality_info}"


__all__ = [
    "FixedHoliday",
    "HOLIDAY_TYPES",
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
