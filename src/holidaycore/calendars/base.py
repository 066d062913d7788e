"""
holidaycore Calendar Base

Business-day arithmetic over a pluggable holiday source.

A calendar answers two questions per date: is it a holiday, and if so what
is it called. Everything else (business days, ranges, stepping) is derived
from those answers plus the weekend definition.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Mapping, Optional, Protocol, runtime_checkable


@runtime_checkable
class HolidayCalendar(Protocol):
    """Anything that can tell holidays and business days apart."""

    def is_holiday(self, d: date) -> bool:
        ...

    def is_business_day(self, d: date) -> bool:
        ...

    def get_holiday_name(self, d: date) -> Optional[str]:
        ...


@dataclass
class BaseCalendar(ABC):
    """
    Abstract base class for holiday calendars.

    Subclasses implement `get_holiday_name()`; a date is a holiday when a
    name is returned for it.
    """

    # Weekend days (0=Monday, 6=Sunday)
    weekend_days: frozenset[int] = field(
        default_factory=lambda: frozenset({5, 6}), kw_only=True
    )

    @abstractmethod
    def get_holiday_name(self, d: date) -> Optional[str]:
        """Name of the holiday on a date, None if it is not a holiday."""
        ...

    def is_holiday(self, d: date) -> bool:
        return self.get_holiday_name(d) is not None

    def is_weekend(self, d: date) -> bool:
        return d.weekday() in self.weekend_days

    def is_business_day(self, d: date) -> bool:
        """A business day is a non-weekend date that is not a holiday."""
        return not self.is_weekend(d) and not self.is_holiday(d)

    def get_holidays_in_range(self, start: date, end: date) -> list[date]:
        """Holiday dates between start and end (both inclusive)."""
        result = []
        current = start
        while current <= end:
            if self.is_holiday(current):
                result.append(current)
            current += timedelta(days=1)
        return result

    def add_business_days(self, start: date, days: int) -> date:
        """
        Step a number of business days from a date.

        Args:
            start: Starting date (not counted)
            days: Business days to move; negative moves backwards

        Returns:
            The date reached after `days` business days
        """
        step = timedelta(days=1 if days >= 0 else -1)
        remaining = abs(days)
        current = start
        while remaining:
            current += step
            if self.is_business_day(current):
                remaining -= 1
        return current

    def subtract_business_days(self, start: date, days: int) -> date:
        return self.add_business_days(start, -days)

    def business_days_between(self, start: date, end: date) -> int:
        """
        Count business days in (start, end].

        Returns 0 when end is not after start.
        """
        count = 0
        current = start + timedelta(days=1)
        while current <= end:
            if self.is_business_day(current):
                count += 1
            current += timedelta(days=1)
        return count

    def next_business_day(self, d: date) -> date:
        """First business day on or after d."""
        while not self.is_business_day(d):
            d += timedelta(days=1)
        return d

    def previous_business_day(self, d: date) -> date:
        """Last business day on or before d."""
        while not self.is_business_day(d):
            d -= timedelta(days=1)
        return d


@dataclass
class NoHolidayCalendar(BaseCalendar):
    """Only weekends are non-business days."""

    def get_holiday_name(self, d: date) -> Optional[str]:
        return None


@dataclass
class FixedHolidayCalendar(BaseCalendar):
    """
    Calendar over an explicit set of dated holidays.

    Useful for testing or when holidays are provided externally.
    """

    holidays: Mapping[date, str] = field(default_factory=dict)

    def get_holiday_name(self, d: date) -> Optional[str]:
        return self.holidays.get(d)

    @classmethod
    def from_dates(cls, *dates: date, name: str = "Holiday") -> FixedHolidayCalendar:
        """Create a calendar where every given date carries the same name."""
        return cls(holidays={d: name for d in dates})
