"""
holidaycore Calendars

Business-day calendars backed by holiday definitions.

Provides:
- HolidayCalendar protocol for custom implementations
- BaseCalendar with common business day logic
- DefinitionCalendar computing holidays with the engine
- calendar_from_pack for pack-driven calendars

Usage:
    from holidaycore.calendars import calendar_from_pack
    from holidaycore.packs import load_pack

    calendar = calendar_from_pack(load_pack("brazil"), locality="sp_city")
    calendar.is_business_day(date(2024, 1, 25))  # São Paulo anniversary
    deadline = calendar.add_business_days(date(2024, 12, 20), 5)
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Union

from ..models.locality import Locality
from .base import (
    BaseCalendar,
    FixedHolidayCalendar,
    HolidayCalendar,
    NoHolidayCalendar,
)
from .definition import DefinitionCalendar

if TYPE_CHECKING:
    from ..packs.loader import HolidayPack


def calendar_from_pack(
    pack: HolidayPack,
    locality: Union[Locality, str, None] = None,
    use_observed: bool = True,
) -> DefinitionCalendar:
    """
    Build a calendar from a loaded pack.

    Args:
        pack: Loaded holiday pack
        locality: Locality value or pack locality key to filter by
        use_observed: Include mondayised observed dates

    Raises:
        KeyError: If a locality key is not declared in the pack
    """
    if isinstance(locality, str):
        locality = pack.locality(locality)
    return DefinitionCalendar(pack.definitions, locality, use_observed)


__all__ = [
    # Protocols and base classes
    "HolidayCalendar",
    "BaseCalendar",
    "NoHolidayCalendar",
    "FixedHolidayCalendar",
    # Definition-driven
    "DefinitionCalendar",
    "calendar_from_pack",
]
