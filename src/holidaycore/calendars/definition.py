"""
Definition-Driven Calendar

Builds a business-day calendar from holiday definitions by running each
definition through the calculation engine for the requested year.

Holidays with mondayisation contribute both their nominal date and, when
it differs, their observed date (labelled "<name> (Observed)").
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import MAXYEAR, MINYEAR, date
from typing import Optional, Sequence

from ..engine.operations import applies_to, calculate_observed_date
from ..exceptions import CalendarError
from ..models.holiday import Holiday
from ..models.locality import Locality
from .base import BaseCalendar

logger = logging.getLogger("holidaycore.calendars")


@dataclass
class DefinitionCalendar(BaseCalendar):
    """
    Calendar computed from holiday definitions.

    Attributes:
        definitions: Holiday definitions to evaluate
        locality: Only definitions applying to this locality are used
            (all definitions when None)
        use_observed: Include mondayised observed dates
    """

    definitions: Sequence[Holiday] = field(default_factory=tuple)
    locality: Optional[Locality] = None
    use_observed: bool = True

    # Engine results per calculation year, and the dates falling in each year
    _calc_cache: dict[int, list[tuple[date, str]]] = field(default_factory=dict, repr=False)
    _year_cache: dict[int, dict[date, str]] = field(default_factory=dict, repr=False)

    def __post_init__(self) -> None:
        self.definitions = tuple(self.definitions)

    @property
    def applicable_definitions(self) -> tuple[Holiday, ...]:
        if self.locality is None:
            return tuple(self.definitions)
        return tuple(h for h in self.definitions if applies_to(h, self.locality))

    def _calculate(self, year: int) -> list[tuple[date, str]]:
        """Run every applicable definition through the engine for a year."""
        if year in self._calc_cache:
            return self._calc_cache[year]
        found: list[tuple[date, str]] = []
        for holiday in self.applicable_definitions:
            try:
                result = calculate_observed_date(holiday, year)
            except CalendarError as e:
                logger.warning(
                    "Skipping %s for %d: %s",
                    holiday.name,
                    year,
                    e.message,
                    extra={"holiday": holiday.name, "year": year},
                )
                continue

            found.append((result.nominal_date, holiday.name))
            if self.use_observed and result.is_shifted:
                found.append((result.observed_date, f"{holiday.name} (Observed)"))
        self._calc_cache[year] = found
        return found

    def _get_year(self, year: int) -> dict[date, str]:
        """
        Holidays dated in a year, using cache.

        Observed shifts can cross a year boundary (Jan 1 on a Saturday is
        observed on Dec 31), so neighbouring years are consulted too. The
        first definition to claim a date names it.
        """
        if year not in self._year_cache:
            names: dict[date, str] = {}
            for calc_year in (year, year - 1, year + 1):
                if not MINYEAR <= calc_year <= MAXYEAR:
                    continue
                for d, name in self._calculate(calc_year):
                    if d.year == year:
                        names.setdefault(d, name)
            self._year_cache[year] = names
        return self._year_cache[year]

    def get_holiday_name(self, d: date) -> Optional[str]:
        return self._get_year(d.year).get(d)

    def holidays_for_year(self, year: int) -> list[tuple[date, str]]:
        """Sorted (date, name) pairs for a year."""
        return sorted(self._get_year(year).items())
