"""
holidaycore Engine

Stateless calculation of holiday dates.

Usage:
    from holidaycore.engine import (
        calculate_date,
        calculate_observed_date,
        mondayise,
    )

    good_friday = calculate_date(factory.good_friday(brazil()), 2024)
    observed = calculate_observed_date(christmas, 2022).observed_date
"""
from __future__ import annotations

from .operations import (
    applies_to,
    calculate_date,
    calculate_observed_date,
    format_holiday_info,
    get_date_only,
    get_observed_date_only,
    is_weekend,
    mondayise,
)

__all__ = [
    "applies_to",
    "calculate_date",
    "calculate_observed_date",
    "format_holiday_info",
    "get_date_only",
    "get_observed_date_only",
    "is_weekend",
    "mondayise",
]
