"""
holidaycore Exception Hierarchy

Domain-specific exceptions for holiday date calculation.
All exceptions include error codes for tracking and logging.

Two kinds of failure are kept apart:
- CalendarError: the definition cannot be resolved for the requested year
  (Feb 29 in a non-leap year, Easter before 1583). Expected and recoverable.
- PreconditionError: the caller passed something that is not a valid input
  (missing holiday, non-positive year). A programming bug.

Exception codes follow the pattern: HC_<CATEGORY>_<SPECIFIC>
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class HolidayCoreError(Exception):
    """
    Base exception for all holidaycore errors.

    Attributes:
        message: Human-readable error description
        code: Machine-readable error code (HC_*)
        details: Additional context about the error
        holiday_name: Name of the holiday being calculated, if any
        year: Target year of the calculation, if any
    """
    message: str
    code: str = "HC_INTERNAL_ERROR"
    details: dict[str, Any] = field(default_factory=dict)
    holiday_name: Optional[str] = None
    year: Optional[int] = None

    def __post_init__(self) -> None:
        super().__init__(self.message)

    def __str__(self) -> str:
        parts = [f"[{self.code}] {self.message}"]
        if self.holiday_name:
            parts.append(f"(holiday: {self.holiday_name})")
        if self.year is not None:
            parts.append(f"(year: {self.year})")
        return " ".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """Serialize exception for logging/API responses."""
        result: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        if self.holiday_name:
            result["holiday_name"] = self.holiday_name
        if self.year is not None:
            result["year"] = self.year
        return result


# =============================================================================
# Calendar (Domain) Errors
# =============================================================================

@dataclass
class CalendarError(HolidayCoreError):
    """A holiday definition cannot be resolved for the requested year."""
    code: str = "HC_CALENDAR_ERROR"


@dataclass
class InvalidCalendarDate(CalendarError):
    """The day/month/year combination does not exist (e.g. Feb 29, 2023)."""
    code: str = "HC_INVALID_CALENDAR_DATE"


@dataclass
class CalendarRangeError(CalendarError):
    """The year lies outside the algorithm's valid domain."""
    code: str = "HC_CALENDAR_RANGE"


# =============================================================================
# Precondition (Programmer) Errors
# =============================================================================

@dataclass
class PreconditionError(HolidayCoreError):
    """An engine entry point was called with invalid arguments."""
    code: str = "HC_PRECONDITION"


@dataclass
class InvalidYear(PreconditionError):
    """Year is not an integer in the representable range."""
    code: str = "HC_INVALID_YEAR"


@dataclass
class InvalidHolidayDefinition(PreconditionError):
    """Holiday argument is missing or not a holiday variant."""
    code: str = "HC_INVALID_HOLIDAY"


@dataclass
class UnsupportedKnownHoliday(PreconditionError):
    """No date algorithm is registered for the known holiday."""
    code: str = "HC_UNSUPPORTED_KNOWN_HOLIDAY"


@dataclass
class DerivationDepthExceeded(PreconditionError):
    """Base-holiday chain is deeper than the configured bound."""
    code: str = "HC_DERIVATION_DEPTH"


# =============================================================================
# Pack Errors
# =============================================================================

@dataclass
class PackError(HolidayCoreError):
    """Base class for holiday pack failures."""
    code: str = "HC_PACK_ERROR"


@dataclass
class PackLoadError(PackError):
    """Failed to read a holiday pack from file."""
    code: str = "HC_PACK_LOAD_ERROR"


@dataclass
class PackValidationError(PackError):
    """Holiday pack schema validation failed."""
    code: str = "HC_PACK_VALIDATION_ERROR"


@dataclass
class PackVersionMismatch(PackError):
    """Pack schema version is incompatible with this release."""
    code: str = "HC_PACK_VERSION_MISMATCH"


@dataclass
class UnknownBaseHolidayError(PackError):
    """A derived holiday references a base key that is not defined."""
    code: str = "HC_BASE_UNKNOWN"


@dataclass
class BaseHolidayCycleError(PackError):
    """Base-holiday references form a cycle."""
    code: str = "HC_BASE_CYCLE"
