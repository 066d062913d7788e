"""
Tests for the holidaycore exception hierarchy
"""
import pytest

from holidaycore.exceptions import (
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


class TestHierarchy:
    """Tests for exception families and codes."""

    @pytest.mark.parametrize("cls,family,code", [
        (InvalidCalendarDate, CalendarError, "HC_INVALID_CALENDAR_DATE"),
        (CalendarRangeError, CalendarError, "HC_CALENDAR_RANGE"),
        (InvalidYear, PreconditionError, "HC_INVALID_YEAR"),
        (InvalidHolidayDefinition, PreconditionError, "HC_INVALID_HOLIDAY"),
        (UnsupportedKnownHoliday, PreconditionError, "HC_UNSUPPORTED_KNOWN_HOLIDAY"),
        (DerivationDepthExceeded, PreconditionError, "HC_DERIVATION_DEPTH"),
        (PackLoadError, PackError, "HC_PACK_LOAD_ERROR"),
        (PackValidationError, PackError, "HC_PACK_VALIDATION_ERROR"),
        (PackVersionMismatch, PackError, "HC_PACK_VERSION_MISMATCH"),
        (UnknownBaseHolidayError, PackError, "HC_BASE_UNKNOWN"),
        (BaseHolidayCycleError, PackError, "HC_BASE_CYCLE"),
    ])
    def test_family_and_code(self, cls, family, code):
        err = cls(message="boom")
        assert isinstance(err, family)
        assert isinstance(err, HolidayCoreError)
        assert err.code == code

    def test_calendar_and_precondition_disjoint(self):
        assert not issubclass(CalendarError, PreconditionError)
        assert not issubclass(PreconditionError, CalendarError)


class TestFormatting:
    """Tests for __str__ and to_dict."""

    def test_str_with_context(self):
        err = InvalidCalendarDate(message="No such date", holiday_name="Leap Day", year=2023)
        assert str(err) == "[HC_INVALID_CALENDAR_DATE] No such date (holiday: Leap Day) (year: 2023)"

    def test_str_minimal(self):
        assert str(PackLoadError(message="missing")) == "[HC_PACK_LOAD_ERROR] missing"

    def test_to_dict(self):
        err = CalendarRangeError(
            message="Too early",
            details={"min_year": 1583},
            holiday_name="Easter Sunday",
            year=1500,
        )
        assert err.to_dict() == {
            "code": "HC_CALENDAR_RANGE",
            "message": "Too early",
            "details": {"min_year": 1583},
            "holiday_name": "Easter Sunday",
            "year": 1500,
        }

    def test_to_dict_omits_empty(self):
        assert InvalidYear(message="bad").to_dict() == {
            "code": "HC_INVALID_YEAR",
            "message": "bad",
        }

    def test_raise_and_catch(self):
        with pytest.raises(CalendarError, match="Too early"):
            raise CalendarRangeError(message="Too early")
