"""
Canonical Serialization

Deterministic JSON for holiday definitions, plus content hashing.

Canonical JSON follows RFC 8785 (JSON Canonicalization Scheme) principles:
- Sorted keys (lexicographic)
- No whitespace
- UTF-8 encoding

Holiday and Locality values round-trip through plain dicts carrying an
explicit variant tag:

    {"holidayVariant": "FixedHoliday", "name": "Christmas Day", "day": 25, ...}
    {"localityType": "Country", "code": "BR", "name": "Brazil"}

The round trip preserves variant identity and every field exactly, so the
dicts can be stored by any persistence layer and the hash of a definition
can serve as a cache key.
"""
from __future__ import annotations

import hashlib
import json
from datetime import date
from enum import Enum
from typing import Any, Callable, Optional

from .exceptions import InvalidHolidayDefinition
from .models.enums import HolidayType, KnownHoliday
from .models.holiday import (
    FixedHoliday,
    Holiday,
    MoveableFromBaseHoliday,
    MoveableHoliday,
    ObservedHoliday,
)
from .models.locality import City, Country, Locality, Subdivision

HOLIDAY_TAG = "holidayVariant"
LOCALITY_TAG = "localityType"


# =============================================================================
# Canonical JSON
# =============================================================================

def _default_serializer(obj: Any) -> Any:
    """
    Custom JSON serializer for non-standard types.

    Handles:
    - date: ISO 8601 format
    - Enum: value
    - Holiday / Locality values: tagged dict
    """
    if isinstance(obj, date):
        return obj.isoformat()
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, (Country, Subdivision, City)):
        return locality_to_dict(obj)
    if isinstance(obj, (FixedHoliday, ObservedHoliday, MoveableHoliday, MoveableFromBaseHoliday)):
        return holiday_to_dict(obj)
    if isinstance(obj, (set, frozenset)):
        # Sort for determinism
        return sorted(obj, key=str)
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def canonical_json(obj: Any) -> str:
    """
    Serialize object to canonical JSON string.

    Example:
        >>> canonical_json({"b": 1, "a": 2})
        '{"a":2,"b":1}'
    """
    return json.dumps(
        obj,
        sort_keys=True,
        separators=(",", ":"),
        default=_default_serializer,
        ensure_ascii=False,
    )


def content_hash(obj: Any) -> str:
    """Hex-encoded SHA-256 of the canonical JSON (64 characters)."""
    return hashlib.sha256(canonical_json(obj).encode("utf-8")).hexdigest()


def content_hash_short(obj: Any, length: int = 12) -> str:
    """Truncated content hash for display and log lines."""
    return content_hash(obj)[:length]


def definition_hash(holiday: Holiday) -> str:
    """
    Hash of a holiday definition, independent of any calculated date.

    Two definitions that resolve identically for every year hash the same
    whether or not one of them carries a computed `date`.
    """
    data = holiday_to_dict(holiday)
    _strip_calculated(data)
    return content_hash(data)


def _strip_calculated(data: dict[str, Any]) -> None:
    data.pop("date", None)
    base = data.get("base_holiday")
    if isinstance(base, dict):
        _strip_calculated(base)


# =============================================================================
# Locality Round Trip
# =============================================================================

def locality_to_dict(locality: Locality) -> dict[str, Any]:
    if isinstance(locality, Country):
        return {LOCALITY_TAG: "Country", "code": locality.code, "name": locality.name}
    if isinstance(locality, Subdivision):
        return {
            LOCALITY_TAG: "Subdivision",
            "country": locality_to_dict(locality.country),
            "code": locality.code,
            "name": locality.name,
        }
    if isinstance(locality, City):
        return {
            LOCALITY_TAG: "City",
            "name": locality.name,
            "subdivision": locality_to_dict(locality.subdivision),
            "country": locality_to_dict(locality.country),
        }
    raise InvalidHolidayDefinition(message=f"Not a locality: {type(locality).__name__}")


def locality_from_dict(data: dict[str, Any]) -> Locality:
    tag = _require(data, LOCALITY_TAG)
    try:
        if tag == "Country":
            return Country(data["code"], data["name"])
        if tag == "Subdivision":
            return Subdivision(
                _country_from_dict(data["country"]), data["code"], data["name"]
            )
        if tag == "City":
            subdivision = locality_from_dict(data["subdivision"])
            if not isinstance(subdivision, Subdivision):
                raise ValueError("City subdivision must be a Subdivision")
            return City(data["name"], subdivision, _country_from_dict(data["country"]))
    except (KeyError, TypeError, ValueError) as e:
        raise InvalidHolidayDefinition(
            message=f"Invalid {tag} locality: {e}",
            details={"data": data},
        ) from e
    raise InvalidHolidayDefinition(
        message=f"Unknown locality type: {tag!r}",
        details={"tag": tag},
    )


def _country_from_dict(data: dict[str, Any]) -> Country:
    country = locality_from_dict(data)
    if not isinstance(country, Country):
        raise ValueError("Expected a Country")
    return country


# =============================================================================
# Holiday Round Trip
# =============================================================================

def _iso(d: Optional[date]) -> Optional[str]:
    return d.isoformat() if d is not None else None


def _parse_date(value: Optional[str]) -> Optional[date]:
    return date.fromisoformat(value) if value is not None else None


def _common_to_dict(holiday: Holiday, tag: str) -> dict[str, Any]:
    return {
        HOLIDAY_TAG: tag,
        "name": holiday.name,
        "description": holiday.description,
        "localities": [locality_to_dict(loc) for loc in holiday.localities],
        "type": holiday.type.value,
    }


def holiday_to_dict(holiday: Holiday) -> dict[str, Any]:
    """
    Convert a holiday to a tagged, JSON-compatible dict.

    Raises:
        InvalidHolidayDefinition: If the value is not a holiday variant
    """
    if isinstance(holiday, FixedHoliday):
        data = _common_to_dict(holiday, "FixedHoliday")
        data.update(day=holiday.day, month=holiday.month, date=_iso(holiday.date))
        return data
    if isinstance(holiday, ObservedHoliday):
        data = _common_to_dict(holiday, "ObservedHoliday")
        data.update(
            nominal_date=_iso(holiday.nominal_date),
            observed_date=_iso(holiday.observed_date),
            mondayisation=holiday.mondayisation,
        )
        return data
    if isinstance(holiday, MoveableHoliday):
        data = _common_to_dict(holiday, "MoveableHoliday")
        data.update(
            known_holiday=holiday.known_holiday.value,
            mondayisation=holiday.mondayisation,
            date=_iso(holiday.date),
        )
        return data
    if isinstance(holiday, MoveableFromBaseHoliday):
        data = _common_to_dict(holiday, "MoveableFromBaseHoliday")
        data.update(
            known_holiday=holiday.known_holiday.value if holiday.known_holiday else None,
            base_holiday=holiday_to_dict(holiday.base_holiday),
            day_offset=holiday.day_offset,
            mondayisation=holiday.mondayisation,
            date=_iso(holiday.date),
        )
        return data
    raise InvalidHolidayDefinition(message=f"Not a holiday definition: {type(holiday).__name__}")


def _fixed_from_dict(data: dict[str, Any], common: dict[str, Any]) -> Holiday:
    return FixedHoliday(
        day=data["day"], month=data["month"], date=_parse_date(data.get("date")), **common
    )


def _observed_from_dict(data: dict[str, Any], common: dict[str, Any]) -> Holiday:
    return ObservedHoliday(
        nominal_date=_parse_date(data["nominal_date"]),
        observed_date=_parse_date(data["observed_date"]),
        mondayisation=data.get("mondayisation", False),
        **common,
    )


def _moveable_from_dict(data: dict[str, Any], common: dict[str, Any]) -> Holiday:
    return MoveableHoliday(
        known_holiday=KnownHoliday(data["known_holiday"]),
        mondayisation=data.get("mondayisation", False),
        date=_parse_date(data.get("date")),
        **common,
    )


def _derived_from_dict(data: dict[str, Any], common: dict[str, Any]) -> Holiday:
    known = data.get("known_holiday")
    return MoveableFromBaseHoliday(
        known_holiday=KnownHoliday(known) if known is not None else None,
        base_holiday=holiday_from_dict(data["base_holiday"]),
        day_offset=data["day_offset"],
        mondayisation=data.get("mondayisation", False),
        date=_parse_date(data.get("date")),
        **common,
    )


_HOLIDAY_READERS: dict[str, Callable[[dict[str, Any], dict[str, Any]], Holiday]] = {
    "FixedHoliday": _fixed_from_dict,
    "ObservedHoliday": _observed_from_dict,
    "MoveableHoliday": _moveable_from_dict,
    "MoveableFromBaseHoliday": _derived_from_dict,
}


def holiday_from_dict(data: dict[str, Any]) -> Holiday:
    """
    Rebuild a holiday from a dict produced by holiday_to_dict.

    Raises:
        InvalidHolidayDefinition: Unknown tag, missing fields or invalid values
    """
    tag = _require(data, HOLIDAY_TAG)
    reader = _HOLIDAY_READERS.get(tag)
    if reader is None:
        raise InvalidHolidayDefinition(
            message=f"Unknown holiday variant: {tag!r}",
            details={"tag": tag},
        )
    try:
        common = {
            "name": data["name"],
            "description": data.get("description", ""),
            "localities": tuple(locality_from_dict(loc) for loc in data["localities"]),
            "type": HolidayType(data["type"]),
        }
        return reader(data, common)
    except (KeyError, TypeError, ValueError) as e:
        raise InvalidHolidayDefinition(
            message=f"Invalid {tag}: {e}",
            details={"tag": tag},
            holiday_name=data.get("name"),
        ) from e


def _require(data: Any, tag_key: str) -> str:
    if not isinstance(data, dict) or tag_key not in data:
        raise InvalidHolidayDefinition(
            message=f"Missing {tag_key!r} tag",
            details={"expected_tag": tag_key},
        )
    return data[tag_key]
