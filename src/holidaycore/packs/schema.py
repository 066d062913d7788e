"""
holidaycore Holiday Pack Schemas

Pydantic models for validating holiday pack YAML/JSON files.

A pack declares its localities once, keyed by a short identifier, and a
list of holiday entries that reference those keys. Derived holidays
reference their base holiday by key as well; the loader resolves them.

Schema versioning:
- schema_version field tracks breaking changes
- Loaders check that the major version matches
"""
from __future__ import annotations

from typing import Annotated, Any, Literal, Optional, Union

from pydantic import AfterValidator, BaseModel, Field, model_validator

from ..models.enums import KnownHoliday


# =============================================================================
# Schema Version
# =============================================================================

SCHEMA_VERSION = "1.0.0"


# =============================================================================
# Enums as Literals (for YAML validation)
# =============================================================================

LocalityKindValue = Literal["country", "subdivision", "city"]

HolidayTypeValue = Literal["national", "state", "municipal", "religious", "commercial"]


def _known_holiday_value(v: str) -> str:
    try:
        return KnownHoliday(v).value
    except ValueError:
        raise ValueError(f"Unknown known_holiday: {v!r}") from None


KnownHolidayValue = Annotated[str, AfterValidator(_known_holiday_value)]


def _check_fixed_known_holiday(known_holiday: Optional[str], month: int, day: int) -> None:
    if known_holiday is None:
        return
    known = KnownHoliday(known_holiday)
    expected = known.fixed_month_day
    if expected is None:
        raise ValueError(f"{known.name} is not a fixed-date holiday")
    if expected != (month, day):
        raise ValueError(
            f"{known.name} falls on {expected[0]:02d}-{expected[1]:02d}, "
            f"got {month:02d}-{day:02d}"
        )


# =============================================================================
# Locality Schema
# =============================================================================

class LocalitySchema(BaseModel):
    """
    Schema for a locality entry.

    Countries carry an ISO code and no parent; subdivisions carry a code
    and a country parent; cities carry a subdivision parent.
    """
    kind: LocalityKindValue = Field(..., description="Hierarchy level")
    name: str = Field(..., min_length=1, description="Display name")
    code: Optional[str] = Field(None, description="ISO country code or subdivision code")
    parent: Optional[str] = Field(None, description="Key of the enclosing locality")

    @model_validator(mode="after")
    def validate_structure(self) -> "LocalitySchema":
        if self.kind == "country":
            if not self.code:
                raise ValueError("Country locality requires 'code'")
            if self.parent is not None:
                raise ValueError("Country locality cannot have a 'parent'")
        elif self.kind == "subdivision":
            if not self.code:
                raise ValueError("Subdivision locality requires 'code'")
            if not self.parent:
                raise ValueError("Subdivision locality requires a country 'parent'")
        else:
            if not self.parent:
                raise ValueError("City locality requires a subdivision 'parent'")
        return self

    model_config = {"extra": "forbid"}


# =============================================================================
# Holiday Schemas
# =============================================================================

class HolidayEntrySchema(BaseModel):
    """Fields shared by every holiday entry."""
    key: str = Field(..., min_length=1, description="Unique key within the pack")
    name: Optional[str] = Field(
        None, description="Display name (defaults to the known holiday's name)"
    )
    description: str = Field("", description="Free text")
    localities: Optional[list[str]] = Field(
        None, description="Locality keys (defaults to the pack's default_localities)"
    )
    type: Optional[HolidayTypeValue] = Field(
        None, description="Holiday category (defaults to the pack's default_type)"
    )

    model_config = {"extra": "forbid"}


class FixedHolidaySchema(HolidayEntrySchema):
    """Same day and month every year."""
    variant: Literal["fixed"]
    day: int = Field(..., ge=1, le=31)
    month: int = Field(..., ge=1, le=12)
    known_holiday: Optional[KnownHolidayValue] = Field(None, description="Catalogue identity")

    @model_validator(mode="after")
    def validate_known_date(self) -> "FixedHolidaySchema":
        _check_fixed_known_holiday(self.known_holiday, self.month, self.day)
        return self


class ObservedHolidaySchema(HolidayEntrySchema):
    """Fixed day/month with a mondayised observed date."""
    variant: Literal["observed"]
    day: int = Field(..., ge=1, le=31)
    month: int = Field(..., ge=1, le=12)
    mondayisation: bool = Field(True, description="Shift weekend dates to a weekday")
    known_holiday: Optional[KnownHolidayValue] = Field(None, description="Catalogue identity")

    @model_validator(mode="after")
    def validate_known_date(self) -> "ObservedHolidaySchema":
        _check_fixed_known_holiday(self.known_holiday, self.month, self.day)
        return self


class MoveableHolidaySchema(HolidayEntrySchema):
    """Date produced by a named algorithm."""
    variant: Literal["moveable"]
    known_holiday: KnownHolidayValue = Field(..., description="Algorithm selector (e.g. 'easter')")
    mondayisation: bool = Field(False)


class MoveableFromBaseHolidaySchema(HolidayEntrySchema):
    """Day offset from another holiday in the same pack."""
    variant: Literal["moveable_from_base"]
    base: str = Field(..., min_length=1, description="Key of the base holiday")
    day_offset: int = Field(..., description="Days after (+) or before (-) the base")
    known_holiday: Optional[KnownHolidayValue] = Field(None, description="Catalogue identity")
    mondayisation: bool = Field(False)

    @model_validator(mode="after")
    def validate_offset(self) -> "MoveableFromBaseHolidaySchema":
        if self.known_holiday is not None:
            known = KnownHoliday(self.known_holiday)
            if known.is_derived and known.day_offset != self.day_offset:
                raise ValueError(
                    f"{known.name} is {known.day_offset} days from its base, "
                    f"got day_offset {self.day_offset}"
                )
        return self


HolidaySchema = Annotated[
    Union[
        FixedHolidaySchema,
        ObservedHolidaySchema,
        MoveableHolidaySchema,
        MoveableFromBaseHolidaySchema,
    ],
    Field(discriminator="variant"),
]


# =============================================================================
# Holiday Pack Schema
# =============================================================================

class HolidayPackSchema(BaseModel):
    """Root schema of a holiday pack file."""
    schema_version: str = Field(SCHEMA_VERSION, description="Pack schema version")
    id: str = Field(..., min_length=1, description="Pack identifier")
    name: str = Field(..., min_length=1, description="Pack display name")
    description: str = Field("", description="Free text")
    default_type: HolidayTypeValue = Field(
        "national", description="Type for entries that do not set one"
    )
    default_localities: list[str] = Field(
        default_factory=list,
        description="Locality keys for entries that do not set any",
    )
    localities: dict[str, LocalitySchema] = Field(
        ..., min_length=1, description="Locality declarations by key"
    )
    holidays: list[HolidaySchema] = Field(..., min_length=1, description="Holiday entries")

    model_config = {"extra": "forbid"}


# =============================================================================
# Validation Helpers
# =============================================================================

def validate_holiday_pack(data: dict[str, Any]) -> HolidayPackSchema:
    """
    Validate a holiday pack dictionary against the schema.

    Raises:
        pydantic.ValidationError: If validation fails
    """
    return HolidayPackSchema.model_validate(data)


def check_schema_version(data: dict[str, Any]) -> bool:
    """Check that the pack's major schema version matches ours."""
    pack_version = str(data.get("schema_version", SCHEMA_VERSION))
    return pack_version.split(".")[0] == SCHEMA_VERSION.split(".")[0]
