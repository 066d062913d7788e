"""
holidaycore Holiday Pack Loader

Loads and validates holiday packs from YAML or JSON files.

Converts Pydantic schema models to holidaycore domain models. Derived
entries are resolved through a HolidayRegistry so each base holiday is
embedded in the holidays derived from it.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import ValidationError

from ..canon import content_hash
from ..config import get_settings
from ..engine.operations import mondayise
from ..exceptions import (
    PackLoadError,
    PackValidationError,
    PackVersionMismatch,
)
from ..models import (
    City,
    Country,
    FixedHoliday,
    Holiday,
    HolidayType,
    KnownHoliday,
    Locality,
    MoveableFromBaseHoliday,
    MoveableHoliday,
    ObservedHoliday,
    Subdivision,
)
from .registry import HolidayRegistry
from .schema import (
    SCHEMA_VERSION,
    FixedHolidaySchema,
    HolidayPackSchema,
    LocalitySchema,
    MoveableFromBaseHolidaySchema,
    MoveableHolidaySchema,
    ObservedHolidaySchema,
    check_schema_version,
    validate_holiday_pack,
)

logger = logging.getLogger("holidaycore.packs")

DATA_DIR = Path(__file__).parent / "data"

PACK_SUFFIXES = (".yaml", ".yml", ".json")


# =============================================================================
# Loaded Pack
# =============================================================================

@dataclass(frozen=True)
class HolidayPack:
    """
    A validated holiday pack.

    Attributes:
        id: Pack identifier
        name: Display name
        schema_version: Version the pack was written against
        localities: Locality values by key
        holidays: Holiday definitions by key, in file order
        reference_year: Year observed entries were materialised for
        description: Free text
    """
    id: str
    name: str
    schema_version: str
    localities: dict[str, Locality]
    holidays: dict[str, Holiday]
    reference_year: int
    description: str = ""
    source: Optional[str] = field(default=None, compare=False)

    @property
    def definitions(self) -> tuple[Holiday, ...]:
        return tuple(self.holidays.values())

    def get(self, key: str) -> Optional[Holiday]:
        return self.holidays.get(key)

    def locality(self, key: str) -> Locality:
        """
        Look up a locality by key.

        Raises:
            KeyError: If the pack declares no such locality
        """
        return self.localities[key]

    @property
    def pack_hash(self) -> str:
        """Content hash of the pack's definitions."""
        return content_hash({
            "id": self.id,
            "schema_version": self.schema_version,
            "holidays": self.holidays,
        })


# =============================================================================
# Reference Integrity Validation
# =============================================================================

def validate_reference_integrity(schema: HolidayPackSchema) -> None:
    """
    Validate that locality and base references are consistent.

    Catches:
    - Locality parents that are missing or at the wrong level
    - Holiday locality keys that are not declared
    - Duplicate holiday keys
    - Entries left with no localities
    - Catalogued derived holidays whose base is a different holiday

    Raises:
        ValueError: If reference integrity errors are found
    """
    errors = []
    parent_kind = {"subdivision": "country", "city": "subdivision"}

    for key, loc in schema.localities.items():
        if loc.parent is None:
            continue
        parent = schema.localities.get(loc.parent)
        if parent is None:
            errors.append(f"Locality '{key}' references unknown parent '{loc.parent}'")
        elif parent.kind != parent_kind[loc.kind]:
            errors.append(
                f"Locality '{key}' ({loc.kind}) must have a {parent_kind[loc.kind]} parent, "
                f"got '{loc.parent}' ({parent.kind})"
            )

    for key in schema.default_localities:
        if key not in schema.localities:
            errors.append(f"default_localities references unknown locality '{key}'")

    seen: set[str] = set()
    for entry in schema.holidays:
        if entry.key in seen:
            errors.append(f"Duplicate holiday key: '{entry.key}'")
        seen.add(entry.key)

        keys = entry.localities if entry.localities is not None else schema.default_localities
        if not keys:
            errors.append(f"Holiday '{entry.key}' has no localities")
        for loc_key in keys:
            if loc_key not in schema.localities:
                errors.append(f"Holiday '{entry.key}' references unknown locality '{loc_key}'")

        if entry.name is None and getattr(entry, "known_holiday", None) is None:
            errors.append(f"Holiday '{entry.key}' needs a 'name' or a 'known_holiday'")

    entries = {entry.key: entry for entry in schema.holidays}
    for entry in schema.holidays:
        if not isinstance(entry, MoveableFromBaseHolidaySchema) or entry.known_holiday is None:
            continue
        known = KnownHoliday(entry.known_holiday)
        base = entries.get(entry.base)
        # Unknown base keys are reported by the registry
        if not known.is_derived or base is None:
            continue
        base_known = getattr(base, "known_holiday", None)
        if base_known != known.base_holiday.value:
            errors.append(
                f"Holiday '{entry.key}' ({known.value}) needs base holiday "
                f"'{known.base_holiday.value}', got '{entry.base}' ({base_known or 'no known_holiday'})"
            )

    if errors:
        raise ValueError(
            "Reference integrity errors:\n" + "\n".join(f"  - {e}" for e in errors)
        )


# =============================================================================
# Schema to Model Converters
# =============================================================================

def _convert_localities(localities: dict[str, LocalitySchema]) -> dict[str, Locality]:
    """Build locality values, parents first."""
    built: dict[str, Locality] = {}
    for kind in ("country", "subdivision", "city"):
        for key, loc in localities.items():
            if loc.kind != kind:
                continue
            if kind == "country":
                built[key] = Country(loc.code or "", loc.name)
            elif kind == "subdivision":
                country = built[loc.parent]  # type: ignore[index]
                built[key] = Subdivision(country, loc.code or "", loc.name)  # type: ignore[arg-type]
            else:
                sub = built[loc.parent]  # type: ignore[index]
                built[key] = City(loc.name, sub, sub.country)  # type: ignore[arg-type,union-attr]
    # Keep declaration order
    return {key: built[key] for key in localities}


def _entry_name(entry: Any) -> str:
    if entry.name:
        return entry.name
    return KnownHoliday(entry.known_holiday).display_name


def _convert_holiday(
    entry: Any,
    base: Optional[Holiday],
    localities: tuple[Locality, ...],
    holiday_type: HolidayType,
    reference_year: int,
) -> Holiday:
    """Convert one holiday entry schema to a Holiday model."""
    name = _entry_name(entry)

    if isinstance(entry, FixedHolidaySchema):
        return FixedHoliday(
            name=name,
            day=entry.day,
            month=entry.month,
            localities=localities,
            type=holiday_type,
            description=entry.description,
        )

    if isinstance(entry, ObservedHolidaySchema):
        try:
            nominal = date(reference_year, entry.month, entry.day)
        except ValueError as e:
            raise ValueError(
                f"Observed holiday '{entry.key}' does not exist in reference year "
                f"{reference_year}: {e}"
            ) from e
        return ObservedHoliday(
            name=name,
            nominal_date=nominal,
            observed_date=mondayise(nominal, entry.mondayisation),
            localities=localities,
            type=holiday_type,
            mondayisation=entry.mondayisation,
            description=entry.description,
        )

    if isinstance(entry, MoveableHolidaySchema):
        return MoveableHoliday(
            name=name,
            known_holiday=KnownHoliday(entry.known_holiday),
            localities=localities,
            type=holiday_type,
            mondayisation=entry.mondayisation,
            description=entry.description,
        )

    if isinstance(entry, MoveableFromBaseHolidaySchema):
        return MoveableFromBaseHoliday(
            name=name,
            known_holiday=KnownHoliday(entry.known_holiday) if entry.known_holiday else None,
            base_holiday=base,  # type: ignore[arg-type]
            day_offset=entry.day_offset,
            localities=localities,
            type=holiday_type,
            mondayisation=entry.mondayisation,
            description=entry.description,
        )

    raise ValueError(f"Unknown holiday entry: {type(entry).__name__}")


def _convert_holiday_pack(
    schema: HolidayPackSchema,
    reference_year: int,
    source: Optional[str] = None,
) -> HolidayPack:
    """Convert HolidayPackSchema to HolidayPack model."""
    localities = _convert_localities(schema.localities)
    entries = {entry.key: entry for entry in schema.holidays}

    registry = HolidayRegistry()
    for entry in schema.holidays:
        registry.declare(entry.key, getattr(entry, "base", None))

    def build(key: str, base: Optional[Holiday]) -> Holiday:
        entry = entries[key]
        keys = entry.localities if entry.localities is not None else schema.default_localities
        holiday_type = HolidayType(entry.type or schema.default_type)
        try:
            return _convert_holiday(
                entry,
                base,
                tuple(localities[k] for k in keys),
                holiday_type,
                reference_year,
            )
        except ValueError as e:
            raise PackValidationError(
                message=f"Invalid holiday '{key}': {e}",
                details={"key": key, "source": source},
                holiday_name=entry.name,
            ) from e

    holidays = registry.build(build)

    max_depth = get_settings().max_derivation_depth
    for key, holiday in holidays.items():
        if isinstance(holiday, MoveableFromBaseHoliday) and holiday.derivation_depth > max_depth:
            raise PackValidationError(
                message=(
                    f"Holiday '{key}' has a base chain {holiday.derivation_depth} levels deep "
                    f"(max {max_depth})"
                ),
                details={"key": key, "source": source},
                holiday_name=holiday.name,
            )

    return HolidayPack(
        id=schema.id,
        name=schema.name,
        schema_version=schema.schema_version,
        localities=localities,
        holidays=holidays,
        reference_year=reference_year,
        description=schema.description,
        source=source,
    )


# =============================================================================
# Holiday Pack Loader
# =============================================================================

class PackLoader:
    """
    Loads holiday packs from YAML or JSON files.

    Usage:
        loader = PackLoader()
        pack = loader.load("path/to/pack.yaml")
        pack = loader.load("us_federal")  # bundled pack by name
    """

    def __init__(self, strict_version: bool = True, reference_year: Optional[int] = None):
        """
        Initialize the loader.

        Args:
            strict_version: If True, reject packs with incompatible schema versions
            reference_year: Year to materialise observed entries for
                (defaults to settings.reference_year)
        """
        self.strict_version = strict_version
        self.reference_year = reference_year or get_settings().reference_year

        # Cache for loaded packs
        self._packs: dict[str, HolidayPack] = {}

    def load(self, path: Union[str, Path]) -> HolidayPack:
        """
        Load a holiday pack from a file or a bundled pack name.

        Args:
            path: Path to YAML or JSON file, or the name of a bundled pack

        Returns:
            Loaded HolidayPack

        Raises:
            PackLoadError: If file cannot be found or read
            PackValidationError: If validation fails
            PackVersionMismatch: If schema version incompatible
            UnknownBaseHolidayError: A derived entry names a missing base
            BaseHolidayCycleError: Base references form a cycle
        """
        path = resolve_pack_path(path)

        # Load raw data
        try:
            data = self._load_file(path)
        except (OSError, yaml.YAMLError, json.JSONDecodeError, UnicodeDecodeError) as e:
            raise PackLoadError(
                message=f"Failed to load holiday pack: {e}",
                details={"path": str(path), "error": str(e)},
            ) from e

        pack = self.load_data(data, source=str(path))
        logger.info(
            "Loaded pack %s from %s (%d holidays)",
            pack.id,
            path,
            len(pack.holidays),
            extra={"pack_id": pack.id},
        )
        return pack

    def load_data(self, data: Any, source: Optional[str] = None) -> HolidayPack:
        """Validate and convert already-parsed pack data."""
        if not isinstance(data, dict):
            raise PackLoadError(
                message="Holiday pack must be a mapping at the top level",
                details={"source": source, "type": type(data).__name__},
            )

        # Check schema version
        if self.strict_version and not check_schema_version(data):
            pack_version = data.get("schema_version", "unknown")
            raise PackVersionMismatch(
                message=f"Schema version mismatch: pack has {pack_version}, expected {SCHEMA_VERSION}",
                details={
                    "pack_version": pack_version,
                    "expected_version": SCHEMA_VERSION,
                },
            )

        # Validate against schema
        try:
            schema = validate_holiday_pack(data)
        except ValidationError as e:
            raise PackValidationError(
                message=f"Holiday pack validation failed: {e.error_count()} errors",
                details={
                    "errors": e.errors(
                        include_url=False, include_context=False, include_input=False
                    ),
                    "source": source,
                },
            ) from e

        # Validate reference integrity
        try:
            validate_reference_integrity(schema)
        except ValueError as e:
            raise PackValidationError(
                message="Reference integrity validation failed",
                details={"errors": str(e), "source": source},
            ) from e

        try:
            pack = _convert_holiday_pack(schema, self.reference_year, source)
        except ValueError as e:
            raise PackValidationError(
                message=f"Invalid locality: {e}",
                details={"source": source},
            ) from e

        # Cache pack
        self._packs[pack.id] = pack
        return pack

    def _load_file(self, path: Path) -> Any:
        """Load data from YAML or JSON file."""
        with open(path, "r", encoding="utf-8") as f:
            if path.suffix.lower() == ".json":
                return json.load(f)
            return yaml.safe_load(f)

    def get_pack(self, pack_id: str) -> Optional[HolidayPack]:
        """Get a cached pack by ID."""
        return self._packs.get(pack_id)

    def list_packs(self) -> list[str]:
        """List IDs of all loaded packs."""
        return list(self._packs.keys())


# =============================================================================
# Pack Discovery
# =============================================================================

def _pack_dirs() -> list[Path]:
    dirs = [DATA_DIR]
    packs_dir = get_settings().packs_dir
    if packs_dir is not None:
        dirs.insert(0, packs_dir)
    return dirs


def bundled_packs() -> dict[str, Path]:
    """Pack files available by name, from settings.packs_dir and the bundled data."""
    found: dict[str, Path] = {}
    for directory in reversed(_pack_dirs()):
        if not directory.is_dir():
            continue
        for path in sorted(directory.iterdir()):
            if path.suffix.lower() in PACK_SUFFIXES:
                found[path.stem] = path
    return dict(sorted(found.items()))


def resolve_pack_path(path: Union[str, Path]) -> Path:
    """
    Resolve a pack argument to a file.

    Existing paths are used as-is; anything else is looked up by name
    among the available packs.

    Raises:
        PackLoadError: If no file matches
    """
    candidate = Path(path)
    if candidate.is_file():
        return candidate
    available = bundled_packs()
    if str(path) in available:
        return available[str(path)]
    raise PackLoadError(
        message=f"Holiday pack not found: {path}",
        details={"path": str(path), "available": sorted(available)},
    )


# =============================================================================
# Convenience Functions
# =============================================================================

def load_pack(path: Union[str, Path], reference_year: Optional[int] = None) -> HolidayPack:
    """
    Load a holiday pack from a file or bundled pack name.

    Convenience function that creates a temporary loader.
    """
    return PackLoader(reference_year=reference_year).load(path)


def load_pack_from_string(
    content: str,
    format: str = "yaml",
    reference_year: Optional[int] = None,
) -> HolidayPack:
    """
    Load a holiday pack from a string.

    Args:
        content: YAML or JSON string
        format: "yaml" or "json"
        reference_year: Year to materialise observed entries for

    Returns:
        Loaded HolidayPack
    """
    try:
        if format.lower() == "json":
            data = json.loads(content)
        else:
            data = yaml.safe_load(content)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise PackLoadError(
            message=f"Failed to parse holiday pack: {e}",
            details={"format": format},
        ) from e
    return PackLoader(reference_year=reference_year).load_data(data, source="<string>")
