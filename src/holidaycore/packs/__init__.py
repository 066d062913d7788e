"""
holidaycore Holiday Packs

Schema validation and loading for holiday packs.

Holiday packs are YAML or JSON files that declare localities and the
holidays observed in them. Derived holidays (Good Friday, Carnival)
reference their base holiday by key.

Usage:
    from holidaycore.packs import load_pack, PackLoader

    # Load a bundled pack by name
    pack = load_pack("us_federal")

    # Load from a file, materialising observed entries for 2028
    pack = load_pack("path/to/pack.yaml", reference_year=2028)

    # Use a loader for multiple packs
    loader = PackLoader()
    brazil = loader.load("brazil")
    loader.get_pack("brazil")
"""
from __future__ import annotations

from .loader import (
    DATA_DIR,
    HolidayPack,
    PackLoader,
    bundled_packs,
    load_pack,
    load_pack_from_string,
    resolve_pack_path,
    validate_reference_integrity,
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

__all__ = [
    # Version
    "SCHEMA_VERSION",
    # Loader
    "DATA_DIR",
    "HolidayPack",
    "PackLoader",
    "bundled_packs",
    "load_pack",
    "load_pack_from_string",
    "resolve_pack_path",
    # Registry
    "HolidayRegistry",
    # Validation
    "check_schema_version",
    "validate_holiday_pack",
    "validate_reference_integrity",
    # Schemas (for advanced usage)
    "HolidayPackSchema",
    "LocalitySchema",
    "FixedHolidaySchema",
    "ObservedHolidaySchema",
    "MoveableHolidaySchema",
    "MoveableFromBaseHolidaySchema",
]
