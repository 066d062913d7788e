"""
holidaycore Locality Models

The geographic scope of a holiday as a closed three-level hierarchy:

- Country: national level (ISO 3166-1 alpha-2 code + name)
- Subdivision: state/province level, embeds its Country
- City: municipal level, embeds its Subdivision and that subdivision's Country

Containment is reflexive-transitive: a country contains its subdivisions and
cities, a subdivision contains its cities, a city contains only itself.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import ClassVar, Union

from .enums import LocalityKind


# =============================================================================
# Locality Variants
# =============================================================================

@dataclass(frozen=True)
class Country:
    """
    National-level locality.

    Attributes:
        code: ISO 3166-1 alpha-2 code (e.g., "BR", "US"), stored upper-case
        name: Full country name
    """
    code: str
    name: str

    kind: ClassVar[LocalityKind] = LocalityKind.COUNTRY

    def __post_init__(self) -> None:
        if not self.code or not self.code.strip():
            raise ValueError("Country code cannot be blank")
        if not self.name or not self.name.strip():
            raise ValueError("Country name cannot be blank")
        if len(self.code) != 2 or not self.code.isalpha():
            raise ValueError(
                f"Country code must be exactly 2 letters (ISO 3166-1 alpha-2), got {self.code!r}"
            )
        object.__setattr__(self, "code", self.code.upper())

    def with_code(self, code: str) -> Country:
        return replace(self, code=code)

    def with_name(self, name: str) -> Country:
        return replace(self, name=name)


@dataclass(frozen=True)
class Subdivision:
    """
    State/province-level locality.

    Attributes:
        country: Owning country
        code: Subdivision code (e.g., "SP", "CA")
        name: Full subdivision name
    """
    country: Country
    code: str
    name: str

    kind: ClassVar[LocalityKind] = LocalityKind.SUBDIVISION

    def __post_init__(self) -> None:
        if not isinstance(self.country, Country):
            raise ValueError("Subdivision must embed a Country")
        if not self.code or not self.code.strip():
            raise ValueError("Subdivision code cannot be blank")
        if not self.name or not self.name.strip():
            raise ValueError("Subdivision name cannot be blank")

    def with_country(self, country: Country) -> Subdivision:
        return replace(self, country=country)

    def with_code(self, code: str) -> Subdivision:
        return replace(self, code=code)

    def with_name(self, name: str) -> Subdivision:
        return replace(self, name=name)


@dataclass(frozen=True)
class City:
    """
    Municipal-level locality.

    The country is denormalized from the subdivision for fast containment
    checks and must match it.

    Attributes:
        name: City name
        subdivision: Owning subdivision
        country: Owning country (== subdivision.country)
    """
    name: str
    subdivision: Subdivision
    country: Country

    kind: ClassVar[LocalityKind] = LocalityKind.CITY

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValueError("City name cannot be blank")
        if not isinstance(self.subdivision, Subdivision):
            raise ValueError("City must embed a Subdivision")
        if self.subdivision.country != self.country:
            raise ValueError(
                "City's country must match subdivision's country. "
                f"City country: {self.country}, Subdivision country: {self.subdivision.country}"
            )

    def with_name(self, name: str) -> City:
        return replace(self, name=name)

    def with_subdivision(self, subdivision: Subdivision) -> City:
        """Replace the subdivision, keeping the country consistent."""
        return City(self.name, subdivision, subdivision.country)

    def with_country(self, country: Country) -> City:
        """Move the city (and its subdivision) to another country."""
        return City(self.name, self.subdivision.with_country(country), country)


Locality = Union[Country, Subdivision, City]

LOCALITY_TYPES: tuple[type, ...] = (Country, Subdivision, City)


# =============================================================================
# Operations
# =============================================================================

def country_of(locality: Locality) -> Country:
    """Return the country a locality belongs to (itself for a Country)."""
    if isinstance(locality, Country):
        return locality
    return locality.country


def contains(a: Locality, b: Locality) -> bool:
    """
    Check whether locality `a` contains locality `b`.

    Args:
        a: Enclosing locality candidate
        b: Locality to test

    Returns:
        True if b lies within a (or is a)
    """
    if country_of(a) != country_of(b):
        return False
    if isinstance(a, Country):
        return True
    if isinstance(a, Subdivision):
        if isinstance(b, Subdivision):
            return a == b
        if isinstance(b, City):
            return a == b.subdivision
        return False
    return a == b


def format_locality(locality: Locality) -> str:
    """Format a locality for display, broadest level last."""
    if isinstance(locality, Country):
        return locality.name
    if isinstance(locality, Subdivision):
        return f"{locality.name}, {locality.country.name}"
    return f"{locality.name}, {locality.subdivision.name}, {locality.country.name}"


# =============================================================================
# Convenience Constructors
# =============================================================================

def brazil() -> Country:
    return Country("BR", "Brazil")


def united_states() -> Country:
    return Country("US", "United States")


def canada() -> Country:
    return Country("CA", "Canada")


def sao_paulo_state() -> Subdivision:
    return Subdivision(brazil(), "SP", "São Paulo")


def california() -> Subdivision:
    return Subdivision(united_states(), "CA", "California")


def sao_paulo_city() -> City:
    return City("São Paulo", sao_paulo_state(), brazil())


def san_francisco() -> City:
    return City("San Francisco", california(), united_states())
