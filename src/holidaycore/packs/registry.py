"""
Holiday Registry

Keyed holiday definitions whose derived entries name their base by key.

Keys are declared first with their base reference, then resolved in
dependency order so every base is built before the holidays derived
from it. Dangling references and reference cycles are rejected before
anything is built.
"""
from __future__ import annotations

from typing import Callable, Iterator, Optional

from ..exceptions import BaseHolidayCycleError, UnknownBaseHolidayError
from ..models.holiday import Holiday

# Called with the key and its already-built base (None for root holidays)
HolidayBuilder = Callable[[str, Optional[Holiday]], Holiday]


class HolidayRegistry:
    """
    Dependency-ordered holiday definitions.

    Usage:
        registry = HolidayRegistry()
        registry.declare("easter")
        registry.declare("good_friday", base="easter")
        registry.build(builder)
        registry.get("good_friday").base_holiday  # the built Easter
    """

    def __init__(self) -> None:
        # Declaration order is kept for iteration
        self._bases: dict[str, Optional[str]] = {}
        self._holidays: dict[str, Holiday] = {}

    def declare(self, key: str, base: Optional[str] = None) -> None:
        """
        Declare a key and the key of its base holiday, if any.

        Raises:
            ValueError: If the key is already declared
        """
        if key in self._bases:
            raise ValueError(f"Duplicate holiday key: '{key}'")
        self._bases[key] = base

    def __contains__(self, key: object) -> bool:
        return key in self._bases

    def __len__(self) -> int:
        return len(self._bases)

    def __iter__(self) -> Iterator[str]:
        return iter(self._bases)

    def resolution_order(self) -> list[str]:
        """
        Keys ordered so that each base precedes its derived holidays.

        Ties keep declaration order.

        Raises:
            UnknownBaseHolidayError: A base key was never declared
            BaseHolidayCycleError: Base references form a cycle
        """
        for key, base in self._bases.items():
            if base is not None and base not in self._bases:
                raise UnknownBaseHolidayError(
                    message=f"Holiday '{key}' references unknown base '{base}'",
                    details={"key": key, "base": base},
                )

        order: list[str] = []
        done: set[str] = set()
        for start in self._bases:
            if start in done:
                continue
            # Walk up the base chain until reaching a resolved key or a root
            chain: list[str] = []
            on_chain: set[str] = set()
            current: Optional[str] = start
            while current is not None and current not in done:
                if current in on_chain:
                    cycle = chain[chain.index(current):] + [current]
                    raise BaseHolidayCycleError(
                        message=f"Base holiday cycle: {' -> '.join(cycle)}",
                        details={"cycle": cycle},
                    )
                chain.append(current)
                on_chain.add(current)
                current = self._bases[current]
            for key in reversed(chain):
                order.append(key)
                done.add(key)
        return order

    def build(self, builder: HolidayBuilder) -> dict[str, Holiday]:
        """
        Build every declared holiday in resolution order.

        Returns:
            Built holidays keyed by key, in declaration order
        """
        for key in self.resolution_order():
            base_key = self._bases[key]
            base = self._holidays[base_key] if base_key is not None else None
            self._holidays[key] = builder(key, base)
        return {key: self._holidays[key] for key in self._bases}

    def get(self, key: str) -> Optional[Holiday]:
        """Get a built holiday by key."""
        return self._holidays.get(key)

    def base_of(self, key: str) -> Optional[str]:
        return self._bases.get(key)
