"""
holidaycore Configuration

Settings are read from HOLIDAYCORE_* environment variables once and cached.

Environment variables:
    HOLIDAYCORE_LOG_LEVEL: Logger level for the holidaycore namespace (default WARNING)
    HOLIDAYCORE_LOG_FORMAT: "text" or "json" (default text)
    HOLIDAYCORE_MAX_DERIVATION_DEPTH: Longest allowed base-holiday chain (default 8)
    HOLIDAYCORE_REFERENCE_YEAR: Year used to materialise observed pack entries (default 2024)
    HOLIDAYCORE_PACKS_DIR: Extra directory searched for holiday packs
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

LOG_FORMATS = ("text", "json")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Settings:
    """Runtime settings for the library and CLI."""
    log_level: str = "WARNING"
    log_format: str = "text"
    max_derivation_depth: int = 8
    # Leap year, so Feb 29 observed entries load
    reference_year: int = 2024
    packs_dir: Optional[Path] = None

    def __post_init__(self) -> None:
        if self.log_level not in LOG_LEVELS:
            raise ValueError(f"Log level must be one of {LOG_LEVELS}, got {self.log_level!r}")
        if self.log_format not in LOG_FORMATS:
            raise ValueError(f"Log format must be one of {LOG_FORMATS}, got {self.log_format!r}")
        if self.max_derivation_depth < 1:
            raise ValueError(
                f"Max derivation depth must be positive, got {self.max_derivation_depth}"
            )
        if not 1 <= self.reference_year <= 9999:
            raise ValueError(f"Reference year out of range: {self.reference_year}")

    @classmethod
    def from_env(cls) -> Settings:
        packs_dir = os.getenv("HOLIDAYCORE_PACKS_DIR")
        return cls(
            log_level=os.getenv("HOLIDAYCORE_LOG_LEVEL", "WARNING").upper(),
            log_format=os.getenv("HOLIDAYCORE_LOG_FORMAT", "text").lower(),
            max_derivation_depth=int(os.getenv("HOLIDAYCORE_MAX_DERIVATION_DEPTH", "8")),
            reference_year=int(os.getenv("HOLIDAYCORE_REFERENCE_YEAR", "2024")),
            packs_dir=Path(packs_dir) if packs_dir else None,
        )


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the process-wide settings, reading the environment on first use."""
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings


def reset_settings() -> None:
    """Forget cached settings so the next call re-reads the environment."""
    global _settings
    _settings = None
