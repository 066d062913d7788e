"""
Tests for settings and logging setup
"""
import json
import logging
from pathlib import Path

import pytest

from holidaycore.config import Settings, get_settings, reset_settings
from holidaycore.logging_config import JSONFormatter, configure_logging


@pytest.fixture
def restore_logger():
    logger = logging.getLogger("holidaycore")
    level = logger.level
    handlers = list(logger.handlers)
    yield logger
    logger.setLevel(level)
    logger.handlers[:] = handlers


# =============================================================================
# Settings
# =============================================================================

class TestSettings:
    """Tests for Settings."""

    def test_defaults(self):
        settings = Settings()
        assert settings.log_level == "WARNING"
        assert settings.log_format == "text"
        assert settings.max_derivation_depth == 8
        assert settings.reference_year == 2024
        assert settings.packs_dir is None

    @pytest.mark.parametrize("kwargs", [
        {"log_level": "VERBOSE"},
        {"log_level": "debug"},
        {"log_format": "xml"},
        {"max_derivation_depth": 0},
        {"reference_year": 0},
        {"reference_year": 10000},
    ])
    def test_invalid(self, kwargs):
        with pytest.raises(ValueError):
            Settings(**kwargs)

    def test_from_env(self, monkeypatch, tmp_path):
        monkeypatch.setenv("HOLIDAYCORE_LOG_LEVEL", "debug")
        monkeypatch.setenv("HOLIDAYCORE_LOG_FORMAT", "JSON")
        monkeypatch.setenv("HOLIDAYCORE_MAX_DERIVATION_DEPTH", "3")
        monkeypatch.setenv("HOLIDAYCORE_REFERENCE_YEAR", "2028")
        monkeypatch.setenv("HOLIDAYCORE_PACKS_DIR", str(tmp_path))
        settings = Settings.from_env()
        assert settings.log_level == "DEBUG"
        assert settings.log_format == "json"
        assert settings.max_derivation_depth == 3
        assert settings.reference_year == 2028
        assert settings.packs_dir == Path(tmp_path)

    def test_cached(self, monkeypatch):
        first = get_settings()
        assert get_settings() is first
        monkeypatch.setenv("HOLIDAYCORE_REFERENCE_YEAR", "2030")
        assert get_settings().reference_year == 2024
        reset_settings()
        assert get_settings().reference_year == 2030

    def test_unknown_level_from_env(self, monkeypatch):
        monkeypatch.setenv("HOLIDAYCORE_LOG_LEVEL", "verbose")
        with pytest.raises(ValueError, match="Log level"):
            Settings.from_env()


# =============================================================================
# Logging
# =============================================================================

class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_defaults_from_settings(self, restore_logger):
        logger = configure_logging()
        assert logger.name == "holidaycore"
        assert logger.level == logging.WARNING

    def test_json_handler(self, restore_logger):
        logger = configure_logging("debug", "json")
        assert logger.level == logging.DEBUG
        ours = [h for h in logger.handlers if getattr(h, "_holidaycore_handler", False)]
        assert len(ours) == 1
        assert isinstance(ours[0].formatter, JSONFormatter)

    @pytest.mark.parametrize("level,fmt", [("verbose", "text"), ("info", "xml")])
    def test_rejects_unknown_values(self, restore_logger, level, fmt):
        with pytest.raises(ValueError):
            configure_logging(level, fmt)

    def test_reconfigure_replaces_handler(self, restore_logger):
        configure_logging("info", "text")
        logger = configure_logging("warning", "json")
        ours = [h for h in logger.handlers if getattr(h, "_holidaycore_handler", False)]
        assert len(ours) == 1
        assert logger.level == logging.WARNING


class TestJSONFormatter:
    """Tests for JSONFormatter."""

    def make_record(self, **extra):
        record = logging.LogRecord(
            "holidaycore.engine", logging.DEBUG, __file__, 1, "Calculated %s", ("Easter",), None
        )
        for key, value in extra.items():
            setattr(record, key, value)
        return record

    def test_basic_fields(self):
        entry = json.loads(JSONFormatter().format(self.make_record()))
        assert entry["level"] == "DEBUG"
        assert entry["logger"] == "holidaycore.engine"
        assert entry["message"] == "Calculated Easter"
        assert "timestamp" in entry
        assert "holiday" not in entry

    def test_extra_fields(self):
        record = self.make_record(holiday="Páscoa", year=2024, pack_id="brazil")
        entry = json.loads(JSONFormatter().format(record))
        assert entry["holiday"] == "Páscoa"
        assert entry["year"] == 2024
        assert entry["pack_id"] == "brazil"
