"""
Tests for the holidaycore command-line interface

Tests cover:
- calc (text and JSON output, locality filter, calendar failures)
- easter
- validate-pack / list-packs
- Exit codes for each error family
"""
import json
import logging

import pytest

from holidaycore.cli import (
    EXIT_CALENDAR_ERROR,
    EXIT_INPUT_INVALID,
    EXIT_OK,
    EXIT_PACK_ERROR,
    build_parser,
    main,
)


@pytest.fixture(autouse=True)
def restore_logger():
    """Undo configure_logging between tests."""
    logger = logging.getLogger("holidaycore")
    level = logger.level
    handlers = list(logger.handlers)
    yield
    logger.setLevel(level)
    logger.handlers[:] = handlers


def run_json(capsys, *argv):
    code = main(list(argv) + ["--json"])
    return code, json.loads(capsys.readouterr().out)


# =============================================================================
# calc
# =============================================================================

class TestCalcCommand:
    """Tests for the calc command."""

    def test_json_output(self, capsys):
        code, payload = run_json(capsys, "calc", "--pack", "us_federal", "--year", "2026")
        assert code == EXIT_OK
        assert payload["pack"] == "us_federal"
        assert payload["year"] == 2026
        assert len(payload["holidays"]) == 9
        assert payload["holidays"][0]["key"] == "new_year"

        by_key = {row["key"]: row for row in payload["holidays"]}
        independence = by_key["independence_day"]
        assert independence["nominal_date"] == "2026-07-04"
        assert independence["observed_date"] == "2026-07-03"
        assert independence["shifted"] is True
        assert by_key["thanksgiving"]["nominal_date"] == "2026-11-26"
        assert by_key["black_friday"]["variant"] == "moveable_from_base"
        assert by_key["black_friday"]["type"] == "commercial"

    def test_sorted_by_date(self, capsys):
        _, payload = run_json(capsys, "calc", "--pack", "christian", "--year", "2024")
        dates = [row["nominal_date"] for row in payload["holidays"]]
        assert dates == sorted(dates)

    def test_locality_filter(self, capsys):
        _, city = run_json(
            capsys, "calc", "--pack", "brazil", "--year", "2024", "--locality", "sp_city"
        )
        _, national = run_json(
            capsys, "calc", "--pack", "brazil", "--year", "2024", "--locality", "br"
        )
        city_keys = {row["key"] for row in city["holidays"]}
        national_keys = {row["key"] for row in national["holidays"]}
        assert "sao_paulo_anniversary" in city_keys
        assert "constitutionalist_revolution" in city_keys
        assert "sao_paulo_anniversary" not in national_keys
        assert "carnival" in national_keys
        assert len(city_keys) == 15
        assert len(national_keys) == 12

    def test_unknown_locality(self, capsys):
        code = main(["calc", "--pack", "brazil", "--year", "2024", "--locality", "rj"])
        assert code == EXIT_INPUT_INVALID
        assert "unknown locality 'rj'" in capsys.readouterr().err

    def test_text_output(self, capsys):
        code = main(["calc", "--pack", "us_federal", "--year", "2026"])
        out = capsys.readouterr().out
        assert code == EXIT_OK
        assert out.startswith("US Federal Holidays - 2026")
        assert "2026-07-04   Independence Day (observed 2026-07-03)" in out

    def test_calendar_error_reported(self, tmp_path, capsys):
        """Test that an unresolvable holiday is listed and sets the exit code."""
        path = tmp_path / "leap.yaml"
        path.write_text(
            "id: leap\n"
            "name: Leap\n"
            "localities:\n"
            "  br: {kind: country, code: BR, name: Brazil}\n"
            "default_localities: [br]\n"
            "holidays:\n"
            "  - {key: leap_day, name: Leap Day, variant: fixed, day: 29, month: 2}\n"
            "  - {key: new_year, name: New Year, variant: fixed, day: 1, month: 1}\n",
            encoding="utf-8",
        )
        code, payload = run_json(capsys, "calc", "--pack", str(path), "--year", "2023")
        assert code == EXIT_CALENDAR_ERROR
        assert payload["holidays"][0]["key"] == "new_year"
        assert "error" in payload["holidays"][1]

    def test_invalid_year(self, capsys):
        code = main(["calc", "--pack", "us_federal", "--year", "0"])
        assert code == EXIT_INPUT_INVALID
        assert "HC_INVALID_YEAR" in capsys.readouterr().err

    def test_missing_pack(self, capsys):
        code = main(["calc", "--pack", "atlantis", "--year", "2024"])
        assert code == EXIT_PACK_ERROR
        assert "HC_PACK_LOAD_ERROR" in capsys.readouterr().err


# =============================================================================
# easter
# =============================================================================

class TestEasterCommand:
    """Tests for the easter command."""

    def test_easter(self, capsys):
        assert main(["easter", "--year", "2025"]) == EXIT_OK
        assert capsys.readouterr().out.strip() == "2025-04-20"

    def test_before_1583(self, capsys):
        assert main(["easter", "--year", "1582"]) == EXIT_CALENDAR_ERROR
        assert "HC_CALENDAR_RANGE" in capsys.readouterr().err


# =============================================================================
# Pack Commands
# =============================================================================

class TestPackCommands:
    """Tests for validate-pack and list-packs."""

    def test_validate_pack(self, capsys):
        assert main(["validate-pack", "--pack", "us_federal"]) == EXIT_OK
        out = capsys.readouterr().out
        assert "OK us_federal: 9 holidays, 1 localities" in out
        assert "hash:" in out

    def test_validate_invalid_pack(self, tmp_path, capsys):
        path = tmp_path / "bad.yaml"
        path.write_text("id: bad\nname: Bad\nlocalities: {}\nholidays: []\n", encoding="utf-8")
        assert main(["validate-pack", "--pack", str(path)]) == EXIT_PACK_ERROR

    def test_list_packs(self, capsys):
        assert main(["list-packs"]) == EXIT_OK
        out = capsys.readouterr().out
        assert "us_federal" in out
        assert "brazil" in out


# =============================================================================
# Parser
# =============================================================================

class TestParser:
    """Tests for argument parsing."""

    def test_no_command(self, capsys):
        assert main([]) == 1

    def test_log_level_case_insensitive(self):
        args = build_parser().parse_args(["--log-level", "debug", "list-packs"])
        assert args.log_level == "DEBUG"

    def test_json_logging(self, capsys):
        assert main(["--log-format", "json", "--log-level", "info", "easter", "--year", "2024"]) == EXIT_OK
        assert capsys.readouterr().out.strip() == "2024-03-31"

    def test_unknown_log_level_from_env(self, monkeypatch, capsys):
        monkeypatch.setenv("HOLIDAYCORE_LOG_LEVEL", "verbose")
        assert main(["list-packs"]) == EXIT_INPUT_INVALID
        assert "Log level" in capsys.readouterr().err
