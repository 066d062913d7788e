"""
Tests for holiday packs

Validates:
- Bundled packs load and calculate the expected dates
- Derived entries embed their base holiday
- Malformed packs fail with the right pack error
- Base references: unknown keys and cycles
- Determinism: same data -> same pack_hash
"""
import json
import logging
from datetime import date

import pytest

from holidaycore.config import reset_settings
from holidaycore.engine import calculate_date, calculate_observed_date, get_date_only
from holidaycore.exceptions import (
    BaseHolidayCycleError,
    PackError,
    PackLoadError,
    PackValidationError,
    PackVersionMismatch,
    UnknownBaseHolidayError,
)
from holidaycore.models import (
    FixedHoliday,
    HolidayType,
    KnownHoliday,
    MoveableFromBaseHoliday,
    MoveableHoliday,
    ObservedHoliday,
    brazil,
)
from holidaycore.packs import (
    SCHEMA_VERSION,
    HolidayRegistry,
    PackLoader,
    bundled_packs,
    check_schema_version,
    load_pack,
    load_pack_from_string,
)


# ============================================================================
# FIXTURES
# ============================================================================

def make_pack_data(holidays=None, **overrides):
    """Minimal valid pack data with a single country."""
    data = {
        "schema_version": SCHEMA_VERSION,
        "id": "test_pack",
        "name": "Test Pack",
        "default_localities": ["br"],
        "localities": {
            "br": {"kind": "country", "code": "BR", "name": "Brazil"},
        },
        "holidays": holidays or [
            {"key": "easter", "variant": "moveable", "known_holiday": "easter"},
        ],
    }
    data.update(overrides)
    return data


def derived_entry(key, base, offset=1, **extra):
    entry = {
        "key": key,
        "name": key.title(),
        "variant": "moveable_from_base",
        "base": base,
        "day_offset": offset,
    }
    entry.update(extra)
    return entry


@pytest.fixture
def loader():
    return PackLoader()


# ============================================================================
# BUNDLED PACKS
# ============================================================================

class TestBundledPacks:
    """Tests for the packs shipped with the library."""

    def test_available(self):
        assert {"brazil", "christian", "us_federal"} <= set(bundled_packs())

    def test_us_federal(self):
        pack = load_pack("us_federal")
        assert pack.id == "us_federal"
        assert len(pack.holidays) == 9
        assert pack.reference_year == 2024

        new_year = pack.get("new_year")
        assert isinstance(new_year, ObservedHoliday)
        assert new_year.name == "New Year's Day"
        assert new_year.nominal_date == date(2024, 1, 1)

    def test_us_federal_2026(self):
        """Test that July 4, 2026 (Saturday) is observed on Friday."""
        pack = load_pack("us_federal")
        independence = calculate_observed_date(pack.get("independence_day"), 2026)
        assert independence.nominal_date == date(2026, 7, 4)
        assert independence.observed_date == date(2026, 7, 3)
        assert get_date_only(pack.get("thanksgiving"), 2026) == date(2026, 11, 26)

    def test_black_friday_embeds_thanksgiving(self):
        pack = load_pack("us_federal")
        black_friday = pack.get("black_friday")
        assert isinstance(black_friday, MoveableFromBaseHoliday)
        assert black_friday.base_holiday is pack.get("thanksgiving")
        assert black_friday.type == HolidayType.COMMERCIAL
        assert get_date_only(black_friday, 2024) == date(2024, 11, 29)

    def test_brazil(self):
        pack = load_pack("brazil")
        assert len(pack.holidays) == 15
        assert list(pack.localities) == ["br", "sp", "sp_city"]

        carnival = pack.get("carnival")
        assert carnival.known_holiday is None
        assert get_date_only(carnival, 2024) == date(2024, 2, 13)
        assert get_date_only(pack.get("corpus_christi"), 2024) == date(2024, 5, 30)
        assert pack.get("good_friday").known_holiday is KnownHoliday.GOOD_FRIDAY

        anniversary = pack.get("sao_paulo_anniversary")
        assert isinstance(anniversary, FixedHoliday)
        assert anniversary.type == HolidayType.MUNICIPAL
        assert anniversary.localities == (pack.locality("sp_city"),)

    def test_christian_nested_chain(self):
        pack = load_pack("christian")
        assert len(pack.localities) == 3
        trinity = pack.get("trinity_sunday")
        assert trinity.derivation_depth == 2
        assert trinity.base_holiday is pack.get("pentecost")
        assert calculate_date(pack.get("ascension"), 2024).date == date(2024, 5, 9)
        assert calculate_date(pack.get("pentecost"), 2024).date == date(2024, 5, 19)
        assert calculate_date(trinity, 2024).date == date(2024, 5, 26)

    def test_default_name_from_known_holiday(self):
        pack = load_pack("christian")
        assert pack.get("palm_sunday").name == "Palm Sunday"
        assert pack.get("epiphany").name == "Epiphany"

    def test_pack_hash_deterministic(self):
        first = load_pack("brazil")
        second = load_pack("brazil")
        assert first.pack_hash == second.pack_hash
        assert len(first.pack_hash) == 64
        assert first.pack_hash != load_pack("christian").pack_hash

    def test_unknown_pack(self):
        with pytest.raises(PackLoadError, match="not found"):
            load_pack("atlantis")


# ============================================================================
# LOADING
# ============================================================================

class TestPackLoader:
    """Tests for PackLoader and the convenience functions."""

    def test_load_data(self, loader):
        pack = loader.load_data(make_pack_data())
        assert isinstance(pack.get("easter"), MoveableHoliday)
        assert pack.get("easter").localities == (brazil(),)
        assert pack.get("easter").type == HolidayType.NATIONAL

    def test_cache(self, loader):
        loader.load("brazil")
        assert loader.get_pack("brazil").id == "brazil"
        assert loader.list_packs() == ["brazil"]
        assert loader.get_pack("missing") is None

    def test_load_yaml_file(self, tmp_path, loader):
        path = tmp_path / "pack.yaml"
        path.write_text(
            "id: file_pack\n"
            "name: File Pack\n"
            "localities:\n"
            "  us: {kind: country, code: US, name: United States}\n"
            "holidays:\n"
            "  - key: thanksgiving\n"
            "    variant: moveable\n"
            "    known_holiday: thanksgiving_us\n"
            "    localities: [us]\n",
            encoding="utf-8",
        )
        pack = loader.load(path)
        assert pack.id == "file_pack"
        assert pack.source == str(path)

    def test_load_json_file(self, tmp_path, loader):
        path = tmp_path / "pack.json"
        path.write_text(json.dumps(make_pack_data()), encoding="utf-8")
        assert loader.load(str(path)).id == "test_pack"

    def test_load_from_string(self):
        pack = load_pack_from_string(json.dumps(make_pack_data()), format="json")
        assert pack.source == "<string>"

    def test_reference_year(self):
        data = make_pack_data([
            {"key": "xmas", "name": "Christmas", "variant": "observed", "day": 25, "month": 12},
        ])
        pack = PackLoader(reference_year=2022).load_data(data)
        assert pack.get("xmas").observed_date == date(2022, 12, 26)

    def test_reference_year_from_env(self, monkeypatch):
        monkeypatch.setenv("HOLIDAYCORE_REFERENCE_YEAR", "2021")
        reset_settings()
        assert PackLoader().reference_year == 2021

    def test_packs_dir_from_env(self, tmp_path, monkeypatch):
        (tmp_path / "custom.json").write_text(json.dumps(make_pack_data()), encoding="utf-8")
        monkeypatch.setenv("HOLIDAYCORE_PACKS_DIR", str(tmp_path))
        reset_settings()
        assert "custom" in bundled_packs()
        assert "us_federal" in bundled_packs()
        assert load_pack("custom").id == "test_pack"

    def test_load_logged(self, caplog, loader):
        caplog.set_level(logging.INFO, logger="holidaycore.packs")
        loader.load("us_federal")
        records = [r for r in caplog.records if r.name == "holidaycore.packs"]
        assert records[-1].pack_id == "us_federal"


# ============================================================================
# MALFORMED PACKS
# ============================================================================

class TestMalformedPacks:
    """Tests for pack validation failures."""

    def test_malformed_yaml(self, tmp_path, loader):
        path = tmp_path / "bad.yaml"
        path.write_text("holidays: [\n", encoding="utf-8")
        with pytest.raises(PackLoadError):
            loader.load(path)

    def test_top_level_list(self):
        with pytest.raises(PackLoadError, match="mapping"):
            load_pack_from_string("- a\n- b\n")

    def test_version_mismatch(self, loader):
        with pytest.raises(PackVersionMismatch):
            loader.load_data(make_pack_data(schema_version="2.0.0"))

    def test_version_mismatch_lenient(self):
        pack = PackLoader(strict_version=False).load_data(make_pack_data(schema_version="2.0.0"))
        assert pack.schema_version == "2.0.0"

    def test_extra_field(self, loader):
        data = make_pack_data([
            {"key": "easter", "variant": "moveable", "known_holiday": "easter", "colour": "red"},
        ])
        with pytest.raises(PackValidationError) as exc_info:
            loader.load_data(data)
        assert exc_info.value.details["errors"]

    def test_unknown_variant(self, loader):
        data = make_pack_data([{"key": "x", "name": "X", "variant": "lunar"}])
        with pytest.raises(PackValidationError):
            loader.load_data(data)

    def test_unknown_known_holiday(self, loader):
        data = make_pack_data([{"key": "x", "variant": "moveable", "known_holiday": "diwali"}])
        with pytest.raises(PackValidationError):
            loader.load_data(data)

    def test_known_holiday_without_algorithm(self, loader):
        data = make_pack_data([
            {"key": "gf", "variant": "moveable", "known_holiday": "good_friday"},
        ])
        with pytest.raises(PackValidationError, match="gf"):
            loader.load_data(data)

    def test_offset_must_match_known_holiday(self, loader):
        data = make_pack_data([
            {"key": "easter", "variant": "moveable", "known_holiday": "easter"},
            derived_entry("good_friday", "easter", -3, known_holiday="good_friday"),
        ])
        with pytest.raises(PackValidationError):
            loader.load_data(data)

    @pytest.mark.parametrize("variant", ["fixed", "observed"])
    def test_known_holiday_must_match_date(self, loader, variant):
        """Test that a catalogued fixed holiday cannot be moved to another day."""
        data = make_pack_data([
            {"key": "xmas", "variant": variant, "known_holiday": "christmas", "day": 4, "month": 7},
        ])
        with pytest.raises(PackValidationError) as exc_info:
            loader.load_data(data)
        messages = [err["msg"] for err in exc_info.value.details["errors"]]
        assert any("12-25" in msg for msg in messages)

    def test_known_holiday_must_be_fixed_date(self, loader):
        data = make_pack_data([
            {"key": "x", "variant": "fixed", "known_holiday": "easter", "day": 31, "month": 3},
        ])
        with pytest.raises(PackValidationError) as exc_info:
            loader.load_data(data)
        messages = [err["msg"] for err in exc_info.value.details["errors"]]
        assert any("not a fixed-date holiday" in msg for msg in messages)

    def test_known_holiday_matching_date(self, loader):
        data = make_pack_data([
            {"key": "xmas", "variant": "observed", "known_holiday": "christmas", "day": 25, "month": 12},
        ])
        pack = loader.load_data(data)
        assert pack.get("xmas").name == "Christmas Day"
        assert pack.get("xmas").nominal_date == date(2024, 12, 25)

    def test_derived_known_holiday_needs_matching_base(self, loader):
        """Test that Good Friday cannot hang off a holiday other than Easter."""
        data = make_pack_data([
            {"key": "thanks", "variant": "moveable", "known_holiday": "thanksgiving_us"},
            derived_entry("gf", "thanks", -2, known_holiday="good_friday"),
        ])
        with pytest.raises(PackValidationError) as exc_info:
            loader.load_data(data)
        errors = exc_info.value.details["errors"]
        assert "'gf'" in errors
        assert "needs base holiday 'easter'" in errors

    def test_derived_known_holiday_base_without_identity(self, loader):
        data = make_pack_data([
            {"key": "pascoa", "name": "Páscoa", "variant": "fixed", "day": 31, "month": 3},
            derived_entry("gf", "pascoa", -2, known_holiday="good_friday"),
        ])
        with pytest.raises(PackValidationError) as exc_info:
            loader.load_data(data)
        assert "no known_holiday" in exc_info.value.details["errors"]

    def test_derived_without_known_holiday_any_base(self, loader):
        data = make_pack_data([
            {"key": "thanks", "variant": "moveable", "known_holiday": "thanksgiving_us"},
            derived_entry("black_friday", "thanks", 1),
        ])
        pack = loader.load_data(data)
        assert get_date_only(pack.get("black_friday"), 2024) == date(2024, 11, 29)

    def test_unknown_locality(self, loader):
        data = make_pack_data([
            {"key": "easter", "variant": "moveable", "known_holiday": "easter",
             "localities": ["rj"]},
        ])
        with pytest.raises(PackValidationError) as exc_info:
            loader.load_data(data)
        assert "rj" in exc_info.value.details["errors"]

    def test_wrong_parent_kind(self, loader):
        data = make_pack_data(localities={
            "br": {"kind": "country", "code": "BR", "name": "Brazil"},
            "sp_city": {"kind": "city", "name": "São Paulo", "parent": "br"},
        })
        with pytest.raises(PackValidationError) as exc_info:
            loader.load_data(data)
        assert "subdivision parent" in exc_info.value.details["errors"]

    def test_invalid_country_code(self, loader):
        data = make_pack_data(localities={
            "br": {"kind": "country", "code": "BRA", "name": "Brazil"},
        })
        with pytest.raises(PackValidationError):
            loader.load_data(data)

    def test_duplicate_key(self, loader):
        data = make_pack_data([
            {"key": "easter", "variant": "moveable", "known_holiday": "easter"},
            {"key": "easter", "variant": "moveable", "known_holiday": "easter"},
        ])
        with pytest.raises(PackValidationError):
            loader.load_data(data)

    def test_missing_name(self, loader):
        data = make_pack_data([{"key": "x", "variant": "fixed", "day": 1, "month": 1}])
        with pytest.raises(PackValidationError) as exc_info:
            loader.load_data(data)
        assert "needs a 'name'" in exc_info.value.details["errors"]

    def test_no_localities(self, loader):
        data = make_pack_data(default_localities=[])
        with pytest.raises(PackValidationError):
            loader.load_data(data)

    def test_feb_29_observed_in_common_reference_year(self):
        data = make_pack_data([
            {"key": "leap", "name": "Leap Day", "variant": "observed", "day": 29, "month": 2},
        ])
        assert PackLoader(reference_year=2024).load_data(data).get("leap")
        with pytest.raises(PackValidationError, match="leap"):
            PackLoader(reference_year=2023).load_data(data)

    def test_fixed_feb_30(self, loader):
        data = make_pack_data([
            {"key": "x", "name": "X", "variant": "fixed", "day": 30, "month": 2},
        ])
        with pytest.raises(PackValidationError):
            loader.load_data(data)

    def test_all_pack_errors_share_base(self, loader):
        with pytest.raises(PackError):
            loader.load_data(make_pack_data(schema_version="9.0.0"))


# ============================================================================
# BASE REFERENCES
# ============================================================================

class TestBaseReferences:
    """Tests for base-holiday resolution in packs."""

    def test_base_declared_after_derived(self, loader):
        data = make_pack_data([
            derived_entry("good_friday", "easter", -2),
            {"key": "easter", "variant": "moveable", "known_holiday": "easter"},
        ])
        pack = loader.load_data(data)
        assert list(pack.holidays) == ["good_friday", "easter"]
        assert pack.get("good_friday").base_holiday is pack.get("easter")

    def test_unknown_base(self, loader):
        data = make_pack_data([derived_entry("good_friday", "pascoa", -2)])
        with pytest.raises(UnknownBaseHolidayError) as exc_info:
            loader.load_data(data)
        assert exc_info.value.details == {"key": "good_friday", "base": "pascoa"}

    def test_cycle(self, loader):
        data = make_pack_data([derived_entry("a", "b"), derived_entry("b", "a")])
        with pytest.raises(BaseHolidayCycleError) as exc_info:
            loader.load_data(data)
        assert "a -> b -> a" in exc_info.value.message

    def test_self_reference(self, loader):
        data = make_pack_data([derived_entry("a", "a")])
        with pytest.raises(BaseHolidayCycleError):
            loader.load_data(data)

    def test_chain_deeper_than_setting(self, monkeypatch):
        monkeypatch.setenv("HOLIDAYCORE_MAX_DERIVATION_DEPTH", "1")
        reset_settings()
        with pytest.raises(PackValidationError, match="trinity_sunday"):
            load_pack("christian")


# ============================================================================
# REGISTRY
# ============================================================================

class TestHolidayRegistry:
    """Tests for HolidayRegistry on its own."""

    def test_duplicate_key(self):
        registry = HolidayRegistry()
        registry.declare("easter")
        with pytest.raises(ValueError, match="Duplicate"):
            registry.declare("easter")

    def test_resolution_order(self):
        registry = HolidayRegistry()
        registry.declare("trinity", base="pentecost")
        registry.declare("pentecost", base="easter")
        registry.declare("easter")
        registry.declare("christmas")
        assert registry.resolution_order() == ["easter", "pentecost", "trinity", "christmas"]
        assert list(registry) == ["trinity", "pentecost", "easter", "christmas"]
        assert len(registry) == 4
        assert "easter" in registry
        assert registry.base_of("trinity") == "pentecost"

    def test_build_passes_base(self):
        registry = HolidayRegistry()
        registry.declare("boxing_day", base="christmas")
        registry.declare("christmas")
        seen = {}

        def builder(key, base):
            seen[key] = base
            if base is None:
                return FixedHoliday("Christmas Day", 25, 12, [brazil()], HolidayType.RELIGIOUS)
            return MoveableFromBaseHoliday(
                "Boxing Day", None, base, 1, base.localities, base.type
            )

        built = registry.build(builder)
        assert list(built) == ["boxing_day", "christmas"]
        assert seen["boxing_day"] is built["christmas"]
        assert registry.get("boxing_day") is built["boxing_day"]


class TestSchemaVersion:
    """Tests for check_schema_version."""

    @pytest.mark.parametrize("version,expected", [
        ("1.0.0", True),
        ("1.4.2", True),
        ("2.0.0", False),
        ("0.9", False),
    ])
    def test_major_version(self, version, expected):
        assert check_schema_version({"schema_version": version}) is expected

    def test_missing_version_assumed_current(self):
        assert check_schema_version({})
