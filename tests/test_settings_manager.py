"""Unit tests for settings_manager.py."""

import json
from datetime import datetime

import pytest

from confcal.event_models import ValidatedEvent
from confcal.ics_generator import encode_calendar
from confcal.settings_manager import (
    DEFAULT_SETTINGS,
    get_output_path,
    load_calendar_info,
    load_event_zone,
    load_settings,
    save_settings,
    set_setting,
)


@pytest.mark.unit
def test_load_settings_missing_file_uses_defaults(tmp_path) -> None:
    assert load_settings(tmp_path / "missing.json") == DEFAULT_SETTINGS


@pytest.mark.unit
def test_load_settings_invalid_json_uses_defaults(tmp_path) -> None:
    path = tmp_path / "settings.json"
    path.write_text("{not json", encoding="utf-8")

    assert load_settings(path) == DEFAULT_SETTINGS


@pytest.mark.unit
def test_load_settings_merges_known_keys_only(tmp_path) -> None:
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"output_path": "cal/out.ics", "unknown": 1, "utc_offset_hours": "x"}))
    settings = load_settings(path)

    assert settings["output_path"] == "cal/out.ics"
    assert "unknown" not in settings
    assert settings["utc_offset_hours"] == -7


@pytest.mark.unit
def test_save_and_set_setting_round_trip(tmp_path) -> None:
    path = tmp_path / "sub" / "settings.json"
    save_settings(DEFAULT_SETTINGS.copy(), path)
    set_setting("default_location", "Caesars Forum", path)

    assert load_settings(path)["default_location"] == "Caesars Forum"


@pytest.mark.unit
def test_set_setting_rejects_bad_values(tmp_path) -> None:
    path = tmp_path / "settings.json"
    with pytest.raises(ValueError):
        set_setting("nope", "x", path)
    with pytest.raises(ValueError):
        set_setting("utc_offset_hours", 40, path)
    with pytest.raises(ValueError):
        set_setting("calendar_name", "", path)


@pytest.mark.unit
def test_event_zone_and_calendar_info_from_settings() -> None:
    settings = DEFAULT_SETTINGS.copy()
    settings["utc_offset_hours"] = -6
    settings["zone_abbreviation"] = "MDT"
    settings["event_year"] = 2026

    zone = load_event_zone(settings)
    info = load_calendar_info(settings)

    assert zone.utc_offset_hours == -6
    assert zone.abbreviation == "MDT"
    assert info.year == 2026
    assert info.zone == zone
    assert str(get_output_path(settings)) == "output/identiverse2025.ics"


@pytest.mark.unit
def test_non_pacific_settings_carry_every_zone_name(fixed_now) -> None:
    settings = DEFAULT_SETTINGS.copy()
    settings.update({
        "tzid": "America/Denver",
        "utc_offset_hours": -6,
        "zone_abbreviation": "MDT",
        "zone_long_name": "Mountain Daylight Time",
        "zone_standard_abbreviation": "MST",
        "zone_windows_name": "Mountain Standard Time",
    })
    info = load_calendar_info(settings)
    zone = info.zone
    event = ValidatedEvent(
        title="Keynote",
        description="Opening",
        location="Main Stage",
        start_time=datetime(2025, 6, 4, 9, 0, tzinfo=zone.tzinfo()),
        end_time=datetime(2025, 6, 4, 10, 0, tzinfo=zone.tzinfo()),
        uid="identiverse-2025-event-1@identiverse.com",
    )
    lines = encode_calendar([event], info, now=fixed_now).decode("utf-8").split("\r\n")

    assert [line for line in lines if line.startswith("TZNAME:")] == ["TZNAME:MDT", "TZNAME:MST"]
    assert "X-MICROSOFT-CDO-TZID:Mountain Standard Time" in lines
    assert "DTSTART;TZID=America/Denver:20250604T090000" in lines
    assert not any("Pacific" in line or "PST" in line for line in lines)
