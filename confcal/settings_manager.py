"""
Application settings for the calendar generator.

Holds the output path, the conference year, the fixed-offset event zone and
the calendar metadata. Settings are persisted as JSON under the user's
config directory; anything missing or unreadable falls back to defaults.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional, TypedDict

from confcal.event_models import EventZone
from confcal.ics_generator import CalendarInfo
from confcal.logging_helper import Log


class SettingsSchema(TypedDict, total=False):
    output_path: str
    event_year: int
    tzid: str
    utc_offset_hours: int
    zone_abbreviation: str
    zone_long_name: str
    zone_standard_abbreviation: str
    zone_windows_name: str
    calendar_name: str
    calendar_description: str
    default_location: str


SETTINGS_DIR = Path.home() / ".config" / "confcal"
SETTINGS_FILE = SETTINGS_DIR / "settings.json"

DEFAULT_SETTINGS: SettingsSchema = {
    "output_path": "output/identiverse2025.ics",
    "event_year": 2025,
    "tzid": "America/Los_Angeles",
    "utc_offset_hours": -7,
    "zone_abbreviation": "PDT",
    "zone_long_name": "Pacific Daylight Time",
    "zone_standard_abbreviation": "PST",
    "zone_windows_name": "Pacific Standard Time",
    "calendar_name": "Identiverse 2025 Conference",
    "calendar_description": "Events for Identiverse 2025 Conference",
    "default_location": "TBD",
}

_INT_KEYS = ("event_year", "utc_offset_hours")


def _settings_file(path: Optional[Path]) -> Path:
    return Path(path) if path is not None else SETTINGS_FILE


def _coerce(key: str, value):
    if key in _INT_KEYS:
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"{key} must be an integer, got {value!r}")
        if key == "utc_offset_hours" and not -12 <= value <= 14:
            raise ValueError(f"utc_offset_hours out of range: {value}")
        return value
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"{key} must be a non-empty string, got {value!r}")
    return value


def load_settings(path: Optional[Path] = None) -> SettingsSchema:
    """
    Load settings from disk, falling back to defaults if anything fails.
    """
    settings_file = _settings_file(path)
    if not settings_file.exists():
        Log.info(f"Settings file not found, using defaults: {settings_file}")
        return DEFAULT_SETTINGS.copy()

    try:
        data = json.loads(settings_file.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError("Settings data is not a JSON object")
    except (OSError, ValueError) as err:
        Log.warn(f"Failed to read settings file ({settings_file}): {err}")
        return DEFAULT_SETTINGS.copy()

    merged: SettingsSchema = DEFAULT_SETTINGS.copy()
    # Merge only known keys
    for key in DEFAULT_SETTINGS:
        if key in data:
            try:
                merged[key] = _coerce(key, data[key])  # type: ignore[literal-required]
            except ValueError as err:
                Log.warn(f"Ignoring invalid setting: {err}")
    return merged


def save_settings(settings: SettingsSchema, path: Optional[Path] = None) -> None:
    """
    Persist settings to disk.
    """
    settings_file = _settings_file(path)
    try:
        settings_file.parent.mkdir(parents=True, exist_ok=True)
        settings_file.write_text(
            json.dumps(settings, indent=2, sort_keys=True),
            encoding="utf-8",
        )
    except OSError as err:
        Log.warn(f"Failed to write settings file ({settings_file}): {err}")


def set_setting(key: str, value, path: Optional[Path] = None) -> None:
    if key not in DEFAULT_SETTINGS:
        raise ValueError(f"Unknown setting: {key}")
    settings = load_settings(path)
    settings[key] = _coerce(key, value)  # type: ignore[literal-required]
    save_settings(settings, path)
    Log.info(f"Saved setting {key}: {value}")


def get_output_path(settings: Optional[SettingsSchema] = None) -> Path:
    if settings is None:
        settings = load_settings()
    return Path(settings.get("output_path", DEFAULT_SETTINGS["output_path"]))


def load_event_zone(settings: Optional[SettingsSchema] = None) -> EventZone:
    if settings is None:
        settings = load_settings()
    return EventZone(
        tzid=settings.get("tzid", DEFAULT_SETTINGS["tzid"]),
        utc_offset_hours=settings.get("utc_offset_hours", DEFAULT_SETTINGS["utc_offset_hours"]),
        abbreviation=settings.get("zone_abbreviation", DEFAULT_SETTINGS["zone_abbreviation"]),
        long_name=settings.get("zone_long_name", DEFAULT_SETTINGS["zone_long_name"]),
        standard_abbreviation=settings.get(
            "zone_standard_abbreviation", DEFAULT_SETTINGS["zone_standard_abbreviation"]
        ),
        windows_name=settings.get("zone_windows_name", DEFAULT_SETTINGS["zone_windows_name"]),
    )


def load_calendar_info(settings: Optional[SettingsSchema] = None) -> CalendarInfo:
    if settings is None:
        settings = load_settings()
    return CalendarInfo(
        name=settings.get("calendar_name", DEFAULT_SETTINGS["calendar_name"]),
        description=settings.get("calendar_description", DEFAULT_SETTINGS["calendar_description"]),
        zone=load_event_zone(settings),
        year=settings.get("event_year", DEFAULT_SETTINGS["event_year"]),
    )
