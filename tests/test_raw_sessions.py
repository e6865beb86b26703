"""Unit tests for raw_sessions.py - scraper JSON loading and sample agenda."""

import json

import pytest

from confcal.raw_sessions import load_raw_sessions, raw_session_from_dict, sample_raw_sessions


@pytest.mark.unit
def test_raw_session_from_dict_maps_scraper_keys() -> None:
    session = raw_session_from_dict({
        "date": "JUNE 3",
        "time": "9:30 AM - 11:20 AM",
        "title": " Workshop ",
        "speakers": ["Jane Smith", "", None],
        "sessionId": 1042,
        "detailsUrl": "https://identiverse.com/?idvid=1042",
    })

    assert session.title == "Workshop"
    assert session.speakers == ["Jane Smith"]
    assert session.source_id == "1042"
    assert session.details_url.endswith("idvid=1042")
    assert session.location == ""


@pytest.mark.unit
def test_raw_session_from_dict_accepts_speaker_string() -> None:
    assert raw_session_from_dict({"speakers": "Jane Smith"}).speakers == ["Jane Smith"]


@pytest.mark.unit
def test_load_raw_sessions(tmp_path) -> None:
    path = tmp_path / "sessions.json"
    path.write_text(json.dumps([{"title": "A", "date": "JUNE 3", "time": "9 AM"}, {}]))

    sessions = load_raw_sessions(path)

    assert [s.title for s in sessions] == ["A", ""]
    assert sessions[1].has_timing() is False


@pytest.mark.unit
def test_load_raw_sessions_rejects_non_array(tmp_path) -> None:
    path = tmp_path / "sessions.json"
    path.write_text(json.dumps({"title": "A"}))

    with pytest.raises(ValueError):
        load_raw_sessions(path)


@pytest.mark.unit
def test_sample_raw_sessions_carry_day_date() -> None:
    sessions = sample_raw_sessions()

    assert sessions[0].title == "Registration"
    assert sessions[0].date == "JUNE 3"
    assert all(s.has_timing() for s in sessions)
