"""Unit tests for ics_verifier.py."""

import pytest

from confcal.ics_generator import encode_calendar
from confcal.ics_verifier import parse_ics, verify_ics_file


@pytest.mark.unit
def test_parse_ics_reports_events(make_event, fixed_now) -> None:
    report = parse_ics(encode_calendar([make_event(), make_event(uid="other@x", category=None)], now=fixed_now))

    assert report.event_count == 2
    assert report.ok
    assert report.events[0].summary == "Registration"
    assert report.events[0].categories == ["GENERAL"]
    assert report.events[1].categories == []


@pytest.mark.unit
def test_parse_ics_flags_duplicate_uids(make_event, fixed_now) -> None:
    report = parse_ics(encode_calendar([make_event(), make_event()], now=fixed_now))

    assert report.duplicate_uids == ["identiverse-2025-event-1001@identiverse.com"]
    assert not report.ok


@pytest.mark.unit
def test_verify_ics_file_logs_sample(make_event, tmp_path, capsys) -> None:
    path = tmp_path / "cal.ics"
    path.write_bytes(encode_calendar([make_event()]))

    report = verify_ics_file(path)

    assert report.event_count == 1
    assert "Event 1: Registration" in capsys.readouterr().out
