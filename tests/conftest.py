"""Shared fixtures for confcal tests."""

from datetime import datetime

import pytest
from dateutil import tz as dateutil_tz

from confcal.event_models import PACIFIC, RawSession, ValidatedEvent
from confcal.logging_helper import Log


@pytest.fixture(autouse=True)
def no_log_file():
    """Keep test runs from writing log files; stdout output is still captured."""
    Log.configure(file_logging=False)
    yield
    Log.configure(file_logging=True)


@pytest.fixture
def pdt():
    return PACIFIC.tzinfo()


@pytest.fixture
def fixed_now():
    return datetime(2025, 5, 20, 16, 45, 10, tzinfo=dateutil_tz.tzutc())


@pytest.fixture
def make_raw():
    def _make(**overrides) -> RawSession:
        values = dict(
            date="JUNE 3",
            time="9:30 AM - 11:20 AM",
            title="Personal Identity Workshop",
            description="Identity in the digital age.",
            location="Workshop Room A",
            speakers=["Jane Smith", "John Doe"],
            type="WORKSHOP",
        )
        values.update(overrides)
        return RawSession(**values)

    return _make


@pytest.fixture
def make_event(pdt):
    def _make(**overrides) -> ValidatedEvent:
        values = dict(
            title="Registration",
            description="Conference registration and badge pickup",
            location="Main Lobby",
            start_time=datetime(2025, 6, 3, 8, 0, tzinfo=pdt),
            end_time=datetime(2025, 6, 3, 19, 0, tzinfo=pdt),
            uid="identiverse-2025-event-1001@identiverse.com",
            category="GENERAL",
            source_id="1001",
        )
        values.update(overrides)
        return ValidatedEvent(**values)

    return _make
