"""
Event data models for the conference calendar pipeline.
Defines RawSession (from the agenda scraper), the event zone, and the
normalized records handed to the ICS generator.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta, tzinfo
from typing import List, Optional

from dateutil import tz as dateutil_tz


@dataclass
class RawSession:
    """
    Raw session scraped from an agenda page.
    Every field is always present but may be empty.
    """
    date: str = ""   # e.g. "JUNE 3"
    time: str = ""   # e.g. "9:30 AM - 11:20 AM"
    title: str = ""
    description: str = ""
    location: str = ""
    speakers: List[str] = field(default_factory=list)
    type: str = ""
    source_id: str = ""
    details_url: str = ""

    def has_timing(self) -> bool:
        """Check if the session carries any date or time text."""
        return bool(self.date.strip() or self.time.strip())


@dataclass(frozen=True)
class EventZone:
    """
    Fixed-offset zone every conference time is anchored to.
    The offset is not DST-aware; the dates in scope all fall inside
    daylight time.
    """
    tzid: str = "America/Los_Angeles"
    utc_offset_hours: int = -7
    abbreviation: str = "PDT"
    long_name: str = "Pacific Daylight Time"
    standard_abbreviation: str = "PST"
    windows_name: str = "Pacific Standard Time"  # Outlook zone name

    def tzinfo(self) -> tzinfo:
        return dateutil_tz.tzoffset(self.abbreviation, self.utc_offset_hours * 3600)

    def offset_label(self) -> str:
        """Offset as 'UTC-7' style text."""
        sign = "-" if self.utc_offset_hours < 0 else "+"
        return f"UTC{sign}{abs(self.utc_offset_hours)}"


PACIFIC = EventZone()


@dataclass(frozen=True)
class NormalizedTimeRange:
    start: datetime
    end: datetime

    def is_usable(self) -> bool:
        return (
            self.start is not None
            and self.end is not None
            and self.start.tzinfo is not None
            and self.end > self.start
        )

    def duration(self) -> timedelta:
        return self.end - self.start


@dataclass(frozen=True)
class ValidatedEvent:
    """
    Calendar event with every default applied.
    Ready for ICS generation.
    """
    title: str
    description: str
    location: str
    start_time: datetime
    end_time: datetime
    uid: str
    category: Optional[str] = "Session"
    source_id: Optional[str] = None
    is_default_time: bool = False

    def duration_minutes(self) -> int:
        """Get event duration in minutes."""
        delta = self.end_time - self.start_time
        return int(delta.total_seconds() / 60)
