"""
Verifies a generated ICS file by reading it back with icalendar.
"""

from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Union

from icalendar import Calendar

from confcal.logging_helper import Log

SAMPLE_SIZE = 5


@dataclass
class VerifiedEvent:
    uid: Optional[str]
    summary: str
    start: datetime
    end: datetime
    location: str
    categories: List[str] = field(default_factory=list)


@dataclass
class VerificationReport:
    event_count: int
    events: List[VerifiedEvent]
    missing_uid_count: int = 0
    duplicate_uids: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.missing_uid_count == 0 and not self.duplicate_uids


def _categories(component) -> List[str]:
    value = component.get("CATEGORIES")
    if value is None:
        return []
    values = value if isinstance(value, list) else [value]
    result = []
    for item in values:
        result.extend(str(c) for c in item.cats)
    return result


def parse_ics(content: Union[bytes, str]) -> VerificationReport:
    """
    Parse ICS content and collect every VEVENT.

    Raises:
        ValueError: if the content is not a parseable calendar
    """
    calendar = Calendar.from_ical(content)

    events = []
    for component in calendar.walk("VEVENT"):
        uid = component.get("UID")
        events.append(VerifiedEvent(
            uid=str(uid) if uid is not None else None,
            summary=str(component.get("SUMMARY", "")),
            start=component.decoded("DTSTART"),
            end=component.decoded("DTEND"),
            location=str(component.get("LOCATION", "")),
            categories=_categories(component),
        ))

    uid_counts = Counter(e.uid for e in events if e.uid)
    return VerificationReport(
        event_count=len(events),
        events=events,
        missing_uid_count=sum(1 for e in events if not e.uid),
        duplicate_uids=sorted(uid for uid, count in uid_counts.items() if count > 1),
    )


def verify_ics_file(path: Union[str, Path], sample_size: int = SAMPLE_SIZE) -> VerificationReport:
    """Read back an ICS file and log a sample of its events."""
    path = Path(path)
    Log.section("ICS Verification")
    Log.info(f"Reading ICS file from {path}...")

    report = parse_ics(path.read_bytes())
    Log.info(f"Found {report.event_count} events in the calendar")

    for index, event in enumerate(report.events[:sample_size], start=1):
        Log.info(f"Event {index}: {event.summary}")
        Log.info(f"  Start: {event.start.isoformat()}  End: {event.end.isoformat()}")
        Log.info(f"  Location: {event.location or 'No location'}")
        Log.info(f"  UID: {event.uid or 'No UID'}")

    if report.missing_uid_count:
        Log.warn(f"{report.missing_uid_count} events have no UID")
    for uid in report.duplicate_uids:
        Log.warn(f"Duplicate UID: {uid}")

    Log.kv({
        "stage": "verify",
        "result": "success" if report.ok else "problems",
        "events": report.event_count,
        "duplicates": len(report.duplicate_uids),
    })
    return report
