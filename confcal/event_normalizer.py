"""
Event normalizer for converting RawSession to ValidatedEvent.
Applies the fallback policy for every missing field so the ICS generator
never has to.
"""

from collections import OrderedDict
from datetime import datetime, timedelta
from typing import Dict, Iterable, List, Optional

from confcal.description_formatter import format_description
from confcal.diagnostics import Diagnostics
from confcal.event_models import PACIFIC, EventZone, NormalizedTimeRange, RawSession, ValidatedEvent
from confcal.logging_helper import Log
from confcal.time_normalizer import EVENT_YEAR, normalize_time
from confcal.uid_generator import extract_source_id, generate_uid

DEFAULT_TITLE = "Untitled Session"
DEFAULT_LOCATION = "TBD"
DEFAULT_CATEGORY = "Session"


def default_time_range(zone: EventZone = PACIFIC, now: Optional[datetime] = None) -> NormalizedTimeRange:
    """Today at 12:00-13:00 in the event zone."""
    if now is None:
        now = datetime.now(zone.tzinfo())
    start = datetime(now.year, now.month, now.day, 12, 0, tzinfo=zone.tzinfo())
    return NormalizedTimeRange(start=start, end=start + timedelta(hours=1))


def resolve_source_id(session: RawSession) -> Optional[str]:
    if session.source_id and session.source_id.strip():
        return session.source_id.strip()
    return extract_source_id(session.details_url)


def normalize_session(
    session: RawSession,
    diagnostics: Optional[Diagnostics] = None,
    zone: EventZone = PACIFIC,
    year: int = EVENT_YEAR,
    default_location: str = DEFAULT_LOCATION,
) -> Optional[ValidatedEvent]:
    """
    Normalize a RawSession into a ValidatedEvent.

    Args:
        session: Raw session from the scraper
        diagnostics: Sink for warnings about applied defaults
        zone: Fixed-offset zone for all times
        year: Conference year
        default_location: Location used when the session has none

    Returns:
        ValidatedEvent, or None if the session has no date and no time or
        normalization failed unexpectedly
    """
    if diagnostics is None:
        diagnostics = Diagnostics()

    title = (session.title or "").strip() or DEFAULT_TITLE
    # UID hash runs over the untrimmed title
    uid_title = session.title if (session.title or "").strip() else title

    if not session.has_timing():
        diagnostics.warn("Skipping session with no date or time", title)
        return None

    try:
        is_default_time = False
        try:
            time_range = normalize_time(
                session.date, session.time, diagnostics, zone=zone, year=year, record=title
            )
        except (ValueError, OverflowError) as e:
            diagnostics.error(f"Error parsing time '{session.date} {session.time}': {e}", title)
            time_range = None

        if time_range is None or not time_range.is_usable():
            diagnostics.warn("Invalid time format, using default 1-hour slot at noon", title)
            time_range = default_time_range(zone)
            is_default_time = True

        source_id = resolve_source_id(session)

        return ValidatedEvent(
            title=title,
            description=format_description(session, zone),
            location=(session.location or "").strip() or default_location,
            start_time=time_range.start,
            end_time=time_range.end,
            uid=generate_uid(uid_title, time_range.start, source_id),
            category=(session.type or "").strip() or DEFAULT_CATEGORY,
            source_id=source_id,
            is_default_time=is_default_time,
        )

    except Exception as e:
        diagnostics.error(f"Normalization error: {e}", title)
        return None


def process_sessions(
    sessions: Iterable[RawSession],
    diagnostics: Optional[Diagnostics] = None,
    zone: EventZone = PACIFIC,
    year: int = EVENT_YEAR,
    default_location: str = DEFAULT_LOCATION,
) -> List[ValidatedEvent]:
    """
    Normalize every session, keeping input order and dropping skipped ones.
    """
    if diagnostics is None:
        diagnostics = Diagnostics()
    sessions = list(sessions)

    Log.section("Event Normalizer")
    Log.info(f"Processing {len(sessions)} sessions...")

    events = []
    for session in sessions:
        event = normalize_session(session, diagnostics, zone=zone, year=year, default_location=default_location)
        if event is not None:
            events.append(event)

    Log.kv({
        "stage": "normalize",
        "received": len(sessions),
        "processed": len(events),
        "skipped": len(sessions) - len(events),
        "default_time": sum(1 for e in events if e.is_default_time),
        "warnings": len(diagnostics.warnings),
        "errors": len(diagnostics.errors),
    })
    return events


def group_sessions_by_date(events: Iterable[ValidatedEvent]) -> Dict[str, List[ValidatedEvent]]:
    """
    Group events by start date (YYYY-MM-DD), each day sorted by start time.
    Days keep the order in which they first appear.
    """
    grouped: Dict[str, List[ValidatedEvent]] = OrderedDict()
    for event in events:
        grouped.setdefault(event.start_time.strftime("%Y-%m-%d"), []).append(event)

    for day_events in grouped.values():
        day_events.sort(key=lambda e: e.start_time)
    return grouped
