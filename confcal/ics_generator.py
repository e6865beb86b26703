"""
ICS Generator for creating the conference iCalendar (.ics) file.

Start and end are written as local wall time tagged with the zone TZID,
not converted to UTC; the VTIMEZONE block lets readers resolve them.
"""

from collections import Counter, OrderedDict
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

from dateutil import tz as dateutil_tz
from dateutil.relativedelta import SU, relativedelta

from confcal.event_models import PACIFIC, EventZone, ValidatedEvent
from confcal.logging_helper import Log

MAX_LINE_OCTETS = 75
DEFAULT_OUTPUT_PATH = "output/identiverse2025.ics"
PRODID = "-//Identiverse//Conference Calendar//EN"


@dataclass(frozen=True)
class CalendarInfo:
    name: str = "Identiverse 2025 Conference"
    description: str = "Events for Identiverse 2025 Conference"
    zone: EventZone = PACIFIC
    year: int = 2025


# Scheduling-client hints emitted on every event
_CLIENT_HINT_LINES = (
    "X-MICROSOFT-CDO-INTENDEDSTATUS:BUSY",
    "X-MICROSOFT-CDO-IMPORTANCE:1",
    "X-MICROSOFT-CDO-ALLDAYEVENT:FALSE",
    "X-MICROSOFT-CDO-BUSYSTATUS:BUSY",
    "X-MICROSOFT-CDO-INSTTYPE:0",
    "X-MICROSOFT-DISALLOW-COUNTER:FALSE",
)


def _escape_ical_text(text: Optional[str]) -> str:
    """
    Escape text for iCalendar format (RFC5545).
    Escapes commas, semicolons, backslashes, and newlines.

    Args:
        text: Text to escape

    Returns:
        Escaped text safe for iCalendar
    """
    if text is None:
        return ""

    # Replace backslashes first (before other replacements)
    text = text.replace('\\', '\\\\')
    text = text.replace(';', '\\;')
    text = text.replace(',', '\\,')
    text = text.replace('\r\n', '\n').replace('\r', '\n')
    text = text.replace('\n', '\\n')
    return text


def _fold_line(line: str) -> str:
    """
    Fold a content line so no physical line exceeds 75 octets.
    Continuation lines start with a single space, which counts toward the
    limit. A multi-byte character is never split.
    """
    lines = []
    current = ""
    current_octets = 0

    for char in line:
        char_octets = len(char.encode('utf-8'))
        if current_octets + char_octets <= MAX_LINE_OCTETS:
            current += char
            current_octets += char_octets
        else:
            lines.append(current)
            current = " " + char
            current_octets = 1 + char_octets

    lines.append(current)
    return '\r\n'.join(lines)


def _text_line(name: str, value: Optional[str]) -> str:
    return _fold_line(f"{name}:{_escape_ical_text(value)}")


def _format_local_datetime(dt: datetime, zone: EventZone) -> str:
    """Wall time in the event zone (YYYYMMDDTHHMMSS, no Z)."""
    if dt.tzinfo is not None:
        dt = dt.astimezone(zone.tzinfo())
    return dt.strftime('%Y%m%dT%H%M%S')


def _format_ical_datetime(dt: datetime) -> str:
    """
    Format datetime to iCalendar format (UTC).

    Args:
        dt: timezone-aware datetime object

    Returns:
        Formatted datetime string (YYYYMMDDTHHMMSSZ)
    """
    dt_utc = dt.astimezone(dateutil_tz.tzutc())
    return dt_utc.strftime('%Y%m%dT%H%M%SZ')


def _offset_text(hours: int) -> str:
    sign = "-" if hours < 0 else "+"
    return f"{sign}{abs(hours):02d}00"


def _timezone_lines(zone: EventZone, year: int) -> List[str]:
    """
    Fixed US daylight/standard rule pair for the zone; the rules are not
    looked up from a timezone database. The DTSTART of each rule is the
    second Sunday of March and the first Sunday of November of the
    configured year, both at 02:00.
    """
    daylight_offset = zone.utc_offset_hours
    standard_offset = daylight_offset - 1
    daylight_start = datetime(year, 3, 1, 2, 0) + relativedelta(weekday=SU(+2))
    standard_start = datetime(year, 11, 1, 2, 0) + relativedelta(weekday=SU(+1))

    return [
        "BEGIN:VTIMEZONE",
        f"TZID:{zone.tzid}",
        f"TZURL:http://tzurl.org/zoneinfo-outlook/{zone.tzid}",
        f"X-LIC-LOCATION:{zone.tzid}",
        "BEGIN:DAYLIGHT",
        f"TZOFFSETFROM:{_offset_text(standard_offset)}",
        f"TZOFFSETTO:{_offset_text(daylight_offset)}",
        f"TZNAME:{zone.abbreviation}",
        f"DTSTART:{daylight_start.strftime('%Y%m%dT%H%M%S')}",
        "RRULE:FREQ=YEARLY;BYMONTH=3;BYDAY=2SU",
        "END:DAYLIGHT",
        "BEGIN:STANDARD",
        f"TZOFFSETFROM:{_offset_text(daylight_offset)}",
        f"TZOFFSETTO:{_offset_text(standard_offset)}",
        f"TZNAME:{zone.standard_abbreviation}",
        f"DTSTART:{standard_start.strftime('%Y%m%dT%H%M%S')}",
        "RRULE:FREQ=YEARLY;BYMONTH=11;BYDAY=1SU",
        "END:STANDARD",
        "END:VTIMEZONE",
    ]


def _event_lines(event: ValidatedEvent, zone: EventZone, dtstamp: str) -> List[str]:
    lines = [
        "BEGIN:VEVENT",
        f"UID:{event.uid}",
        "SEQUENCE:0",
        f"DTSTAMP:{dtstamp}",
        f"DTSTART;TZID={zone.tzid}:{_format_local_datetime(event.start_time, zone)}",
        f"DTEND;TZID={zone.tzid}:{_format_local_datetime(event.end_time, zone)}",
        _text_line("SUMMARY", event.title),
        _text_line("DESCRIPTION", event.description),
        _text_line("LOCATION", event.location),
        "CLASS:PUBLIC",
        "STATUS:CONFIRMED",
        "TRANSP:OPAQUE",
    ]
    lines.extend(_CLIENT_HINT_LINES)
    lines.append(f"X-MICROSOFT-CDO-TZID:{zone.windows_name}")
    lines.append(f"X-TIMEZONE-CONF:{zone.tzid}")

    if event.category:
        lines.append(_text_line("CATEGORIES", event.category))

    lines.append("END:VEVENT")
    return lines


def build_calendar_lines(
    events: Iterable[ValidatedEvent],
    info: CalendarInfo = CalendarInfo(),
    now: Optional[datetime] = None,
) -> List[str]:
    """Content lines of the whole VCALENDAR, events in input order."""
    zone = info.zone
    if now is None:
        now = datetime.now(dateutil_tz.tzutc())
    dtstamp = _format_ical_datetime(now)

    ics_lines = [
        "BEGIN:VCALENDAR",
        "VERSION:2.0",
        f"PRODID:{PRODID}",
        "CALSCALE:GREGORIAN",
        "METHOD:PUBLISH",
        _text_line("X-WR-CALNAME", info.name),
        f"X-WR-TIMEZONE:{zone.tzid}",
        _text_line("X-WR-CALDESC", info.description),
    ]
    ics_lines.extend(_timezone_lines(zone, info.year))

    for event in events:
        ics_lines.extend(_event_lines(event, zone, dtstamp))

    ics_lines.append("END:VCALENDAR")
    return ics_lines


def encode_calendar(
    events: Iterable[ValidatedEvent],
    info: CalendarInfo = CalendarInfo(),
    now: Optional[datetime] = None,
) -> bytes:
    """
    Serialize events into ICS file content (UTF-8, CRLF line endings).

    Args:
        events: Validated events, written in the order given
        info: Calendar name, description and zone
        now: Generation time for DTSTAMP, defaults to the current UTC time

    Returns:
        ICS file content as bytes
    """
    ics_content = '\r\n'.join(build_calendar_lines(events, info, now)) + '\r\n'
    return ics_content.encode('utf-8')


def generate_ics_file(
    events: List[ValidatedEvent],
    output_path: Union[str, Path] = DEFAULT_OUTPUT_PATH,
    info: CalendarInfo = CalendarInfo(),
) -> Path:
    """
    Generate the ICS file and write it to output_path.

    Args:
        events: Validated events
        output_path: Destination file; parent directories are created

    Returns:
        Path to the generated ICS file

    Raises:
        OSError: if the file cannot be written
    """
    Log.section("ICS Generator")
    Log.info(f"Creating calendar with {len(events)} events...")

    ics_path = Path(output_path)
    ics_path.parent.mkdir(parents=True, exist_ok=True)
    content = encode_calendar(events, info)
    ics_path.write_bytes(content)

    Log.info(f"ICS file generated successfully at: {ics_path}")
    Log.kv({
        "stage": "ics",
        "result": "success",
        "ics_path": str(ics_path),
        "events": len(events),
        "bytes": len(content),
    })
    return ics_path


def summarize_calendar(events: Iterable[ValidatedEvent]) -> Dict[str, Dict[str, int]]:
    """Event counts per day (YYYY-MM-DD) and per category."""
    days: Dict[str, int] = OrderedDict()
    types: Counter = Counter()
    for event in events:
        day = event.start_time.strftime("%Y-%m-%d")
        days[day] = days.get(day, 0) + 1
        types[event.category or "Unspecified"] += 1
    return {"days": dict(days), "types": dict(types)}


def print_calendar_summary(events: List[ValidatedEvent]):
    summary = summarize_calendar(events)

    Log.section("Calendar Summary")
    Log.info(f"Total Events: {len(events)}")
    for day, count in summary["days"].items():
        Log.info(f"  {day}: {count} events")

    Log.info("Event Types:")
    for event_type, count in summary["types"].items():
        Log.info(f"  {event_type}: {count} events")
