"""
Time normalizer for agenda date and time labels.
Turns labels like "JUNE 3" and "9:30 AM - 11:20 AM" into a start/end pair
anchored to the event zone's fixed UTC offset.
"""

import re
from datetime import datetime, timedelta
from typing import Optional, Tuple

from confcal.diagnostics import Diagnostics
from confcal.event_models import PACIFIC, EventZone, NormalizedTimeRange

EVENT_YEAR = 2025
DEFAULT_MONTH = 6
DEFAULT_DAY = 1
DEFAULT_DURATION = timedelta(hours=1)
AMBIGUITY_SHIFT = timedelta(hours=12)

# Checked in order, case-insensitive substring match
MONTH_VOCABULARY: Tuple[Tuple[Tuple[str, ...], int], ...] = (
    (("JUNE", "JUN"), 6),
    (("JULY", "JUL"), 7),
    (("MAY",), 5),
)

_DAY_PATTERN = re.compile(r"\d+")
_TIME_PATTERN = re.compile(r"(\d+)(?::(\d+))?\s*(AM|PM)?", re.IGNORECASE)


def parse_month(date_label: str, diagnostics: Diagnostics, record: Optional[str] = None) -> int:
    upper = date_label.upper()
    for names, month in MONTH_VOCABULARY:
        if any(name in upper for name in names):
            return month
    diagnostics.warn(
        f"Could not determine month from '{date_label}', defaulting to {DEFAULT_MONTH}",
        record,
    )
    return DEFAULT_MONTH


def parse_day(date_label: str, diagnostics: Diagnostics, record: Optional[str] = None) -> int:
    match = _DAY_PATTERN.search(date_label)
    if match:
        return int(match.group(0))
    diagnostics.warn(
        f"Could not determine day from '{date_label}', defaulting to day {DEFAULT_DAY}",
        record,
    )
    return DEFAULT_DAY


def parse_clock(time_part: str, diagnostics: Diagnostics, record: Optional[str] = None) -> Tuple[int, int]:
    """
    Parse one side of a time range into 24-hour (hour, minute).

    A part with no digits is treated as noon.
    """
    match = _TIME_PATTERN.search(time_part)
    if not match:
        diagnostics.warn(f"Could not parse time from '{time_part}', defaulting to noon", record)
        return 12, 0

    hour = int(match.group(1))
    minute = int(match.group(2)) if match.group(2) else 0
    marker = (match.group(3) or "").upper()

    if marker == "PM" and hour < 12:
        hour += 12
    elif marker == "AM" and hour == 12:
        hour = 0
    return hour, minute


def split_time_label(time_label: str) -> Tuple[str, str]:
    """Split 'start - end' on the first hyphen; the end part may be empty."""
    start_part, _, end_part = time_label.partition("-")
    return start_part.strip(), end_part.strip()


def normalize_time(
    date_label: str,
    time_label: str,
    diagnostics: Optional[Diagnostics] = None,
    zone: EventZone = PACIFIC,
    year: int = EVENT_YEAR,
    record: Optional[str] = None,
) -> NormalizedTimeRange:
    """
    Normalize a date label and a time-range label into absolute times.

    Malformed labels never raise; each guess is recorded in diagnostics.
    Calendar-impossible values (e.g. "JUNE 31", "27:00") raise ValueError,
    and numbers too large for datetime raise OverflowError; the caller must
    handle both.

    Args:
        date_label: Date text such as "JUNE 3"
        time_label: Time range text such as "9:30 AM - 11:20 AM"
        diagnostics: Sink for fallback warnings
        zone: Fixed-offset zone the wall times belong to
        year: Conference year
        record: Session reference for diagnostics

    Returns:
        NormalizedTimeRange with end strictly after start
    """
    if diagnostics is None:
        diagnostics = Diagnostics()
    date_label = date_label or ""
    time_label = time_label or ""

    month = parse_month(date_label, diagnostics, record)
    day = parse_day(date_label, diagnostics, record)
    tzinfo = zone.tzinfo()

    start_part, end_part = split_time_label(time_label)
    start_hour, start_minute = parse_clock(start_part, diagnostics, record)
    start = datetime(year, month, day, start_hour, start_minute, tzinfo=tzinfo)

    if end_part:
        end_hour, end_minute = parse_clock(end_part, diagnostics, record)
        end = datetime(year, month, day, end_hour, end_minute, tzinfo=tzinfo)
    else:
        diagnostics.warn(f"No end time found in '{time_label}', defaulting to 1 hour duration", record)
        end = start + DEFAULT_DURATION

    # "11:00 AM - 1:30" means 1:30 PM
    if end <= start:
        end = end + AMBIGUITY_SHIFT
    if end <= start:
        diagnostics.warn(f"End time not after start in '{time_label}', defaulting to 1 hour duration", record)
        end = start + DEFAULT_DURATION

    return NormalizedTimeRange(start=start, end=end)
