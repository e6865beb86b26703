"""
Builds the human-readable DESCRIPTION body for a session.
"""

import re
from typing import List

from confcal.event_models import PACIFIC, EventZone, RawSession

# "Jane Smith, CTO, Acme" -> name plus up to two comma-delimited details
_SPEAKER_PATTERN = re.compile(
    r"([A-Z][a-z]+(?: [A-Z][a-z]+){1,3})(?:,?\s+([^,]+))?(?:,?\s+([^,]+))?"
)
_WHITESPACE = re.compile(r"\s+")


def split_speakers(speakers: List[str]) -> List[str]:
    """
    Regroup a scraped speaker blob into "Name, role, company" entries.
    Best effort only: falls back to the raw list when no name is recognised.
    """
    blob = _WHITESPACE.sub(" ", " ".join(speakers))
    grouped = []
    for match in _SPEAKER_PATTERN.finditer(blob):
        name = match.group(1).strip()
        details = [part.strip() for part in match.group(2, 3) if part]
        grouped.append(", ".join([name] + details))

    if not grouped:
        grouped = [s for s in speakers if s]
    return grouped


def timezone_note(zone: EventZone = PACIFIC) -> str:
    return f"All times are in {zone.long_name} ({zone.abbreviation} / {zone.offset_label()})"


def format_description(session: RawSession, zone: EventZone = PACIFIC) -> str:
    """
    Format a session description including speakers and session type.

    Args:
        session: Raw session from the scraper
        zone: Zone named in the trailing note

    Returns:
        Description text; never empty
    """
    parts = []

    if session.description:
        parts.append(session.description)

    speakers = [s for s in session.speakers if s and s.strip()]
    if speakers:
        parts.append(f"\nSpeakers: {' | '.join(split_speakers(speakers))}")

    if session.type:
        parts.append(f"\nSession Type: {session.type}")

    parts.append(f"\n{timezone_note(zone)}")

    return "\n".join(parts)
