"""
Raw session input: scraper JSON output and a bundled sample agenda.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Union

from confcal.event_models import RawSession
from confcal.logging_helper import Log

# Scraper JSON key -> RawSession field
_FIELD_KEYS = {
    "date": "date",
    "time": "time",
    "title": "title",
    "description": "description",
    "location": "location",
    "type": "type",
    "sessionId": "source_id",
    "detailsUrl": "details_url",
}


def raw_session_from_dict(data: Dict[str, Any]) -> RawSession:
    """Build a RawSession from one scraper record; absent keys become empty."""
    values = {}
    for key, field_name in _FIELD_KEYS.items():
        value = data.get(key)
        values[field_name] = "" if value is None else str(value).strip()

    speakers = data.get("speakers") or []
    if isinstance(speakers, str):
        speakers = [speakers]
    values["speakers"] = [str(s).strip() for s in speakers if s is not None and str(s).strip()]
    return RawSession(**values)


def load_raw_sessions(path: Union[str, Path]) -> List[RawSession]:
    """
    Load scraper output: a JSON array of session objects.

    Raises:
        OSError: if the file cannot be read
        ValueError: if the content is not a JSON array of objects
    """
    path = Path(path)
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise ValueError(f"Expected a JSON array of sessions in {path}")

    sessions = []
    for index, item in enumerate(data):
        if not isinstance(item, dict):
            raise ValueError(f"Session #{index} in {path} is not an object")
        sessions.append(raw_session_from_dict(item))

    Log.info(f"Loaded {len(sessions)} raw sessions from {path}")
    return sessions


SAMPLE_AGENDA: List[Dict[str, Any]] = [
    {
        "date": "JUNE 3",
        "day": "Tuesday",
        "sessions": [
            {
                "title": "Registration",
                "time": "8 AM - 7 PM",
                "type": "GENERAL",
                "description": "Conference registration and badge pickup",
                "location": "Main Lobby",
                "speakers": [],
            },
            {
                "title": "Personal Identity Workshop",
                "time": "9:30 AM - 11:20 AM",
                "type": "WORKSHOP",
                "description": "This workshop explores the concept of personal identity in the digital age, "
                               "discussing how identity is established, verified, and maintained online.",
                "location": "Workshop Room A",
                "speakers": ["Jane Smith", "John Doe"],
                "detailsUrl": "https://identiverse.com/idv25/agenda/session/?idvid=1042",
            },
            {
                "title": "Welcome Reception",
                "time": "6:00 PM - 8:00 PM",
                "type": "NETWORKING",
                "description": "Join us for the welcome reception to network with other attendees and speakers.",
                "location": "Grand Ballroom",
                "speakers": [],
            },
        ],
    },
    {
        "date": "JUNE 4",
        "day": "Wednesday",
        "sessions": [
            {
                "title": "Opening Keynote: The Future of Identity",
                "time": "9:00 AM - 10:00 AM",
                "type": "KEYNOTE",
                "description": "Exploring the evolution of identity management and what the future holds "
                               "for this critical field.",
                "location": "Main Stage",
                "speakers": ["Sarah Johnson, Chief Identity Officer, Acme Corp"],
                "detailsUrl": "https://identiverse.com/idv25/agenda/session/?idvid=1101",
            },
            {
                "title": "Zero Trust Architecture Implementation",
                "time": "10:30 AM - 11:30 AM",
                "type": "TECHNICAL",
                "description": "Detailed walkthrough of implementing Zero Trust Architecture in "
                               "enterprise environments.",
                "location": "Technical Track Room",
                "speakers": ["Michael Chen", "Lisa Rodriguez"],
            },
            {
                "title": "Lunch & Learn: Identity Standards Update",
                "time": "12:00 PM - 1:30 PM",
                "type": "GENERAL",
                "description": "Updates on the latest identity standards while enjoying lunch.",
                "location": "Dining Hall",
                "speakers": ["Standards Committee Panel"],
            },
        ],
    },
    {
        "date": "JUNE 5",
        "day": "Thursday",
        "sessions": [
            {
                "title": "Decentralized Identity Deep Dive",
                "time": "9:00 AM - 11:00 AM",
                "type": "TECHNICAL",
                "description": "Technical exploration of decentralized identity systems.",
                "location": "Innovation Lab",
                "speakers": ["James Wilson", "Emma Thompson"],
            },
            {
                "title": "AI and Identity Workshop",
                "time": "11:00 AM - 1:30",
                "type": "WORKSHOP",
                "description": "Hands-on workshop on agentic AI, delegation; and identity.",
                "location": "Workshop Room B",
                "speakers": [],
                "sessionId": "1207",
            },
            {
                "title": "Conference Party",
                "time": "7:00 PM - 10:00 PM",
                "type": "NETWORKING",
                "description": "Join us for the annual Identiverse party! Food, drinks, and entertainment provided.",
                "location": "Rooftop Terrace",
                "speakers": [],
            },
        ],
    },
    {
        "date": "JUNE 6",
        "day": "Friday",
        "sessions": [
            {
                "title": "Closing Keynote: Where Do We Go From Here?",
                "time": "11:30 AM - 12:30 PM",
                "type": "KEYNOTE",
                "description": "Reflecting on the conference and looking ahead to the future of identity.",
                "location": "Main Stage",
                "speakers": ["Conference Chair"],
            },
            {
                "title": "Farewell Lunch",
                "time": "12:30 PM",
                "type": "GENERAL",
                "description": "Final networking opportunity with lunch provided",
                "location": "",
                "speakers": [],
            },
        ],
    },
]


def sample_raw_sessions() -> List[RawSession]:
    """Flatten SAMPLE_AGENDA into raw sessions, each stamped with its day's date."""
    sessions = []
    for day in SAMPLE_AGENDA:
        for item in day["sessions"]:
            sessions.append(raw_session_from_dict({**item, "date": day["date"]}))
    return sessions
