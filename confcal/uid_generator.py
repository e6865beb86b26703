"""
Stable UID generation for calendar events.

UIDs must not change between scrapes, otherwise calendar clients import a
re-generated file as new events instead of updating the existing ones.
A session ID assigned by the conference site is preferred; without one the
UID is derived from the title and the date only, never the time of day.
"""

import re
from datetime import datetime
from typing import Optional

UID_PREFIX = "identiverse-2025"
UID_DOMAIN = "identiverse.com"
DEFAULT_UID_DATE = "20250603"
CLEAN_TITLE_LENGTH = 30

_NON_ALNUM = re.compile(r"[^a-zA-Z0-9]")
_SOURCE_ID_PATTERN = re.compile(r"idvid=(\d+)")


def extract_source_id(details_url: Optional[str]) -> Optional[str]:
    """Pull the upstream session ID out of a detail-page URL (?idvid=1234)."""
    if not details_url:
        return None
    match = _SOURCE_ID_PATTERN.search(details_url)
    return match.group(1) if match else None


def title_hash(title: str) -> str:
    """
    32-bit rolling hash of the title as 8 hex digits.

    hash = hash * 31 + code_unit over UTF-16 code units, wrapped to a signed
    32-bit integer, then absolute-valued. Changing this breaks UID stability
    for every calendar already imported.
    """
    value = 0
    encoded = title.encode("utf-16-le")
    for i in range(0, len(encoded), 2):
        code_unit = encoded[i] | (encoded[i + 1] << 8)
        value = (value * 31 + code_unit) & 0xFFFFFFFF
    if value >= 0x80000000:
        value -= 0x100000000
    return format(abs(value), "x").zfill(8)[:8]


def generate_uid(title: str, start_time: Optional[datetime], source_id: Optional[str] = None) -> str:
    """
    Build the UID for a session.

    Args:
        title: Raw session title
        start_time: Session start; only its date is used
        source_id: Upstream session ID, if known

    Returns:
        UID such as identiverse-2025-event-1234@identiverse.com
    """
    if source_id:
        return f"{UID_PREFIX}-event-{source_id}@{UID_DOMAIN}"

    title = title or ""
    clean_title = _NON_ALNUM.sub("", title)[:CLEAN_TITLE_LENGTH]
    date_str = start_time.strftime("%Y%m%d") if start_time is not None else DEFAULT_UID_DATE
    return f"{UID_PREFIX}-{clean_title}-{date_str}-{title_hash(title)}@{UID_DOMAIN}"
