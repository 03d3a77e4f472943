"""
Prayer times calendar feed generation for a district.

Fetches the district's daily records, converts each day into six events, and
serializes the whole sequence into one calendar.
"""

import logging
import re
from dataclasses import dataclass
from urllib.parse import urlencode

from core.upstream_client import EzanVaktiClient, UpstreamDataError
from services.calendar import build_ics
from services.prayer_events import events_for_days, parse_daily_record

logger = logging.getLogger(__name__)


class NoPrayerTimesError(Exception):
    """The upstream API returned no records for the district."""


@dataclass
class FeedResult:
    """Result of feed generation."""

    content: bytes
    days: int
    event_count: int


def feed_filename(district_id: str, language: str) -> str:
    safe_id = re.sub(r"[^A-Za-z0-9_-]", "_", district_id)
    return f"prayer-times-{safe_id}-{language}.ics"


def feed_url(base_url: str, district_id: str, language: str) -> str:
    """Subscribable feed URL for a district, relative to the service base URL."""
    query = urlencode({"districtID": district_id, "lang": language})
    return f"{base_url.rstrip('/')}/times-ics?{query}"


async def generate_feed(
    client: EzanVaktiClient, district_id: str, language: str
) -> FeedResult:
    """
    Build the calendar feed for one district.

    Raises:
        UpstreamError: if the prayer times cannot be fetched
        NoPrayerTimesError: if the upstream result is empty or not a list
        UpstreamDataError: if a record has a missing or malformed date/time
        CalendarSerializationError: if the calendar cannot be serialized
    """
    data = await client.get_prayer_times(district_id)

    if not isinstance(data, list) or not data:
        raise NoPrayerTimesError(
            f"No prayer times data received for district {district_id}"
        )

    try:
        records = [parse_daily_record(row) for row in data]
    except ValueError as e:
        raise UpstreamDataError(f"Invalid prayer time record: {e}") from e

    events = events_for_days(records, language)
    content = build_ics(events, scope=district_id)

    logger.debug(
        "Built feed for district %s (%s): %d days, %d events",
        district_id,
        language,
        len(records),
        len(events),
    )
    return FeedResult(content=content, days=len(records), event_count=len(events))
