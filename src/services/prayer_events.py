"""
Prayer time to calendar event conversion.

Upstream times are "HH:MM" strings in Turkey civil time. Every start instant
is built against the fixed UTC+3 offset, never the host's local clock, so the
output is the same wherever the service runs.
"""

from datetime import date, datetime
from typing import Any, Iterable

from core.config import (
    EVENT_BUSY_STATUS,
    EVENT_CATEGORIES,
    EVENT_DURATION,
    EVENT_GEO,
    EVENT_STATUS,
    PRAYER_TITLES,
    SUPPORTED_LANGUAGES,
    TURKEY_TZ,
)
from core.validation import parse_reference_date, parse_time_of_day
from models.events import DailyPrayerTimes, EventDescriptor, PrayerKind


def prayer_title(language: str, kind: PrayerKind) -> str:
    """Localized title for a prayer kind."""
    if language not in SUPPORTED_LANGUAGES:
        raise ValueError(f"Unsupported language {language!r}")
    return PRAYER_TITLES[language][kind.name]


def to_start(reference_date: date, time_of_day: str) -> datetime:
    """Absolute start instant for "HH:MM" on reference_date in Turkey time."""
    hour, minute = parse_time_of_day(time_of_day)
    return datetime(
        reference_date.year,
        reference_date.month,
        reference_date.day,
        hour,
        minute,
        tzinfo=TURKEY_TZ,
    )


def to_event(
    reference_date: date,
    time_of_day: str,
    kind: PrayerKind,
    language: str = "tr",
) -> EventDescriptor:
    """
    Build the calendar event for one prayer on one day.

    Raises:
        InvalidTimeOfDayError: if time_of_day is not a valid "HH:MM"
        ValueError: if language is not supported
    """
    title = prayer_title(language, kind)
    return EventDescriptor(
        kind=kind,
        title=title,
        description=f"{title} - Prayer time reminder",
        start=to_start(reference_date, time_of_day),
        duration=EVENT_DURATION,
        status=EVENT_STATUS,
        busy_status=EVENT_BUSY_STATUS,
        categories=EVENT_CATEGORIES,
        geo=EVENT_GEO,
    )


def parse_daily_record(record: Any) -> DailyPrayerTimes:
    """Parse an upstream Vakit record into a DailyPrayerTimes."""
    if not isinstance(record, dict):
        raise ValueError(f"Expected a prayer time record, got {type(record).__name__}")

    times = {}
    for kind in PrayerKind:
        value = record.get(kind.api_field)
        if not value:
            raise ValueError(f"Record missing {kind.api_field} time")
        parse_time_of_day(value)
        times[kind] = value

    return DailyPrayerTimes(reference_date=parse_reference_date(record), times=times)


def events_for_day(record: DailyPrayerTimes, language: str = "tr") -> list[EventDescriptor]:
    """Six events for one day, in PrayerKind order."""
    return [
        to_event(record.reference_date, record.time_of(kind), kind, language)
        for kind in PrayerKind
    ]


def events_for_days(
    records: Iterable[DailyPrayerTimes], language: str = "tr"
) -> list[EventDescriptor]:
    """Flatten all days into one list: day order, then prayer order."""
    events = []
    for record in records:
        events.extend(events_for_day(record, language))
    return events
