"""
Data models for prayer times and calendar events.
"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from enum import Enum


class PrayerKind(Enum):
    """
    The six daily prayer-time events, in calendar order.

    Each value is the upstream Vakit field holding that prayer's "HH:MM" time.
    Iterating the enum yields the fixed order used for every day.
    """

    FAJR = "Imsak"
    SUNRISE = "Gunes"
    DHUHR = "Ogle"
    ASR = "Ikindi"
    MAGHRIB = "Aksam"
    ISHA = "Yatsi"

    @property
    def api_field(self) -> str:
        return self.value


@dataclass(frozen=True)
class DailyPrayerTimes:
    """One day of prayer times from the upstream API."""

    reference_date: date
    times: dict[PrayerKind, str]  # "HH:MM", Turkey civil time

    def time_of(self, kind: PrayerKind) -> str:
        return self.times[kind]


@dataclass(frozen=True)
class EventDescriptor:
    """Calendar event attributes handed to the iCalendar serializer."""

    kind: PrayerKind
    title: str
    description: str
    start: datetime  # timezone-aware
    duration: timedelta
    status: str
    busy_status: str
    categories: tuple[str, ...]
    geo: tuple[float, float] | None = None

    @property
    def reference_date(self) -> date:
        return self.start.date()
