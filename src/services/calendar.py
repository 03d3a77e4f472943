"""
iCalendar feed serialization for prayer time events.

Feeds carry no VTIMEZONE block: every DTSTART is written in UTC, converted
from the event's fixed-offset Turkey start. UID and DTSTAMP derive only from
the event itself, so the same input always serializes to the same bytes.
"""

from hashlib import md5
from typing import Iterable
from zoneinfo import ZoneInfo

from icalendar import Calendar, Event

from core.config import CALENDAR_NAME, CALENDAR_PRODUCT_ID, UID_DOMAIN
from models.events import EventDescriptor

UTC = ZoneInfo("UTC")


class CalendarSerializationError(Exception):
    """The event list could not be turned into calendar text."""


def stable_uid(event: EventDescriptor, scope: str = "") -> str:
    """Per-event UID, stable for the same scope, date and prayer."""
    key = f"{scope}|{event.reference_date.isoformat()}|{event.kind.name}"
    return f"{md5(key.encode()).hexdigest()}@{UID_DOMAIN}"


def to_ical_event(event: EventDescriptor, scope: str = "") -> Event:
    """Convert one EventDescriptor to an icalendar VEVENT."""
    start_utc = event.start.astimezone(UTC)

    ev = Event()
    ev.add("uid", stable_uid(event, scope))
    ev.add("dtstamp", start_utc)
    ev.add("dtstart", start_utc)
    ev.add("duration", event.duration)
    ev.add("summary", event.title)
    ev.add("description", event.description)
    ev.add("status", event.status)
    ev.add("transp", "OPAQUE" if event.busy_status == "BUSY" else "TRANSPARENT")
    ev.add("X-MICROSOFT-CDO-BUSYSTATUS", event.busy_status)
    ev.add("categories", list(event.categories))
    if event.geo:
        ev.add("geo", event.geo)
    return ev


def build_ics(
    events: Iterable[EventDescriptor],
    scope: str = "",
    prodid: str = CALENDAR_PRODUCT_ID,
    calname: str = CALENDAR_NAME,
) -> bytes:
    """
    Serialize events, in the given order, into one VCALENDAR.

    Args:
        events: Event descriptors to include
        scope: Identifier mixed into each UID (the district id for feeds)
        prodid: PRODID of the calendar
        calname: X-WR-CALNAME shown by calendar apps

    Raises:
        CalendarSerializationError: if any event cannot be serialized
    """
    try:
        cal = Calendar()
        cal.add("prodid", prodid)
        cal.add("version", "2.0")
        cal.add("calscale", "GREGORIAN")
        cal.add("method", "PUBLISH")
        cal.add("X-WR-CALNAME", calname)

        for event in events:
            cal.add_component(to_ical_event(event, scope))

        return cal.to_ical()
    except Exception as e:
        raise CalendarSerializationError(f"Failed to build calendar: {e}") from e
