"""Tests for iCalendar serialization."""

from datetime import date, datetime, timezone

import pytest
from icalendar import Calendar

from models.events import PrayerKind
from services.calendar import CalendarSerializationError, build_ics, stable_uid
from services.prayer_events import events_for_days, parse_daily_record, to_event


@pytest.fixture
def events(sample_times):
    return events_for_days([parse_daily_record(row) for row in sample_times], "en")


def test_build_ics_contains_every_event(events):
    cal = Calendar.from_ical(build_ics(events, scope="9541"))
    vevents = cal.walk("VEVENT")

    assert len(vevents) == len(events) == 18
    assert str(cal["X-WR-CALNAME"]) == "Islamic Prayer Times"
    assert str(cal["VERSION"]) == "2.0"
    assert [str(v["SUMMARY"]) for v in vevents[:6]] == [e.title for e in events[:6]]


def test_start_written_in_utc_without_vtimezone(events):
    payload = build_ics(events, scope="9541")

    assert b"BEGIN:VTIMEZONE" not in payload
    assert b"DTSTART:20240315T021200Z" in payload
    assert b"DURATION:PT15M" in payload

    first = Calendar.from_ical(payload).walk("VEVENT")[0]
    assert first.decoded("DTSTART") == datetime(2024, 3, 15, 2, 12, tzinfo=timezone.utc)


def test_event_attributes(events):
    payload = build_ics(events, scope="9541")
    first = Calendar.from_ical(payload).walk("VEVENT")[0]

    assert str(first["STATUS"]) == "CONFIRMED"
    assert str(first["TRANSP"]) == "OPAQUE"
    assert str(first["X-MICROSOFT-CDO-BUSYSTATUS"]) == "BUSY"
    assert str(first["DESCRIPTION"]) == "Fajr Prayer - Prayer time reminder"
    assert b"CATEGORIES:Prayer Time,Islamic" in payload


def test_output_is_deterministic(events):
    assert build_ics(events, scope="9541") == build_ics(events, scope="9541")


def test_uids_unique_and_stable(events):
    uids = [stable_uid(e, "9541") for e in events]
    assert len(set(uids)) == len(uids)

    same = to_event(date(2024, 3, 15), "05:12", PrayerKind.FAJR, "tr")
    assert stable_uid(same, "9541") == uids[0]
    assert stable_uid(same, "9542") != uids[0]
    assert uids[0].endswith("@prayer-times-calendar")


def test_serialization_failure_is_wrapped():
    with pytest.raises(CalendarSerializationError):
        build_ics([object()])
