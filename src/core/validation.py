"""
Input validation for prayer-time records and request parameters.
"""

import re
from datetime import date, datetime

from core.config import DEFAULT_LANGUAGE, SUPPORTED_LANGUAGES

TIME_OF_DAY_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})$")


class InvalidTimeOfDayError(ValueError):
    """A time-of-day string is not a valid 24-hour "HH:MM"."""


def parse_time_of_day(value: str) -> tuple[int, int]:
    """
    Parse a 24-hour "HH:MM" string.

    Raises:
        InvalidTimeOfDayError: if the string is malformed or out of range
    """
    match = TIME_OF_DAY_PATTERN.match(value.strip()) if isinstance(value, str) else None
    if not match:
        raise InvalidTimeOfDayError(f"Invalid time of day {value!r}, expected HH:MM")

    hour, minute = int(match.group(1)), int(match.group(2))
    if not 0 <= hour <= 23:
        raise InvalidTimeOfDayError(f"Hour out of range in {value!r}")
    if not 0 <= minute <= 59:
        raise InvalidTimeOfDayError(f"Minute out of range in {value!r}")
    return hour, minute


def parse_reference_date(record: dict) -> date:
    """
    Extract the Gregorian date of an upstream Vakit record.

    Prefers MiladiTarihUzunIso8601 (e.g. "2024-03-15T00:00:00.0000000+03:00"),
    whose date part is already Turkey local; falls back to MiladiTarihKisa
    ("15.03.2024").
    """
    iso_value = record.get("MiladiTarihUzunIso8601")
    if iso_value:
        try:
            return date.fromisoformat(str(iso_value)[:10])
        except ValueError:
            pass

    short_value = record.get("MiladiTarihKisa")
    if short_value:
        try:
            return datetime.strptime(str(short_value), "%d.%m.%Y").date()
        except ValueError:
            pass

    raise ValueError(
        f"Record has no usable date (MiladiTarihUzunIso8601={iso_value!r}, "
        f"MiladiTarihKisa={short_value!r})"
    )


def normalize_language(value: str | None) -> str:
    """Return a supported language code; empty means the default."""
    if not value:
        return DEFAULT_LANGUAGE
    language = value.strip().lower()
    if language not in SUPPORTED_LANGUAGES:
        raise ValueError(
            f"Unsupported language {value!r}, expected one of: {', '.join(SUPPORTED_LANGUAGES)}"
        )
    return language


LOCATION_ID_PATTERN = re.compile(r"[A-Za-z0-9_-]{1,64}")


def validate_location_id(value: str) -> str:
    """Location ids are plain tokens; they end up in URLs and file names."""
    if not LOCATION_ID_PATTERN.fullmatch(value):
        raise ValueError(
            f"Invalid location id {value!r}, expected letters, digits, '-' or '_'"
        )
    return value
