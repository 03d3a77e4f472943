"""
Configuration constants and environment setup.
"""

import os
from datetime import timedelta, timezone
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# =============================================================================
# PATHS
# =============================================================================

PROJECT_ROOT = Path(__file__).parent.parent.parent
OUTPUT_DIR = PROJECT_ROOT / "output"

# =============================================================================
# UPSTREAM API (Ezan Vakti)
# =============================================================================

UPSTREAM_API_URL = os.environ.get("EZAN_VAKTI_API_URL", "https://ezanvakti.emushaf.net")
UPSTREAM_TIMEOUT_SECONDS = float(os.environ.get("UPSTREAM_TIMEOUT_SECONDS", "10"))

# =============================================================================
# PRAYER TIME CONFIGURATION
# =============================================================================

# Turkey civil time, fixed UTC+3 (no DST since 2016)
TURKEY_TZ = timezone(timedelta(hours=3), "+03")

SUPPORTED_LANGUAGES = ("tr", "en")
DEFAULT_LANGUAGE = "tr"

EVENT_DURATION = timedelta(minutes=15)
EVENT_STATUS = "CONFIRMED"
EVENT_BUSY_STATUS = "BUSY"
EVENT_CATEGORIES = ("Prayer Time", "Islamic")
EVENT_GEO = (41.0082, 28.9784)  # Istanbul, reference only

# Keyed by PrayerKind name
PRAYER_TITLES = {
    "tr": {
        "FAJR": "Sabah Namazı",
        "SUNRISE": "Güneş Doğuşu",
        "DHUHR": "Öğle Namazı",
        "ASR": "İkindi Namazı",
        "MAGHRIB": "Akşam Namazı",
        "ISHA": "Yatsı Namazı",
    },
    "en": {
        "FAJR": "Fajr Prayer",
        "SUNRISE": "Sunrise",
        "DHUHR": "Dhuhr Prayer",
        "ASR": "Asr Prayer",
        "MAGHRIB": "Maghrib Prayer",
        "ISHA": "Isha Prayer",
    },
}

# =============================================================================
# CALENDAR FEED CONFIGURATION
# =============================================================================

CALENDAR_PRODUCT_ID = "-//Prayer Times Calendar//ezanvakti//EN"
CALENDAR_NAME = "Islamic Prayer Times"
UID_DOMAIN = "prayer-times-calendar"

FEED_CACHE_MAX_AGE = int(os.environ.get("FEED_CACHE_MAX_AGE", str(2 * 24 * 3600)))
FEED_STALE_WHILE_REVALIDATE = int(os.environ.get("FEED_STALE_WHILE_REVALIDATE", str(24 * 3600)))
FEED_CACHE_CONTROL = (
    f"public, s-maxage={FEED_CACHE_MAX_AGE}, "
    f"stale-while-revalidate={FEED_STALE_WHILE_REVALIDATE}"
)

# =============================================================================
# API CONFIGURATION
# =============================================================================

API_HOST = os.environ.get("API_HOST", "0.0.0.0")
API_PORT = int(os.environ.get("API_PORT", "8000"))
API_DEBUG = os.environ.get("API_DEBUG", "false").lower() == "true"
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
API_VERSION = "1.0.0"
