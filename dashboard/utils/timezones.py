"""
Display timezone helpers. Candle times are always UTC; these only affect how
charts label the x-axis.
"""

import pytz

TIMEZONE_OPTIONS = [
    "UTC",
    "US/Eastern",
    "US/Central",
    "US/Pacific",
    "Europe/London",
    "Europe/Berlin",
    "Asia/Tokyo",
    "Asia/Hong_Kong",
    "Asia/Singapore",
    "Australia/Sydney",
]


def resolve_timezone(name: str) -> str:
    """Return ``name`` if pytz knows it, otherwise ``"UTC"``."""
    try:
        return pytz.timezone(name).zone
    except (pytz.UnknownTimeZoneError, AttributeError):
        return "UTC"
