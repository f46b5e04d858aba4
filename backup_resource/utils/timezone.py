"""
Time zone helpers for version metadata.
"""

from datetime import datetime
from typing import Optional

import pytz

from resource_exceptions import ConfigurationError


def get_reporting_zone(name: str):
    """
    Resolve a time zone name.

    Raises:
        ConfigurationError: If the zone is unknown
    """
    try:
        return pytz.timezone(name)
    except pytz.UnknownTimeZoneError as e:
        raise ConfigurationError(f"Unknown reporting time zone: {name}") from e


def to_zone(value: datetime, zone) -> datetime:
    """Convert an aware instant into ``zone``; naive values are taken as UTC."""
    if value.tzinfo is None:
        value = pytz.utc.localize(value)
    return value.astimezone(zone)


def format_rfc3339(value: Optional[datetime]) -> str:
    """
    Format an aware datetime as RFC3339 with second precision.

    UTC renders as ``Z``, other offsets as ``+HH:MM``. An absent value
    renders as an empty string.
    """
    if value is None:
        return ""
    if value.tzinfo is None:
        value = pytz.utc.localize(value)

    base = value.strftime("%Y-%m-%dT%H:%M:%S")
    offset = value.utcoffset()
    total_minutes = int(offset.total_seconds() // 60)
    if total_minutes == 0:
        return f"{base}Z"

    sign = "+" if total_minutes > 0 else "-"
    hours, minutes = divmod(abs(total_minutes), 60)
    return f"{base}{sign}{hours:02d}:{minutes:02d}"


def format_in_zone(value: Optional[datetime], zone) -> str:
    """Convert ``value`` into ``zone`` and format it as RFC3339."""
    if value is None:
        return ""
    return format_rfc3339(to_zone(value, zone))
