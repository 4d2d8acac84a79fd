"""Timestamp normalization and display formatting.

The attendance API hands back timestamps in whatever shape the backend's time
library happened to print them. Besides plain ISO-8601 this includes Go's
``time.Time.String()`` output, e.g.::

    2025-08-07 15:08:33.414108928 +0900 JST m=+0.001234

``parse_timestamp`` accepts both and never raises; anything it cannot make
sense of comes back as ``None`` (unparsable).
"""

from __future__ import annotations

import re
from datetime import datetime, timezone, tzinfo
from typing import Any, Optional

UNPARSABLE_LITERALS = {"", "undefined", "null"}

INVALID_TIME = "Invalid Time"
INVALID_DATE = "Invalid Date"

_MONOTONIC_SUFFIX = re.compile(r"\s+m=[+-][\d.]+$")
_FRACTIONAL_SECONDS = re.compile(r"(\d{2}:\d{2}:\d{2})\.\d+")
_ZONE_ABBREVIATION = re.compile(r"\s+[A-Z]{3,4}$")
_COMPACT_OFFSET = re.compile(r"([+-])(\d{2})(\d{2})$")
_DATE_TIME_SPACE = re.compile(r"^(\d{4}-\d{2}-\d{2})\s+(\d{2}:)")
_OFFSET_SPACE = re.compile(r"\s+([+-]\d{2}:\d{2})$")


def _from_iso(text: str, default_zone: tzinfo) -> Optional[datetime]:
    try:
        value = datetime.fromisoformat(text)
    except ValueError:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=default_zone)
    return value


def to_zone(instant: Optional[datetime], zone: tzinfo) -> Optional[datetime]:
    """Convert ``instant`` to ``zone``; ``None`` if it falls outside the datetime range there."""

    if instant is None:
        return None
    try:
        return instant.astimezone(zone)
    except (OverflowError, ValueError):
        return None


def _clean_go_timestamp(text: str) -> str:
    cleaned = _MONOTONIC_SUFFIX.sub("", text)
    cleaned = _FRACTIONAL_SECONDS.sub(r"\1", cleaned)
    cleaned = _ZONE_ABBREVIATION.sub("", cleaned)
    cleaned = _COMPACT_OFFSET.sub(r"\1\2:\3", cleaned)
    cleaned = _DATE_TIME_SPACE.sub(r"\1T\2", cleaned)
    return _OFFSET_SPACE.sub(r"\1", cleaned)


def parse_timestamp(text: Any, default_zone: tzinfo = timezone.utc) -> Optional[datetime]:
    """Return an aware datetime for ``text`` or ``None`` if it is unparsable.

    Naive values are interpreted in ``default_zone``.
    """

    if not isinstance(text, str):
        return None
    text = text.strip()
    if text in UNPARSABLE_LITERALS:
        return None

    parsed = _from_iso(text, default_zone)
    if parsed is None:
        parsed = _from_iso(_clean_go_timestamp(text), default_zone)
    if to_zone(parsed, timezone.utc) is None:
        return None
    return parsed


def format_time(instant: Optional[datetime], zone: tzinfo) -> str:
    """Render the time of day as ``HH:MM`` in ``zone``."""

    local = to_zone(instant, zone)
    if local is None:
        return INVALID_TIME
    return local.strftime("%H:%M")


def format_date(instant: Optional[datetime], zone: tzinfo) -> str:
    """Render the calendar date as ``YYYY/M/D`` in ``zone``."""

    local = to_zone(instant, zone)
    if local is None:
        return INVALID_DATE
    return f"{local.year}/{local.month}/{local.day}"


def format_working_hours(hours: float) -> str:
    sign = "-" if hours < 0 else ""
    hours = abs(hours)
    whole = int(hours)
    minutes = round((hours - whole) * 60)
    if minutes == 60:
        whole, minutes = whole + 1, 0
    return f"{sign}{whole}h {minutes}m"


__all__ = [
    "INVALID_DATE",
    "INVALID_TIME",
    "format_date",
    "format_time",
    "format_working_hours",
    "parse_timestamp",
    "to_zone",
]
