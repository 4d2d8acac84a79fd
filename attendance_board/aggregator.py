"""Group attendance records into per-day work summaries."""

from __future__ import annotations

from collections import defaultdict
from datetime import datetime, tzinfo
from typing import Dict, Iterable, List, Optional, Tuple

from .models import Action, AttendanceRecord, DailyWorkSummary
from .timestamps import INVALID_DATE, parse_timestamp, to_zone

# Records without a usable timestamp are collected under this key.
UNPARSABLE_DATE_KEY = INVALID_DATE

ParsedRecord = Tuple[Optional[datetime], AttendanceRecord]


def date_key_for(instant: Optional[datetime], zone: tzinfo) -> str:
    local = to_zone(instant, zone)
    if local is None:
        return UNPARSABLE_DATE_KEY
    return local.date().isoformat()


def _first_instant(entries: List[ParsedRecord], action: Action) -> Optional[datetime]:
    for instant, record in entries:
        if instant is not None and record.action is action:
            return instant
    return None


def summarize_day(date_key: str, entries: List[ParsedRecord]) -> DailyWorkSummary:
    """Build the summary for one day from its ``(instant, record)`` pairs.

    Only the first check-in and the first check-out are used for the hours;
    any further pairs stay in ``records`` untouched.
    """

    ordered = sorted(
        entries,
        key=lambda entry: (entry[0] is None, entry[0].timestamp() if entry[0] else 0.0),
    )
    check_in = _first_instant(ordered, Action.CHECK_IN)
    check_out = _first_instant(ordered, Action.CHECK_OUT)

    working_hours = 0.0
    if check_in is not None and check_out is not None:
        working_hours = (check_out - check_in).total_seconds() / 3600

    return DailyWorkSummary(
        date_key=date_key,
        check_in=check_in,
        check_out=check_out,
        working_hours=working_hours,
        records=tuple(record for _, record in ordered),
    )


def aggregate_daily(records: Iterable[AttendanceRecord], zone: tzinfo) -> List[DailyWorkSummary]:
    """Return one summary per local day in ``zone``, most recent day first.

    The unparsable bucket, if any, is placed after every real day.
    """

    by_day: Dict[str, List[ParsedRecord]] = defaultdict(list)
    for record in records:
        # Instants that cannot be shown in the display zone count as unparsable.
        instant = to_zone(parse_timestamp(record.timestamp, zone), zone)
        by_day[date_key_for(instant, zone)].append((instant, record))

    summaries = [summarize_day(key, entries) for key, entries in by_day.items()]
    summaries.sort(
        key=lambda summary: (summary.date_key != UNPARSABLE_DATE_KEY, summary.date_key),
        reverse=True,
    )
    return summaries


def monthly_total_hours(summaries: Iterable[DailyWorkSummary]) -> float:
    return sum(summary.working_hours for summary in summaries)


__all__ = [
    "UNPARSABLE_DATE_KEY",
    "aggregate_daily",
    "date_key_for",
    "monthly_total_hours",
    "summarize_day",
]
