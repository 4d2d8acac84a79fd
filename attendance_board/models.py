"""Dataclasses representing Attendance Board domain models."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional, Tuple

from .intensity import IntensityBucket, classify_hours


class Action(str, enum.Enum):
    CHECK_IN = "check_in"
    CHECK_OUT = "check_out"


@dataclass(frozen=True, slots=True)
class AttendanceRecord:
    user_id: str
    timestamp: str
    workplace_id: str
    action: Action


@dataclass(frozen=True, slots=True)
class DailyWorkSummary:
    """Work summary for one local calendar day."""

    date_key: str
    check_in: Optional[datetime] = None
    check_out: Optional[datetime] = None
    working_hours: float = 0.0
    records: Tuple[AttendanceRecord, ...] = field(default_factory=tuple)

    @property
    def is_misordered(self) -> bool:
        """True when the first check-out precedes the first check-in."""

        return self.working_hours < 0


@dataclass(frozen=True, slots=True)
class CalendarCell:
    date: date
    is_current_month: bool
    is_today: bool
    summary: Optional[DailyWorkSummary] = None

    @property
    def date_key(self) -> str:
        return self.date.isoformat()

    @property
    def intensity(self) -> IntensityBucket:
        if self.summary is None:
            return IntensityBucket.NONE
        return classify_hours(self.summary.working_hours)


__all__ = ["Action", "AttendanceRecord", "DailyWorkSummary", "CalendarCell"]
