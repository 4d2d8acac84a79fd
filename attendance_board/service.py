"""Core orchestration logic for Attendance Board."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, tzinfo
from typing import Any, Dict, List, Optional

from .aggregator import aggregate_daily, monthly_total_hours
from .calendar_grid import attach_summaries, build_calendar_grid, normalize_month
from .client import AttendanceClient
from .config import Settings
from .models import Action, AttendanceRecord, CalendarCell, DailyWorkSummary
from .timestamps import format_date, format_time, format_working_hours, parse_timestamp
from .validation import RecordValidationError, record_from_payload, validate_payloads

logger = logging.getLogger(__name__)

ACTION_LABELS = {
    Action.CHECK_IN: "Check in",
    Action.CHECK_OUT: "Check out",
}


@dataclass(slots=True)
class MonthView:
    year: int
    month: int
    summaries: List[DailyWorkSummary]
    cells: List[CalendarCell]
    rejected: int = 0

    @property
    def year_month(self) -> str:
        return f"{self.year:04d}{self.month:02d}"

    @property
    def total_hours(self) -> float:
        return monthly_total_hours(self.summaries)


def action_label(action: Action) -> str:
    return ACTION_LABELS[action]


def build_month_view(
    records: List[AttendanceRecord],
    year: int,
    month_index: int,
    today: date,
    zone: tzinfo,
    rejected: int = 0,
) -> MonthView:
    """Run records through aggregation and the calendar grid for one month."""

    year, month = normalize_month(year, month_index)
    summaries = aggregate_daily(records, zone)
    cells = attach_summaries(build_calendar_grid(year, month - 1, today), summaries)
    return MonthView(year=year, month=month, summaries=summaries, cells=cells, rejected=rejected)


class AttendanceBoardService:
    """High-level service that fetches attendance logs and derives the views."""

    def __init__(self, settings: Settings, client: AttendanceClient) -> None:
        self.settings = settings
        self.client = client

    @property
    def zone(self) -> tzinfo:
        return self.settings.zone

    def today(self) -> date:
        return datetime.now(self.zone).date()

    async def fetch_records(self, year: int, month: int) -> tuple[List[AttendanceRecord], int]:
        payloads = await self.client.fetch_monthly_logs(
            self.settings.team_id,
            self.settings.channel_id,
            self.settings.user_id,
            f"{year:04d}{month:02d}",
        )
        records, errors = validate_payloads(payloads)
        for error in errors:
            logger.warning("rejected attendance log entry: %s (%r)", error, error.payload)
        logger.info("fetched %d attendance records for %04d-%02d", len(records), year, month)
        return records, len(errors)

    async def month_view(self, year: int, month_index: int, today: Optional[date] = None) -> MonthView:
        year, month = normalize_month(year, month_index)
        records, rejected = await self.fetch_records(year, month)
        return build_month_view(
            records,
            year,
            month - 1,
            today or self.today(),
            self.zone,
            rejected=rejected,
        )

    # region Recording
    async def record_action(self, action: Action) -> Dict[str, Any]:
        """Check in or out as the configured user and return the stored record."""

        send = self.client.check_in if action is Action.CHECK_IN else self.client.check_out
        data = await send(self.settings.team_id, self.settings.channel_id, self.settings.user_id)
        logger.info("recorded %s for %s", action.value, self.settings.user_id)

        record: Optional[Dict[str, Any]] = None
        log = data.get("attendance_log")
        if log is not None:
            try:
                record = self.record_to_dict(record_from_payload(log))
            except RecordValidationError as exc:
                logger.warning("unexpected attendance_log in response: %s (%r)", exc, log)
        return {"message": data.get("message", ""), "record": record}

    async def check_in(self) -> Dict[str, Any]:
        return await self.record_action(Action.CHECK_IN)

    async def check_out(self) -> Dict[str, Any]:
        return await self.record_action(Action.CHECK_OUT)

    # endregion

    # region Serialization
    def record_to_dict(self, record: AttendanceRecord) -> Dict[str, Any]:
        instant = parse_timestamp(record.timestamp, self.zone)
        return {
            "user_id": record.user_id,
            "workplace_id": record.workplace_id,
            "action": record.action.value,
            "action_label": action_label(record.action),
            "timestamp": record.timestamp,
            "date": format_date(instant, self.zone),
            "time": format_time(instant, self.zone),
        }

    def summary_to_dict(self, summary: DailyWorkSummary) -> Dict[str, Any]:
        return {
            "date": summary.date_key,
            "check_in": format_time(summary.check_in, self.zone) if summary.check_in else None,
            "check_out": format_time(summary.check_out, self.zone) if summary.check_out else None,
            "working_hours": summary.working_hours,
            "working_hours_display": format_working_hours(summary.working_hours),
            "misordered": summary.is_misordered,
            "records": [self.record_to_dict(record) for record in summary.records],
        }

    def cell_to_dict(self, cell: CalendarCell) -> Dict[str, Any]:
        return {
            "date": cell.date_key,
            "day": cell.date.day,
            "is_current_month": cell.is_current_month,
            "is_today": cell.is_today,
            "working_hours": cell.summary.working_hours if cell.summary else 0.0,
            "intensity": int(cell.intensity),
            "high_contrast": cell.intensity.high_contrast,
        }

    def days_payload(self, view: MonthView) -> Dict[str, Any]:
        return {
            "year_month": view.year_month,
            "total_hours": view.total_hours,
            "rejected": view.rejected,
            "days": [self.summary_to_dict(summary) for summary in view.summaries],
        }

    def calendar_payload(self, view: MonthView) -> Dict[str, Any]:
        return {
            "year_month": view.year_month,
            "total_hours": view.total_hours,
            "rejected": view.rejected,
            "cells": [self.cell_to_dict(cell) for cell in view.cells],
        }

    # endregion


def parse_year_month(value: str) -> tuple[int, int]:
    """Split a ``YYYYMM`` string into ``(year, month)``; raises ``ValueError``."""

    if len(value) != 6 or not value.isdigit():
        raise ValueError(f"year_month must be YYYYMM, got {value!r}")
    year, month = int(value[:4]), int(value[4:])
    if not 1 <= month <= 12:
        raise ValueError(f"month out of range in {value!r}")
    return year, month


__all__ = [
    "AttendanceBoardService",
    "MonthView",
    "action_label",
    "build_month_view",
    "parse_year_month",
]
