"""Fixed six-week month grid for the calendar view."""

from __future__ import annotations

from dataclasses import replace
from datetime import date, timedelta
from typing import Iterable, List

from .models import CalendarCell, DailyWorkSummary

GRID_WEEKS = 6
GRID_SIZE = GRID_WEEKS * 7


def normalize_month(year: int, month_index: int) -> tuple[int, int]:
    """Return ``(year, month)`` with a 1-based month for a zero-based index.

    Indices outside 0..11 roll into the neighbouring years.
    """

    extra_years, index = divmod(month_index, 12)
    return year + extra_years, index + 1


def build_calendar_grid(year: int, month_index: int, today: date) -> List[CalendarCell]:
    """Return the 42 cells covering ``month_index`` (0 = January) of ``year``.

    The grid starts on the Sunday on or before the 1st and always spans six
    weeks, so it spills into the previous and next months.
    """

    year, month = normalize_month(year, month_index)
    first = date(year, month, 1)
    # date.weekday() is Monday based; the grid's first column is Sunday.
    leading = (first.weekday() + 1) % 7

    start = first - timedelta(days=leading)
    cells: List[CalendarCell] = []
    for offset in range(GRID_SIZE):
        day = start + timedelta(days=offset)
        cells.append(
            CalendarCell(
                date=day,
                is_current_month=(day.year, day.month) == (year, month),
                is_today=day == today,
            )
        )
    return cells


def attach_summaries(
    cells: Iterable[CalendarCell], summaries: Iterable[DailyWorkSummary]
) -> List[CalendarCell]:
    by_key = {summary.date_key: summary for summary in summaries}
    return [replace(cell, summary=by_key.get(cell.date_key)) for cell in cells]


__all__ = ["GRID_SIZE", "attach_summaries", "build_calendar_grid", "normalize_month"]
