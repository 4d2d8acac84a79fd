"""MCP server exposing Attendance Board views as tools."""

from __future__ import annotations

from typing import Optional

from mcp.server.fastmcp import FastMCP

from .client import AttendanceClient
from .config import load_settings
from .service import AttendanceBoardService, parse_year_month

mcp = FastMCP("attendance-board")

_settings = load_settings()
_client = AttendanceClient(_settings.api_base_url, timeout=_settings.http_timeout)
_service = AttendanceBoardService(_settings, _client)


def _ensure_month(year_month: Optional[str] = None) -> tuple[int, int]:
    if not year_month:
        today = _service.today()
        return today.year, today.month
    return parse_year_month(year_month)


@mcp.tool()
async def get_daily_summaries(year_month: Optional[str] = None) -> dict:
    """Return per-day check-in, check-out and working hours for a month (YYYYMM)."""

    year, month = _ensure_month(year_month)
    view = await _service.month_view(year, month - 1)
    return _service.days_payload(view)


@mcp.tool()
async def get_calendar(year_month: Optional[str] = None) -> dict:
    """Return the 42-cell calendar grid with intensity levels for a month (YYYYMM)."""

    year, month = _ensure_month(year_month)
    view = await _service.month_view(year, month - 1)
    return _service.calendar_payload(view)


@mcp.tool()
async def check_in() -> dict:
    """Record a check-in for the configured user and return the stored record."""

    return await _service.check_in()


@mcp.tool()
async def check_out() -> dict:
    """Record a check-out for the configured user and return the stored record."""

    return await _service.check_out()



def run() -> None:
    mcp.run()


__all__ = ["mcp", "get_daily_summaries", "get_calendar", "check_in", "check_out", "run"]


if __name__ == "__main__":  # pragma: no cover
    run()
