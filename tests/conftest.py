from __future__ import annotations

from typing import Any
from zoneinfo import ZoneInfo

import pytest

from attendance_board.config import Settings
from attendance_board.models import Action, AttendanceRecord


@pytest.fixture
def tokyo():
    return ZoneInfo("Asia/Tokyo")


@pytest.fixture
def settings() -> Settings:
    return Settings(
        api_base_url="https://attendance.example.test",
        team_id="T001",
        channel_id="C001",
        user_id="U001",
        api_key="secret",
    )


@pytest.fixture
def make_record():
    def _make(timestamp: str, action: Action = Action.CHECK_IN, user_id: str = "U001") -> AttendanceRecord:
        return AttendanceRecord(user_id=user_id, timestamp=timestamp, workplace_id="HQ", action=action)

    return _make


class FakeAttendanceClient:
    """Stands in for AttendanceClient; returns canned payloads."""

    def __init__(self, payloads: list[dict[str, Any]] | None = None, error: Exception | None = None):
        self.payloads = payloads or []
        self.error = error
        self.calls: list[tuple[str, ...]] = []
        self.closed = False

    async def fetch_monthly_logs(self, team_id, channel_id, user_id, year_month):
        self.calls.append((team_id, channel_id, user_id, year_month))
        if self.error is not None:
            raise self.error
        return list(self.payloads)

    async def _record(self, kind, team_id, channel_id, user_id):
        self.calls.append((kind, team_id, channel_id, user_id))
        if self.error is not None:
            raise self.error
        action = "start" if kind == "check_in" else "end"
        return {
            "success": True,
            "message": f"HQ: {kind}",
            "attendance_log": {
                "ID": "0198",
                "UserID": user_id,
                "Timestamp": "2025-08-07T09:00:00.123456789+09:00",
                "Action": action,
                "ChannelID": channel_id,
                "WorkplaceID": "HQ",
            },
        }

    async def check_in(self, team_id, channel_id, user_id):
        return await self._record("check_in", team_id, channel_id, user_id)

    async def check_out(self, team_id, channel_id, user_id):
        return await self._record("check_out", team_id, channel_id, user_id)

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def fake_client_factory():
    return FakeAttendanceClient
