"""HTTP client for the attendance log API."""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

logger = logging.getLogger(__name__)

MONTHLY_LOGS_PATH = "/api/v1/attendance/monthly"
CHECK_IN_PATH = "/api/v1/attendance/check-in"
CHECK_OUT_PATH = "/api/v1/attendance/check-out"


class AttendanceApiError(RuntimeError):
    """Raised when the attendance API returns an error response."""

    def __init__(self, endpoint: str, error: str) -> None:
        super().__init__(f"Attendance API error for {endpoint}: {error}")
        self.endpoint = endpoint
        self.error = error


class AttendanceClient:
    """Simple async wrapper around the attendance API endpoints we use."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers={"Accept": "application/json"},
            timeout=timeout,
            transport=transport,
        )

    async def close(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str, **kwargs: Any) -> dict[str, Any]:
        """Send a request and return the body of a ``success: true`` response."""

        try:
            response = await self._client.request(method, path, **kwargs)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as exc:
            logger.error("attendance API %s returned %s", path, exc.response.status_code)
            raise AttendanceApiError(path, f"http_{exc.response.status_code}") from exc
        except httpx.HTTPError as exc:
            logger.error("attendance API request to %s failed: %s", path, exc)
            raise AttendanceApiError(path, "request_failed") from exc
        except ValueError as exc:
            raise AttendanceApiError(path, "invalid_json") from exc

        if not isinstance(data, dict) or not data.get("success"):
            message = data.get("message", "unknown_error") if isinstance(data, dict) else "unknown_error"
            raise AttendanceApiError(path, message)
        return data

    async def fetch_monthly_logs(
        self,
        team_id: str,
        channel_id: str,
        user_id: str,
        year_month: str,
    ) -> list[dict[str, Any]]:
        """Return the raw ``attendance_logs`` entries for ``year_month`` (YYYYMM)."""

        params = {
            "team_id": team_id,
            "channel_id": channel_id,
            "user_id": user_id,
            "year_month": year_month,
        }
        data = await self._request("GET", MONTHLY_LOGS_PATH, params=params)
        return list(data.get("attendance_logs") or [])

    async def check_in(self, team_id: str, channel_id: str, user_id: str) -> dict[str, Any]:
        """Record a check-in; returns the response body with ``attendance_log``."""

        body = {"team_id": team_id, "channel_id": channel_id, "user_id": user_id}
        return await self._request("POST", CHECK_IN_PATH, json=body)

    async def check_out(self, team_id: str, channel_id: str, user_id: str) -> dict[str, Any]:
        body = {"team_id": team_id, "channel_id": channel_id, "user_id": user_id}
        return await self._request("POST", CHECK_OUT_PATH, json=body)


__all__ = [
    "AttendanceClient",
    "AttendanceApiError",
    "CHECK_IN_PATH",
    "CHECK_OUT_PATH",
    "MONTHLY_LOGS_PATH",
]
