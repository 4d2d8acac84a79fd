"""Configuration helpers for Attendance Board."""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

DEFAULT_DISPLAY_TIMEZONE = "Asia/Tokyo"


@dataclass(slots=True)
class Settings:
    """Runtime configuration values loaded from environment variables."""

    api_base_url: str
    team_id: str
    channel_id: str
    user_id: str
    api_key: str
    display_timezone: str = DEFAULT_DISPLAY_TIMEZONE
    http_timeout: float = 10.0

    @property
    def zone(self) -> tzinfo:
        return ZoneInfo(self.display_timezone)


def load_settings(env_file: str | None = None) -> Settings:
    """Load settings from the environment, optionally from a specific file."""

    if env_file:
        load_dotenv(env_file)
    else:
        load_dotenv()

    api_base_url = os.getenv("ATTENDANCE_API_URL")
    team_id = os.getenv("TEAM_ID")
    channel_id = os.getenv("CHANNEL_ID")
    user_id = os.getenv("USER_ID")
    api_key = os.getenv("API_KEY")

    if not api_base_url:
        raise RuntimeError("ATTENDANCE_API_URL must be configured")
    if not team_id:
        raise RuntimeError("TEAM_ID must be configured")
    if not channel_id:
        raise RuntimeError("CHANNEL_ID must be configured")
    if not user_id:
        raise RuntimeError("USER_ID must be configured")
    if not api_key:
        raise RuntimeError("API_KEY must be configured")

    display_timezone = os.getenv("DISPLAY_TIMEZONE", DEFAULT_DISPLAY_TIMEZONE)
    try:
        ZoneInfo(display_timezone)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise RuntimeError(f"DISPLAY_TIMEZONE {display_timezone!r} is not a known time zone") from exc

    return Settings(
        api_base_url=api_base_url,
        team_id=team_id,
        channel_id=channel_id,
        user_id=user_id,
        api_key=api_key,
        display_timezone=display_timezone,
        http_timeout=float(os.getenv("HTTP_TIMEOUT", "10")),
    )


__all__ = ["Settings", "load_settings", "DEFAULT_DISPLAY_TIMEZONE"]
