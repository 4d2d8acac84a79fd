import pytest

from attendance_board.config import DEFAULT_DISPLAY_TIMEZONE, load_settings

REQUIRED = {
    "ATTENDANCE_API_URL": "https://attendance.example.test",
    "TEAM_ID": "T001",
    "CHANNEL_ID": "C001",
    "USER_ID": "U001",
    "API_KEY": "secret",
}


@pytest.fixture
def env(monkeypatch, tmp_path):
    for key, value in REQUIRED.items():
        monkeypatch.setenv(key, value)
    monkeypatch.delenv("DISPLAY_TIMEZONE", raising=False)
    monkeypatch.delenv("HTTP_TIMEOUT", raising=False)
    return str(tmp_path / "absent.env")


def test_load_settings_defaults(env):
    settings = load_settings(env)

    assert settings.api_base_url == "https://attendance.example.test"
    assert settings.display_timezone == DEFAULT_DISPLAY_TIMEZONE == "Asia/Tokyo"
    assert settings.http_timeout == 10.0
    assert str(settings.zone) == "Asia/Tokyo"


def test_missing_required_value(env, monkeypatch):
    monkeypatch.delenv("CHANNEL_ID")

    with pytest.raises(RuntimeError, match="CHANNEL_ID"):
        load_settings(env)


def test_unknown_timezone(env, monkeypatch):
    monkeypatch.setenv("DISPLAY_TIMEZONE", "Mars/Olympus_Mons")

    with pytest.raises(RuntimeError, match="DISPLAY_TIMEZONE"):
        load_settings(env)
