"""Shared fixtures for the prefecture weather tests."""

import json
from pathlib import Path
from unittest.mock import MagicMock, patch
from zoneinfo import ZoneInfo

import pytest
from fastapi.testclient import TestClient

from prefecture_weather.settings import AppSettings, AppYamlSettings, EnvSettings

URLOPEN_TARGET = "prefecture_weather.adapters.weather.openweathermap.urlopen"


def build_test_settings(tmp_path: Path, *, api_key: str | None = "test-key") -> AppSettings:
    env = EnvSettings(
        _env_file=None,
        openweather_api_key=api_key,
        weather_app_env="test",
        weather_app_timezone="Asia/Tokyo",
        weather_app_config_path=tmp_path / "app.yaml",
    )
    return AppSettings(
        env=env,
        yaml=AppYamlSettings(),
        project_root=tmp_path,
        config_path=tmp_path / "app.yaml",
        timezone=ZoneInfo("Asia/Tokyo"),
    )


def mock_json_response(payload) -> MagicMock:
    response = MagicMock()
    response.read.return_value = json.dumps(payload, ensure_ascii=False).encode("utf-8")
    response.__enter__.return_value = response
    return response


@pytest.fixture
def tokyo_payload():
    """Current weather as returned by OpenWeatherMap for Tokyo."""
    return {
        "coord": {"lon": 139.6917, "lat": 35.6895},
        "weather": [{"id": 801, "main": "Clouds", "description": "薄い雲", "icon": "02d"}],
        "base": "stations",
        "main": {
            "temp": 23.4,
            "feels_like": 23.9,
            "temp_min": 21.6,
            "temp_max": 25.1,
            "pressure": 1012,
            "humidity": 64,
        },
        "visibility": 10000,
        "wind": {"speed": 5, "deg": 180},
        "clouds": {"all": 20},
        "dt": 1718000000,
        "sys": {"country": "JP"},
        "timezone": 32400,
        "id": 1850144,
        "name": "Tokyo",
        "cod": 200,
    }


@pytest.fixture
def settings(tmp_path):
    return build_test_settings(tmp_path)


@pytest.fixture
def settings_without_key(tmp_path):
    return build_test_settings(tmp_path, api_key=None)


@pytest.fixture
def mock_urlopen():
    with patch(URLOPEN_TARGET) as mock:
        yield mock


@pytest.fixture
def client(settings):
    from prefecture_weather.main import app

    with patch("prefecture_weather.main.load_settings", return_value=settings):
        with TestClient(app) as test_client:
            yield test_client


@pytest.fixture
def client_without_key(settings_without_key):
    from prefecture_weather.main import app

    with patch("prefecture_weather.main.load_settings", return_value=settings_without_key):
        with TestClient(app) as test_client:
            yield test_client
