from __future__ import annotations

import logging

from starlette.concurrency import run_in_threadpool

from .adapters.weather import (
    OpenWeatherMapAdapter,
    WeatherAdapterError,
    WeatherConfigurationError,
)
from .domain.models import WeatherLookupOutcome, WeatherResult
from .settings import AppSettings

LOGGER = logging.getLogger(__name__)

SELECTION_REQUIRED_MESSAGE = "都道府県を選択してください"
GENERIC_FAILURE_MESSAGE = "天気情報の取得に失敗しました"


def build_weather_adapter(settings: AppSettings) -> OpenWeatherMapAdapter:
    provider = settings.yaml.weather.provider
    if provider != "openweathermap":
        raise ValueError(f"Unsupported weather provider: {provider}")
    return OpenWeatherMapAdapter(
        settings.env.openweather_api_key,
        base_url=settings.yaml.weather.base_url,
        timeout_seconds=settings.yaml.weather.timeout_seconds,
    )


async def fetch_weather(prefecture: str, settings: AppSettings) -> WeatherResult:
    adapter = build_weather_adapter(settings)
    return await run_in_threadpool(adapter.get_weather, prefecture)


async def submit_prefecture_form(
    prefecture: str | None,
    settings: AppSettings,
) -> WeatherLookupOutcome:
    selected = (prefecture or "").strip()
    if not selected:
        return WeatherLookupOutcome(error=SELECTION_REQUIRED_MESSAGE)

    try:
        weather = await fetch_weather(selected, settings)
    except WeatherConfigurationError as exc:
        LOGGER.error("Weather lookup is not configured: %s", exc)
        return WeatherLookupOutcome(prefecture=selected, error=str(exc))
    except WeatherAdapterError as exc:
        LOGGER.warning("Weather lookup for '%s' failed: %s", selected, exc)
        return WeatherLookupOutcome(prefecture=selected, error=str(exc))
    except Exception:
        LOGGER.exception("Weather lookup for '%s' failed", selected)
        return WeatherLookupOutcome(prefecture=selected, error=GENERIC_FAILURE_MESSAGE)

    LOGGER.info("Weather lookup for '%s' resolved to '%s'", selected, weather.name)
    return WeatherLookupOutcome(prefecture=selected, weather=weather)
