from __future__ import annotations

import json
import logging
from typing import Any, Literal
from urllib.error import HTTPError, URLError
from urllib.parse import urlencode
from urllib.request import Request, urlopen

from pydantic import ValidationError

from ...domain.models import WeatherResult
from ...location.service import resolve_city
from .base import WeatherAdapterError, WeatherConfigurationError, WeatherProviderError

LOGGER = logging.getLogger(__name__)

OPENWEATHERMAP_CURRENT_URL = "https://api.openweathermap.org/data/2.5/weather"
OPENWEATHERMAP_ICON_URL = "https://openweathermap.org/img/wn/{icon}@2x.png"
COUNTRY_CODE = "JP"
USER_AGENT = "prefecture-weather/0.1"


def weather_icon_url(icon: str) -> str:
    return OPENWEATHERMAP_ICON_URL.format(icon=icon)


def _provider_message(exc: HTTPError) -> str:
    try:
        body = json.loads(exc.read().decode("utf-8"))
    except (OSError, ValueError, AttributeError):
        body = None

    if isinstance(body, dict):
        message = body.get("message")
        if isinstance(message, str) and message.strip():
            return message.strip()
    return str(exc.reason or exc.code)


class OpenWeatherMapAdapter:
    def __init__(
        self,
        api_key: str | None,
        *,
        base_url: str = OPENWEATHERMAP_CURRENT_URL,
        units: Literal["metric"] = "metric",
        lang: str = "ja",
        timeout_seconds: float | None = None,
    ) -> None:
        self._api_key = api_key.strip() if api_key else ""
        self._base_url = base_url
        self._units = units
        self._lang = lang
        self._timeout_seconds = timeout_seconds

    def build_url(self, city: str) -> str:
        params = {
            "q": f"{city},{COUNTRY_CODE}",
            "appid": self._api_key,
            "units": self._units,
            "lang": self._lang,
        }
        return f"{self._base_url}?{urlencode(params)}"

    def get_weather(self, prefecture: str) -> WeatherResult:
        if not self._api_key:
            raise WeatherConfigurationError("OpenWeatherMap API key is not configured")

        city = resolve_city(prefecture)
        LOGGER.debug("Requesting current weather for '%s' (%s)", prefecture, city)
        payload = self._fetch_json(self.build_url(city))

        try:
            return WeatherResult.model_validate(payload)
        except ValidationError as exc:
            LOGGER.warning("OpenWeatherMap response for '%s' was malformed: %s", city, exc)
            raise WeatherAdapterError("Failed to fetch weather data") from exc

    def _fetch_json(self, url: str) -> dict[str, Any]:
        request = Request(url, headers={"User-Agent": USER_AGENT, "Accept": "application/json"})
        try:
            with urlopen(request, timeout=self._timeout_seconds) as response:
                payload = json.loads(response.read().decode("utf-8"))
        except HTTPError as exc:
            message = _provider_message(exc)
            LOGGER.warning("OpenWeatherMap returned HTTP %s: %s", exc.code, message)
            raise WeatherProviderError(
                f"Weather API Error: {message}",
                status_code=exc.code,
                provider_message=message,
            ) from exc
        except (URLError, TimeoutError, OSError, ValueError) as exc:
            LOGGER.warning("OpenWeatherMap request failed: %s", exc)
            raise WeatherAdapterError("Failed to fetch weather data") from exc

        if not isinstance(payload, dict):
            raise WeatherAdapterError("Failed to fetch weather data")
        return payload
