from __future__ import annotations

from typing import Protocol

from ...domain.models import WeatherResult


class WeatherAdapterError(RuntimeError):
    """Raised when a weather provider request cannot be completed."""


class WeatherConfigurationError(WeatherAdapterError):
    """Raised when the provider credential is missing."""


class WeatherProviderError(WeatherAdapterError):
    """Raised when the provider answers with an error status."""

    def __init__(self, message: str, *, status_code: int, provider_message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.provider_message = provider_message


class WeatherAdapter(Protocol):
    def get_weather(self, prefecture: str) -> WeatherResult:
        """Fetch current weather for the city that represents the prefecture."""
