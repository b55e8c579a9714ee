from .base import WeatherAdapter, WeatherAdapterError, WeatherConfigurationError, WeatherProviderError
from .openweathermap import OpenWeatherMapAdapter, weather_icon_url

__all__ = [
    "WeatherAdapter",
    "WeatherAdapterError",
    "WeatherConfigurationError",
    "WeatherProviderError",
    "OpenWeatherMapAdapter",
    "weather_icon_url",
]
