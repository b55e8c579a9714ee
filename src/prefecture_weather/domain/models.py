from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class MainReadings(BaseModel):
    model_config = ConfigDict(extra="ignore")

    temp: float
    feels_like: float | None = None
    temp_min: float | None = None
    temp_max: float | None = None
    humidity: float | None = None
    pressure: float | None = None


class WindReadings(BaseModel):
    model_config = ConfigDict(extra="ignore")

    speed: float = 0.0
    deg: float | None = None

    @field_validator("speed", mode="before")
    @classmethod
    def default_missing_speed(cls, value: object) -> object:
        if value is None:
            return 0.0
        return value


class WeatherCondition(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int | None = None
    main: str = ""
    description: str = ""
    icon: str = ""


class WeatherResult(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str = ""
    dt: datetime | None = None
    main: MainReadings
    wind: WindReadings = Field(default_factory=WindReadings)
    weather: list[WeatherCondition] = Field(default_factory=list)

    @field_validator("wind", mode="before")
    @classmethod
    def default_missing_wind(cls, value: object) -> object:
        if value is None:
            return {}
        return value

    @property
    def condition(self) -> WeatherCondition | None:
        if not self.weather:
            return None
        return self.weather[0]


class WeatherLookupOutcome(BaseModel):
    model_config = ConfigDict(extra="ignore")

    prefecture: str | None = None
    weather: WeatherResult | None = None
    error: str | None = None

    @model_validator(mode="after")
    def validate_exclusive_fields(self) -> WeatherLookupOutcome:
        if (self.weather is None) == (self.error is None):
            raise ValueError("weather lookup outcome needs exactly one of weather or error")
        return self

    @property
    def ok(self) -> bool:
        return self.weather is not None
