from __future__ import annotations

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from fastapi import FastAPI, Form, Request
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from .actions import submit_prefecture_form
from .adapters.weather import weather_icon_url
from .domain.models import WeatherLookupOutcome, WeatherResult
from .domain.units import celsius_to_fahrenheit, mps_to_kmh, round_half_up
from .location.service import PREFECTURES
from .logging_config import configure_logging
from .settings import AppSettings, load_settings

BASE_DIR = Path(__file__).resolve().parent
WEB_DIR = BASE_DIR / "web"
TEMPLATES_DIR = WEB_DIR / "templates"
STATIC_DIR = WEB_DIR / "static"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

MISSING_DISPLAY = "--"


def _get_settings(request: Request) -> AppSettings:
    return request.app.state.settings


def _format_celsius(value: float | None) -> str:
    if value is None:
        return MISSING_DISPLAY
    return f"{round_half_up(value)}°C"


def _format_observed_at(value: datetime | None, settings: AppSettings) -> str:
    if value is None:
        return MISSING_DISPLAY
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(settings.timezone).strftime("%Y/%m/%d %H:%M:%S")


def _build_weather_card_context(weather: WeatherResult, settings: AppSettings) -> dict[str, Any]:
    main = weather.main
    condition = weather.condition

    humidity = f"{main.humidity:g}%" if main.humidity is not None else MISSING_DISPLAY
    pressure = f"{main.pressure:g} hPa" if main.pressure is not None else MISSING_DISPLAY
    wind_kmh = round_half_up(mps_to_kmh(weather.wind.speed or 0))

    fahrenheit_display = None
    if settings.yaml.ui.show_fahrenheit:
        fahrenheit_display = f"{round_half_up(celsius_to_fahrenheit(main.temp))}°F"

    return {
        "location_name": weather.name or MISSING_DISPLAY,
        "observed_at": _format_observed_at(weather.dt, settings),
        "icon_url": weather_icon_url(condition.icon) if condition and condition.icon else None,
        "description": condition.description if condition else "",
        "temp_display": _format_celsius(main.temp),
        "temp_fahrenheit_display": fahrenheit_display,
        "feels_like_display": _format_celsius(main.feels_like),
        "humidity_display": humidity,
        "pressure_display": pressure,
        "wind_display": f"{wind_kmh} km/h",
        "temp_min_display": _format_celsius(main.temp_min),
        "temp_max_display": _format_celsius(main.temp_max),
    }


def _page_response(
    request: Request,
    *,
    selected_prefecture: str = "",
    outcome: WeatherLookupOutcome | None = None,
) -> HTMLResponse:
    settings = _get_settings(request)
    weather_card = None
    error_message = None
    if outcome is not None:
        if outcome.weather is not None:
            weather_card = _build_weather_card_context(outcome.weather, settings)
        else:
            error_message = outcome.error

    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "title": settings.yaml.ui.title,
            "description": settings.yaml.ui.description,
            "prefectures": PREFECTURES,
            "selected_prefecture": selected_prefecture,
            "weather_card": weather_card,
            "error_message": error_message,
        },
    )


@asynccontextmanager
async def lifespan(application: FastAPI):
    settings = load_settings()
    configure_logging(settings.env.weather_app_log_level)

    application.state.settings = settings
    application.state.started_at_utc = datetime.now(timezone.utc)
    yield


app = FastAPI(title="Prefecture Weather", version="0.1.0", lifespan=lifespan)
app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")


@app.get("/", response_class=HTMLResponse)
async def weather_page(request: Request) -> HTMLResponse:
    return _page_response(request)


@app.post("/", response_class=HTMLResponse)
async def weather_lookup(
    request: Request,
    prefecture: str | None = Form(default=None),
) -> HTMLResponse:
    settings = _get_settings(request)
    outcome = await submit_prefecture_form(prefecture, settings)
    return _page_response(
        request,
        selected_prefecture=(prefecture or "").strip(),
        outcome=outcome,
    )


@app.get("/health", response_class=JSONResponse)
async def health(request: Request) -> JSONResponse:
    settings = _get_settings(request)
    return JSONResponse(
        {
            "status": "ok",
            "service": "prefecture-weather",
            "environment": settings.env.weather_app_env,
            "timezone": settings.env.weather_app_timezone,
            "api_key_configured": settings.api_key_configured,
            "started_at_utc": request.app.state.started_at_utc.isoformat(),
            "timestamp_utc": datetime.now(timezone.utc).isoformat(),
        }
    )
