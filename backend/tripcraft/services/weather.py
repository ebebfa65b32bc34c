from __future__ import annotations

import logging
import os
from datetime import date
from typing import Any, Dict, List, Optional

import httpx

from ..schemas.weather import DailyObservation

logger = logging.getLogger(__name__)

WEATHERAPI_FORECAST_URL = "https://api.weatherapi.com/v1/forecast.json"

# WeatherAPI.com serves at most 14 forecast days.
MAX_FORECAST_DAYS = 14


class WeatherProviderError(RuntimeError):
    pass


def _get_weather_api_key() -> str:
    key = (os.getenv("WEATHER_API_KEY") or "").strip()
    if not key:
        raise WeatherProviderError("WEATHER_API_KEY is not set in environment")
    return key


def _get_timeout_s() -> float:
    raw = (os.getenv("WEATHER_TIMEOUT_S") or "").strip()
    if not raw:
        return 10.0
    try:
        v = float(raw)
        return v if v > 0 else 10.0
    except ValueError:
        return 10.0


def _parse_day(entry: Dict[str, Any]) -> Optional[DailyObservation]:
    """
    Convert one `forecastday` entry. Returns None when the entry can't be used.
    """
    day = entry.get("day") or {}
    condition = day.get("condition") or {}

    try:
        d = date.fromisoformat(str(entry.get("date")))
    except ValueError:
        return None

    avg_temp = day.get("avgtemp_c")
    if avg_temp is None:
        return None

    try:
        return DailyObservation(
            date=d,
            average_temperature_c=float(avg_temp),
            total_precipitation_mm=day.get("totalprecip_mm"),
            max_wind_speed_kph=day.get("maxwind_kph"),
            average_humidity_percent=day.get("avghumidity"),
            uv_index=day.get("uv"),
            condition_text=condition.get("text"),
        )
    except (TypeError, ValueError):
        # pydantic's ValidationError is a ValueError
        return None


def parse_forecast_days(payload: Dict[str, Any]) -> List[DailyObservation]:
    """
    Turn a WeatherAPI.com forecast payload into typed daily observations.

    Provider fields used per day:
    - day.avgtemp_c (required)
    - day.totalprecip_mm, day.maxwind_kph, day.avghumidity, day.uv
    - day.condition.text
    """
    if not isinstance(payload, dict):
        raise WeatherProviderError("Unexpected response from WeatherAPI: expected a JSON object")

    forecast = payload.get("forecast")
    forecast_days = forecast.get("forecastday") if isinstance(forecast, dict) else None
    if not isinstance(forecast_days, list):
        raise WeatherProviderError("Unexpected response from WeatherAPI: 'forecastday' block missing")

    out: List[DailyObservation] = []
    for i, entry in enumerate(forecast_days):
        obs = _parse_day(entry if isinstance(entry, dict) else {})
        if obs is None:
            # Windows assume consecutive days, so a hole ends the usable forecast.
            logger.info("Unusable forecast day %d, keeping the first %d days: %r", i, len(out), entry)
            break
        out.append(obs)

    return out


async def get_daily_forecast(
    location: str,
    days: int = MAX_FORECAST_DAYS,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> List[DailyObservation]:
    """
    Fetch a daily forecast for `location` (city name, "lat,lon", postcode...).

    Raises WeatherProviderError for a missing key, HTTP/network failures and
    payloads we can't read.
    """
    key = _get_weather_api_key()
    days = max(1, min(int(days), MAX_FORECAST_DAYS))

    params = {
        "key": key,
        "q": location,
        "days": days,
        "aqi": "no",
        "alerts": "no",
    }

    try:
        async with httpx.AsyncClient(timeout=_get_timeout_s(), transport=transport) as client:
            r = await client.get(WEATHERAPI_FORECAST_URL, params=params)
            if r.status_code in (401, 403):
                raise WeatherProviderError(
                    f"WeatherAPI rejected the key ({r.status_code}). Check WEATHER_API_KEY."
                )
            r.raise_for_status()
            data: Dict[str, Any] = r.json()
    except httpx.HTTPError as e:
        raise WeatherProviderError(f"Weather service error: {e}") from e
    except ValueError as e:
        raise WeatherProviderError(f"Weather service returned invalid JSON: {e}") from e

    observations = parse_forecast_days(data)
    logger.debug("Fetched %d forecast days for %s", len(observations), location)
    return observations
