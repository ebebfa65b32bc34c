import logging
import os
from datetime import datetime, timezone
from typing import List

from fastapi import APIRouter, Query

from ...schemas.weather import BestDatesResponse, WeatherRecommendation
from ...services.fallback import fallback_recommendations
from ...services.weather import MAX_FORECAST_DAYS, WeatherProviderError, get_daily_forecast
from ...services.window_scorer import WINDOW_DAYS, score_windows

logger = logging.getLogger(__name__)

router = APIRouter()


def _get_forecast_days() -> int:
    """
    How many forecast days to request, clamped to 3–14.
    Fewer than 3 days can't form a single window.
    """
    raw = (os.getenv("WEATHER_FORECAST_DAYS") or "").strip()
    if not raw:
        return MAX_FORECAST_DAYS
    try:
        v = int(raw)
    except ValueError:
        return MAX_FORECAST_DAYS
    return max(WINDOW_DAYS, min(v, MAX_FORECAST_DAYS))


@router.get("/{destination}/best-dates", response_model=BestDatesResponse)
async def best_travel_dates(
    destination: str,
    duration: int = Query(7, ge=1, le=30, description="Planned trip length in days"),
) -> BestDatesResponse:
    """
    Best 3-day weather windows for a destination, ranked by score.

    Live forecast when the provider answers; otherwise the static suggestions,
    tagged with source="fallback".
    """
    recommendations: List[WeatherRecommendation] = []
    source = "live"

    try:
        forecast = await get_daily_forecast(destination, days=_get_forecast_days())
        recommendations = score_windows(forecast)
    except WeatherProviderError as e:
        logger.warning("Weather provider failed for %r, serving fallback: %s", destination, e)
        source = "fallback"

    if source == "live" and not recommendations:
        logger.warning("Forecast for %r too short to score, serving fallback", destination)
        source = "fallback"

    if source == "fallback":
        recommendations = fallback_recommendations()

    return BestDatesResponse(
        destination=destination,
        duration=duration,
        recommendations=recommendations,
        generated=datetime.now(timezone.utc),
        source=source,
    )
