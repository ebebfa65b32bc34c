from __future__ import annotations

import math
from datetime import date
from typing import List, Sequence

from ..schemas.weather import DailyObservation, WeatherRecommendation

WINDOW_DAYS = 3
MAX_RECOMMENDATIONS = 3
BASE_SCORE = 100

SEVERE_KEYWORDS = ("rain", "storm", "snow")

# Fixed English abbreviations so labels don't depend on the server locale.
_MONTH_ABBR = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
               "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


# ---------------------------------------------------------------------
# Per-day adjustments
# ---------------------------------------------------------------------

def _temperature_points(t: float) -> int:
    if t < 10 or t > 35:
        return -20
    if t < 15 or t > 30:
        return -10
    if 20 <= t <= 25:
        return 5
    return 0


def _precipitation_points(r: float) -> int:
    if r > 20:
        return -25
    if r > 10:
        return -15
    if r > 5:
        return -8
    if r < 1:
        return 5
    return 0


def _wind_points(w: float) -> int:
    if w > 50:
        return -20
    if w > 30:
        return -10
    if w < 15:
        return 3
    return 0


def _humidity_points(h: float) -> int:
    if h > 80:
        return -10
    if h < 30:
        return -5
    return 0


def _uv_points(u: float) -> int:
    if u > 10:
        return -10
    if 3 <= u <= 7:
        return 3
    return 0


def day_points(day: DailyObservation) -> int:
    """
    Net adjustment one day contributes to its window's score.
    """
    return (
        _temperature_points(day.average_temperature_c)
        + _precipitation_points(day.total_precipitation_mm)
        + _wind_points(day.max_wind_speed_kph)
        + _humidity_points(day.average_humidity_percent)
        + _uv_points(day.uv_index)
    )


# ---------------------------------------------------------------------
# Window-level helpers
# ---------------------------------------------------------------------

def score_window(window: Sequence[DailyObservation]) -> int:
    """
    Base 100 plus every day's adjustments.

    Only the window total is clamped to 0–100, so a single extreme day
    can drag the score further than a per-day clamp would allow.
    """
    total = BASE_SCORE + sum(day_points(d) for d in window)
    return _round_half_up(max(0, min(100, total)))


def representative_condition(window: Sequence[DailyObservation]) -> str:
    """
    First day mentioning rain/storm/snow wins, otherwise the first day's text.
    """
    if not window:
        return "Variable"

    for day in window:
        text = day.condition_text.lower()
        if any(keyword in text for keyword in SEVERE_KEYWORDS):
            return day.condition_text

    return window[0].condition_text


def average_temperature(window: Sequence[DailyObservation]) -> int:
    temps = [d.average_temperature_c for d in window]
    return _round_half_up(sum(temps) / len(temps))


def describe_window(score: int, total_rain_mm: float) -> str:
    if score >= 90:
        return "Excellent weather conditions for all outdoor activities"
    if score >= 75:
        if total_rain_mm > 5:
            return "Good weather with occasional light rain"
        return "Generally pleasant conditions"
    if score >= 60:
        if total_rain_mm > 15:
            return "Moderate rain expected, mix of indoor/outdoor activities"
        return "Average weather conditions"
    if total_rain_mm > 20:
        return "Significant rain likely, focus on indoor attractions"
    return "Challenging weather conditions"


def _short_date(d: date) -> str:
    return f"{_MONTH_ABBR[d.month - 1]} {d.day}"


def format_date_range(start: date, end: date) -> str:
    return f"{_short_date(start)} - {_short_date(end)}"


def build_recommendation(window: Sequence[DailyObservation]) -> WeatherRecommendation:
    score = score_window(window)
    total_rain_mm = sum(d.total_precipitation_mm for d in window)

    return WeatherRecommendation(
        date_range=format_date_range(window[0].date, window[-1].date),
        condition=representative_condition(window),
        temperature=average_temperature(window),
        score=score,
        description=describe_window(score, total_rain_mm),
    )


# ---------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------

def score_windows(forecast: Sequence[DailyObservation]) -> List[WeatherRecommendation]:
    """
    Rank every overlapping 3-day window of a forecast and keep the best three.

    Forecasts shorter than three days give an empty list. Ties keep the
    earlier window first (sorted() is stable).
    """
    candidates: List[WeatherRecommendation] = []

    for i in range(len(forecast) - WINDOW_DAYS + 1):
        window = forecast[i:i + WINDOW_DAYS]
        candidates.append(build_recommendation(window))

    ranked = sorted(candidates, key=lambda rec: rec.score, reverse=True)
    return ranked[:MAX_RECOMMENDATIONS]
