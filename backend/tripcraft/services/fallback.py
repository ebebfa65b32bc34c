from typing import List

from ..schemas.weather import WeatherRecommendation

# Hand-written suggestions served when live forecast data isn't available.
_FALLBACK_RECOMMENDATIONS = (
    {
        "date_range": "Sep 15 - Sep 17",
        "condition": "Mostly Sunny",
        "temperature": 24,
        "score": 95,
        "description": "Perfect weather conditions for outdoor activities",
    },
    {
        "date_range": "Sep 20 - Sep 22",
        "condition": "Partly Cloudy",
        "temperature": 22,
        "score": 85,
        "description": "Good weather with occasional clouds",
    },
    {
        "date_range": "Sep 25 - Sep 27",
        "condition": "Light Rain",
        "temperature": 19,
        "score": 65,
        "description": "Some rain expected, better for indoor activities",
    },
)


def fallback_recommendations() -> List[WeatherRecommendation]:
    return [WeatherRecommendation(**rec) for rec in _FALLBACK_RECOMMENDATIONS]
