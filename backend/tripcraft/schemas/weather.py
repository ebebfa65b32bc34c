from datetime import date, datetime
from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class DailyObservation(BaseModel):
    """
    One day of forecast data, already normalised from the provider payload.

    Optional provider fields fall back to neutral defaults here, so the
    scorer never has to deal with missing values.
    """
    model_config = ConfigDict(allow_inf_nan=False)

    date: date
    average_temperature_c: float
    total_precipitation_mm: float = Field(0.0, ge=0)
    max_wind_speed_kph: float = Field(0.0, ge=0)
    average_humidity_percent: float = Field(50.0, ge=0, le=100)
    uv_index: float = 5.0
    condition_text: str = ""

    @field_validator(
        "total_precipitation_mm",
        "max_wind_speed_kph",
        "average_humidity_percent",
        "uv_index",
        "condition_text",
        mode="before",
    )
    @classmethod
    def _none_means_default(cls, value, info):
        # Providers send explicit nulls as often as they omit keys.
        if value is None:
            return cls.model_fields[info.field_name].default
        return value


class WeatherRecommendation(BaseModel):
    """
    A ranked 3-day travel window, shaped like the front end's WeatherSuggestion.
    """
    model_config = ConfigDict(populate_by_name=True)

    date_range: str = Field(..., alias="dateRange")  # e.g. "Sep 15 - Sep 17"
    condition: str
    temperature: int  # °C, window mean
    score: int = Field(..., ge=0, le=100)
    description: str


class BestDatesResponse(BaseModel):
    destination: str
    duration: int
    recommendations: List[WeatherRecommendation]
    generated: datetime
    source: Literal["live", "fallback"]
