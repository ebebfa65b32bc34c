from typing import List

from pydantic import BaseModel, ConfigDict, Field


class DestinationSuggestion(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str  # short label, e.g. "Paris, France"
    full_name: str = Field(..., alias="fullName")
    lat: float
    lon: float
    type: str = "city"


class DestinationSearchResponse(BaseModel):
    suggestions: List[DestinationSuggestion]
