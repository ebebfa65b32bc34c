import logging

from fastapi import APIRouter, Query

from ...schemas.destinations import DestinationSearchResponse
from ...services.geocode import (
    MIN_QUERY_LENGTH,
    GeocodeError,
    fallback_destinations,
    search_destinations,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/search", response_model=DestinationSearchResponse)
async def destination_search(
    query: str = Query("", description="Partial destination name, e.g. 'Bar'"),
) -> DestinationSearchResponse:
    """
    Autocomplete for the destination box.

    Short queries return nothing. If Nominatim can't be reached we
    filter a small built-in list of popular cities instead.
    """
    if len(query.strip()) < MIN_QUERY_LENGTH:
        return DestinationSearchResponse(suggestions=[])

    try:
        suggestions = await search_destinations(query)
    except GeocodeError as e:
        logger.warning("Destination search failed for %r, using built-in list: %s", query, e)
        suggestions = fallback_destinations(query)

    return DestinationSearchResponse(suggestions=suggestions)
