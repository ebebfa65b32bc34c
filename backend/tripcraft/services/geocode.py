from __future__ import annotations

import os
from typing import Any, Dict, List

import httpx

from ..schemas.destinations import DestinationSuggestion

NOMINATIM_SEARCH_URL = "https://nominatim.openstreetmap.org/search"

MIN_QUERY_LENGTH = 2

# Used when Nominatim is down or rate-limits us.
_FALLBACK_DESTINATIONS: List[Dict[str, Any]] = [
    {"name": "Paris, France", "full_name": "Paris, Île-de-France, France", "lat": 48.8566, "lon": 2.3522},
    {"name": "Tokyo, Japan", "full_name": "Tokyo, Japan", "lat": 35.6762, "lon": 139.6503},
    {"name": "New York, USA", "full_name": "New York, New York, United States", "lat": 40.7128, "lon": -74.0060},
    {"name": "London, England", "full_name": "London, England, United Kingdom", "lat": 51.5074, "lon": -0.1278},
    {"name": "Rome, Italy", "full_name": "Rome, Lazio, Italy", "lat": 41.9028, "lon": 12.4964},
    {"name": "Barcelona, Spain", "full_name": "Barcelona, Catalonia, Spain", "lat": 41.3851, "lon": 2.1734},
    {"name": "Mumbai, India", "full_name": "Mumbai, Maharashtra, India", "lat": 19.0760, "lon": 72.8777},
    {"name": "Sydney, Australia", "full_name": "Sydney, New South Wales, Australia", "lat": -33.8688, "lon": 151.2093},
]


class GeocodeError(RuntimeError):
    pass


def _get_user_agent() -> str:
    # Nominatim's usage policy requires an identifying User-Agent.
    ua = (os.getenv("NOMINATIM_USER_AGENT") or "").strip()
    return ua or "TripCraft-AI-Planner/1.0"


def _get_timeout_s() -> float:
    raw = (os.getenv("GEOCODE_TIMEOUT_S") or "").strip()
    if not raw:
        return 10.0
    try:
        v = float(raw)
        return v if v > 0 else 10.0
    except ValueError:
        return 10.0


def _display_name(item: Dict[str, Any]) -> str:
    address = item.get("address") or {}
    place = address.get("city") or address.get("town") or address.get("village")

    if place:
        country = address.get("country")
        return f"{place}, {country}" if country else str(place)

    # Fall back to the first two parts of "Paris, Île-de-France, France, ..."
    parts = [p.strip() for p in str(item.get("display_name") or "").split(",")]
    return ", ".join(p for p in parts[:2] if p)


def _to_suggestion(item: Dict[str, Any]) -> DestinationSuggestion | None:
    name = _display_name(item)
    if not name:
        return None

    try:
        lat = float(item["lat"])
        lon = float(item["lon"])
    except (KeyError, TypeError, ValueError):
        return None

    return DestinationSuggestion(
        name=name,
        full_name=str(item.get("display_name") or name),
        lat=lat,
        lon=lon,
        type=item.get("type") or "city",
    )


async def search_destinations(
    query: str,
    *,
    limit: int = 5,
    transport: httpx.AsyncBaseTransport | None = None,
) -> List[DestinationSuggestion]:
    q = (query or "").strip()
    if len(q) < MIN_QUERY_LENGTH:
        return []

    params = {
        "q": q,
        "format": "json",
        "limit": int(limit),
        "addressdetails": 1,
    }
    headers = {"User-Agent": _get_user_agent()}

    try:
        async with httpx.AsyncClient(
            timeout=_get_timeout_s(), headers=headers, transport=transport
        ) as client:
            r = await client.get(NOMINATIM_SEARCH_URL, params=params)
            r.raise_for_status()
            data = r.json()
    except httpx.HTTPError as e:
        raise GeocodeError(f"Geocoding service unavailable: {e}") from e
    except ValueError as e:
        raise GeocodeError(f"Geocoding service returned invalid JSON: {e}") from e

    if not isinstance(data, list):
        raise GeocodeError("Unexpected response from Nominatim: expected a list")

    out: List[DestinationSuggestion] = []
    for item in data:
        if not isinstance(item, dict):
            continue
        suggestion = _to_suggestion(item)
        if suggestion is not None:
            out.append(suggestion)

    return out


def fallback_destinations(query: str) -> List[DestinationSuggestion]:
    key = (query or "").strip().lower()
    return [
        DestinationSuggestion(**d)
        for d in _FALLBACK_DESTINATIONS
        if key in d["name"].lower()
    ]
