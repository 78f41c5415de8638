"""Hospital finder tool using the Serper maps API.

Looks up hospitals, clinics, pharmacies or primary health centres around the
user's position and returns them nearest first, limited to the search radius.
"""

import httpx
import logging
from math import radians, cos, sin, asin, sqrt
from typing import Optional, List, Dict
from app.config.settings import settings
from app.models.enums import FacilityType

logger = logging.getLogger(__name__)

EARTH_RADIUS_KM = 6371


def calculate_distance_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Calculate the great circle distance between two points in kilometers.

    Uses the Haversine formula.
    """
    lat1, lng1, lat2, lng2 = map(radians, [lat1, lng1, lat2, lng2])

    dlng = lng2 - lng1
    dlat = lat2 - lat1
    a = sin(dlat / 2) ** 2 + cos(lat1) * cos(lat2) * sin(dlng / 2) ** 2
    c = 2 * asin(sqrt(a))

    return round(c * EARTH_RADIUS_KM, 2)


def zoom_for_radius(radius_m: int) -> int:
    """Approximate a maps zoom level for a search radius (5 km ~ 14z, 50 km ~ 10z)."""
    return max(10, min(15, int(15 - (radius_m / 5000))))


def generate_maps_link(lat: float, lng: float, place_id: Optional[str] = None) -> str:
    """Generate a Google Maps link for a location or place."""
    if place_id:
        return f"https://www.google.com/maps/place/?q=place_id:{place_id}"
    return f"https://www.google.com/maps/search/?api=1&query={lat},{lng}"


def _place_to_facility(place: Dict, distance_km: float, facility: FacilityType) -> Dict:
    lat = place["latitude"]
    lng = place["longitude"]
    place_id = place.get("placeId") or place.get("cid") or ""
    return {
        "place_id": str(place_id),
        "name": place.get("title", "Unknown"),
        "address": place.get("address", ""),
        "lat": lat,
        "lng": lng,
        "distance_km": distance_km,
        "rating": float(place.get("rating") or 0.0),
        "reviews": int(place.get("ratingCount") or 0),
        "type": place.get("type") or facility.value.title(),
        "phone": place.get("phoneNumber", ""),
        "website": place.get("website", ""),
        "maps_url": generate_maps_link(lat, lng, place.get("placeId")),
    }


async def search_nearby_facilities(
    lat: float,
    lng: float,
    facility: FacilityType = FacilityType.HOSPITAL,
    radius_m: Optional[int] = None,
    max_results: Optional[int] = None,
) -> List[Dict]:
    """Search for health facilities near a location.

    Args:
        lat: Latitude of the user
        lng: Longitude of the user
        facility: What to look for
        radius_m: Search radius in meters (default from settings)
        max_results: Maximum number of results to return (default from settings)

    Returns:
        List of facility dicts sorted by distance, nearest first

    Raises:
        ValueError: If the Serper API key is not configured
        httpx.HTTPError: If the API request fails
    """
    if not settings.serper_api_key:
        raise ValueError(
            "Serper API key not configured. "
            "Please set SERPER_API_KEY in your .env file."
        )

    if radius_m is None:
        radius_m = settings.hospital_search_radius_m
    if max_results is None:
        max_results = settings.hospital_search_max_results

    headers = {
        "X-API-KEY": settings.serper_api_key,
        "Content-Type": "application/json",
    }
    payload = {
        "q": facility.value,
        "ll": f"@{lat},{lng},{zoom_for_radius(radius_m)}z",
    }

    async with httpx.AsyncClient(timeout=15.0) as client:
        resp = await client.post(settings.serper_maps_url, headers=headers, json=payload)
        resp.raise_for_status()
        try:
            data = resp.json()
        except ValueError as e:
            raise httpx.HTTPError(f"Maps API returned invalid JSON: {e}")

    results = []
    for place in data.get("places", []):
        place_lat = place.get("latitude")
        place_lng = place.get("longitude")

        # Skip places without coordinates
        if place_lat is None or place_lng is None:
            continue

        distance_km = calculate_distance_km(lat, lng, place_lat, place_lng)
        if distance_km > radius_m / 1000:
            continue

        results.append(_place_to_facility(place, distance_km, facility))

    results.sort(key=lambda r: r["distance_km"])
    logger.info(
        f"Found {len(results)} {facility.value} result(s) within {radius_m} m "
        f"({len(data.get('places', []))} returned by maps API)"
    )
    return results[:max_results]
