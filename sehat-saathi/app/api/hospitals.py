"""Hospital finder endpoints."""

from fastapi import APIRouter, HTTPException, Query, status
from app.config.settings import settings
from app.models.enums import FacilityType
from app.models.messages import NearbyFacility, NearbyHospitalsResponse
from app.tools.emergency_numbers import get_emergency_numbers
from app.tools.hospital_search import search_nearby_facilities
from typing import Dict, Optional
import httpx
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/hospitals", tags=["Hospital Finder"])


@router.get("/nearby", response_model=NearbyHospitalsResponse)
async def nearby_hospitals(
    lat: float = Query(..., ge=-90.0, le=90.0),
    lng: float = Query(..., ge=-180.0, le=180.0),
    radius_m: Optional[int] = Query(None, ge=1000, le=50000),
    facility: FacilityType = FacilityType.HOSPITAL,
    country: Optional[str] = None,
):
    """
    Find hospitals (or clinics, pharmacies, PHCs) around a point.

    Results are nearest first and never farther than `radius_m`.
    """
    radius = radius_m or settings.hospital_search_radius_m

    try:
        results = await search_nearby_facilities(
            lat, lng, facility=facility, radius_m=radius
        )
    except ValueError as e:
        logger.warning(f"Hospital search unavailable: {e}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Hospital search is not configured",
        )
    except httpx.HTTPError as e:
        logger.error(f"Maps API request failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Hospital search service failed",
        )

    return NearbyHospitalsResponse(
        facility=facility,
        radius_m=radius,
        total=len(results),
        results=[NearbyFacility(**r) for r in results],
        emergency_numbers=get_emergency_numbers(country or settings.default_country),
    )


@router.get("/emergency-numbers", response_model=Dict[str, str])
async def emergency_numbers(country: Optional[str] = None):
    """Ambulance, police, fire and general numbers for a country (default India)."""
    return get_emergency_numbers(country or settings.default_country)
