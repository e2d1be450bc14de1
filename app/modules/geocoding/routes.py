from fastapi import APIRouter, Depends, HTTPException
from app.core.dependencies import get_http_client
from app.modules.geocoding.schemas import GeocodeResponse, CountryOption, StateOption
from app.modules.geocoding.service import GeocodingService, parse_coordinate
from typing import List, Optional
import httpx

router = APIRouter(tags=["geocoding"])


def get_geocoding_service(http: httpx.Client = Depends(get_http_client)) -> GeocodingService:
    return GeocodingService(http)


@router.get("/geocode", response_model=GeocodeResponse)
async def geocode(
    lat: Optional[str] = None,
    lng: Optional[str] = None,
    service: GeocodingService = Depends(get_geocoding_service)
):
    """Reverse geocode coordinates to city and country"""
    if not lat or not lng:
        raise HTTPException(status_code=400, detail="Latitude and longitude are required")
    return service.reverse_geocode(
        parse_coordinate(lat, -90, 90),
        parse_coordinate(lng, -180, 180)
    )


@router.get("/locations/countries", response_model=List[CountryOption])
async def list_countries(service: GeocodingService = Depends(get_geocoding_service)):
    return service.list_countries()


@router.get("/locations/states", response_model=List[StateOption])
async def list_states(
    country: Optional[str] = None,
    service: GeocodingService = Depends(get_geocoding_service)
):
    """States for a country, by full country name"""
    if not country or not country.strip():
        raise HTTPException(status_code=400, detail="Country is required")
    return service.list_states(country.strip())
