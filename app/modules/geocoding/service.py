"""
Lookups against third-party location APIs: OpenCage reverse geocoding,
REST Countries and CountriesNow.
"""
import logging
from typing import List

import httpx
from fastapi import HTTPException

from app.config import settings
from app.modules.geocoding.schemas import GeocodeResponse, CountryOption, StateOption

logger = logging.getLogger(__name__)

# OpenCage names the settlement differently depending on its size
CITY_COMPONENT_KEYS = ("city", "town", "village", "hamlet")


def parse_coordinate(value: str, low: float, high: float) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise HTTPException(status_code=400, detail="Latitude and longitude must be numbers")
    if not low <= number <= high:
        raise HTTPException(status_code=400, detail="Latitude or longitude out of range")
    return number


class GeocodingService:
    def __init__(self, http: httpx.Client):
        self.http = http

    def reverse_geocode(self, lat: float, lng: float) -> GeocodeResponse:
        """Resolve coordinates to city, country and a formatted address"""
        try:
            response = self.http.get(settings.opencage_url, params={
                "q": f"{lat},{lng}",
                "key": settings.opencage_api_key or "",
                "no_annotations": 1,
            })
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error("Geocoding error: %s", e)
            raise HTTPException(status_code=500, detail="Failed to process geocoding request")

        if not isinstance(data, dict):
            logger.error("Unexpected geocoding response: %r", data)
            raise HTTPException(status_code=500, detail="Failed to process geocoding request")

        results = data.get("results") or []
        if not results:
            raise HTTPException(status_code=404, detail="Location not found")

        first = results[0] if isinstance(results, list) else None
        if not isinstance(first, dict):
            logger.error("Unexpected geocoding result: %r", results)
            raise HTTPException(status_code=500, detail="Failed to process geocoding request")
        components = first.get("components")
        if not isinstance(components, dict):
            components = {}
        city = next((components[key] for key in CITY_COMPONENT_KEYS if components.get(key)), "")
        return GeocodeResponse(
            city=city,
            country=components.get("country") or "",
            formatted=first.get("formatted") or ""
        )

    def list_countries(self) -> List[CountryOption]:
        """Countries sorted by common name"""
        try:
            response = self.http.get(settings.restcountries_url, params={"fields": "cca2,name"})
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error("Error fetching countries: %s", e)
            raise HTTPException(status_code=502, detail="Failed to fetch countries")

        if not isinstance(data, list):
            logger.error("Unexpected countries response: %r", data)
            raise HTTPException(status_code=502, detail="Failed to fetch countries")

        countries = []
        for country in data:
            if not isinstance(country, dict):
                continue
            code = country.get("cca2")
            names = country.get("name")
            name = names.get("common") if isinstance(names, dict) else None
            if code and name:
                countries.append(CountryOption(value=code, label=name, full_name=name))
        return sorted(countries, key=lambda c: c.label.casefold())

    def list_states(self, country: str) -> List[StateOption]:
        """States / regions of a country, looked up by its full name"""
        try:
            response = self.http.post(settings.countriesnow_url, json={"country": country})
            # CountriesNow answers 404 with an error body for unknown countries
            if response.status_code == 404:
                raise HTTPException(status_code=404, detail="No states data found")
            response.raise_for_status()
            data = response.json()
        except HTTPException:
            raise
        except (httpx.HTTPError, ValueError) as e:
            logger.error("Error fetching states: %s", e)
            raise HTTPException(status_code=502, detail="Failed to fetch states")

        body = data.get("data") if isinstance(data, dict) else None
        states = body.get("states") if isinstance(body, dict) else None
        if not isinstance(states, list) or not states:
            raise HTTPException(status_code=404, detail="No states data found")

        options = [StateOption(value=s["name"], label=s["name"]) for s in states if isinstance(s, dict) and s.get("name")]
        return sorted(options, key=lambda s: s.label.casefold())
