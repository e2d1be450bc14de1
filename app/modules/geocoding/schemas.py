from pydantic import BaseModel


class GeocodeResponse(BaseModel):
    city: str
    country: str
    formatted: str


class CountryOption(BaseModel):
    value: str  # ISO 3166-1 alpha-2 code
    label: str
    full_name: str


class StateOption(BaseModel):
    value: str
    label: str
