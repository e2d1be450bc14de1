from pydantic import BaseModel, field_validator
from typing import Optional
from datetime import datetime


class ProfileUpdate(BaseModel):
    bio: Optional[str] = None


class LocationUpdate(BaseModel):
    city: Optional[str] = None
    country: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    @field_validator("latitude", "longitude", mode="before")
    @classmethod
    def blank_to_none(cls, value):
        # Form posts send "" for an unset coordinate
        if isinstance(value, str) and not value.strip():
            return None
        return value


class UserResponse(BaseModel):
    id: int
    auth_user_id: str
    name: Optional[str] = None
    image_url: Optional[str] = None
    bio: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None
    location_latitude: Optional[float] = None
    location_longitude: Optional[float] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class UserEnvelope(BaseModel):
    user: UserResponse


class UserSummary(BaseModel):
    id: int
    name: str
    avatar: str
