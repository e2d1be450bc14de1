from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase
from app.modules.users.schemas import ProfileUpdate, LocationUpdate, UserEnvelope
from app.modules.users.service import UserService
from app.core.dependencies import get_current_user
from supabase import Client
from typing import Dict

router = APIRouter(prefix="/user", tags=["users"])


def get_user_service(supabase: Client = Depends(get_supabase)) -> UserService:
    return UserService(supabase)


@router.post("/profile", response_model=UserEnvelope)
async def create_profile(
    user_data: Dict = Depends(get_current_user),
    service: UserService = Depends(get_user_service)
):
    """Create the profile row for the signed-in identity, or return the existing one"""
    return UserEnvelope(user=service.get_or_create_profile(user_data))


@router.get("/profile", response_model=UserEnvelope)
async def get_profile(
    user_data: Dict = Depends(get_current_user),
    service: UserService = Depends(get_user_service)
):
    return UserEnvelope(user=service.get_profile(user_data["id"]))


@router.put("/profile", response_model=UserEnvelope)
async def update_profile(
    profile_data: ProfileUpdate,
    user_data: Dict = Depends(get_current_user),
    service: UserService = Depends(get_user_service)
):
    """Update the signed-in user's bio"""
    return UserEnvelope(user=service.update_bio(user_data["id"], profile_data.bio))


@router.put("/location", response_model=UserEnvelope)
async def update_location(
    location_data: LocationUpdate,
    user_data: Dict = Depends(get_current_user),
    service: UserService = Depends(get_user_service)
):
    """Update the signed-in user's city, country and coordinates"""
    return UserEnvelope(user=service.update_location(user_data["id"], location_data))
