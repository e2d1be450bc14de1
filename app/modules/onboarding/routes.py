from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase
from app.core.dependencies import get_current_user, get_auth_service
from app.modules.auth.service import AuthService
from app.modules.onboarding.schemas import BioStep, LocationStep, OnboardingStatus, OnboardingResult
from app.modules.onboarding.service import OnboardingService
from supabase import Client
from typing import Dict

router = APIRouter(prefix="/onboarding", tags=["onboarding"])


def get_onboarding_service(
    supabase: Client = Depends(get_supabase),
    auth_service: AuthService = Depends(get_auth_service)
) -> OnboardingService:
    return OnboardingService(supabase, auth_service)


@router.get("/status", response_model=OnboardingStatus)
async def get_status(
    user_data: Dict = Depends(get_current_user),
    service: OnboardingService = Depends(get_onboarding_service)
):
    return service.get_status(user_data)


@router.post("/bio", response_model=OnboardingResult)
async def complete_bio(
    step: BioStep,
    user_data: Dict = Depends(get_current_user),
    service: OnboardingService = Depends(get_onboarding_service)
):
    """Bio and interests step"""
    return service.complete_bio(user_data, step)


@router.post("/location", response_model=OnboardingResult)
async def complete_location(
    step: LocationStep,
    user_data: Dict = Depends(get_current_user),
    service: OnboardingService = Depends(get_onboarding_service)
):
    """Location step; finishes onboarding"""
    return service.complete_location(user_data, step)
