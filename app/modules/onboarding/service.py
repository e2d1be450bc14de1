"""
Two-step onboarding: bio (plus interests), then location. Progress is kept in
the identity provider's app_metadata; the profile row gets the actual values.
"""
import logging
from typing import Any, Dict

from fastapi import HTTPException
from supabase import Client

from app.modules.auth.service import AuthService
from app.modules.onboarding.schemas import (
    BioStep, LocationStep, OnboardingStatus, OnboardingResult,
    BIO_COMPLETED, LOCATION_COMPLETED
)
from app.modules.tags.service import TagService
from app.modules.users.service import UserService

logger = logging.getLogger(__name__)


def status_from_metadata(app_metadata: Dict[str, Any]) -> OnboardingStatus:
    app_metadata = app_metadata or {}
    return OnboardingStatus(
        step=app_metadata.get("onboarding_step"),
        onboarding_bio_complete=app_metadata.get("onboarding_bio_complete") is True,
        onboarding_complete=app_metadata.get("onboarding_complete") is True
    )


class OnboardingService:
    def __init__(self, supabase: Client, auth_service: AuthService):
        self.supabase = supabase
        self.auth_service = auth_service
        self.users = UserService(supabase)
        self.tags = TagService(supabase)

    def get_status(self, user_data: Dict[str, Any]) -> OnboardingStatus:
        return status_from_metadata(user_data.get("app_metadata"))

    def complete_bio(self, user_data: Dict[str, Any], step: BioStep) -> OnboardingResult:
        """First step: store bio and interests, mark the bio step done"""
        if not step.bio or not step.bio.strip():
            raise HTTPException(status_code=400, detail="Bio is required")

        interest_ids = list(dict.fromkeys(step.interests))
        known = self.tags.get_tags_by_ids(interest_ids)
        if len(known) != len(interest_ids):
            raise HTTPException(status_code=400, detail="Unknown interest")

        self.users.get_or_create_profile(user_data)
        profile = self.users.update_bio(user_data["id"], step.bio)

        app_metadata = self.auth_service.update_app_metadata(user_data, {
            "bio": profile.bio,
            "interests": interest_ids,
            "onboarding_bio_complete": True,
            "onboarding_step": BIO_COMPLETED
        })
        logger.info("Onboarding bio step completed for %s", user_data["id"])
        return OnboardingResult(
            message="Bio updated successfully",
            status=status_from_metadata(app_metadata),
            user=profile
        )

    def complete_location(self, user_data: Dict[str, Any], step: LocationStep) -> OnboardingResult:
        """Second step: store location and mark onboarding complete"""
        if not (step.city or "").strip() or not (step.country or "").strip():
            raise HTTPException(status_code=400, detail="City and country are required")
        if not self.get_status(user_data).onboarding_bio_complete:
            raise HTTPException(status_code=409, detail="Complete the bio step first")

        profile = self.users.update_location(user_data["id"], step)

        app_metadata = self.auth_service.update_app_metadata(user_data, {
            "onboarding_complete": True,
            "onboarding_step": LOCATION_COMPLETED,
            "location": {"city": profile.city, "country": profile.country}
        })
        logger.info("Onboarding completed for %s", user_data["id"])
        return OnboardingResult(
            message="Location updated successfully",
            status=status_from_metadata(app_metadata),
            user=profile
        )
