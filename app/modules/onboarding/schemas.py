from pydantic import BaseModel
from typing import List, Optional
from app.modules.users.schemas import LocationUpdate, UserResponse

BIO_COMPLETED = "bio-completed"
LOCATION_COMPLETED = "location-completed"


class BioStep(BaseModel):
    bio: Optional[str] = None
    interests: List[int] = []


class LocationStep(LocationUpdate):
    pass


class OnboardingStatus(BaseModel):
    step: Optional[str] = None  # None | bio-completed | location-completed
    onboarding_bio_complete: bool = False
    onboarding_complete: bool = False


class OnboardingResult(BaseModel):
    message: str
    status: OnboardingStatus
    user: UserResponse
