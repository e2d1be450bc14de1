from pydantic import BaseModel
from typing import Optional, Dict, Any


class CurrentUserResponse(BaseModel):
    id: str
    email: Optional[str] = None
    onboarding_step: Optional[str] = None
    onboarding_bio_complete: bool = False
    onboarding_complete: bool = False
    app_metadata: Dict[str, Any] = {}
