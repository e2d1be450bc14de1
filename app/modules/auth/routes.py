from fastapi import APIRouter, Depends
from app.core.dependencies import get_current_user
from app.modules.auth.schemas import CurrentUserResponse
from typing import Dict

router = APIRouter(prefix="/auth", tags=["auth"])


@router.get("/me", response_model=CurrentUserResponse)
async def get_me(current_user: Dict = Depends(get_current_user)):
    """Current identity and onboarding state (for frontend routing)."""
    app_metadata = current_user.get("app_metadata") or {}
    return CurrentUserResponse(
        id=current_user["id"],
        email=current_user.get("email"),
        onboarding_step=app_metadata.get("onboarding_step"),
        onboarding_bio_complete=bool(app_metadata.get("onboarding_bio_complete")),
        onboarding_complete=bool(app_metadata.get("onboarding_complete")),
        app_metadata=app_metadata,
    )
