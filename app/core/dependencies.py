"""
Core dependencies for route protection, profile lookup and membership checks
"""

from fastapi import Depends, HTTPException, Security, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from app.config import settings
from app.database.supabase_client import get_supabase
from app.modules.auth.service import AuthService
from supabase import Client
from typing import Any, Dict, Iterator, Optional
import httpx
import logging

logger = logging.getLogger(__name__)

# auto_error=False so a missing header is a 401, not FastAPI's default 403
security = HTTPBearer(auto_error=False)


def get_auth_service(supabase: Client = Depends(get_supabase)) -> AuthService:
    return AuthService(supabase)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(security),
    auth_service: AuthService = Depends(get_auth_service)
) -> dict:
    """Extract current identity from the bearer token"""
    if credentials is None or not credentials.credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized"
        )
    return auth_service.get_current_user(credentials.credentials)


def get_profile_by_auth_id(auth_user_id: str, supabase: Client) -> Optional[Dict[str, Any]]:
    """Return the users row linked to an identity, or None"""
    result = supabase.table("users")\
        .select("*")\
        .eq("auth_user_id", auth_user_id)\
        .limit(1)\
        .execute()
    return result.data[0] if result.data else None


def get_current_profile(
    user_data: dict = Depends(get_current_user),
    supabase: Client = Depends(get_supabase)
) -> dict:
    """Map the signed-in identity to its internal users row"""
    try:
        profile = get_profile_by_auth_id(user_data["id"], supabase)
    except Exception as e:
        logger.error(f"Error loading profile for {user_data['id']}: {e}")
        raise HTTPException(status_code=500, detail="Failed to load user profile")
    if not profile:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User profile not found"
        )
    return profile


def is_onboarding_complete(user_data: dict) -> bool:
    app_metadata = user_data.get("app_metadata") or {}
    return app_metadata.get("onboarding_complete") is True


def require_onboarding_complete(user_data: dict = Depends(get_current_user)) -> dict:
    """Gate for pages that need a finished onboarding flow"""
    if not is_onboarding_complete(user_data):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Onboarding not complete"
        )
    return user_data


def get_http_client() -> Iterator[httpx.Client]:
    """Per-request client for third-party lookup APIs"""
    with httpx.Client(timeout=settings.http_timeout_seconds) as client:
        yield client


def get_community_membership(community_id: int, user_id: int, supabase: Client) -> Optional[Dict[str, Any]]:
    result = supabase.table("community_members")\
        .select("*")\
        .eq("community_id", community_id)\
        .eq("user_id", user_id)\
        .limit(1)\
        .execute()
    return result.data[0] if result.data else None


def check_community_member(community_id: int, profile: dict, supabase: Client) -> dict:
    """Check that the profile is an active member of the community"""
    membership = get_community_membership(community_id, profile["id"], supabase)
    if not membership or membership.get("status") != "active":
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You must be a member of this community"
        )
    return membership


def check_community_owner(community_id: int, profile: dict, supabase: Client) -> dict:
    """Check that the profile owns the community"""
    membership = get_community_membership(community_id, profile["id"], supabase)
    if not membership or membership.get("role") != "owner":
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You must be the community owner to perform this action"
        )
    return membership
