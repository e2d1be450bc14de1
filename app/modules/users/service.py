from supabase import Client
from app.modules.users.schemas import LocationUpdate, UserResponse, UserSummary
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class UserService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def _find_profile(self, auth_user_id: str) -> Optional[Dict[str, Any]]:
        result = self.supabase.table("users")\
            .select("*")\
            .eq("auth_user_id", auth_user_id)\
            .limit(1)\
            .execute()
        return result.data[0] if result.data else None

    def get_profile(self, auth_user_id: str) -> UserResponse:
        """Get the profile linked to an identity"""
        try:
            profile = self._find_profile(auth_user_id)
            if not profile:
                raise HTTPException(status_code=404, detail="User not found")
            return UserResponse(**profile)
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error loading user profile: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def get_or_create_profile(self, user_data: Dict[str, Any]) -> UserResponse:
        """Return the existing profile or create an empty one for a new identity"""
        auth_user_id = user_data["id"]
        try:
            existing = self._find_profile(auth_user_id)
            if existing:
                return UserResponse(**existing)

            logger.info("Creating profile for identity %s", auth_user_id)
            metadata = user_data.get("user_metadata") or {}
            now = _now()
            result = self.supabase.table("users").insert({
                "auth_user_id": auth_user_id,
                "name": metadata.get("full_name") or metadata.get("name"),
                "image_url": metadata.get("avatar_url"),
                "bio": None,
                "created_at": now,
                "updated_at": now
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create user profile")

            return UserResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error in profile creation: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def update_bio(self, auth_user_id: str, bio: Optional[str]) -> UserResponse:
        """Update profile bio"""
        if not bio or not bio.strip():
            raise HTTPException(status_code=400, detail="Bio is required")
        try:
            result = self.supabase.table("users")\
                .update({"bio": bio.strip(), "updated_at": _now()})\
                .eq("auth_user_id", auth_user_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="User not found")

            return UserResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error updating user bio: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def update_location(self, auth_user_id: str, location: LocationUpdate) -> UserResponse:
        """Update profile city, country and coordinates"""
        city = (location.city or "").strip()
        country = (location.country or "").strip()
        if not city or not country:
            raise HTTPException(status_code=400, detail="City and country are required")
        try:
            result = self.supabase.table("users")\
                .update({
                    "city": city,
                    "country": country,
                    "location_latitude": location.latitude,
                    "location_longitude": location.longitude,
                    "updated_at": _now()
                })\
                .eq("auth_user_id", auth_user_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="User not found")

            return UserResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error updating user location: {e}")
            raise HTTPException(status_code=500, detail=str(e))


PLACEHOLDER_AVATAR = "/placeholder.svg"


def user_summary(user_id: int, row: Optional[Dict[str, Any]], fallback_name: str = "Anonymous") -> UserSummary:
    """Display form of a user; rows may be missing for deleted accounts"""
    row = row or {}
    return UserSummary(
        id=user_id,
        name=row.get("name") or fallback_name,
        avatar=row.get("image_url") or PLACEHOLDER_AVATAR
    )


def fetch_users_by_ids(supabase: Client, user_ids: List[int]) -> Dict[int, Dict[str, Any]]:
    """Map user id -> users row for the given ids"""
    ids = list({uid for uid in user_ids if uid is not None})
    if not ids:
        return {}
    result = supabase.table("users")\
        .select("id, name, image_url")\
        .in_("id", ids)\
        .execute()
    return {row["id"]: row for row in result.data or []}
