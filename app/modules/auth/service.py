import hashlib
import logging
import time
from supabase import Client
from fastapi import HTTPException
from typing import Dict, Any

logger = logging.getLogger(__name__)

# In-memory cache for get_current_user to reduce Supabase auth calls (e.g. many parallel requests with same token)
_AUTH_USER_CACHE: Dict[str, tuple] = {}
_AUTH_CACHE_TTL_SEC = 60
_AUTH_CACHE_MAX_SIZE = 500


def clear_auth_cache(user_id: str = None) -> None:
    """Drop cached identities, all of them or only those of one user."""
    if user_id is None:
        _AUTH_USER_CACHE.clear()
        return
    stale = [key for key, (user_data, _) in _AUTH_USER_CACHE.items() if user_data["id"] == user_id]
    for key in stale:
        del _AUTH_USER_CACHE[key]


class AuthService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def get_current_user(self, token: str) -> Dict[str, Any]:
        """Get current user details from Supabase Auth token. Uses short TTL cache to reduce auth API calls."""
        try:
            cache_key = hashlib.sha256(token.encode()).hexdigest()
            now = time.monotonic()
            if cache_key in _AUTH_USER_CACHE:
                user_data, expiry = _AUTH_USER_CACHE[cache_key]
                if now < expiry:
                    return user_data
                del _AUTH_USER_CACHE[cache_key]
            user_response = self.supabase.auth.get_user(jwt=token)
            if not user_response or not user_response.user:
                raise HTTPException(status_code=401, detail="Invalid or expired token")
            user = user_response.user
            user_data = {
                "id": user.id,
                "email": user.email,
                "user_metadata": user.user_metadata or {},
                "app_metadata": user.app_metadata or {},
            }
            if len(_AUTH_USER_CACHE) < _AUTH_CACHE_MAX_SIZE:
                _AUTH_USER_CACHE[cache_key] = (user_data, now + _AUTH_CACHE_TTL_SEC)
            return user_data
        except HTTPException:
            raise
        except Exception as e:
            error_msg = str(e)
            logger.warning("Token validation failed: %s", error_msg)
            if "JWT" in error_msg or "expired" in error_msg.lower() or "invalid" in error_msg.lower():
                raise HTTPException(status_code=401, detail="Invalid or expired token")
            raise HTTPException(status_code=401, detail="Authentication failed")

    def update_app_metadata(self, user_data: Dict[str, Any], changes: Dict[str, Any]) -> Dict[str, Any]:
        """Merge changes into the user's app_metadata (requires the service role client)"""
        app_metadata = {**(user_data.get("app_metadata") or {}), **changes}
        try:
            response = self.supabase.auth.admin.update_user_by_id(
                user_data["id"],
                {"app_metadata": app_metadata}
            )
        except Exception as e:
            logger.error("Failed to update app_metadata for %s: %s", user_data["id"], e)
            raise HTTPException(status_code=500, detail="Failed to update identity metadata")

        if not response or not response.user:
            raise HTTPException(status_code=404, detail="User not found")

        clear_auth_cache(user_data["id"])
        return response.user.app_metadata or app_metadata
