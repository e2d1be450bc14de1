import os

import pytest
from fastapi.testclient import TestClient

os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("SUPABASE_URL", "https://example.supabase.co")
os.environ.setdefault("SUPABASE_KEY", "anon-key")

from app.database.supabase_client import get_supabase
from app.main import app
from app.modules.auth.service import clear_auth_cache
from tests.fakes import FakeSupabase

TOKEN = "token-alice"
AUTH_USER_ID = "auth-alice"


@pytest.fixture()
def supabase() -> FakeSupabase:
    return FakeSupabase()


@pytest.fixture()
def client(supabase):
    clear_auth_cache()
    app.dependency_overrides[get_supabase] = lambda: supabase
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
    clear_auth_cache()


@pytest.fixture()
def alice(supabase):
    """Signed-in identity with a profile row and finished onboarding"""
    supabase.auth.add_user(
        TOKEN,
        AUTH_USER_ID,
        app_metadata={"onboarding_complete": True, "onboarding_bio_complete": True},
    )
    profile = supabase.insert("users", {
        "auth_user_id": AUTH_USER_ID,
        "name": "Alice",
        "image_url": "https://img.example.com/alice.png",
        "bio": "Hiker",
        "created_at": "2024-01-01T00:00:00+00:00",
    })[0]
    return profile


def auth_headers(token: str = TOKEN) -> dict:
    return {"Authorization": f"Bearer {token}"}


def add_member(supabase, token, auth_user_id, name, onboarded=True):
    """Create another identity with its profile row"""
    supabase.auth.add_user(token, auth_user_id, app_metadata={"onboarding_complete": onboarded})
    return supabase.insert("users", {"auth_user_id": auth_user_id, "name": name})[0]
