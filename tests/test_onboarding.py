from tests.conftest import auth_headers

NEW_TOKEN = "token-new"


def _new_identity(supabase, **app_metadata):
    supabase.auth.add_user(NEW_TOKEN, "auth-new", app_metadata=app_metadata)


def test_status_starts_empty(client, supabase):
    _new_identity(supabase)

    response = client.get("/api/onboarding/status", headers=auth_headers(NEW_TOKEN))

    assert response.status_code == 200
    assert response.json() == {
        "step": None,
        "onboarding_bio_complete": False,
        "onboarding_complete": False,
    }


def test_bio_step_without_bio_is_400(client, supabase):
    _new_identity(supabase)

    response = client.post("/api/onboarding/bio", json={"interests": []}, headers=auth_headers(NEW_TOKEN))

    assert response.status_code == 400
    assert response.json()["detail"] == "Bio is required"
    assert supabase.auth.users["auth-new"].app_metadata == {}


def test_bio_step_creates_profile_and_marks_progress(client, supabase):
    _new_identity(supabase)
    music = supabase.insert("tags", {"name": "Music"})[0]

    response = client.post(
        "/api/onboarding/bio",
        json={"bio": "I play bass", "interests": [str(music["id"])]},
        headers=auth_headers(NEW_TOKEN),
    )

    assert response.status_code == 200
    body = response.json()
    assert body["user"]["bio"] == "I play bass"
    assert body["status"]["step"] == "bio-completed"
    assert body["status"]["onboarding_bio_complete"] is True
    assert body["status"]["onboarding_complete"] is False
    metadata = supabase.auth.users["auth-new"].app_metadata
    assert metadata["interests"] == [music["id"]]
    assert len(supabase.rows("users")) == 1


def test_bio_step_rejects_unknown_interest(client, supabase):
    _new_identity(supabase)

    response = client.post(
        "/api/onboarding/bio",
        json={"bio": "hello", "interests": [999]},
        headers=auth_headers(NEW_TOKEN),
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "Unknown interest"


def test_location_step_requires_bio_step(client, supabase):
    _new_identity(supabase)
    supabase.insert("users", {"auth_user_id": "auth-new"})

    response = client.post(
        "/api/onboarding/location",
        json={"city": "Oslo", "country": "Norway"},
        headers=auth_headers(NEW_TOKEN),
    )

    assert response.status_code == 409


def test_location_step_requires_city_and_country(client, supabase):
    _new_identity(supabase, onboarding_bio_complete=True)

    response = client.post(
        "/api/onboarding/location",
        json={"country": "Norway"},
        headers=auth_headers(NEW_TOKEN),
    )

    assert response.status_code == 400


def test_full_flow_unlocks_discovery(client, supabase):
    _new_identity(supabase)

    blocked = client.get("/api/communities", headers=auth_headers(NEW_TOKEN))
    assert blocked.status_code == 403

    bio = client.post("/api/onboarding/bio", json={"bio": "New in town"}, headers=auth_headers(NEW_TOKEN))
    assert bio.status_code == 200

    location = client.post(
        "/api/onboarding/location",
        json={"city": "Oslo", "country": "Norway", "latitude": "59.91", "longitude": "10.75"},
        headers=auth_headers(NEW_TOKEN),
    )
    assert location.status_code == 200
    body = location.json()
    assert body["status"] == {
        "step": "location-completed",
        "onboarding_bio_complete": True,
        "onboarding_complete": True,
    }
    assert body["user"]["city"] == "Oslo"
    assert supabase.auth.users["auth-new"].app_metadata["location"] == {"city": "Oslo", "country": "Norway"}

    me = client.get("/api/auth/me", headers=auth_headers(NEW_TOKEN))
    assert me.json()["onboarding_complete"] is True

    discover = client.get("/api/communities", headers=auth_headers(NEW_TOKEN))
    assert discover.status_code == 200
    assert discover.json() == []
