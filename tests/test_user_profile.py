from tests.conftest import AUTH_USER_ID, auth_headers


def test_profile_requires_bearer_token(client):
    response = client.post("/api/user/profile")

    assert response.status_code == 401
    assert response.json()["detail"] == "Unauthorized"


def test_profile_rejects_unknown_token(client):
    response = client.post("/api/user/profile", headers=auth_headers("not-a-token"))

    assert response.status_code == 401


def test_post_profile_creates_row_once(client, supabase):
    supabase.auth.add_user("token-new", "auth-new", user_metadata={"full_name": "Nora"})

    first = client.post("/api/user/profile", headers=auth_headers("token-new"))
    second = client.post("/api/user/profile", headers=auth_headers("token-new"))

    assert first.status_code == 200
    user = first.json()["user"]
    assert user["auth_user_id"] == "auth-new"
    assert user["name"] == "Nora"
    assert user["bio"] is None
    assert second.json()["user"]["id"] == user["id"]
    assert len(supabase.rows("users")) == 1


def test_post_profile_returns_existing_row(client, alice):
    response = client.post("/api/user/profile", headers=auth_headers())

    assert response.status_code == 200
    assert response.json()["user"]["id"] == alice["id"]
    assert response.json()["user"]["bio"] == "Hiker"


def test_get_profile_missing_row_is_404(client, supabase):
    supabase.auth.add_user("token-new", "auth-new")

    response = client.get("/api/user/profile", headers=auth_headers("token-new"))

    assert response.status_code == 404


def test_put_profile_updates_bio(client, supabase, alice):
    response = client.put("/api/user/profile", json={"bio": "  Climber and cook  "}, headers=auth_headers())

    assert response.status_code == 200
    assert response.json()["user"]["bio"] == "Climber and cook"
    stored = [u for u in supabase.rows("users") if u["auth_user_id"] == AUTH_USER_ID][0]
    assert stored["bio"] == "Climber and cook"
    assert stored["updated_at"] is not None


def test_put_profile_without_bio_is_400(client, alice):
    response = client.put("/api/user/profile", json={}, headers=auth_headers())

    assert response.status_code == 400
    assert response.json()["detail"] == "Bio is required"


def test_put_profile_blank_bio_is_400(client, alice):
    response = client.put("/api/user/profile", json={"bio": "   "}, headers=auth_headers())

    assert response.status_code == 400


def test_put_profile_unknown_user_is_404(client, supabase):
    supabase.auth.add_user("token-new", "auth-new")

    response = client.put("/api/user/profile", json={"bio": "hello"}, headers=auth_headers("token-new"))

    assert response.status_code == 404
