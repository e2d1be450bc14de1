from tests.conftest import auth_headers


def test_location_update_writes_columns(client, supabase, alice):
    response = client.put(
        "/api/user/location",
        json={"city": "Lisbon", "country": "Portugal", "latitude": 38.72, "longitude": -9.14},
        headers=auth_headers(),
    )

    assert response.status_code == 200
    user = response.json()["user"]
    assert user["city"] == "Lisbon"
    assert user["country"] == "Portugal"
    assert user["location_latitude"] == 38.72
    assert user["location_longitude"] == -9.14


def test_location_coordinates_are_optional(client, alice):
    response = client.put(
        "/api/user/location",
        json={"city": "Lisbon", "country": "Portugal", "latitude": "", "longitude": None},
        headers=auth_headers(),
    )

    assert response.status_code == 200
    assert response.json()["user"]["location_latitude"] is None
    assert response.json()["user"]["location_longitude"] is None


def test_location_requires_city_and_country(client, alice):
    response = client.put("/api/user/location", json={"city": "Lisbon"}, headers=auth_headers())

    assert response.status_code == 400
    assert response.json()["detail"] == "City and country are required"


def test_location_requires_auth(client):
    response = client.put("/api/user/location", json={"city": "Lisbon", "country": "Portugal"})

    assert response.status_code == 401


def test_location_unknown_user_is_404(client, supabase):
    supabase.auth.add_user("token-new", "auth-new")

    response = client.put(
        "/api/user/location",
        json={"city": "Lisbon", "country": "Portugal"},
        headers=auth_headers("token-new"),
    )

    assert response.status_code == 404
