import pytest

from app.modules.events.service import event_chat_name, event_location
from tests.conftest import add_member, auth_headers


@pytest.fixture()
def community(client, alice):
    response = client.post(
        "/api/communities",
        json={"name": "Trail Runners", "tags": ["Fitness"]},
        headers=auth_headers(),
    )
    return response.json()


def _event(**overrides):
    payload = {
        "title": "Sunrise Run",
        "description": "10k along the fjord",
        "start_time": "2030-05-01T06:00:00Z",
        "end_time": "2030-05-01T08:00:00Z",
        "address": "Aker Brygge",
        "city": "Oslo",
        "country": "Norway",
        "max_attendees": 2,
    }
    payload.update(overrides)
    return payload


def test_event_location_fallbacks():
    assert event_location({"address": "1 Main St", "city": "", "country": "USA"}) == "1 Main St, USA"
    assert event_location({"is_online": True}) == "Online Event"
    assert event_location({}) == "Location not specified"


def test_event_chat_name_slugifies_title():
    assert event_chat_name("Board Games & Pizza!") == "event-chat-board-games-pizza"


def test_create_event_adds_chat_room(client, supabase, community):
    response = client.post(f"/api/communities/{community['id']}/events", json=_event(), headers=auth_headers())

    assert response.status_code == 201
    event = response.json()
    assert event["title"] == "Sunrise Run"
    assert event["location"] == "Aker Brygge, Oslo, Norway"
    assert event["organizer"]["name"] == "Alice"
    assert event["attendees"] == []
    event_rooms = [r for r in supabase.rows("chat_rooms") if r.get("event_id") == event["id"]]
    assert [r["name"] for r in event_rooms] == ["event-chat-sunrise-run"]

    community_rooms = client.get(f"/api/communities/{community['id']}/chat-rooms").json()
    assert [r["name"] for r in community_rooms] == ["general"]


@pytest.mark.parametrize("overrides", [
    {"title": "  "},
    {"start_time": None},
    {"end_time": "2030-05-01T05:00:00Z"},
    {"max_attendees": 0},
    {"address": None, "city": None, "is_online": False},
])
def test_create_event_validation(client, community, overrides):
    response = client.post(
        f"/api/communities/{community['id']}/events",
        json=_event(**overrides),
        headers=auth_headers(),
    )

    assert response.status_code == 400


def test_online_event_needs_no_address(client, community):
    response = client.post(
        f"/api/communities/{community['id']}/events",
        json=_event(address=None, city=None, country=None, is_online=True),
        headers=auth_headers(),
    )

    assert response.status_code == 201
    assert response.json()["location"] == "Online Event"


def test_only_members_create_events(client, supabase, community):
    add_member(supabase, "token-bob", "auth-bob", "Bob")

    response = client.post(
        f"/api/communities/{community['id']}/events",
        json=_event(),
        headers=auth_headers("token-bob"),
    )

    assert response.status_code == 403


def test_events_sort_newest_or_by_date(client, supabase, community):
    supabase.insert("events", [
        {"community_id": community["id"], "title": "Later, created first", "is_online": True,
         "start_time": "2030-06-01T10:00:00+00:00", "created_at": "2030-01-01T00:00:00+00:00"},
        {"community_id": community["id"], "title": "Sooner, created last", "is_online": True,
         "start_time": "2030-02-01T10:00:00+00:00", "created_at": "2030-01-03T00:00:00+00:00"},
    ])
    url = f"/api/communities/{community['id']}/events"

    newest = client.get(url).json()
    by_date = client.get(url, params={"sort": "date"}).json()

    assert [e["title"] for e in newest] == ["Sooner, created last", "Later, created first"]
    assert [e["title"] for e in by_date] == ["Sooner, created last", "Later, created first"]
    assert by_date[0]["start_time"].startswith("2030-02-01")
    assert newest[0]["organizer"] == {"id": 0, "name": "Event Organizer", "avatar": "/placeholder.svg"}
    assert client.get(url, params={"sort": "random"}).status_code == 400
    assert client.get("/api/communities/9999/events").status_code == 404


def test_events_sorted_by_date_ignore_creation_order(client, supabase, community):
    supabase.insert("events", [
        {"community_id": community["id"], "title": "B", "is_online": True,
         "start_time": "2030-03-01T10:00:00+00:00", "created_at": "2030-01-02T00:00:00+00:00"},
        {"community_id": community["id"], "title": "A", "is_online": True,
         "start_time": "2030-01-15T10:00:00+00:00", "created_at": "2030-01-01T00:00:00+00:00"},
    ])
    url = f"/api/communities/{community['id']}/events"

    assert [e["title"] for e in client.get(url).json()] == ["B", "A"]
    assert [e["title"] for e in client.get(url, params={"sort": "date"}).json()] == ["A", "B"]


def test_event_detail_includes_community(client, community):
    created = client.post(f"/api/communities/{community['id']}/events", json=_event(), headers=auth_headers()).json()

    detail = client.get(f"/api/communities/{community['id']}/events/{created['id']}")
    wrong_community = client.get(f"/api/communities/9999/events/{created['id']}")

    assert detail.status_code == 200
    assert detail.json()["community"] == {
        "id": community["id"],
        "name": "Trail Runners",
        "image_url": None,
        "member_count": 1,
    }
    assert wrong_community.status_code == 404


def test_rsvp_respects_max_attendees(client, supabase, community):
    created = client.post(f"/api/communities/{community['id']}/events", json=_event(), headers=auth_headers()).json()
    url = f"/api/communities/{community['id']}/events/{created['id']}/rsvp"
    add_member(supabase, "token-bob", "auth-bob", "Bob")
    add_member(supabase, "token-cat", "auth-cat", "Cat")

    assert client.put(url, json={"rsvp_status": "going"}, headers=auth_headers()).status_code == 200
    assert client.put(url, json={"rsvp_status": "going"}, headers=auth_headers("token-bob")).status_code == 200

    full = client.put(url, json={"rsvp_status": "going"}, headers=auth_headers("token-cat"))
    assert full.status_code == 400
    assert full.json()["detail"] == "Event is full"

    interested = client.put(url, json={"rsvp_status": "interested"}, headers=auth_headers("token-cat"))
    assert interested.status_code == 200

    # re-confirming an existing seat is not blocked by the cap
    assert client.put(url, json={"rsvp_status": "going"}, headers=auth_headers("token-bob")).status_code == 200

    event = client.get(f"/api/communities/{community['id']}/events/{created['id']}").json()
    assert event["attendee_count"] == 2
    assert sorted((a["name"], a["rsvp_status"]) for a in event["attendees"]) == [
        ("Alice", "going"), ("Bob", "going"), ("Cat", "interested"),
    ]
    assert len(supabase.rows("event_attendees")) == 3


def test_cancel_rsvp(client, community):
    created = client.post(f"/api/communities/{community['id']}/events", json=_event(), headers=auth_headers()).json()
    url = f"/api/communities/{community['id']}/events/{created['id']}/rsvp"

    client.put(url, json={"rsvp_status": "going"}, headers=auth_headers())

    assert client.delete(url, headers=auth_headers()).status_code == 204
    assert client.delete(url, headers=auth_headers()).status_code == 404


def test_private_community_rsvp_requires_membership(client, supabase, alice):
    private = client.post(
        "/api/communities",
        json={"name": "Secret Supper", "is_private": True},
        headers=auth_headers(),
    ).json()
    created = client.post(
        f"/api/communities/{private['id']}/events",
        json=_event(max_attendees=None),
        headers=auth_headers(),
    ).json()
    add_member(supabase, "token-bob", "auth-bob", "Bob")

    response = client.put(
        f"/api/communities/{private['id']}/events/{created['id']}/rsvp",
        json={"rsvp_status": "going"},
        headers=auth_headers("token-bob"),
    )

    assert response.status_code == 403
