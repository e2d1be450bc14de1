from supabase import Client
from app.core.dependencies import check_community_member
from app.modules.communities.service import CommunityService
from app.modules.events.schemas import (
    EventCreate, EventResponse, EventDetailResponse,
    AttendeeResponse, RsvpResponse
)
from app.modules.users.service import fetch_users_by_ids, user_summary
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from fastapi import HTTPException
import logging
import re

logger = logging.getLogger(__name__)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def event_location(event: Dict[str, Any]) -> str:
    """Display location: address parts, else online/unspecified"""
    parts = [event.get(key) for key in ("address", "city", "country")]
    parts = [part.strip() for part in parts if part and part.strip()]
    if parts:
        return ", ".join(parts)
    return "Online Event" if event.get("is_online") else "Location not specified"


def event_chat_name(title: str) -> str:
    slug = re.sub(r"[^a-z0-9]+", "-", title.lower()).strip("-")
    return f"event-chat-{slug or 'event'}"


class EventService:
    def __init__(self, supabase: Client):
        self.supabase = supabase
        self.communities = CommunityService(supabase)

    def _get_event_row(self, community_id: int, event_id: int) -> Dict[str, Any]:
        result = self.supabase.table("events")\
            .select("*")\
            .eq("id", event_id)\
            .eq("community_id", community_id)\
            .limit(1)\
            .execute()
        if not result.data:
            raise HTTPException(status_code=404, detail="Event not found")
        return result.data[0]

    def _format(self, events: List[Dict[str, Any]]) -> List[EventResponse]:
        if not events:
            return []
        attendee_rows = self.supabase.table("event_attendees")\
            .select("*")\
            .in_("event_id", [e["id"] for e in events])\
            .order("rsvp_time")\
            .execute().data or []
        users = fetch_users_by_ids(
            self.supabase,
            [a["user_id"] for a in attendee_rows] + [e.get("created_by") for e in events]
        )

        attendees_by_event: Dict[int, List[AttendeeResponse]] = {}
        for row in attendee_rows:
            summary = user_summary(row["user_id"], users.get(row["user_id"]))
            attendees_by_event.setdefault(row["event_id"], []).append(AttendeeResponse(
                id=summary.id,
                name=summary.name,
                avatar=summary.avatar,
                rsvp_status=row.get("rsvp_status") or "going"
            ))

        formatted = []
        for event in events:
            attendees = attendees_by_event.get(event["id"], [])
            organizer_id = event.get("created_by")
            formatted.append(EventResponse(
                id=event["id"],
                community_id=event["community_id"],
                title=event["title"],
                description=event.get("description"),
                start_time=event["start_time"],
                end_time=event.get("end_time"),
                location=event_location(event),
                address=event.get("address"),
                city=event.get("city"),
                country=event.get("country"),
                is_online=bool(event.get("is_online")),
                max_attendees=event.get("max_attendees"),
                attendees=attendees,
                attendee_count=sum(1 for a in attendees if a.rsvp_status == "going"),
                organizer=user_summary(organizer_id or 0, users.get(organizer_id), "Event Organizer"),
                created_at=event.get("created_at")
            ))
        return formatted

    def list_events(self, community_id: int, sort: str = "newest", limit: Optional[int] = None) -> List[EventResponse]:
        """Community events; 'newest' by creation, 'date' by start time"""
        try:
            self.communities.get_community_row(community_id)
            query = self.supabase.table("events")\
                .select("*")\
                .eq("community_id", community_id)
            if sort == "date":
                query = query.order("start_time")
            else:
                query = query.order("created_at", desc=True)
            if limit:
                query = query.limit(limit)
            return self._format(query.execute().data or [])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error fetching events: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def create_event(self, community_id: int, event_data: EventCreate, profile: Dict[str, Any]) -> EventResponse:
        """Create an event and its chat room (active members only)"""
        self.communities.get_community_row(community_id)
        check_community_member(community_id, profile, self.supabase)
        try:
            result = self.supabase.table("events").insert({
                "community_id": community_id,
                "title": event_data.title,
                "description": event_data.description,
                "start_time": event_data.start_time.isoformat(),
                "end_time": event_data.end_time.isoformat() if event_data.end_time else None,
                "address": event_data.address,
                "city": event_data.city,
                "country": event_data.country,
                "is_online": event_data.is_online,
                "max_attendees": event_data.max_attendees,
                "created_by": profile["id"],
                "created_at": _now()
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create event")
            event = result.data[0]

            self.supabase.table("chat_rooms").insert({
                "community_id": community_id,
                "event_id": event["id"],
                "name": event_chat_name(event_data.title),
                "type": "text",
                "is_moderator_only": False
            }).execute()

            logger.info("Event %s created in community %s", event["id"], community_id)
            return self._format([event])[0]
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error creating event: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def get_event(self, community_id: int, event_id: int) -> EventDetailResponse:
        """Event with attendees, organizer and community summary"""
        try:
            community = self.communities.get_community_summary(community_id)
            event = self._format([self._get_event_row(community_id, event_id)])[0]
            return EventDetailResponse(**event.model_dump(), community=community)
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error fetching event {event_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def _check_can_rsvp(self, community_id: int, profile: Dict[str, Any]) -> None:
        community = self.communities.get_community_row(community_id)
        if community.get("is_private"):
            check_community_member(community_id, profile, self.supabase)

    def rsvp(self, community_id: int, event_id: int, profile: Dict[str, Any], rsvp_status: str) -> RsvpResponse:
        """Create or change the user's RSVP; 'going' is capped by max_attendees"""
        self._check_can_rsvp(community_id, profile)
        event = self._get_event_row(community_id, event_id)
        user_id = profile["id"]
        try:
            existing = self.supabase.table("event_attendees")\
                .select("*")\
                .eq("event_id", event_id)\
                .eq("user_id", user_id)\
                .execute()

            max_attendees = event.get("max_attendees")
            if rsvp_status == "going" and max_attendees:
                going = self.supabase.table("event_attendees")\
                    .select("user_id")\
                    .eq("event_id", event_id)\
                    .eq("rsvp_status", "going")\
                    .execute()
                others = [row for row in going.data or [] if row["user_id"] != user_id]
                if len(others) >= max_attendees:
                    raise HTTPException(status_code=400, detail="Event is full")

            values = {"rsvp_status": rsvp_status, "rsvp_time": _now()}
            if existing.data:
                result = self.supabase.table("event_attendees")\
                    .update(values)\
                    .eq("event_id", event_id)\
                    .eq("user_id", user_id)\
                    .execute()
            else:
                result = self.supabase.table("event_attendees").insert({
                    "event_id": event_id,
                    "user_id": user_id,
                    **values
                }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to save RSVP")
            return RsvpResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error saving RSVP for event {event_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def cancel_rsvp(self, community_id: int, event_id: int, user_id: int) -> None:
        self._get_event_row(community_id, event_id)
        try:
            existing = self.supabase.table("event_attendees")\
                .select("id")\
                .eq("event_id", event_id)\
                .eq("user_id", user_id)\
                .execute()
            if not existing.data:
                raise HTTPException(status_code=404, detail="RSVP not found")
            self.supabase.table("event_attendees")\
                .delete()\
                .eq("event_id", event_id)\
                .eq("user_id", user_id)\
                .execute()
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error cancelling RSVP for event {event_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))
