from fastapi import APIRouter, Depends, Query
from app.database.supabase_client import get_supabase
from app.modules.events.schemas import (
    EventCreate, EventResponse, EventDetailResponse,
    RsvpRequest, RsvpResponse, SortOption
)
from app.modules.events.service import EventService
from app.core.dependencies import get_current_profile
from supabase import Client
from typing import List, Optional, Dict

router = APIRouter(prefix="/communities/{community_id}/events", tags=["events"])


def get_event_service(supabase: Client = Depends(get_supabase)) -> EventService:
    return EventService(supabase)


@router.get("", response_model=List[EventResponse])
async def list_events(
    community_id: int,
    sort: SortOption = "newest",
    limit: Optional[int] = Query(None, ge=1, le=100),
    service: EventService = Depends(get_event_service)
):
    """List events of a community, newest first or by event date"""
    return service.list_events(community_id, sort=sort, limit=limit)


@router.post("", response_model=EventResponse, status_code=201)
async def create_event(
    community_id: int,
    event_data: EventCreate,
    profile: Dict = Depends(get_current_profile),
    service: EventService = Depends(get_event_service)
):
    """Create an event (community members only)"""
    return service.create_event(community_id, event_data, profile)


@router.get("/{event_id}", response_model=EventDetailResponse)
async def get_event(
    community_id: int,
    event_id: int,
    service: EventService = Depends(get_event_service)
):
    return service.get_event(community_id, event_id)


@router.put("/{event_id}/rsvp", response_model=RsvpResponse)
async def rsvp(
    community_id: int,
    event_id: int,
    rsvp_data: RsvpRequest,
    profile: Dict = Depends(get_current_profile),
    service: EventService = Depends(get_event_service)
):
    """RSVP to an event, or change an existing RSVP"""
    return service.rsvp(community_id, event_id, profile, rsvp_data.rsvp_status)


@router.delete("/{event_id}/rsvp", status_code=204)
async def cancel_rsvp(
    community_id: int,
    event_id: int,
    profile: Dict = Depends(get_current_profile),
    service: EventService = Depends(get_event_service)
):
    service.cancel_rsvp(community_id, event_id, profile["id"])
    return None
