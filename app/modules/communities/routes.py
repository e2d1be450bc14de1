from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile
from app.config import settings
from app.database.supabase_client import get_supabase
from app.modules.communities.schemas import (
    CommunityCreate, CommunityResponse, MembershipResponse,
    MemberResponse, ChatRoomResponse
)
from app.modules.communities.service import CommunityService
from app.modules.communities.image_storage import CommunityImageStorage
from app.core.dependencies import get_current_profile, require_onboarding_complete, check_community_owner
from supabase import Client
from typing import List, Optional, Dict

router = APIRouter(prefix="/communities", tags=["communities"])


def get_community_service(supabase: Client = Depends(get_supabase)) -> CommunityService:
    return CommunityService(supabase)


def get_image_storage(supabase: Client = Depends(get_supabase)) -> CommunityImageStorage:
    return CommunityImageStorage(supabase)


@router.post("", response_model=CommunityResponse, status_code=201)
async def create_community(
    community_data: CommunityCreate,
    profile: Dict = Depends(get_current_profile),
    service: CommunityService = Depends(get_community_service)
):
    """Create a community; the creator becomes its owner"""
    return service.create_community(community_data, profile["id"])


@router.get("", response_model=List[CommunityResponse])
async def list_communities(
    tag: Optional[str] = None,
    q: Optional[str] = None,
    limit: int = Query(20, ge=1, le=50),
    offset: int = Query(0, ge=0),
    user_data: Dict = Depends(require_onboarding_complete),
    service: CommunityService = Depends(get_community_service)
):
    """Discover communities (requires finished onboarding)"""
    return service.list_communities(tag=tag, q=q, limit=limit, offset=offset)


@router.get("/{community_id}", response_model=CommunityResponse)
async def get_community(
    community_id: int,
    service: CommunityService = Depends(get_community_service)
):
    return service.get_community(community_id)


@router.post("/{community_id}/join", response_model=MembershipResponse, status_code=201)
async def join_community(
    community_id: int,
    profile: Dict = Depends(get_current_profile),
    service: CommunityService = Depends(get_community_service)
):
    """Join a community; private communities get a pending request"""
    return service.join_community(community_id, profile["id"])


@router.delete("/{community_id}/members/me", status_code=204)
async def leave_community(
    community_id: int,
    profile: Dict = Depends(get_current_profile),
    service: CommunityService = Depends(get_community_service)
):
    service.leave_community(community_id, profile["id"])
    return None


@router.get("/{community_id}/members", response_model=List[MemberResponse])
async def list_members(
    community_id: int,
    service: CommunityService = Depends(get_community_service)
):
    return service.list_members(community_id)


@router.get("/{community_id}/chat-rooms", response_model=List[ChatRoomResponse])
async def list_chat_rooms(
    community_id: int,
    service: CommunityService = Depends(get_community_service)
):
    return service.list_chat_rooms(community_id)


@router.post("/{community_id}/image", response_model=CommunityResponse)
async def upload_community_image(
    community_id: int,
    file: UploadFile = File(...),
    profile: Dict = Depends(get_current_profile),
    service: CommunityService = Depends(get_community_service),
    storage: CommunityImageStorage = Depends(get_image_storage),
    supabase: Client = Depends(get_supabase)
):
    """Upload the community image (owner only)"""
    service.get_community_row(community_id)
    check_community_owner(community_id, profile, supabase)

    content_type = file.content_type or ""
    if not content_type.startswith("image/"):
        raise HTTPException(status_code=400, detail="File must be an image")
    content = await file.read(settings.max_image_bytes + 1)
    if not content:
        raise HTTPException(status_code=400, detail="File is empty")
    if len(content) > settings.max_image_bytes:
        raise HTTPException(status_code=400, detail="Image is too large")

    return service.update_image(community_id, content, content_type, storage)
