from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase
from app.modules.tags.schemas import TagResponse
from app.modules.tags.service import TagService
from supabase import Client
from typing import List

router = APIRouter(prefix="/tags", tags=["tags"])


def get_tag_service(supabase: Client = Depends(get_supabase)) -> TagService:
    return TagService(supabase)


@router.get("", response_model=List[TagResponse])
async def list_tags(service: TagService = Depends(get_tag_service)):
    """Interests / categories, ordered by name"""
    return service.list_tags()
