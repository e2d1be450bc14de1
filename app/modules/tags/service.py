from supabase import Client
from app.modules.tags.schemas import TagResponse
from typing import Any, Dict, List
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


def escape_like(value: str) -> str:
    """
    Escape LIKE wildcards so ilike matches the literal value.

    PostgREST reads `*` as `%` and offers no escape for it, so it becomes a
    single-character `_`; callers needing an exact match re-check with same_name.
    """
    escaped = value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return escaped.replace("*", "_")


def same_name(a: str, b: str) -> bool:
    return (a or "").casefold() == (b or "").casefold()


def normalize_tag_names(names: List[str]) -> List[str]:
    """Trim and drop blanks and case-insensitive repeats, keeping first spelling and order"""
    seen = set()
    cleaned = []
    for name in names:
        name = (name or "").strip()
        if not name or name.lower() in seen:
            continue
        seen.add(name.lower())
        cleaned.append(name)
    return cleaned


class TagService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_tags(self) -> List[TagResponse]:
        """All tags ordered by name"""
        try:
            result = self.supabase.table("tags")\
                .select("id, name")\
                .order("name")\
                .execute()
            return [TagResponse(id=str(tag["id"]), label=tag["name"]) for tag in result.data or []]
        except Exception as e:
            logger.error(f"Error fetching tags: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def get_tags_by_ids(self, tag_ids: List[int]) -> List[Dict[str, Any]]:
        if not tag_ids:
            return []
        result = self.supabase.table("tags")\
            .select("id, name")\
            .in_("id", tag_ids)\
            .execute()
        return result.data or []

    def get_or_create_tags(self, names: List[str]) -> List[Dict[str, Any]]:
        """Resolve tag names to rows, reusing existing tags (case-insensitive) and inserting the rest"""
        names = normalize_tag_names(names)
        tags = []
        for name in names:
            existing = self.supabase.table("tags")\
                .select("id, name")\
                .ilike("name", escape_like(name))\
                .execute()
            match = next((row for row in existing.data or [] if same_name(row["name"], name)), None)
            if match:
                tags.append(match)
                continue

            result = self.supabase.table("tags").insert({"name": name}).execute()
            if not result.data:
                raise HTTPException(status_code=500, detail=f"Failed to create tag '{name}'")
            logger.info("Created tag %s", name)
            tags.append(result.data[0])
        return tags
