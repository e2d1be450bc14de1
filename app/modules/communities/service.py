from supabase import Client
from app.modules.communities.schemas import (
    CommunityCreate, CommunityResponse, CommunitySummary,
    MembershipResponse, MemberResponse, ChatRoomResponse
)
from app.modules.communities.image_storage import CommunityImageStorage
from app.modules.tags.service import TagService, escape_like, same_name
from app.modules.users.service import fetch_users_by_ids, user_summary
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from fastapi import HTTPException
import logging
import mimetypes
import uuid

logger = logging.getLogger(__name__)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class CommunityService:
    def __init__(self, supabase: Client):
        self.supabase = supabase
        self.tags = TagService(supabase)

    def get_community_row(self, community_id: int) -> Dict[str, Any]:
        """Raw communities row; 404 when missing"""
        result = self.supabase.table("communities")\
            .select("*")\
            .eq("id", community_id)\
            .limit(1)\
            .execute()
        if not result.data:
            raise HTTPException(status_code=404, detail="Community not found")
        return result.data[0]

    def _tag_names_by_community(self, community_ids: List[int]) -> Dict[int, List[str]]:
        if not community_ids:
            return {}
        links = self.supabase.table("community_tags")\
            .select("community_id, tag_id")\
            .in_("community_id", community_ids)\
            .execute()
        tag_ids = list({link["tag_id"] for link in links.data or []})
        names = {tag["id"]: tag["name"] for tag in self.tags.get_tags_by_ids(tag_ids)}
        by_community: Dict[int, List[str]] = {cid: [] for cid in community_ids}
        for link in links.data or []:
            by_community.setdefault(link["community_id"], []).append(names.get(link["tag_id"], "Unknown"))
        return by_community

    def _format(self, rows: List[Dict[str, Any]]) -> List[CommunityResponse]:
        tag_names = self._tag_names_by_community([row["id"] for row in rows])
        return [
            CommunityResponse(**{
                **row,
                "member_count": row.get("member_count") or 0,
                "is_private": bool(row.get("is_private")),
                "tags": tag_names.get(row["id"], [])
            })
            for row in rows
        ]

    def _set_member_count(self, community: Dict[str, Any], delta: int) -> None:
        count = max(0, (community.get("member_count") or 0) + delta)
        self.supabase.table("communities")\
            .update({"member_count": count, "updated_at": _now()})\
            .eq("id", community["id"])\
            .execute()

    def create_community(self, community_data: CommunityCreate, user_id: int) -> CommunityResponse:
        """Create a community with its tags and chat rooms; the creator becomes owner"""
        try:
            now = _now()
            result = self.supabase.table("communities").insert({
                "name": community_data.name,
                "description": community_data.description,
                "country": community_data.country,
                "city": community_data.city,
                "is_private": community_data.is_private,
                "member_count": 1,
                "created_by": user_id,
                "created_at": now,
                "updated_at": now
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create community")
            community = result.data[0]
            community_id = community["id"]

            tags = self.tags.get_or_create_tags(community_data.tags)
            if tags:
                self.supabase.table("community_tags").insert([
                    {"community_id": community_id, "tag_id": tag["id"]} for tag in tags
                ]).execute()

            self.supabase.table("chat_rooms").insert([
                {
                    "community_id": community_id,
                    "name": room.name,
                    "type": room.type,
                    "is_moderator_only": False
                }
                for room in community_data.chat_rooms
            ]).execute()

            # Add creator as owner
            self.supabase.table("community_members").insert({
                "community_id": community_id,
                "user_id": user_id,
                "role": "owner",
                "status": "active",
                "joined_at": now
            }).execute()

            logger.info("Community %s created by user %s", community_id, user_id)
            return CommunityResponse(**{
                **community,
                "tags": [tag["name"] for tag in tags]
            })
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error creating community: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def get_community(self, community_id: int) -> CommunityResponse:
        """Get community with tag names"""
        try:
            return self._format([self.get_community_row(community_id)])[0]
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error fetching community {community_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def get_community_summary(self, community_id: int) -> CommunitySummary:
        row = self.get_community_row(community_id)
        return CommunitySummary(
            id=row["id"],
            name=row["name"],
            image_url=row.get("image_url"),
            member_count=row.get("member_count") or 0
        )

    def list_communities(
        self,
        tag: Optional[str] = None,
        q: Optional[str] = None,
        limit: int = 20,
        offset: int = 0
    ) -> List[CommunityResponse]:
        """Discovery listing, newest first; optional tag (category) and name search"""
        try:
            query = self.supabase.table("communities").select("*")
            tag = (tag or "").strip()
            if tag:
                tag_result = self.supabase.table("tags")\
                    .select("id, name")\
                    .ilike("name", escape_like(tag))\
                    .execute()
                tag_ids = [t["id"] for t in tag_result.data or [] if same_name(t["name"], tag)]
                if not tag_ids:
                    return []
                links = self.supabase.table("community_tags")\
                    .select("community_id")\
                    .in_("tag_id", tag_ids)\
                    .execute()
                community_ids = list({link["community_id"] for link in links.data or []})
                if not community_ids:
                    return []
                query = query.in_("id", community_ids)
            q = (q or "").strip()
            if q:
                query = query.ilike("name", f"%{escape_like(q)}%")
            result = query.order("created_at", desc=True)\
                .limit(limit)\
                .offset(offset)\
                .execute()
            rows = result.data or []
            if "*" in q:
                # escape_like widened `*` to any character
                rows = [row for row in rows if q.casefold() in (row.get("name") or "").casefold()]
            return self._format(rows)
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error listing communities: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def join_community(self, community_id: int, user_id: int) -> MembershipResponse:
        """Join a public community, or request to join a private one"""
        try:
            community = self.get_community_row(community_id)

            existing = self.supabase.table("community_members")\
                .select("*")\
                .eq("community_id", community_id)\
                .eq("user_id", user_id)\
                .execute()
            if existing.data:
                if existing.data[0].get("status") == "pending":
                    raise HTTPException(status_code=400, detail="Membership request already pending")
                raise HTTPException(status_code=400, detail="Already a member of this community")

            status = "pending" if community.get("is_private") else "active"
            result = self.supabase.table("community_members").insert({
                "community_id": community_id,
                "user_id": user_id,
                "role": "member",
                "status": status,
                "joined_at": _now()
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to join community")

            if status == "active":
                self._set_member_count(community, 1)
            return MembershipResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error joining community {community_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def leave_community(self, community_id: int, user_id: int) -> None:
        """Leave a community; owners cannot leave"""
        try:
            community = self.get_community_row(community_id)
            existing = self.supabase.table("community_members")\
                .select("*")\
                .eq("community_id", community_id)\
                .eq("user_id", user_id)\
                .execute()
            if not existing.data:
                raise HTTPException(status_code=404, detail="Not a member of this community")
            membership = existing.data[0]
            if membership.get("role") == "owner":
                raise HTTPException(status_code=400, detail="Community owner cannot leave")

            self.supabase.table("community_members")\
                .delete()\
                .eq("community_id", community_id)\
                .eq("user_id", user_id)\
                .execute()

            if membership.get("status") == "active":
                self._set_member_count(community, -1)
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error leaving community {community_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def list_members(self, community_id: int) -> List[MemberResponse]:
        """Members with display info, in join order"""
        try:
            self.get_community_row(community_id)
            result = self.supabase.table("community_members")\
                .select("*")\
                .eq("community_id", community_id)\
                .order("joined_at")\
                .execute()
            members = result.data or []
            users = fetch_users_by_ids(self.supabase, [m["user_id"] for m in members])
            return [
                MemberResponse(
                    user=user_summary(m["user_id"], users.get(m["user_id"])),
                    role=m.get("role") or "member",
                    status=m.get("status") or "active",
                    joined_at=m.get("joined_at")
                )
                for m in members
            ]
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error listing members of community {community_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def list_chat_rooms(self, community_id: int) -> List[ChatRoomResponse]:
        """Community chat rooms, excluding per-event chats"""
        try:
            self.get_community_row(community_id)
            result = self.supabase.table("chat_rooms")\
                .select("*")\
                .eq("community_id", community_id)\
                .is_("event_id", "null")\
                .order("created_at")\
                .execute()
            return [ChatRoomResponse(**room) for room in result.data or []]
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error listing chat rooms of community {community_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def update_image(
        self,
        community_id: int,
        file_content: bytes,
        content_type: str,
        storage: CommunityImageStorage
    ) -> CommunityResponse:
        """Store a new community image and point image_url at it"""
        self.get_community_row(community_id)
        extension = mimetypes.guess_extension(content_type) or ""
        key = f"communities/{community_id}/{uuid.uuid4().hex}{extension}"
        try:
            image_url = storage.upload_file(file_content, key, content_type)
        except Exception:
            raise HTTPException(status_code=500, detail="Failed to upload image")

        try:
            result = self.supabase.table("communities")\
                .update({"image_url": image_url, "updated_at": _now()})\
                .eq("id", community_id)\
                .execute()
            if not result.data:
                raise HTTPException(status_code=404, detail="Community not found")
        except Exception as e:
            storage.delete_file(key)
            if isinstance(e, HTTPException):
                raise
            logger.error(f"Error saving image for community {community_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

        return self._format(result.data)[0]
