from pydantic import BaseModel, Field, field_validator, model_validator
from typing import List, Literal, Optional
from datetime import datetime
from app.modules.users.schemas import UserSummary

ChatRoomType = Literal["text", "voice", "video"]


class ChatRoomCreate(BaseModel):
    name: str = Field(..., max_length=50)
    type: ChatRoomType = "text"

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Chat room name is required")
        return value


def _default_chat_rooms() -> List[ChatRoomCreate]:
    return [ChatRoomCreate(name="general", type="text")]


class CommunityCreate(BaseModel):
    name: str = Field(..., max_length=100)
    description: Optional[str] = Field(None, max_length=1000)
    tags: List[str] = Field(default_factory=list, max_length=10)
    country: Optional[str] = None
    city: Optional[str] = None
    chat_rooms: List[ChatRoomCreate] = Field(default_factory=_default_chat_rooms)
    is_private: bool = False

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Community name is required")
        return value

    @model_validator(mode="after")
    def check_chat_rooms(self):
        if not self.chat_rooms:
            self.chat_rooms = _default_chat_rooms()
        names = [room.name.lower() for room in self.chat_rooms]
        if len(names) != len(set(names)):
            raise ValueError("Chat room names must be unique")
        return self


class CommunityResponse(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    member_count: int = 0
    tags: List[str] = []
    image_url: Optional[str] = None
    country: Optional[str] = None
    city: Optional[str] = None
    is_private: bool = False
    created_by: Optional[int] = None
    created_at: Optional[datetime] = None


class CommunitySummary(BaseModel):
    id: int
    name: str
    image_url: Optional[str] = None
    member_count: int = 0


class MembershipResponse(BaseModel):
    id: int
    community_id: int
    user_id: int
    role: str
    status: str
    joined_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class MemberResponse(BaseModel):
    user: UserSummary
    role: str
    status: str
    joined_at: Optional[datetime] = None


class ChatRoomResponse(BaseModel):
    id: int
    community_id: int
    name: str
    type: str
    is_moderator_only: bool = False
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
