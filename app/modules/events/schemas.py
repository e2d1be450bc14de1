from pydantic import BaseModel, Field, field_validator, model_validator
from typing import List, Literal, Optional
from datetime import datetime, timezone
from app.modules.communities.schemas import CommunitySummary
from app.modules.users.schemas import UserSummary

RsvpStatus = Literal["going", "interested", "not_going"]
SortOption = Literal["newest", "date"]


class EventCreate(BaseModel):
    title: str = Field(..., max_length=200)
    description: Optional[str] = Field(None, max_length=5000)
    start_time: datetime
    end_time: Optional[datetime] = None
    address: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None
    is_online: bool = False
    max_attendees: Optional[int] = Field(None, ge=1)

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Event title is required")
        return value

    @field_validator("start_time", "end_time")
    @classmethod
    def assume_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @model_validator(mode="after")
    def check_schedule_and_place(self):
        if self.end_time is not None and self.end_time <= self.start_time:
            raise ValueError("End time must be after start time")
        if not self.is_online and not ((self.address or "").strip() or (self.city or "").strip()):
            raise ValueError("In-person events need an address or city")
        return self


class AttendeeResponse(BaseModel):
    id: int
    name: str
    avatar: str
    rsvp_status: str


class EventResponse(BaseModel):
    id: int
    community_id: int
    title: str
    description: Optional[str] = None
    start_time: datetime
    end_time: Optional[datetime] = None
    location: str
    address: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None
    is_online: bool = False
    max_attendees: Optional[int] = None
    attendees: List[AttendeeResponse] = []
    attendee_count: int = 0
    organizer: UserSummary
    created_at: Optional[datetime] = None


class EventDetailResponse(EventResponse):
    community: CommunitySummary


class RsvpRequest(BaseModel):
    rsvp_status: RsvpStatus = "going"


class RsvpResponse(BaseModel):
    event_id: int
    user_id: int
    rsvp_status: str
    rsvp_time: Optional[datetime] = None

    class Config:
        from_attributes = True
