from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from connectibles.domains.auth.schemas import UserPublic
from connectibles.domains.feed.entities import MediaType


class ReactionRequest(BaseModel):
    emoji: str = Field(min_length=1, max_length=16)


class ReactionSummary(BaseModel):
    emoji: str
    count: int
    reacted: bool = False


class SpillCreate(BaseModel):
    content: Optional[str] = Field(default=None, max_length=2000)
    media_url: Optional[str] = None
    media_type: Optional[MediaType] = None


class SpillResponse(BaseModel):
    id: str
    content: Optional[str] = None
    media_url: Optional[str] = None
    media_type: Optional[str] = None
    reactions: List[ReactionSummary] = Field(default_factory=list)
    is_mine: bool = False
    created_at: datetime


class CollaborationCreate(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    description: str = Field(min_length=1, max_length=5000)
    tags: List[str] = Field(default_factory=list)


class CollaborationResponse(BaseModel):
    id: str
    author_id: str
    title: str
    description: str
    tags: List[str] = Field(default_factory=list)
    volunteers: List[str] = Field(default_factory=list)
    created_at: datetime
    author: Optional[UserPublic] = None


class EventCreate(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    description: str = Field(min_length=1, max_length=5000)
    tags: List[str] = Field(default_factory=list)
    location: Optional[str] = None
    event_date: Optional[datetime] = None


class EventResponse(BaseModel):
    id: str
    creator_id: str
    title: str
    description: str
    tags: List[str] = Field(default_factory=list)
    location: Optional[str] = None
    event_date: Optional[datetime] = None
    interested_users: List[str] = Field(default_factory=list)
    created_at: datetime
    creator: Optional[UserPublic] = None


class GossipCreate(BaseModel):
    message: str = Field(min_length=1, max_length=1000)


class GossipResponse(BaseModel):
    id: str
    sender_id: str
    message: str
    reactions: List[ReactionSummary] = Field(default_factory=list)
    created_at: datetime
    sender: Optional[UserPublic] = None
