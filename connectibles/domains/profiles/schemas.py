from typing import List, Optional

from pydantic import BaseModel, Field


class ProfileUpdate(BaseModel):
    """Partial profile patch; omitted fields are left untouched."""

    name: Optional[str] = Field(default=None, max_length=100)
    image: Optional[str] = None
    bio: Optional[str] = Field(default=None, max_length=1000)
    interests: Optional[List[str]] = None
    skills: Optional[List[str]] = None
    location: Optional[str] = None
    year_of_study: Optional[str] = None
    department: Optional[str] = None
    major: Optional[str] = None
    looking_for: Optional[List[str]] = None
    availability: Optional[str] = None
    study_spot: Optional[str] = None
    favorite_subject: Optional[str] = None
    weekend_activity: Optional[str] = None
    superpower: Optional[str] = None


class OnlineStatusesRequest(BaseModel):
    user_ids: List[str] = Field(default_factory=list, max_length=200)


class OnlineStatus(BaseModel):
    user_id: str
    is_online: bool
