from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class OtpRequest(BaseModel):
    email: str = Field(min_length=3, max_length=254)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        v = v.strip().lower()
        if "@" not in v:
            raise ValueError("Not an email address")
        return v


class OtpVerifyRequest(OtpRequest):
    code: str = Field(min_length=6, max_length=6, pattern=r"^\d{6}$")


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user_id: str
    is_new_user: bool


class UserPublic(BaseModel):
    """What other students can see about a user."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: Optional[str] = None
    image: Optional[str] = None
    bio: Optional[str] = None
    interests: List[str] = Field(default_factory=list)
    skills: List[str] = Field(default_factory=list)
    location: Optional[str] = None
    year_of_study: Optional[str] = None
    department: Optional[str] = None
    major: Optional[str] = None
    looking_for: List[str] = Field(default_factory=list)
    availability: Optional[str] = None
    study_spot: Optional[str] = None
    favorite_subject: Optional[str] = None
    weekend_activity: Optional[str] = None
    superpower: Optional[str] = None
    last_active: Optional[datetime] = None


class UserPrivate(UserPublic):
    email: str
    role: str
    connections: List[str] = Field(default_factory=list)
    blocked_users: List[str] = Field(default_factory=list)
    is_banned: bool = False
