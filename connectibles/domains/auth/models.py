# connectibles/domains/auth/models.py
from datetime import datetime
from typing import List, Optional

from sqlalchemy import JSON, Boolean, DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from connectibles.shared.database.mixins import IdMixin, TimestampMixin
from connectibles.shared.models.base import Base


class User(Base, IdMixin, TimestampMixin):
    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String, unique=True, index=True)
    email_verified_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    name: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    image: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    role: Mapped[str] = mapped_column(String, default="user")  # admin, user, member

    bio: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    interests: Mapped[List[str]] = mapped_column(JSON, default=list)
    skills: Mapped[List[str]] = mapped_column(JSON, default=list)
    location: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    connections: Mapped[List[str]] = mapped_column(JSON, default=list)
    blocked_users: Mapped[List[str]] = mapped_column(JSON, default=list)
    is_banned: Mapped[bool] = mapped_column(Boolean, default=False)
    last_active: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)

    # Academic profile
    year_of_study: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    department: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    major: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    looking_for: Mapped[List[str]] = mapped_column(JSON, default=list)
    availability: Mapped[Optional[str]] = mapped_column(String, nullable=True)

    # Profile prompts
    study_spot: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    favorite_subject: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    weekend_activity: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    superpower: Mapped[Optional[str]] = mapped_column(String, nullable=True)


class VerificationCode(Base, IdMixin, TimestampMixin):
    __tablename__ = "verification_codes"

    email: Mapped[str] = mapped_column(String, unique=True, index=True)
    code_hash: Mapped[str] = mapped_column(String)
    expires_at: Mapped[datetime] = mapped_column(DateTime)
