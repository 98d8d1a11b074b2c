# connectibles/domains/feed/models.py
from datetime import datetime
from typing import List, Optional

from sqlalchemy import JSON, DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from connectibles.shared.database.mixins import IdMixin, TimestampMixin
from connectibles.shared.models.base import Base


class SpillPost(Base, IdMixin, TimestampMixin):
    """Anonymous post; author_id is never sent to clients."""

    __tablename__ = "spill_posts"

    author_id: Mapped[str] = mapped_column(String, index=True)
    content: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    media_url: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    media_type: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    reactions: Mapped[List[dict]] = mapped_column(JSON, default=list)  # [{user_id, emoji}]


class CollaborationPost(Base, IdMixin, TimestampMixin):
    __tablename__ = "collaboration_posts"

    author_id: Mapped[str] = mapped_column(String, index=True)
    title: Mapped[str] = mapped_column(String)
    description: Mapped[str] = mapped_column(Text)
    tags: Mapped[List[str]] = mapped_column(JSON, default=list)
    volunteers: Mapped[List[str]] = mapped_column(JSON, default=list)


class Event(Base, IdMixin, TimestampMixin):
    __tablename__ = "events"

    creator_id: Mapped[str] = mapped_column(String, index=True)
    title: Mapped[str] = mapped_column(String)
    description: Mapped[str] = mapped_column(Text)
    tags: Mapped[List[str]] = mapped_column(JSON, default=list)
    location: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    event_date: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    interested_users: Mapped[List[str]] = mapped_column(JSON, default=list)


class GossipMessage(Base, IdMixin, TimestampMixin):
    __tablename__ = "gossip_messages"

    sender_id: Mapped[str] = mapped_column(String, index=True)
    message: Mapped[str] = mapped_column(Text)
    reactions: Mapped[List[dict]] = mapped_column(JSON, default=list)
