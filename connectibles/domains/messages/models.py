from sqlalchemy import Boolean, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from connectibles.shared.database.mixins import IdMixin, TimestampMixin
from connectibles.shared.models.base import Base


class Message(Base, IdMixin, TimestampMixin):
    __tablename__ = "messages"

    sender_id: Mapped[str] = mapped_column(String, index=True)
    receiver_id: Mapped[str] = mapped_column(String, index=True)
    body: Mapped[str] = mapped_column(Text)
    read: Mapped[bool] = mapped_column(Boolean, default=False)
