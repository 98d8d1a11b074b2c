# connectibles/domains/moderation/models.py
from typing import Optional

from sqlalchemy import String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from connectibles.shared.database.mixins import IdMixin, TimestampMixin
from connectibles.shared.models.base import Base


class UserReport(Base, IdMixin, TimestampMixin):
    __tablename__ = "user_reports"
    __table_args__ = (
        UniqueConstraint("reporter_id", "reported_user_id", name="uq_user_reports_pair"),
    )

    reporter_id: Mapped[str] = mapped_column(String, index=True)
    reported_user_id: Mapped[str] = mapped_column(String, index=True)
    reason: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
