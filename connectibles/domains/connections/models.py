# connectibles/domains/connections/models.py
from sqlalchemy import String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from connectibles.shared.database.mixins import IdMixin, TimestampMixin
from connectibles.shared.models.base import Base


class ConnectionRequest(Base, IdMixin, TimestampMixin):
    __tablename__ = "connection_requests"
    __table_args__ = (
        UniqueConstraint("sender_id", "receiver_id", name="uq_connection_requests_pair"),
    )

    sender_id: Mapped[str] = mapped_column(String, index=True)
    receiver_id: Mapped[str] = mapped_column(String, index=True)
    status: Mapped[str] = mapped_column(String)  # waved, pending, accepted, rejected
