from typing import List

from sqlalchemy import JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from connectibles.shared.database.mixins import IdMixin, TimestampMixin
from connectibles.shared.models.base import Base


class TruthDareSession(Base, IdMixin, TimestampMixin):
    __tablename__ = "truth_dare_sessions"

    player1_id: Mapped[str] = mapped_column(String, index=True)
    player2_id: Mapped[str] = mapped_column(String, index=True)
    status: Mapped[str] = mapped_column(String, default="active")
    current_turn: Mapped[str] = mapped_column(String)
    rounds: Mapped[List[dict]] = mapped_column(JSON, default=list)
