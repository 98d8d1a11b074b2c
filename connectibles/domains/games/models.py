# connectibles/domains/games/models.py
from typing import Optional

from sqlalchemy import JSON, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from connectibles.shared.database.mixins import IdMixin, TimestampMixin
from connectibles.shared.models.base import Base


class GameSession(Base, IdMixin, TimestampMixin):
    __tablename__ = "game_sessions"

    game_type: Mapped[str] = mapped_column(String, index=True)
    player_id: Mapped[str] = mapped_column(String, index=True)
    opponent_id: Mapped[Optional[str]] = mapped_column(String, nullable=True, index=True)  # null: versus AI
    status: Mapped[str] = mapped_column(String, default="in_progress")
    current_turn: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    state: Mapped[dict] = mapped_column(JSON, default=dict)
    result: Mapped[Optional[str]] = mapped_column(String, nullable=True)  # win, loss, draw for player_id
    winner_id: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    difficulty: Mapped[Optional[str]] = mapped_column(String, nullable=True)


class GameInvitation(Base, IdMixin, TimestampMixin):
    __tablename__ = "game_invitations"

    sender_id: Mapped[str] = mapped_column(String, index=True)
    receiver_id: Mapped[str] = mapped_column(String, index=True)
    game_type: Mapped[str] = mapped_column(String)
    status: Mapped[str] = mapped_column(String, default="pending")
    session_id: Mapped[Optional[str]] = mapped_column(String, nullable=True)


class GameStat(Base, IdMixin, TimestampMixin):
    __tablename__ = "game_stats"
    __table_args__ = (UniqueConstraint("user_id", "game_type", name="uq_game_stats_user_game"),)

    user_id: Mapped[str] = mapped_column(String, index=True)
    game_type: Mapped[str] = mapped_column(String, index=True)
    wins: Mapped[int] = mapped_column(Integer, default=0)
    losses: Mapped[int] = mapped_column(Integer, default=0)
    draws: Mapped[int] = mapped_column(Integer, default=0)
    total_games: Mapped[int] = mapped_column(Integer, default=0)
