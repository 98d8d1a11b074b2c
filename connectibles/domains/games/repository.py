# connectibles/domains/games/repository.py
from typing import List, Optional

from sqlalchemy import and_, or_, select

from connectibles.core.database import session_scope
from connectibles.domains.games.entities import (
    GameResult,
    InvitationStatus,
    SessionStatus,
)
from connectibles.domains.games.models import GameInvitation, GameSession, GameStat
from connectibles.shared.utils.logger import get_logger

logger = get_logger(__name__)


# Sessions

async def create_session(
    game_type: str,
    player_id: str,
    state: dict,
    opponent_id: Optional[str] = None,
    current_turn: Optional[str] = None,
    difficulty: Optional[str] = None,
) -> GameSession:
    async with session_scope() as db:
        session = GameSession(
            game_type=game_type,
            player_id=player_id,
            opponent_id=opponent_id,
            status=SessionStatus.IN_PROGRESS.value,
            current_turn=current_turn or player_id,
            state=state,
            difficulty=difficulty,
        )
        db.add(session)
        await db.flush()
        logger.info(f"Game session {session.id} ({game_type}) started by {player_id}")
        return session


async def get_session(session_id: str) -> Optional[GameSession]:
    async with session_scope() as db:
        return await db.get(GameSession, session_id)


async def save_session(
    session_id: str,
    state: dict,
    current_turn: Optional[str],
    status: SessionStatus,
    result: Optional[GameResult] = None,
    winner_id: Optional[str] = None,
) -> GameSession:
    async with session_scope() as db:
        session = await db.get(GameSession, session_id)
        session.state = state
        session.current_turn = current_turn
        session.status = status.value
        session.result = result.value if result else None
        session.winner_id = winner_id
        return session


async def list_active_sessions(user_id: str) -> List[GameSession]:
    async with session_scope() as db:
        result = await db.execute(
            select(GameSession)
            .filter(
                and_(
                    or_(GameSession.player_id == user_id, GameSession.opponent_id == user_id),
                    GameSession.status == SessionStatus.IN_PROGRESS.value,
                )
            )
            .order_by(GameSession.created_at.desc())
        )
        return list(result.scalars().all())


# Invitations

async def create_invitation(sender_id: str, receiver_id: str, game_type: str) -> GameInvitation:
    async with session_scope() as db:
        invitation = GameInvitation(
            sender_id=sender_id,
            receiver_id=receiver_id,
            game_type=game_type,
            status=InvitationStatus.PENDING.value,
        )
        db.add(invitation)
        await db.flush()
        return invitation


async def get_invitation(invitation_id: str) -> Optional[GameInvitation]:
    async with session_scope() as db:
        return await db.get(GameInvitation, invitation_id)


async def accept_invitation(invitation_id: str, state: dict) -> GameSession:
    """Open the two-player session and mark the invitation accepted, together."""
    async with session_scope() as db:
        invitation = await db.get(GameInvitation, invitation_id)
        session = GameSession(
            game_type=invitation.game_type,
            player_id=invitation.sender_id,
            opponent_id=invitation.receiver_id,
            status=SessionStatus.IN_PROGRESS.value,
            current_turn=invitation.sender_id,
            state=state,
        )
        db.add(session)
        await db.flush()
        invitation.status = InvitationStatus.ACCEPTED.value
        invitation.session_id = session.id
        return session


async def list_pending_invitations(receiver_id: str) -> List[GameInvitation]:
    async with session_scope() as db:
        result = await db.execute(
            select(GameInvitation)
            .filter(
                and_(
                    GameInvitation.receiver_id == receiver_id,
                    GameInvitation.status == InvitationStatus.PENDING.value,
                )
            )
            .order_by(GameInvitation.created_at.desc())
        )
        return list(result.scalars().all())


# Statistics

async def record_result(user_id: str, game_type: str, result: GameResult) -> GameStat:
    async with session_scope() as db:
        query = await db.execute(
            select(GameStat).filter(
                and_(GameStat.user_id == user_id, GameStat.game_type == game_type)
            )
        )
        stat = query.scalar_one_or_none()
        if not stat:
            stat = GameStat(user_id=user_id, game_type=game_type, wins=0, losses=0, draws=0, total_games=0)
            db.add(stat)
        if result == GameResult.WIN:
            stat.wins += 1
        elif result == GameResult.LOSS:
            stat.losses += 1
        else:
            stat.draws += 1
        stat.total_games += 1
        return stat


async def list_stats_for_user(user_id: str) -> List[GameStat]:
    async with session_scope() as db:
        result = await db.execute(
            select(GameStat).filter(GameStat.user_id == user_id).order_by(GameStat.game_type)
        )
        return list(result.scalars().all())


async def list_stats(game_type: Optional[str] = None) -> List[GameStat]:
    async with session_scope() as db:
        query = select(GameStat)
        if game_type:
            query = query.filter(GameStat.game_type == game_type)
        result = await db.execute(query)
        return list(result.scalars().all())
