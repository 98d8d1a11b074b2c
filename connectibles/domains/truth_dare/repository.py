# connectibles/domains/truth_dare/repository.py
from typing import List, Optional

from sqlalchemy import and_, or_, select

from connectibles.core.database import session_scope
from connectibles.domains.truth_dare.entities import SessionStatus, TurnState
from connectibles.domains.truth_dare.models import TruthDareSession


async def create_session(player1_id: str, player2_id: str, current_turn: str) -> TruthDareSession:
    async with session_scope() as db:
        session = TruthDareSession(
            player1_id=player1_id,
            player2_id=player2_id,
            status=SessionStatus.ACTIVE.value,
            current_turn=current_turn,
            rounds=[],
        )
        db.add(session)
        await db.flush()
        return session


async def get_session(session_id: str) -> Optional[TruthDareSession]:
    async with session_scope() as db:
        return await db.get(TruthDareSession, session_id)


async def find_active_between(user_a: str, user_b: str) -> Optional[TruthDareSession]:
    async with session_scope() as db:
        result = await db.execute(
            select(TruthDareSession)
            .filter(
                and_(
                    or_(
                        and_(TruthDareSession.player1_id == user_a, TruthDareSession.player2_id == user_b),
                        and_(TruthDareSession.player1_id == user_b, TruthDareSession.player2_id == user_a),
                    ),
                    TruthDareSession.status == SessionStatus.ACTIVE.value,
                )
            )
            .limit(1)
        )
        return result.scalar_one_or_none()


async def list_active_for_user(user_id: str) -> List[TruthDareSession]:
    async with session_scope() as db:
        result = await db.execute(
            select(TruthDareSession)
            .filter(
                and_(
                    or_(TruthDareSession.player1_id == user_id, TruthDareSession.player2_id == user_id),
                    TruthDareSession.status == SessionStatus.ACTIVE.value,
                )
            )
            .order_by(TruthDareSession.updated_at.desc())
        )
        return list(result.scalars().all())


async def save_turn_state(session_id: str, state: TurnState) -> TruthDareSession:
    async with session_scope() as db:
        session = await db.get(TruthDareSession, session_id)
        session.status = state.status.value
        session.current_turn = state.current_turn
        session.rounds = state.dumped_rounds()
        return session
