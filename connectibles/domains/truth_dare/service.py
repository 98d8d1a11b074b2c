# connectibles/domains/truth_dare/service.py
import random
from typing import Callable, List, Optional

from connectibles.core.database import session_scope
from connectibles.domains.auth import repository as user_repository
from connectibles.domains.auth.models import User
from connectibles.domains.auth.schemas import UserPublic
from connectibles.domains.notifications.entities import NotificationType
from connectibles.domains.notifications.service import notify
from connectibles.domains.truth_dare import repository
from connectibles.domains.truth_dare.entities import Choice, TurnState, draw_question
from connectibles.domains.truth_dare.models import TruthDareSession
from connectibles.domains.truth_dare.schemas import TruthDareSessionResponse
from connectibles.shared.exceptions import Forbidden, NotFound
from connectibles.shared.utils.logger import get_logger
from connectibles.shared.utils.timeutils import utcnow

logger = get_logger(__name__)

_rng = random.Random()


async def _to_response(session: TruthDareSession, viewer_id: Optional[str] = None) -> TruthDareSessionResponse:
    users = {
        u.id: UserPublic.model_validate(u)
        for u in await user_repository.get_users_by_ids([session.player1_id, session.player2_id])
    }
    opponent_id = None
    if viewer_id:
        opponent_id = session.player2_id if viewer_id == session.player1_id else session.player1_id
    return TruthDareSessionResponse.model_validate(session).model_copy(
        update={
            "player1": users.get(session.player1_id),
            "player2": users.get(session.player2_id),
            "opponent": users.get(opponent_id),
        }
    )


async def create_session(user: User, opponent_id: str) -> TruthDareSessionResponse:
    if opponent_id not in (user.connections or []):
        raise Forbidden("NOT_CONNECTED", "You can only play with connected users")

    existing = await repository.find_active_between(user.id, opponent_id)
    if existing:
        return await _to_response(existing, user.id)

    # The invited player goes first
    async with session_scope():
        session = await repository.create_session(user.id, opponent_id, current_turn=opponent_id)
        await notify(
            opponent_id,
            NotificationType.TRUTH_DARE_TURN,
            f"{user.name or 'Someone'} started truth or dare with you. Your turn!",
            related_user_id=user.id,
        )
    logger.info(f"Truth or dare {session.id}: {user.id} vs {opponent_id}")
    return await _to_response(session, user.id)


async def _load(session_id: str) -> TruthDareSession:
    session = await repository.get_session(session_id)
    if not session:
        raise NotFound("SESSION_NOT_FOUND", "Session not found")
    return session


async def _transition(user: User, session_id: str, step: Callable[[TurnState], object]) -> TruthDareSessionResponse:
    session = await _load(session_id)
    state = TurnState.from_session(session)
    step(state)
    saved = await repository.save_turn_state(session.id, state)
    return await _to_response(saved, user.id)


async def make_choice(
    user: User,
    session_id: str,
    choice: Choice,
    question: Optional[str] = None,
) -> TruthDareSessionResponse:
    text = (question or "").strip() or draw_question(choice, _rng)
    async with session_scope():
        response = await _transition(user, session_id, lambda s: s.choose(user.id, choice, text, utcnow()))
        responder_id = response.player2_id if user.id == response.player1_id else response.player1_id
        await notify(
            responder_id,
            NotificationType.TRUTH_DARE_TURN,
            f"{user.name or 'Someone'} picked {choice.value}. Your move!",
            related_user_id=user.id,
        )
    return response


async def answer_round(user: User, session_id: str, answer: str) -> TruthDareSessionResponse:
    return await _transition(user, session_id, lambda s: s.answer(user.id, answer))


async def complete_round(user: User, session_id: str) -> TruthDareSessionResponse:
    return await _transition(user, session_id, lambda s: s.complete(user.id))


async def skip_round(user: User, session_id: str) -> TruthDareSessionResponse:
    return await _transition(user, session_id, lambda s: s.skip(user.id))


async def end_session(user: User, session_id: str) -> TruthDareSessionResponse:
    return await _transition(user, session_id, lambda s: s.end(user.id))


async def get_active_sessions(user: Optional[User]) -> List[TruthDareSessionResponse]:
    if not user:
        return []
    return [await _to_response(s, user.id) for s in await repository.list_active_for_user(user.id)]


async def get_session(user: Optional[User], session_id: str) -> Optional[TruthDareSessionResponse]:
    """Session with both players; None for anyone outside it."""
    if not user:
        return None
    session = await repository.get_session(session_id)
    if not session or user.id not in (session.player1_id, session.player2_id):
        return None
    return await _to_response(session, user.id)
