# connectibles/domains/games/service.py
"""
Game sessions, invitations and statistics.

A session is either versus the computer (no opponent) or between two
connected students. `result` is stored from the owning player's side;
statistics are updated by a subscriber to `game:session_completed`.
"""
import random
from collections import defaultdict
from typing import Dict, List, Optional

from pydantic import ValidationError

from connectibles.core import event_bus
from connectibles.core.database import session_scope
from connectibles.domains.auth import repository as user_repository
from connectibles.domains.auth.models import User
from connectibles.domains.auth.schemas import UserPublic
from connectibles.domains.games import repository, tictactoe
from connectibles.domains.games.entities import (
    Difficulty,
    GameResult,
    GameType,
    InvitationStatus,
    SessionStatus,
    TicTacToeState,
    default_state,
    game_state_adapter,
    outcomes_for,
    win_rate,
)
from connectibles.domains.games.models import GameSession
from connectibles.domains.games.schemas import (
    ActiveSessionResponse,
    GameInvitationResponse,
    GameStatResponse,
    LeaderboardEntry,
    OverallStats,
    UserGameStats,
)
from connectibles.domains.notifications.entities import NotificationType
from connectibles.domains.notifications.service import notify
from connectibles.shared.exceptions import Conflict, Forbidden, InvalidRequest, NotFound
from connectibles.shared.schemas.events import GameSessionCompleted
from connectibles.shared.utils.logger import get_logger

logger = get_logger(__name__)

_rng = random.Random()


def _label(game_type: str) -> str:
    return game_type.replace("_", " ")


def _is_player(user_id: str, session: GameSession) -> bool:
    return user_id in (session.player_id, session.opponent_id)


async def _get_session_for_player(user: User, session_id: str) -> GameSession:
    session = await repository.get_session(session_id)
    if not session:
        raise NotFound("SESSION_NOT_FOUND", "Game session not found")
    if not _is_player(user.id, session):
        raise Forbidden("NOT_A_PLAYER", "You are not a player in this session")
    return session


async def _get_playable_session(user: User, session_id: str) -> GameSession:
    session = await _get_session_for_player(user, session_id)
    if session.status == SessionStatus.COMPLETED.value:
        raise Conflict("GAME_COMPLETED", "This game is already completed")
    return session


def _validate_state(session: GameSession, state: dict) -> dict:
    payload = dict(state)
    payload.setdefault("game_type", session.game_type)
    try:
        parsed = game_state_adapter.validate_python(payload)
    except ValidationError as e:
        raise InvalidRequest("INVALID_GAME_STATE", f"Invalid {_label(session.game_type)} state: {e.error_count()} error(s)")
    if parsed.game_type != session.game_type:
        raise InvalidRequest("INVALID_GAME_STATE", "State does not belong to this game")
    return parsed.model_dump(mode="json")


async def start_game(
    player: User,
    game_type: GameType,
    difficulty: Optional[Difficulty] = None,
) -> GameSession:
    """Start a session against the computer."""
    return await repository.create_session(
        game_type=game_type.value,
        player_id=player.id,
        state=default_state(game_type),
        difficulty=difficulty.value if difficulty else None,
    )


async def _notify_two_player_outcome(session: GameSession, winner_id: Optional[str]):
    label = _label(session.game_type)
    if winner_id is None:
        for user_id, other_id in (
            (session.player_id, session.opponent_id),
            (session.opponent_id, session.player_id),
        ):
            await notify(
                user_id,
                NotificationType.GAME_DRAW,
                f"Your {label} game ended in a draw!",
                related_user_id=other_id,
            )
        return

    loser_id = session.opponent_id if winner_id == session.player_id else session.player_id
    await notify(
        winner_id,
        NotificationType.GAME_WON,
        f"You won the {label} game! 🎉",
        related_user_id=loser_id,
    )
    await notify(
        loser_id,
        NotificationType.GAME_LOST,
        f"You lost the {label} game. Better luck next time!",
        related_user_id=winner_id,
    )


async def _complete(
    session: GameSession,
    state: dict,
    result: GameResult,
    winner_id: Optional[str],
) -> GameSession:
    async with session_scope():
        updated = await repository.save_session(
            session.id,
            state=state,
            current_turn=None,
            status=SessionStatus.COMPLETED,
            result=result,
            winner_id=winner_id,
        )
        if session.opponent_id:
            await _notify_two_player_outcome(session, winner_id)
    logger.info(f"Game session {session.id} completed: {result.value}")
    # Stats are recorded once the completion is committed
    await event_bus.event_bus.publish(
        "game:session_completed",
        GameSessionCompleted(session_id=session.id, game_type=session.game_type).model_dump(),
    )
    return updated


def _resolve_outcome(
    caller_id: str,
    session: GameSession,
    result: Optional[GameResult],
    winner_id: Optional[str],
):
    """(owner-side result, winner id) from what the caller reported."""
    if winner_id is not None:
        if not session.opponent_id or not _is_player(winner_id, session):
            raise InvalidRequest("INVALID_WINNER", "Winner must be a player in this session")
        owner_result = GameResult.WIN if winner_id == session.player_id else GameResult.LOSS
        return owner_result, winner_id

    owner_result = result if caller_id == session.player_id else result.flipped()
    if owner_result == GameResult.WIN:
        return owner_result, session.player_id
    if owner_result == GameResult.LOSS and session.opponent_id:
        return owner_result, session.opponent_id
    return owner_result, None


async def update_game_state(
    user: User,
    session_id: str,
    state: dict,
    result: Optional[GameResult] = None,
    winner_id: Optional[str] = None,
) -> GameSession:
    session = await _get_playable_session(user, session_id)
    new_state = _validate_state(session, state)

    if result is not None or winner_id is not None:
        owner_result, winner = _resolve_outcome(user.id, session, result, winner_id)
        return await _complete(session, new_state, owner_result, winner)

    current_turn = session.current_turn
    if session.opponent_id:
        current_turn = (
            session.opponent_id if session.current_turn == session.player_id else session.player_id
        )
    return await repository.save_session(
        session.id,
        state=new_state,
        current_turn=current_turn,
        status=SessionStatus.IN_PROGRESS,
    )


def ai_move(board: List[Optional[str]], difficulty: Difficulty) -> int:
    if len(board) != 9:
        raise InvalidRequest("INVALID_MOVE", "Board must have 9 cells")
    if tictactoe.check_winner(board) is not None:
        raise InvalidRequest("INVALID_MOVE", "The game is already over")
    return tictactoe.choose_move(board, difficulty, _rng)


_TIC_TAC_TOE_RESULTS = {
    tictactoe.HUMAN: GameResult.WIN,
    tictactoe.AI: GameResult.LOSS,
    "draw": GameResult.DRAW,
}


async def play_tic_tac_toe_move(user: User, session_id: str, position: int) -> Dict:
    """Apply the player's X, answer with the computer's O and settle the game if it ended."""
    session = await _get_playable_session(user, session_id)
    if session.game_type != GameType.TIC_TAC_TOE.value or session.opponent_id:
        raise InvalidRequest("INVALID_MOVE", "Not a tic-tac-toe game against the computer")

    current = TicTacToeState.model_validate(session.state)
    board = list(current.board)
    if board[position] is not None:
        raise InvalidRequest("INVALID_MOVE", "That cell is already taken")

    board[position] = tictactoe.HUMAN
    moves = current.moves + 1
    reply = None
    winner = tictactoe.check_winner(board)
    if winner is None:
        difficulty = Difficulty(session.difficulty or Difficulty.MEDIUM.value)
        reply = tictactoe.choose_move(board, difficulty, _rng)
        board[reply] = tictactoe.AI
        moves += 1
        winner = tictactoe.check_winner(board)

    state = TicTacToeState(board=board, moves=moves).model_dump(mode="json")
    if winner is None:
        updated = await repository.save_session(
            session.id,
            state=state,
            current_turn=session.player_id,
            status=SessionStatus.IN_PROGRESS,
        )
    else:
        result = _TIC_TAC_TOE_RESULTS[winner]
        updated = await _complete(
            session,
            state,
            result,
            session.player_id if result == GameResult.WIN else None,
        )
    return {"session": updated, "ai_move": reply, "winner": winner}


# Invitations

async def send_game_invitation(sender: User, receiver_id: str, game_type: GameType) -> str:
    if sender.id == receiver_id:
        raise InvalidRequest("SELF_INVITE", "You cannot invite yourself to a game")
    if receiver_id not in (sender.connections or []):
        raise Forbidden("NOT_CONNECTED", "You can only invite connections to play games")

    async with session_scope():
        invitation = await repository.create_invitation(sender.id, receiver_id, game_type.value)
        await notify(
            receiver_id,
            NotificationType.GAME_INVITATION,
            f"{sender.name or 'Someone'} invited you to play {_label(game_type.value)}!",
            related_user_id=sender.id,
        )
    return invitation.id


async def accept_game_invitation(user: User, invitation_id: str) -> GameSession:
    invitation = await repository.get_invitation(invitation_id)
    if not invitation or invitation.receiver_id != user.id:
        raise NotFound("INVITATION_NOT_FOUND", "Game invitation not found")
    if invitation.status != InvitationStatus.PENDING.value:
        raise Conflict("INVITATION_PROCESSED", "Invitation already processed")

    async with session_scope():
        session = await repository.accept_invitation(
            invitation.id, default_state(GameType(invitation.game_type))
        )
        await notify(
            invitation.sender_id,
            NotificationType.GAME_ACCEPTED,
            f"{user.name or 'Someone'} accepted your game invitation!",
            related_user_id=user.id,
        )
    return session


async def _public_users(user_ids) -> Dict[str, UserPublic]:
    users = await user_repository.get_users_by_ids({uid for uid in user_ids if uid})
    return {u.id: UserPublic.model_validate(u) for u in users}


async def get_game_invitations(user: Optional[User]) -> List[GameInvitationResponse]:
    if not user:
        return []
    invitations = await repository.list_pending_invitations(user.id)
    senders = await _public_users(i.sender_id for i in invitations)
    return [
        GameInvitationResponse.model_validate(i).model_copy(update={"sender": senders.get(i.sender_id)})
        for i in invitations
    ]


async def get_active_sessions(user: Optional[User]) -> List[ActiveSessionResponse]:
    if not user:
        return []
    sessions = await repository.list_active_sessions(user.id)
    ids = [s.player_id for s in sessions] + [s.opponent_id for s in sessions]
    players = await _public_users(ids)
    return [
        ActiveSessionResponse.model_validate(s).model_copy(
            update={
                "player": players.get(s.player_id),
                "opponent": players.get(s.opponent_id),
            }
        )
        for s in sessions
    ]


async def leave_game_session(user: User, session_id: str) -> str:
    session = await _get_session_for_player(user, session_id)
    if session.status != SessionStatus.COMPLETED.value:
        raise Conflict("GAME_IN_PROGRESS", "Cannot leave an active game. Finish the game first!")
    return session.id


# Statistics

async def record_session_outcome(session_id: str) -> None:
    session = await repository.get_session(session_id)
    if not session or session.status != SessionStatus.COMPLETED.value or not session.result:
        logger.warning(f"Skipping stats for unfinished session {session_id}")
        return
    for user_id, result in outcomes_for(session.player_id, session.opponent_id, GameResult(session.result)):
        await repository.record_result(user_id, session.game_type, result)


async def get_user_game_stats(user: Optional[User], user_id: Optional[str] = None) -> Optional[UserGameStats]:
    target_id = user_id or (user.id if user else None)
    if not target_id:
        return None

    stats = await repository.list_stats_for_user(target_id)
    overall = OverallStats()
    for stat in stats:
        overall.total_games += stat.total_games
        overall.wins += stat.wins
        overall.losses += stat.losses
        overall.draws += stat.draws
    overall.win_rate = round(win_rate(overall.wins, overall.total_games))
    return UserGameStats(
        overall=overall,
        by_game=[GameStatResponse.model_validate(s) for s in stats],
    )


def _ranked(entries: List[LeaderboardEntry], limit: int) -> List[LeaderboardEntry]:
    return sorted(entries, key=lambda e: (e.wins, e.win_rate), reverse=True)[:limit]


async def _with_users(entries: List[LeaderboardEntry]) -> List[LeaderboardEntry]:
    users = await _public_users(e.user_id for e in entries)
    return [e.model_copy(update={"user": users.get(e.user_id)}) for e in entries]


async def get_game_leaderboard(game_type: GameType, limit: int = 10) -> List[LeaderboardEntry]:
    stats = await repository.list_stats(game_type.value)
    entries = [
        LeaderboardEntry(
            user_id=s.user_id,
            game_type=s.game_type,
            wins=s.wins,
            losses=s.losses,
            draws=s.draws,
            total_games=s.total_games,
            win_rate=win_rate(s.wins, s.total_games),
        )
        for s in stats
    ]
    return await _with_users(_ranked(entries, limit))


async def get_overall_leaderboard(limit: int = 10) -> List[LeaderboardEntry]:
    totals: Dict[str, Dict[str, int]] = defaultdict(
        lambda: {"wins": 0, "losses": 0, "draws": 0, "total_games": 0}
    )
    for s in await repository.list_stats():
        row = totals[s.user_id]
        row["wins"] += s.wins
        row["losses"] += s.losses
        row["draws"] += s.draws
        row["total_games"] += s.total_games

    entries = [
        LeaderboardEntry(user_id=user_id, win_rate=win_rate(row["wins"], row["total_games"]), **row)
        for user_id, row in totals.items()
    ]
    return await _with_users(_ranked(entries, limit))
