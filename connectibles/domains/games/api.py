# connectibles/domains/games/api.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from connectibles.domains.auth.dependencies import get_active_user, get_optional_user
from connectibles.domains.games import service
from connectibles.domains.games.entities import GameType
from connectibles.domains.games.schemas import (
    ActiveSessionResponse,
    AiMoveRequest,
    GameInvitationRequest,
    GameInvitationResponse,
    GameSessionResponse,
    LeaderboardEntry,
    StartGameRequest,
    TicTacToeMoveRequest,
    TicTacToeMoveResponse,
    UpdateGameStateRequest,
    UserGameStats,
)

router = APIRouter()


@router.post("/tic-tac-toe/ai-move")
async def tic_tac_toe_ai_move(request: AiMoveRequest):
    """Cell index (0-8) the computer would play on this board"""
    return {"position": service.ai_move(request.board, request.difficulty)}


@router.post("/sessions", response_model=GameSessionResponse)
async def start_game(request: StartGameRequest, user=Depends(get_active_user)):
    return await service.start_game(user, request.game_type, request.difficulty)


@router.get("/sessions/active", response_model=List[ActiveSessionResponse])
async def get_active_sessions(user=Depends(get_optional_user)):
    return await service.get_active_sessions(user)


@router.put("/sessions/{session_id}/state", response_model=GameSessionResponse)
async def update_game_state(
    session_id: str,
    request: UpdateGameStateRequest,
    user=Depends(get_active_user),
):
    """Replace the session state; a result or winner finishes the game"""
    return await service.update_game_state(
        user, session_id, request.state, request.result, request.winner_id
    )


@router.post("/sessions/{session_id}/tic-tac-toe/move", response_model=TicTacToeMoveResponse)
async def play_tic_tac_toe_move(
    session_id: str,
    request: TicTacToeMoveRequest,
    user=Depends(get_active_user),
):
    outcome = await service.play_tic_tac_toe_move(user, session_id, request.position)
    return TicTacToeMoveResponse(
        session=GameSessionResponse.model_validate(outcome["session"]),
        ai_move=outcome["ai_move"],
        winner=outcome["winner"],
    )


@router.post("/sessions/{session_id}/leave")
async def leave_game_session(session_id: str, user=Depends(get_active_user)):
    return {"session_id": await service.leave_game_session(user, session_id)}


@router.post("/invitations")
async def send_game_invitation(request: GameInvitationRequest, user=Depends(get_active_user)):
    invitation_id = await service.send_game_invitation(user, request.receiver_id, request.game_type)
    return {"invitation_id": invitation_id}


@router.get("/invitations", response_model=List[GameInvitationResponse])
async def get_game_invitations(user=Depends(get_optional_user)):
    return await service.get_game_invitations(user)


@router.post("/invitations/{invitation_id}/accept", response_model=GameSessionResponse)
async def accept_game_invitation(invitation_id: str, user=Depends(get_active_user)):
    return await service.accept_game_invitation(user, invitation_id)


@router.get("/stats", response_model=Optional[UserGameStats])
async def get_user_game_stats(
    user_id: Optional[str] = Query(default=None),
    user=Depends(get_optional_user),
):
    return await service.get_user_game_stats(user, user_id)


@router.get("/leaderboard", response_model=List[LeaderboardEntry])
async def get_overall_leaderboard(limit: int = Query(default=10, ge=1, le=100)):
    return await service.get_overall_leaderboard(limit)


@router.get("/leaderboard/{game_type}", response_model=List[LeaderboardEntry])
async def get_game_leaderboard(game_type: GameType, limit: int = Query(default=10, ge=1, le=100)):
    return await service.get_game_leaderboard(game_type, limit)
