from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from connectibles.domains.auth.schemas import UserPublic
from connectibles.domains.games.entities import Difficulty, GameResult, GameType


class StartGameRequest(BaseModel):
    game_type: GameType
    difficulty: Optional[Difficulty] = None


class UpdateGameStateRequest(BaseModel):
    state: dict
    result: Optional[GameResult] = Field(default=None, description="Outcome from the caller's side")
    winner_id: Optional[str] = None


class TicTacToeMoveRequest(BaseModel):
    position: int = Field(ge=0, le=8)


class AiMoveRequest(BaseModel):
    board: List[Optional[Literal["X", "O"]]]
    difficulty: Difficulty = Difficulty.MEDIUM


class GameInvitationRequest(BaseModel):
    receiver_id: str
    game_type: GameType


class GameSessionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    game_type: str
    player_id: str
    opponent_id: Optional[str] = None
    status: str
    current_turn: Optional[str] = None
    state: dict
    result: Optional[str] = None
    winner_id: Optional[str] = None
    difficulty: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class ActiveSessionResponse(GameSessionResponse):
    player: Optional[UserPublic] = None
    opponent: Optional[UserPublic] = None


class TicTacToeMoveResponse(BaseModel):
    session: GameSessionResponse
    ai_move: Optional[int] = None
    winner: Optional[str] = None


class GameInvitationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    sender_id: str
    receiver_id: str
    game_type: str
    status: str
    session_id: Optional[str] = None
    created_at: datetime
    sender: Optional[UserPublic] = None


class GameStatResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    game_type: str
    wins: int
    losses: int
    draws: int
    total_games: int


class OverallStats(BaseModel):
    total_games: int = 0
    wins: int = 0
    losses: int = 0
    draws: int = 0
    win_rate: int = 0


class UserGameStats(BaseModel):
    overall: OverallStats
    by_game: List[GameStatResponse]


class LeaderboardEntry(BaseModel):
    user_id: str
    game_type: Optional[str] = None
    wins: int
    losses: int
    draws: int
    total_games: int
    win_rate: float
    user: Optional[UserPublic] = None
