# connectibles/domains/games/entities.py
from enum import Enum
from typing import Annotated, Dict, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator


class GameType(str, Enum):
    TIC_TAC_TOE = "tic_tac_toe"
    MEMORY_MATCH = "memory_match"
    REACTION_TEST = "reaction_test"
    WORD_CHAIN = "word_chain"
    QUICK_DRAW = "quick_draw"
    TRIVIA_DUEL = "trivia_duel"
    NUMBER_GUESS = "number_guess"
    EMOJI_MATCH = "emoji_match"
    GLOW_HOCKEY = "glow_hockey"


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class GameResult(str, Enum):
    WIN = "win"
    LOSS = "loss"
    DRAW = "draw"

    def flipped(self) -> "GameResult":
        if self is GameResult.WIN:
            return GameResult.LOSS
        if self is GameResult.LOSS:
            return GameResult.WIN
        return self


class SessionStatus(str, Enum):
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class InvitationStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"


# Per-game state shapes

class _State(BaseModel):
    model_config = ConfigDict(extra="forbid")


class TicTacToeState(_State):
    game_type: Literal["tic_tac_toe"] = "tic_tac_toe"
    board: List[Optional[Literal["X", "O"]]] = Field(default_factory=lambda: [None] * 9)
    moves: int = 0

    @field_validator("board")
    @classmethod
    def nine_cells(cls, v):
        if len(v) != 9:
            raise ValueError("Board must have 9 cells")
        return v


class MemoryMatchState(_State):
    game_type: Literal["memory_match"] = "memory_match"
    cards: List[str] = Field(default_factory=list)
    matched: List[int] = Field(default_factory=list)
    flipped: List[int] = Field(default_factory=list)
    moves: int = 0
    scores: Dict[str, int] = Field(default_factory=dict)


class ReactionTestState(_State):
    game_type: Literal["reaction_test"] = "reaction_test"
    attempts_ms: List[int] = Field(default_factory=list)
    best_ms: Optional[int] = None


class WordChainState(_State):
    game_type: Literal["word_chain"] = "word_chain"
    words: List[str] = Field(default_factory=list)
    scores: Dict[str, int] = Field(default_factory=dict)


class QuickDrawState(_State):
    game_type: Literal["quick_draw"] = "quick_draw"
    prompt: Optional[str] = None
    drawer_id: Optional[str] = None
    guesses: List[str] = Field(default_factory=list)
    scores: Dict[str, int] = Field(default_factory=dict)


class TriviaDuelState(_State):
    game_type: Literal["trivia_duel"] = "trivia_duel"
    question_index: int = 0
    answers: Dict[str, List[int]] = Field(default_factory=dict)
    scores: Dict[str, int] = Field(default_factory=dict)


class NumberGuessState(_State):
    game_type: Literal["number_guess"] = "number_guess"
    low: int = 1
    high: int = 100
    guesses: List[int] = Field(default_factory=list)


class EmojiMatchState(_State):
    game_type: Literal["emoji_match"] = "emoji_match"
    tiles: List[str] = Field(default_factory=list)
    matched: List[int] = Field(default_factory=list)
    moves: int = 0


class GlowHockeyState(_State):
    game_type: Literal["glow_hockey"] = "glow_hockey"
    scores: Dict[str, int] = Field(default_factory=dict)
    target_score: int = 7


GameState = Annotated[
    Union[
        TicTacToeState,
        MemoryMatchState,
        ReactionTestState,
        WordChainState,
        QuickDrawState,
        TriviaDuelState,
        NumberGuessState,
        EmojiMatchState,
        GlowHockeyState,
    ],
    Field(discriminator="game_type"),
]

game_state_adapter = TypeAdapter(GameState)


def default_state(game_type: GameType) -> dict:
    return game_state_adapter.validate_python({"game_type": game_type.value}).model_dump(mode="json")


def outcomes_for(
    player_id: str,
    opponent_id: Optional[str],
    result: GameResult,
) -> List[Tuple[str, GameResult]]:
    """Per-user results of a finished session; result is from player_id's side.

    Versus the AI only the player is counted.
    """
    outcomes = [(player_id, result)]
    if opponent_id:
        outcomes.append((opponent_id, result.flipped()))
    return outcomes


def win_rate(wins: int, total_games: int) -> float:
    return wins / total_games * 100 if total_games > 0 else 0.0
