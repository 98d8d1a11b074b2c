from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from connectibles.domains.auth.schemas import UserPublic
from connectibles.domains.truth_dare.entities import Choice, Round


class CreateSessionRequest(BaseModel):
    opponent_id: str


class ChoiceRequest(BaseModel):
    choice: Choice
    question: Optional[str] = Field(default=None, max_length=500)


class AnswerRequest(BaseModel):
    answer: str = Field(min_length=1, max_length=2000)


class TruthDareSessionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    player1_id: str
    player2_id: str
    status: str
    current_turn: str
    rounds: List[Round] = Field(default_factory=list)
    created_at: datetime
    player1: Optional[UserPublic] = None
    player2: Optional[UserPublic] = None
    opponent: Optional[UserPublic] = None
