from typing import Literal

from pydantic import BaseModel


class GameSessionCompleted(BaseModel):
    event: Literal["game:session_completed"] = "game:session_completed"
    session_id: str
    game_type: str
