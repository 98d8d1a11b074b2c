from typing import List

from pydantic import BaseModel, ConfigDict, Field

from connectibles.domains.auth.schemas import UserPublic


class MatchResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user: UserPublic
    score: float
    shared_interests: List[str]
    shared_skills: List[str] = Field(default_factory=list)
    same_location: bool = False
    mutual_connections_count: int = 0
