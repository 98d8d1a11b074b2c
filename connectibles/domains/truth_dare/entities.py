# connectibles/domains/truth_dare/entities.py
"""
Truth-or-dare turn machine.

The player whose turn it is opens a round by picking truth or dare. The
other player then answers the truth, completes the dare, or skips; that
closes the round and hands the turn over to them. The player who opened
the round can only wait.
"""
import random
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel

from connectibles.shared.exceptions import Conflict, Forbidden, InvalidRequest


class Choice(str, Enum):
    TRUTH = "truth"
    DARE = "dare"


class SessionStatus(str, Enum):
    ACTIVE = "active"
    COMPLETED = "completed"


TRUTH_QUESTIONS = [
    "What's the most embarrassing thing you've done in college?",
    "Who was your first crush and why?",
    "What's a secret you've never told anyone?",
    "What's the worst grade you've ever gotten?",
    "Have you ever cheated on a test?",
    "What's your biggest fear?",
    "Who do you have a crush on right now?",
    "What's the most childish thing you still do?",
    "What's your biggest insecurity?",
    "Have you ever lied to your best friend?",
    "What's the most trouble you've gotten into?",
    "What's something you're glad your parents don't know about?",
    "What's your most embarrassing moment in class?",
    "Have you ever ghosted someone? Why?",
]

DARE_CHALLENGES = [
    "Send a funny selfie to your crush",
    "Do 20 pushups",
    "Sing your favorite song out loud",
    "Dance for 30 seconds with no music",
    "Speak in an accent for the next 3 rounds",
    "Share your most embarrassing photo",
    "Do your best impression of a professor",
    "Eat a spoonful of a condiment",
    "Wear your clothes backwards for an hour",
    "Do a dramatic reading of the last text you sent",
]


def draw_question(choice: Choice, rng: random.Random) -> str:
    bank = TRUTH_QUESTIONS if choice == Choice.TRUTH else DARE_CHALLENGES
    return rng.choice(bank)


class Round(BaseModel):
    player_id: str  # the player who picked truth or dare
    choice: Choice
    question: str
    answer: Optional[str] = None
    completed: bool = False
    skipped: bool = False
    timestamp: datetime


@dataclass
class TurnState:
    player1_id: str
    player2_id: str
    status: SessionStatus
    current_turn: str
    rounds: List[Round] = field(default_factory=list)

    @classmethod
    def from_session(cls, session) -> "TurnState":
        return cls(
            player1_id=session.player1_id,
            player2_id=session.player2_id,
            status=SessionStatus(session.status),
            current_turn=session.current_turn,
            rounds=[Round.model_validate(r) for r in session.rounds or []],
        )

    def dumped_rounds(self) -> List[dict]:
        return [r.model_dump(mode="json") for r in self.rounds]

    def is_player(self, user_id: str) -> bool:
        return user_id in (self.player1_id, self.player2_id)

    def other(self, user_id: str) -> str:
        return self.player2_id if user_id == self.player1_id else self.player1_id

    @property
    def open_round(self) -> Optional[Round]:
        if self.rounds and not self.rounds[-1].completed:
            return self.rounds[-1]
        return None

    def _ensure_playable(self, user_id: str):
        if not self.is_player(user_id):
            raise Forbidden("NOT_A_PLAYER", "You are not part of this session")
        if self.status == SessionStatus.COMPLETED:
            raise Conflict("SESSION_ENDED", "This session has ended")

    def choose(self, user_id: str, choice: Choice, question: str, now: datetime) -> Round:
        self._ensure_playable(user_id)
        if self.current_turn != user_id:
            raise Forbidden("NOT_YOUR_TURN", "Not your turn")
        if self.open_round:
            raise Conflict("ROUND_IN_PROGRESS", "Finish the current round first")
        round_ = Round(player_id=user_id, choice=choice, question=question, timestamp=now)
        self.rounds.append(round_)
        return round_

    def _resolvable_round(self, user_id: str) -> Round:
        self._ensure_playable(user_id)
        round_ = self.open_round
        if not round_:
            raise Conflict("NO_OPEN_ROUND", "There is no round to resolve")
        if round_.player_id == user_id:
            raise Forbidden("ASKER_CANNOT_RESOLVE", "Wait for the other player to respond")
        return round_

    def _close(self, round_: Round):
        round_.completed = True
        self.current_turn = self.other(self.current_turn)

    def answer(self, user_id: str, answer: str) -> Round:
        round_ = self._resolvable_round(user_id)
        if round_.choice != Choice.TRUTH:
            raise InvalidRequest("WRONG_CHOICE", "Only a truth can be answered")
        round_.answer = answer
        self._close(round_)
        return round_

    def complete(self, user_id: str) -> Round:
        round_ = self._resolvable_round(user_id)
        if round_.choice != Choice.DARE:
            raise InvalidRequest("WRONG_CHOICE", "Answer the truth instead")
        self._close(round_)
        return round_

    def skip(self, user_id: str) -> Round:
        round_ = self._resolvable_round(user_id)
        round_.skipped = True
        self._close(round_)
        return round_

    def end(self, user_id: str):
        if not self.is_player(user_id):
            raise Forbidden("NOT_A_PLAYER", "You are not part of this session")
        self.status = SessionStatus.COMPLETED
