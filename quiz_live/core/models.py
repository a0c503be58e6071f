"""Domain models for the live quiz."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class GamePhase(Enum):
    """Phases a running quiz moves through."""

    ROOM = "ROOM"
    STARTING = "STARTING"
    ANSWERING = "ANSWERING"
    RESPONSES = "RESPONSES"
    LEADERBOARD = "LEADERBOARD"
    FINISH = "FINISH"


@dataclass(slots=True)
class Question:
    """Multiple-choice question; the UI lays out four answers but any count >= 2 works."""

    text: str
    answers: list[str]
    correct_index: int
    time_limit_seconds: int
    image: str | None = None


@dataclass(slots=True)
class SubmittedAnswer:
    """A player's answer for the current round."""

    player_id: str
    choice_index: int
    elapsed_seconds: float
    is_correct: bool
    points: int


@dataclass(slots=True)
class Player:
    """A connection that joined the room under a username."""

    id: str
    username: str
    points: int = 0
    answer: SubmittedAnswer | None = None


@dataclass(slots=True)
class QuizDocument:
    """The persisted question bank."""

    quiz_name: str
    questions: list[Question] = field(default_factory=list)
