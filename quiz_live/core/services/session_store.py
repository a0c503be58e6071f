"""The single mutable record describing the active quiz."""

from __future__ import annotations

from quiz_live.constants.quiz_constants import DEFAULT_QUIZ_NAME
from quiz_live.core.models import GamePhase, Player, Question, SubmittedAnswer


class Session:
    """State of the one room the server hosts at a time."""

    def __init__(self) -> None:
        self.generation: int = 0
        self.reset()

    def reset(self) -> None:
        """Drop the room, the manager, every player and all round progress.

        Bumps ``generation`` so work scheduled for the old session can tell it is stale.
        """
        self.generation += 1
        self.room_code: str | None = None
        self.manager_id: str | None = None
        self.started: bool = False
        self.quiz_name: str = DEFAULT_QUIZ_NAME
        self.questions: list[Question] = []
        self.current_question_index: int = 0
        self.players: list[Player] = []
        self.phase: GamePhase = GamePhase.ROOM
        self.round_started_at: float | None = None
        self.round_answers: list[SubmittedAnswer] = []

    def has_room(self) -> bool:
        return self.room_code is not None

    def is_manager(self, connection_id: str) -> bool:
        return self.manager_id is not None and self.manager_id == connection_id

    def get_player(self, connection_id: str) -> Player | None:
        return next((p for p in self.players if p.id == connection_id), None)

    def remove_player(self, connection_id: str) -> Player | None:
        player = self.get_player(connection_id)
        if player is not None:
            self.players = [p for p in self.players if p.id != connection_id]
        return player

    def get_current_question(self) -> Question | None:
        if not 0 <= self.current_question_index < len(self.questions):
            return None
        return self.questions[self.current_question_index]

    def has_next_question(self) -> bool:
        return self.current_question_index + 1 < len(self.questions)

    def get_answer_count(self) -> int:
        """Answers given this round, including those of players who left since."""
        return len(self.round_answers)

    def all_players_answered(self) -> bool:
        return bool(self.players) and all(p.answer is not None for p in self.players)
