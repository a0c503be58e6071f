"""Round engine: drives a started quiz through its phases.

Phases::

    ROOM -> STARTING -> ANSWERING -> RESPONSES -> LEADERBOARD -> ANSWERING ...
                                              \\-> FINISH (after the last question)

The engine owns the round timer. Every delayed step (start countdown, answer
countdown) runs as a task on that timer, so aborting the quiz cancels whatever
is pending and no stale tick reaches a reset session.

Steps that broadcast compare the session generation after each await and
drop the rest of the step once a reset happened in between.

Payloads are built from fresh copies of the session fields at the moment they
are sent.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

from quiz_live.constants import event_constants as events
from quiz_live.constants.quiz_constants import (
    LEADERBOARD_SIZE,
    PODIUM_SIZE,
    START_COOLDOWN_SECONDS,
    START_DELAY_SECONDS,
)
from quiz_live.core.emitter import Emitter
from quiz_live.core.errors import ConflictError, InvalidTransitionError
from quiz_live.core.markdown_renderer import render_answers, render_question
from quiz_live.core.models import GamePhase, Question, SubmittedAnswer
from quiz_live.core.services import scoreboard
from quiz_live.core.services.round_timer import RoundTimer
from quiz_live.core.services.session_store import Session

logger = logging.getLogger(__name__)

TRANSITIONS: dict[GamePhase, frozenset[GamePhase]] = {
    GamePhase.ROOM: frozenset({GamePhase.STARTING}),
    GamePhase.STARTING: frozenset({GamePhase.ANSWERING}),
    GamePhase.ANSWERING: frozenset({GamePhase.RESPONSES}),
    GamePhase.RESPONSES: frozenset({GamePhase.LEADERBOARD, GamePhase.FINISH}),
    GamePhase.LEADERBOARD: frozenset({GamePhase.ANSWERING}),
    GamePhase.FINISH: frozenset(),
}


class RoundEngine:
    """Phase state machine for the active session."""

    def __init__(
        self,
        session: Session,
        emitter: Emitter,
        timer: RoundTimer | None = None,
        clock: Callable[[], float] = time.monotonic,
        start_delay_seconds: float = START_DELAY_SECONDS,
        start_cooldown_seconds: int = START_COOLDOWN_SECONDS,
    ) -> None:
        self._session = session
        self._emitter = emitter
        self._timer = timer or RoundTimer()
        self._clock = clock
        self._start_delay_seconds = start_delay_seconds
        self._start_cooldown_seconds = start_cooldown_seconds

    @property
    def timer(self) -> RoundTimer:
        return self._timer

    @property
    def phase(self) -> GamePhase:
        return self._session.phase

    # --- Transitions ---

    def can_transition(self, target: GamePhase) -> bool:
        return target in TRANSITIONS[self._session.phase]

    def _transition(self, target: GamePhase) -> None:
        current = self._session.phase
        if target not in TRANSITIONS[current]:
            raise InvalidTransitionError(f"Cannot move from {current.value} to {target.value}")
        self._session.phase = target
        logger.info("Quiz phase %s -> %s", current.value, target.value)

    # --- Game start ---

    async def start_game(self, quiz_name: str, questions: list[Question]) -> bool:
        """Begin the quiz with a snapshot of the question bank.

        Returns False when the quiz is not waiting in the room.
        """
        if not self.can_transition(GamePhase.STARTING):
            return False
        if not questions:
            raise ConflictError("Quiz has no questions")

        session = self._session
        session.quiz_name = quiz_name
        session.questions = list(questions)
        session.current_question_index = 0
        session.started = True
        self._transition(GamePhase.STARTING)
        generation = session.generation

        await self._broadcast(
            events.GAME_STATUS,
            {
                "name": events.STATUS_SHOW_START,
                "data": {"time": self._start_delay_seconds, "subject": session.quiz_name},
            },
        )
        if self._is_stale(generation):
            return True
        self._timer.start(self._run_start_sequence())
        return True

    async def _run_start_sequence(self) -> None:
        await self._timer.sleep(self._start_delay_seconds)
        await self._broadcast(events.GAME_START_COOLDOWN)
        await self._timer.countdown(self._start_cooldown_seconds, self._send_cooldown_tick)
        await self._begin_round()

    # --- Answering ---

    async def _begin_round(self) -> None:
        session = self._session
        question = session.get_current_question()
        if question is None or not self.can_transition(GamePhase.ANSWERING):
            return

        for player in session.players:
            player.answer = None
        session.round_answers = []
        session.round_started_at = self._clock()
        self._transition(GamePhase.ANSWERING)
        generation = session.generation

        await self._broadcast(
            events.GAME_UPDATE_QUESTION,
            {"current": session.current_question_index + 1, "total": len(session.questions)},
        )
        if self._is_stale(generation):
            return
        await self._broadcast(
            events.GAME_STATUS,
            {
                "name": events.STATUS_SELECT_ANSWER,
                "data": {
                    "question": question.text,
                    "questionHtml": render_question(question.text),
                    "answers": list(question.answers),
                    "answersHtml": render_answers(question.answers),
                    "image": question.image,
                    "time": question.time_limit_seconds,
                    "totalPlayer": len(session.players),
                },
            },
        )
        if self._is_stale(generation):
            return
        self._timer.start(self._run_answer_countdown(question.time_limit_seconds))

    async def _run_answer_countdown(self, seconds: int) -> None:
        await self._timer.countdown(seconds, self._send_cooldown_tick)
        await self.close_round()

    async def submit_answer(self, player_id: str, choice_index: object) -> bool:
        """Record and score a player's answer.

        Late, duplicate and out-of-range submissions are ignored and return False.
        """
        session = self._session
        if session.phase is not GamePhase.ANSWERING:
            return False
        player = session.get_player(player_id)
        question = session.get_current_question()
        if player is None or question is None or player.answer is not None:
            return False
        if not isinstance(choice_index, int) or isinstance(choice_index, bool):
            return False
        if not 0 <= choice_index < len(question.answers):
            return False

        now = self._clock()
        started_at = session.round_started_at if session.round_started_at is not None else now
        elapsed = now - started_at
        is_correct = choice_index == question.correct_index
        points = scoreboard.score_answer(is_correct, elapsed, question.time_limit_seconds)
        player.answer = SubmittedAnswer(
            player_id=player.id,
            choice_index=choice_index,
            elapsed_seconds=elapsed,
            is_correct=is_correct,
            points=points,
        )
        session.round_answers.append(player.answer)
        player.points += points
        answer_count = session.get_answer_count()
        all_answered = session.all_players_answered()

        await self._emitter.emit(
            events.GAME_STATUS,
            {"name": events.STATUS_WAIT, "data": {"text": "Waiting for the players to answer"}},
            to=player.id,
        )
        await self._broadcast(events.GAME_PLAYER_ANSWER, answer_count)

        if all_answered:
            await self.close_round()
        return True

    async def on_player_left(self) -> None:
        """Close the round early when the remaining players have all answered."""
        if self._session.phase is GamePhase.ANSWERING and self._session.all_players_answered():
            await self.close_round()

    # --- Responses ---

    async def close_round(self) -> None:
        session = self._session
        if session.phase is not GamePhase.ANSWERING:
            return
        self._timer.cancel()
        self._transition(GamePhase.RESPONSES)
        generation = session.generation

        question = session.get_current_question()
        if question is None:
            return
        stats = scoreboard.compute_response_stats(session.round_answers, len(question.answers))
        results = []
        for player in session.players:
            rank, ahead = scoreboard.get_rank(session.players, player.id)
            answer = player.answer
            correct = answer is not None and answer.is_correct
            results.append(
                (
                    player.id,
                    {
                        "name": events.STATUS_SHOW_RESULT,
                        "data": {
                            "correct": correct,
                            "message": _result_message(answer),
                            "points": answer.points if answer is not None else 0,
                            "myPoints": player.points,
                            "rank": rank,
                            "aheadOfMe": ahead,
                        },
                    },
                )
            )
        responses_payload = {
            "name": events.STATUS_SHOW_RESPONSES,
            "data": {
                "question": question.text,
                "responses": list(stats.counts),
                "percentages": list(stats.percentages),
                "correct": question.correct_index,
                "answers": list(question.answers),
                "image": question.image,
            },
        }

        for player_id, payload in results:
            await self._emitter.emit(events.GAME_STATUS, payload, to=player_id)
        if self._is_stale(generation):
            return
        await self._broadcast(events.GAME_STATUS, responses_payload)

    # --- Leaderboard / finish ---

    async def show_leaderboard(self) -> bool:
        session = self._session
        if session.phase is not GamePhase.RESPONSES:
            return False

        if session.has_next_question():
            self._transition(GamePhase.LEADERBOARD)
            leaderboard = scoreboard.get_top_scorers(session.players, LEADERBOARD_SIZE)
            await self._broadcast(
                events.GAME_STATUS,
                {
                    "name": events.STATUS_SHOW_LEADERBOARD,
                    "data": {
                        "leaderboard": [row.to_payload() for row in leaderboard],
                        "subject": session.quiz_name,
                    },
                },
            )
            return True

        self._transition(GamePhase.FINISH)
        ranked = scoreboard.rank_players(session.players)
        await self._broadcast(
            events.GAME_STATUS,
            {
                "name": events.STATUS_FINISH,
                "data": {
                    "subject": session.quiz_name,
                    "top": [row.to_payload() for row in ranked[:PODIUM_SIZE]],
                    "leaderboard": [row.to_payload() for row in ranked],
                },
            },
        )
        return True

    async def next_question(self) -> bool:
        session = self._session
        if session.phase is not GamePhase.LEADERBOARD or not session.has_next_question():
            return False
        session.current_question_index += 1
        await self._begin_round()
        return True

    def abort(self) -> None:
        """Cancel any pending countdown. The caller resets the session."""
        self._timer.cancel()

    # --- Helpers ---

    def _is_stale(self, generation: int) -> bool:
        """True when the session was reset while a broadcast was in flight."""
        if self._session.generation == generation:
            return False
        logger.debug("Session reset while a broadcast was in flight, dropping the rest of the step")
        return True

    async def _send_cooldown_tick(self, remaining: int) -> None:
        await self._broadcast(events.GAME_COOLDOWN, remaining)

    async def _broadcast(self, event: str, data: object = None) -> None:
        room = self._session.room_code
        if room is None:
            return
        await self._emitter.emit(event, data, to=room)


def _result_message(answer: SubmittedAnswer | None) -> str:
    if answer is None:
        return "You ran out of time"
    if answer.is_correct:
        return "Nice!"
    return "Too bad"
