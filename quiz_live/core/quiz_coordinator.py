"""Business logic entry point shared by the Socket.IO relay and the HTTP API."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import Any

from quiz_live.constants import event_constants as events
from quiz_live.constants.quiz_constants import START_COOLDOWN_SECONDS, START_DELAY_SECONDS
from quiz_live.core.emitter import Emitter
from quiz_live.core.errors import ConflictError, ValidationError
from quiz_live.core.models import GamePhase, Player, QuizDocument
from quiz_live.core.question_store import (
    QuestionStore,
    parse_document,
    parse_question,
    serialize_document,
)
from quiz_live.core.services.question_bank import QuestionBank
from quiz_live.core.services.room_manager import RoomManager
from quiz_live.core.services.round_engine import RoundEngine
from quiz_live.core.services.round_timer import RoundTimer
from quiz_live.core.services.session_store import Session

logger = logging.getLogger(__name__)

_LOCKED_BANK_PHASES = frozenset({GamePhase.STARTING, GamePhase.ANSWERING})


class QuizCoordinator:
    """Facade over the session services: Room Manager, Round Engine and Question Bank.

    Every public coroutine is one client command. Commands raise ``QuizError``
    for the relay to report back to the sender; everything else they have to
    say goes out through the emitter.
    """

    def __init__(
        self,
        emitter: Emitter,
        manager_password: str,
        store: QuestionStore | None = None,
        document: QuizDocument | None = None,
        timer: RoundTimer | None = None,
        clock: Callable[[], float] = time.monotonic,
        start_delay_seconds: float = START_DELAY_SECONDS,
        start_cooldown_seconds: int = START_COOLDOWN_SECONDS,
    ) -> None:
        self._emitter = emitter
        self._store = store
        if document is None and store is not None:
            document = store.load()

        self._session = Session()
        self._bank = QuestionBank(document)
        self._rooms = RoomManager(self._session, manager_password)
        self._engine = RoundEngine(
            self._session,
            emitter,
            timer=timer,
            clock=clock,
            start_delay_seconds=start_delay_seconds,
            start_cooldown_seconds=start_cooldown_seconds,
        )

    @property
    def session(self) -> Session:
        return self._session

    @property
    def engine(self) -> RoundEngine:
        return self._engine

    @property
    def question_bank(self) -> QuestionBank:
        return self._bank

    # --- Room ---

    async def create_room(self, connection_id: str, password: object) -> str:
        room_code = self._rooms.create_room(connection_id, password)
        await self._emitter.enter_room(connection_id, room_code)
        await self._emitter.emit(events.MANAGER_INVITE_CODE, room_code, to=connection_id)
        return room_code

    async def check_room(self, connection_id: str, room_code: object) -> None:
        code = self._rooms.check_room(room_code)
        await self._emitter.emit(events.GAME_SUCCESS_ROOM, code, to=connection_id)

    async def join(self, connection_id: str, username: object) -> Player:
        player = self._rooms.join(connection_id, username)
        room_code = self._session.room_code
        manager_id = self._session.manager_id
        payload = _player_payload(player)

        await self._emitter.enter_room(connection_id, room_code)
        await self._emitter.emit(events.MANAGER_NEW_PLAYER, payload, to=manager_id)
        await self._emitter.emit(events.GAME_SUCCESS_JOIN, dict(payload), to=connection_id)
        return player

    async def kick_player(self, connection_id: str, player_id: object) -> None:
        player = self._rooms.kick(connection_id, player_id)
        if player is None:
            return
        room_code = self._session.room_code
        manager_id = self._session.manager_id

        await self._emitter.leave_room(player.id, room_code)
        await self._emitter.emit(events.GAME_KICK, None, to=player.id)
        await self._emitter.emit(events.MANAGER_PLAYER_KICKED, player.id, to=manager_id)
        await self._engine.on_player_left()

    async def disconnect(self, connection_id: str) -> None:
        if self._session.is_manager(connection_id):
            logger.info("Manager %s disconnected, resetting the quiz", connection_id)
            await self._reset()
            return

        player = self._rooms.leave(connection_id)
        if player is None:
            return
        await self._emitter.emit(events.MANAGER_REMOVE_PLAYER, player.id, to=self._session.manager_id)
        await self._engine.on_player_left()

    # --- Rounds ---

    async def start_game(self, connection_id: str) -> None:
        self._rooms.require_manager(connection_id)
        started = await self._engine.start_game(self._bank.quiz_name, self._bank.get_questions())
        if not started:
            logger.debug("Ignoring startGame in phase %s", self._session.phase.value)

    async def selected_answer(self, connection_id: str, choice_index: object) -> None:
        accepted = await self._engine.submit_answer(connection_id, choice_index)
        if not accepted:
            logger.debug("Ignoring answer %r from %s", choice_index, connection_id)

    async def show_leaderboard(self, connection_id: str) -> None:
        self._rooms.require_manager(connection_id)
        if not await self._engine.show_leaderboard():
            logger.debug("Ignoring showLeaderboard in phase %s", self._session.phase.value)

    async def next_question(self, connection_id: str) -> None:
        self._rooms.require_manager(connection_id)
        if not await self._engine.next_question():
            logger.debug("Ignoring nextQuestion in phase %s", self._session.phase.value)

    async def abort_quiz(self, connection_id: str) -> None:
        self._rooms.require_manager(connection_id)
        if self._session.phase is GamePhase.ROOM:
            return
        logger.info("Quiz aborted by the manager")
        await self._reset()

    async def _reset(self) -> None:
        self._engine.abort()
        room_code = self._session.room_code
        self._session.reset()
        if room_code is None:
            return
        await self._emitter.emit(events.GAME_RESET, None, to=room_code)
        await self._emitter.close_room(room_code)

    # --- Question bank ---

    async def add_question(self, connection_id: str, payload: object) -> None:
        self._ensure_bank_editable(connection_id)
        self._bank.add_question(parse_question(payload))
        await self._send_questions(connection_id)

    async def edit_question(self, connection_id: str, payload: object) -> None:
        self._ensure_bank_editable(connection_id)
        if not isinstance(payload, dict):
            raise ValidationError("Expected {index, question}")
        question = payload.get("question", payload.get("questionObj"))
        self._bank.update_question(payload.get("index"), parse_question(question))
        await self._send_questions(connection_id)

    async def delete_question(self, connection_id: str, index: object) -> None:
        self._ensure_bank_editable(connection_id)
        self._bank.delete_question(index)
        await self._send_questions(connection_id)

    async def replace_questions(self, connection_id: str, payload: object) -> None:
        self._ensure_bank_editable(connection_id)
        self._bank.replace(parse_document(payload))
        if self._store is not None:
            try:
                self._store.save(self._bank.to_document())
            except OSError as exc:
                logger.error("Failed to save %s: %s", self._store.file_path, exc)
        await self._send_questions(connection_id)

    def _ensure_bank_editable(self, connection_id: str) -> None:
        self._rooms.require_manager(connection_id)
        if self._session.phase in _LOCKED_BANK_PHASES:
            raise ConflictError("Questions cannot be edited while a round is running")

    async def _send_questions(self, connection_id: str) -> None:
        await self._emitter.emit(events.MANAGER_QUESTIONS_UPDATED, self.get_quiz_document(), to=connection_id)

    # --- Read-only views ---

    def get_quiz_document(self) -> dict[str, Any]:
        return serialize_document(self._bank.to_document())

    def get_session_snapshot(self) -> dict[str, Any]:
        session = self._session
        return {
            "phase": session.phase.value,
            "roomOpen": session.has_room(),
            "started": session.started,
            "playerCount": len(session.players),
            "currentQuestion": session.current_question_index + 1 if session.started else None,
            "totalQuestions": len(session.questions) if session.started else self._bank.get_question_count(),
        }


def _player_payload(player: Player) -> dict[str, Any]:
    return {"id": player.id, "username": player.username, "points": player.points}
