"""Socket.IO event relay between quiz clients and the coordinator."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Any

import socketio

from quiz_live.constants import event_constants as events
from quiz_live.core.errors import QuizError
from quiz_live.core.quiz_coordinator import QuizCoordinator

logger = logging.getLogger(__name__)

Command = Callable[..., Awaitable[Any]]

_GENERIC_ERROR_MESSAGE = "Something went wrong, please try again."


class SocketIOEmitter:
    """Adapts ``socketio.AsyncServer`` to the coordinator's emitter interface."""

    def __init__(self, sio: socketio.AsyncServer) -> None:
        self._sio = sio

    async def emit(self, event: str, data: Any = None, to: str | None = None) -> None:
        if to is None:
            return
        await self._sio.emit(event, data, to=to)

    async def enter_room(self, connection_id: str, room: str) -> None:
        await self._sio.enter_room(connection_id, room)

    async def leave_room(self, connection_id: str, room: str) -> None:
        await self._sio.leave_room(connection_id, room)

    async def close_room(self, room: str) -> None:
        await self._sio.close_room(room)


def create_socket_server(cors_allowed_origins: str | list[str] = "*") -> socketio.AsyncServer:
    return socketio.AsyncServer(
        async_mode="asgi",
        cors_allowed_origins=cors_allowed_origins,
        logger=False,
        engineio_logger=False,
    )


def register_handlers(sio: socketio.AsyncServer, coordinator: QuizCoordinator) -> None:
    """Route every inbound client event to its coordinator command."""

    async def dispatch(sid: str, command: Command, *args: Any) -> None:
        try:
            await command(sid, *args)
        except QuizError as exc:
            await sio.emit(events.GAME_ERROR_MESSAGE, str(exc), to=sid)
        except Exception:
            logger.exception("Unhandled error while processing a command from %s", sid)
            await sio.emit(events.GAME_ERROR_MESSAGE, _GENERIC_ERROR_MESSAGE, to=sid)

    def relay(event: str, command: Command, with_payload: bool = True) -> None:
        async def handler(sid: str, data: Any = None) -> None:
            logger.debug("%s from %s", event, sid)
            if with_payload:
                await dispatch(sid, command, data)
            else:
                await dispatch(sid, command)

        sio.on(event, handler)

    async def connect(sid: str, environ: dict, auth: Any = None) -> None:
        logger.info("A user connected %s", sid)

    async def disconnect(sid: str, *args: Any) -> None:
        logger.info("User disconnected %s", sid)
        await dispatch(sid, coordinator.disconnect)

    sio.on("connect", connect)
    sio.on("disconnect", disconnect)

    relay(events.PLAYER_CHECK_ROOM, coordinator.check_room)
    relay(events.PLAYER_JOIN, coordinator.join)
    relay(events.PLAYER_SELECTED_ANSWER, coordinator.selected_answer)

    relay(events.MANAGER_CREATE_ROOM, coordinator.create_room)
    relay(events.MANAGER_KICK_PLAYER, coordinator.kick_player)
    relay(events.MANAGER_START_GAME, coordinator.start_game, with_payload=False)
    relay(events.MANAGER_ABORT_QUIZ, coordinator.abort_quiz, with_payload=False)
    relay(events.MANAGER_NEXT_QUESTION, coordinator.next_question, with_payload=False)
    relay(events.MANAGER_SHOW_LEADERBOARD, coordinator.show_leaderboard, with_payload=False)

    relay(events.MANAGER_ADD_QUESTION, coordinator.add_question)
    relay(events.MANAGER_EDIT_QUESTION, coordinator.edit_question)
    relay(events.MANAGER_DELETE_QUESTION, coordinator.delete_question)
    relay(events.MANAGER_REPLACE_QUESTIONS, coordinator.replace_questions)
