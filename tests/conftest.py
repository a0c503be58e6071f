"""Shared helpers for the quiz server tests."""

from __future__ import annotations

import asyncio
from collections import defaultdict
from typing import Any

import pytest
import pytest_asyncio

from quiz_live.constants import event_constants as events
from quiz_live.core.question_store import parse_document
from quiz_live.core.quiz_coordinator import QuizCoordinator
from quiz_live.core.services.round_timer import RoundTimer

MANAGER_PASSWORD = "secret"


class RecordingEmitter:
    """In-memory stand-in for the Socket.IO server."""

    def __init__(self) -> None:
        self.sent: list[tuple[str, Any, str | None]] = []
        self.rooms: dict[str, set[str]] = defaultdict(set)
        self.closed_rooms: list[str] = []

    async def emit(self, event: str, data: Any = None, to: str | None = None) -> None:
        self.sent.append((event, data, to))

    async def enter_room(self, connection_id: str, room: str) -> None:
        self.rooms[room].add(connection_id)

    async def leave_room(self, connection_id: str, room: str) -> None:
        self.rooms[room].discard(connection_id)

    async def close_room(self, room: str) -> None:
        self.rooms.pop(room, None)
        self.closed_rooms.append(room)

    def events(self, event: str, to: str | None = None) -> list[Any]:
        return [data for name, data, target in self.sent if name == event and (to is None or target == to)]

    def last(self, event: str, to: str | None = None) -> Any:
        found = self.events(event, to)
        return found[-1] if found else None

    def statuses(self, to: str | None = None) -> list[dict[str, Any]]:
        return self.events(events.GAME_STATUS, to)

    def status_names(self, to: str | None = None) -> list[str]:
        return [status["name"] for status in self.statuses(to)]

    def last_status(self, name: str, to: str | None = None) -> dict[str, Any] | None:
        matching = [s["data"] for s in self.statuses(to) if s["name"] == name]
        return matching[-1] if matching else None


class YieldingEmitter(RecordingEmitter):
    """Gives the loop a turn on every send, like a real Socket.IO server."""

    async def emit(self, event: str, data: Any = None, to: str | None = None) -> None:
        await asyncio.sleep(0)
        await super().emit(event, data, to)


class FakeClock:
    """Monotonic clock the tests move by hand."""

    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_document(num_questions: int = 2, time_limit: int = 10) -> dict[str, Any]:
    return {
        "quizName": "Test Quiz",
        "questions": [
            {
                "question": f"Question {i + 1}?",
                "answers": ["A", "B", "C", "D"],
                "solution": 1,
                "time": time_limit,
            }
            for i in range(num_questions)
        ],
    }


def make_coordinator(
    emitter: RecordingEmitter,
    clock: FakeClock | None = None,
    num_questions: int = 2,
    time_limit: int = 10,
    tick_seconds: float = 1.0,
    start_delay_seconds: float = 0,
    store=None,
) -> QuizCoordinator:
    return QuizCoordinator(
        emitter=emitter,
        manager_password=MANAGER_PASSWORD,
        store=store,
        document=parse_document(make_document(num_questions, time_limit)),
        timer=RoundTimer(tick_seconds=tick_seconds),
        clock=clock or FakeClock(),
        start_delay_seconds=start_delay_seconds,
        start_cooldown_seconds=0,
    )


async def open_room(coordinator: QuizCoordinator, *usernames: str) -> str:
    """Create the room as ``manager`` and join one connection per username."""
    room_code = await coordinator.create_room("manager", MANAGER_PASSWORD)
    for username in usernames:
        await coordinator.join(username.lower(), {"username": username})
    return room_code


async def start_and_wait(coordinator: QuizCoordinator) -> None:
    """Start the game and let the start countdown run until the first question is up."""
    await coordinator.start_game("manager")
    await coordinator.engine.timer.wait()


@pytest.fixture
def emitter() -> RecordingEmitter:
    return RecordingEmitter()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest_asyncio.fixture
async def coordinator(emitter: RecordingEmitter, clock: FakeClock):
    quiz = make_coordinator(emitter, clock)
    yield quiz
    quiz.engine.abort()
