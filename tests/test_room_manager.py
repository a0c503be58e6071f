"""Tests for room creation, joining and kicking."""

import random

import pytest

from quiz_live.core.errors import (
    AuthError,
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from quiz_live.core.models import GamePhase
from quiz_live.core.services.room_manager import RoomManager, generate_room_code
from quiz_live.core.services.session_store import Session


@pytest.fixture
def session():
    return Session()


@pytest.fixture
def rooms(session):
    return RoomManager(session, "secret", rng=random.Random(7))


def test_room_code_shape():
    code = generate_room_code(random.Random(1))
    assert len(code) == 6
    assert code.isalnum() and code.upper() == code


def test_create_room_assigns_manager(rooms, session):
    code = rooms.create_room("m1", "secret")
    assert session.room_code == code
    assert session.manager_id == "m1"


@pytest.mark.parametrize("password", ["wrong", "", None, 123])
def test_create_room_rejects_bad_password(rooms, session, password):
    with pytest.raises(AuthError):
        rooms.create_room("m1", password)
    assert not session.has_room()


def test_second_manager_is_rejected(rooms, session):
    code = rooms.create_room("m1", "secret")
    with pytest.raises(ConflictError):
        rooms.create_room("m2", "secret")
    assert session.manager_id == "m1"
    assert session.room_code == code


def test_check_room_without_session(rooms):
    with pytest.raises(NotFoundError):
        rooms.check_room("ABC123")


@pytest.mark.parametrize("seed", range(10))
def test_check_room_succeeds_only_for_the_current_code(seed):
    session = Session()
    rooms = RoomManager(session, "secret", rng=random.Random(seed))
    code = rooms.create_room("m1", "secret")

    assert rooms.check_room(code) == code
    assert rooms.check_room(f"  {code.lower()} ") == code

    other = generate_room_code(random.Random(seed + 100))
    if other != code:
        with pytest.raises(NotFoundError):
            rooms.check_room(other)
    with pytest.raises(NotFoundError):
        rooms.check_room(None)


def test_join_creates_player(rooms, session):
    rooms.create_room("m1", "secret")
    player = rooms.join("p1", {"username": "  Alice "})
    assert player.username == "Alice"
    assert player.points == 0
    assert session.players == [player]


def test_join_accepts_a_plain_username(rooms):
    rooms.create_room("m1", "secret")
    assert rooms.join("p1", "Bob").username == "Bob"


def test_join_without_room(rooms):
    with pytest.raises(NotFoundError):
        rooms.join("p1", "Alice")


@pytest.mark.parametrize("username", ["", "   ", None, 42, "x" * 21])
def test_join_rejects_invalid_usernames(rooms, username):
    rooms.create_room("m1", "secret")
    with pytest.raises(ValidationError):
        rooms.join("p1", {"username": username})


def test_duplicate_username_is_rejected(rooms, session):
    rooms.create_room("m1", "secret")
    rooms.join("p1", "Alice")
    with pytest.raises(ConflictError):
        rooms.join("p2", "alice")
    assert len(session.players) == 1


def test_same_connection_cannot_join_twice(rooms):
    rooms.create_room("m1", "secret")
    rooms.join("p1", "Alice")
    with pytest.raises(ConflictError):
        rooms.join("p1", "Alicia")


def test_manager_cannot_join(rooms):
    rooms.create_room("m1", "secret")
    with pytest.raises(ConflictError):
        rooms.join("m1", "Boss")


def test_join_after_start_is_rejected(rooms, session):
    rooms.create_room("m1", "secret")
    session.phase = GamePhase.ANSWERING
    with pytest.raises(ConflictError):
        rooms.join("p1", "Late")


def test_kick_removes_exactly_one_player_and_is_idempotent(rooms, session):
    rooms.create_room("m1", "secret")
    rooms.join("p1", "Alice")
    rooms.join("p2", "Bob")
    rooms.join("p3", "Cara")

    kicked = rooms.kick("m1", "p2")
    assert kicked.username == "Bob"
    assert [p.id for p in session.players] == ["p1", "p3"]

    assert rooms.kick("m1", "p2") is None
    assert [p.id for p in session.players] == ["p1", "p3"]


def test_only_the_manager_can_kick(rooms, session):
    rooms.create_room("m1", "secret")
    rooms.join("p1", "Alice")
    with pytest.raises(PermissionDeniedError):
        rooms.kick("p1", "p1")
    assert len(session.players) == 1


def test_leave(rooms, session):
    rooms.create_room("m1", "secret")
    rooms.join("p1", "Alice")
    assert rooms.leave("p1").username == "Alice"
    assert rooms.leave("p1") is None
    assert session.players == []
