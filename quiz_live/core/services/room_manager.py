"""Service for creating the room and managing who is in it."""

from __future__ import annotations

import hmac
import logging
import random
import string

from quiz_live.constants.quiz_constants import (
    MAX_USERNAME_LENGTH,
    MIN_USERNAME_LENGTH,
    ROOM_CODE_LENGTH,
)
from quiz_live.core.errors import (
    AuthError,
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from quiz_live.core.models import GamePhase, Player
from quiz_live.core.services.session_store import Session

logger = logging.getLogger(__name__)

_ROOM_CODE_ALPHABET = string.ascii_uppercase + string.digits


def generate_room_code(rng: random.Random | None = None) -> str:
    """Random code such as ``K7Q2ZD``; uniqueness is trivially true with one room."""
    chooser = rng or random
    return "".join(chooser.choices(_ROOM_CODE_ALPHABET, k=ROOM_CODE_LENGTH))


def normalize_room_code(room_code: object) -> str:
    if not isinstance(room_code, (str, int)) or isinstance(room_code, bool):
        return ""
    return str(room_code).strip().upper()


class RoomManager:
    """Validates room creation and joins, and keeps the player list."""

    def __init__(self, session: Session, manager_password: str, rng: random.Random | None = None) -> None:
        self._session = session
        self._manager_password = manager_password
        self._rng = rng or random.Random()

    def create_room(self, connection_id: str, password: object) -> str:
        """Make ``connection_id`` the manager of a new room and return its invite code."""
        if not isinstance(password, str) or not hmac.compare_digest(
            password.encode("utf-8"), self._manager_password.encode("utf-8")
        ):
            raise AuthError("Bad password")

        session = self._session
        if session.manager_id is not None or session.room_code is not None:
            raise ConflictError("A quiz room is already running")

        session.room_code = generate_room_code(self._rng)
        session.manager_id = connection_id
        logger.info("New room created: %s", session.room_code)
        return session.room_code

    def check_room(self, room_code: object) -> str:
        """Return the room code when it matches the active room."""
        session = self._session
        if not session.has_room() or normalize_room_code(room_code) != session.room_code:
            raise NotFoundError("Room not found")
        return session.room_code

    def join(self, connection_id: str, username: object) -> Player:
        session = self._session
        if not session.has_room():
            raise NotFoundError("Room not found")

        cleaned = _validate_username(username)
        if session.phase is not GamePhase.ROOM:
            raise ConflictError("Game has already started")
        if session.is_manager(connection_id):
            raise ConflictError("The manager cannot join as a player")
        if session.get_player(connection_id) is not None:
            raise ConflictError("You already joined this room")
        if any(p.username.casefold() == cleaned.casefold() for p in session.players):
            raise ConflictError("Username already taken")

        player = Player(id=connection_id, username=cleaned)
        session.players.append(player)
        logger.info("Player %s joined room %s as %s", connection_id, session.room_code, cleaned)
        return player

    def kick(self, manager_id: str, player_id: object) -> Player | None:
        """Remove a player on the manager's behalf.

        Returns the removed player, or None when nobody with that id is in the room.
        """
        if not self._session.is_manager(manager_id):
            raise PermissionDeniedError()
        if not isinstance(player_id, str):
            return None
        player = self._session.remove_player(player_id)
        if player is not None:
            logger.info("Player %s (%s) kicked", player.id, player.username)
        return player

    def leave(self, connection_id: str) -> Player | None:
        player = self._session.remove_player(connection_id)
        if player is not None:
            logger.info("Player %s (%s) left", player.id, player.username)
        return player

    def require_manager(self, connection_id: str) -> None:
        if not self._session.is_manager(connection_id):
            raise PermissionDeniedError()


def _validate_username(username: object) -> str:
    if isinstance(username, dict):
        username = username.get("username")
    if not isinstance(username, str):
        raise ValidationError("Username is required")
    cleaned = username.strip()
    if len(cleaned) < MIN_USERNAME_LENGTH:
        raise ValidationError("Username is required")
    if len(cleaned) > MAX_USERNAME_LENGTH:
        raise ValidationError(f"Username cannot exceed {MAX_USERNAME_LENGTH} characters")
    return cleaned
