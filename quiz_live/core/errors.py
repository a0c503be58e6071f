"""Errors raised by the quiz services.

Every command handler reports a ``QuizError`` back to the connection that sent
the command; none of them is fatal to the server.
"""


class QuizError(Exception):
    """Base class for user-facing quiz errors."""


class AuthError(QuizError):
    """The manager password did not match."""


class ConflictError(QuizError):
    """The command clashes with the current room state (duplicate room, username, ...)."""


class NotFoundError(QuizError):
    """The referenced room does not exist."""


class RangeError(QuizError):
    """A question index is outside the question list."""

    def __init__(self, index: int, size: int) -> None:
        self.index = index
        self.size = size
        super().__init__(f"Question index {index} out of range")


class PermissionDeniedError(QuizError):
    """A manager-only command was sent by another connection."""

    def __init__(self, message: str = "Only the quiz manager can do that") -> None:
        super().__init__(message)


class ValidationError(QuizError):
    """A payload (question, username, answer) is malformed."""


class InvalidTransitionError(QuizError):
    """The round engine was asked to move to a phase it cannot reach."""
