"""Transport interface the quiz services use to reach connected clients."""

from __future__ import annotations

from typing import Any, Protocol


class Emitter(Protocol):
    """Sends notifications to a connection id or a room channel."""

    async def emit(self, event: str, data: Any = None, to: str | None = None) -> None: ...

    async def enter_room(self, connection_id: str, room: str) -> None: ...

    async def leave_room(self, connection_id: str, room: str) -> None: ...

    async def close_room(self, room: str) -> None: ...
