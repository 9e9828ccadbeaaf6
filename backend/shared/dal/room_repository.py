"""Abstract interface for room persistence."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from shared.dal.models import Room


class RoomRepository(ABC):
    """Abstract interface for room persistence.

    Implementations can use SQLite, an in-memory dict, etc. Deleting a room
    does not touch its hands; callers remove those explicitly.
    """

    @abstractmethod
    async def create_room(self, room: Room) -> None: ...

    @abstractmethod
    async def get_room(self, room_id: str) -> Room | None: ...

    @abstractmethod
    async def list_rooms(self) -> list[Room]: ...

    @abstractmethod
    async def delete_room(self, room_id: str) -> bool: ...
