"""Abstract interface for hand record persistence."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from shared.dal.models import HandRecord


class HandRepository(ABC):
    """Abstract interface for hand record persistence."""

    @abstractmethod
    async def save_hand(self, hand: HandRecord) -> None:
        """Insert a hand, or replace the stored hand with the same hand_id."""

    @abstractmethod
    async def get_hand(self, hand_id: str) -> HandRecord | None: ...

    @abstractmethod
    async def list_hands(self, room_id: str) -> list[HandRecord]:
        """Return a room's hands ordered by created_at (oldest first)."""

    @abstractmethod
    async def delete_hand(self, hand_id: str) -> bool: ...

    @abstractmethod
    async def delete_room_hands(self, room_id: str) -> int: ...
