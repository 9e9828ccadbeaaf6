"""Data access layer: repository interfaces and shared persistence models."""

from shared.dal.hand_repository import HandRepository
from shared.dal.models import HandRecord, Room
from shared.dal.room_repository import RoomRepository

__all__ = [
    "HandRecord",
    "HandRepository",
    "Room",
    "RoomRepository",
]
