"""SQLite database layer: connection management and repository implementations."""

from shared.db.connection import Database
from shared.db.hand_repository import SqliteHandRepository
from shared.db.room_repository import SqliteRoomRepository

__all__ = [
    "Database",
    "SqliteHandRepository",
    "SqliteRoomRepository",
]
