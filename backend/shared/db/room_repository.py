"""SQLite-backed room repository."""

from __future__ import annotations

import asyncio
import sqlite3
from typing import TYPE_CHECKING

import structlog

from shared.dal.models import Room
from shared.dal.room_repository import RoomRepository

if TYPE_CHECKING:
    from shared.db.connection import Database

logger = structlog.get_logger()


class SqliteRoomRepository(RoomRepository):
    """SQLite implementation of RoomRepository.

    Stores full room snapshots as JSON with indexed columns for ordering.
    """

    def __init__(self, db: Database) -> None:
        self._db = db
        self._lock = asyncio.Lock()

    async def create_room(self, room: Room) -> None:
        """Insert a room. Raises ValueError on duplicate room_id."""
        async with self._lock:
            try:
                self._db.connection.execute(
                    "INSERT INTO rooms (id, played_on, created_at, data) VALUES (?, ?, ?, ?)",
                    (
                        room.room_id,
                        room.played_on.isoformat(),
                        room.created_at.isoformat(),
                        room.model_dump_json(),
                    ),
                )
                self._db.connection.commit()
            except sqlite3.IntegrityError as exc:
                self._db.connection.rollback()
                raise ValueError(f"Room with id '{room.room_id}' already exists") from exc

    async def get_room(self, room_id: str) -> Room | None:
        """Retrieve a single room by its id."""
        row = self._db.connection.execute(
            "SELECT data FROM rooms WHERE id = ?",
            (room_id,),
        ).fetchone()
        if row is None:
            return None
        return Room.model_validate_json(row[0])

    async def list_rooms(self) -> list[Room]:
        """Retrieve all rooms, newest first."""
        rows = self._db.connection.execute(
            "SELECT data FROM rooms ORDER BY created_at DESC, id",
        ).fetchall()
        return [Room.model_validate_json(row[0]) for row in rows]

    async def delete_room(self, room_id: str) -> bool:
        """Delete a room. Returns False when no such room exists."""
        async with self._lock:
            cursor = self._db.connection.execute("DELETE FROM rooms WHERE id = ?", (room_id,))
            self._db.connection.commit()
        if cursor.rowcount == 0:
            logger.warning("delete_room had no effect (not found)", room_id=room_id)
            return False
        return True
