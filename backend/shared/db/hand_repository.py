"""SQLite-backed hand record repository."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from shared.dal.hand_repository import HandRepository
from shared.dal.models import HandRecord

if TYPE_CHECKING:
    from shared.db.connection import Database


class SqliteHandRepository(HandRepository):
    """SQLite implementation of HandRepository.

    save_hand is an upsert keyed on hand_id, so amending a hand keeps its row
    (and its position in created_at order).
    """

    def __init__(self, db: Database) -> None:
        self._db = db
        self._lock = asyncio.Lock()

    async def save_hand(self, hand: HandRecord) -> None:
        async with self._lock:
            self._db.connection.execute(
                "INSERT INTO hands (id, room_id, created_at, data) VALUES (?, ?, ?, ?) "
                "ON CONFLICT (id) DO UPDATE SET "
                "room_id = excluded.room_id, "
                "created_at = excluded.created_at, "
                "data = excluded.data",
                (
                    hand.hand_id,
                    hand.room_id,
                    hand.created_at.isoformat(),
                    hand.model_dump_json(),
                ),
            )
            self._db.connection.commit()

    async def get_hand(self, hand_id: str) -> HandRecord | None:
        row = self._db.connection.execute(
            "SELECT data FROM hands WHERE id = ?",
            (hand_id,),
        ).fetchone()
        if row is None:
            return None
        return HandRecord.model_validate_json(row[0])

    async def list_hands(self, room_id: str) -> list[HandRecord]:
        rows = self._db.connection.execute(
            "SELECT data FROM hands WHERE room_id = ? ORDER BY created_at, id",
            (room_id,),
        ).fetchall()
        return [HandRecord.model_validate_json(row[0]) for row in rows]

    async def delete_hand(self, hand_id: str) -> bool:
        """Delete one hand. Returns False when no such hand exists."""
        async with self._lock:
            cursor = self._db.connection.execute("DELETE FROM hands WHERE id = ?", (hand_id,))
            self._db.connection.commit()
        return cursor.rowcount > 0

    async def delete_room_hands(self, room_id: str) -> int:
        """Delete every hand belonging to a room. Returns the number removed."""
        async with self._lock:
            cursor = self._db.connection.execute("DELETE FROM hands WHERE room_id = ?", (room_id,))
            self._db.connection.commit()
        return cursor.rowcount
