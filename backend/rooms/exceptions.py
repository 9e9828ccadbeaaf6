"""Typed exceptions for room and hand operations.

Raised by RoomService and the input parsers. The command-line entry point
catches RoomError and reports the message; anything else propagates.
"""


class RoomError(Exception):
    """Base exception for room and hand operations."""


class RoomNotFoundError(RoomError):
    def __init__(self, room_id: str) -> None:
        self.room_id = room_id
        super().__init__(f"room not found: {room_id}")


class HandNotFoundError(RoomError):
    def __init__(self, hand_id: str, room_id: str) -> None:
        self.hand_id = hand_id
        self.room_id = room_id
        super().__init__(f"hand {hand_id} not found in room {room_id}")


class InvalidRoomError(RoomError):
    """Room fields are invalid (player names, fee amount)."""


class InvalidHandError(RoomError):
    """Hand scores are missing, unparseable, or not one per seat."""
