"""Persistence models for the data access layer."""

from datetime import date, datetime

from pydantic import BaseModel, Field

SEATS_PER_TABLE = 4


class Room(BaseModel, frozen=True):
    """A scoring session: four seated players and the rules their hands are scored under."""

    room_id: str
    played_on: date  # day the session was played
    players: tuple[str, ...] = Field(min_length=SEATS_PER_TABLE, max_length=SEATS_PER_TABLE)  # seat order
    uma_rule: str = "10-20"  # "5-10" | "10-20" | "10-30"
    oka_rule: str = "oka20"  # "oka20" | "oka0"
    tie_rule: str = "split"  # "split" | "seat"
    fee_enabled: bool = False
    fee_amount: int = 0  # positive when fee_enabled, otherwise 0
    created_at: datetime
    updated_at: datetime


class HandRecord(BaseModel, frozen=True):
    """Raw end-of-hand scores for one hand played in a room, in seat order."""

    hand_id: str
    room_id: str
    scores: tuple[int, ...] = Field(min_length=SEATS_PER_TABLE, max_length=SEATS_PER_TABLE)
    created_at: datetime
    updated_at: datetime
