"""Room service: stores rooms and hands and scores them with the engine.

Purely orchestration. Validation of user input and persistence happen here;
every number shown to the user comes from scoring.logic.engine and is
recomputed from the stored hands on each call.
"""

from __future__ import annotations

import uuid
from datetime import UTC, datetime
from typing import TYPE_CHECKING

import structlog

from rooms.exceptions import HandNotFoundError, InvalidHandError, InvalidRoomError, RoomNotFoundError
from rooms.models import HandPreview, HandRow, RoomStandings
from rooms.settings import DEFAULT_POOL_TOTAL
from rooms.validation import pool_difference
from scoring.logic.engine import convert_round, summarize_session
from scoring.logic.enums import OkaRule, TiePolicy, UmaRule
from scoring.logic.rules import RuleConfig
from shared.dal.models import SEATS_PER_TABLE, HandRecord, Room

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from datetime import date

    from shared.dal.hand_repository import HandRepository
    from shared.dal.room_repository import RoomRepository

logger = structlog.get_logger()


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


def room_rules(room: Room) -> RuleConfig:
    """Resolve the rule identifiers stored on a room into a RuleConfig."""
    return RuleConfig.from_rules(UmaRule(room.uma_rule), OkaRule(room.oka_rule), TiePolicy(room.tie_rule))


class RoomService:
    """Create rooms, record hands, and compute standings.

    The clock is injectable so tests can control created_at ordering.
    """

    def __init__(
        self,
        rooms: RoomRepository,
        hands: HandRepository,
        *,
        pool_total: int = DEFAULT_POOL_TOTAL,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._rooms = rooms
        self._hands = hands
        self._pool_total = pool_total
        self._clock = clock

    async def create_room(  # noqa: PLR0913
        self,
        players: Sequence[str],
        *,
        played_on: date | None = None,
        uma_rule: UmaRule = UmaRule.WANTSU,
        oka_rule: OkaRule = OkaRule.OKA_20,
        tie_rule: TiePolicy = TiePolicy.SPLIT,
        fee_amount: int | None = None,
    ) -> Room:
        """Create a room for four named players.

        Names are stripped and must not be blank. fee_amount=None disables the
        table fee; otherwise it must be a positive integer.
        """
        names = tuple(name.strip() for name in players)
        if len(names) != SEATS_PER_TABLE:
            raise InvalidRoomError(f"a room needs exactly {SEATS_PER_TABLE} players (got {len(names)})")
        if not all(names):
            raise InvalidRoomError("player names must not be blank")
        if fee_amount is not None and (isinstance(fee_amount, bool) or fee_amount <= 0):
            raise InvalidRoomError(f"table fee must be a positive whole number (got {fee_amount})")

        now = self._clock()
        room = Room(
            room_id=str(uuid.uuid4()),
            played_on=played_on or now.date(),
            players=names,
            uma_rule=uma_rule.value,
            oka_rule=oka_rule.value,
            tie_rule=tie_rule.value,
            fee_enabled=fee_amount is not None,
            fee_amount=fee_amount or 0,
            created_at=now,
            updated_at=now,
        )
        await self._rooms.create_room(room)
        logger.info(
            "room created",
            room_id=room.room_id,
            players=room.players,
            rules=(uma_rule, oka_rule, tie_rule),
            fee_amount=room.fee_amount,
        )
        return room

    async def get_room(self, room_id: str) -> Room:
        room = await self._rooms.get_room(room_id)
        if room is None:
            raise RoomNotFoundError(room_id)
        return room

    async def list_rooms(self) -> list[Room]:
        """All rooms, newest first."""
        return await self._rooms.list_rooms()

    async def delete_room(self, room_id: str) -> int:
        """Delete a room together with its hands. Returns the number of hands removed."""
        await self.get_room(room_id)
        removed = await self._hands.delete_room_hands(room_id)
        await self._rooms.delete_room(room_id)
        logger.info("room deleted", room_id=room_id, hands_removed=removed)
        return removed

    async def list_hands(self, room_id: str) -> list[HandRecord]:
        """A room's hands in the order they were first recorded."""
        await self.get_room(room_id)
        return await self._hands.list_hands(room_id)

    async def _get_room_hand(self, room_id: str, hand_id: str) -> HandRecord:
        hand = await self._hands.get_hand(hand_id)
        if hand is None or hand.room_id != room_id:
            raise HandNotFoundError(hand_id, room_id)
        return hand

    async def record_hand(
        self,
        room_id: str,
        scores: Sequence[int],
        *,
        hand_id: str | None = None,
    ) -> HandRecord:
        """Store a new hand, or replace the scores of an existing one.

        Amending keeps the hand's created_at so it stays in place. Scores that
        do not add up to the pool total are saved anyway, with a warning.
        """
        await self.get_room(room_id)
        if len(scores) != SEATS_PER_TABLE:
            raise InvalidHandError(f"expected {SEATS_PER_TABLE} scores, got {len(scores)}")

        now = self._clock()
        created_at = now
        if hand_id is not None:
            created_at = (await self._get_room_hand(room_id, hand_id)).created_at

        hand = HandRecord(
            hand_id=hand_id or str(uuid.uuid4()),
            room_id=room_id,
            scores=tuple(scores),
            created_at=created_at,
            updated_at=now,
        )

        difference = pool_difference(hand.scores, self._pool_total)
        if difference:
            logger.warning(
                "hand scores do not match pool total",
                room_id=room_id,
                hand_id=hand.hand_id,
                total=sum(hand.scores),
                pool_total=self._pool_total,
            )

        await self._hands.save_hand(hand)
        logger.info("hand saved", room_id=room_id, hand_id=hand.hand_id, amended=hand_id is not None)
        return hand

    async def delete_hand(self, room_id: str, hand_id: str) -> None:
        await self._get_room_hand(room_id, hand_id)
        await self._hands.delete_hand(hand_id)
        logger.info("hand deleted", room_id=room_id, hand_id=hand_id)

    async def preview_hand(self, room_id: str, scores: Sequence[int]) -> HandPreview:
        """Score a hand under the room's rules without saving it.

        The preview also reports the raw total and how far it is from the pool,
        so a typo can be caught before the hand is recorded.
        """
        room = await self.get_room(room_id)
        return HandPreview(
            result=convert_round(room_rules(room), scores),
            total=sum(scores),
            pool_difference=pool_difference(scores, self._pool_total),
        )

    async def standings(self, room_id: str) -> RoomStandings:
        """Recompute every derived value for a room from its stored hands."""
        room = await self.get_room(room_id)
        hands = await self._hands.list_hands(room_id)
        summary = summarize_session(
            room_rules(room),
            [hand.scores for hand in hands],
            fee_amount=room.fee_amount if room.fee_enabled else None,
        )
        rows = tuple(
            HandRow(hand=hand, result=result, pool_difference=pool_difference(hand.scores, self._pool_total))
            for hand, result in zip(hands, summary.rounds, strict=True)
        )
        return RoomStandings(
            room=room,
            hands=rows,
            totals=summary.totals,
            final_ranks=summary.final_ranks,
            fee_shares=summary.fee_shares,
        )
