"""Command-line interface for the scorekeeper.

Usage: python bin/scorekeeper.py <command> [args]

Commands:
  create-room   create a room for four players
  rooms         list rooms, newest first
  delete-room   delete a room and its hands
  record        record a hand (or amend one with --hand)
  delete-hand   delete a hand
  preview       score a hand without saving it
  standings     show every hand, running totals, ranks and fee split
"""

from __future__ import annotations

import argparse
import asyncio
from datetime import date
from typing import TYPE_CHECKING

from rooms.exceptions import RoomError
from rooms.service import RoomService
from rooms.settings import ScorekeeperSettings
from rooms.validation import parse_positive_int, parse_scores
from scoring.logic.enums import OkaRule, TiePolicy, UmaRule
from scoring.logic.exceptions import ScoringError
from shared.db import Database, SqliteHandRepository, SqliteRoomRepository
from shared.logging import setup_logging

if TYPE_CHECKING:
    from collections.abc import Sequence

    from rooms.models import HandPreview, RoomStandings
    from shared.dal.models import Room


def format_points(value: float) -> str:
    return f"{value:+.1f}"


def format_amount(value: float) -> str:
    """Whole amounts print without decimals, split amounts with one."""
    return str(int(value)) if value.is_integer() else f"{value:.1f}"


def _describe_room(room: Room) -> str:
    fee = f"fee {room.fee_amount}" if room.fee_enabled else "no fee"
    players = " / ".join(room.players)
    rules = f"{room.uma_rule} {room.oka_rule} {room.tie_rule}"
    return f"{room.room_id}  {room.played_on.isoformat()}  {players}  [{rules}, {fee}]"


def _print_hand(room: Room, preview: HandPreview) -> None:
    result = preview.result
    for name, points, rank in zip(room.players, result.points, result.ranks, strict=True):
        print(f"  {name}: {format_points(points)} ({rank})")
    print(f"  total: {preview.total}")
    if preview.pool_difference:
        expected = preview.total - preview.pool_difference
        print(f"  warning: scores should total {expected} (off by {preview.pool_difference:+d})")


def _print_standings(standings: RoomStandings) -> None:
    room = standings.room
    print(_describe_room(room))
    print("hand      " + "  ".join(f"{name:>10}" for name in room.players))
    for number, row in enumerate(standings.hands, start=1):
        raw = "  ".join(f"{score:>10}" for score in row.hand.scores)
        cells = "  ".join(f"{format_points(points):>10}" for points in row.result.points)
        warning = f"  (total off by {row.pool_difference:+d})" if row.pool_difference else ""
        print(f"{number:<8}  {raw}{warning}  [{row.hand.hand_id}]")
        print(f"{'':<8}  {cells}")
    print("total     " + "  ".join(f"{format_points(total):>10}" for total in standings.totals))
    print("rank      " + "  ".join(f"{rank:>10}" for rank in standings.final_ranks))
    if standings.fee_shares is not None:
        print("fee       " + "  ".join(f"{format_amount(share):>10}" for share in standings.fee_shares))


def _fee_arg(text: str) -> int:
    value = parse_positive_int(text)
    if value is None:
        raise argparse.ArgumentTypeError(f"table fee must be a positive whole number: {text!r}")
    return value


def build_parser(settings: ScorekeeperSettings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="scorekeeper", description="Mahjong session scorekeeper")
    commands = parser.add_subparsers(dest="command", required=True)

    create = commands.add_parser("create-room", help="create a room for four players")
    create.add_argument("--players", nargs=4, metavar="NAME", default=settings.default_players)
    create.add_argument("--date", type=date.fromisoformat, default=None, help="YYYY-MM-DD (default: today)")
    create.add_argument("--uma", choices=[r.value for r in UmaRule], default=settings.default_uma.value)
    create.add_argument("--oka", choices=[r.value for r in OkaRule], default=settings.default_oka.value)
    create.add_argument("--tie", choices=[r.value for r in TiePolicy], default=settings.default_tie.value)
    create.add_argument("--fee", type=_fee_arg, default=None, help="table fee to split (default: none)")

    commands.add_parser("rooms", help="list rooms, newest first")

    delete_room = commands.add_parser("delete-room", help="delete a room and its hands")
    delete_room.add_argument("room")

    record = commands.add_parser("record", help="record a hand")
    record.add_argument("room")
    record.add_argument("scores", nargs=4, metavar="SCORE")
    record.add_argument("--hand", default=None, help="amend this hand instead of adding one")

    delete_hand = commands.add_parser("delete-hand", help="delete a hand")
    delete_hand.add_argument("room")
    delete_hand.add_argument("hand")

    preview = commands.add_parser("preview", help="score a hand without saving it")
    preview.add_argument("room")
    preview.add_argument("scores", nargs=4, metavar="SCORE")

    standings = commands.add_parser("standings", help="show hands, totals, ranks and fee split")
    standings.add_argument("room")

    return parser


async def _dispatch(args: argparse.Namespace, service: RoomService) -> None:  # noqa: C901
    match args.command:
        case "create-room":
            room = await service.create_room(
                args.players,
                played_on=args.date,
                uma_rule=UmaRule(args.uma),
                oka_rule=OkaRule(args.oka),
                tie_rule=TiePolicy(args.tie),
                fee_amount=args.fee,
            )
            print(room.room_id)
        case "rooms":
            rooms = await service.list_rooms()
            if not rooms:
                print("no rooms yet")
            for room in rooms:
                print(_describe_room(room))
        case "delete-room":
            removed = await service.delete_room(args.room)
            print(f"deleted room {args.room} ({removed} hands)")
        case "record":
            hand = await service.record_hand(args.room, parse_scores(args.scores), hand_id=args.hand)
            room = await service.get_room(args.room)
            print(hand.hand_id)
            _print_hand(room, await service.preview_hand(args.room, hand.scores))
        case "delete-hand":
            await service.delete_hand(args.room, args.hand)
            print(f"deleted hand {args.hand}")
        case "preview":
            room = await service.get_room(args.room)
            _print_hand(room, await service.preview_hand(args.room, parse_scores(args.scores)))
        case "standings":
            _print_standings(await service.standings(args.room))


def main(argv: Sequence[str] | None = None) -> int:
    settings = ScorekeeperSettings()
    args = build_parser(settings).parse_args(argv)
    setup_logging(settings.log_dir or None)

    db = Database(settings.database_path)
    db.connect()
    try:
        service = RoomService(
            SqliteRoomRepository(db),
            SqliteHandRepository(db),
            pool_total=settings.pool_total,
        )
        try:
            asyncio.run(_dispatch(args, service))
        except (RoomError, ScoringError) as e:
            print(f"Error: {e}")
            return 1
        return 0
    finally:
        db.close()
