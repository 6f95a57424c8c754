"""Catan game results: validation, winner derivation and the immutable ledger.

The rule checks are framework-agnostic and operate on plain participant
lists; :class:`GameLedger` adds authentication and persistence on top.
"""
from __future__ import annotations

import logging
import secrets
import time
from datetime import datetime, timezone
from typing import Iterable, List, Optional, Tuple

import redis.asyncio as redis
from pydantic import ValidationError as SchemaError
from redis.exceptions import WatchError

from .auth_utils import AuthGate
from .constants import KIND_GAME, MIN_PLAYERS, MIN_POINTS, WINNING_POINTS
from .exceptions import Unauthorized, ValidationError
from .keyspace import KeySpace
from .schemas import GameRecord, Participant
from .stats import StatsAggregator
from .store import scan_keys, store_errors

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------

def named_participants(participants: Iterable[Participant]) -> List[Participant]:
    """Drop rows without a name and trim the rest."""
    return [
        Participant(name=p.name.strip(), points=p.points)
        for p in participants
        if p.name and p.name.strip()
    ]


def validate_participants(participants: Iterable[Participant]) -> Tuple[List[Participant], str]:
    """Check a result against the Catan rules and return ``(players, winner)``.

    Rules are applied in a fixed order and the first one broken is reported:
    player count, point range, exactly one player at the winning score, and
    finally unique names.
    """
    players = named_participants(participants)

    if len(players) < MIN_PLAYERS:
        raise ValidationError(f"At least {MIN_PLAYERS} players required", rule="min_players")

    if any(p.points > WINNING_POINTS for p in players):
        raise ValidationError(
            f"Invalid points! In Catan, no player can have more than {WINNING_POINTS} points.",
            rule="max_points",
        )
    if any(p.points < MIN_POINTS for p in players):
        raise ValidationError("Invalid points! Points cannot be negative.", rule="min_points")

    winners = [p for p in players if p.points == WINNING_POINTS]
    if not winners:
        raise ValidationError(
            f"Invalid game! In Catan, exactly one player must have {WINNING_POINTS} points to win.",
            rule="no_winner",
        )
    if len(winners) > 1:
        raise ValidationError(
            f"Invalid game! Only one winner allowed: just one player can have {WINNING_POINTS} points.",
            rule="multiple_winners",
        )

    seen = set()
    for p in players:
        if p.name in seen:
            raise ValidationError(f"Player '{p.name}' appears more than once in this game", rule="duplicate_player")
        seen.add(p.name)

    return players, winners[0].name


def new_game_id() -> str:
    """Millisecond timestamp plus random suffix, unique under rapid submissions."""
    return f"{int(time.time() * 1000)}-{secrets.token_hex(4)}"


def _parse_game(raw: Optional[str], key: str) -> Optional[GameRecord]:
    if raw is None:
        return None
    try:
        return GameRecord.model_validate_json(raw)
    except SchemaError as e:
        logger.error(f"Skipping malformed game record at {key}: {e}")
        return None


# ---------------------------------------------------------------------------
# Ledger
# ---------------------------------------------------------------------------

class GameLedger:
    def __init__(self, client: redis.Redis, gate: AuthGate, stats: StatsAggregator):
        self.client = client
        self.gate = gate
        self.stats = stats

    async def record_game(self, slug: str, participants: Iterable[Participant],
                          secret: Optional[str]) -> GameRecord:
        await self.gate.require(slug, secret)

        try:
            players, winner = validate_participants(participants)
        except ValidationError as e:
            logger.info(f"Rejected game for board '{slug}' ({e.rule}): {e.message}")
            raise

        keyspace = KeySpace.for_board(slug)
        record = GameRecord(
            id=new_game_id(),
            board_slug=slug,
            date=datetime.now(timezone.utc),
            players=players,
            winner=winner,
        )
        await self._persist(keyspace, record)

        logger.info(f"Recorded game {record.id} on board '{slug}', winner {winner}")
        return record

    async def _persist(self, keyspace: KeySpace, record: GameRecord) -> None:
        """Write the game and its aggregate increments as one MULTI/EXEC.

        The board record is WATCHed so a game can never land under a board
        that is deleted while the request is in flight.
        """
        info_key = keyspace.info()
        async with store_errors("record game"):
            async with self.client.pipeline(transaction=True) as pipe:
                try:
                    await pipe.watch(info_key)
                    if not await pipe.exists(info_key):
                        raise Unauthorized()
                    pipe.multi()
                    pipe.set(keyspace.game(record.id), record.model_dump_json(by_alias=True))
                    self.stats.queue_game(pipe, keyspace, record)
                    await pipe.execute()
                except WatchError:
                    logger.warning(f"Board '{keyspace.slug}' was deleted while recording a game")
                    raise Unauthorized()

    async def list_games(self, keyspace: KeySpace) -> List[GameRecord]:
        """Every game of the namespace, most recent first."""
        async with store_errors("list games"):
            keys = await scan_keys(self.client, keyspace.pattern(KIND_GAME))
            values = await self.client.mget(keys) if keys else []

        games = [g for g in (_parse_game(raw, key) for key, raw in zip(keys, values)) if g is not None]
        games.sort(key=lambda g: (g.date, g.id), reverse=True)
        return games


__all__ = [
    "GameLedger",
    "named_participants",
    "validate_participants",
    "new_game_id",
]
