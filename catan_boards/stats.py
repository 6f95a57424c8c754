"""Per-player running totals and leaderboard reconstruction.

Totals live in one Redis hash per player and only ever change through
``HINCRBY``, so concurrent games for the same board cannot lose updates.
"""
from __future__ import annotations

import logging
from typing import Dict, Iterable, List

import redis.asyncio as redis

from .constants import FIELD_GAMES_PLAYED, FIELD_TOTAL_POINTS, FIELD_WINS, KIND_PLAYER
from .keyspace import KeySpace
from .schemas import GameRecord, PlayerStats
from .store import scan_keys, store_errors

logger = logging.getLogger(__name__)


def _as_int(value) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def build_stats(name: str, fields: Dict[str, str]) -> PlayerStats:
    """Turn a stored aggregate hash into a leaderboard row."""
    total_points = _as_int(fields.get(FIELD_TOTAL_POINTS))
    games_played = _as_int(fields.get(FIELD_GAMES_PLAYED))
    return PlayerStats(
        name=name,
        total_points=total_points,
        games_played=games_played,
        wins=_as_int(fields.get(FIELD_WINS)),
        average_points=total_points / games_played if games_played > 0 else 0.0,
    )


def rank_players(rows: Iterable[PlayerStats]) -> List[PlayerStats]:
    """Sort by total points, highest first; equal totals fall back to name."""
    return sorted(rows, key=lambda row: (-row.total_points, row.name))


class StatsAggregator:
    def __init__(self, client: redis.Redis):
        self.client = client

    @staticmethod
    def queue_game(pipe, keyspace: KeySpace, record: GameRecord) -> None:
        """Queue the increments for *record* on an open pipeline."""
        for player in record.players:
            key = keyspace.player(player.name)
            pipe.hincrby(key, FIELD_TOTAL_POINTS, player.points)
            pipe.hincrby(key, FIELD_GAMES_PLAYED, 1)
            # Creates the field at 0 for non-winners so every aggregate has all three
            pipe.hincrby(key, FIELD_WINS, 1 if player.name == record.winner else 0)

    async def apply_game(self, keyspace: KeySpace, record: GameRecord) -> None:
        """Fold *record* into the totals of its participants in one transaction."""
        async with store_errors("apply game"):
            async with self.client.pipeline(transaction=True) as pipe:
                self.queue_game(pipe, keyspace, record)
                await pipe.execute()

    async def leaderboard(self, keyspace: KeySpace) -> List[PlayerStats]:
        async with store_errors("read leaderboard"):
            keys = await scan_keys(self.client, keyspace.pattern(KIND_PLAYER))
            if not keys:
                return []
            async with self.client.pipeline(transaction=False) as pipe:
                for key in keys:
                    pipe.hgetall(key)
                hashes = await pipe.execute()

        rows = [
            build_stats(keyspace.entity_id(KIND_PLAYER, key), fields)
            for key, fields in zip(keys, hashes)
            if fields
        ]
        return rank_players(rows)

    async def player(self, keyspace: KeySpace, name: str) -> PlayerStats:
        """Totals of one player; zeros when they never played."""
        async with store_errors("read player"):
            fields = await self.client.hgetall(keyspace.player(name))
        return build_stats(name, fields or {})


__all__ = ["StatsAggregator", "build_stats", "rank_players"]
