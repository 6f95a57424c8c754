"""Per-application runtime state.

One :class:`BoardServices` is built by the application lifespan around a
single Redis client and stored on ``app.state``; routers reach it through
:func:`get_services`. Nothing here is a module-level singleton.
"""
from __future__ import annotations

from dataclasses import dataclass

import redis.asyncio as redis
from fastapi import Request

from .auth_utils import AuthGate, make_pwd_context
from .ledger import GameLedger
from .profiles import ProfileLinkStore
from .registry import BoardRegistry
from .stats import StatsAggregator


@dataclass
class BoardServices:
    client: redis.Redis
    gate: AuthGate
    boards: BoardRegistry
    ledger: GameLedger
    stats: StatsAggregator
    profiles: ProfileLinkStore

    @classmethod
    def build(cls, client: redis.Redis, config) -> "BoardServices":
        gate = AuthGate(client, make_pwd_context(config.BCRYPT_ROUNDS))
        stats = StatsAggregator(client)
        return cls(
            client=client,
            gate=gate,
            boards=BoardRegistry(
                client,
                gate,
                max_delete_attempts=config.DELETE_MAX_ATTEMPTS,
                retry_backoff=config.DELETE_RETRY_BACKOFF,
            ),
            ledger=GameLedger(client, gate, stats),
            stats=stats,
            profiles=ProfileLinkStore(client, gate),
        )

    async def close(self) -> None:
        await self.client.aclose()


def get_services(request: Request) -> BoardServices:
    return request.app.state.services


__all__ = ["BoardServices", "get_services"]
