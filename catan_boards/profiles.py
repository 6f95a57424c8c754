"""Player name → profile asset URL, per board.

The asset itself is uploaded and served elsewhere; only its URL is kept.
"""
from __future__ import annotations

import logging
from typing import Dict, Optional

import redis.asyncio as redis
from redis.exceptions import WatchError

from .auth_utils import AuthGate
from .constants import KIND_PROFILE
from .exceptions import Unauthorized, ValidationError
from .keyspace import KeySpace
from .store import scan_keys, store_errors

logger = logging.getLogger(__name__)


class ProfileLinkStore:
    def __init__(self, client: redis.Redis, gate: AuthGate):
        self.client = client
        self.gate = gate

    async def set(self, slug: str, player_name: str, asset_url: str, secret: Optional[str]) -> str:
        await self.gate.require(slug, secret)

        player_name = (player_name or "").strip()
        asset_url = (asset_url or "").strip()
        if not player_name or not asset_url:
            raise ValidationError("Player name and asset URL required", rule="required_fields")

        keyspace = KeySpace.for_board(slug)
        info_key = keyspace.info()
        async with store_errors("set profile link"):
            async with self.client.pipeline(transaction=True) as pipe:
                try:
                    await pipe.watch(info_key)
                    if not await pipe.exists(info_key):
                        raise Unauthorized()
                    pipe.multi()
                    pipe.set(keyspace.profile(player_name), asset_url)
                    await pipe.execute()
                except WatchError:
                    raise Unauthorized()

        logger.info(f"Updated profile asset of '{player_name}' on board '{slug}'")
        return player_name

    async def get(self, keyspace: KeySpace, player_name: str) -> Optional[str]:
        async with store_errors("get profile link"):
            return await self.client.get(keyspace.profile(player_name))

    async def list_all(self, keyspace: KeySpace) -> Dict[str, str]:
        async with store_errors("list profile links"):
            keys = await scan_keys(self.client, keyspace.pattern(KIND_PROFILE))
            values = await self.client.mget(keys) if keys else []
        return {
            keyspace.entity_id(KIND_PROFILE, key): url
            for key, url in zip(keys, values)
            if url
        }


__all__ = ["ProfileLinkStore"]
