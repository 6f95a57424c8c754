"""Board lifecycle: creation, lookup, listing and cascade deletion."""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import TYPE_CHECKING, List, Optional, Tuple

import redis.asyncio as redis
from pydantic import ValidationError as SchemaError
from redis.exceptions import RedisError

from .constants import SLUG_PATTERN
from .exceptions import ConflictError, NotFound, UpstreamError, ValidationError
from .keyspace import KeySpace, info_pattern, slug_from_info_key
from .schemas import Board, BoardResponse
from .store import execute_with_retry, scan_keys, store_errors

if TYPE_CHECKING:
    from .auth_utils import AuthGate

logger = logging.getLogger(__name__)


def _parse_board(raw: Optional[str], key: str) -> Optional[Board]:
    if raw is None:
        return None
    try:
        return Board.model_validate_json(raw)
    except SchemaError as e:
        logger.error(f"Skipping malformed board record at {key}: {e}")
        return None


async def load_board(client: redis.Redis, slug: str) -> Optional[Board]:
    """Return the full stored board (hash included) or ``None``."""
    if not slug or not SLUG_PATTERN.match(slug):
        return None
    key = KeySpace.for_board(slug).info()
    async with store_errors("load board"):
        raw = await client.get(key)
    return _parse_board(raw, key)


class BoardRegistry:
    def __init__(self, client: redis.Redis, gate: "AuthGate", max_delete_attempts: int = 3,
                 retry_backoff: float = 0.1):
        self.client = client
        self.gate = gate
        self.max_delete_attempts = max_delete_attempts
        self.retry_backoff = retry_backoff

    async def create(self, name: str, slug: str, secret: str) -> BoardResponse:
        """Create a board at *slug*.

        The record is written with ``SET NX`` so two concurrent creations of
        the same slug cannot both succeed.
        """
        name = (name or "").strip()
        if not name or not slug or not secret:
            raise ValidationError("Name, slug, and password are required", rule="required_fields")
        if not SLUG_PATTERN.match(slug):
            raise ValidationError(
                "Slug can only contain lowercase letters, numbers, and hyphens", rule="slug_format"
            )

        board = Board(
            name=name,
            slug=slug,
            password_hash=await self.gate.hash_secret(secret),
            created_at=datetime.now(timezone.utc),
        )
        async with store_errors("create board"):
            created = await self.client.set(
                KeySpace.for_board(slug).info(), board.model_dump_json(by_alias=True), nx=True
            )
        if not created:
            raise ConflictError(slug)

        logger.info(f"Created board '{slug}' ({name})")
        return board.projection()

    async def get(self, slug: str) -> BoardResponse:
        board = await load_board(self.client, slug)
        if board is None:
            raise NotFound(slug)
        return board.projection()

    async def require(self, slug: str) -> KeySpace:
        """Return the keyspace of an existing board, else raise ``NotFound``."""
        if not slug or not SLUG_PATTERN.match(slug):
            raise NotFound(slug)
        keyspace = KeySpace.for_board(slug)
        async with store_errors("check board"):
            exists = await self.client.exists(keyspace.info())
        if not exists:
            raise NotFound(slug)
        return keyspace

    async def list(self) -> List[BoardResponse]:
        """All boards, most recently created first."""
        async with store_errors("list boards"):
            keys = [k for k in await scan_keys(self.client, info_pattern()) if slug_from_info_key(k)]
            values = await self.client.mget(keys) if keys else []

        boards = []
        for key, raw in zip(keys, values):
            board = _parse_board(raw, key)
            # Deleted between SCAN and MGET
            if board is not None:
                boards.append(board.projection())
        boards.sort(key=lambda b: b.created_at, reverse=True)
        return boards

    async def delete(self, slug: str, secret: Optional[str]) -> int:
        """Remove the board record and every key namespaced under it.

        Returns the number of keys removed.

        Raises
        ------
        NotFound
            If there is no board at *slug*.
        Unauthorized
            If *secret* does not open the board.
        UpstreamError
            If keys survive every attempt; ``partial`` tells whether some
            were already removed.
        """
        if await load_board(self.client, slug) is None:
            raise NotFound(slug)
        await self.gate.require(slug, secret)

        keyspace = KeySpace.for_board(slug)
        deleted = await self._purge(keyspace)
        logger.info(f"Deleted board '{slug}' ({deleted} keys)")
        return deleted

    async def _purge(self, keyspace: KeySpace) -> int:
        pattern = keyspace.namespace_pattern()

        async def _delete_pass() -> Tuple[int, int]:
            keys = await scan_keys(self.client, pattern)
            if not keys:
                return 0, 0
            # One multi-key DEL inside MULTI/EXEC: a pass removes all it found or nothing
            async with self.client.pipeline(transaction=True) as pipe:
                pipe.delete(*keys)
                (removed,) = await pipe.execute()
            return len(keys), removed

        deleted = 0
        for _ in range(self.max_delete_attempts):
            try:
                found, removed = await execute_with_retry(
                    _delete_pass, self.max_delete_attempts, self.retry_backoff
                )
            except RedisError as e:
                logger.error(f"Deleting {pattern} failed after {deleted} keys: {e}")
                raise UpstreamError("delete board", str(e), partial=deleted > 0) from e
            if found == 0:
                return deleted
            deleted += removed

        # Keys keep appearing (concurrent writes under the namespace)
        logger.error(f"Keys still present under {pattern} after {self.max_delete_attempts} passes")
        raise UpstreamError("delete board", "keys remain under the board namespace", partial=deleted > 0)


__all__ = ["BoardRegistry", "load_board"]
