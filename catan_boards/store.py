"""
Redis access helpers: client construction, error translation and retries.

The client is created once by the application lifespan and handed to every
component; nothing in this module keeps a connection of its own.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Any, Awaitable, Callable, List

import redis.asyncio as redis
from redis.exceptions import RedisError

from .exceptions import UpstreamError

logger = logging.getLogger(__name__)


def create_redis_client(config) -> redis.Redis:
    """Create a Redis client with bounded timeouts from *config*."""
    return redis.from_url(
        config.REDIS_URL,
        decode_responses=True,
        socket_timeout=config.REDIS_SOCKET_TIMEOUT,
        socket_connect_timeout=config.REDIS_CONNECT_TIMEOUT,
    )


@asynccontextmanager
async def store_errors(operation: str):
    """Translate store failures raised inside the block into ``UpstreamError``."""
    try:
        yield
    except RedisError as e:
        logger.error(f"Redis error during {operation}: {e}")
        raise UpstreamError(operation, str(e)) from e


async def scan_keys(client: redis.Redis, pattern: str) -> List[str]:
    """Return every key matching *pattern* using incremental SCAN."""
    return [key async for key in client.scan_iter(match=pattern, count=500)]


async def execute_with_retry(func: Callable[[], Awaitable[Any]], max_attempts: int = 3,
                             backoff: float = 0.1) -> Any:
    """Execute *func* again on store errors, with exponential backoff."""
    for attempt in range(max_attempts):
        try:
            return await func()
        except RedisError as e:
            if attempt == max_attempts - 1:
                raise
            logger.warning(f"Retry attempt {attempt + 1} for {getattr(func, '__name__', 'store call')}: {e}")
            await asyncio.sleep(backoff * (2 ** attempt))


async def ping(client: redis.Redis) -> bool:
    async with store_errors("ping"):
        return bool(await client.ping())
