"""
Redis Connection

Shared async client for the rate limiter. Redis is optional: while it is not
connected, rate limits are tracked per process.
"""

import logging

from redis.asyncio import Redis, from_url
from redis.exceptions import RedisError

from app.core.config import settings

logger = logging.getLogger(__name__)

_client: Redis | None = None


async def init_redis() -> Redis:
    """
    Connect to Redis and verify the connection.

    Call this on application startup.
    """
    global _client
    client = from_url(
        settings.redis_url,
        encoding="utf-8",
        decode_responses=True,
    )
    await client.ping()
    _client = client
    return client


def get_redis_client() -> Redis | None:
    """The connected client, or None when Redis is unavailable."""
    return _client


async def redis_status() -> str:
    """Readiness label: "connected", "unavailable" (never connected) or "error"."""
    if _client is None:
        return "unavailable"
    try:
        await _client.ping()
    except RedisError as e:
        logger.warning(f"Redis ping failed: {e}")
        return "error"
    return "connected"


async def close_redis() -> None:
    """Close the Redis connection."""
    global _client
    if _client is not None:
        await _client.aclose()
        _client = None
