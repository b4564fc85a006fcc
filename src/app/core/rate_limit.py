"""
Rate Limiting

Sliding-window rate limiting backed by the shared Redis client, with an
in-memory fallback when Redis is not connected.

Applied to the public endpoints that accept writes from anonymous callers:
- Admin login (brute force)
- Contact form submission (spam)
- Application intake (bulk submissions)
"""

import logging
import time

from fastapi import HTTPException, Request, status
from redis.asyncio import Redis

from app.core.config import settings
from app.core.redis import get_redis_client

logger = logging.getLogger(__name__)

MEMORY_PRUNE_INTERVAL_SECONDS = 60

# {key: [timestamp, ...]}
_memory_store: dict[str, list[float]] = {}
# {key: time after which every hit has left the window}
_memory_expiry: dict[str, float] = {}
_last_prune = 0.0


class RateLimitExceeded(HTTPException):
    """Raised when a caller exceeds its request budget."""

    def __init__(self, limit: int, window_seconds: int):
        super().__init__(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail={
                "error": "RATE_LIMIT_EXCEEDED",
                "message": f"Rate limit exceeded. Maximum {limit} requests per {window_seconds} seconds.",
                "retry_after_seconds": window_seconds,
            },
            headers={"Retry-After": str(window_seconds)},
        )


async def _check_rate_limit_redis(
    client: Redis,
    key: str,
    limit: int,
    window_seconds: int,
) -> bool:
    """Sliding window over a Redis sorted set."""
    now = time.time()

    pipe = client.pipeline()
    pipe.zremrangebyscore(key, 0, now - window_seconds)
    pipe.zcard(key)
    pipe.zadd(key, {str(now): now})
    pipe.expire(key, window_seconds)
    results = await pipe.execute()

    return results[1] < limit


def _prune_memory(now: float) -> None:
    """Drop keys whose window has passed, at most once per sweep interval."""
    global _last_prune
    if now - _last_prune < MEMORY_PRUNE_INTERVAL_SECONDS:
        return
    _last_prune = now
    for key in [k for k, expires_at in _memory_expiry.items() if expires_at <= now]:
        _memory_store.pop(key, None)
        _memory_expiry.pop(key, None)


def _check_rate_limit_memory(key: str, limit: int, window_seconds: int) -> bool:
    """Per-process fallback; not shared between workers."""
    now = time.time()
    window_start = now - window_seconds
    _prune_memory(now)

    hits = [ts for ts in _memory_store.get(key, []) if ts > window_start]
    if len(hits) >= limit:
        _memory_store[key] = hits
        return False

    hits.append(now)
    _memory_store[key] = hits
    _memory_expiry[key] = now + window_seconds
    return True


async def check_rate_limit(key: str, limit: int, window_seconds: int) -> bool:
    """
    Check whether a request identified by ``key`` is within its budget.

    Args:
        key: Rate limit key (e.g. "rate_limit:login:10.0.0.1")
        limit: Maximum requests allowed in the window
        window_seconds: Window length in seconds

    Returns:
        True if the request is allowed, False if the limit is exceeded
    """
    client = get_redis_client()
    if client is not None:
        try:
            return await _check_rate_limit_redis(client, key, limit, window_seconds)
        except Exception as e:
            logger.warning(f"Redis rate limit check failed, using memory: {e}")

    return _check_rate_limit_memory(key, limit, window_seconds)


def client_ip(request: Request) -> str:
    """
    Client address for rate limit keys and audit fields.

    ``X-Forwarded-For`` is honoured only when the socket peer is one of
    ``settings.trusted_proxies``; the address used is the rightmost entry
    that is not itself a trusted proxy.
    """
    peer = request.client.host if request.client else "unknown"
    trusted = settings.trusted_proxies_list
    forwarded = request.headers.get("x-forwarded-for")
    if not forwarded or peer not in trusted:
        return peer

    for address in reversed([part.strip() for part in forwarded.split(",")]):
        if address and address not in trusted:
            return address
    return peer


async def enforce_rate_limit(
    request: Request,
    scope: str,
    limit: int,
    window_seconds: int,
) -> None:
    """
    Enforce a per-IP limit for one endpoint scope.

    Raises:
        RateLimitExceeded: When the caller is over the limit (HTTP 429)
    """
    key = f"rate_limit:{scope}:{client_ip(request)}"
    if not await check_rate_limit(key, limit, window_seconds):
        logger.warning(f"Rate limit exceeded for {key}: {limit}/{window_seconds}s")
        raise RateLimitExceeded(limit, window_seconds)


__all__ = [
    "RateLimitExceeded",
    "check_rate_limit",
    "client_ip",
    "enforce_rate_limit",
]
