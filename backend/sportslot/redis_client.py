# backend/sportslot/redis_client.py
"""
Shared Redis client for the event queue.

None when REDIS_URL is not configured; callers must check.
"""

from redis import Redis

from .config import settings


def _build_client() -> Redis | None:
    if not settings.redis_url:
        return None
    return Redis.from_url(
        settings.redis_url,
        socket_timeout=2.0,
        socket_connect_timeout=2.0,
        decode_responses=True,
    )


redis_client = _build_client()
