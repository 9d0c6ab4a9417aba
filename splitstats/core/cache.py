from typing import Optional

import redis

from splitstats.config import Settings, get_settings


def create_redis(settings: Optional[Settings] = None) -> redis.Redis:
    """Build a Redis client from settings.

    The client is returned to the caller rather than cached in a module
    global; whoever creates it owns its lifetime.
    """
    settings = settings or get_settings()
    return redis.Redis.from_url(
        settings.REDIS_URL,
        password=settings.REDIS_PASSWORD if settings.REDIS_PASSWORD else None,
        socket_timeout=settings.REDIS_SOCKET_TIMEOUT,
        encoding="utf-8",
        decode_responses=True,
    )


def close_redis(client: Optional[redis.Redis]) -> None:
    """Close a Redis client"""
    if client is not None:
        client.close()
