"""Conversation stores ("brains")."""

from typing import Any, Optional

import redis.asyncio as aioredis

from slotfill.brains.base import Brain
from slotfill.brains.memory import MemoryBrain
from slotfill.brains.redis import RedisBrain
from slotfill.config import Settings, get_settings


def create_brain(settings: Optional[Settings] = None, client: Any = None) -> Brain:
    """
    Create the brain configured in settings.

    Args:
        settings: Settings to use, defaults to the cached settings
        client: Redis client for the redis backend; built from
            ``settings.redis_url`` when omitted

    Returns:
        A brain instance
    """
    settings = settings or get_settings()

    if settings.brain_backend == "redis":
        if client is None:
            client = aioredis.from_url(settings.redis_url, decode_responses=True)
        return RedisBrain(
            settings.bot_id,
            client,
            key_prefix=settings.redis_key_prefix,
            ttl_seconds=settings.conversation_ttl_seconds,
        )

    return MemoryBrain(settings.bot_id)


__all__ = [
    "Brain",
    "MemoryBrain",
    "RedisBrain",
    "create_brain",
]
