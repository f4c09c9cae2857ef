"""Redis-backed brain."""

import json
import time
from typing import Any, Dict, Optional

import structlog

from slotfill.brains.base import Brain
from slotfill.entities import CandidateEntity
from slotfill.exceptions import (
    BrainError,
    ConversationNotFoundError,
    UserExistsError,
    UserNotFoundError,
)

logger = structlog.get_logger(__name__)

_CANDIDATE_TAG = "__candidate__"


def _encode(value: Any) -> Any:
    """JSON fallback for candidate entities stored as matched values."""
    if isinstance(value, CandidateEntity):
        return {_CANDIDATE_TAG: value.to_dict()}
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _decode(data: Dict[str, Any]) -> Any:
    if _CANDIDATE_TAG in data and len(data) == 1:
        return CandidateEntity.from_dict(data[_CANDIDATE_TAG])
    return data


def dumps(document: Dict[str, Any]) -> str:
    """Serialize a user document."""
    return json.dumps(document, default=_encode)


def loads(raw: str) -> Dict[str, Any]:
    """Deserialize a user document."""
    return json.loads(raw, object_hook=_decode)


class RedisBrain(Brain):
    """
    Brain storing one JSON document per user in Redis.

    Every write is a read-modify-write of the whole user document, so
    turns of a given user must not run concurrently.

    Usage:
        client = redis.asyncio.from_url("redis://localhost:6379/0")
        brain = RedisBrain("my-bot", client, ttl_seconds=86400)
    """

    def __init__(
        self,
        bot_id: str,
        client: Any,
        key_prefix: str = "slotfill",
        ttl_seconds: int = 0,
    ):
        super().__init__(bot_id)
        self._redis = client
        self._key_prefix = key_prefix
        self._ttl = ttl_seconds

    def _key(self, user_id: str) -> str:
        return f"{self._key_prefix}:{self.bot_id}:users:{user_id}"

    async def _load(self, user_id: str) -> Optional[Dict[str, Any]]:
        raw = await self._redis.get(self._key(user_id))
        if raw is None:
            return None
        if isinstance(raw, bytes):
            raw = raw.decode("utf-8")
        return loads(raw)

    async def _save(self, user: Dict[str, Any]) -> None:
        key = self._key(user["user_id"])
        if self._ttl > 0:
            await self._redis.setex(key, self._ttl, dumps(user))
        else:
            await self._redis.set(key, dumps(user))

    async def clean(self) -> None:
        pattern = f"{self._key_prefix}:{self.bot_id}:users:*"
        count = 0
        async for key in self._redis.scan_iter(match=pattern):
            await self._redis.delete(key)
            count += 1
        logger.info("brain_cleaned", bot_id=self.bot_id, removed=count)

    async def has_user(self, user_id: str) -> bool:
        return bool(await self._redis.exists(self._key(user_id)))

    async def add_user(self, user_id: str) -> Dict[str, Any]:
        if await self.has_user(user_id):
            raise UserExistsError(user_id)
        user = self.new_user(user_id, time.time())
        await self._save(user)
        logger.debug("user_added", bot_id=self.bot_id, user_id=user_id)
        return user

    async def get_user(self, user_id: str) -> Dict[str, Any]:
        user = await self._load(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    async def user_set(self, user_id: str, key: str, value: Any) -> Dict[str, Any]:
        user = await self.get_user(user_id)
        user[key] = value
        await self._save(user)
        return user

    async def user_get(self, user_id: str, key: str) -> Any:
        user = await self.get_user(user_id)
        return user.get(key)

    async def user_push(self, user_id: str, key: str, value: Any) -> Dict[str, Any]:
        user = await self.get_user(user_id)
        if user.get(key) is None:
            user[key] = [value]
        elif isinstance(user[key], list):
            user[key].append(value)
        else:
            raise BrainError(f"User key {key!r} is not a list")
        await self._save(user)
        return user

    async def add_conversation(self, user_id: str) -> Dict[str, Any]:
        conversation = {"created_at": time.time()}
        await self.user_push(user_id, "conversations", conversation)
        return conversation

    async def get_last_conversation(self, user_id: str) -> Dict[str, Any]:
        user = await self.get_user(user_id)
        if not user["conversations"]:
            raise ConversationNotFoundError(user_id)
        return user["conversations"][-1]

    async def conversation_set(
        self,
        user_id: str,
        key: str,
        value: Any,
    ) -> Dict[str, Any]:
        user = await self.get_user(user_id)
        if not user["conversations"]:
            raise ConversationNotFoundError(user_id)
        conversation = user["conversations"][-1]
        conversation[key] = value
        await self._save(user)
        return conversation

    async def conversation_get(self, user_id: str, key: str) -> Optional[Any]:
        conversation = await self.get_last_conversation(user_id)
        return conversation.get(key)
