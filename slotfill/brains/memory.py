"""In-memory brain."""

import time
from typing import Any, Dict, Optional

import structlog

from slotfill.brains.base import Brain
from slotfill.exceptions import (
    BrainError,
    ConversationNotFoundError,
    UserExistsError,
    UserNotFoundError,
)

logger = structlog.get_logger(__name__)


class MemoryBrain(Brain):
    """
    Brain keeping users in a dictionary.

    Data is lost when the process exits; meant for tests and
    single-process bots.
    """

    def __init__(self, bot_id: str):
        super().__init__(bot_id)
        self._users: Dict[str, Dict[str, Any]] = {}

    async def clean(self) -> None:
        self._users = {}

    async def has_user(self, user_id: str) -> bool:
        return user_id in self._users

    async def add_user(self, user_id: str) -> Dict[str, Any]:
        if user_id in self._users:
            raise UserExistsError(user_id)
        user = self.new_user(user_id, time.time())
        self._users[user_id] = user
        logger.debug("user_added", bot_id=self.bot_id, user_id=user_id)
        return user

    async def get_user(self, user_id: str) -> Dict[str, Any]:
        user = self._users.get(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    async def user_set(self, user_id: str, key: str, value: Any) -> Dict[str, Any]:
        user = await self.get_user(user_id)
        user[key] = value
        return user

    async def user_get(self, user_id: str, key: str) -> Any:
        user = await self.get_user(user_id)
        return user.get(key)

    async def user_push(self, user_id: str, key: str, value: Any) -> Dict[str, Any]:
        user = await self.get_user(user_id)
        if key not in user or user[key] is None:
            user[key] = [value]
        elif isinstance(user[key], list):
            user[key].append(value)
        else:
            raise BrainError(f"User key {key!r} is not a list")
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
        conversation = await self.get_last_conversation(user_id)
        conversation[key] = value
        return conversation

    async def conversation_get(self, user_id: str, key: str) -> Optional[Any]:
        conversation = await self.get_last_conversation(user_id)
        return conversation.get(key)
