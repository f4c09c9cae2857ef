"""Conversation store contract."""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional


class Brain(ABC):
    """
    Per-user key/value store.

    Each user owns a list of conversations; ``conversation_get`` and
    ``conversation_set`` always address the most recent one.
    """

    def __init__(self, bot_id: str):
        self.bot_id = bot_id

    @abstractmethod
    async def clean(self) -> None:
        """Remove every user of this bot."""
        pass

    @abstractmethod
    async def has_user(self, user_id: str) -> bool:
        """Check if the user exists."""
        pass

    @abstractmethod
    async def add_user(self, user_id: str) -> Dict[str, Any]:
        """Create a user. Raises UserExistsError if it already exists."""
        pass

    @abstractmethod
    async def get_user(self, user_id: str) -> Dict[str, Any]:
        """Get a user. Raises UserNotFoundError if it does not exist."""
        pass

    @abstractmethod
    async def user_set(self, user_id: str, key: str, value: Any) -> Dict[str, Any]:
        """Set a user key."""
        pass

    @abstractmethod
    async def user_get(self, user_id: str, key: str) -> Any:
        """Get a user key."""
        pass

    @abstractmethod
    async def user_push(self, user_id: str, key: str, value: Any) -> Dict[str, Any]:
        """Append a value to a list-valued user key."""
        pass

    @abstractmethod
    async def add_conversation(self, user_id: str) -> Dict[str, Any]:
        """Open a new conversation for the user."""
        pass

    @abstractmethod
    async def get_last_conversation(self, user_id: str) -> Dict[str, Any]:
        """Get the most recent conversation of the user."""
        pass

    @abstractmethod
    async def conversation_set(
        self,
        user_id: str,
        key: str,
        value: Any,
    ) -> Dict[str, Any]:
        """Set a key of the last conversation."""
        pass

    @abstractmethod
    async def conversation_get(self, user_id: str, key: str) -> Optional[Any]:
        """Get a key of the last conversation, None when unset."""
        pass

    def new_user(self, user_id: str, created_at: float) -> Dict[str, Any]:
        """Build an empty user document."""
        return {
            "bot_id": self.bot_id,
            "user_id": user_id,
            "conversations": [],
            "created_at": created_at,
        }
