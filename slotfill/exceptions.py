"""Exceptions raised by the slot-filling engine."""


class SlotFillError(Exception):
    """Base exception for slot-filling errors."""
    pass


class ParameterConfigError(SlotFillError):
    """A dialog parameter is misconfigured."""
    pass


class BrainError(SlotFillError):
    """Error raised by a conversation store."""
    pass


class UserNotFoundError(BrainError):
    """The user does not exist in the brain."""

    def __init__(self, user_id: str):
        super().__init__(f"User {user_id!r} does not exist")
        self.user_id = user_id


class UserExistsError(BrainError):
    """A user with this id already exists for this bot."""

    def __init__(self, user_id: str):
        super().__init__(f"User {user_id!r} already exists for this bot")
        self.user_id = user_id


class ConversationNotFoundError(BrainError):
    """The user has no open conversation."""

    def __init__(self, user_id: str):
        super().__init__(f"User {user_id!r} has no conversation")
        self.user_id = user_id
