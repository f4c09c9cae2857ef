"""Base dialog and shared dialog statuses."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, Optional

import structlog

from slotfill.brains.base import Brain
from slotfill.renderer import Renderer


class DialogStatus(str, Enum):
    """Lifecycle of a dialog."""
    BLOCKED = "blocked"  # Not started, nothing asked yet
    WAITING = "waiting"  # Waiting for the user to confirm
    READY = "ready"  # Collecting entities
    COMPLETED = "completed"
    DISCARDED = "discarded"

    @property
    def is_terminal(self) -> bool:
        """Check if the dialog is over."""
        return self in (DialogStatus.COMPLETED, DialogStatus.DISCARDED)


@dataclass
class DialogResult:
    """Result of executing a dialog turn."""
    status: DialogStatus
    matched_entities: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "status": self.status.value,
            "matched_entities": self.matched_entities,
        }


class Dialog(ABC):
    """
    Base class for dialogs.

    A dialog is executed once per user message with the status it
    returned on the previous turn. Callers are responsible for keeping
    that status between turns.
    """

    def __init__(
        self,
        brain: Brain,
        renderer: Renderer,
        parameters: Optional[Dict[str, Any]] = None,
        reentrant: bool = False,
        logger: Optional[Any] = None,
    ):
        self.brain = brain
        self.renderer = renderer
        self.parameters = parameters or {}
        self.reentrant = reentrant
        self.logger = (logger or structlog.get_logger(__name__)).bind(
            dialog=type(self).__name__,
        )

    async def display(
        self,
        adapter: Any,
        user_id: str,
        view_key: str,
        data: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Display a view of this dialog to the user."""
        self.logger.debug("display", user_id=user_id, view=view_key)
        await self.renderer.display(adapter, user_id, view_key, data)

    @abstractmethod
    async def execute(
        self,
        adapter: Any,
        user_id: str,
        candidates: Optional[Iterable[Any]],
        status: DialogStatus = DialogStatus.BLOCKED,
    ) -> DialogResult:
        """Execute one turn of the dialog."""
        pass
