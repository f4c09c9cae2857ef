"""Rendering contract between dialogs and the channel adapter."""

from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, Dict, Optional

RenderCallback = Callable[[Any, str, str, Optional[Dict[str, Any]]], Awaitable[Any]]


class Renderer(ABC):
    """
    Turns a view key and its data into messages for the user.

    Dialogs only name the view ("ask", "confirm", "discard",
    "entities", ...); building and delivering the messages is up to the
    renderer and the adapter it is given.
    """

    @abstractmethod
    async def display(
        self,
        adapter: Any,
        user_id: str,
        view_key: str,
        data: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Render a view and send it through the adapter."""
        pass


class CallbackRenderer(Renderer):
    """Renderer delegating to an async callable."""

    def __init__(self, callback: RenderCallback):
        self._callback = callback

    async def display(
        self,
        adapter: Any,
        user_id: str,
        view_key: str,
        data: Optional[Dict[str, Any]] = None,
    ) -> None:
        await self._callback(adapter, user_id, view_key, data)
