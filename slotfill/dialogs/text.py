"""Dialog that shows a single view and completes."""

from typing import Any, Dict, Iterable, Optional, Union

from slotfill.brains.base import Brain
from slotfill.dialogs.base import Dialog, DialogResult, DialogStatus
from slotfill.renderer import Renderer


class TextDialog(Dialog):
    """Displays its view whatever the user said."""

    def __init__(
        self,
        brain: Brain,
        renderer: Renderer,
        view_key: str = "text",
        data: Optional[Dict[str, Any]] = None,
        logger: Optional[Any] = None,
    ):
        super().__init__(brain, renderer, parameters=data, logger=logger)
        self.view_key = view_key

    async def execute(
        self,
        adapter: Any,
        user_id: str,
        candidates: Optional[Iterable[Any]],
        status: Union[DialogStatus, str] = DialogStatus.BLOCKED,
    ) -> DialogResult:
        await self.display(adapter, user_id, self.view_key, self.parameters or None)
        return DialogResult(status=DialogStatus.COMPLETED)
