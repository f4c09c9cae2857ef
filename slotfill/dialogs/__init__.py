"""Dialogs module."""

from slotfill.dialogs.base import Dialog, DialogResult, DialogStatus
from slotfill.dialogs.prompt import PromptDialog
from slotfill.dialogs.text import TextDialog

__all__ = [
    "Dialog",
    "DialogResult",
    "DialogStatus",
    "PromptDialog",
    "TextDialog",
]
