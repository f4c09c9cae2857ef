"""
Slot Filling Engine
===================

Multi-turn slot filling for conversational bots.

Candidate entities extracted from each user message are matched with
the parameters a dialog needs; partial progress is kept per user
conversation until every parameter is fulfilled.
"""

from slotfill.dialogs import Dialog, DialogResult, DialogStatus, PromptDialog, TextDialog
from slotfill.entities import CandidateEntity
from slotfill.matcher import MatchResult, match_parameter
from slotfill.parameters import (
    ParameterSpec,
    append_reducer,
    has_at_least,
    is_present,
    normalize_parameters,
    replace_reducer,
)
from slotfill.resolver import EntityResolver, ResolutionResult, resolve_entities

__version__ = "1.0.0"

__all__ = [
    "CandidateEntity",
    "Dialog",
    "DialogResult",
    "DialogStatus",
    "EntityResolver",
    "MatchResult",
    "ParameterSpec",
    "PromptDialog",
    "ResolutionResult",
    "TextDialog",
    "append_reducer",
    "has_at_least",
    "is_present",
    "match_parameter",
    "normalize_parameters",
    "replace_reducer",
    "resolve_entities",
]
