"""Slot-filling prompt dialog."""

from typing import Any, Awaitable, Callable, Dict, Iterable, List, Mapping, Optional, Union

from slotfill.brains.base import Brain
from slotfill.config import get_settings
from slotfill.dialogs.base import Dialog, DialogResult, DialogStatus
from slotfill.entities import CandidateEntity, coerce_candidates
from slotfill.parameters import ParameterSpec
from slotfill.renderer import Renderer
from slotfill.resolver import EntityResolver

CompletionHook = Callable[[str, Dict[str, Any]], Awaitable[None]]


class PromptDialog(Dialog):
    """
    Prompts the user for a set of entities.

    Matched entities are kept in the user's current conversation under
    the dialog namespace, so a value given on one turn is still there on
    the next. Each turn renders one of the views ``ask``, ``confirm``,
    ``discard`` or ``entities``.

    Usage:
        dialog = PromptDialog(
            brain,
            renderer,
            namespace="travel",
            entities={
                "destination": ParameterSpec(dimension="city", priority=10),
                "passengers": {"dim": "number"},
            },
        )
        result = await dialog.execute(adapter, user_id, candidates, status)
    """

    def __init__(
        self,
        brain: Brain,
        renderer: Renderer,
        namespace: str,
        entities: Mapping[str, Union[ParameterSpec, Mapping[str, Any]]],
        on_complete: Optional[CompletionHook] = None,
        boolean_dimension: Optional[str] = None,
        logger: Optional[Any] = None,
    ):
        super().__init__(
            brain,
            renderer,
            reentrant=True,
            logger=logger,
        )
        self.namespace = namespace
        self.entities = entities
        self.on_complete = on_complete
        self.boolean_dimension = boolean_dimension or get_settings().boolean_dimension
        self.logger = self.logger.bind(namespace=namespace)
        self.resolver = EntityResolver(logger=self.logger)

    async def execute(
        self,
        adapter: Any,
        user_id: str,
        candidates: Optional[Iterable[Any]],
        status: Union[DialogStatus, str] = DialogStatus.BLOCKED,
    ) -> DialogResult:
        """Execute a turn according to the current status."""
        status = DialogStatus(status)
        candidates = coerce_candidates(candidates)
        self.logger.debug(
            "execute",
            user_id=user_id,
            status=status.value,
            candidates=len(candidates),
        )

        if status == DialogStatus.BLOCKED:
            return await self.execute_when_blocked(adapter, user_id, candidates)
        if status == DialogStatus.WAITING:
            return await self.execute_when_waiting(adapter, user_id, candidates)
        return await self.execute_when_ready(adapter, user_id, candidates)

    async def execute_when_blocked(
        self,
        adapter: Any,
        user_id: str,
        candidates: List[CandidateEntity],
    ) -> DialogResult:
        """Ask the user whether to start the dialog."""
        await self.display(adapter, user_id, "ask")
        return DialogResult(status=DialogStatus.WAITING)

    async def execute_when_waiting(
        self,
        adapter: Any,
        user_id: str,
        candidates: List[CandidateEntity],
    ) -> DialogResult:
        """
        Wait for a yes/no answer.

        Only the first boolean candidate is looked at; anything else is
        ignored until the user confirms or declines.
        """
        answer = next(
            (c for c in candidates if c.dimension == self.boolean_dimension),
            None,
        )
        if answer is None:
            return DialogResult(status=DialogStatus.WAITING)

        self.logger.debug("confirmation", user_id=user_id, value=answer.value)
        if answer.value:
            await self.display(adapter, user_id, "confirm")
            return await self.execute_when_ready(adapter, user_id, candidates)

        await self.display(adapter, user_id, "discard")
        return DialogResult(status=DialogStatus.DISCARDED)

    async def execute_when_ready(
        self,
        adapter: Any,
        user_id: str,
        candidates: List[CandidateEntity],
    ) -> DialogResult:
        """Match candidates, store them and show what is still missing."""
        previous = await self.brain.conversation_get(user_id, self.namespace) or {}
        result = self.resolver.resolve(candidates, self.entities, previous)

        await self.brain.conversation_set(
            user_id, self.namespace, result.matched_entities
        )
        await self.display(
            adapter,
            user_id,
            "entities",
            {
                "matched_entities": result.matched_entities,
                "missing_entities": result.missing_entities,
            },
        )

        if result.is_complete:
            return await self.execute_when_completed(
                adapter, user_id, result.matched_entities
            )
        return DialogResult(
            status=DialogStatus.READY,
            matched_entities=result.matched_entities,
        )

    async def execute_when_completed(
        self,
        adapter: Any,
        user_id: str,
        matched_entities: Dict[str, Any],
    ) -> DialogResult:
        """Hand the collected entities to the completion hook."""
        self.logger.info("dialog_completed", user_id=user_id)
        if self.on_complete:
            await self.on_complete(user_id, matched_entities)
        return DialogResult(
            status=DialogStatus.COMPLETED,
            matched_entities=matched_entities,
        )
