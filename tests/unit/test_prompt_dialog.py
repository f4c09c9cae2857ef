"""Unit tests for the prompt dialog."""

from unittest.mock import AsyncMock

import pytest

from slotfill.brains import MemoryBrain
from slotfill.dialogs import DialogStatus, PromptDialog
from slotfill.entities import CandidateEntity
from slotfill.exceptions import ConversationNotFoundError
from slotfill.parameters import ParameterSpec


def boolean(value: bool, start: int = 0) -> CandidateEntity:
    """Yes/no candidate as produced by the boolean extractor."""
    return CandidateEntity(
        dimension="system:boolean",
        text="yes" if value else "no",
        start=start,
        end=start + 3,
        values=({"type": "boolean", "value": value},),
    )


@pytest.fixture
def travel_dialog(brain, renderer):
    """Dialog collecting a destination and a number of passengers."""
    return PromptDialog(
        brain,
        renderer,
        namespace="travel",
        entities={
            "destination": {"dim": "city"},
            "passengers": ParameterSpec(dimension="number"),
        },
    )


class TestPromptDialogStatuses:
    """Tests for the status transitions."""

    @pytest.mark.asyncio
    async def test_blocked_asks(self, travel_dialog, renderer, adapter, user_id):
        """Test that a blocked dialog asks and starts waiting."""
        result = await travel_dialog.execute(adapter, user_id, [], DialogStatus.BLOCKED)

        assert result.status == DialogStatus.WAITING
        assert renderer.displayed == [(adapter, user_id, "ask", None)]

    @pytest.mark.asyncio
    async def test_waiting_without_boolean_keeps_waiting(
        self, travel_dialog, renderer, brain, adapter, user_id, paris
    ):
        """Test that other candidates are ignored while waiting."""
        result = await travel_dialog.execute(adapter, user_id, [paris], DialogStatus.WAITING)

        assert result.status == DialogStatus.WAITING
        assert renderer.displayed == []
        assert await brain.conversation_get(user_id, "travel") is None

    @pytest.mark.asyncio
    async def test_waiting_declined_discards(self, travel_dialog, renderer, adapter, user_id):
        """Test that a negative answer discards the dialog."""
        result = await travel_dialog.execute(
            adapter, user_id, [boolean(False)], DialogStatus.WAITING
        )

        assert result.status == DialogStatus.DISCARDED
        assert result.status.is_terminal
        assert renderer.view_keys == ["discard"]

    @pytest.mark.asyncio
    async def test_waiting_confirmed_collects(
        self, travel_dialog, renderer, brain, adapter, user_id, paris
    ):
        """Test that a positive answer confirms and processes the same candidates."""
        result = await travel_dialog.execute(
            adapter, user_id, [boolean(True), paris], DialogStatus.WAITING
        )

        assert result.status == DialogStatus.READY
        assert renderer.view_keys == ["confirm", "entities"]
        stored = await brain.conversation_get(user_id, "travel")
        assert stored == {"destination": paris, "passengers": None}

    @pytest.mark.asyncio
    async def test_first_boolean_decides(self, travel_dialog, renderer, adapter, user_id):
        """Test that only the first boolean candidate counts."""
        result = await travel_dialog.execute(
            adapter, user_id, [boolean(False), boolean(True, start=10)], "waiting"
        )

        assert result.status == DialogStatus.DISCARDED

    @pytest.mark.asyncio
    async def test_boolean_without_values_is_negative(
        self, travel_dialog, adapter, user_id
    ):
        """Test that a boolean candidate without value declines."""
        answer = CandidateEntity(dimension="system:boolean", text="hm", start=0, end=2)

        result = await travel_dialog.execute(adapter, user_id, [answer], DialogStatus.WAITING)

        assert result.status == DialogStatus.DISCARDED

    @pytest.mark.asyncio
    async def test_custom_boolean_dimension(self, brain, renderer, adapter, user_id):
        """Test configuring the confirmation dimension."""
        dialog = PromptDialog(
            brain,
            renderer,
            namespace="travel",
            entities={"destination": {"dim": "city"}},
            boolean_dimension="yesno",
        )
        answer = CandidateEntity("yesno", "no", 0, 2, ({"value": False},))

        result = await dialog.execute(adapter, user_id, [answer], DialogStatus.WAITING)

        assert result.status == DialogStatus.DISCARDED

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [DialogStatus.READY, DialogStatus.COMPLETED, "discarded"])
    async def test_other_statuses_run_ready(
        self, travel_dialog, renderer, adapter, user_id, paris, status
    ):
        """Test that any other status processes entities."""
        result = await travel_dialog.execute(adapter, user_id, [paris], status)

        assert result.status == DialogStatus.READY
        assert renderer.view_keys == ["entities"]


class TestPromptDialogEntities:
    """Tests for entity collection across turns."""

    @pytest.mark.asyncio
    async def test_single_entity_completes(self, brain, renderer, adapter, user_id, paris):
        """Test the destination scenario."""
        dialog = PromptDialog(
            brain, renderer, namespace="trip", entities={"destination": {"dim": "city"}}
        )

        result = await dialog.execute(adapter, user_id, [paris], DialogStatus.READY)

        assert result.status == DialogStatus.COMPLETED
        assert result.matched_entities == {"destination": paris}
        _, _, view_key, data = renderer.displayed[-1]
        assert view_key == "entities"
        assert data == {
            "matched_entities": {"destination": paris},
            "missing_entities": {},
        }

    @pytest.mark.asyncio
    async def test_entities_view_lists_missing(
        self, travel_dialog, renderer, adapter, user_id, paris
    ):
        """Test the data passed to the entities view."""
        await travel_dialog.execute(adapter, user_id, [paris], DialogStatus.READY)

        data = renderer.displayed[-1][3]
        assert data["matched_entities"] == {"destination": paris, "passengers": None}
        assert list(data["missing_entities"]) == ["passengers"]
        assert data["missing_entities"]["passengers"].dimension == "number"

    @pytest.mark.asyncio
    async def test_entities_accumulate_across_turns(
        self, travel_dialog, brain, adapter, user_id, paris, make_candidate
    ):
        """Test that a later turn completes the dialog."""
        first = await travel_dialog.execute(adapter, user_id, [paris], DialogStatus.READY)
        assert first.status == DialogStatus.READY

        two = make_candidate("number", "2", start=4, value=2)
        second = await travel_dialog.execute(adapter, user_id, [two], first.status)

        assert second.status == DialogStatus.COMPLETED
        assert second.matched_entities == {"destination": paris, "passengers": two}
        assert await brain.conversation_get(user_id, "travel") == second.matched_entities

    @pytest.mark.asyncio
    async def test_correction_overrides_previous_answer(
        self, travel_dialog, brain, adapter, user_id, paris, make_candidate
    ):
        """Test that a new city replaces the stored one."""
        await travel_dialog.execute(adapter, user_id, [paris], DialogStatus.READY)

        lyon = make_candidate("city", "Lyon", start=10)
        await travel_dialog.execute(adapter, user_id, [lyon], DialogStatus.READY)

        stored = await brain.conversation_get(user_id, "travel")
        assert stored["destination"] is lyon

    @pytest.mark.asyncio
    async def test_no_candidates_keeps_progress(
        self, travel_dialog, brain, adapter, user_id, paris
    ):
        """Test that an empty turn does not lose anything."""
        await travel_dialog.execute(adapter, user_id, [paris], DialogStatus.READY)

        result = await travel_dialog.execute(adapter, user_id, None, DialogStatus.READY)

        assert result.status == DialogStatus.READY
        assert await brain.conversation_get(user_id, "travel") == {
            "destination": paris,
            "passengers": None,
        }

    @pytest.mark.asyncio
    async def test_accepts_extractor_dicts(self, travel_dialog, adapter, user_id):
        """Test that raw extractor output is accepted."""
        result = await travel_dialog.execute(
            adapter,
            user_id,
            [{"dim": "city", "body": "Paris", "start": 13, "end": 18, "values": []}],
            DialogStatus.READY,
        )

        assert result.matched_entities["destination"].text == "Paris"

    @pytest.mark.asyncio
    async def test_completion_hook(self, brain, renderer, adapter, user_id, paris):
        """Test that the completion hook receives the final entities."""
        on_complete = AsyncMock()
        dialog = PromptDialog(
            brain,
            renderer,
            namespace="trip",
            entities={"destination": {"dim": "city"}},
            on_complete=on_complete,
        )

        await dialog.execute(adapter, user_id, [paris], DialogStatus.READY)

        on_complete.assert_awaited_once_with(user_id, {"destination": paris})

    @pytest.mark.asyncio
    async def test_completion_hook_not_called_when_incomplete(
        self, brain, renderer, adapter, user_id, paris
    ):
        """Test that the hook waits for every entity."""
        on_complete = AsyncMock()
        dialog = PromptDialog(
            brain,
            renderer,
            namespace="trip",
            entities={"destination": {"dim": "city"}, "date": {"dim": "time"}},
            on_complete=on_complete,
        )

        await dialog.execute(adapter, user_id, [paris], DialogStatus.READY)

        on_complete.assert_not_awaited()


class TestPromptDialogFailures:
    """Tests for collaborator failures."""

    @pytest.mark.asyncio
    async def test_brain_failure_propagates(self, renderer, adapter, user_id, paris):
        """Test that a failing store rejects the turn."""
        brain = AsyncMock()
        brain.conversation_get.side_effect = ConnectionError("store down")
        dialog = PromptDialog(
            brain, renderer, namespace="trip", entities={"destination": {"dim": "city"}}
        )

        with pytest.raises(ConnectionError):
            await dialog.execute(adapter, user_id, [paris], DialogStatus.READY)

        brain.conversation_set.assert_not_awaited()
        assert renderer.displayed == []

    @pytest.mark.asyncio
    async def test_renderer_failure_propagates(self, brain, adapter, user_id, paris):
        """Test that a failing renderer rejects the turn after persisting."""
        renderer = AsyncMock()
        renderer.display.side_effect = RuntimeError("adapter down")
        dialog = PromptDialog(
            brain, renderer, namespace="trip", entities={"destination": {"dim": "city"}}
        )

        with pytest.raises(RuntimeError):
            await dialog.execute(adapter, user_id, [paris], DialogStatus.READY)

        assert await brain.conversation_get(user_id, "trip") == {"destination": paris}

    @pytest.mark.asyncio
    async def test_missing_conversation_propagates(self, renderer, adapter, paris):
        """Test that a user without conversation is reported by the brain."""
        brain = MemoryBrain("test-bot")
        await brain.add_user("lonely")
        dialog = PromptDialog(
            brain, renderer, namespace="trip", entities={"destination": {"dim": "city"}}
        )

        with pytest.raises(ConversationNotFoundError):
            await dialog.execute(adapter, "lonely", [paris], DialogStatus.READY)

    def test_invalid_status(self):
        """Test that unknown statuses are rejected."""
        with pytest.raises(ValueError):
            DialogStatus("paused")

    def test_prompt_dialog_is_reentrant(self, renderer):
        """Test the dialog configuration."""
        travel_dialog = PromptDialog(
            MemoryBrain("test-bot"),
            renderer,
            namespace="travel",
            entities={"destination": {"dim": "city"}},
        )
        assert travel_dialog.reentrant is True
        assert travel_dialog.namespace == "travel"
        assert travel_dialog.entities == {"destination": {"dim": "city"}}
        assert travel_dialog.parameters == {}
