"""Shared pytest fixtures for testing."""

import fnmatch
from typing import Any, Dict, List, Optional, Tuple
from uuid import uuid4

import pytest
import pytest_asyncio

from slotfill.brains import MemoryBrain
from slotfill.entities import CandidateEntity
from slotfill.renderer import Renderer


# =============================================================================
# Test Doubles
# =============================================================================


class RecordingRenderer(Renderer):
    """Renderer remembering every displayed view."""

    def __init__(self):
        self.displayed: List[Tuple[Any, str, str, Optional[Dict[str, Any]]]] = []

    async def display(self, adapter, user_id, view_key, data=None):
        self.displayed.append((adapter, user_id, view_key, data))

    @property
    def view_keys(self) -> List[str]:
        return [view_key for _, _, view_key, _ in self.displayed]


class FakeRedis:
    """Minimal stand-in for redis.asyncio.Redis."""

    def __init__(self):
        self.data: Dict[str, str] = {}
        self.expiry: Dict[str, int] = {}

    async def get(self, key):
        return self.data.get(key)

    async def set(self, key, value):
        self.data[key] = value
        return True

    async def setex(self, key, ttl, value):
        self.data[key] = value
        self.expiry[key] = ttl
        return True

    async def exists(self, key):
        return int(key in self.data)

    async def delete(self, key):
        return int(self.data.pop(key, None) is not None)

    async def scan_iter(self, match="*"):
        for key in list(self.data):
            if fnmatch.fnmatch(key, match):
                yield key


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def user_id() -> str:
    """Generate a test user ID."""
    return f"usr_{uuid4().hex}"


@pytest.fixture
def adapter() -> object:
    """Opaque adapter handle passed through to the renderer."""
    return object()


@pytest.fixture
def renderer() -> RecordingRenderer:
    """Create a recording renderer."""
    return RecordingRenderer()


@pytest_asyncio.fixture
async def brain(user_id) -> MemoryBrain:
    """Create a memory brain with one user and an open conversation."""
    brain = MemoryBrain("test-bot")
    await brain.add_user(user_id)
    await brain.add_conversation(user_id)
    return brain


@pytest.fixture
def fake_redis() -> FakeRedis:
    """Create an in-process redis double."""
    return FakeRedis()


@pytest.fixture
def make_candidate():
    """Factory for candidate entities."""

    def _make(dimension, text="", start=0, end=None, value=None):
        return CandidateEntity(
            dimension=dimension,
            text=text,
            start=start,
            end=start + len(text) if end is None else end,
            values=({"type": "string", "value": text if value is None else value},),
        )

    return _make


@pytest.fixture
def paris() -> CandidateEntity:
    """The city candidate extracted from 'I leave from Paris'."""
    return CandidateEntity.from_dict({
        "dimension": "city",
        "text": "Paris",
        "start": 13,
        "end": 18,
        "values": [{"type": "string", "value": "Paris"}],
    })
