"""Shared test fixtures."""

from typing import Any, Callable

import pytest

from creative_assistant.core.config import AssistantConfig
from creative_assistant.core.encoding import encode_bytes
from creative_assistant.session.narration import Voice
from creative_assistant.session.storage import MemoryStore

from helpers import FakeAIService, FakeSpeechEngine


@pytest.fixture
def fake_service() -> FakeAIService:
    """Provide a fresh fake AI service."""
    return FakeAIService()


@pytest.fixture
def speech_engine() -> FakeSpeechEngine:
    """Provide a fake speech engine with an English and a Thai voice."""
    return FakeSpeechEngine([Voice("Samantha", "en-US"), Voice("Kanya", "th-TH")])


@pytest.fixture
def store() -> MemoryStore:
    """Provide an empty in-memory store."""
    return MemoryStore()


@pytest.fixture
def config(tmp_path) -> AssistantConfig:
    """Provide a test configuration writing into a temporary directory."""
    return AssistantConfig(storage_dir=tmp_path / "state")


@pytest.fixture
def make_media() -> Callable[..., Any]:
    """Build an EncodedMedia from raw bytes."""
    def _make(data: bytes = b"payload", mime_type: str = "image/png", name: str = "file"):
        return encode_bytes(data, mime_type, name)
    return _make
