import os

# Settings are read at import time by poemcraft.main
os.environ.setdefault("OPENAI_API_KEY", "sk-test-placeholder")
os.environ.setdefault("STORAGE_BACKEND", "memory")

import pytest
from fastapi.testclient import TestClient

from poemcraft.adapters.registry import LLMResult
from poemcraft.core.config import Settings
from poemcraft.data.poems import MemoryPoemStore


class FakeAdapter:
    """Records every call; returns `text` or raises `exc`."""

    def __init__(self, text: str = "", exc: Exception | None = None):
        self.text = text
        self.exc = exc
        self.calls = []

    async def generate(self, system, prompt, max_tokens, temperature=None):
        self.calls.append(
            {"system": system, "prompt": prompt, "max_tokens": max_tokens, "temperature": temperature}
        )
        if self.exc is not None:
            raise self.exc
        return LLMResult(
            text=self.text, model="fake-model", response_id="resp-1", prompt_tokens=42, completion_tokens=7
        )


@pytest.fixture
def cfg():
    return Settings(OPENAI_API_KEY="sk-test-placeholder")


@pytest.fixture
def store():
    return MemoryPoemStore()


@pytest.fixture
def adapter():
    return FakeAdapter(text="Roses are red,\nSam is too.")


@pytest.fixture
def client(adapter, store):
    from poemcraft.main import app
    from poemcraft.routes.poems import get_adapter, get_poem_store

    app.dependency_overrides[get_adapter] = lambda: adapter
    app.dependency_overrides[get_poem_store] = lambda: store
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
