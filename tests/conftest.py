"""Shared fixtures for tests: fake providers and stores, no network calls."""

from __future__ import annotations

from pathlib import Path

import pytest

from docrag.vectorstore.memory_store import InMemoryStore
from docrag.vectorstore.sqlite_store import SQLiteStore
from fakes import FakeEmbedder

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def embedder() -> FakeEmbedder:
    return FakeEmbedder()


@pytest.fixture
def memory_store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def sqlite_store(tmp_path: Path) -> SQLiteStore:
    return SQLiteStore(url=f"sqlite:///{tmp_path / 'embeddings.db'}")


@pytest.fixture(params=["memory", "sqlite"])
def store(request, tmp_path: Path):
    """Each vector store backend in turn."""
    if request.param == "memory":
        return InMemoryStore()
    return SQLiteStore(url=f"sqlite:///{tmp_path / 'embeddings.db'}")


@pytest.fixture
def sample_text() -> str:
    return (
        "Photosynthesis converts light energy into chemical energy. "
        "It takes place mainly in the chloroplasts of plant cells. "
        "Chlorophyll absorbs red and blue light most strongly! "
        "Why do leaves look green? "
        "Green light is reflected rather than absorbed. "
        "The Calvin cycle fixes carbon dioxide into sugars. "
        "Oxygen is released as a by-product of splitting water."
    )
