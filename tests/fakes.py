"""Fake providers and record builders shared by the tests. No network calls."""

from __future__ import annotations

import asyncio
import hashlib
from collections.abc import Callable

import numpy as np

from docrag.embeddings.base import EmbeddingProvider
from docrag.llm.base import LLMProvider
from docrag.vectorstore.schemas import NewEmbeddingRecord

DIM = 16
MODEL = "fake-embed"

# ---------------------------------------------------------------------------
# Fake providers
# ---------------------------------------------------------------------------


class FakeEmbedder(EmbeddingProvider):
    """Deterministic embeddings: explicit vectors first, hash-based otherwise."""

    def __init__(
        self,
        vectors: dict[str, list[float]] | None = None,
        dim: int = DIM,
        model: str = MODEL,
        available: bool = True,
        fail_on: Callable[[str], Exception | None] | None = None,
    ):
        self.vectors = vectors or {}
        self._dim = dim
        self.model = model
        self.available = available
        self.fail_on = fail_on
        self.calls: list[str] = []

    async def generate_embedding(self, text: str) -> list[float]:
        self.calls.append(text)
        if self.fail_on is not None:
            exc = self.fail_on(text)
            if exc is not None:
                raise exc
        if text in self.vectors:
            return list(self.vectors[text])
        return self._hash_embed(text)

    async def ping(self) -> bool:
        return self.available

    @property
    def dimension(self) -> int:
        return self._dim

    def _hash_embed(self, text: str) -> list[float]:
        h = hashlib.sha256(text.encode()).digest()
        vec = np.array([h[i % len(h)] / 255.0 for i in range(self._dim)], dtype=np.float64)
        vec /= np.linalg.norm(vec)
        return vec.tolist()


class ScriptedLLM(LLMProvider):
    """Replies with a fixed score per document; unknown documents get ``default``.

    A score given as an ``Exception`` instance is raised instead.
    """

    def __init__(
        self,
        scores: dict[str, float | Exception] | None = None,
        default: float = 0.0,
        available: bool = True,
    ):
        self.scores = scores or {}
        self.default = default
        self.available = available
        self.model = "scripted-llm"
        self.evaluated: list[str] = []

    async def generate(self, prompt, *, temperature=None, max_tokens=None, stop=None) -> str:
        return str(self.default)

    async def evaluate_relevance(self, query: str, document: str) -> float:
        self.evaluated.append(document)
        await asyncio.sleep(0)
        score = self.scores.get(document, self.default)
        if isinstance(score, Exception):
            raise score
        return score

    async def ping(self) -> bool:
        return self.available


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def make_record(
    filename: str = "doc.pdf",
    chunk_index: int = 0,
    text: str = "sample text",
    embedding: list[float] | None = None,
    model: str = MODEL,
    token_count: int | None = 3,
) -> NewEmbeddingRecord:
    vec = embedding if embedding is not None else [1.0] + [0.0] * (DIM - 1)
    return NewEmbeddingRecord(
        filename=filename,
        chunk_index=chunk_index,
        chunk_text=text,
        embedding=vec,
        embedding_model=model,
        dimension=len(vec),
        token_count=token_count,
    )
