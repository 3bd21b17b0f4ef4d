"""Data models for vector store operations."""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime

from docrag.errors import DimensionMismatchError


def serialize_embedding(embedding: list[float]) -> str:
    """Encode a vector as JSON text. Round-trips exactly through ``parse_embedding``."""
    return json.dumps([float(v) for v in embedding])


def parse_embedding(raw: str | list[float]) -> list[float]:
    """Decode a stored vector; already-decoded lists pass through."""
    if isinstance(raw, str):
        return [float(v) for v in json.loads(raw)]
    return list(raw)


@dataclass(frozen=True)
class NewEmbeddingRecord:
    """A chunk with its embedding, ready for storage."""

    filename: str
    chunk_index: int
    chunk_text: str
    embedding: list[float]
    embedding_model: str
    dimension: int
    token_count: int | None = None

    def __post_init__(self) -> None:
        if self.dimension != len(self.embedding):
            raise DimensionMismatchError(
                f"Declared dimension {self.dimension} does not match "
                f"embedding length {len(self.embedding)} "
                f"({self.filename}#{self.chunk_index})"
            )


@dataclass(frozen=True)
class EmbeddingRecord:
    """A stored chunk and its embedding."""

    id: int
    filename: str
    chunk_index: int
    chunk_text: str
    embedding: list[float]
    embedding_model: str
    dimension: int
    token_count: int | None
    created_at: datetime
