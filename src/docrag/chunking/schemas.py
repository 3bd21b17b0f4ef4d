"""Data models for chunks."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Chunk:
    """A token-bounded, sentence-aligned span of a source document."""

    text: str
    chunk_index: int = 0
    token_count: int = 0
    source_filename: str | None = None
