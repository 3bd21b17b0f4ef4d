"""Abstract base class for all chunkers."""

from __future__ import annotations

from abc import ABC, abstractmethod

from docrag.chunking.schemas import Chunk


class BaseChunker(ABC):
    """Interface for document chunking strategies."""

    @abstractmethod
    def chunk(self, text: str, source_filename: str | None = None) -> list[Chunk]:
        """Split text into chunks.

        Args:
            text: Full document text.
            source_filename: Optional document name to stamp on each chunk.

        Returns:
            List of ``Chunk`` objects, ordered by ``chunk_index``.
        """

    @classmethod
    def strategy_name(cls) -> str:
        """Return human-readable strategy name."""
        return cls.__name__
