"""Abstract base class for embedding providers."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

logger = logging.getLogger(__name__)


class EmbeddingProvider(ABC):
    """Interface for text embedding models.

    Subclasses set ``model`` to the identifier recorded next to every stored
    vector, so that collections built with different models can be told apart.
    """

    model: str = "unknown"

    @abstractmethod
    async def generate_embedding(self, text: str) -> list[float]:
        """Embed a single string.

        Args:
            text: Non-empty text to embed.

        Returns:
            Embedding vector.
        """

    async def generate_embeddings(self, texts: list[str]) -> list[list[float]]:
        """Embed several strings one at a time.

        Calls are sequential so the backing service is never flooded; the
        first failure aborts the whole batch.
        """
        embeddings: list[list[float]] = []
        for i, text in enumerate(texts):
            try:
                embeddings.append(await self.generate_embedding(text))
            except Exception:
                logger.error("Embedding failed for text %d of %d", i + 1, len(texts))
                raise
        return embeddings

    @abstractmethod
    async def ping(self) -> bool:
        """Return True if the backing service is reachable. Never raises."""

    @property
    @abstractmethod
    def dimension(self) -> int | None:
        """Return the embedding dimensionality, if known yet."""

    @classmethod
    def provider_name(cls) -> str:
        """Return human-readable provider name."""
        return cls.__name__
