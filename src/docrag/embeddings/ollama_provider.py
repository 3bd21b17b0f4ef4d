"""Ollama embedding provider.

Any embedding model pulled into the local Ollama server works
(``nomic-embed-text`` by default, 768 dimensions). The dimension is not
configured; it is read off the first vector the server returns.
"""

from __future__ import annotations

import logging
from numbers import Real

from docrag.embeddings.base import EmbeddingProvider
from docrag.errors import ServiceError
from docrag.ollama import OllamaTransport

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "nomic-embed-text"


class OllamaEmbeddingProvider(EmbeddingProvider):
    """Embed text via a local Ollama server."""

    def __init__(
        self,
        transport: OllamaTransport | None = None,
        model: str = DEFAULT_MODEL,
    ):
        self.transport = transport or OllamaTransport()
        self.model = model
        self._dimension: int | None = None

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def generate_embedding(self, text: str) -> list[float]:
        if not text or not text.strip():
            raise ValueError("Cannot embed empty text")

        data = await self.transport.post_json(
            "/api/embeddings",
            {"model": self.model, "prompt": text},
        )
        embedding = data.get("embedding")
        if not isinstance(embedding, list) or not embedding:
            raise ServiceError("Invalid response from Ollama: missing or invalid embedding array")
        if not all(isinstance(v, Real) and not isinstance(v, bool) for v in embedding):
            raise ServiceError("Invalid response from Ollama: embedding contains non-numeric values")

        if self._dimension is None:
            self._dimension = len(embedding)
            logger.info("Embedding model %s reports dimension %d", self.model, self._dimension)

        return [float(v) for v in embedding]

    async def ping(self) -> bool:
        return await self.transport.ping()

    @property
    def dimension(self) -> int | None:
        return self._dimension
