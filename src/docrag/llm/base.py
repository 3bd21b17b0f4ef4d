"""Abstract base class for LLM providers."""

from __future__ import annotations

from abc import ABC, abstractmethod

from docrag.llm.relevance import (
    RELEVANCE_MAX_TOKENS,
    RELEVANCE_STOP,
    RELEVANCE_TEMPERATURE,
    build_relevance_prompt,
    parse_relevance_score,
)


class LLMProvider(ABC):
    """Interface for LLM text generation."""

    model: str = "unknown"

    @abstractmethod
    async def generate(
        self,
        prompt: str,
        *,
        temperature: float | None = None,
        max_tokens: int | None = None,
        stop: list[str] | None = None,
    ) -> str:
        """Generate a completion for ``prompt``.

        Args:
            prompt: The full prompt.
            temperature: Sampling temperature; provider default when None.
            max_tokens: Output length cap; provider default when None.
            stop: Stop sequences.

        Returns:
            Generated text.
        """

    @abstractmethod
    async def ping(self) -> bool:
        """Return True if the backing service is reachable. Never raises."""

    async def evaluate_relevance(self, query: str, document: str) -> float:
        """Score how well ``document`` answers ``query``, in [0, 1]."""
        reply = await self.generate(
            build_relevance_prompt(query, document),
            temperature=RELEVANCE_TEMPERATURE,
            max_tokens=RELEVANCE_MAX_TOKENS,
            stop=RELEVANCE_STOP,
        )
        return parse_relevance_score(reply)

    @classmethod
    def provider_name(cls) -> str:
        """Return human-readable provider name."""
        return cls.__name__
