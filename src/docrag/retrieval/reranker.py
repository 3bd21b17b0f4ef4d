"""LLM reranker for coarse search candidates.

Asks a generation model to judge each (query, document) pair and re-sorts the
candidates by that judgment. A failed judgment costs that one candidate its
place (score 0.0) but never aborts the pass.
"""

from __future__ import annotations

import asyncio
import logging

from docrag.llm.base import LLMProvider
from docrag.retrieval.schemas import RerankResult

logger = logging.getLogger(__name__)

MIN_RELEVANCE = 0.0
DEFAULT_CONCURRENCY = 4


class LLMReranker:
    """Relevance reranker backed by an ``LLMProvider``."""

    def __init__(self, llm: LLMProvider, max_concurrency: int = DEFAULT_CONCURRENCY):
        if max_concurrency < 1:
            raise ValueError(f"max_concurrency must be at least 1, got {max_concurrency}")
        self.llm = llm
        self.max_concurrency = max_concurrency

    async def rerank(self, query: str, documents: list[str]) -> list[RerankResult]:
        """Score every document against ``query`` and sort best-first.

        Args:
            query: The search query.
            documents: Candidate texts; empty strings score ``MIN_RELEVANCE``.

        Returns:
            One ``RerankResult`` per document, sorted by descending score.
            Ties keep the original document order.
        """
        if not documents:
            return []

        semaphore = asyncio.Semaphore(self.max_concurrency)

        async def score(index: int, document: str) -> RerankResult:
            if not document.strip():
                return RerankResult(index=index, relevance_score=MIN_RELEVANCE)
            async with semaphore:
                try:
                    value = await self.llm.evaluate_relevance(query, document)
                except Exception as exc:  # providers raise their own error types
                    logger.warning("Relevance evaluation failed for candidate %d: %s", index, exc)
                    value = MIN_RELEVANCE
            return RerankResult(index=index, relevance_score=value)

        results = await asyncio.gather(*(score(i, d) for i, d in enumerate(documents)))

        # sorted() is stable and gather() preserves input order, so ties stay in index order
        reranked = sorted(results, key=lambda r: r.relevance_score, reverse=True)

        logger.info(
            "Reranked %d candidates (model=%s, concurrency=%d)",
            len(reranked), getattr(self.llm, "model", "unknown"), self.max_concurrency,
        )
        return reranked
