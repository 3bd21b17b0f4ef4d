"""Retriever: embed query, scan the store, rerank, threshold.

Two-phase funnel: cosine similarity over every stored chunk picks a small,
high-recall candidate set (``initial_top_k``); an LLM then judges each
candidate and only its judgment decides inclusion and final order.
"""

from __future__ import annotations

import asyncio
import logging

from docrag.embeddings.base import EmbeddingProvider
from docrag.errors import (
    DimensionMismatchError,
    EmptyIndexError,
    MixedEmbeddingModelsError,
    ServiceUnavailableError,
)
from docrag.retrieval.reranker import LLMReranker
from docrag.retrieval.schemas import (
    ChunkResult,
    QueryCandidate,
    RetrievalConfig,
    RetrievalMetadata,
    RetrievalResult,
)
from docrag.retrieval.similarity import cosine_similarity
from docrag.vectorstore.base import VectorStore
from docrag.vectorstore.schemas import EmbeddingRecord

logger = logging.getLogger(__name__)


class Retriever:
    """Orchestrates embedding → full scan → cosine ranking → LLM rerank."""

    def __init__(
        self,
        embedding_provider: EmbeddingProvider,
        vector_store: VectorStore,
        reranker: LLMReranker,
        check_models: bool = True,
    ):
        self.embedding_provider = embedding_provider
        self.vector_store = vector_store
        self.reranker = reranker
        self.check_models = check_models

    async def query(
        self,
        query: str,
        config: RetrievalConfig | None = None,
    ) -> RetrievalResult:
        """Run a full retrieval.

        Args:
            query: The search query.
            config: ``top_n``, ``threshold`` and ``initial_top_k``.

        Returns:
            A ``RetrievalResult``; an empty ``results`` list means nothing
            cleared the threshold.

        Raises:
            ServiceUnavailableError: The model backend is unreachable.
            ServiceTimeoutError: The query embedding timed out.
            ServiceError: The query embedding call failed.
            EmptyIndexError: The store holds no embeddings.
            DimensionMismatchError: Stored vectors do not match the query vector.
            MixedEmbeddingModelsError: Stored vectors came from another model.
        """
        cfg = config or RetrievalConfig()
        logger.info(
            "Query %r (top_n=%d, threshold=%.2f, initial_top_k=%d)",
            query, cfg.top_n, cfg.threshold, cfg.initial_top_k,
        )

        # Step 1: Fail fast if the backend is down
        if not await self.is_available():
            raise ServiceUnavailableError(
                "Model service is not available. Please ensure Ollama is running."
            )

        # Step 2: Embed the query
        query_embedding = await self.embedding_provider.generate_embedding(query)

        # Step 3: Load the whole corpus
        records = await asyncio.to_thread(self.vector_store.get_all_embeddings)
        if not records:
            raise EmptyIndexError(
                "No embeddings found in the store. Ingest documents before querying."
            )
        self._check_homogeneous(records, len(query_embedding))

        # Step 4: Coarse ranking; sorted() is stable so ties keep storage order
        scored = [
            QueryCandidate(record=r, similarity=cosine_similarity(query_embedding, r.embedding))
            for r in records
        ]
        scored = sorted(scored, key=lambda c: c.similarity, reverse=True)
        candidates = scored[: min(cfg.initial_top_k, len(scored))]
        logger.info("Selected %d of %d chunks for reranking", len(candidates), len(records))

        # Step 5: Fine reranking
        rerank_results = await self.reranker.rerank(
            query, [c.record.chunk_text or "" for c in candidates],
        )

        # Step 6: Threshold, then truncate
        results: list[ChunkResult] = []
        for rr in rerank_results:
            if rr.relevance_score < cfg.threshold:
                continue
            candidate = candidates[rr.index]
            results.append(ChunkResult(
                text=candidate.record.chunk_text or "",
                filename=candidate.record.filename,
                chunk_index=candidate.record.chunk_index,
                similarity=candidate.similarity,
                relevance_score=rr.relevance_score,
                token_count=candidate.record.token_count or 0,
            ))
            if len(results) >= cfg.top_n:
                break

        logger.info("Returning %d results", len(results))

        return RetrievalResult(
            query=query,
            results=results,
            metadata=RetrievalMetadata(
                total_chunks=len(records),
                candidates_evaluated=len(candidates),
                results_returned=len(results),
                threshold=cfg.threshold,
            ),
        )

    def query_sync(self, query: str, config: RetrievalConfig | None = None) -> RetrievalResult:
        """Blocking wrapper around ``query`` for synchronous callers."""
        return asyncio.run(self.query(query, config))

    async def is_available(self) -> bool:
        """Return True if every model backend answers its liveness probe."""
        probes = [self.embedding_provider.ping()]
        llm = getattr(self.reranker, "llm", None)
        if llm is not None and llm is not self.embedding_provider:
            probes.append(llm.ping())
        return all(await asyncio.gather(*probes))

    async def get_embedding_count(self) -> int:
        """Return the number of chunks in the store."""
        return await asyncio.to_thread(self.vector_store.get_embedding_count)

    def _check_homogeneous(self, records: list[EmbeddingRecord], dimension: int) -> None:
        """Refuse to compare vectors from different embedding spaces."""
        bad_dims = sorted({r.dimension for r in records if r.dimension != dimension})
        if bad_dims:
            raise DimensionMismatchError(
                f"Query embedding has dimension {dimension} but the store holds "
                f"vectors of dimension {bad_dims}; re-index with a single model"
            )

        if not self.check_models:
            return
        expected = self.embedding_provider.model
        other_models = sorted({r.embedding_model for r in records if r.embedding_model != expected})
        if other_models:
            raise MixedEmbeddingModelsError(
                f"Store holds embeddings from {other_models} but queries use "
                f"'{expected}'; re-index or disable the model check"
            )
