"""Retrieval: cosine pre-filter and LLM reranking."""

from docrag.retrieval.formatting import format_results
from docrag.retrieval.reranker import LLMReranker
from docrag.retrieval.retriever import Retriever
from docrag.retrieval.schemas import (
    ChunkResult,
    RerankResult,
    RetrievalConfig,
    RetrievalMetadata,
    RetrievalResult,
)
from docrag.retrieval.similarity import cosine_similarity

__all__ = [
    "ChunkResult",
    "LLMReranker",
    "RerankResult",
    "RetrievalConfig",
    "RetrievalMetadata",
    "RetrievalResult",
    "Retriever",
    "cosine_similarity",
    "format_results",
]
