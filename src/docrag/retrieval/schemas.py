"""Data models for retrieval operations."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any

from docrag.vectorstore.schemas import EmbeddingRecord

DEFAULT_TOP_N = 3
DEFAULT_THRESHOLD = 0.5
DEFAULT_INITIAL_TOP_K = 20


@dataclass
class RetrievalConfig:
    """Configuration for a retrieval operation."""

    top_n: int = DEFAULT_TOP_N
    threshold: float = DEFAULT_THRESHOLD
    initial_top_k: int = DEFAULT_INITIAL_TOP_K

    def __post_init__(self) -> None:
        if self.top_n < 1:
            raise ValueError(f"top_n must be at least 1, got {self.top_n}")
        if self.initial_top_k < 1:
            raise ValueError(f"initial_top_k must be at least 1, got {self.initial_top_k}")
        if not 0.0 <= self.threshold <= 1.0:
            raise ValueError(f"threshold must be within [0, 1], got {self.threshold}")


@dataclass(frozen=True)
class QueryCandidate:
    """A stored record joined with its cosine similarity to the query."""

    record: EmbeddingRecord
    similarity: float


@dataclass(frozen=True)
class RerankResult:
    """LLM relevance score for the candidate at ``index``."""

    index: int
    relevance_score: float


@dataclass(frozen=True)
class ChunkResult:
    """One chunk returned to the caller."""

    text: str
    filename: str
    chunk_index: int
    similarity: float
    relevance_score: float
    token_count: int = 0


@dataclass(frozen=True)
class RetrievalMetadata:
    """Query-level counters, present even when no chunk qualifies."""

    total_chunks: int
    candidates_evaluated: int
    results_returned: int
    threshold: float


@dataclass
class RetrievalResult:
    """Result of a retrieval operation."""

    query: str
    results: list[ChunkResult] = field(default_factory=list)
    metadata: RetrievalMetadata | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "query": self.query,
            "results": [asdict(r) for r in self.results],
            "metadata": asdict(self.metadata) if self.metadata else None,
        }
