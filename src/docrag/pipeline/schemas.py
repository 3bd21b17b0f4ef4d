"""Data models for the ingestion pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class IngestResult:
    """Result of ingesting one document."""

    source: str
    chunks_created: int = 0
    chunks_embedded: int = 0
    chunks_stored: int = 0
    chunks_replaced: int = 0
    status: str = "ok"  # ok | empty | error
    error: str | None = None
    warnings: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.status != "error"


@dataclass
class BatchIngestResult:
    """Result of ingesting a folder, one entry per document."""

    folder: str
    results: list[IngestResult] = field(default_factory=list)

    @property
    def total_embeddings(self) -> int:
        return sum(r.chunks_stored for r in self.results)

    @property
    def failed(self) -> list[IngestResult]:
        return [r for r in self.results if not r.ok]
