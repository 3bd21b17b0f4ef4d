"""In-process vector store for tests and dry runs. Nothing is persisted."""

from __future__ import annotations

import logging
import threading
from datetime import datetime, timezone

from docrag.errors import DatabaseError
from docrag.vectorstore.base import VectorStore
from docrag.vectorstore.schemas import EmbeddingRecord, NewEmbeddingRecord

logger = logging.getLogger(__name__)


class InMemoryStore(VectorStore):
    """List-backed store with the same contract as ``SQLiteStore``."""

    def __init__(self):
        self._records: list[EmbeddingRecord] = []
        self._next_id = 1
        self._lock = threading.Lock()

    def save_embeddings(self, records: list[NewEmbeddingRecord]) -> int:
        if not records:
            return 0

        with self._lock:
            staged = self._stage(self._records, records, "save_embeddings")
            self._records.extend(staged)
            self._next_id += len(staged)

        logger.info("InMemoryStore saved %d embeddings (total: %d)", len(staged), len(self._records))
        return len(staged)

    def replace_embeddings(self, filename: str, records: list[NewEmbeddingRecord]) -> tuple[int, int]:
        with self._lock:
            kept = [r for r in self._records if r.filename != filename]
            staged = self._stage(kept, records, "replace_embeddings")
            deleted = len(self._records) - len(kept)
            self._records = kept + staged
            self._next_id += len(staged)
        return deleted, len(staged)

    def get_all_embeddings(self) -> list[EmbeddingRecord]:
        with self._lock:
            return sorted(self._records, key=lambda r: (r.filename, r.chunk_index, r.id))

    def get_embeddings_by_filename(self, filename: str) -> list[EmbeddingRecord]:
        with self._lock:
            matches = [r for r in self._records if r.filename == filename]
        return sorted(matches, key=lambda r: (r.chunk_index, r.id))

    def clear_all_embeddings(self) -> int:
        with self._lock:
            deleted = len(self._records)
            self._records.clear()
        return deleted

    def delete_embeddings(self, filename: str) -> int:
        with self._lock:
            before = len(self._records)
            self._records = [r for r in self._records if r.filename != filename]
            return before - len(self._records)

    def get_embedding_count(self, filename: str | None = None) -> int:
        with self._lock:
            if filename is None:
                return len(self._records)
            return sum(1 for r in self._records if r.filename == filename)

    def _stage(
        self,
        existing: list[EmbeddingRecord],
        records: list[NewEmbeddingRecord],
        operation: str,
    ) -> list[EmbeddingRecord]:
        """Build stored records without touching state; raises on duplicate chunks."""
        taken = {(r.filename, r.chunk_index) for r in existing}
        staged: list[EmbeddingRecord] = []
        now = datetime.now(timezone.utc)
        for offset, r in enumerate(records):
            key = (r.filename, r.chunk_index)
            if key in taken:
                raise DatabaseError(f"Duplicate chunk {r.filename}#{r.chunk_index}", operation)
            taken.add(key)
            staged.append(EmbeddingRecord(
                id=self._next_id + offset,
                filename=r.filename,
                chunk_index=r.chunk_index,
                chunk_text=r.chunk_text,
                embedding=list(r.embedding),
                embedding_model=r.embedding_model,
                dimension=r.dimension,
                token_count=r.token_count,
                created_at=now,
            ))
        return staged
