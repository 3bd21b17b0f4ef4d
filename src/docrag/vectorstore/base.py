"""Abstract base class for vector stores."""

from __future__ import annotations

from abc import ABC, abstractmethod

from docrag.vectorstore.schemas import EmbeddingRecord, NewEmbeddingRecord


class VectorStore(ABC):
    """Interface for embedding storage backends.

    There is no index beyond ``filename``: retrieval is a full scan, which is
    fine for corpora of a few thousand chunks.
    """

    @abstractmethod
    def save_embeddings(self, records: list[NewEmbeddingRecord]) -> int:
        """Insert records in one atomic transaction.

        Args:
            records: Records to persist. Empty input is a no-op.

        Returns:
            Number of records inserted.
        """

    @abstractmethod
    def replace_embeddings(self, filename: str, records: list[NewEmbeddingRecord]) -> tuple[int, int]:
        """Delete ``filename``'s records and insert ``records`` in one transaction.

        Returns:
            ``(deleted, inserted)`` counts.
        """

    @abstractmethod
    def get_all_embeddings(self) -> list[EmbeddingRecord]:
        """Return every record, ordered by filename then chunk index."""

    @abstractmethod
    def get_embeddings_by_filename(self, filename: str) -> list[EmbeddingRecord]:
        """Return one document's records, ordered by chunk index."""

    @abstractmethod
    def clear_all_embeddings(self) -> int:
        """Delete every record.

        Returns:
            Number of records deleted.
        """

    @abstractmethod
    def delete_embeddings(self, filename: str) -> int:
        """Delete one document's records.

        Returns:
            Number of records deleted.
        """

    @abstractmethod
    def get_embedding_count(self, filename: str | None = None) -> int:
        """Return the number of records, optionally for one document."""

    def list_filenames(self) -> list[str]:
        """Return the distinct filenames in the store, sorted."""
        return sorted({r.filename for r in self.get_all_embeddings()})

    @classmethod
    def store_name(cls) -> str:
        """Return human-readable store name."""
        return cls.__name__
