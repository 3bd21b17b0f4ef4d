"""Exception hierarchy shared by every layer of docrag."""

from __future__ import annotations


class RAGError(Exception):
    """Base class for all docrag errors."""


class ServiceUnavailableError(RAGError):
    """The model-serving backend did not answer the liveness probe."""


class ServiceTimeoutError(RAGError, TimeoutError):
    """A single call to the model-serving backend exceeded its deadline."""


class ServiceError(RAGError):
    """The model-serving backend returned an error or a malformed body."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class EmptyIndexError(RAGError):
    """A query was issued against a store that holds no embeddings."""


class DimensionMismatchError(RAGError, ValueError):
    """Two vectors (or a vector and its declared dimension) disagree in length."""


class MixedEmbeddingModelsError(RAGError):
    """Stored embeddings were produced by a different model than the query."""


class DatabaseError(RAGError):
    """A vector store operation failed at the storage backend."""

    def __init__(self, message: str, operation: str):
        super().__init__(f"{message} (operation={operation})")
        self.operation = operation
