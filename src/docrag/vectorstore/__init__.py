"""Vector store backends: SQLite (persistent) and in-memory."""

from docrag.vectorstore.base import VectorStore
from docrag.vectorstore.factory import available_stores, get_vector_store
from docrag.vectorstore.schemas import (
    EmbeddingRecord,
    NewEmbeddingRecord,
    parse_embedding,
    serialize_embedding,
)

__all__ = [
    "EmbeddingRecord",
    "NewEmbeddingRecord",
    "VectorStore",
    "available_stores",
    "get_vector_store",
    "parse_embedding",
    "serialize_embedding",
]
