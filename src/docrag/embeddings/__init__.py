"""Embedding providers."""

from docrag.embeddings.base import EmbeddingProvider
from docrag.embeddings.ollama_provider import OllamaEmbeddingProvider

__all__ = ["EmbeddingProvider", "OllamaEmbeddingProvider"]
