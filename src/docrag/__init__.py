"""docrag: local document retrieval with cosine pre-filtering and LLM reranking."""

__version__ = "0.1.0"
