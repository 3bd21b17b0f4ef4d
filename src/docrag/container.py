"""Composition root: build wired components from ``Settings``.

Nothing here touches the network; the Ollama transport only connects when a
provider makes its first call.
"""

from __future__ import annotations

from docrag.chunking.sentence_chunker import SentenceChunker
from docrag.config import Settings
from docrag.documents.loader import DocumentLoader
from docrag.embeddings.ollama_provider import OllamaEmbeddingProvider
from docrag.llm.ollama_provider import OllamaLLMProvider
from docrag.ollama import OllamaTransport
from docrag.pipeline.ingest import IngestPipeline
from docrag.retrieval.reranker import LLMReranker
from docrag.retrieval.retriever import Retriever
from docrag.retrieval.schemas import RetrievalConfig
from docrag.vectorstore.base import VectorStore
from docrag.vectorstore.factory import get_vector_store


def build_transport(settings: Settings) -> OllamaTransport:
    return OllamaTransport(
        base_url=settings.ollama.base_url,
        timeout=settings.ollama.timeout,
        ping_timeout=settings.ollama.ping_timeout,
    )


def build_vector_store(settings: Settings) -> VectorStore:
    if settings.vectorstore.backend == "sqlite":
        return get_vector_store("sqlite", url=settings.vectorstore.url)
    return get_vector_store(settings.vectorstore.backend)


def build_retriever(
    settings: Settings,
    vector_store: VectorStore | None = None,
) -> Retriever:
    transport = build_transport(settings)
    llm = OllamaLLMProvider(
        transport=transport,
        model=settings.llm.model,
        temperature=settings.llm.temperature,
        max_tokens=settings.llm.max_tokens,
    )
    return Retriever(
        embedding_provider=OllamaEmbeddingProvider(transport=transport, model=settings.embedding.model),
        vector_store=vector_store or build_vector_store(settings),
        reranker=LLMReranker(llm, max_concurrency=settings.retrieval.rerank_concurrency),
        check_models=settings.retrieval.check_models,
    )


def build_ingest_pipeline(
    settings: Settings,
    vector_store: VectorStore | None = None,
) -> IngestPipeline:
    return IngestPipeline(
        embedding_provider=OllamaEmbeddingProvider(
            transport=build_transport(settings), model=settings.embedding.model,
        ),
        vector_store=vector_store or build_vector_store(settings),
        chunker=SentenceChunker(
            max_tokens=settings.chunking.max_tokens,
            overlap=settings.chunking.overlap,
        ),
        loader=DocumentLoader(set(settings.ingestion.supported_formats)),
    )


def default_retrieval_config(settings: Settings, **overrides) -> RetrievalConfig:
    """``RetrievalConfig`` from settings; ``None`` overrides are ignored."""
    values = {
        "top_n": settings.retrieval.top_n,
        "threshold": settings.retrieval.threshold,
        "initial_top_k": settings.retrieval.initial_top_k,
    }
    values.update({k: v for k, v in overrides.items() if v is not None})
    return RetrievalConfig(**values)
