"""Ingestion pipeline — file → load → chunk → embed → store.

This is the main entry point for adding documents to the vector store.
Documents are processed one at a time, so two writes for the same filename
never interleave.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from docrag.chunking.base import BaseChunker
from docrag.chunking.sentence_chunker import SentenceChunker
from docrag.documents.loader import DocumentLoader
from docrag.embeddings.base import EmbeddingProvider
from docrag.errors import DimensionMismatchError, ServiceUnavailableError
from docrag.pipeline.schemas import BatchIngestResult, IngestResult
from docrag.vectorstore.base import VectorStore
from docrag.vectorstore.schemas import NewEmbeddingRecord

logger = logging.getLogger(__name__)


class IngestPipeline:
    """Orchestrates document ingestion: load → chunk → embed → store."""

    def __init__(
        self,
        embedding_provider: EmbeddingProvider,
        vector_store: VectorStore,
        chunker: BaseChunker | None = None,
        loader: DocumentLoader | None = None,
    ):
        self.embedding_provider = embedding_provider
        self.vector_store = vector_store
        self.chunker = chunker or SentenceChunker()
        self.loader = loader or DocumentLoader()

    async def ingest_text(
        self,
        text: str,
        filename: str,
        replace: bool = True,
    ) -> IngestResult:
        """Chunk, embed and store raw text under ``filename``.

        Args:
            text: Document text.
            filename: Name the chunks are stored under.
            replace: Delete any existing chunks for ``filename`` first.

        Returns:
            An ``IngestResult`` with counts.
        """
        chunks = self.chunker.chunk(text, source_filename=filename)
        if not chunks:
            return IngestResult(
                source=filename,
                status="empty",
                warnings=["No text content found"],
            )

        # Step 1: Embed (sequential; any failure fails the document)
        embeddings = await self.embedding_provider.generate_embeddings([c.text for c in chunks])

        # Step 2: Every vector must have the provider's dimension
        expected = self.embedding_provider.dimension
        if expected is not None:
            for chunk, embedding in zip(chunks, embeddings, strict=True):
                if len(embedding) != expected:
                    raise DimensionMismatchError(
                        f"Chunk {chunk.chunk_index} of {filename} has dimension "
                        f"{len(embedding)}, expected {expected}"
                    )

        # Step 3: Store in a single transaction
        records = [
            NewEmbeddingRecord(
                filename=filename,
                chunk_index=chunk.chunk_index,
                chunk_text=chunk.text,
                embedding=embedding,
                embedding_model=self.embedding_provider.model,
                dimension=len(embedding),
                token_count=chunk.token_count,
            )
            for chunk, embedding in zip(chunks, embeddings, strict=True)
        ]

        replaced = 0
        if replace:
            replaced, stored = await asyncio.to_thread(
                self.vector_store.replace_embeddings, filename, records,
            )
        else:
            stored = await asyncio.to_thread(self.vector_store.save_embeddings, records)

        logger.info(
            "Ingested %s: %d chunks → %d embedded → %d stored (%d replaced)",
            filename, len(chunks), len(embeddings), stored, replaced,
        )

        return IngestResult(
            source=filename,
            chunks_created=len(chunks),
            chunks_embedded=len(embeddings),
            chunks_stored=stored,
            chunks_replaced=replaced,
        )

    async def ingest_file(self, path: str | Path, replace: bool = True) -> IngestResult:
        """Load a single file and ingest it under its base name."""
        path = Path(path)
        loaded = await asyncio.to_thread(self.loader.load_file, path)

        result = await self.ingest_text(loaded.text, filename=path.name, replace=replace)
        result.source = str(path)
        result.warnings = loaded.warnings + result.warnings
        return result

    async def ingest_directory(
        self,
        folder: str | Path,
        replace: bool = True,
    ) -> BatchIngestResult:
        """Ingest every supported file in ``folder`` (non-recursive).

        A failing document is recorded with ``status="error"``; the remaining
        documents are still processed.

        Raises:
            FileNotFoundError: ``folder`` does not exist.
            ServiceUnavailableError: The embedding backend is unreachable.
        """
        folder = Path(folder)
        if not folder.is_dir():
            raise FileNotFoundError(f"Folder not found: {folder}")

        if not await self.embedding_provider.ping():
            raise ServiceUnavailableError(
                "Embedding service is not available. Please ensure Ollama is running."
            )

        files = sorted(p for p in folder.iterdir() if p.is_file() and self.loader.supports(p))
        batch = BatchIngestResult(folder=str(folder))
        if not files:
            logger.warning("No supported documents found in %s", folder)
            return batch

        logger.info("Found %d document(s) in %s", len(files), folder)

        for path in files:
            try:
                result = await self.ingest_file(path, replace=replace)
            except Exception as exc:  # a bad document must not stop the batch
                logger.warning("Error processing %s: %s", path.name, exc)
                result = IngestResult(source=str(path), status="error", error=str(exc))
            batch.results.append(result)

        logger.info(
            "Processed %d document(s), created %d embeddings, %d failed",
            len(batch.results), batch.total_embeddings, len(batch.failed),
        )
        return batch

    def ingest_directory_sync(self, folder: str | Path, replace: bool = True) -> BatchIngestResult:
        """Blocking wrapper around ``ingest_directory``."""
        return asyncio.run(self.ingest_directory(folder, replace=replace))

    def ingest_file_sync(self, path: str | Path, replace: bool = True) -> IngestResult:
        """Blocking wrapper around ``ingest_file``."""
        return asyncio.run(self.ingest_file(path, replace=replace))
