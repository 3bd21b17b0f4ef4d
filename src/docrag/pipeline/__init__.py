"""Document ingestion pipeline."""

from docrag.pipeline.ingest import IngestPipeline
from docrag.pipeline.schemas import BatchIngestResult, IngestResult

__all__ = ["BatchIngestResult", "IngestPipeline", "IngestResult"]
