"""Document loading for PDF and plain text."""

from docrag.documents.loader import SUPPORTED_EXTENSIONS, DocumentLoader
from docrag.documents.schemas import LoadResult

__all__ = ["DocumentLoader", "LoadResult", "SUPPORTED_EXTENSIONS"]
