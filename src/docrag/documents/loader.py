"""Document loader — PDF, TXT and Markdown.

Supports both filesystem paths and in-memory bytes.
"""

from __future__ import annotations

import io
import logging
from pathlib import Path

import pdfplumber

from docrag.documents.schemas import LoadResult

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = {".pdf", ".txt", ".md"}


class DocumentLoader:
    """Load documents into a ``LoadResult``."""

    def __init__(self, supported_extensions: set[str] | None = None):
        self.supported_extensions = {
            e.lower() for e in (supported_extensions or SUPPORTED_EXTENSIONS)
        } & SUPPORTED_EXTENSIONS

    def supports(self, path: str | Path) -> bool:
        return Path(path).suffix.lower() in self.supported_extensions

    def load_file(self, path: str | Path) -> LoadResult:
        """Read ``path`` and load it by extension."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        result = self.load_bytes(path.read_bytes(), path.name)
        result.source_path = str(path)
        return result

    def load_bytes(self, data: bytes, filename: str) -> LoadResult:
        """Load raw bytes; ``filename`` only selects the format and labels the result."""
        ext = Path(filename).suffix.lower()
        if ext not in self.supported_extensions:
            raise ValueError(
                f"Unsupported format '{ext}'. Supported: {sorted(self.supported_extensions)}"
            )

        result = self._load_pdf(data) if ext == ".pdf" else self._load_text(data)
        result.source_path = filename
        result.format = ext.lstrip(".")
        result.char_count = len(result.text)
        logger.debug("Loaded %s: %d chars, %s pages", filename, result.char_count, result.page_count)
        return result

    # ------------------------------------------------------------------
    # Format-specific loaders
    # ------------------------------------------------------------------

    @staticmethod
    def _load_text(data: bytes) -> LoadResult:
        for encoding in ("utf-8", "latin-1"):
            try:
                return LoadResult(text=data.decode(encoding), page_count=1)
            except UnicodeDecodeError:
                continue
        return LoadResult(
            text=data.decode("utf-8", errors="replace"),
            page_count=1,
            warnings=["Undecodable bytes replaced while reading text"],
        )

    @staticmethod
    def _load_pdf(data: bytes) -> LoadResult:
        warnings: list[str] = []
        try:
            with pdfplumber.open(io.BytesIO(data)) as pdf:
                page_texts = [page.extract_text() or "" for page in pdf.pages]
        except Exception as exc:  # pdfplumber surfaces pdfminer errors of several types
            raise ValueError(f"Failed to parse PDF: {exc}") from exc

        text = "\n\n".join(page_texts)
        if not text.strip():
            warnings.append("PDF has no extractable text; scanned pages need OCR first")

        return LoadResult(text=text, page_count=len(page_texts), warnings=warnings)
