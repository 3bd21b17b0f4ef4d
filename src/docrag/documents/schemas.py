"""Data models for document loading."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class LoadResult:
    """Text extracted from one document, ready for chunking.

    ``page_count`` is the PDF page count and 1 for plain text. ``warnings``
    collects problems that did not stop the load, such as a PDF without a
    text layer.
    """

    text: str
    source_path: str | None = None
    format: str = ""  # pdf | txt | md
    page_count: int | None = None
    char_count: int = 0
    warnings: list[str] = field(default_factory=list)
