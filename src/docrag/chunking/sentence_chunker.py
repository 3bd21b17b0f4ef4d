"""Sentence-aligned, token-bounded chunker with sentence-level overlap.

Sentences are found with a punctuation heuristic (break after ``.``, ``!`` or
``?`` followed by whitespace). Abbreviations and decimals will mis-split;
that is accepted.
"""

from __future__ import annotations

import logging
import re

from docrag.chunking.base import BaseChunker
from docrag.chunking.schemas import Chunk
from docrag.chunking.tokens import count_tokens

logger = logging.getLogger(__name__)

MAX_TOKENS = 512
OVERLAP_TOKENS = 50

_SENTENCE_BOUNDARY = re.compile(r"(?<=[.!?])\s+")


def split_sentences(text: str) -> list[str]:
    """Split text into stripped, non-empty sentences."""
    return [s.strip() for s in _SENTENCE_BOUNDARY.split(text) if s.strip()]


class SentenceChunker(BaseChunker):
    """Greedy sentence packer with a soft token ceiling.

    A chunk can exceed ``max_tokens`` when it is a single oversized sentence,
    or when the carried-over tail plus the next sentence does not fit.
    """

    def __init__(self, max_tokens: int = MAX_TOKENS, overlap: int = OVERLAP_TOKENS):
        if max_tokens <= 0:
            raise ValueError(f"max_tokens must be positive, got {max_tokens}")
        if overlap < 0:
            raise ValueError(f"overlap must be non-negative, got {overlap}")
        self.max_tokens = max_tokens
        self.overlap = overlap

    def chunk(self, text: str, source_filename: str | None = None) -> list[Chunk]:
        if not text or not text.strip():
            return []

        sentences = [(s, count_tokens(s)) for s in split_sentences(text)]
        chunks: list[Chunk] = []
        current: list[tuple[str, int]] = []
        current_tokens = 0

        for sentence, tokens in sentences:
            if current and current_tokens + tokens > self.max_tokens:
                chunks.append(self._make_chunk(current, current_tokens, len(chunks), source_filename))
                current = self._overlap_tail(current)
                current_tokens = sum(t for _, t in current)

            current.append((sentence, tokens))
            current_tokens += tokens

        if current:
            chunks.append(self._make_chunk(current, current_tokens, len(chunks), source_filename))

        logger.debug(
            "SentenceChunker produced %d chunks from %d sentences (max_tokens=%d, overlap=%d)",
            len(chunks), len(sentences), self.max_tokens, self.overlap,
        )
        return chunks

    def _overlap_tail(self, sentences: list[tuple[str, int]]) -> list[tuple[str, int]]:
        """Longest suffix of ``sentences`` whose token total fits in ``overlap``."""
        tail: list[tuple[str, int]] = []
        tail_tokens = 0
        for sentence, tokens in reversed(sentences):
            if tail_tokens + tokens > self.overlap:
                break
            tail.insert(0, (sentence, tokens))
            tail_tokens += tokens
        return tail

    @staticmethod
    def _make_chunk(
        sentences: list[tuple[str, int]],
        token_count: int,
        index: int,
        source_filename: str | None,
    ) -> Chunk:
        return Chunk(
            text=" ".join(s for s, _ in sentences),
            chunk_index=index,
            token_count=token_count,
            source_filename=source_filename,
        )


def chunk_text(
    text: str,
    max_tokens: int = MAX_TOKENS,
    overlap: int = OVERLAP_TOKENS,
) -> list[Chunk]:
    """Chunk ``text`` with a throwaway ``SentenceChunker``."""
    return SentenceChunker(max_tokens=max_tokens, overlap=overlap).chunk(text)
