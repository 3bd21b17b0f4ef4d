"""Sentence-aligned document chunking."""

from docrag.chunking.base import BaseChunker
from docrag.chunking.schemas import Chunk
from docrag.chunking.sentence_chunker import SentenceChunker, chunk_text, split_sentences
from docrag.chunking.tokens import count_tokens

__all__ = [
    "BaseChunker",
    "Chunk",
    "SentenceChunker",
    "chunk_text",
    "count_tokens",
    "split_sentences",
]
