"""Markdown rendering of retrieval results for chat tools and the CLI."""

from __future__ import annotations

import json

from docrag.retrieval.schemas import RetrievalResult


def format_results(result: RetrievalResult) -> str:
    """Render a ``RetrievalResult`` as a Markdown report."""
    meta = result.metadata
    total = meta.total_chunks if meta else 0
    threshold = meta.threshold if meta else 0.0

    if not result.results:
        return format_no_results(result.query, total, threshold)

    sections = []
    for i, chunk in enumerate(result.results, start=1):
        sections.append(
            f"## Result {i}: {chunk.filename}\n\n"
            f"**Chunk:** {chunk.chunk_index}\n"
            f"**Relevance Score:** {chunk.relevance_score:.4f}\n"
            f"**Similarity Score:** {chunk.similarity:.4f}\n"
            f"**Tokens:** {chunk.token_count}\n\n"
            f"{chunk.text}\n\n"
            "---"
        )

    summary = {
        "query": result.query,
        "total_chunks": total,
        "candidates_evaluated": meta.candidates_evaluated if meta else 0,
        "results_returned": len(result.results),
        "threshold": threshold,
        "results": [
            {
                "filename": c.filename,
                "chunk_index": c.chunk_index,
                "similarity": c.similarity,
                "relevance_score": c.relevance_score,
                "token_count": c.token_count,
            }
            for c in result.results
        ],
    }

    return (
        "# RAG Query Results\n\n"
        f'**Query:** "{result.query}"\n'
        f"**Found:** {len(result.results)} relevant chunk(s)\n"
        f"**Total in DB:** {total}\n"
        f"**Threshold:** {threshold}\n\n"
        "---\n\n"
        + "\n\n".join(sections)
        + "\n\n## Metadata\n\n```json\n"
        + json.dumps(summary, indent=2)
        + "\n```"
    )


def format_no_results(query: str, total_chunks: int, threshold: float) -> str:
    """Render the zero-result report."""
    return (
        "# RAG Query Results\n\n"
        f'**Query:** "{query}"\n'
        "**Status:** No results found\n\n"
        f"No relevant chunks found above threshold ({threshold}).\n\n"
        "**Suggestions:**\n"
        "- Try lowering the threshold\n"
        "- Verify your query matches the indexed content\n"
        "- Check that documents were ingested (`docrag status`)\n\n"
        "**Database Info:**\n"
        f"- Total chunks: {total_chunks}"
    )
