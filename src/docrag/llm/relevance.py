"""Prompt and reply parsing for LLM relevance judgments.

The model is asked to answer with a bare number in [0, 1]. Free-text replies
are parsed by taking the first number that appears; a reply with no number at
all falls back to a neutral score rather than failing.
"""

from __future__ import annotations

import logging
import re

logger = logging.getLogger(__name__)

MAX_DOCUMENT_CHARS = 500
NEUTRAL_RELEVANCE = 0.5

RELEVANCE_TEMPERATURE = 0.0
RELEVANCE_MAX_TOKENS = 10
RELEVANCE_STOP = ["\n"]

_NUMBER = re.compile(r"-?(?:\d+(?:\.\d+)?|\.\d+)")

RELEVANCE_PROMPT = """\
Rate how relevant the document is to the query.
Respond with ONLY a number between 0.0 and 1.0, where 0.0 means not relevant \
at all and 1.0 means the document directly answers the query.

Query: {query}

Document: {document}

Relevance score:"""


def build_relevance_prompt(query: str, document: str) -> str:
    """Fill the relevance template, truncating the document."""
    return RELEVANCE_PROMPT.format(query=query, document=document[:MAX_DOCUMENT_CHARS])


def parse_relevance_score(reply: str) -> float:
    """Extract a relevance score in [0, 1] from a model reply."""
    match = _NUMBER.search(reply or "")
    if match is None:
        logger.warning(
            "No number in relevance reply %r, defaulting to %.1f",
            (reply or "")[:80], NEUTRAL_RELEVANCE,
        )
        return NEUTRAL_RELEVANCE
    return min(1.0, max(0.0, float(match.group())))
