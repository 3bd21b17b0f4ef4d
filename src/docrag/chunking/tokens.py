"""Token counting shared by chunking and every other token budget.

Uses the GPT-3 byte-pair encoding (``r50k_base``) from tiktoken.
"""

from __future__ import annotations

from functools import lru_cache

import tiktoken

ENCODING_NAME = "r50k_base"


@lru_cache(maxsize=1)
def _encoding() -> tiktoken.Encoding:
    return tiktoken.get_encoding(ENCODING_NAME)


def count_tokens(text: str) -> int:
    """Return the number of tokens in ``text``."""
    if not text:
        return 0
    return len(_encoding().encode(text, disallowed_special=()))
