"""Vector similarity."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from docrag.errors import DimensionMismatchError


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """Cosine of the angle between ``a`` and ``b``.

    Returns 0.0 when either vector has zero norm.

    Raises:
        DimensionMismatchError: The vectors differ in length.
    """
    if len(a) != len(b):
        raise DimensionMismatchError(f"Vectors must have the same length ({len(a)} != {len(b)})")

    va = np.asarray(a, dtype=np.float64)
    vb = np.asarray(b, dtype=np.float64)
    denominator = float(np.linalg.norm(va)) * float(np.linalg.norm(vb))
    if denominator == 0.0:
        return 0.0
    return float(np.dot(va, vb)) / denominator
