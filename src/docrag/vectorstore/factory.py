"""Vector store lookup by backend name.

Backends are imported on first use. Instances are cached per backend and
constructor arguments, so every caller that opens the same database shares
one engine and one write lock.
"""

from __future__ import annotations

import importlib
import logging

from docrag.vectorstore.base import VectorStore

logger = logging.getLogger(__name__)

# backend name -> "module:Class"
_BACKENDS: dict[str, str] = {
    "sqlite": "docrag.vectorstore.sqlite_store:SQLiteStore",
    "memory": "docrag.vectorstore.memory_store:InMemoryStore",
}

_instances: dict[tuple, VectorStore] = {}


def available_stores() -> list[str]:
    """Return names of registered vector store backends."""
    return list(_BACKENDS)


def get_vector_store(backend: str = "sqlite", **kwargs) -> VectorStore:
    """Return the shared store for ``backend`` and ``kwargs``, creating it once.

    Args:
        backend: One of ``available_stores()``; case-insensitive.
        **kwargs: Passed to the store constructor (e.g. ``url`` for sqlite).

    Raises:
        ValueError: Unknown backend.
    """
    name = backend.lower()
    key = (name, tuple(sorted(kwargs.items())))
    if key in _instances:
        return _instances[key]

    store_cls = _load_backend(name)
    store = store_cls(**kwargs)
    _instances[key] = store
    logger.debug("Opened %s vector store (%s)", store_cls.store_name(), kwargs or "defaults")
    return store


def clear_cache() -> None:
    """Forget every cached store instance."""
    _instances.clear()


def _load_backend(name: str) -> type[VectorStore]:
    target = _BACKENDS.get(name)
    if target is None:
        raise ValueError(f"Unknown vector store '{name}'. Available: {available_stores()}")
    module_path, _, cls_name = target.partition(":")
    return getattr(importlib.import_module(module_path), cls_name)
