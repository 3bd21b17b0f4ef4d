"""Application settings loaded from YAML with environment variable overrides."""

from __future__ import annotations

import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field

# ---------------------------------------------------------------------------
# Settings sections
# ---------------------------------------------------------------------------


class OllamaSettings(BaseModel):
    base_url: str = "http://localhost:11434"
    timeout: float = Field(default=30.0, gt=0)
    ping_timeout: float = Field(default=5.0, gt=0)


class EmbeddingSettings(BaseModel):
    model: str = "nomic-embed-text"


class LLMSettings(BaseModel):
    model: str = "llama3.2"
    temperature: float = 0.2
    max_tokens: int = 256


class VectorStoreSettings(BaseModel):
    backend: str = "sqlite"
    url: str = "sqlite:///local_data/docrag.db"


class ChunkingSettings(BaseModel):
    max_tokens: int = Field(default=512, gt=0)
    overlap: int = Field(default=50, ge=0)


class RetrievalSettings(BaseModel):
    top_n: int = Field(default=3, ge=1)
    threshold: float = Field(default=0.5, ge=0.0, le=1.0)
    initial_top_k: int = Field(default=20, ge=1)
    rerank_concurrency: int = Field(default=4, ge=1)
    check_models: bool = True


class IngestionSettings(BaseModel):
    folder: str = "documents"
    supported_formats: list[str] = Field(default_factory=lambda: [".pdf", ".txt", ".md"])


# ---------------------------------------------------------------------------
# Root settings
# ---------------------------------------------------------------------------


class Settings(BaseModel):
    ollama: OllamaSettings = Field(default_factory=OllamaSettings)
    embedding: EmbeddingSettings = Field(default_factory=EmbeddingSettings)
    llm: LLMSettings = Field(default_factory=LLMSettings)
    vectorstore: VectorStoreSettings = Field(default_factory=VectorStoreSettings)
    chunking: ChunkingSettings = Field(default_factory=ChunkingSettings)
    retrieval: RetrievalSettings = Field(default_factory=RetrievalSettings)
    ingestion: IngestionSettings = Field(default_factory=IngestionSettings)


# (env var, section, field)
_ENV_OVERRIDES: list[tuple[str, str, str]] = [
    ("OLLAMA_BASE_URL", "ollama", "base_url"),
    ("OLLAMA_TIMEOUT", "ollama", "timeout"),
    ("OLLAMA_EMBEDDING_MODEL", "embedding", "model"),
    ("OLLAMA_RERANK_MODEL", "llm", "model"),
    ("DOCRAG_DB_URL", "vectorstore", "url"),
    ("PDF_FOLDER_PATH", "ingestion", "folder"),
]


def _find_settings_file(start: Path | None = None) -> Path | None:
    """Nearest settings file at or above ``start`` (default: cwd).

    ``DOCRAG_PROFILE=dev`` prefers ``settings-dev.yaml`` over ``settings.yaml``
    in the same directory.
    """
    profile = os.getenv("DOCRAG_PROFILE")
    names = ([f"settings-{profile}.yaml"] if profile else []) + ["settings.yaml"]

    here = (start or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        found = next((directory / n for n in names if (directory / n).is_file()), None)
        if found is not None:
            return found
    return None


def _apply_env_overrides(raw: dict) -> dict:
    for env_var, section, key in _ENV_OVERRIDES:
        value = os.getenv(env_var)
        if value:
            raw[section] = {**(raw.get(section) or {}), key: value}
    return raw


def load_settings(path: str | Path | None = None) -> Settings:
    """Load settings from YAML (explicit path or discovered), then apply env overrides."""
    settings_path = Path(path) if path else _find_settings_file()
    raw = yaml.safe_load(settings_path.read_text(encoding="utf-8")) if settings_path else None
    return Settings(**_apply_env_overrides(raw or {}))
