"""Tests for the Typer CLI, with Ollama-backed components swapped for fakes."""

from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

import docrag.container as container
from fakes import FakeEmbedder, ScriptedLLM
from docrag.cli import app
from docrag.pipeline.ingest import IngestPipeline
from docrag.retrieval.reranker import LLMReranker
from docrag.retrieval.retriever import Retriever
from docrag.vectorstore.memory_store import InMemoryStore

runner = CliRunner()


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def wired(monkeypatch, tmp_path: Path, store: InMemoryStore):
    """Point every CLI command at one in-memory store and fake models."""
    monkeypatch.chdir(tmp_path)
    embedder = FakeEmbedder()
    llm = ScriptedLLM(default=0.9)

    monkeypatch.setattr(container, "build_vector_store", lambda settings: store)
    monkeypatch.setattr(
        container, "build_ingest_pipeline",
        lambda settings: IngestPipeline(embedder, store),
    )
    monkeypatch.setattr(
        container, "build_retriever",
        lambda settings: Retriever(embedder, store, LLMReranker(llm)),
    )
    return embedder, llm


def _docs(tmp_path: Path, sample_text: str) -> Path:
    folder = tmp_path / "documents"
    folder.mkdir()
    (folder / "bio.txt").write_text(sample_text, encoding="utf-8")
    (folder / "short.md").write_text("Enzymes speed up reactions.", encoding="utf-8")
    return folder


class TestCli:
    def test_ingest_folder(self, wired, tmp_path: Path, store: InMemoryStore, sample_text: str):
        folder = _docs(tmp_path, sample_text)

        result = runner.invoke(app, ["ingest", str(folder)])

        assert result.exit_code == 0, result.output
        assert "bio.txt" in result.output
        assert "Total embeddings created" in result.output
        assert store.list_filenames() == ["bio.txt", "short.md"]

    def test_ingest_single_file(self, wired, tmp_path: Path, store: InMemoryStore, sample_text: str):
        folder = _docs(tmp_path, sample_text)
        result = runner.invoke(app, ["ingest", str(folder / "short.md")])

        assert result.exit_code == 0, result.output
        assert store.list_filenames() == ["short.md"]

    def test_ingest_missing_folder(self, wired, tmp_path: Path):
        result = runner.invoke(app, ["ingest", str(tmp_path / "missing")])
        assert result.exit_code == 1
        assert "Error" in result.output

    def test_query_json(self, wired, tmp_path: Path, sample_text: str):
        runner.invoke(app, ["ingest", str(_docs(tmp_path, sample_text))])

        result = runner.invoke(app, ["query", "Where does photosynthesis happen?", "--json", "-n", "1"])

        assert result.exit_code == 0, result.output
        assert '"results_returned": 1' in result.output

    def test_query_markdown(self, wired, tmp_path: Path, sample_text: str):
        runner.invoke(app, ["ingest", str(_docs(tmp_path, sample_text))])
        result = runner.invoke(app, ["query", "What do enzymes do?"])
        assert result.exit_code == 0, result.output
        assert "RAG Query Results" in result.output

    def test_query_empty_index(self, wired):
        result = runner.invoke(app, ["query", "anything"])
        assert result.exit_code == 1
        assert "No embeddings found" in result.output

    def test_query_invalid_threshold(self, wired):
        result = runner.invoke(app, ["query", "anything", "--threshold", "2"])
        assert result.exit_code == 1

    def test_status(self, wired, tmp_path: Path, sample_text: str):
        runner.invoke(app, ["ingest", str(_docs(tmp_path, sample_text))])
        result = runner.invoke(app, ["status"])

        assert result.exit_code == 0, result.output
        assert "Indexed Documents" in result.output
        assert "short.md" in result.output

    def test_count_and_clear(self, wired, tmp_path: Path, store: InMemoryStore, sample_text: str):
        runner.invoke(app, ["ingest", str(_docs(tmp_path, sample_text))])

        result = runner.invoke(app, ["count", "--filename", "short.md"])
        assert result.exit_code == 0, result.output
        assert "short.md: 1" in result.output

        result = runner.invoke(app, ["clear", "--filename", "short.md", "--yes"])
        assert result.exit_code == 0, result.output
        assert store.list_filenames() == ["bio.txt"]

        result = runner.invoke(app, ["clear", "--yes"])
        assert result.exit_code == 0, result.output
        assert store.get_embedding_count() == 0

    def test_clear_aborted(self, wired, tmp_path: Path, store: InMemoryStore, sample_text: str):
        runner.invoke(app, ["ingest", str(_docs(tmp_path, sample_text))])
        before = store.get_embedding_count()

        result = runner.invoke(app, ["clear"], input="n\n")

        assert result.exit_code != 0
        assert store.get_embedding_count() == before
