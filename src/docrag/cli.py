"""CLI entry point — Typer app for docrag commands.

Usage:
    docrag ingest documents/
    docrag query "How does evolution work?" --top-n 5
    docrag status
    docrag clear --yes
"""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markdown import Markdown
from rich.table import Table

from docrag.config import Settings, load_settings
from docrag.errors import RAGError

app = typer.Typer(
    name="docrag",
    help="Local document RAG: ingest, query with LLM reranking, inspect.",
    no_args_is_help=True,
)

console = Console()

_state: dict[str, Settings] = {}

_PATH_ARG = typer.Argument(help="File or folder to ingest (default: settings)")


def _settings() -> Settings:
    if "settings" not in _state:
        _state["settings"] = load_settings()
    return _state["settings"]


def _fail(exc: Exception) -> None:
    console.print(f"[bold red]Error:[/] {exc}")
    raise typer.Exit(code=1)


@app.callback()
def main(
    config: Path | None = typer.Option(
        None, "--config", "-c", help="Path to settings YAML",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Configure logging and settings for every command."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)
    _state["settings"] = load_settings(config)


@app.command()
def ingest(
    path: Annotated[Path | None, _PATH_ARG] = None,
    keep_existing: bool = typer.Option(
        False, "--keep-existing", help="Do not delete existing chunks for re-ingested files",
    ),
) -> None:
    """Ingest a document or every document in a folder."""
    from docrag.container import build_ingest_pipeline

    settings = _settings()
    target = path or Path(settings.ingestion.folder)
    pipeline = build_ingest_pipeline(settings)

    try:
        if target.is_dir():
            results = pipeline.ingest_directory_sync(target, replace=not keep_existing).results
        else:
            results = [pipeline.ingest_file_sync(target, replace=not keep_existing)]
    except (RAGError, FileNotFoundError, ValueError) as exc:
        _fail(exc)

    table = Table(title=f"Ingested {target}")
    table.add_column("Document", style="cyan")
    table.add_column("Status")
    table.add_column("Chunks", justify="right")
    table.add_column("Stored", justify="right")
    table.add_column("Notes")

    for r in results:
        status = {"ok": "[green]ok[/]", "empty": "[yellow]empty[/]"}.get(r.status, "[red]error[/]")
        notes = r.error or "; ".join(r.warnings)
        table.add_row(Path(r.source).name, status, str(r.chunks_created), str(r.chunks_stored), notes)

    console.print(table)
    console.print(f"Total embeddings created: [bold]{sum(r.chunks_stored for r in results)}[/]")


@app.command()
def query(
    text: str = typer.Argument(..., help="Question to search for"),
    top_n: int | None = typer.Option(None, "--top-n", "-n", help="Maximum results"),
    threshold: float | None = typer.Option(
        None, "--threshold", "-t", help="Minimum relevance score (0-1)",
    ),
    initial_top_k: int | None = typer.Option(
        None, "--initial-top-k", "-k", help="Candidates passed to the reranker",
    ),
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON"),
) -> None:
    """Search the indexed documents."""
    from docrag.container import build_retriever, default_retrieval_config
    from docrag.retrieval.formatting import format_results

    settings = _settings()
    try:
        config = default_retrieval_config(
            settings, top_n=top_n, threshold=threshold, initial_top_k=initial_top_k,
        )
        result = build_retriever(settings).query_sync(text, config)
    except (RAGError, ValueError) as exc:
        _fail(exc)

    if as_json:
        console.print_json(json.dumps(result.to_dict()))
    else:
        console.print(Markdown(format_results(result)))


@app.command()
def status() -> None:
    """Show backend reachability, models and indexed documents."""
    from docrag.container import build_retriever

    settings = _settings()
    retriever = build_retriever(settings)

    try:
        available = asyncio.run(retriever.is_available())
        store = retriever.vector_store
        filenames = store.list_filenames()
        counts = {name: store.get_embedding_count(name) for name in filenames}
    except RAGError as exc:
        _fail(exc)

    console.print("\n[bold green]docrag[/] v0.1.0\n")

    table = Table(title="Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    table.add_row("Ollama", f"{settings.ollama.base_url} ({'[green]up[/]' if available else '[red]down[/]'})")
    table.add_row("Embedding model", settings.embedding.model)
    table.add_row("Rerank model", settings.llm.model)
    table.add_row("Vector store", f"{settings.vectorstore.backend} {settings.vectorstore.url}")
    table.add_row("Total chunks", str(sum(counts.values())))
    console.print(table)

    if counts:
        docs = Table(title="Indexed Documents")
        docs.add_column("Filename", style="cyan")
        docs.add_column("Chunks", justify="right")
        for name, count in counts.items():
            docs.add_row(name, str(count))
        console.print(docs)


@app.command()
def count(
    filename: str | None = typer.Option(None, "--filename", "-f", help="Count one document"),
) -> None:
    """Print the number of stored chunks."""
    from docrag.container import build_vector_store

    try:
        n = build_vector_store(_settings()).get_embedding_count(filename)
    except RAGError as exc:
        _fail(exc)
    console.print(f"{filename or 'all'}: {n}")


@app.command()
def clear(
    filename: str | None = typer.Option(None, "--filename", "-f", help="Clear one document"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Delete stored chunks (all, or one document)."""
    from docrag.container import build_vector_store

    scope = filename or "ALL documents"
    if not yes:
        typer.confirm(f"Delete embeddings for {scope}?", abort=True)

    store = build_vector_store(_settings())
    try:
        deleted = store.delete_embeddings(filename) if filename else store.clear_all_embeddings()
    except RAGError as exc:
        _fail(exc)
    console.print(f"Deleted [bold]{deleted}[/] chunk(s) for {scope}")


if __name__ == "__main__":
    app()
