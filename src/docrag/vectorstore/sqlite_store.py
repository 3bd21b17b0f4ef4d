"""SQLite vector store using the SQLAlchemy ORM over a single embeddings table.

Vectors are stored as JSON text next to the chunk they were computed from.
Every write runs in its own transaction, and writes are serialized through a
lock so that no reader ever sees half of a document.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path

from sqlalchemy import (
    Column,
    DateTime,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
    create_engine,
    func,
    select,
)
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from docrag.errors import DatabaseError
from docrag.vectorstore.base import VectorStore
from docrag.vectorstore.schemas import (
    EmbeddingRecord,
    NewEmbeddingRecord,
    parse_embedding,
    serialize_embedding,
)

logger = logging.getLogger(__name__)

DEFAULT_URL = "sqlite:///local_data/docrag.db"

Base = declarative_base()


class EmbeddingRow(Base):
    """One chunk of one document and its embedding vector."""

    __tablename__ = "pdf_embeddings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    filename = Column(String(512), nullable=False)
    chunk_index = Column(Integer, nullable=False)
    chunk_text = Column(Text, nullable=True)
    embedding = Column(Text, nullable=False)  # JSON-encoded float array
    embedding_model = Column(String(200), nullable=False)
    dimension = Column(Integer, nullable=False)
    token_count = Column(Integer, nullable=True)
    created_at = Column(DateTime, server_default=func.current_timestamp(), nullable=False)

    __table_args__ = (
        UniqueConstraint("filename", "chunk_index", name="uq_embeddings_filename_chunk"),
        Index("idx_embeddings_filename", "filename"),
        Index("idx_embeddings_created_at", "created_at"),
    )

    def to_record(self) -> EmbeddingRecord:
        return EmbeddingRecord(
            id=self.id,
            filename=self.filename,
            chunk_index=self.chunk_index,
            chunk_text=self.chunk_text or "",
            embedding=parse_embedding(self.embedding),
            embedding_model=self.embedding_model,
            dimension=self.dimension,
            token_count=self.token_count,
            created_at=self.created_at,
        )


class SQLiteStore(VectorStore):
    """Relational embedding store backed by SQLite (or any SQLAlchemy URL)."""

    def __init__(self, url: str = DEFAULT_URL, echo: bool = False):
        self.url = url
        self._engine = _create_engine(url, echo=echo)
        self._session_factory = sessionmaker(bind=self._engine, autoflush=False, expire_on_commit=False)
        self._write_lock = threading.Lock()
        Base.metadata.create_all(bind=self._engine)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def save_embeddings(self, records: list[NewEmbeddingRecord]) -> int:
        if not records:
            return 0

        rows = [_to_row(r) for r in records]
        with self._write_lock, self._session_factory() as session:
            try:
                session.add_all(rows)
                session.commit()
            except SQLAlchemyError as exc:
                session.rollback()
                logger.error("Rolled back insert of %d embeddings: %s", len(rows), exc)
                raise DatabaseError("Failed to save embeddings", "save_embeddings") from exc

        logger.info("SQLiteStore saved %d embeddings", len(rows))
        return len(rows)

    def replace_embeddings(self, filename: str, records: list[NewEmbeddingRecord]) -> tuple[int, int]:
        rows = [_to_row(r) for r in records]
        with self._write_lock, self._session_factory() as session:
            try:
                deleted = (
                    session.query(EmbeddingRow)
                    .filter(EmbeddingRow.filename == filename)
                    .delete(synchronize_session=False)
                )
                session.add_all(rows)
                session.commit()
            except SQLAlchemyError as exc:
                session.rollback()
                logger.error("Rolled back replacement of %s: %s", filename, exc)
                raise DatabaseError("Failed to replace embeddings", "replace_embeddings") from exc

        logger.info("SQLiteStore replaced %s: %d deleted, %d saved", filename, deleted, len(rows))
        return deleted, len(rows)

    def clear_all_embeddings(self) -> int:
        return self._delete(None, "clear_all_embeddings")

    def delete_embeddings(self, filename: str) -> int:
        return self._delete(filename, "delete_embeddings")

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_all_embeddings(self) -> list[EmbeddingRecord]:
        stmt = select(EmbeddingRow).order_by(
            EmbeddingRow.filename, EmbeddingRow.chunk_index, EmbeddingRow.id,
        )
        return self._fetch(stmt, "get_all_embeddings")

    def get_embeddings_by_filename(self, filename: str) -> list[EmbeddingRecord]:
        stmt = (
            select(EmbeddingRow)
            .where(EmbeddingRow.filename == filename)
            .order_by(EmbeddingRow.chunk_index, EmbeddingRow.id)
        )
        return self._fetch(stmt, "get_embeddings_by_filename")

    def get_embedding_count(self, filename: str | None = None) -> int:
        stmt = select(func.count(EmbeddingRow.id))
        if filename is not None:
            stmt = stmt.where(EmbeddingRow.filename == filename)
        try:
            with self._session_factory() as session:
                return session.execute(stmt).scalar_one()
        except SQLAlchemyError as exc:
            raise DatabaseError("Failed to get embedding count", "get_embedding_count") from exc

    def list_filenames(self) -> list[str]:
        stmt = select(EmbeddingRow.filename).distinct().order_by(EmbeddingRow.filename)
        try:
            with self._session_factory() as session:
                return list(session.execute(stmt).scalars())
        except SQLAlchemyError as exc:
            raise DatabaseError("Failed to list filenames", "list_filenames") from exc

    # ------------------------------------------------------------------
    # Private
    # ------------------------------------------------------------------

    def _fetch(self, stmt, operation: str) -> list[EmbeddingRecord]:
        try:
            with self._session_factory() as session:
                return [row.to_record() for row in session.execute(stmt).scalars()]
        except SQLAlchemyError as exc:
            raise DatabaseError("Failed to read embeddings", operation) from exc

    def _delete(self, filename: str | None, operation: str) -> int:
        with self._write_lock, self._session_factory() as session:
            try:
                query = session.query(EmbeddingRow)
                if filename is not None:
                    query = query.filter(EmbeddingRow.filename == filename)
                deleted = query.delete(synchronize_session=False)
                session.commit()
            except SQLAlchemyError as exc:
                session.rollback()
                raise DatabaseError("Failed to delete embeddings", operation) from exc

        logger.info(
            "SQLiteStore deleted %d embeddings%s",
            deleted, f" for {filename}" if filename else "",
        )
        return deleted


def _to_row(record: NewEmbeddingRecord) -> EmbeddingRow:
    return EmbeddingRow(
        filename=record.filename,
        chunk_index=record.chunk_index,
        chunk_text=record.chunk_text or None,
        embedding=serialize_embedding(record.embedding),
        embedding_model=record.embedding_model,
        dimension=record.dimension,
        token_count=record.token_count,
    )


def _create_engine(url: str, echo: bool = False):
    parsed = make_url(url)
    if not parsed.drivername.startswith("sqlite"):
        return create_engine(url, echo=echo)

    if parsed.database in (None, "", ":memory:"):
        # A single shared connection, otherwise each thread gets its own empty database
        return create_engine(
            url,
            echo=echo,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )

    Path(parsed.database).expanduser().parent.mkdir(parents=True, exist_ok=True)
    return create_engine(url, echo=echo, connect_args={"check_same_thread": False})
