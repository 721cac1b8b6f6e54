"""SQLAlchemy-backed article store."""

import asyncio
import logging
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import JSON, DateTime, Integer, String, Text, create_engine, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, sessionmaker
from sqlalchemy.pool import StaticPool

from district_ingest.data import ArticleRecord, Headline, InsertOutcome, Topic

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


class NewsArticleRow(Base):
    """One stored article. ``source_url`` holds the canonical URL."""

    __tablename__ = "news_articles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    source_url: Mapped[str] = mapped_column(String, unique=True, nullable=False, index=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    summary: Mapped[str] = mapped_column(Text, nullable=False)
    source_name: Mapped[str] = mapped_column(String, nullable=False)
    topic: Mapped[str] = mapped_column(String, nullable=False)
    categories: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    headline: Mapped[dict[str, str]] = mapped_column(JSON, nullable=False)
    image_url: Mapped[str | None] = mapped_column(Text)
    published_at: Mapped[str | None] = mapped_column(String)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(tz=UTC)
    )


def _to_row(record: ArticleRecord) -> NewsArticleRow:
    return NewsArticleRow(
        source_url=record.source_url,
        title=record.title,
        summary=record.summary,
        source_name=record.source_name,
        topic=str(record.topic),
        categories=list(record.categories),
        headline={
            "headline": record.headline.headline,
            "subheadline": record.headline.subheadline,
        },
        image_url=record.image_url,
        published_at=record.published_at,
    )


def _to_record(row: NewsArticleRow) -> ArticleRecord:
    try:
        topic = Topic(row.topic)
    except ValueError:
        topic = Topic.MISCELLANEOUS
    headline: dict[str, Any] = row.headline or {}
    return ArticleRecord(
        title=row.title,
        summary=row.summary,
        source_url=row.source_url,
        source_name=row.source_name,
        topic=topic,
        categories=tuple(row.categories or ()),
        headline=Headline(
            headline=str(headline.get("headline", "")),
            subheadline=str(headline.get("subheadline", "")),
        ),
        image_url=row.image_url,
        published_at=row.published_at,
    )


def _create_engine(url: str) -> Engine:
    if url in ("sqlite://", "sqlite:///:memory:"):
        # In-memory databases must share one connection across worker threads.
        return create_engine(url, connect_args={"check_same_thread": False}, poolclass=StaticPool)
    return create_engine(url)


class SqlArticleStore:
    """Store articles in a relational database through SQLAlchemy.

    Uses a synchronous engine driven from worker threads, so any SQLAlchemy
    URL works (``sqlite:///district.db``, ``postgresql+psycopg://...``).
    The ``news_articles`` table is created on first use.

    Args:
        url: SQLAlchemy database URL.
        engine: Optional prebuilt engine, used instead of ``url``.
    """

    def __init__(self, url: str = "sqlite:///district.db", *, engine: Engine | None = None) -> None:
        self._engine = engine or _create_engine(url)
        self._session_factory = sessionmaker(bind=self._engine, expire_on_commit=False)
        self._initialized = False

    def _ensure_schema(self) -> None:
        if not self._initialized:
            Base.metadata.create_all(self._engine)
            self._initialized = True

    def _insert(self, record: ArticleRecord) -> InsertOutcome:
        try:
            self._ensure_schema()
            with self._session_factory() as session:
                session.add(_to_row(record))
                session.commit()
        except IntegrityError:
            logger.info(f"Article already stored: {record.source_url}")
            return InsertOutcome.CONFLICT
        except SQLAlchemyError:
            logger.exception(f"Failed to insert {record.source_url}")
            return InsertOutcome.ERROR
        return InsertOutcome.INSERTED

    def _query(self, source_url: str | None, limit: int) -> list[ArticleRecord]:
        self._ensure_schema()
        stmt = select(NewsArticleRow).order_by(
            NewsArticleRow.created_at.desc(), NewsArticleRow.id.desc()
        )
        if source_url is not None:
            stmt = stmt.where(NewsArticleRow.source_url == source_url)
        stmt = stmt.limit(max(limit, 0))
        with self._session_factory() as session:
            return [_to_record(row) for row in session.scalars(stmt)]

    async def insert(self, record: ArticleRecord) -> InsertOutcome:
        return await asyncio.to_thread(self._insert, record)

    async def query(
        self,
        *,
        source_url: str | None = None,
        limit: int = 50,
    ) -> list[ArticleRecord]:
        return await asyncio.to_thread(self._query, source_url, limit)

    def dispose(self) -> None:
        """Release pooled connections."""
        self._engine.dispose()
