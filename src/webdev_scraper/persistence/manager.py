# ABOUTME: Record store for articles and notes over async SQLModel sessions
# ABOUTME: Provides find/create/update helpers and wraps database failures as PersistenceError

from __future__ import annotations

from collections.abc import AsyncGenerator, Mapping, Sequence
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlmodel import SQLModel, col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from webdev_scraper.core.errors import DuplicateRecordError, NotFoundError, PersistenceError
from webdev_scraper.extraction.base import Candidate
from webdev_scraper.persistence.models import Article, Note, status_for
from webdev_scraper.utils.logging import get_logger

# Newest first; id breaks ties between rows created in the same instant
DEFAULT_SORT = ("-created_at", "-id")

MUTABLE_FIELDS = frozenset({"saved", "status", "note_id"})


def _normalize_patch(patch: Mapping[str, Any]) -> dict[str, Any]:
    """Validate an article patch and keep saved/status in step."""
    unknown = set(patch) - MUTABLE_FIELDS
    if unknown:
        raise ValueError(f"Cannot update article fields: {', '.join(sorted(unknown))}")

    normalized = dict(patch)
    if "saved" in normalized:
        expected = status_for(bool(normalized["saved"]))
        if normalized.setdefault("status", expected) != expected:
            raise ValueError(f"status {normalized['status']!r} does not match saved={normalized['saved']}")
    elif "status" in normalized:
        raise ValueError("status can only change together with saved")
    return normalized


class RecordStore:
    """Manages async database operations for articles and notes."""

    def __init__(self, database_url: str = "sqlite+aiosqlite:///./webdev_scraper.db"):
        self.database_url = database_url
        self.logger = get_logger(__name__)
        self.engine = create_async_engine(database_url, echo=False)
        self.async_session = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def _session(self, operation: str) -> AsyncGenerator[AsyncSession, None]:
        """Yield a session, converting database failures into PersistenceError."""
        try:
            async with self.async_session() as session:
                yield session
        except SQLAlchemyError as e:
            self.logger.error("Store operation failed", operation=operation, error=str(e), error_type=type(e).__name__)
            raise PersistenceError(f"{operation} failed: {e}") from e

    async def create_tables(self) -> None:
        """Create all database tables if they don't exist."""
        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(SQLModel.metadata.create_all)
        except SQLAlchemyError as e:
            raise PersistenceError(f"create_tables failed: {e}") from e

    async def find_all(
        self, filter: Mapping[str, Any] | None = None, sort: Sequence[str] = DEFAULT_SORT
    ) -> list[Article]:
        """Return articles matching an equality filter, ordered by ``sort``.

        Sort keys are column names; a leading ``-`` means descending.
        """
        statement = select(Article)
        for field_name, value in (filter or {}).items():
            statement = statement.where(col(self._column(field_name)) == value)
        for key in sort:
            column = col(self._column(key.lstrip("-")))
            statement = statement.order_by(column.desc() if key.startswith("-") else column.asc())

        async with self._session("find_all") as session:
            result = await session.exec(statement)
            return list(result.all())

    async def find_by_id(self, article_id: int) -> Article | None:
        async with self._session("find_by_id") as session:
            return await session.get(Article, article_id)

    async def find_by_title_link(self, title: str, link: str | None) -> Article | None:
        """Find the article with exactly this (title, link) pair; a None link matches NULL."""
        statement = select(Article).where(Article.title == title)
        if link is None:
            statement = statement.where(col(Article.link).is_(None))
        else:
            statement = statement.where(Article.link == link)

        async with self._session("find_by_title_link") as session:
            result = await session.exec(statement)
            return result.first()

    async def create(self, candidate: Candidate) -> Article:
        """Persist a new unsaved article built from a candidate."""
        async with self._session("create") as session:
            article = Article(title=candidate.title, link=candidate.link)
            session.add(article)
            try:
                await session.commit()
            except IntegrityError as e:
                await session.rollback()
                raise DuplicateRecordError(candidate.title, candidate.link) from e
            await session.refresh(article)

        self.logger.debug("Created article", article_id=article.id, title=article.title, link=article.link)
        return article

    async def update(self, article_id: int, patch: Mapping[str, Any]) -> Article:
        """Apply ``patch`` to an article in a single transaction."""
        changes = _normalize_patch(patch)
        async with self._session("update") as session:
            article = await session.get(Article, article_id)
            if article is None:
                raise NotFoundError("Article", article_id)
            for field_name, value in changes.items():
                setattr(article, field_name, value)
            session.add(article)
            await session.commit()
            await session.refresh(article)
            return article

    async def create_note(self, body: Mapping[str, Any]) -> Note:
        async with self._session("create_note") as session:
            note = Note(body=dict(body))
            session.add(note)
            await session.commit()
            await session.refresh(note)
            return note

    async def find_note(self, note_id: int) -> Note | None:
        async with self._session("find_note") as session:
            return await session.get(Note, note_id)

    async def link_note(self, article_id: int, note_id: int) -> Article:
        """Point the article at ``note_id``, replacing any previous note reference."""
        article = await self.update(article_id, {"note_id": note_id})
        self.logger.debug("Linked note to article", article_id=article_id, note_id=note_id)
        return article

    async def close(self) -> None:
        await self.engine.dispose()

    @staticmethod
    def _column(field_name: str) -> Any:
        if field_name not in Article.model_fields:
            raise ValueError(f"Unknown article field: {field_name}")
        return getattr(Article, field_name)
