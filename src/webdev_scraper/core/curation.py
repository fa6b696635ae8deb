# ABOUTME: Curation service for save toggling and note attachment on stored articles
# ABOUTME: Also provides the newest-first listings used by the trigger surface

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from webdev_scraper.core.errors import NoteLinkError, NotFoundError, PersistenceError
from webdev_scraper.persistence import Article, RecordStore
from webdev_scraper.persistence.models import status_for
from webdev_scraper.utils.logging import get_logger


class CurationService:
    """User-facing operations against existing articles."""

    def __init__(self, store: RecordStore):
        self.store = store
        self.logger = get_logger(__name__)

    async def list_all(self) -> list[Article]:
        return await self.store.find_all()

    async def list_saved(self) -> list[Article]:
        return await self.store.find_all({"saved": True})

    async def get_article(self, article_id: int) -> dict[str, Any]:
        """Return the article record with its note populated."""
        article = await self._require(article_id)
        note = await self.store.find_note(article.note_id) if article.note_id is not None else None
        return article.to_dict(note=note)

    async def toggle_save(self, article_id: int) -> Article:
        """Flip the saved flag, writing saved and status in one update."""
        article = await self._require(article_id)
        saved = not article.saved
        updated = await self.store.update(article_id, {"saved": saved, "status": status_for(saved)})
        self.logger.info("Toggled article save state", article_id=article_id, saved=updated.saved)
        return updated

    async def attach_note(self, article_id: int, body: Mapping[str, Any]) -> Article:
        """Create a note from ``body`` and make it the article's only note.

        Any previously attached note stays in the store, unreferenced.

        Raises:
            NotFoundError: If the article does not exist (nothing is written)
            PersistenceError: If the note cannot be created
            NoteLinkError: If the note was created but linking failed
        """
        await self._require(article_id)

        note = await self.store.create_note(body)
        if note.id is None:
            raise PersistenceError(f"Note for article {article_id} was stored without an id")

        try:
            article = await self.store.link_note(article_id, note.id)
        except (NotFoundError, PersistenceError) as e:
            self.logger.error(
                "Failed to link note", article_id=article_id, note_id=note.id, error=str(e), error_type=type(e).__name__
            )
            raise NoteLinkError(
                f"Note {note.id} created but not linked to article {article_id}: {e}", article_id, note.id
            ) from e

        self.logger.info("Attached note to article", article_id=article_id, note_id=note.id)
        return article

    async def _require(self, article_id: int) -> Article:
        article = await self.store.find_by_id(article_id)
        if article is None:
            raise NotFoundError("Article", article_id)
        return article
