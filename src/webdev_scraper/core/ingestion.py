# ABOUTME: Ingestion coordinator driving fetch → extract → dedup → create
# ABOUTME: Re-running against an unchanged listing page leaves the store unchanged

from __future__ import annotations

from dataclasses import dataclass, field

from webdev_scraper.config import get_config
from webdev_scraper.core.errors import DuplicateRecordError
from webdev_scraper.extraction.base import Candidate, SourceFetcher
from webdev_scraper.extraction.listing import ListingExtractor
from webdev_scraper.persistence import RecordStore
from webdev_scraper.utils.logging import get_logger


@dataclass(slots=True)
class IngestionReport:
    """Outcome of one ingestion trigger."""

    created: int = 0
    skipped: int = 0
    created_ids: list[int] = field(default_factory=list)

    @property
    def total(self) -> int:
        return self.created + self.skipped


class IngestionCoordinator:
    """Turns the candidates on the listing page into stored articles."""

    def __init__(
        self,
        store: RecordStore,
        fetcher: SourceFetcher,
        extractor: ListingExtractor | None = None,
        source_url: str | None = None,
    ):
        self.store = store
        self.fetcher = fetcher
        self.extractor = extractor or ListingExtractor()
        self.source_url = source_url or get_config().source_url
        self.logger = get_logger(__name__)

    async def ingest(self) -> IngestionReport:
        """Fetch the listing page once and store every candidate not seen before.

        Raises:
            FetchError: If the page cannot be fetched; nothing is written
            PersistenceError: If the store fails part way through
        """
        self.logger.info("Starting ingestion", source_url=self.source_url)

        # The whole page is fetched before any write happens
        markup = await self.fetcher.fetch(self.source_url)

        report = IngestionReport()
        for candidate in self.extractor.extract(markup):
            article_id = await self._create_if_new(candidate)
            if article_id is None:
                report.skipped += 1
            else:
                report.created += 1
                report.created_ids.append(article_id)

        self.logger.info(
            "Ingestion complete", source_url=self.source_url, created=report.created, skipped=report.skipped
        )
        return report

    async def _create_if_new(self, candidate: Candidate) -> int | None:
        """Create an article for the candidate unless one already exists; returns the new id."""
        existing = await self.store.find_by_title_link(candidate.title, candidate.link)
        if existing is not None:
            self.logger.debug("Skipping duplicate candidate", article_id=existing.id, title=candidate.title)
            return None

        try:
            article = await self.store.create(candidate)
        except DuplicateRecordError:
            # Another trigger stored it between our check and our write
            self.logger.debug("Duplicate detected on create", title=candidate.title, link=candidate.link)
            return None
        return article.id
