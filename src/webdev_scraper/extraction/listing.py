# ABOUTME: BeautifulSoup extractor turning listing-page markup into article candidates
# ABOUTME: Lazy, restartable candidate sequence that degrades on malformed markup

from collections.abc import Iterator

from bs4 import BeautifulSoup, ParserRejectedMarkup, Tag

from webdev_scraper.config import get_config
from webdev_scraper.extraction.base import Candidate
from webdev_scraper.utils.logging import get_logger

logger = get_logger(__name__)


class CandidateSequence:
    """Restartable view over the candidates in one document.

    Each iteration parses the markup again and yields candidates one at a
    time, so nothing is materialized until the caller asks for it.
    """

    def __init__(self, markup: str | bytes, selector: str, parser: str):
        self.markup = markup
        self.selector = selector
        self.parser = parser

    def __iter__(self) -> Iterator[Candidate]:
        return self._generate()

    def _generate(self) -> Iterator[Candidate]:
        try:
            soup = BeautifulSoup(self.markup, self.parser)
        except ParserRejectedMarkup as e:
            logger.warning("Parser rejected listing markup", parser=self.parser, error=str(e))
            return

        for element in soup.css.iselect(self.selector):
            yield _to_candidate(element)


def _to_candidate(element: Tag) -> Candidate:
    """Build a candidate from a title element, tolerating missing pieces."""
    title = element.get_text().strip()

    link = None
    anchor = element.find("a", recursive=False)
    if isinstance(anchor, Tag):
        href = anchor.get("href")
        # Multi-valued attributes come back as lists
        if isinstance(href, list):
            href = " ".join(href)
        link = href or None

    return Candidate(title=title, link=link)


class ListingExtractor:
    """Extracts (title, link) candidates from a listing page."""

    def __init__(self, selector: str | None = None, parser: str | None = None):
        """Initialize the extractor.

        Args:
            selector: CSS selector for title-bearing elements (defaults to config.title_selector)
            parser: BeautifulSoup parser backend (defaults to config.html_parser)
        """
        config = get_config()
        self.selector = selector or config.title_selector
        self.parser = parser or config.html_parser

    def extract(self, markup: str | bytes) -> CandidateSequence:
        """Return the candidates found in ``markup``.

        Elements without an anchor yield ``link=None``; elements without text
        yield an empty title. Malformed markup yields fewer candidates rather
        than raising.
        """
        return CandidateSequence(markup, self.selector, self.parser)
