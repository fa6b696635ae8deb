# ABOUTME: Protocol interface for fetching listing markup and the candidate model
# ABOUTME: Candidates are raw, not-yet-persisted extraction results

from typing import Protocol

from pydantic import BaseModel, ConfigDict


class SourceFetcher(Protocol):
    """Protocol for fetching the raw HTML of a listing page."""

    async def fetch(self, url: str) -> str:
        """Fetch the listing page at the given URL.

        Args:
            url: The listing page URL

        Returns:
            The raw HTML text of the page

        Raises:
            FetchError: If the page cannot be fetched
        """
        ...


class Candidate(BaseModel):
    """A single title element pulled from the listing page."""

    title: str = ""
    link: str | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def has_link(self) -> bool:
        return self.link is not None
