# ABOUTME: httpx-based implementation of the source fetcher
# ABOUTME: Maps timeouts, transport failures and non-2xx responses to FetchError

import httpx

from webdev_scraper.config import get_config
from webdev_scraper.core.errors import FetchError
from webdev_scraper.utils.logging import get_logger, log_api_call


class HttpSourceFetcher:
    """Fetches listing pages with an async httpx client."""

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
        user_agent: str | None = None,
    ):
        """Initialize the fetcher.

        Args:
            client: HTTP client to use (optional, one is created and owned otherwise)
            timeout: Request timeout in seconds (defaults to config.fetch_timeout)
            user_agent: User-Agent header (defaults to config.user_agent)
        """
        config = get_config()
        self.timeout = timeout if timeout is not None else config.fetch_timeout
        self._owns_client = client is None
        self.http_client = client or httpx.AsyncClient(  # Allow for dependency injection
            headers={"User-Agent": user_agent or config.user_agent},
            timeout=self.timeout,
        )
        self.logger = get_logger(__name__)

    @log_api_call("listing_source")
    async def fetch(self, url: str) -> str:
        """Fetch the raw HTML of the listing page."""
        try:
            response = await self.http_client.get(url, follow_redirects=True)
            response.raise_for_status()
        except httpx.TimeoutException as e:
            raise FetchError(f"Timed out fetching {url}", url=url) from e
        except httpx.HTTPStatusError as e:
            raise FetchError(f"Source returned HTTP {e.response.status_code} for {url}", url=url) from e
        except httpx.HTTPError as e:
            raise FetchError(f"Failed to fetch {url}: {e}", url=url) from e

        self.logger.debug("Fetched listing page", url=str(response.url), content_length=len(response.text))
        return response.text

    async def close(self) -> None:
        """Close the underlying client if this fetcher created it."""
        if self._owns_client:
            await self.http_client.aclose()
