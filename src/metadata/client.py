"""HTTP metadata fetcher with fallback on failure."""

import time

import httpx
import structlog

from src.metadata.constants import (
    DEFAULT_ACCEPT,
    DEFAULT_ACCEPT_LANGUAGE,
    HTTP_STATUS_OK_MAX,
    HTTP_STATUS_OK_MIN,
)
from src.metadata.extractor import extract_metadata
from src.metadata.models import ArticleMetadata, fallback_metadata


logger = structlog.get_logger()


class MetadataFetchError(Exception):
    """Raised internally when a page cannot be fetched."""

    def __init__(self, url: str, message: str, status_code: int = 0) -> None:
        """Initialize the fetch error.

        Args:
            url: URL that failed.
            message: Human-readable error message.
            status_code: HTTP status, 0 for transport errors.
        """
        self.url = url
        self.status_code = status_code
        super().__init__(f"Fetch failed for {url}: {message}")


class MetadataFetcher:
    """Fetches article pages and extracts their metadata.

    fetch() never raises for network, HTTP or parse failures: it logs the
    problem and returns fallback metadata derived from the URL alone.
    """

    def __init__(
        self,
        timeout: float = 10.0,
        user_agent: str = "readq",
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the fetcher.

        Args:
            timeout: Request timeout in seconds.
            user_agent: User-Agent header value.
            transport: Optional httpx transport, e.g. httpx.MockTransport.
        """
        self._timeout = timeout
        self._headers = {
            "User-Agent": user_agent,
            "Accept": DEFAULT_ACCEPT,
            "Accept-Language": DEFAULT_ACCEPT_LANGUAGE,
        }
        self._transport = transport
        self._log = logger.bind(component="metadata", subcomponent="fetcher")

    def fetch(self, url: str) -> ArticleMetadata:
        """Fetch metadata for an article URL.

        Args:
            url: Absolute http(s) article URL.

        Returns:
            Extracted metadata, or fallback metadata on any failure.
        """
        start_time_ns = time.perf_counter_ns()
        log = self._log.bind(url=url)

        try:
            html = self._get_html(url)
            metadata = extract_metadata(html, url)
        except MetadataFetchError as e:
            log.warning(
                "metadata_fetch_failed",
                status_code=e.status_code,
                error=str(e),
            )
            return fallback_metadata(url)
        except (ValueError, TypeError) as e:
            log.warning(
                "metadata_parse_failed",
                error=str(e),
                error_type=type(e).__name__,
            )
            return fallback_metadata(url)

        log.info(
            "metadata_fetch_complete",
            title=metadata.title,
            duration_ms=round((time.perf_counter_ns() - start_time_ns) / 1_000_000, 2),
        )
        return metadata

    def _get_html(self, url: str) -> str:
        """GET the page body as text.

        Raises:
            MetadataFetchError: On transport errors or non-2xx status.
        """
        try:
            with httpx.Client(
                timeout=self._timeout,
                follow_redirects=True,
                transport=self._transport,
            ) as client:
                response = client.get(url, headers=self._headers)
        except httpx.HTTPError as e:
            raise MetadataFetchError(url, f"{type(e).__name__}: {e}") from e

        if not HTTP_STATUS_OK_MIN <= response.status_code < HTTP_STATUS_OK_MAX:
            raise MetadataFetchError(
                url, f"HTTP {response.status_code}", response.status_code
            )
        return response.text
