import logging
from typing import Optional
from urllib.parse import quote

import httpx

from macreader.config import settings
from macreader.services.errors import EmptyResponseError, InvalidURLError, NetworkError
from macreader.services.http_client import CatalogHTTPClient

logger = logging.getLogger(__name__)


class QueryClient:
    """Issues free-text volume searches against the Google Books API"""

    def __init__(self, http_client: Optional[CatalogHTTPClient] = None, base_url: Optional[str] = None):
        self.base_url = base_url or settings.catalog_url
        self._owns_client = http_client is None
        self._http = http_client or CatalogHTTPClient()

    def build_request_url(self, query: str) -> str:
        """
        Build the volumes search URL for a query

        Args:
            query: Free-form search text, trimmed before encoding

        Returns:
            The request URL with the query percent-encoded into ``q``

        Raises:
            InvalidURLError: if the result is not an absolute http(s) URL
        """
        try:
            encoded = quote(query.strip(), safe="")
        except UnicodeEncodeError as e:
            raise InvalidURLError(f"Cannot encode query {query!r}: {e}") from e
        url = f"{self.base_url}?q={encoded}"

        try:
            parsed = httpx.URL(url)
        except httpx.InvalidURL as e:
            raise InvalidURLError(f"Cannot build request URL for query {query!r}: {e}") from e

        if parsed.scheme not in ("http", "https") or not parsed.host:
            raise InvalidURLError(f"Cannot build request URL for query {query!r}: {url}")

        return url

    async def search(self, query: str) -> bytes:
        """
        Fetch the raw search response for a query

        Exactly one GET is issued. Nothing is retried.

        Returns:
            The raw response body

        Raises:
            InvalidURLError: before any I/O, if the URL cannot be built
            NetworkError: on a transport failure
            EmptyResponseError: if the response has no body
        """
        url = self.build_request_url(query)
        logger.info(f"Searching catalog: {url}")

        try:
            response = await self._http.get(url)
        except httpx.RequestError as e:
            raise NetworkError(str(e) or e.__class__.__name__) from e

        if not response.is_success:
            logger.warning(f"Catalog responded with status {response.status_code} for query {query!r}")

        body = response.content
        if not body:
            raise EmptyResponseError(f"Empty response for query {query!r}")

        logger.info(f"Received {len(body)} bytes for query {query!r}")
        return body

    async def close(self):
        if self._owns_client:
            await self._http.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
