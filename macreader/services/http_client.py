import logging
from typing import Optional

import httpx

logger = logging.getLogger(__name__)


class CatalogHTTPClient:
    """Thin async HTTP client with httpx's default pooling and timeouts"""

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        # No timeout or limits override: the httpx defaults apply
        self._client = httpx.AsyncClient(transport=transport, follow_redirects=True)

    async def get(self, url: str, **kwargs) -> httpx.Response:
        """Async GET request through the shared connection pool"""
        logger.debug(f"GET {url}")
        return await self._client.get(url, **kwargs)

    @property
    def is_closed(self) -> bool:
        return self._client.is_closed

    async def close(self):
        """Close the underlying HTTP client"""
        await self._client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
