import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import httpx

from macreader.services.errors import DecodeError

logger = logging.getLogger(__name__)

UNKNOWN_AUTHOR = "Unknown Author"


@dataclass(frozen=True)
class CatalogItem:
    """A single volume from a catalog search response"""
    id: str
    title: str
    author: str = UNKNOWN_AUTHOR
    thumbnail: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "author": self.author,
            "thumbnail": self.thumbnail,
        }


class ResultParser:
    """Turns a volumes search payload into CatalogItem records"""

    def parse(self, data: bytes) -> List[CatalogItem]:
        """
        Parse a raw search response

        Items missing ``id``, ``volumeInfo`` or ``volumeInfo.title`` are
        dropped. A payload without an ``items`` list yields no results.

        Args:
            data: Raw response body

        Returns:
            CatalogItem list in payload order

        Raises:
            DecodeError: if the body is not a JSON object
        """
        try:
            document = json.loads(data)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise DecodeError(f"Response is not valid JSON: {e}") from e

        if not isinstance(document, dict):
            raise DecodeError(f"Expected a JSON object, got {type(document).__name__}")

        items = document.get("items")
        if not isinstance(items, list):
            logger.info("Response has no items list")
            return []

        results = []
        for raw in items:
            item = self._parse_item(raw)
            if item is not None:
                results.append(item)

        dropped = len(items) - len(results)
        if dropped:
            logger.info(f"Dropped {dropped} malformed item(s) out of {len(items)}")
        return results

    def _parse_item(self, raw: Any) -> Optional[CatalogItem]:
        if not isinstance(raw, dict):
            return None

        item_id = raw.get("id")
        volume_info = raw.get("volumeInfo")
        if not isinstance(item_id, str) or not isinstance(volume_info, dict):
            return None

        title = volume_info.get("title")
        if not isinstance(title, str):
            return None

        return CatalogItem(
            id=item_id,
            title=title,
            author=self._parse_author(volume_info.get("authors")),
            thumbnail=self._parse_thumbnail(volume_info.get("imageLinks")),
        )

    @staticmethod
    def _parse_author(authors: Any) -> str:
        if isinstance(authors, list) and all(isinstance(a, str) for a in authors):
            return ", ".join(authors)
        return UNKNOWN_AUTHOR

    @staticmethod
    def _parse_thumbnail(image_links: Any) -> Optional[str]:
        if not isinstance(image_links, dict):
            return None

        thumbnail = image_links.get("thumbnail")
        if not isinstance(thumbnail, str):
            return None

        if thumbnail.startswith("http://"):
            thumbnail = "https://" + thumbnail[len("http://"):]

        try:
            parsed = httpx.URL(thumbnail)
        except httpx.InvalidURL:
            logger.debug(f"Ignoring unparseable thumbnail: {thumbnail!r}")
            return None

        if parsed.scheme not in ("http", "https") or not parsed.host:
            logger.debug(f"Ignoring non-absolute thumbnail: {thumbnail!r}")
            return None
        return thumbnail
