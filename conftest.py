import json

import httpx
import pytest

from macreader.config import settings
from macreader.database import BookStore
from macreader.services.http_client import CatalogHTTPClient
from macreader.services.query_client import QueryClient

SAMPLE_PAYLOAD = {
    "kind": "books#volumes",
    "totalItems": 3,
    "items": [
        {
            "id": "zyTCAlFPjgYC",
            "volumeInfo": {
                "title": "The Google Story",
                "authors": ["David A. Vise", "Mark Malseed"],
                "imageLinks": {
                    "smallThumbnail": "http://books.google.com/books/content?id=zyTCAlFPjgYC&zoom=5",
                    "thumbnail": "http://books.google.com/books/content?id=zyTCAlFPjgYC&zoom=1",
                },
            },
        },
        {
            "id": "no-title",
            "volumeInfo": {"authors": ["Nobody"]},
        },
        {
            "id": "B1hSG45JCX4C",
            "volumeInfo": {"title": "Dune"},
        },
    ],
}


@pytest.fixture
def store(tmp_path, request, monkeypatch):
    # Each test gets its own database file
    db_file = str(tmp_path / f"test_{request.node.name}.db")
    monkeypatch.setattr(settings, "db_file", db_file)
    store = BookStore(db_file)
    yield store
    store.close()


@pytest.fixture
def payload_bytes():
    return json.dumps(SAMPLE_PAYLOAD).encode("utf-8")


@pytest.fixture
def make_query_client():
    """Build a QueryClient whose requests are answered by ``handler``."""
    def factory(handler):
        http = CatalogHTTPClient(transport=httpx.MockTransport(handler))
        return QueryClient(http_client=http)
    return factory
