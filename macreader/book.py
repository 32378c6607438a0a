from __future__ import annotations

from macreader.services.result_parser import CatalogItem


class Book:
    """Represents a single saved book on the local shelf."""

    def __init__(self, id: str, title: str, author: str, thumbnail: str | None = None,
                 created_at: str | None = None) -> None:
        self.id = id.strip()
        self.title = title.strip()
        self.author = author.strip()
        self.thumbnail = thumbnail
        self.created_at = created_at

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "author": self.author,
            "thumbnail": self.thumbnail,
            "created_at": self.created_at,
        }

    @staticmethod
    def from_dict(data: dict) -> "Book":
        return Book(
            id=data["id"],
            title=data["title"],
            author=data["author"],
            thumbnail=data.get("thumbnail"),
            created_at=data.get("created_at"),
        )

    @staticmethod
    def from_catalog_item(item: CatalogItem) -> "Book":
        return Book(id=item.id, title=item.title, author=item.author, thumbnail=item.thumbnail)
