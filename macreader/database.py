import logging
import sqlite3
from typing import List, Optional

from macreader.book import Book

logger = logging.getLogger(__name__)


class BookStore:
    """Sqlite-backed shelf of saved books.

    The store is an explicit handle: construct one and pass it to whatever
    needs it. Nothing in the search pipeline reads or writes it.
    """

    def __init__(self, db_file: str) -> None:
        self.db_file = db_file
        self._conn = sqlite3.connect(db_file)
        self._conn.row_factory = sqlite3.Row
        self.create_tables()

    def create_tables(self) -> None:
        """Create the books table and its indexes if they do not exist."""
        cursor = self._conn.cursor()
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS books (
                id TEXT PRIMARY KEY,
                title TEXT NOT NULL,
                author TEXT NOT NULL,
                thumbnail TEXT,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)
        cursor.execute("CREATE INDEX IF NOT EXISTS idx_books_title ON books(title)")
        self._conn.commit()

    def add_book(self, book: Book) -> Book:
        """Save a book. Prevent duplicates by id."""
        try:
            self._conn.execute(
                "INSERT INTO books (id, title, author, thumbnail) VALUES (?, ?, ?, ?)",
                (book.id, book.title, book.author, book.thumbnail)
            )
            self._conn.commit()
        except sqlite3.IntegrityError as e:
            raise ValueError(f"Book with ID {book.id} already exists.") from e
        logger.info(f"Saved book {book.id}: {book.title}")
        return self.find_book(book.id)

    def remove_book(self, book_id: str) -> bool:
        cursor = self._conn.execute("DELETE FROM books WHERE id = ?", (book_id,))
        self._conn.commit()
        removed = cursor.rowcount > 0
        if removed:
            logger.info(f"Removed book {book_id}")
        return removed

    def find_book(self, book_id: str) -> Optional[Book]:
        row = self._conn.execute("SELECT * FROM books WHERE id = ?", (book_id,)).fetchone()
        return Book.from_dict(dict(row)) if row else None

    def list_books(self) -> List[Book]:
        """All saved books, ascending by title."""
        rows = self._conn.execute("SELECT * FROM books ORDER BY title ASC").fetchall()
        return [Book.from_dict(dict(row)) for row in rows]

    def close(self) -> None:
        self._conn.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
