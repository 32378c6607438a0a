"""Search controller.

Searches run as background tasks on the event loop. A finished search never
touches the UI state itself: it posts a completion on a queue, and the single
consumer (``drain`` or ``run``) is the only code that writes ``ResultsView``.
Overlapping searches are not cancelled; the last completion applied wins.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Set

from macreader.services.errors import CatalogError
from macreader.services.query_client import QueryClient
from macreader.services.result_parser import CatalogItem, ResultParser

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SearchQuery:
    text: str

    @classmethod
    def parse(cls, raw: Optional[str]) -> "SearchQuery":
        text = (raw or "").strip()
        if not text:
            raise ValueError("Search query cannot be empty.")
        return cls(text)


@dataclass
class SearchCompletion:
    query: SearchQuery
    items: List[CatalogItem]


@dataclass
class ResultsView:
    """UI-visible results of the most recently applied search."""
    query: Optional[str] = None
    items: List[CatalogItem] = field(default_factory=list)
    version: int = 0

    def replace(self, query: str, items: List[CatalogItem]) -> None:
        self.query = query
        self.items = list(items)
        self.version += 1


class SearchController:
    def __init__(self, client: QueryClient, parser: Optional[ResultParser] = None,
                 view: Optional[ResultsView] = None) -> None:
        self.client = client
        self.parser = parser or ResultParser()
        self.view = view or ResultsView()
        self._completions: "asyncio.Queue[SearchCompletion]" = asyncio.Queue()
        self._pending: Set[asyncio.Task] = set()

    @property
    def in_flight(self) -> int:
        return len(self._pending)

    def submit(self, text: Optional[str]) -> Optional[asyncio.Task]:
        """Start a search in the background and return its task.

        Blank input is ignored and returns None without any network call.
        """
        try:
            query = SearchQuery.parse(text)
        except ValueError:
            logger.info("Ignoring blank search query")
            return None

        task = asyncio.create_task(self._search(query))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def _search(self, query: SearchQuery) -> None:
        try:
            data = await self.client.search(query.text)
            items = self.parser.parse(data)
        except CatalogError as e:
            logger.error(f"Search for {query.text!r} failed ({e.__class__.__name__}): {e}")
            return
        except Exception:
            logger.exception(f"Unexpected error while searching for {query.text!r}")
            return

        logger.info(f"Search for {query.text!r} returned {len(items)} item(s)")
        await self._completions.put(SearchCompletion(query, items))

    async def wait(self) -> None:
        """Wait for every search submitted so far to finish."""
        while self._pending:
            await asyncio.gather(*list(self._pending))

    def drain(self) -> int:
        """Apply all queued completions to the view. Returns how many were applied."""
        applied = 0
        while True:
            try:
                completion = self._completions.get_nowait()
            except asyncio.QueueEmpty:
                return applied
            self._apply(completion)
            self._completions.task_done()
            applied += 1

    async def run(self) -> None:
        """Consume completions forever, applying each one as it arrives."""
        while True:
            completion = await self._completions.get()
            self._apply(completion)
            self._completions.task_done()

    async def join(self) -> None:
        """Wait until every queued completion has been applied."""
        await self._completions.join()

    def _apply(self, completion: SearchCompletion) -> None:
        self.view.replace(completion.query.text, completion.items)
