import asyncio
import logging
from typing import Optional

import typer
from rich.prompt import Prompt

from macreader.book import Book
from macreader.config import settings
from macreader.controller import ResultsView, SearchController
from macreader.database import BookStore
from macreader.services.query_client import QueryClient
from macreader.ui_helpers import set_output_mode, print_results, print_detail

EXIT_WORDS = {"q", "quit", "exit"}


def configure_logging() -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def make_client() -> QueryClient:
    return QueryClient()


def open_store() -> BookStore:
    return BookStore(settings.db_file)


async def _run_search(query: str) -> ResultsView:
    async with make_client() as client:
        controller = SearchController(client)
        controller.submit(query)
        await controller.wait()
        controller.drain()
        return controller.view


def _version_callback(value: bool):
    if value:
        print(f"{settings.app_name} {settings.app_version}")
        raise typer.Exit()


# --- Typer CLI application ---
app = typer.Typer(help=f"{settings.app_name}: search the Google Books catalog")


@app.callback()
def _global_options(
    output: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output format: plain | json | rich (default: plain)",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit",
    ),
):
    """Global options for the CLI (e.g. output mode)."""
    configure_logging()
    if output:
        set_output_mode(output)


@app.command("search")
def cli_search(
    query: str = typer.Argument(..., help="Search query"),
    select: Optional[int] = typer.Option(None, "--select", "-s", help="Show details of result N"),
    save: Optional[int] = typer.Option(None, "--save", help="Save result N to the shelf"),
):
    """Search the catalog and list the results."""
    if not query.strip():
        print("Search query cannot be empty.")
        raise typer.Exit(code=1)

    view = asyncio.run(_run_search(query))
    if view.version == 0:
        print("Search failed; see log for details.")
        raise typer.Exit(code=1)

    if select is None and save is None:
        print_results(view.items, empty_message=f"No books found for '{query.strip()}'.")
        return

    for n in (select, save):
        if n is not None and not 1 <= n <= len(view.items):
            print(f"No result #{n}; the search returned {len(view.items)} item(s).")
            raise typer.Exit(code=1)

    if select is not None:
        print_detail(view.items[select - 1])

    if save is not None:
        item = view.items[save - 1]
        store = open_store()
        try:
            store.add_book(Book.from_catalog_item(item))
            print(f"Saved: {item.title} by {item.author}")
        except ValueError as e:
            print(f"Error: {e}")
        finally:
            store.close()


async def _browse() -> None:
    async with make_client() as client:
        controller = SearchController(client)
        while True:
            try:
                text = await asyncio.to_thread(Prompt.ask, "Search (q to quit)")
            except EOFError:
                break
            if text.strip().lower() in EXIT_WORDS:
                break
            if controller.submit(text) is None:
                print("Enter a search term.")
                continue
            await controller.wait()
            if controller.drain():
                print_results(controller.view.items, empty_message=f"No books found for '{text.strip()}'.")
            else:
                print("Search failed; results unchanged.")


@app.command("browse")
def cli_browse():
    """Interactive search loop; each line is a new search."""
    asyncio.run(_browse())


@app.command("shelf")
def cli_shelf():
    """List saved books sorted by title."""
    store = open_store()
    try:
        print_results(store.list_books(), empty_message="No saved books.")
    finally:
        store.close()


@app.command("remove")
def cli_remove(book_id: str):
    """Remove a saved book by catalog ID."""
    store = open_store()
    try:
        if store.remove_book(book_id):
            print(f"Book with ID {book_id} has been removed.")
        else:
            print(f"Book with ID {book_id} not found.")
    finally:
        store.close()


if __name__ == "__main__":
    app()
