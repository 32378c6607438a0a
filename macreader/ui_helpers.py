import os
import json
from typing import List, Any
from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.markup import escape

# Environment variable to control CLI output mode
# Allowed values: 'plain' (default), 'json', 'rich'
OUTPUT_MODE_ENV = "MACREADER_CLI_OUTPUT"

NO_COVER = "[no cover]"
NO_COVER_ICON = "📕"

_console = Console()


def set_output_mode(mode: str) -> None:
    mode = (mode or "").lower().strip()
    if mode in {"plain", "json", "rich"}:
        os.environ[OUTPUT_MODE_ENV] = mode


def get_output_mode() -> str:
    return os.environ.get(OUTPUT_MODE_ENV, "plain").lower()


def _fields(item: Any) -> dict:
    data = item.to_dict()
    return {key: data.get(key) for key in ("id", "title", "author", "thumbnail")}


def print_results(items: List[Any], empty_message: str = "No results.") -> None:
    """Print a result list in the current output mode.
    - plain: one line per item with cover-or-placeholder, title and author
    - json: JSON array of id, title, author, thumbnail
    - rich: Rich table
    """
    mode = get_output_mode()
    rows = [_fields(i) for i in items]

    if mode == "json":
        print(json.dumps(rows, ensure_ascii=False))
        return

    if not rows:
        print(empty_message)
        return

    if mode == "rich":
        table = Table(title="📚 Books", show_lines=True, header_style="bold cyan")
        table.add_column("#", style="dim", no_wrap=True)
        table.add_column("Cover", no_wrap=True)
        table.add_column("Title", style="white")
        table.add_column("Author", style="white")
        for n, r in enumerate(rows, 1):
            cover = f"[link={r['thumbnail']}]🖼[/link]" if r["thumbnail"] else NO_COVER_ICON
            table.add_row(str(n), cover, escape(r["title"]), escape(r["author"]))
        _console.print(table)
    else:
        for n, r in enumerate(rows, 1):
            print(f"{n}. {r['thumbnail'] or NO_COVER} | {r['title']} by {r['author']}")


def print_detail(item: Any) -> None:
    """Print the detail view of a single item."""
    mode = get_output_mode()
    r = _fields(item)

    if mode == "json":
        print(json.dumps(r, ensure_ascii=False))
    elif mode == "rich":
        cover = r["thumbnail"] or f"{NO_COVER_ICON} {NO_COVER}"
        content = (
            f"{escape(cover)}\n\n"
            f"[bold]{escape(r['title'])}[/]\n"
            f"[dim]Author: {escape(r['author'])}[/]"
        )
        _console.print(Panel.fit(content, title="Book Details", border_style="blue"))
    else:
        print("Book Details")
        print(f"Cover: {r['thumbnail'] or NO_COVER}")
        print(f"Title: {r['title']}")
        print(f"Author: {r['author']}")
