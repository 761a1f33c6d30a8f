"""Helpers shared by the search commands."""

from __future__ import annotations

import io
import json

import click
from rich.console import Console
from rich.markup import escape

from media_search.cli import Context
from media_search.config import Config
from media_search.index.models import IndexDocument
from media_search.search.ast_nodes import QueryNode
from media_search.search.criteria import MusicFolder
from media_search.search.render import format_query
from media_search.utils.output import (
    THEME,
    console,
    create_table,
    error,
    info,
    pager_print,
    print_query_tree,
)

EXIT_SUCCESS = 0
EXIT_NO_RESULTS = 0
EXIT_USAGE_ERROR = 1
EXIT_INDEX_ERROR = 2
EXIT_NO_CONFIG = 3

# Table columns: (header, IndexDocument attribute, style)
_COLUMNS: list[tuple[str, str, str | None]] = [
    ("Ref", "ref", None),
    ("Artist", "artist", "doc.artist"),
    ("Album", "album", None),
    ("Title", "title", "doc.title"),
    ("Genre", "genre", None),
    ("Year", "year", None),
    ("Folder", "folder", "path"),
    ("Folder ID", "folder_id", None),
]


def require_config(ctx: Context) -> Config:
    """Return the loaded configuration or exit."""
    if ctx.config is None:
        error("Configuration not loaded")
        raise SystemExit(EXIT_NO_CONFIG)
    return ctx.config


def select_folders(config: Config, folder_ids: tuple[int, ...]) -> list[MusicFolder]:
    """Configured folders, optionally narrowed to *folder_ids*.

    Ids that are not configured are rejected, so a search can never reach
    outside the configured folder set.
    """
    if not folder_ids:
        return list(config.folders)

    selected: list[MusicFolder] = []
    for folder_id in folder_ids:
        folder = config.get_folder(folder_id)
        if folder is None:
            available = ", ".join(str(f.id) for f in config.folders) or "none"
            error(f"Unknown folder id: {folder_id}", hint=f"Configured folders: {available}")
            raise SystemExit(EXIT_USAGE_ERROR)
        selected.append(folder)
    return selected


def explain(query: QueryNode) -> None:
    """Print the query in textual and tree form."""
    console.print(f"[info]Query:[/info] {escape(format_query(query))}", soft_wrap=True)
    print_query_tree(query)


def document_to_dict(doc: IndexDocument) -> dict:
    """JSON-friendly view of a document."""
    return {
        "type": doc.index_type,
        "ref": doc.ref,
        "artist": doc.artist,
        "album": doc.album,
        "title": doc.title,
        "genre": doc.genre,
        "mediaType": doc.media_type,
        "year": doc.year,
        "folder": doc.folder,
        "folderId": doc.folder_id,
    }


def print_documents(
    documents: list[IndexDocument], output_format: str, title: str | None = None
) -> None:
    """Print documents as a table or JSON array."""
    if output_format == "json":
        click.echo(json.dumps([document_to_dict(d) for d in documents], indent=2))
        return

    if title:
        info(title)

    # Only show columns with at least one value
    columns = [c for c in _COLUMNS if any(getattr(d, c[1]) is not None for d in documents)]

    table = create_table(show_header=True, header_style="bold")
    for header, _attr, style in columns:
        kwargs: dict = {}
        if style:
            kwargs["style"] = style
        table.add_column(header, no_wrap=True, **kwargs)

    for doc in documents:
        table.add_row(
            *(
                "" if getattr(doc, attr) is None else escape(str(getattr(doc, attr)))
                for _h, attr, _s in columns
            )
        )

    buf = io.StringIO()
    render_console = Console(
        file=buf,
        theme=THEME,
        force_terminal=not console.no_color,
        width=1000,
        no_color=console.no_color,
    )
    render_console.print(table)
    pager_print(buf.getvalue())
