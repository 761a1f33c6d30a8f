"""Manage the search index."""

from __future__ import annotations

import json
from pathlib import Path

import click

from media_search.cli import Context, pass_context
from media_search.commands._common import (
    EXIT_INDEX_ERROR,
    EXIT_USAGE_ERROR,
    require_config,
)
from media_search.exceptions import MediaSearchError
from media_search.index.session import get_index_session, require_index
from media_search.index.writer import clear_documents, count_documents, load_documents
from media_search.search.index_type import IndexType
from media_search.utils.output import console, create_table, error, info, success

_TYPE_CHOICE = click.Choice([t.name.lower() for t in IndexType], case_sensitive=False)


@click.group("index")
def cli() -> None:
    """Load, inspect and clear the search index."""


@cli.command("load")
@click.argument("source", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--replace",
    is_flag=True,
    default=False,
    help="Remove all existing documents before loading",
)
@pass_context
def load_cmd(ctx: Context, source: Path, replace: bool) -> None:
    """Load documents from a JSON file.

    SOURCE holds a JSON array of objects, each with a "type" (artist,
    album, song, artist_id3, album_id3), a "ref" and its fields:

    \b
      [{"type": "album", "ref": "a1", "album": "Abbey Road",
        "artist": "The Beatles", "folder": "/var/music"}]
    """
    config = require_config(ctx)

    try:
        records = json.loads(source.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        error(f"Cannot read {source}: {e}")
        raise SystemExit(EXIT_USAGE_ERROR)

    if not isinstance(records, list) or not all(isinstance(r, dict) for r in records):
        error(f"{source} must contain a JSON array of objects")
        raise SystemExit(EXIT_USAGE_ERROR)

    try:
        with get_index_session(config.index_db) as session:
            if replace:
                removed = clear_documents(session)
                info(f"Removed {removed} existing documents")
            count = load_documents(session, records)
    except MediaSearchError as e:
        error(str(e))
        raise SystemExit(EXIT_INDEX_ERROR)

    success(f"Indexed {count} documents into {config.index_db}")


@cli.command("clear")
@click.option(
    "--type",
    "-t",
    "type_name",
    type=_TYPE_CHOICE,
    default=None,
    help="Only remove documents of this type",
)
@pass_context
def clear_cmd(ctx: Context, type_name: str | None) -> None:
    """Remove documents from the index."""
    config = require_config(ctx)
    index_type = IndexType.from_name(type_name) if type_name else None

    try:
        require_index(config.index_db)
        with get_index_session(config.index_db) as session:
            removed = clear_documents(session, index_type)
    except MediaSearchError as e:
        error(str(e))
        raise SystemExit(EXIT_INDEX_ERROR)

    success(f"Removed {removed} documents")


@cli.command("stats")
@pass_context
def stats_cmd(ctx: Context) -> None:
    """Show the number of documents per type."""
    config = require_config(ctx)

    try:
        require_index(config.index_db)
        with get_index_session(config.index_db) as session:
            counts = count_documents(session)
    except MediaSearchError as e:
        error(str(e))
        raise SystemExit(EXIT_INDEX_ERROR)

    table = create_table(title=str(config.index_db), show_header=True, header_style="bold")
    table.add_column("Type")
    table.add_column("Documents", justify="right")
    for index_type in IndexType:
        table.add_row(index_type.name.lower(), str(counts.get(index_type.name, 0)))
    console.print(table)
