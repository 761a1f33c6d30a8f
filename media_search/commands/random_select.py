"""Random selections of songs and albums."""

from __future__ import annotations

import click

from media_search.cli import Context, pass_context
from media_search.commands._common import (
    EXIT_INDEX_ERROR,
    EXIT_NO_RESULTS,
    explain,
    print_documents,
    require_config,
    select_folders,
)
from media_search.exceptions import MediaSearchError
from media_search.index.searcher import get_random_albums, get_random_albums_id3, get_random_songs
from media_search.index.session import get_index_session, require_index
from media_search.search.criteria import RandomSearchCriteria
from media_search.search.query import QueryFactory
from media_search.utils.output import error, info

_folder_option = click.option(
    "--folder",
    "-F",
    "folder_ids",
    type=int,
    multiple=True,
    help="Restrict to this configured folder id (repeatable)",
)
_count_option = click.option(
    "--count",
    "-n",
    type=click.IntRange(min=0),
    default=None,
    help="Number of items (default: search.random_count from config)",
)
_format_option = click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["table", "json"]),
    default="table",
    help="Output format (default: table)",
)
_explain_option = click.option(
    "--explain", "show_query", is_flag=True, default=False, help="Print the built query"
)


@click.group("random")
def cli() -> None:
    """Pick random songs or albums from the configured folders."""


@cli.command("songs")
@_count_option
@click.option("--genre", "-g", default=None, help="Exact genre, e.g. 'Classic Rock'")
@click.option("--from-year", type=int, default=None, help="Earliest year (inclusive)")
@click.option("--to-year", type=int, default=None, help="Latest year (inclusive)")
@_folder_option
@_format_option
@_explain_option
@pass_context
def songs_cmd(
    ctx: Context,
    count: int | None,
    genre: str | None,
    from_year: int | None,
    to_year: int | None,
    folder_ids: tuple[int, ...],
    output_format: str,
    show_query: bool,
) -> None:
    """Random music, optionally by genre and year range."""
    config = require_config(ctx)
    criteria = RandomSearchCriteria(
        count=config.random_count if count is None else count,
        genre=genre,
        from_year=from_year,
        to_year=to_year,
        folders=tuple(select_folders(config, folder_ids)),
    )
    if show_query:
        explain(QueryFactory().get_random_songs(criteria))

    try:
        require_index(config.index_db)
        with get_index_session(config.index_db) as session:
            documents = get_random_songs(session, criteria)
            if not documents:
                info("No matching songs")
                raise SystemExit(EXIT_NO_RESULTS)
            print_documents(documents, output_format, title=f"{len(documents)} random songs")
    except MediaSearchError as e:
        error(str(e))
        raise SystemExit(EXIT_INDEX_ERROR)


@cli.command("albums")
@_count_option
@click.option("--id3", is_flag=True, default=False, help="Pick from tag-based albums")
@_folder_option
@_format_option
@_explain_option
@pass_context
def albums_cmd(
    ctx: Context,
    count: int | None,
    id3: bool,
    folder_ids: tuple[int, ...],
    output_format: str,
    show_query: bool,
) -> None:
    """Random albums."""
    config = require_config(ctx)
    folders = select_folders(config, folder_ids)
    count = config.random_count if count is None else count

    if show_query:
        factory = QueryFactory()
        explain(
            factory.get_random_albums_id3(folders) if id3 else factory.get_random_albums(folders)
        )

    try:
        require_index(config.index_db)
        with get_index_session(config.index_db) as session:
            if id3:
                documents = get_random_albums_id3(session, count, folders)
            else:
                documents = get_random_albums(session, count, folders)
            if not documents:
                info("No albums found")
                raise SystemExit(EXIT_NO_RESULTS)
            print_documents(documents, output_format, title=f"{len(documents)} random albums")
    except MediaSearchError as e:
        error(str(e))
        raise SystemExit(EXIT_INDEX_ERROR)
