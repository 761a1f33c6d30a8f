"""Free-text search of the index."""

from __future__ import annotations

import click

from media_search.cli import Context, pass_context
from media_search.commands._common import (
    EXIT_INDEX_ERROR,
    EXIT_NO_RESULTS,
    EXIT_SUCCESS,
    explain,
    print_documents,
    require_config,
    select_folders,
)
from media_search.exceptions import MediaSearchError
from media_search.index.searcher import execute
from media_search.index.session import get_index_session, require_index
from media_search.search.criteria import SearchCriteria
from media_search.search.index_type import IndexType
from media_search.search.query import QueryFactory
from media_search.utils.output import error, info, verbose


@click.command("search")
@click.argument("query", nargs=-1, required=True)
@click.option(
    "--type",
    "-t",
    "type_name",
    type=click.Choice([t.name.lower() for t in IndexType], case_sensitive=False),
    default="song",
    show_default=True,
    help="Kind of entity to search",
)
@click.option("--offset", "-o", type=click.IntRange(min=0), default=0, help="Skip this many hits")
@click.option(
    "--count",
    "-n",
    type=click.IntRange(min=0),
    default=None,
    help="Maximum number of hits (default: search.default_count from config)",
)
@click.option(
    "--folder",
    "-F",
    "folder_ids",
    type=int,
    multiple=True,
    help="Restrict to this configured folder id (repeatable)",
)
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["table", "json"]),
    default="table",
    help="Output format (default: table)",
)
@click.option("--explain", "show_query", is_flag=True, default=False, help="Print the built query")
@pass_context
def cli(
    ctx: Context,
    query: tuple[str, ...],
    type_name: str,
    offset: int,
    count: int | None,
    folder_ids: tuple[int, ...],
    output_format: str,
    show_query: bool,
) -> None:
    """Search artists, albums or songs.

    QUERY words must all match. The last word matches as a prefix, so
    partially typed names are found.

    \b
    Examples:
      media-search search pink flo
      media-search search --type album --explain dark side
      media-search search --type artist_id3 --folder 1 beat
    """
    config = require_config(ctx)
    index_type = IndexType.from_name(type_name)
    folders = select_folders(config, folder_ids)
    query_string = " ".join(query)

    criteria = SearchCriteria(
        query=query_string,
        offset=offset,
        count=config.default_count if count is None else count,
    )
    built = QueryFactory().search(criteria, folders, index_type)
    if show_query:
        explain(built)

    try:
        require_index(config.index_db)
        with get_index_session(config.index_db) as session:
            result = execute(
                session, built, index_type, offset=criteria.offset, count=criteria.count
            )

            if not result.documents:
                info(f"No results for: {query_string}")
                raise SystemExit(EXIT_NO_RESULTS)

            verbose(f"{result.total_hits} hits, showing {len(result.documents)} from {offset}")
            print_documents(
                result.documents,
                output_format,
                title=f"Search: {query_string} ({result.total_hits} results)",
            )
    except MediaSearchError as e:
        error(str(e))
        raise SystemExit(EXIT_INDEX_ERROR)

    raise SystemExit(EXIT_SUCCESS)
