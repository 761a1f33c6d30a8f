"""Command-line interface for media-search."""

from __future__ import annotations

import logging
import os
from pathlib import Path

import click

from media_search import __version__
from media_search.config import Config, load_config
from media_search.utils.output import (
    error,
    set_color,
    set_pager,
    set_verbosity,
    warning,
)

LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"


class Context:
    """State handed from the top-level group to its commands."""

    def __init__(self) -> None:
        self.config: Config | None = None


pass_context = click.make_pass_decorator(Context, ensure=True)


def _configure_logging(debug: bool) -> None:
    # Query construction logs the rendered query at DEBUG level
    if debug:
        logging.basicConfig(level=logging.DEBUG, format=LOG_FORMAT)


@click.group()
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=False, path_type=Path),
    help="Path to config file (default: ~/.config/media-search/config.toml)",
)
@click.option(
    "--index-db",
    "-I",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Path to the index database (overrides config)",
)
@click.option(
    "--no-color",
    is_flag=True,
    default=False,
    help="Disable colored output",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    default=False,
    help="Show hit counts and configuration warnings",
)
@click.option(
    "--debug",
    is_flag=True,
    default=False,
    help="Log every built query to stderr (implies --verbose)",
)
@click.option(
    "--quiet",
    "-q",
    is_flag=True,
    default=False,
    help="Suppress informational messages; results and errors are still shown",
)
@click.option(
    "--pager/--no-pager",
    default=None,
    help="Force pager on/off for result tables (default: auto-detect)",
)
@click.version_option(version=__version__, prog_name="media-search")
@click.pass_context
def cli(
    ctx: click.Context,
    config: Path | None,
    index_db: Path | None,
    no_color: bool,
    verbose: bool,
    debug: bool,
    quiet: bool,
    pager: bool | None,
) -> None:
    """media-search: Field-weighted, folder-scoped media library search.

    Searches an index of artists, albums and songs. Every search is
    restricted to the music folders listed in the configuration.

    Configuration is loaded from ~/.config/media-search/config.toml by default.
    Use --config to specify an alternative configuration file.

    Examples:

        # Load documents into the index
        media-search index load library.json

        # Find albums, showing the query that was run
        media-search search --type album --explain dark side
    """
    app_ctx = ctx.ensure_object(Context)
    verbose = verbose or debug

    set_verbosity(verbose=verbose, quiet=quiet)
    set_pager(pager)
    _configure_logging(debug)

    # NO_COLOR is honoured even when the config enables color
    disable_color = no_color or os.environ.get("NO_COLOR") is not None
    if disable_color:
        set_color(False)

    try:
        loaded_config, warnings = load_config(config)
    except Exception as e:
        error(str(e))
        ctx.exit(1)
        return

    if index_db is not None:
        loaded_config.index_db = index_db.expanduser()
    if not disable_color and not loaded_config.colored_output:
        set_color(False)

    if verbose and not quiet:
        for warn in warnings:
            warning(warn)

    app_ctx.config = loaded_config


@cli.command("help")
@click.argument("command", required=False, nargs=-1)
@click.pass_context
def help_cmd(ctx: click.Context, command: tuple[str, ...]) -> None:
    """Show help for a command, e.g. ``help random songs``."""
    group = cli
    for name in command:
        cmd = group.get_command(ctx, name)
        if cmd is None:
            error(f"Unknown command: {name}")
            ctx.exit(1)
            return
        if isinstance(cmd, click.Group):
            group = cmd
        else:
            click.echo(cmd.get_help(ctx))
            return
    click.echo(group.get_help(ctx))


def register_commands() -> None:
    """Attach every command module found in :mod:`media_search.commands`."""
    from media_search.commands import discover_commands

    for command in discover_commands():
        cli.add_command(command)


# Subcommands must be attached before click parses argv
register_commands()
