"""Rich console output helpers for media-search."""

from __future__ import annotations

import os
import shutil
import subprocess
import sys
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.theme import Theme
from rich.tree import Tree

from media_search.search.ast_nodes import (
    And,
    FieldBoosted,
    FieldExact,
    FieldPrefix,
    Or,
    QueryNode,
    RangeInt,
)

# Module-level verbosity flags (set by cli.py after argument parsing)
_verbose_enabled: bool = False
_quiet_enabled: bool = False

# Module-level pager setting (None = auto, True = forced, False = disabled)
_pager_mode: bool | None = None

THEME = Theme(
    {
        "info": "cyan",
        "warning": "yellow",
        "error": "bold red",
        "success": "bold green",
        "path": "blue underline",
        "query.op": "bold magenta",
        "query.field": "bold",
        "query.term": "green",
        "doc.artist": "bold",
        "doc.title": "italic",
    }
)

# Global console instances
console = Console(theme=THEME, stderr=False)
error_console = Console(theme=THEME, stderr=True)


def set_verbosity(*, verbose: bool = False, quiet: bool = False) -> None:
    """Configure module-level verbosity flags.

    Called from the CLI entry point after argument parsing. Quiet wins
    over verbose; errors and warnings are always printed.
    """
    global _verbose_enabled, _quiet_enabled
    _quiet_enabled = quiet
    _verbose_enabled = verbose and not quiet


def set_color(enabled: bool) -> None:
    """Enable or disable color on both console instances."""
    console.no_color = not enabled
    error_console.no_color = not enabled


def set_pager(mode: bool | None) -> None:
    """Configure pager mode.

    Args:
        mode: True = always, False = never, None = auto (TTY + content > height).
    """
    global _pager_mode
    _pager_mode = mode


def pager_print(content: str) -> None:
    """Print content through ``$PAGER`` (default ``less -RFS``) if appropriate.

    Pages only if stdout is a TTY and content exceeds the terminal height,
    unless forced on or off with :func:`set_pager`.
    """
    use_pager = _pager_mode
    if use_pager is None:
        use_pager = sys.stdout.isatty() and content.count("\n") > shutil.get_terminal_size().lines

    if not use_pager:
        sys.stdout.write(content)
        sys.stdout.flush()
        return

    cmd = os.environ.get("PAGER", "less -RFS").split()
    try:
        env = os.environ.copy()
        env.setdefault("LESSCHARSET", "utf-8")
        proc = subprocess.Popen(
            cmd,
            stdin=subprocess.PIPE,
            encoding="utf-8",
            errors="replace",
            env=env,
        )
        proc.communicate(input=content)
    except (OSError, subprocess.SubprocessError):
        # Pager failed, fall back to direct output
        sys.stdout.write(content)
        sys.stdout.flush()


def info(message: str) -> None:
    """Print an info message."""
    if _quiet_enabled:
        return
    console.print(f"[info]{message}[/info]")


def warning(message: str) -> None:
    """Print a warning message to stderr."""
    error_console.print(f"[warning]Warning:[/warning] {message}")


def error(message: str, hint: str | None = None) -> None:
    """Print an error message to stderr.

    Args:
        message: The error message.
        hint: Optional hint for resolution.
    """
    error_console.print(f"[error]Error:[/error] {message}")
    if hint:
        error_console.print(f"  [info]Hint:[/info] {hint}")


def success(message: str) -> None:
    """Print a success message."""
    if _quiet_enabled:
        return
    console.print(f"[success]{message}[/success]")


def verbose(message: str) -> None:
    """Print a message only when verbose mode is enabled."""
    if _verbose_enabled:
        console.print(f"[info]{message}[/info]")


def create_table(title: str | None = None, **kwargs: Any) -> Table:
    """Create a styled table.

    Args:
        title: Optional table title.
        **kwargs: Additional Table arguments.

    Returns:
        Rich Table instance.
    """
    return Table(title=title, **kwargs)


def _node_label(node: QueryNode) -> str:
    if isinstance(node, And):
        return "[query.op]AND[/query.op]"
    if isinstance(node, Or):
        suffix = " [dim](matches nothing)[/dim]" if not node.children else ""
        return f"[query.op]OR[/query.op]{suffix}"
    if isinstance(node, RangeInt):
        bounds = escape(f"[{node.low} .. {node.high}]")
        return f"[query.field]{node.field}[/query.field] in {bounds}"

    if not isinstance(node, (FieldExact, FieldBoosted, FieldPrefix)):
        raise TypeError(f"Not a query node: {node!r}")

    term = escape(node.term)
    label = f"[query.field]{node.field}[/query.field] = [query.term]{term}[/query.term]"
    if isinstance(node, FieldPrefix):
        label += "[query.op]*[/query.op]"
        if node.boost != 1.0:
            label += f" ^{node.boost}"
    elif isinstance(node, FieldBoosted):
        label += f" ^{node.weight}"
    return label


def build_query_tree(node: QueryNode, tree: Tree | None = None) -> Tree:
    """Build a rich Tree mirroring a query tree."""
    branch = Tree(_node_label(node)) if tree is None else tree.add(_node_label(node))
    if isinstance(node, (And, Or)):
        for child in node.children:
            build_query_tree(child, branch)
    return branch


def print_query_tree(node: QueryNode) -> None:
    """Print a query tree to the console."""
    console.print(build_query_tree(node))
