"""Subcommands of the ``media-search`` CLI.

Each public module here exposes its click command or group as ``cli``;
modules starting with an underscore hold shared helpers.
"""

from __future__ import annotations

import importlib
import pkgutil
from typing import TYPE_CHECKING

import click

if TYPE_CHECKING:
    from collections.abc import Iterator


def discover_commands() -> Iterator[click.Command]:
    """Yield the ``cli`` command of every public submodule, in name order."""
    # Names rather than __path__ order keep `--help` listings stable
    names = sorted(m.name for m in pkgutil.iter_modules(__path__))

    for name in names:
        if name.startswith("_"):
            continue  # helpers, not commands

        module = importlib.import_module(f"{__name__}.{name}")

        # Modules without a click command are skipped
        cmd = getattr(module, "cli", None)
        if isinstance(cmd, click.Command):
            yield cmd
