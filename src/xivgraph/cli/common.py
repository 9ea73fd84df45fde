"""Shared options and graph-loading helpers for CLI commands."""

from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path
from typing import Any, Awaitable, Callable, TypeVar

import click

from xivgraph.backends.snapshot import SNAPSHOT_ENV_VAR, ArchiveSnapshot
from xivgraph.core.graph.engine import DependencyGraph
from xivgraph.exceptions import SnapshotError

F = TypeVar("F", bound=Callable[..., Any])
T = TypeVar("T")

# Exit code when the queried path is not part of the dependency graph.
EXIT_NOT_IN_GRAPH: int = 2
EXIT_BAD_SNAPSHOT: int = 3


def snapshot_option(func: F) -> F:
    """Add ``--snapshot`` (falling back to ``$XIVGRAPH_SNAPSHOT``) to a command."""
    return click.option(
        "--snapshot",
        type=click.Path(dir_okay=False),
        envvar=SNAPSHOT_ENV_VAR,
        default=None,
        help=f"Archive snapshot file (YAML or JSON). Defaults to ${SNAPSHOT_ENV_VAR}.",
    )(func)


def format_option(func: F) -> F:
    """Add ``--format text|json`` to a command."""
    return click.option(
        "--format", "output_format",
        type=click.Choice(["text", "json"]),
        default="text",
        help="Output format (default: text).",
    )(func)


def load_graph(snapshot: str | None, output_format: str) -> DependencyGraph:
    """Build the graph for a command, exiting if the snapshot is unusable.

    Without a snapshot the graph still resolves everything derivable from
    the path alone; queries that need archive data come back empty.
    """
    if snapshot is None:
        return ArchiveSnapshot().to_graph()
    try:
        return ArchiveSnapshot.read(Path(snapshot)).to_graph()
    except SnapshotError as exc:
        emit_error(str(exc), output_format)
        sys.exit(EXIT_BAD_SNAPSHOT)


def run(coro: Awaitable[T]) -> T:
    """Drive a graph coroutine from synchronous click code."""
    return asyncio.run(coro)


def emit_error(message: str, output_format: str) -> None:
    if output_format == "json":
        click.echo(json.dumps({"error": message}))
    else:
        click.echo(f"Error: {message}")


def emit_json(data: Any) -> None:
    click.echo(json.dumps(data, indent=2))
