"""``xivgraph tree <path>`` — Show everything below a path.

Expands PATH level by level through the graph's child queries. Exporting
a modified file must carry every descendant, so this is the file set an
export of PATH would contain.

Exit Codes:
    0 — Tree expanded.
    2 — Path is not a dependency graph file.
    3 — Snapshot file could not be loaded.
"""

from __future__ import annotations

import asyncio
import sys

import click

from xivgraph.cli.common import (
    EXIT_NOT_IN_GRAPH,
    emit_error,
    emit_json,
    format_option,
    load_graph,
    run,
    snapshot_option,
)
from xivgraph.core.classification import DependencyLevel, classify_level
from xivgraph.core.graph.engine import DependencyGraph


async def _expand(graph: DependencyGraph, path: str) -> tuple[list[str], dict[str, list[str]]]:
    """Return the descendants of ``path`` and the children of every node."""
    descendants = await graph.get_descendant_files(path) or []
    nodes = [path, *descendants]
    results = await asyncio.gather(*(graph.get_child_files(node) for node in nodes))
    return descendants, {node: kids or [] for node, kids in zip(nodes, results)}


@click.command("tree")
@click.argument("path")
@snapshot_option
@format_option
def tree_command(path: str, snapshot: str | None, output_format: str) -> None:
    """Show the dependency tree below PATH."""
    if classify_level(path) is DependencyLevel.INVALID:
        emit_error(f"Not a dependency graph file: {path}", output_format)
        sys.exit(EXIT_NOT_IN_GRAPH)

    graph = load_graph(snapshot, output_format)
    descendants, children = run(_expand(graph, path))

    if output_format == "json":
        emit_json({"path": path, "children": children, "descendants": descendants})
    else:
        from xivgraph.cli.output import print_tree
        levels = {p: classify_level(p) for p in children}
        print_tree(path, children, levels)
