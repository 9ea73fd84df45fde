"""``xivgraph parents|children|siblings <path>`` — One-step traversal.

- ``parents``  — files one level up that reference PATH.
- ``children`` — files one level down that PATH references.
- ``siblings`` — every child of every parent of PATH, PATH included.

Exit Codes:
    0 — Query ran (an empty result is still success).
    2 — Path is not a dependency graph file.
    3 — Snapshot file could not be loaded.
"""

from __future__ import annotations

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
from xivgraph.core.classification import classify_level

_QUERIES: dict[str, str] = {
    "parents": "get_parent_files",
    "children": "get_child_files",
    "siblings": "get_sibling_files",
}


def _traverse(relation: str, path: str, snapshot: str | None, output_format: str) -> None:
    graph = load_graph(snapshot, output_format)
    query = getattr(graph, _QUERIES[relation])
    result = run(query(path))

    if result is None:
        emit_error(f"Not a dependency graph file: {path}", output_format)
        sys.exit(EXIT_NOT_IN_GRAPH)

    if output_format == "json":
        emit_json({"path": path, "level": classify_level(path).name, relation: result})
    else:
        from xivgraph.cli.output import print_paths
        print_paths(relation.capitalize(), result)


@click.command("parents")
@click.argument("path")
@snapshot_option
@format_option
def parents_command(path: str, snapshot: str | None, output_format: str) -> None:
    """List the files one level above PATH that reference it."""
    _traverse("parents", path, snapshot, output_format)


@click.command("children")
@click.argument("path")
@snapshot_option
@format_option
def children_command(path: str, snapshot: str | None, output_format: str) -> None:
    """List the files one level below PATH that it references."""
    _traverse("children", path, snapshot, output_format)


@click.command("siblings")
@click.argument("path")
@snapshot_option
@format_option
def siblings_command(path: str, snapshot: str | None, output_format: str) -> None:
    """List the files sharing a parent with PATH, PATH included."""
    _traverse("siblings", path, snapshot, output_format)
