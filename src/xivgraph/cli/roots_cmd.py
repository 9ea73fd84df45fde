"""``xivgraph roots <path>`` and ``xivgraph meta <path>`` — Root resolution.

``roots`` lists every dependency root that owns a path. Textures shared
across items may list several; orphaned files list none.

``meta`` lists the binary metadata records (EQP, EQDP, IMC) of each root
that owns a path.

Exit Codes:
    0 — Query ran (an empty result is still success).
    2 — Path is not a dependency graph file.
    3 — Snapshot file could not be loaded.
"""

from __future__ import annotations

import sys
from typing import Any

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
from xivgraph.core.roots.entity import DependencyRoot


def _identity_to_json(root: DependencyRoot) -> dict[str, Any]:
    identity = root.identity
    return {
        "root": identity.root_path,
        "primary_type": identity.primary_type.value,
        "primary_id": identity.primary_id,
        "secondary_type": identity.secondary_type.value if identity.secondary_type else None,
        "secondary_id": identity.secondary_id,
        "slot": identity.slot,
    }


def _require_graph_file(path: str, output_format: str) -> None:
    if classify_level(path) is DependencyLevel.INVALID:
        emit_error(f"Not a dependency graph file: {path}", output_format)
        sys.exit(EXIT_NOT_IN_GRAPH)


@click.command("roots")
@click.argument("path")
@snapshot_option
@format_option
def roots_command(path: str, snapshot: str | None, output_format: str) -> None:
    """List the dependency roots that own PATH."""
    _require_graph_file(path, output_format)
    graph = load_graph(snapshot, output_format)
    roots = run(graph.get_dependency_roots(path))

    if output_format == "json":
        emit_json({"path": path, "roots": [_identity_to_json(r) for r in roots]})
    else:
        from xivgraph.cli.output import print_paths
        print_paths("Roots", [r.root_path for r in roots])


async def _collect_meta(graph: DependencyGraph, path: str) -> dict[str, list[str]]:
    meta: dict[str, list[str]] = {}
    for root in await graph.get_dependency_roots(path):
        meta[root.root_path] = await root.get_meta_entries()
    return meta


@click.command("meta")
@click.argument("path")
@snapshot_option
@format_option
def meta_command(path: str, snapshot: str | None, output_format: str) -> None:
    """List the metadata records of every root that owns PATH."""
    _require_graph_file(path, output_format)
    graph = load_graph(snapshot, output_format)
    meta = run(_collect_meta(graph, path))

    if output_format == "json":
        emit_json({"path": path, "meta": meta})
    else:
        from xivgraph.cli.output import print_paths
        if not meta:
            print_paths("Roots", [])
        for root_path, entries in meta.items():
            print_paths(root_path, entries)
