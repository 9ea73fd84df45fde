"""``xivgraph classify <path>`` — Show a path's dependency file type and level.

Classification is purely syntactic; no snapshot is needed.

Exit Codes:
    0 — Path is part of the dependency graph.
    2 — Path is not a dependency graph file (level INVALID).
"""

from __future__ import annotations

import sys

import click

from xivgraph.cli.common import EXIT_NOT_IN_GRAPH, emit_json, format_option
from xivgraph.core.classification import DependencyLevel, classify_file_type, classify_level


@click.command("classify")
@click.argument("path")
@format_option
def classify_command(path: str, output_format: str) -> None:
    """Classify PATH into a dependency file type and level."""
    file_type = classify_file_type(path)
    level = classify_level(path)

    if output_format == "json":
        emit_json({"path": path, "file_type": file_type.value, "level": level.name})
    else:
        from xivgraph.cli.output import print_classification
        print_classification(path, file_type, level)

    sys.exit(EXIT_NOT_IN_GRAPH if level is DependencyLevel.INVALID else 0)
