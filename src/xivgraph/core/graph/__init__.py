"""Dependency graph engine and the collaborator contracts it consumes."""

from xivgraph.core.graph.collaborators import (
    ArchiveReader,
    DeformerParameters,
    MaterialParser,
    ModelParser,
    ReferenceCache,
)
from xivgraph.core.graph.engine import DependencyGraph

__all__ = [
    "ArchiveReader",
    "DeformerParameters",
    "DependencyGraph",
    "MaterialParser",
    "ModelParser",
    "ReferenceCache",
]
