"""Collaborator implementations backed by in-memory data and snapshot files."""

from xivgraph.backends.memory import (
    DeclaredReferences,
    MemoryArchive,
    MemoryDeformerParameters,
)
from xivgraph.backends.snapshot import ArchiveSnapshot, load_snapshot

__all__ = [
    "ArchiveSnapshot",
    "DeclaredReferences",
    "MemoryArchive",
    "MemoryDeformerParameters",
    "load_snapshot",
]
