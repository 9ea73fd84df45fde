"""In-memory collaborators for the dependency graph.

These back the CLI's snapshot files and the test suite. They hold plain
dictionaries populated up front; lookups never fail, they return empty
results for unknown paths.

``DeclaredReferences`` plays three collaborator roles from one table of
child declarations: it answers model -> material and material -> texture
queries, and its reverse index serves as the reference cache.
"""

from __future__ import annotations

from collections import defaultdict
from typing import Iterable, Mapping

from xivgraph.core.graph.collaborators import (
    ArchiveReader,
    DeformerParameters,
    MaterialParser,
    ModelParser,
    ReferenceCache,
)
from xivgraph.core.roots.tables import Race


class MemoryArchive(ArchiveReader):
    """Archive of decompressed payloads keyed by path.

    Data offsets are synthetic: each file gets a distinct positive number
    in insertion order, which is all the graph needs to test presence.
    """

    def __init__(self, files: Mapping[str, bytes] | None = None) -> None:
        self._files: dict[str, bytes] = {}
        self._offsets: dict[str, int] = {}
        for path, data in (files or {}).items():
            self.add_file(path, data)

    def add_file(self, path: str, data: bytes) -> None:
        if path not in self._offsets:
            self._offsets[path] = (len(self._offsets) + 1) * 0x80
        self._files[path] = bytes(data)

    def __contains__(self, path: object) -> bool:
        return path in self._files

    def __len__(self) -> int:
        return len(self._files)

    async def read_file(self, path: str) -> bytes | None:
        return self._files.get(path)

    async def get_data_offset(self, path: str) -> int:
        return self._offsets.get(path, 0)


class DeclaredReferences(ModelParser, MaterialParser, ReferenceCache):
    """Child declarations answering parser and reverse-reference queries.

    Args:
        children: Parent path -> referenced child paths.
        skin_children: Model path -> skin material paths, returned only
            when a caller asks for skin materials.
        extra_parents: Additional child -> parent declarations for the
            reverse index, e.g. stale cache rows with no forward entry.
    """

    def __init__(
        self,
        children: Mapping[str, Iterable[str]] | None = None,
        skin_children: Mapping[str, Iterable[str]] | None = None,
        extra_parents: Mapping[str, Iterable[str]] | None = None,
    ) -> None:
        self._children: dict[str, list[str]] = {}
        self._skin: dict[str, list[str]] = {}
        self._parents: dict[str, list[str]] = defaultdict(list)
        for parent, kids in (children or {}).items():
            self.declare(parent, kids)
        for parent, kids in (skin_children or {}).items():
            self.declare(parent, kids, skin=True)
        for child, parents in (extra_parents or {}).items():
            for parent in parents:
                self._add_parent(child, parent)

    def _add_parent(self, child: str, parent: str) -> None:
        if parent not in self._parents[child]:
            self._parents[child].append(parent)

    def declare(self, parent: str, children: Iterable[str], skin: bool = False) -> None:
        """Record that ``parent`` references ``children``.

        Repeated declarations for the same parent are merged.
        """
        table = self._skin if skin else self._children
        declared = table.setdefault(parent, [])
        for child in children:
            if child not in declared:
                declared.append(child)
            self._add_parent(child, parent)

    async def get_referenced_materials(
        self, model_path: str, include_skin: bool = False
    ) -> list[str]:
        materials = list(self._children.get(model_path, []))
        if include_skin:
            materials.extend(
                m for m in self._skin.get(model_path, []) if m not in materials
            )
        return materials

    async def get_referenced_textures(self, material_path: str) -> list[str]:
        return list(self._children.get(material_path, []))

    async def find_declared_parents(self, child_path: str) -> list[str]:
        return list(self._parents.get(child_path, []))


class MemoryDeformerParameters(DeformerParameters):
    """Race availability table keyed by ``(set id, slot)``."""

    def __init__(
        self, races: Mapping[tuple[int, str | None], Iterable[Race]] | None = None
    ) -> None:
        self._races: dict[tuple[int, str | None], list[Race]] = {
            key: list(value) for key, value in (races or {}).items()
        }

    def set_races(self, primary_id: int, slot: str | None, races: Iterable[Race]) -> None:
        self._races[(primary_id, slot)] = list(races)

    async def get_available_races(self, primary_id: int, slot: str | None) -> list[Race]:
        return list(self._races.get((primary_id, slot), []))
