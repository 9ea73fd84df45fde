"""Dependency graph engine: root resolution and tree traversal.

The character asset tree has four levels:

    ROOT      set + slot; symbolic ``.root`` handle and metadata records
    MODEL     one ``.mdl`` per race (equipment) or per root (others)
    MATERIAL  ``.mtrl`` files referenced by models
    TEXTURE   ``.tex`` files referenced by materials; may be shared

Changing a file affects every file below it and nothing at or above its
level, so traversal runs in two directions:

- **Downward** (``get_child_files``) asks the model and material parsers
  what a file references.
- **Upward** (``get_parent_files``) climbs to the file's root and comes
  back down through ``get_child_files``, keeping every file whose children
  include the queried path.

Every query is a read-only function of the path and the collaborators'
state. The engine keeps no mutable state of its own, so concurrent queries
need no locking.
"""

from __future__ import annotations

import asyncio
import logging
from collections import deque

from xivgraph.core.classification import (
    DependencyFileType,
    DependencyLevel,
    classify_file_type,
    classify_level,
    get_extension,
)
from xivgraph.core.graph.collaborators import (
    ArchiveReader,
    DeformerParameters,
    MaterialParser,
    ModelParser,
    ReferenceCache,
)
from xivgraph.core.roots.entity import DependencyRoot
from xivgraph.core.roots.extraction import resolve_static_root
from xivgraph.core.roots.identity import RootIdentity, create_root_identity
from xivgraph.core.roots.tables import ItemType

logger = logging.getLogger(__name__)


def _unique(paths: list[str]) -> list[str]:
    return list(dict.fromkeys(paths))


class DependencyGraph:
    """Resolves roots, parents, children and siblings of archive paths.

    Args:
        archive: Reads IMC headers and checks file presence.
        models: Answers model -> material references.
        materials: Answers material -> texture references.
        deformers: Answers which races have a model of an item.
        references: Reverse child-declaration lookup used for textures
            shared across roots.
    """

    def __init__(
        self,
        archive: ArchiveReader,
        models: ModelParser,
        materials: MaterialParser,
        deformers: DeformerParameters,
        references: ReferenceCache,
    ) -> None:
        self._archive = archive
        self._models = models
        self._materials = materials
        self._deformers = deformers
        self._references = references

    @property
    def archive(self) -> ArchiveReader:
        return self._archive

    @property
    def deformers(self) -> DeformerParameters:
        return self._deformers

    # -- Classification --

    @staticmethod
    def get_dependency_file_type(path: str) -> DependencyFileType:
        return classify_file_type(path)

    @staticmethod
    def get_dependency_level(path: str) -> DependencyLevel:
        return classify_level(path)

    # -- Roots --

    def bind(self, identity: RootIdentity) -> DependencyRoot:
        """Wrap an identity in a ``DependencyRoot`` served by this graph."""
        return DependencyRoot(identity, self)

    def create_dependency_root(
        self,
        primary_type: ItemType,
        primary_id: int,
        secondary_type: ItemType | None = None,
        secondary_id: int | None = None,
        slot: str | None = None,
    ) -> DependencyRoot | None:
        """Build a root from its values; None if they are not a valid root."""
        identity = create_root_identity(
            primary_type, primary_id, secondary_type, secondary_id, slot
        )
        return self.bind(identity) if identity is not None else None

    async def _referencing_roots(self, texture_path: str) -> set[RootIdentity]:
        """Roots of every file that declared ``texture_path`` as a child."""
        parents = await self._references.find_declared_parents(texture_path)
        expected = classify_level(texture_path).parent_level()
        candidates: list[str] = []
        for parent in parents:
            if classify_level(parent) is expected:
                candidates.append(parent)
            else:
                logger.debug("Ignoring declared parent %s of %s", parent, texture_path)

        results = await asyncio.gather(*(self.resolve_roots(p) for p in candidates))
        roots: set[RootIdentity] = set()
        for found in results:
            roots |= found
        return roots

    async def resolve_roots(self, path: str) -> set[RootIdentity]:
        """Resolve the root identities that own ``path``.

        Models, materials and metadata records have at most one root.
        Textures may be shared, so every root that references the texture
        through the reverse-reference cache is included alongside the
        texture's home root.

        Returns:
            The owning identities. Empty if the path is orphaned.
        """
        roots: set[RootIdentity] = set()
        if get_extension(path) == DependencyFileType.TEX.value:
            roots |= await self._referencing_roots(path)

        home = resolve_static_root(path)
        if home is not None:
            roots.add(home)

        if not roots:
            logger.debug("No dependency root for %s", path)
        return roots

    async def get_dependency_roots(self, path: str) -> list[DependencyRoot]:
        """Resolve the roots of ``path`` as ``DependencyRoot`` objects.

        Sorted by canonical root path so callers get a stable order.
        """
        identities = await self.resolve_roots(path)
        return [self.bind(i) for i in sorted(identities, key=str)]

    # -- Traversal --

    async def get_parent_files(self, path: str) -> list[str] | None:
        """Return the files ``path`` depends on, one level up.

        Returns:
            None if ``path`` is not a dependency graph file; an empty list
            for root-level files and orphans; otherwise the parent paths.
        """
        level = classify_level(path)
        if level is DependencyLevel.INVALID:
            return None
        if level is DependencyLevel.ROOT:
            return []

        roots = await self.get_dependency_roots(path)
        if not roots:
            return []

        if level is DependencyLevel.MODEL:
            return [roots[0].root_path]

        if level is DependencyLevel.MATERIAL:
            candidates = await roots[0].get_model_files()
        else:
            # Textures may belong to several roots; search all of them.
            per_root = await asyncio.gather(*(r.get_material_files() for r in roots))
            candidates = _unique([m for materials in per_root for m in materials])

        children = await asyncio.gather(*(self.get_child_files(c) for c in candidates))
        return [
            candidate
            for candidate, declared in zip(candidates, children)
            if declared and path in declared
        ]

    async def get_child_files(self, path: str) -> list[str] | None:
        """Return the files that depend on ``path``, one level down.

        Returns:
            None if ``path`` is not a dependency graph file; otherwise the
            child paths (empty for textures and orphaned roots).
        """
        level = classify_level(path)
        if level is DependencyLevel.INVALID:
            return None

        if level is DependencyLevel.ROOT:
            roots = await self.get_dependency_roots(path)
            if not roots:
                return []
            return await roots[0].get_model_files()

        if level is DependencyLevel.MODEL:
            # Skin materials are only children inside the human body tree.
            roots = await self.resolve_roots(path)
            include_skin = any(
                r.primary_type is ItemType.HUMAN and r.secondary_type is ItemType.BODY
                for r in roots
            )
            declared = await self._models.get_referenced_materials(path, include_skin)
        elif level is DependencyLevel.MATERIAL:
            declared = await self._materials.get_referenced_textures(path)
        else:
            return []

        # Parser output that skips or repeats a level is not a child.
        expected = level.child_level()
        return [child for child in declared if classify_level(child) is expected]

    async def get_sibling_files(self, path: str) -> list[str] | None:
        """Return every child of every parent of ``path``, itself included.

        Returns:
            None if ``path`` is not a dependency graph file.
        """
        parents = await self.get_parent_files(path)
        if parents is None:
            return None
        results = await asyncio.gather(*(self.get_child_files(p) for p in parents))
        return _unique([c for children in results for c in (children or [])])

    async def get_descendant_files(self, path: str) -> list[str] | None:
        """Return every file below ``path``, breadth-first.

        Exports of a modified file must carry everything beneath it, since
        a change at one level affects all lower levels.

        Returns:
            None if ``path`` is not a dependency graph file; otherwise the
            descendants in discovery order, excluding ``path`` itself.
        """
        if classify_level(path) is DependencyLevel.INVALID:
            return None

        visited: set[str] = {path}
        ordered: list[str] = []
        queue: deque[str] = deque([path])
        while queue:
            current = queue.popleft()
            for child in await self.get_child_files(current) or []:
                if child in visited:
                    continue
                visited.add(child)
                ordered.append(child)
                queue.append(child)
        return ordered
