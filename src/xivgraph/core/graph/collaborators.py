"""Abstract contracts for the services the dependency graph consumes.

The graph never reads archive containers or parses model and material
files itself. It talks to five narrow collaborators:

- ``ArchiveReader`` -- random access to decompressed files by path.
- ``ModelParser`` -- which materials a model references.
- ``MaterialParser`` -- which textures a material references.
- ``DeformerParameters`` -- which races have their own model of an item.
- ``ReferenceCache`` -- which files have declared a given file as child.

All methods are coroutines because real implementations do disk or
database I/O. Implementations may raise ``CollaboratorError`` on I/O
failure; the graph lets it propagate.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from xivgraph.core.roots.tables import Race


class ArchiveReader(ABC):
    """Read access to the game archive."""

    @abstractmethod
    async def read_file(self, path: str) -> bytes | None:
        """Return the decompressed payload of ``path``, or None if absent."""

    @abstractmethod
    async def get_data_offset(self, path: str) -> int:
        """Return the index data offset of ``path``; 0 if it is not indexed."""


class ModelParser(ABC):
    """Extracts material references from model files."""

    @abstractmethod
    async def get_referenced_materials(
        self, model_path: str, include_skin: bool = False
    ) -> list[str]:
        """Return the material paths ``model_path`` references.

        Args:
            model_path: Model file to inspect.
            include_skin: Include shared skin materials. These are
                referenced by nearly every body-adjacent model and are
                normally left out.
        """


class MaterialParser(ABC):
    """Extracts texture references from material files."""

    @abstractmethod
    async def get_referenced_textures(self, material_path: str) -> list[str]:
        """Return the texture paths ``material_path`` references."""


class DeformerParameters(ABC):
    """Access to the equipment deformer (EQDP) tables."""

    @abstractmethod
    async def get_available_races(self, primary_id: int, slot: str | None) -> list[Race]:
        """Return the races that have a dedicated model for a set and slot."""


class ReferenceCache(ABC):
    """Reverse lookup over previously recorded child declarations."""

    @abstractmethod
    async def find_declared_parents(self, child_path: str) -> list[str]:
        """Return files that have listed ``child_path`` as a child.

        Results may be stale; the graph only uses them to discover extra
        roots for shared textures.
        """
