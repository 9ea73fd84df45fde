"""Dependency levels and file types of the character asset graph.

Every file the graph understands belongs to exactly one
``DependencyFileType``, and every file type belongs to exactly one
``DependencyLevel``. The levels form a chain ordered from the top of the
tree to its leaves:

    Invalid  <  Root  <  Model  <  Material  <  Texture

Root level is shared by the symbolic ``.root`` handle, ``.meta`` files and
the three binary metadata record kinds (EQP, EQDP, IMC). Those five types
are co-equal: none of them is the parent of another.
"""

from __future__ import annotations

from enum import Enum, IntEnum
from types import MappingProxyType
from typing import Mapping


class DependencyLevel(IntEnum):
    """Tier of a file in the dependency tree.

    The integer encoding follows tree depth, so ordinary comparison
    operators express "closer to the root than".
    """

    INVALID = 0
    ROOT = 1
    MODEL = 2
    MATERIAL = 3
    TEXTURE = 4

    def parent_level(self) -> DependencyLevel | None:
        """Return the level one step closer to the root.

        ``INVALID`` and ``ROOT`` have no parent level.
        """
        if self <= DependencyLevel.ROOT:
            return None
        return DependencyLevel(self - 1)

    def child_level(self) -> DependencyLevel | None:
        """Return the level one step further from the root, if any."""
        if self in (DependencyLevel.INVALID, DependencyLevel.TEXTURE):
            return None
        return DependencyLevel(self + 1)


class DependencyFileType(str, Enum):
    """Kinds of files that participate in the dependency graph.

    Values are lower case so they compare directly against file extensions.
    """

    INVALID = "invalid"
    ROOT = "root"
    META = "meta"
    EQP = "eqp"
    EQDP = "eqdp"
    IMC = "imc"
    MDL = "mdl"
    MTRL = "mtrl"
    TEX = "tex"


FILE_TYPE_LEVELS: Mapping[DependencyFileType, DependencyLevel] = MappingProxyType({
    DependencyFileType.INVALID: DependencyLevel.INVALID,
    DependencyFileType.ROOT: DependencyLevel.ROOT,
    DependencyFileType.META: DependencyLevel.ROOT,
    DependencyFileType.EQP: DependencyLevel.ROOT,
    DependencyFileType.EQDP: DependencyLevel.ROOT,
    DependencyFileType.IMC: DependencyLevel.ROOT,
    DependencyFileType.MDL: DependencyLevel.MODEL,
    DependencyFileType.MTRL: DependencyLevel.MATERIAL,
    DependencyFileType.TEX: DependencyLevel.TEXTURE,
})
"""Total lookup table from file type to dependency level."""

BINARY_RECORD_TYPES: frozenset[DependencyFileType] = frozenset({
    DependencyFileType.EQP,
    DependencyFileType.EQDP,
    DependencyFileType.IMC,
})
"""File types that are only graph nodes when addressed as a single record."""
