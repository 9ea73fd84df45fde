"""Dependency root identities and their canonical path form.

A dependency root is the anchor of one branch of the character asset
tree. It is identified by five values:

    (primary type, primary id, secondary type, secondary id, slot)

Every file below the root (models, materials, textures, metadata records)
can be traced back to these values, and every model path and metadata
record path of the root can be generated from them.

The canonical string of an identity is a symbolic ``.root`` path that
never exists in the archive:

    chara/<ptype>/<p><pid:04d>/[obj/<stype>/<s><sid:04d>/]<p><pid><s><sid>[_<slot>].root

Identity equality and hashing are defined on that string, not on the
fields, because human sub-types rewrite their slot during construction.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from xivgraph.core.roots.tables import RACIAL_MODEL_TYPES, SUPPORTED_PRIMARY_TYPES, ItemType
from xivgraph.exceptions import PathFormatError

ROOT_EXTENSION: str = ".root"

# Human sub-types only ever have one root per sub-part. Materials of those
# sub-parts carry no slot or a custom one, so the slot is forced here.
_HUMAN_SLOT_OVERRIDES: dict[ItemType, str] = {
    ItemType.FACE: "fac",
    ItemType.EAR: "ear",
    ItemType.TAIL: "til",
    ItemType.HAIR: "hir",
}

# Skin materials are shared by every body slot and carry no slot of their
# own; grouping them under "top" keeps the skin tree in one piece.
_HUMAN_DEFAULT_SLOT: str = "top"


def format_id(value: int) -> str:
    """Zero-pad an id to the four digits used in archive paths."""
    return str(value).zfill(4)


@dataclass(frozen=True, eq=False)
class RootIdentity:
    """The five identifying values of a dependency root.

    Construct through ``create_root_identity`` when the inputs come from
    untrusted paths; that factory returns None instead of raising for
    unsupported or incomplete combinations.

    Attributes:
        primary_type: Category owning the root folder.
        primary_id: Set id of the primary category.
        secondary_type: Optional sub-category below ``obj/``.
        secondary_id: Id of the secondary category; present iff
            ``secondary_type`` is.
        slot: Three-letter slot code, if the category uses slots.
    """

    primary_type: ItemType
    primary_id: int
    secondary_type: ItemType | None = None
    secondary_id: int | None = None
    slot: str | None = None
    _key: str = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not isinstance(self.primary_type, ItemType):
            raise PathFormatError(f"Unknown primary type: {self.primary_type!r}")
        if self.primary_id < 0:
            raise PathFormatError(f"Primary id must be non-negative, got {self.primary_id}")
        if (self.secondary_type is None) != (self.secondary_id is None):
            raise PathFormatError(
                "Secondary type and secondary id must be given together"
            )
        if self.secondary_id is not None and self.secondary_id < 0:
            raise PathFormatError(
                f"Secondary id must be non-negative, got {self.secondary_id}"
            )

        if self.primary_type is ItemType.HUMAN:
            forced = _HUMAN_SLOT_OVERRIDES.get(self.secondary_type)
            if forced is not None:
                object.__setattr__(self, "slot", forced)
            elif self.slot is None:
                object.__setattr__(self, "slot", _HUMAN_DEFAULT_SLOT)

        object.__setattr__(self, "_key", self.root_folder + self.base_file_name + ROOT_EXTENSION)

    # -- Canonical string form --

    @property
    def root_folder(self) -> str:
        """Folder that holds every per-item file of this root."""
        folder = (
            f"chara/{self.primary_type.value}/"
            f"{self.primary_type.prefix}{format_id(self.primary_id)}/"
        )
        if self.secondary_type is not None:
            folder += (
                f"obj/{self.secondary_type.value}/"
                f"{self.secondary_type.prefix}{format_id(self.secondary_id)}/"
            )
        return folder

    @property
    def base_file_name(self) -> str:
        """File stem shared by this root's per-item files."""
        name = f"{self.primary_type.prefix}{format_id(self.primary_id)}"
        if self.secondary_type is not None:
            name += f"{self.secondary_type.prefix}{format_id(self.secondary_id)}"
        if self.slot is not None:
            name += f"_{self.slot}"
        return name

    @property
    def root_path(self) -> str:
        """Canonical ``.root`` handle for this identity."""
        return self._key

    @property
    def imc_path(self) -> str:
        """Path of the IMC file holding this root's variant records.

        The file is named after the secondary category when there is one,
        otherwise after the primary.
        """
        if self.secondary_type is not None:
            stem = f"{self.secondary_type.prefix}{format_id(self.secondary_id)}"
        else:
            stem = f"{self.primary_type.prefix}{format_id(self.primary_id)}"
        return f"{self.root_folder}{stem}.imc"

    @property
    def uses_racial_models(self) -> bool:
        """True if models are stored per playable race instead of per root."""
        return self.secondary_type is None

    def __str__(self) -> str:
        return self._key

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RootIdentity):
            return NotImplemented
        return self._key == other._key

    def __hash__(self) -> int:
        return hash(self._key)


def create_root_identity(
    primary_type: ItemType | None,
    primary_id: int | None,
    secondary_type: ItemType | None = None,
    secondary_id: int | None = None,
    slot: str | None = None,
) -> RootIdentity | None:
    """Build a ``RootIdentity`` if the values describe a supported root.

    Returns None, never raises, when:

    - the primary type is missing or not a supported root category;
    - the primary id is missing or negative;
    - secondary type and id are not both present or both absent;
    - no secondary type is given for anything but equipment/accessory,
      or one is given for equipment/accessory;
    - no slot is given for equipment, accessory, demihuman, or a human
      sub-part other than the body.

    Args:
        primary_type: Root folder category.
        primary_id: Root folder set id.
        secondary_type: Optional sub-category.
        secondary_id: Optional sub-category id.
        slot: Optional slot code.

    Returns:
        The identity, or None if the combination is not a valid root.
    """
    if primary_type not in SUPPORTED_PRIMARY_TYPES or primary_id is None or primary_id < 0:
        return None
    if (secondary_type is None) != (secondary_id is None):
        return None
    if secondary_id is not None and secondary_id < 0:
        return None

    if slot is None:
        # Custom textures often have a resolvable set but no slot. Those are
        # found through the reverse-reference cache instead.
        if primary_type in (ItemType.EQUIPMENT, ItemType.ACCESSORY, ItemType.DEMIHUMAN):
            return None
        if primary_type is ItemType.HUMAN and secondary_type is not ItemType.BODY:
            return None

    racial = primary_type in RACIAL_MODEL_TYPES
    if (secondary_type is None) != racial:
        return None

    return RootIdentity(
        primary_type=primary_type,
        primary_id=primary_id,
        secondary_type=secondary_type,
        secondary_id=secondary_id,
        slot=slot,
    )
