"""Recover dependency root identities from archive paths.

Two independent strategies are implemented here, both pure:

1. **Structural extraction** reads the per-item folder grammar

       chara/<ptype>/<letter><4 digits>/[obj/<stype>/<letter><4 digits>/]...

   and the slot token at the end of the file name
   (``c0101e0001_top_a.mtrl`` -> ``top``).

2. **Inverse offset arithmetic** undoes the record layout of the shared
   metadata files. EQP and EQDP files live in type-keyed folders rather
   than per-item folders, and IMC files carry no slot in their name, so the
   bit offset is the only place the set id or slot is recorded.

Both strategies fail closed: an offset that does not land exactly on a
known slot produces no identity rather than the nearest guess.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from xivgraph.core.classification import (
    BINARY_OFFSET_MARKER,
    get_extension,
    split_binary_offset,
)
from xivgraph.core.roots.identity import RootIdentity, create_root_identity
from xivgraph.core.roots.tables import (
    ACCESSORY_SLOTS,
    EQDP_BITS_PER_SLOT,
    EQDP_ENTRY_SIZE,
    EQP_ENTRY_SIZE,
    EQP_PATHS,
    EQP_SLOT_OFFSETS,
    EQUIPMENT_SLOTS,
    IMC_HEADER_SIZE,
    IMC_SET_ENTRY_SIZE,
    IMC_SUB_ENTRY_SIZE,
    ItemType,
    slot_list,
)

logger = logging.getLogger(__name__)

_ID_TOKEN_RE = re.compile(r"^[a-z]([0-9]{4})$")
_TYPE_TOKEN_RE = re.compile(r"^[a-z]+$")

# Slot token after one or two <letter><4 digits> groups, optionally followed
# by a suffix (``_a``, ``_n``), then the extension and optional offset.
_SLOT_RE = re.compile(
    r"(?:[a-z][0-9]{4}){1,2}_([a-z]{3})(?:_[^/]*)?\.[a-z]+"
    r"(?:" + BINARY_OFFSET_MARKER + r"[0-9]+)?$"
)

_EQDP_RE = re.compile(
    r"^chara/xls/charadb/(equipment|accessory)deformerparameter/c[0-9]{4}\.eqdp"
    + BINARY_OFFSET_MARKER
    + r"([0-9]+)$"
)


@dataclass
class RootInfo:
    """Partially-known root values extracted from a path.

    Any field may be None. ``to_identity`` applies the root construction
    rules and returns None when the values are not a complete root.
    """

    primary_type: ItemType | None = None
    primary_id: int | None = None
    secondary_type: ItemType | None = None
    secondary_id: int | None = None
    slot: str | None = None

    @property
    def is_empty(self) -> bool:
        return self.primary_type is None

    def to_identity(self) -> RootIdentity | None:
        return create_root_identity(
            self.primary_type,
            self.primary_id,
            self.secondary_type,
            self.secondary_id,
            self.slot,
        )


# ---------------------------------------------------------------------------
# Structural extraction
# ---------------------------------------------------------------------------


def _parse_id_token(token: str) -> int | None:
    match = _ID_TOKEN_RE.match(token)
    return int(match.group(1)) if match else None


def _parse_type_token(token: str) -> ItemType | None:
    if not _TYPE_TOKEN_RE.match(token):
        return None
    return ItemType.from_folder(token)


def extract_slot(path: str) -> str | None:
    """Extract the three-letter slot code from the file name of ``path``."""
    match = _SLOT_RE.search(path)
    return match.group(1) if match else None


def extract_root_info(path: str) -> RootInfo:
    """Read root values from the per-item folder grammar of ``path``.

    Returns an empty ``RootInfo`` when the path is not inside a
    ``chara/<type>/<id>/`` folder, or when a folder names a category that
    does not exist.
    """
    parts = path.split("/")
    if len(parts) < 4 or parts[0] != "chara":
        return RootInfo()

    primary_id = _parse_id_token(parts[2])
    if primary_id is None or not _TYPE_TOKEN_RE.match(parts[1]):
        return RootInfo()
    primary_type = ItemType.from_folder(parts[1])
    if primary_type is None:
        return RootInfo()

    info = RootInfo(primary_type=primary_type, primary_id=primary_id)

    # obj/<stype>/<sid>/ must be followed by at least one more segment.
    if len(parts) >= 7 and parts[3] == "obj":
        secondary_id = _parse_id_token(parts[5])
        if secondary_id is not None and _TYPE_TOKEN_RE.match(parts[4]):
            secondary_type = ItemType.from_folder(parts[4])
            if secondary_type is None:
                return RootInfo()
            info.secondary_type = secondary_type
            info.secondary_id = secondary_id

    info.slot = extract_slot(path)
    return info


# ---------------------------------------------------------------------------
# Inverse offset arithmetic
# ---------------------------------------------------------------------------


def imc_slot_from_offset(item_type: ItemType | None, bit_offset: int) -> str | None:
    """Recover the slot addressed by an IMC record offset.

    Only equipment, demihuman (equipment slots) and accessory IMC files
    carry per-slot sub-entries. The offset must point exactly at the start
    of a 6-byte sub-entry after the 4-byte header.

    Args:
        item_type: Primary category the IMC file belongs to.
        bit_offset: Record offset in bits.

    Returns:
        The slot code, or None if the offset is not on a slot boundary.
    """
    if item_type not in (ItemType.EQUIPMENT, ItemType.DEMIHUMAN, ItemType.ACCESSORY):
        return None
    if bit_offset % 8:
        return None
    byte_offset = bit_offset // 8 - IMC_HEADER_SIZE
    if byte_offset < 0 or byte_offset % IMC_SUB_ENTRY_SIZE:
        return None

    # Offsets are read on the set grid. A non-set subset record past the
    # first slot lands on the wrong slot here.
    index = (byte_offset % IMC_SET_ENTRY_SIZE) // IMC_SUB_ENTRY_SIZE
    slots = ACCESSORY_SLOTS if item_type is ItemType.ACCESSORY else EQUIPMENT_SLOTS
    return slots[index] if index < len(slots) else None


def eqp_root_from_offset(bit_offset: int) -> RootIdentity | None:
    """Recover the equipment root addressed by an EQP record offset."""
    entry_bits = EQP_ENTRY_SIZE * 8
    set_id, remainder = divmod(bit_offset, entry_bits)
    if remainder % 8:
        return None
    byte_offset = remainder // 8
    for slot, offset in EQP_SLOT_OFFSETS.items():
        if offset == byte_offset:
            return create_root_identity(ItemType.EQUIPMENT, set_id, slot=slot)
    return None


def eqdp_root_from_path(path: str) -> RootIdentity | None:
    """Recover the equipment/accessory root addressed by an EQDP record path."""
    match = _EQDP_RE.match(path)
    if not match:
        return None
    item_type = ItemType(match.group(1))
    bit_offset = int(match.group(2))

    entry_bits = EQDP_ENTRY_SIZE * 8
    set_id, remainder = divmod(bit_offset, entry_bits)
    if remainder % EQDP_BITS_PER_SLOT:
        return None
    slots = slot_list(item_type)
    index = remainder // EQDP_BITS_PER_SLOT
    if index >= len(slots):
        return None
    return create_root_identity(item_type, set_id, slot=slots[index])


def root_from_binary_offset(path: str, info: RootInfo | None = None) -> RootIdentity | None:
    """Recover a root from a metadata record path by inverse arithmetic.

    Args:
        path: A ``<file>::<bits>`` path into an IMC, EQP, or EQDP file.
        info: Structural values already extracted from ``path``. IMC files
            live in per-item folders, so their set id comes from here and
            only the slot comes from the offset.

    Returns:
        The identity, or None if the path is not a metadata record or the
        offset does not map onto a known slot.
    """
    base, bit_offset = split_binary_offset(path)
    if bit_offset is None:
        return None

    extension = get_extension(path)
    root: RootIdentity | None = None
    if extension == "imc":
        info = info if info is not None else extract_root_info(path)
        slot = imc_slot_from_offset(info.primary_type, bit_offset)
        if slot is not None:
            root = RootInfo(
                primary_type=info.primary_type,
                primary_id=info.primary_id,
                secondary_type=info.secondary_type,
                secondary_id=info.secondary_id,
                slot=slot,
            ).to_identity()
    elif extension == "eqp":
        if base in EQP_PATHS.values():
            root = eqp_root_from_offset(bit_offset)
    elif extension == "eqdp":
        root = eqdp_root_from_path(path)

    if root is None:
        logger.debug("No slot at offset %d of %s", bit_offset, base)
    return root


def resolve_static_root(path: str) -> RootIdentity | None:
    """Resolve the single root derivable from ``path`` alone.

    Tries structural extraction first and falls back to inverse offset
    arithmetic for metadata records. Does not consult any reverse
    references, so shared textures resolve at most to their home root.
    """
    info = extract_root_info(path)
    root = info.to_identity()
    if root is None:
        root = root_from_binary_offset(path, info)
    return root
