"""Constant tables describing the game's character asset layout.

Everything here is immutable process-wide data: item category names and
file prefixes, the playable race codes, and the record layouts of the
three shared metadata files (EQP, EQDP, IMC). The identity, entity and
extraction modules read these tables; nothing writes them.

Metadata layouts
----------------
- **EQP** (equipment parameters): one 8-byte record per equipment set id.
  Each armour slot owns a fixed byte range inside the record.
- **EQDP** (equipment deformer parameters): one file per playable race,
  one 2-byte record per set id, 2 bits per slot in slot-list order.
- **IMC** (item variants): one file per set, a 4-byte header (subset
  count, format marker) followed by records of 6-byte sub-entries. "Set"
  files carry 5 sub-entries per record, one per slot; "non-set" files
  carry a single sub-entry.
"""

from __future__ import annotations

from enum import Enum, IntEnum
from types import MappingProxyType
from typing import Mapping


# ---------------------------------------------------------------------------
# Item categories
# ---------------------------------------------------------------------------


class ItemType(str, Enum):
    """Item category as it appears in archive folder names."""

    EQUIPMENT = "equipment"
    ACCESSORY = "accessory"
    WEAPON = "weapon"
    MONSTER = "monster"
    DEMIHUMAN = "demihuman"
    HUMAN = "human"
    BODY = "body"
    FACE = "face"
    HAIR = "hair"
    TAIL = "tail"
    EAR = "zear"
    INDOOR = "indoor"
    OUTDOOR = "outdoor"

    @property
    def prefix(self) -> str:
        """File-name prefix used in front of this category's ids."""
        return _FILE_PREFIXES[self]

    @classmethod
    def from_folder(cls, name: str) -> ItemType | None:
        """Look up a category by folder name; None if the name is unknown."""
        try:
            return cls(name)
        except ValueError:
            return None


_FILE_PREFIXES: Mapping[ItemType, str] = MappingProxyType({
    ItemType.EQUIPMENT: "e",
    ItemType.ACCESSORY: "a",
    ItemType.WEAPON: "w",
    ItemType.MONSTER: "m",
    ItemType.DEMIHUMAN: "d",
    ItemType.HUMAN: "c",
    ItemType.BODY: "b",
    ItemType.FACE: "f",
    ItemType.HAIR: "h",
    ItemType.TAIL: "t",
    ItemType.EAR: "z",
    ItemType.INDOOR: "fun",
    ItemType.OUTDOOR: "gar",
})

SUPPORTED_PRIMARY_TYPES: frozenset[ItemType] = frozenset({
    ItemType.EQUIPMENT,
    ItemType.ACCESSORY,
    ItemType.WEAPON,
    ItemType.MONSTER,
    ItemType.DEMIHUMAN,
    ItemType.HUMAN,
})
"""Categories that can anchor a dependency root.

Furniture (indoor/outdoor) resolves its models through separate scene
files and is absent.
"""

RACIAL_MODEL_TYPES: frozenset[ItemType] = frozenset({
    ItemType.EQUIPMENT,
    ItemType.ACCESSORY,
})
"""Categories whose models are stored once per playable race."""


# ---------------------------------------------------------------------------
# Playable races
# ---------------------------------------------------------------------------


class Race(Enum):
    """Playable race/gender combinations and their body codes."""

    HYUR_MIDLANDER_MALE = "0101"
    HYUR_MIDLANDER_FEMALE = "0201"
    HYUR_HIGHLANDER_MALE = "0301"
    HYUR_HIGHLANDER_FEMALE = "0401"
    ELEZEN_MALE = "0501"
    ELEZEN_FEMALE = "0601"
    MIQOTE_MALE = "0701"
    MIQOTE_FEMALE = "0801"
    ROEGADYN_MALE = "0901"
    ROEGADYN_FEMALE = "1001"
    LALAFELL_MALE = "1101"
    LALAFELL_FEMALE = "1201"
    AURA_MALE = "1301"
    AURA_FEMALE = "1401"
    HROTHGAR = "1501"
    VIERA = "1801"

    @property
    def code(self) -> str:
        """Four-digit body code used in file names (``c0101...``)."""
        return self.value

    @classmethod
    def from_code(cls, code: str) -> Race | None:
        try:
            return cls(code)
        except ValueError:
            return None


PLAYABLE_RACES: tuple[Race, ...] = tuple(Race)


# ---------------------------------------------------------------------------
# Slots shared by the IMC and EQDP layouts
# ---------------------------------------------------------------------------

EQUIPMENT_SLOTS: tuple[str, ...] = ("met", "top", "glv", "dwn", "sho")
ACCESSORY_SLOTS: tuple[str, ...] = ("ear", "nek", "wrs", "rir", "ril")


def slot_list(item_type: ItemType) -> tuple[str, ...]:
    """Return the record slot order used for ``item_type``.

    Accessories use the accessory list; every other category (equipment,
    and demihuman equipment) uses the equipment list.
    """
    if item_type is ItemType.ACCESSORY:
        return ACCESSORY_SLOTS
    return EQUIPMENT_SLOTS


def slot_index(slot: str | None) -> int | None:
    """Index of ``slot`` within whichever slot list contains it."""
    if slot in EQUIPMENT_SLOTS:
        return EQUIPMENT_SLOTS.index(slot)
    if slot in ACCESSORY_SLOTS:
        return ACCESSORY_SLOTS.index(slot)
    return None


# ---------------------------------------------------------------------------
# IMC layout
# ---------------------------------------------------------------------------


class ImcFormat(IntEnum):
    """Format marker stored in bytes 2-3 of an IMC header."""

    UNKNOWN = 0
    NON_SET = 1
    SET = 31


IMC_HEADER_SIZE: int = 4
IMC_SUB_ENTRY_SIZE: int = 6
IMC_SET_SUB_ENTRIES: int = 5
IMC_SET_ENTRY_SIZE: int = IMC_SUB_ENTRY_SIZE * IMC_SET_SUB_ENTRIES


def imc_entry_size(fmt: ImcFormat) -> int:
    """Byte size of one IMC record for ``fmt``."""
    if fmt is ImcFormat.NON_SET:
        return IMC_SUB_ENTRY_SIZE
    return IMC_SET_ENTRY_SIZE


# ---------------------------------------------------------------------------
# EQP layout
# ---------------------------------------------------------------------------

EQP_PATHS: Mapping[ItemType, str] = MappingProxyType({
    ItemType.EQUIPMENT: "chara/xls/equipmentparameter/equipmentparameter.eqp",
})

EQP_ENTRY_SIZE: int = 8
"""Bytes per EQP record."""

EQP_SLOT_OFFSETS: Mapping[str, int] = MappingProxyType({
    "top": 0,
    "dwn": 2,
    "glv": 3,
    "sho": 4,
    "met": 5,
})
"""Byte offset of each slot's data within an EQP record."""


# ---------------------------------------------------------------------------
# EQDP layout
# ---------------------------------------------------------------------------

EQDP_FOLDERS: Mapping[ItemType, str] = MappingProxyType({
    ItemType.EQUIPMENT: "chara/xls/charadb/equipmentdeformerparameter/",
    ItemType.ACCESSORY: "chara/xls/charadb/accessorydeformerparameter/",
})

EQDP_ENTRY_SIZE: int = 2
"""Bytes per EQDP record."""

EQDP_BITS_PER_SLOT: int = 2


def eqdp_path(item_type: ItemType, race: Race) -> str:
    """Path of the per-race EQDP file for ``item_type``."""
    return f"{EQDP_FOLDERS[item_type]}c{race.code}.eqdp"
