"""Tests for RootIdentity construction, canonical paths and equality.

Verifies:
    - Canonical ``.root`` path formatting with and without secondaries.
    - Human sub-type slot canonicalization.
    - Equality and hashing by canonical path.
    - Validation in the constructor and the non-raising factory.
"""

from __future__ import annotations

from dataclasses import FrozenInstanceError

import pytest

from xivgraph.core.roots.identity import RootIdentity, create_root_identity, format_id
from xivgraph.core.roots.tables import ItemType
from xivgraph.exceptions import PathFormatError


class TestRootPath:
    """Canonical string form."""

    def test_equipment_root_path(self) -> None:
        identity = RootIdentity(ItemType.EQUIPMENT, 1, slot="top")
        assert identity.root_path == "chara/equipment/e0001/e0001_top.root"

    def test_secondary_root_path(self) -> None:
        identity = RootIdentity(ItemType.MONSTER, 7001, ItemType.BODY, 2)
        assert identity.root_path == "chara/monster/m7001/obj/body/b0002/m7001b0002.root"

    def test_demihuman_root_path(self) -> None:
        identity = RootIdentity(ItemType.DEMIHUMAN, 1, ItemType.EQUIPMENT, 5, "met")
        assert identity.root_path == (
            "chara/demihuman/d0001/obj/equipment/e0005/d0001e0005_met.root"
        )

    def test_str_is_root_path(self) -> None:
        identity = RootIdentity(ItemType.ACCESSORY, 12, slot="ear")
        assert str(identity) == "chara/accessory/a0012/a0012_ear.root"

    def test_format_id_pads(self) -> None:
        assert format_id(7) == "0007"
        assert format_id(6016) == "6016"


class TestImcPath:

    def test_primary_named_imc(self) -> None:
        identity = RootIdentity(ItemType.EQUIPMENT, 1, slot="top")
        assert identity.imc_path == "chara/equipment/e0001/e0001.imc"

    def test_secondary_named_imc(self) -> None:
        identity = RootIdentity(ItemType.WEAPON, 201, ItemType.BODY, 3)
        assert identity.imc_path == "chara/weapon/w0201/obj/body/b0003/b0003.imc"


class TestHumanCanonicalization:
    """Human sub-parts rewrite their slot during construction."""

    @pytest.mark.parametrize(
        ("secondary", "slot"),
        [
            (ItemType.FACE, "fac"),
            (ItemType.HAIR, "hir"),
            (ItemType.TAIL, "til"),
            (ItemType.EAR, "ear"),
            (ItemType.BODY, "top"),
        ],
    )
    def test_unset_slot(self, secondary: ItemType, slot: str) -> None:
        identity = RootIdentity(ItemType.HUMAN, 101, secondary, 1)
        assert identity.slot == slot
        assert identity.root_path.endswith(f"_{slot}.root")

    def test_face_overrides_explicit_slot(self) -> None:
        identity = RootIdentity(ItemType.HUMAN, 101, ItemType.FACE, 1, "iri")
        assert identity.slot == "fac"

    def test_body_keeps_explicit_slot(self) -> None:
        identity = RootIdentity(ItemType.HUMAN, 101, ItemType.BODY, 1, "dwn")
        assert identity.slot == "dwn"

    def test_ear_folder_and_prefix(self) -> None:
        identity = RootIdentity(ItemType.HUMAN, 1801, ItemType.EAR, 3)
        assert identity.root_path == "chara/human/c1801/obj/zear/z0003/c1801z0003_ear.root"


class TestEquality:
    """Identities compare by canonical path, not by field values."""

    def test_differently_constructed_faces_are_equal(self) -> None:
        a = RootIdentity(ItemType.HUMAN, 101, ItemType.FACE, 1)
        b = RootIdentity(ItemType.HUMAN, 101, ItemType.FACE, 1, "iri")
        assert a == b
        assert hash(a) == hash(b)
        assert len({a, b}) == 1

    def test_different_slots_differ(self) -> None:
        assert RootIdentity(ItemType.EQUIPMENT, 1, slot="top") != RootIdentity(
            ItemType.EQUIPMENT, 1, slot="dwn"
        )

    def test_not_equal_to_string(self) -> None:
        identity = RootIdentity(ItemType.EQUIPMENT, 1, slot="top")
        assert identity != identity.root_path

    def test_frozen(self) -> None:
        identity = RootIdentity(ItemType.EQUIPMENT, 1, slot="top")
        with pytest.raises(FrozenInstanceError):
            identity.slot = "dwn"  # type: ignore[misc]


class TestValidation:

    def test_negative_id_raises(self) -> None:
        with pytest.raises(PathFormatError):
            RootIdentity(ItemType.EQUIPMENT, -1, slot="top")

    def test_half_secondary_raises(self) -> None:
        with pytest.raises(PathFormatError):
            RootIdentity(ItemType.MONSTER, 1, ItemType.BODY, None)

    def test_unknown_type_raises(self) -> None:
        with pytest.raises(PathFormatError):
            RootIdentity("equipment", 1, slot="top")  # type: ignore[arg-type]


class TestCreateRootIdentity:
    """The factory returns None instead of raising."""

    def test_equipment_with_slot(self) -> None:
        identity = create_root_identity(ItemType.EQUIPMENT, 1, slot="top")
        assert identity == RootIdentity(ItemType.EQUIPMENT, 1, slot="top")

    @pytest.mark.parametrize("item_type", [ItemType.INDOOR, ItemType.OUTDOOR, ItemType.BODY])
    def test_unsupported_primary(self, item_type: ItemType) -> None:
        assert create_root_identity(item_type, 1, slot="top") is None

    def test_missing_primary(self) -> None:
        assert create_root_identity(None, 1) is None
        assert create_root_identity(ItemType.EQUIPMENT, None, slot="top") is None

    def test_negative_ids(self) -> None:
        assert create_root_identity(ItemType.EQUIPMENT, -3, slot="top") is None
        assert create_root_identity(ItemType.MONSTER, 1, ItemType.BODY, -1) is None

    def test_half_secondary(self) -> None:
        assert create_root_identity(ItemType.MONSTER, 1, ItemType.BODY, None) is None

    @pytest.mark.parametrize(
        "item_type", [ItemType.EQUIPMENT, ItemType.ACCESSORY]
    )
    def test_racial_types_need_slot(self, item_type: ItemType) -> None:
        assert create_root_identity(item_type, 1) is None

    def test_demihuman_needs_slot(self) -> None:
        assert create_root_identity(ItemType.DEMIHUMAN, 1, ItemType.EQUIPMENT, 1) is None

    def test_human_sub_part_needs_slot(self) -> None:
        assert create_root_identity(ItemType.HUMAN, 101, ItemType.HAIR, 1) is None

    def test_human_body_without_slot(self) -> None:
        identity = create_root_identity(ItemType.HUMAN, 101, ItemType.BODY, 1)
        assert identity is not None
        assert identity.slot == "top"

    @pytest.mark.parametrize("item_type", [ItemType.EQUIPMENT, ItemType.ACCESSORY])
    def test_racial_types_reject_secondary(self, item_type: ItemType) -> None:
        assert create_root_identity(item_type, 1, ItemType.BODY, 1, "top") is None

    def test_monster_needs_secondary(self) -> None:
        assert create_root_identity(ItemType.MONSTER, 1) is None

    def test_monster_without_slot(self) -> None:
        identity = create_root_identity(ItemType.MONSTER, 1, ItemType.BODY, 1)
        assert identity is not None
        assert identity.slot is None
