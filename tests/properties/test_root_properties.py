"""Property-based tests for root identities and metadata record offsets.

Verifies, for every supported root that hypothesis generates:
- Classification: the canonical root path is a Root-level path.
- Round-trip: resolving the canonical root path recovers the identity.
- Inversion: every EQP, EQDP and IMC record the root owns resolves back
  to the same root.
"""
from __future__ import annotations

from hypothesis import given, settings
from hypothesis import strategies as st

from xivgraph.core.classification import DependencyLevel, classify_level
from xivgraph.core.roots.entity import eqdp_entry_paths, eqp_entry_path, imc_entry_paths
from xivgraph.core.roots.extraction import resolve_static_root
from xivgraph.core.roots.identity import RootIdentity, create_root_identity
from xivgraph.core.roots.tables import (
    ACCESSORY_SLOTS,
    EQP_SLOT_OFFSETS,
    EQUIPMENT_SLOTS,
    ImcFormat,
    ItemType,
)

# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------

set_ids = st.integers(min_value=0, max_value=9999)


@st.composite
def racial_roots(draw: st.DrawFn) -> RootIdentity:
    """Equipment or accessory roots."""
    item_type = draw(st.sampled_from([ItemType.EQUIPMENT, ItemType.ACCESSORY]))
    slots = ACCESSORY_SLOTS if item_type is ItemType.ACCESSORY else EQUIPMENT_SLOTS
    identity = create_root_identity(item_type, draw(set_ids), slot=draw(st.sampled_from(slots)))
    assert identity is not None
    return identity


@st.composite
def secondary_roots(draw: st.DrawFn) -> RootIdentity:
    """Monster, weapon, demihuman and human sub-part roots."""
    kind = draw(st.sampled_from(["monster", "weapon", "demihuman", "human"]))
    if kind == "demihuman":
        identity = create_root_identity(
            ItemType.DEMIHUMAN,
            draw(set_ids),
            ItemType.EQUIPMENT,
            draw(set_ids),
            draw(st.sampled_from(EQUIPMENT_SLOTS)),
        )
    elif kind == "human":
        secondary = draw(
            st.sampled_from(
                [ItemType.BODY, ItemType.FACE, ItemType.HAIR, ItemType.TAIL, ItemType.EAR]
            )
        )
        identity = create_root_identity(
            ItemType.HUMAN,
            draw(set_ids),
            secondary,
            draw(set_ids),
            draw(st.sampled_from(EQUIPMENT_SLOTS)),
        )
    else:
        identity = create_root_identity(ItemType(kind), draw(set_ids), ItemType.BODY, draw(set_ids))
    assert identity is not None
    return identity


any_roots = st.one_of(racial_roots(), secondary_roots())


# ---------------------------------------------------------------------------
# Properties
# ---------------------------------------------------------------------------


class TestRootPathProperties:

    @given(identity=any_roots)
    @settings(max_examples=200)
    def test_root_path_is_root_level(self, identity: RootIdentity) -> None:
        assert classify_level(identity.root_path) is DependencyLevel.ROOT

    @given(identity=any_roots)
    @settings(max_examples=200)
    def test_root_path_round_trips(self, identity: RootIdentity) -> None:
        assert resolve_static_root(identity.root_path) == identity

    @given(identity=any_roots)
    def test_reconstruction_is_stable(self, identity: RootIdentity) -> None:
        rebuilt = RootIdentity(
            identity.primary_type,
            identity.primary_id,
            identity.secondary_type,
            identity.secondary_id,
            identity.slot,
        )
        assert rebuilt == identity
        assert hash(rebuilt) == hash(identity)


class TestMetadataInversion:

    @given(set_id=set_ids, slot=st.sampled_from(sorted(EQP_SLOT_OFFSETS)))
    def test_eqp_record_resolves_to_root(self, set_id: int, slot: str) -> None:
        identity = RootIdentity(ItemType.EQUIPMENT, set_id, slot=slot)
        record = eqp_entry_path(identity)
        assert record is not None
        assert resolve_static_root(record) == identity

    @given(identity=racial_roots())
    def test_eqdp_records_resolve_to_root(self, identity: RootIdentity) -> None:
        records = eqdp_entry_paths(identity)
        assert len(records) == 16
        for record in records:
            assert resolve_static_root(record) == identity

    @given(identity=racial_roots(), subsets=st.integers(min_value=0, max_value=8))
    def test_set_imc_records_resolve_to_root(self, identity: RootIdentity, subsets: int) -> None:
        header = subsets.to_bytes(2, "little") + int(ImcFormat.SET).to_bytes(2, "little")
        records = imc_entry_paths(identity, header)
        assert len(records) == subsets + 1
        for record in records:
            assert resolve_static_root(record) == identity
