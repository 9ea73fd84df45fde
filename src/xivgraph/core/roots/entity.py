"""Dependency root entities: expand a root into the paths that belong to it.

A ``DependencyRoot`` pairs a ``RootIdentity`` with the graph that created
it. Models and metadata records follow from the identity by fixed naming
rules and record arithmetic; materials and textures can only be learned
by asking the model and material parsers what each file references.

The module-level functions are the pure part of the expansion and can be
used without a graph:

- ``simple_model_path`` / ``racial_model_path`` -- model naming.
- ``eqp_entry_path`` -- the one EQP record of an equipment root.
- ``eqdp_entry_paths`` -- one EQDP record per playable race.
- ``imc_entry_paths`` -- IMC records computed from the file header.
"""

from __future__ import annotations

import asyncio
import logging
import struct
from typing import TYPE_CHECKING

from xivgraph.core.classification import make_binary_offset_path
from xivgraph.core.roots.identity import RootIdentity, format_id
from xivgraph.core.roots.tables import (
    EQDP_BITS_PER_SLOT,
    EQDP_ENTRY_SIZE,
    EQDP_FOLDERS,
    EQP_ENTRY_SIZE,
    EQP_PATHS,
    EQP_SLOT_OFFSETS,
    IMC_HEADER_SIZE,
    IMC_SUB_ENTRY_SIZE,
    PLAYABLE_RACES,
    ImcFormat,
    Race,
    eqdp_path,
    imc_entry_size,
    slot_index,
    slot_list,
)
from xivgraph.exceptions import PathFormatError

if TYPE_CHECKING:
    from xivgraph.core.graph.engine import DependencyGraph

logger = logging.getLogger(__name__)

_IMC_HEADER = struct.Struct("<HH")

MODEL_FOLDER: str = "model/"


# ---------------------------------------------------------------------------
# Model naming
# ---------------------------------------------------------------------------


def simple_model_path(identity: RootIdentity) -> str:
    """Path of the single model of a root that has a secondary type.

    Raises:
        PathFormatError: If the root stores its models per race.
    """
    if identity.uses_racial_models:
        raise PathFormatError(
            f"{identity} has no simple model; its models are stored per race"
        )
    return f"{identity.root_folder}{MODEL_FOLDER}{identity.base_file_name}.mdl"


def racial_model_path(identity: RootIdentity, race: Race) -> str:
    """Path of one race's model of an equipment or accessory root.

    Racial models are named as if the item were a human sub-part: the race
    body code takes the primary position and the item set the secondary.

    Raises:
        PathFormatError: If the root does not store its models per race.
    """
    if not identity.uses_racial_models:
        raise PathFormatError(f"{identity} does not use racial models")
    name = (
        f"c{race.code}"
        f"{identity.primary_type.prefix}{format_id(identity.primary_id)}"
    )
    if identity.slot is not None:
        name += f"_{identity.slot}"
    return f"{identity.root_folder}{MODEL_FOLDER}{name}.mdl"


# ---------------------------------------------------------------------------
# Metadata record arithmetic
# ---------------------------------------------------------------------------


def eqp_entry_path(identity: RootIdentity) -> str | None:
    """Bit-offset path of the root's EQP record, if its type has one.

    Returns None for categories without an EQP table and for slots that
    have no byte range in the EQP record.
    """
    eqp_file = EQP_PATHS.get(identity.primary_type)
    if eqp_file is None:
        return None
    sub_offset = EQP_SLOT_OFFSETS.get(identity.slot)
    if sub_offset is None:
        return None

    entry_bits = EQP_ENTRY_SIZE * 8
    offset = entry_bits * identity.primary_id + sub_offset * 8
    return make_binary_offset_path(eqp_file, offset)


def eqdp_entry_paths(identity: RootIdentity) -> list[str]:
    """Bit-offset paths of the root's EQDP records, one per playable race.

    The offset is identical in every race's file.
    """
    if identity.primary_type not in EQDP_FOLDERS:
        return []
    slots = slot_list(identity.primary_type)
    if identity.slot not in slots:
        return []

    entry_bits = EQDP_ENTRY_SIZE * 8
    offset = entry_bits * identity.primary_id + slots.index(identity.slot) * EQDP_BITS_PER_SLOT
    return [
        make_binary_offset_path(eqdp_path(identity.primary_type, race), offset)
        for race in PLAYABLE_RACES
    ]


def parse_imc_header(data: bytes) -> tuple[int, ImcFormat]:
    """Read the subset count and format marker from an IMC payload.

    Unrecognised markers come back as ``ImcFormat.UNKNOWN``.

    Raises:
        PathFormatError: If ``data`` is shorter than the 4-byte header.
    """
    if len(data) < IMC_HEADER_SIZE:
        raise PathFormatError(f"IMC payload too short: {len(data)} bytes")
    subset_count, marker = _IMC_HEADER.unpack_from(data)
    try:
        fmt = ImcFormat(marker)
    except ValueError:
        fmt = ImcFormat.UNKNOWN
    return subset_count, fmt


def imc_entry_paths(identity: RootIdentity, header: bytes) -> list[str]:
    """Bit-offset paths of the root's IMC records.

    One path addresses the base record, followed by one per subset. Each
    points at this root's slot inside the record.

    Args:
        identity: The root whose records are wanted.
        header: At least the first 4 bytes of the decompressed IMC file.

    Returns:
        The record paths; empty if the format marker is unrecognised.
    """
    subset_count, fmt = parse_imc_header(header)
    if fmt is ImcFormat.UNKNOWN:
        logger.debug("Unrecognised IMC format in %s", identity.imc_path)
        return []

    entry_size = imc_entry_size(fmt)
    index = slot_index(identity.slot)
    sub_offset = index * IMC_SUB_ENTRY_SIZE if index is not None else 0

    imc_file = identity.imc_path
    offsets = [IMC_HEADER_SIZE + sub_offset]
    offsets.extend(
        IMC_HEADER_SIZE + (i + 1) * entry_size + sub_offset
        for i in range(subset_count)
    )
    return [make_binary_offset_path(imc_file, offset * 8) for offset in offsets]


# ---------------------------------------------------------------------------
# DependencyRoot: identity bound to a graph
# ---------------------------------------------------------------------------


def _unique(paths: list[str]) -> list[str]:
    return list(dict.fromkeys(paths))


class DependencyRoot:
    """A root identity bound to the graph that resolves its live data.

    Roots are cheap, short-lived values created whenever a path resolves
    to a root. Two roots are equal when their identities are equal; the
    graph reference is not part of equality.

    Args:
        identity: The root's identifying values.
        graph: Graph used to reach the archive, deformer table, and
            child-resolution queries.
    """

    def __init__(self, identity: RootIdentity, graph: DependencyGraph) -> None:
        self._identity = identity
        self._graph = graph

    @property
    def identity(self) -> RootIdentity:
        return self._identity

    @property
    def root_path(self) -> str:
        return self._identity.root_path

    def __str__(self) -> str:
        return self._identity.root_path

    def __repr__(self) -> str:
        return f"DependencyRoot({self._identity.root_path!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DependencyRoot):
            return NotImplemented
        return self._identity == other._identity

    def __hash__(self) -> int:
        return hash(self._identity)

    # -- Models --

    async def get_model_files(self) -> list[str]:
        """Return every model file of this root.

        Roots without a secondary type (equipment and accessories) have one
        model per race that the deformer table marks as having its own
        model. Every other root has exactly one model.
        """
        identity = self._identity
        if identity.uses_racial_models:
            races = await self._graph.deformers.get_available_races(
                identity.primary_id, identity.slot
            )
            return _unique([racial_model_path(identity, race) for race in races])
        return [simple_model_path(identity)]

    # -- Metadata --

    def get_eqp_entry_path(self) -> str | None:
        return eqp_entry_path(self._identity)

    def get_eqdp_entry_paths(self) -> list[str]:
        return eqdp_entry_paths(self._identity)

    async def get_imc_entry_paths(self) -> list[str]:
        """Return this root's IMC record paths.

        Roots whose IMC file is missing from the archive have no records.
        """
        imc_file = self._identity.imc_path
        archive = self._graph.archive
        if await archive.get_data_offset(imc_file) == 0:
            logger.debug("No IMC file for %s", self._identity)
            return []

        data = await archive.read_file(imc_file)
        if data is None or len(data) < IMC_HEADER_SIZE:
            logger.debug("Unreadable IMC header in %s", imc_file)
            return []
        return imc_entry_paths(self._identity, data)

    async def get_meta_entries(self) -> list[str]:
        """Return every binary metadata record of this root.

        Order is EQP, then EQDP (race order), then IMC (base record first).
        Categories without a given table contribute nothing for it.
        """
        metas: list[str] = []
        eqp = self.get_eqp_entry_path()
        if eqp is not None:
            metas.append(eqp)
        metas.extend(self.get_eqdp_entry_paths())
        metas.extend(await self.get_imc_entry_paths())
        return metas

    # -- Live-data levels --

    async def _collect_children(self, parents: list[str]) -> list[str]:
        results = await asyncio.gather(
            *(self._graph.get_child_files(parent) for parent in parents)
        )
        collected: list[str] = []
        for children in results:
            collected.extend(children or [])
        return _unique(collected)

    async def get_material_files(self) -> list[str]:
        """Return the unique materials referenced by this root's models."""
        return await self._collect_children(await self.get_model_files())

    async def get_texture_files(self) -> list[str]:
        """Return the unique textures referenced by this root's materials."""
        return await self._collect_children(await self.get_material_files())
