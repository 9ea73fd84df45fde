"""Dependency root identities, constant tables, and root expansion."""

from xivgraph.core.roots.entity import (
    DependencyRoot,
    eqdp_entry_paths,
    eqp_entry_path,
    imc_entry_paths,
    parse_imc_header,
    racial_model_path,
    simple_model_path,
)
from xivgraph.core.roots.extraction import (
    RootInfo,
    extract_root_info,
    extract_slot,
    resolve_static_root,
    root_from_binary_offset,
)
from xivgraph.core.roots.identity import RootIdentity, create_root_identity
from xivgraph.core.roots.tables import ImcFormat, ItemType, Race

__all__ = [
    "DependencyRoot",
    "ImcFormat",
    "ItemType",
    "Race",
    "RootIdentity",
    "RootInfo",
    "create_root_identity",
    "eqdp_entry_paths",
    "eqp_entry_path",
    "extract_root_info",
    "extract_slot",
    "imc_entry_paths",
    "parse_imc_header",
    "racial_model_path",
    "resolve_static_root",
    "root_from_binary_offset",
    "simple_model_path",
]
