"""Shared fixtures for xivgraph tests.

Graph-level tests run against the small archive declared in
``tests/helpers.py``.
"""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from tests.helpers import CHILDREN, E1_IMC, E1_IMC_DATA, RACES, SKIN_CHILDREN
from xivgraph.backends.memory import (
    DeclaredReferences,
    MemoryArchive,
    MemoryDeformerParameters,
)
from xivgraph.core.graph.engine import DependencyGraph


@pytest.fixture
def references() -> DeclaredReferences:
    return DeclaredReferences(children=CHILDREN, skin_children=SKIN_CHILDREN)


@pytest.fixture
def graph(references: DeclaredReferences) -> DependencyGraph:
    """Graph over the shared test archive."""
    return DependencyGraph(
        archive=MemoryArchive({E1_IMC: E1_IMC_DATA}),
        models=references,
        materials=references,
        deformers=MemoryDeformerParameters(RACES),
        references=references,
    )


@pytest.fixture
def snapshot_data() -> dict:
    """The shared test archive in snapshot-file form."""
    return {
        "files": {E1_IMC: E1_IMC_DATA.hex()},
        "children": CHILDREN,
        "skin_children": SKIN_CHILDREN,
        "races": {
            f"{set_id}_{slot}": [race.code for race in races]
            for (set_id, slot), races in RACES.items()
        },
    }


@pytest.fixture
def snapshot_file(tmp_path: Path, snapshot_data: dict) -> Path:
    """Write the shared test archive to a YAML snapshot file."""
    path = tmp_path / "archive.yaml"
    path.write_text(yaml.safe_dump(snapshot_data), encoding="utf-8")
    return path
