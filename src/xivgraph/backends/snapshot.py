"""Archive snapshot files: a declarative description of archive state.

A snapshot lets the graph run without a game installation. It lists the
raw bytes of the files the graph reads directly (IMC headers), the child
declarations the parsers would report, and the deformer table's race
availability. YAML and JSON are both accepted.

Example::

    files:
      chara/equipment/e0001/e0001.imc: "0100 1f00"
    children:
      chara/equipment/e0001/model/c0101e0001_top.mdl:
        - chara/equipment/e0001/material/v0001/mt_c0101e0001_top_a.mtrl
    skin_children:
      chara/human/c0101/obj/body/b0001/model/c0101b0001_top.mdl:
        - chara/human/c0101/obj/body/b0001/material/v0001/mt_c0101b0001_a.mtrl
    races:
      "1_top": ["0101", "0201"]
    references:
      chara/common/texture/shared_n.tex:
        - chara/equipment/e0002/material/v0001/mt_c0101e0002_top_a.mtrl

``references`` adds reverse-cache rows on top of those derived from
``children``. Malformed individual entries are skipped with a warning;
a file whose top level has the wrong shape raises ``SnapshotError``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from xivgraph.backends.memory import (
    DeclaredReferences,
    MemoryArchive,
    MemoryDeformerParameters,
)
from xivgraph.core.graph.engine import DependencyGraph
from xivgraph.core.roots.tables import Race
from xivgraph.exceptions import SnapshotError

logger = logging.getLogger(__name__)

SNAPSHOT_ENV_VAR: str = "XIVGRAPH_SNAPSHOT"
"""Environment variable the CLI reads when ``--snapshot`` is not given."""

_SECTIONS = ("files", "children", "skin_children", "races", "references")


@dataclass
class ArchiveSnapshot:
    """Parsed contents of a snapshot file.

    Attributes:
        files: Path -> decompressed payload.
        children: Parent -> declared children.
        skin_children: Model -> skin materials.
        races: ``(set id, slot)`` -> races with a dedicated model.
        references: Child -> extra declared parents.
    """

    files: dict[str, bytes] = field(default_factory=dict)
    children: dict[str, list[str]] = field(default_factory=dict)
    skin_children: dict[str, list[str]] = field(default_factory=dict)
    races: dict[tuple[int, str | None], list[Race]] = field(default_factory=dict)
    references: dict[str, list[str]] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ArchiveSnapshot:
        """Build a snapshot from parsed YAML/JSON data.

        Raises:
            SnapshotError: If the data or one of its sections is not a mapping.
        """
        if not isinstance(data, dict):
            raise SnapshotError("Snapshot must be a mapping at the top level")
        for section in _SECTIONS:
            if not isinstance(data.get(section, {}), dict):
                raise SnapshotError(f"Snapshot section {section!r} must be a mapping")

        snapshot = cls()
        for path, payload in data.get("files", {}).items():
            decoded = _decode_payload(path, payload)
            if decoded is not None:
                snapshot.files[str(path)] = decoded

        snapshot.children = _path_lists(data.get("children", {}), "children")
        snapshot.skin_children = _path_lists(data.get("skin_children", {}), "skin_children")
        snapshot.references = _path_lists(data.get("references", {}), "references")

        for key, codes in data.get("races", {}).items():
            parsed_key = _parse_race_key(str(key))
            if parsed_key is None or not isinstance(codes, list):
                logger.warning("Skipping malformed race entry: %s", key)
                continue
            races = []
            for code in codes:
                race = Race.from_code(str(code).zfill(4))
                if race is None:
                    logger.warning("Skipping unknown race code %s for %s", code, key)
                    continue
                races.append(race)
            snapshot.races[parsed_key] = races

        return snapshot

    @classmethod
    def read(cls, path: Path) -> ArchiveSnapshot:
        """Load a snapshot from a YAML or JSON file.

        Raises:
            SnapshotError: If the file cannot be read or parsed.
        """
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise SnapshotError(f"Cannot read snapshot {path}: {exc}") from exc
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise SnapshotError(f"Invalid snapshot {path}: {exc}") from exc
        return cls.from_dict(data if data is not None else {})

    def to_graph(self) -> DependencyGraph:
        """Build a ``DependencyGraph`` served by this snapshot's data."""
        references = DeclaredReferences(
            children=self.children,
            skin_children=self.skin_children,
            extra_parents=self.references,
        )
        return DependencyGraph(
            archive=MemoryArchive(self.files),
            models=references,
            materials=references,
            deformers=MemoryDeformerParameters(self.races),
            references=references,
        )


def load_snapshot(path: Path | str) -> DependencyGraph:
    """Read a snapshot file and return a graph backed by it."""
    return ArchiveSnapshot.read(Path(path)).to_graph()


def _decode_payload(path: str, payload: Any) -> bytes | None:
    if not isinstance(payload, str):
        logger.warning("Skipping non-string payload for %s", path)
        return None
    try:
        return bytes.fromhex(payload)
    except ValueError:
        logger.warning("Skipping invalid hex payload for %s", path)
        return None


def _path_lists(section: dict[Any, Any], name: str) -> dict[str, list[str]]:
    result: dict[str, list[str]] = {}
    for key, value in section.items():
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            logger.warning("Skipping malformed %s entry: %s", name, key)
            continue
        result[str(key)] = list(value)
    return result


def _parse_race_key(key: str) -> tuple[int, str | None] | None:
    """Parse ``"<set id>"`` or ``"<set id>_<slot>"``."""
    set_part, _, slot = key.partition("_")
    if not set_part.isdigit():
        return None
    return int(set_part), slot or None
