"""Path classification: canonical archive path -> file type and level.

Paths are the lower-case, forward-slash internal paths used by the game
archive (``chara/equipment/e0001/model/c0101e0001_top.mdl``). A path may
carry a trailing binary-offset suffix, ``<path>::<bits>``, addressing one
fixed-size record inside a shared metadata file. The offset is decimal and
counted in bits from the start of the decompressed file payload.

Classification is a pure function of the path string. It never touches
the archive, so an ``.mtrl`` path that does not exist still classifies as
a material.
"""

from __future__ import annotations

import re

from xivgraph.core.classification.levels import (
    BINARY_RECORD_TYPES,
    FILE_TYPE_LEVELS,
    DependencyFileType,
    DependencyLevel,
)
from xivgraph.exceptions import PathFormatError

BINARY_OFFSET_MARKER: str = "::"
"""Separator between a metadata file path and a record's bit offset."""

# Captures the extension even when a binary offset is attached.
_EXTENSION_RE = re.compile(r"^.*\.([a-z]+)(?:" + BINARY_OFFSET_MARKER + r"[0-9]+)?$")

_BINARY_OFFSET_RE = re.compile(BINARY_OFFSET_MARKER + r"([0-9]+)$")

_FILE_TYPES_BY_EXTENSION: dict[str, DependencyFileType] = {
    ft.value: ft for ft in DependencyFileType if ft is not DependencyFileType.INVALID
}


def get_extension(path: str) -> str | None:
    """Return the file extension of ``path``, ignoring any binary offset.

    Returns None for folders and extensionless files.
    """
    match = _EXTENSION_RE.match(path)
    if not match:
        return None
    return match.group(1)


def has_binary_offset(path: str) -> bool:
    """Return True if ``path`` ends in a ``::<digits>`` record offset."""
    return _BINARY_OFFSET_RE.search(path) is not None


def split_binary_offset(path: str) -> tuple[str, int | None]:
    """Split ``path`` into its file path and bit offset.

    Returns ``(path, None)`` unchanged when no offset is attached.
    """
    match = _BINARY_OFFSET_RE.search(path)
    if not match:
        return path, None
    return path[: match.start()], int(match.group(1))


def make_binary_offset_path(path: str, bit_offset: int) -> str:
    """Build a ``<file>::<bits>`` record path.

    Raises:
        PathFormatError: If ``bit_offset`` is negative or ``path`` already
            carries an offset.
    """
    if bit_offset < 0:
        raise PathFormatError(f"Bit offset must be non-negative, got {bit_offset}")
    if has_binary_offset(path):
        raise PathFormatError(f"Path already carries a binary offset: {path!r}")
    return f"{path}{BINARY_OFFSET_MARKER}{bit_offset}"


def classify_file_type(path: str) -> DependencyFileType:
    """Determine the dependency file type of ``path``.

    Unknown or missing extensions classify as ``INVALID``. EQP, EQDP and
    IMC files are only addressable one record at a time, so those
    extensions classify as ``INVALID`` unless a binary offset is attached.
    """
    extension = get_extension(path)
    if extension is None:
        return DependencyFileType.INVALID

    file_type = _FILE_TYPES_BY_EXTENSION.get(extension, DependencyFileType.INVALID)
    if file_type in BINARY_RECORD_TYPES and not has_binary_offset(path):
        return DependencyFileType.INVALID
    return file_type


def classify_level(path: str) -> DependencyLevel:
    """Determine the dependency level of ``path``."""
    return FILE_TYPE_LEVELS[classify_file_type(path)]
