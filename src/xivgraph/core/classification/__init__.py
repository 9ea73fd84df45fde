"""Path classification into dependency file types and levels."""

from xivgraph.core.classification.classifier import (
    BINARY_OFFSET_MARKER,
    classify_file_type,
    classify_level,
    get_extension,
    has_binary_offset,
    make_binary_offset_path,
    split_binary_offset,
)
from xivgraph.core.classification.levels import (
    BINARY_RECORD_TYPES,
    FILE_TYPE_LEVELS,
    DependencyFileType,
    DependencyLevel,
)

__all__ = [
    "BINARY_OFFSET_MARKER",
    "BINARY_RECORD_TYPES",
    "FILE_TYPE_LEVELS",
    "DependencyFileType",
    "DependencyLevel",
    "classify_file_type",
    "classify_level",
    "get_extension",
    "has_binary_offset",
    "make_binary_offset_path",
    "split_binary_offset",
]
