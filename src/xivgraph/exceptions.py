"""xivgraph exception hierarchy.

All public exceptions inherit from XivGraphError, giving callers a single
base class to catch when they want to handle any xivgraph-specific failure
without swallowing unrelated errors.

Most "nothing found" outcomes of graph queries are not errors at all: an
orphaned texture, an item category without metadata tables, or an IMC file
that is missing from the archive are reported as empty results. Exceptions
are reserved for caller mistakes and for collaborator I/O faults.
"""


class XivGraphError(Exception):
    """Base exception for all xivgraph errors."""


class PathFormatError(XivGraphError, ValueError):
    """Raised when a caller passes a path or identity that breaks a precondition.

    Covers binary-offset parsing of paths that carry no offset, identity
    construction with unknown categories or negative ids, and model name
    generation for item types that do not use that naming scheme.
    """


class SnapshotError(XivGraphError):
    """Raised when an archive snapshot file cannot be loaded.

    Covers unreadable files, YAML/JSON syntax errors, and top-level
    structures of the wrong shape.
    """


class CollaboratorError(XivGraphError):
    """Raised by archive, parser, or cache collaborators on I/O failure.

    The graph engine propagates these unchanged; retry policy belongs to
    the collaborator that raised it.
    """
