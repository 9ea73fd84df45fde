"""xivgraph: Dependency graph resolution for packaged game character assets."""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"
