"""Rich output formatting helpers for the xivgraph CLI.

Paths are printed with soft wrapping so long archive paths stay on one
line and remain copy-pasteable.
"""

from __future__ import annotations

from rich.console import Console
from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from xivgraph.core.classification import DependencyFileType, DependencyLevel

_LEVEL_STYLES: dict[DependencyLevel, str] = {
    DependencyLevel.INVALID: "bold red",
    DependencyLevel.ROOT: "bold magenta",
    DependencyLevel.MODEL: "cyan",
    DependencyLevel.MATERIAL: "yellow",
    DependencyLevel.TEXTURE: "green",
}

console = Console()


def level_style(level: DependencyLevel) -> str:
    """Return the Rich style string for a dependency level."""
    return _LEVEL_STYLES.get(level, "white")


def print_classification(path: str, file_type: DependencyFileType, level: DependencyLevel) -> None:
    table = Table(show_header=True, header_style="bold")
    table.add_column("Path", overflow="fold")
    table.add_column("Type", justify="center")
    table.add_column("Level", justify="center")
    table.add_row(path, file_type.value, Text(level.name, style=level_style(level)))
    console.print(table)


def print_paths(title: str, paths: list[str]) -> None:
    """Print a titled list of paths, one per line.

    Args:
        title: Heading such as "Parents" or "Roots".
        paths: Paths to print in the given order.
    """
    console.print(f"[bold]{title}[/bold] ({len(paths)})")
    if not paths:
        console.print("[dim]  none[/dim]")
        return
    for path in paths:
        console.print(f"  {path}", soft_wrap=True, highlight=False, markup=False)


def print_tree(root_path: str, children: dict[str, list[str]], levels: dict[str, DependencyLevel]) -> None:
    """Print a dependency tree below ``root_path``.

    Args:
        root_path: Path at the top of the tree.
        children: Parent -> children mapping of every expanded node.
        levels: Level of every node, used for colouring.
    """
    def _label(path: str) -> Text:
        return Text(path, style=level_style(levels.get(path, DependencyLevel.INVALID)))

    def _add(node: Tree, path: str, ancestors: frozenset[str]) -> None:
        for child in children.get(path, []):
            branch = node.add(_label(child))
            if child not in ancestors:
                _add(branch, child, ancestors | {child})

    tree = Tree(_label(root_path))
    _add(tree, root_path, frozenset({root_path}))
    console.print(tree, soft_wrap=True)
