"""xivgraph CLI — Dependency queries over game character assets.

Entry point for the ``xivgraph`` command-line tool. Registers all
subcommands under a single Click group.

Commands:
    classify — Show a path's dependency file type and level.
    roots    — List the dependency roots owning a path.
    meta     — List the EQP/EQDP/IMC records of a path's roots.
    parents  — Files one level up that reference a path.
    children — Files one level down that a path references.
    siblings — Files sharing a parent with a path.
    tree     — Everything below a path.

Usage::

    xivgraph classify chara/equipment/e0001/model/c0101e0001_top.mdl
    xivgraph roots chara/equipment/e0001/texture/v01_c0101e0001_top_n.tex
    xivgraph children chara/equipment/e0001/e0001_top.root --snapshot archive.yaml
    XIVGRAPH_SNAPSHOT=archive.yaml xivgraph tree chara/equipment/e0001/e0001_top.root
"""

from __future__ import annotations

import logging

import click

from xivgraph import __version__
from xivgraph.cli.classify_cmd import classify_command
from xivgraph.cli.roots_cmd import meta_command, roots_command
from xivgraph.cli.traverse_cmd import children_command, parents_command, siblings_command
from xivgraph.cli.tree_cmd import tree_command


@click.group()
@click.version_option(version=__version__)
@click.option("-v", "--verbose", is_flag=True, help="Log resolution details to stderr.")
def cli(verbose: bool) -> None:
    """xivgraph: Dependency graph queries for game character assets.

    Resolve which root, model, material and texture files depend on each
    other, and which metadata records belong to an item.
    """
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
        )


cli.add_command(classify_command)
cli.add_command(roots_command)
cli.add_command(meta_command)
cli.add_command(parents_command)
cli.add_command(children_command)
cli.add_command(siblings_command)
cli.add_command(tree_command)
