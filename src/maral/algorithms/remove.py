"""
Removal of nodes collected from a traversal.

Candidates are collected first, candidates whose ancestor is also a
candidate are dropped, and only then are the nodes detached, so the tree
is never mutated while it is being iterated.
"""

import logging
from typing import Callable, Iterable, List

from maral.core.hierarchy import Kind

logger = logging.getLogger(__name__)


def remove(nodes: Iterable) -> List:
    """
    Detach every node of a range from its parent.

    A node whose ancestor is also in the range is removed together with
    that ancestor rather than on its own. Connections of every removed atom
    are dropped from the document's connection table, and the bonds that
    recorded them are detached.

    Args:
        nodes: Nodes to remove, typically a NodeRange

    Returns:
        The detached top-level nodes, in range order

    Raises:
        ValueError: If a node has no parent
    """
    candidates = list(nodes)
    for node in candidates:
        if node.parent is None:
            raise ValueError(f"{node!r} has no parent to be removed from")
    return _detach(_drop_descendants(candidates))


def remove_if(nodes: Iterable, predicate: Callable[[object], bool]) -> List:
    """
    Detach the nodes of a range that satisfy a predicate.

    Same semantics as remove() applied to the matching nodes.

    Example:
        >>> remove_if(root.range(Kind.RESIDUE), lambda r: r.name == "HOH")
    """
    return remove([node for node in nodes if predicate(node)])


def _drop_descendants(candidates: List) -> List:
    selected = set(map(id, candidates))
    kept = []
    for node in candidates:
        ancestor = node.parent
        while ancestor is not None and id(ancestor) not in selected:
            ancestor = ancestor.parent
        if ancestor is None:
            kept.append(node)
    return kept


def _detach(nodes: List) -> List:
    removed = []
    for node in nodes:
        # a bond may already be gone with the atoms purged before it
        if node.parent is None:
            continue
        table = getattr(node.root(), "connections", None)
        if table is not None:
            _purge_connections(node, table)
        node.parent.remove(node)
        removed.append(node)
    logger.debug("Removed %d nodes", len(removed))
    return removed


def _purge_connections(node, table) -> None:
    atoms = [node] if node.kind is Kind.ATOM else list(node.range(Kind.ATOM))
    for atom in atoms:
        for bond in table.remove_atom(atom):
            if bond.parent is not None:
                bond.parent.remove(bond)
