"""
Indented tree dump of a document.

One line per node, two spaces of indentation per level, the node kind
followed by whichever attributes the node carries:

    ROOT 1abc
      MODEL 1
        CHAIN A
          RESIDUE ALA 1
            ATOM N 1 N (   0.000,    0.000,    0.000)
            BOND N-CA
"""

from pathlib import Path
from typing import List, Union

from maral.core.components import (
    AtomicNumber,
    ChainTagged,
    InsertionCoded,
    Named,
    Ordered,
    Positioned,
)
from maral.core.hierarchy import Kind, Node


def _format_node(node: Node, frame: int) -> str:
    """Format a single node as one line, without indentation."""
    kind = node.kind.name if node.kind is not None else type(node).__name__.upper()
    parts = [kind]

    if node.kind is Kind.BOND:
        parts.append(f"{_label(node.atom1)}-{_label(node.atom2)}")
        return " ".join(parts)

    if isinstance(node, ChainTagged) and node.kind is Kind.CHAIN:
        parts.append(node.chain_id.strip() or "-")
    elif isinstance(node, Named) and node.name.strip():
        parts.append(node.name.strip())

    if isinstance(node, Ordered):
        order = str(node.order)
        if isinstance(node, InsertionCoded):
            order += node.icode.strip()
        parts.append(order)

    if isinstance(node, AtomicNumber):
        parts.append(node.element)

    if isinstance(node, Positioned):
        x, y, z = node.frame_center(frame)
        parts.append(f"({x:>8.3f}, {y:>8.3f}, {z:>8.3f})")

    return " ".join(parts)


def _label(atom: Node) -> str:
    if isinstance(atom, Named) and atom.name.strip():
        return atom.name.strip()
    return "?"


def tree_lines(node: Node, frame: int = 0) -> List[str]:
    """
    Format a node and its descendants, one string per node.

    Args:
        node: Top of the subtree to dump
        frame: Coordinate frame used for positions

    Returns:
        Lines in pre-order
    """
    base = node.depth()
    lines = [_format_node(node, frame)]
    for child in node.range():
        indent = "  " * (child.depth() - base)
        lines.append(indent + _format_node(child, frame))
    return lines


def format_tree(node: Node, frame: int = 0) -> str:
    """Tree dump of a subtree as a single string."""
    return "\n".join(tree_lines(node, frame)) + "\n"


def write_tree(filename: Union[str, Path], node: Node, frame: int = 0) -> None:
    """
    Write the tree dump of a subtree to a file.

    Args:
        filename: Output file path
        node: Top of the subtree to dump
        frame: Coordinate frame used for positions
    """
    with open(filename, "w") as f:
        for line in tree_lines(node, frame):
            f.write(line + "\n")
