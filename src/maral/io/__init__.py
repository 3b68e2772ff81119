"""Document I/O module."""

from maral.io.pdb_reader import read_pdb, convert_structure, ReaderConfig
from maral.io.tree_writer import format_tree, write_tree, tree_lines

__all__ = [
    "read_pdb",
    "convert_structure",
    "ReaderConfig",
    "format_tree",
    "write_tree",
    "tree_lines",
]
