"""
MARAL - Molecular hierarchical document model

Root/model/chain/residue/atom trees with type-filtered traversal,
multi-frame coordinate storage and proximity-based bond inference.
"""

__version__ = "0.4.0"

from maral.core.hierarchy import Kind
from maral.core.coordinates import CoordinateRepository
from maral.core.structures import Root, Model, Chain, Residue, Atom, Bond, make_bond
from maral.algorithms import connect, remove, remove_if, rmsd

__all__ = [
    "Kind",
    "CoordinateRepository",
    "Root",
    "Model",
    "Chain",
    "Residue",
    "Atom",
    "Bond",
    "make_bond",
    "connect",
    "remove",
    "remove_if",
    "rmsd",
    "__version__",
]
