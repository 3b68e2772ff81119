"""Core data model: geometry, coordinates, hierarchy and connectivity."""

from maral.core.hierarchy import Kind, Node, LeafNode, CompositeNode, RootNode
from maral.core.iteration import NodeIterator, NodeRange
from maral.core.coordinates import CoordinateRepository, InlinePosition, LinkedPosition
from maral.core.connections import ConnectionTable
from maral.core.components import (
    Named,
    Ordered,
    ChainTagged,
    InsertionCoded,
    Occupancy,
    BFactor,
    FormalCharge,
    PartialCharge,
    AtomicNumber,
    CovalentRadius,
    Positioned,
    has_capability,
    require_capability,
)
from maral.core.structures import (
    Root,
    Model,
    Chain,
    Residue,
    AtomNode,
    Atom,
    PDBAtom,
    ChargedAtom,
    Bond,
    make_bond,
)
from maral.core.geometry import point2, point3, distance, distance2, superimpose

__all__ = [
    "Kind",
    "Node",
    "LeafNode",
    "CompositeNode",
    "RootNode",
    "NodeIterator",
    "NodeRange",
    "CoordinateRepository",
    "InlinePosition",
    "LinkedPosition",
    "ConnectionTable",
    "Named",
    "Ordered",
    "ChainTagged",
    "InsertionCoded",
    "Occupancy",
    "BFactor",
    "FormalCharge",
    "PartialCharge",
    "AtomicNumber",
    "CovalentRadius",
    "Positioned",
    "has_capability",
    "require_capability",
    "Root",
    "Model",
    "Chain",
    "Residue",
    "AtomNode",
    "Atom",
    "PDBAtom",
    "ChargedAtom",
    "Bond",
    "make_bond",
    "point2",
    "point3",
    "distance",
    "distance2",
    "superimpose",
]
