"""
Concrete node types of the molecular document tree.

Root -> Model -> Chain -> Residue -> Atom, plus Bond leaves that are
attached at the lowest common ancestor of the two atoms they join.
"""

import logging
from typing import Optional

import numpy as np

from maral.core.components import (
    AtomicNumber,
    BFactor,
    ChainTagged,
    CovalentRadius,
    FormalCharge,
    InsertionCoded,
    Named,
    Occupancy,
    Ordered,
    PartialCharge,
    Positioned,
)
from maral.core.connections import ConnectionTable
from maral.core.coordinates import CoordinateRepository
from maral.core.hierarchy import CompositeNode, Kind, LeafNode, RootNode

logger = logging.getLogger(__name__)


class Root(Named, RootNode):
    """
    Top of a molecular document.

    The root owns the document's connection table. When built with a
    coordinate repository it also owns a reference to it, and close()
    releases every linked position of the document together with that
    reference.

    Args:
        name: Document name
        coordinates: Optional repository shared by the document's atoms
    """

    def __init__(self, *, coordinates: Optional[CoordinateRepository] = None, **kwargs):
        super().__init__(**kwargs)
        self.connections = ConnectionTable()
        self.coordinates = coordinates
        self._closed = False
        if coordinates is not None:
            coordinates.acquire()

    def __repr__(self) -> str:
        return f"Root(name={self.name!r})"

    def __enter__(self) -> "Root":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    @property
    def nmodels(self) -> int:
        return sum(1 for _ in self.range(Kind.MODEL))

    @property
    def natoms(self) -> int:
        return sum(1 for _ in self.range(Kind.ATOM))

    def frames_size(self) -> int:
        """Number of coordinate frames; 1 for inline-only documents."""
        if self.coordinates is None:
            return 1
        return self.coordinates.frames_size()

    def close(self) -> None:
        """Release the linked positions of all atoms and the repository."""
        if self._closed:
            return
        self._closed = True
        released = 0
        for atom in self.range(Positioned):
            atom.position.release()
            released += 1
        if self.coordinates is not None:
            self.coordinates.release()
        logger.debug("Closed %r, released %d positions", self, released)


class Model(Named, Ordered, CompositeNode):
    """One MODEL of a structure."""

    kind = Kind.MODEL

    def __repr__(self) -> str:
        return f"Model(order={self.order})"


class Chain(Named, ChainTagged, CompositeNode):
    """A polymer chain (molecule) inside a model."""

    kind = Kind.CHAIN

    def __repr__(self) -> str:
        return f"Chain(chain_id={self.chain_id!r})"

    @property
    def nres(self) -> int:
        """Number of residues."""
        return sum(1 for _ in self.range(Kind.RESIDUE))


class Residue(Named, Ordered, InsertionCoded, CompositeNode):
    """A residue (submolecule) inside a chain."""

    kind = Kind.RESIDUE

    def __repr__(self) -> str:
        return f"Residue(name={self.name!r}, order={self.order}{self.icode.strip()})"

    @property
    def natoms(self) -> int:
        """Number of atoms in this residue."""
        return sum(1 for _ in self.range(Kind.ATOM))

    def get_atom(self, name: str):
        """
        Get an atom by name.

        Args:
            name: Atom name, surrounding blanks ignored (e.g., "CA", " CA ")

        Returns:
            Atom node or None if not found
        """
        wanted = name.strip()
        for atom in self.range(Kind.ATOM):
            if getattr(atom, "name", "").strip() == wanted:
                return atom
        return None

    def center_of_mass(self) -> np.ndarray:
        """Unweighted mean position of the residue's positioned atoms."""
        coords = [a.get_center() for a in self.range(Positioned)]
        if not coords:
            return np.zeros(3)
        return np.mean(coords, axis=0)


class AtomNode(LeafNode):
    """
    Base of all atom types. Carries no attributes of its own; concrete
    atom types add the capabilities they need.
    """

    kind = Kind.ATOM

    def connections(self) -> Optional[ConnectionTable]:
        """Connection table of the document this atom belongs to."""
        return getattr(self.root(), "connections", None)

    def is_connected_to(self, other: "AtomNode") -> bool:
        table = self.connections()
        return table is not None and table.have_connection(self, other)

    def neighbors(self) -> tuple:
        """Atoms bonded to this one."""
        table = self.connections()
        if table is None:
            return ()
        return table.neighbors(self)

    def neighbor(self, bond: "Bond") -> "AtomNode":
        """The other atom of a bond involving this atom."""
        return bond.other(self)


class Atom(Named, Ordered, AtomicNumber, CovalentRadius, Positioned, AtomNode):
    """
    Atom with a name, serial number, element and position.

    Example:
        >>> atom = Atom(name="CA", order=2, atomic_number=6, center=(1.0, 2.0, 3.0))
        >>> atom.z
        3.0
    """

    def __repr__(self) -> str:
        return f"Atom(name={self.name!r}, order={self.order})"

    def distance_to(self, other: Positioned) -> float:
        """Distance between the primary-frame positions."""
        return float(np.linalg.norm(self.center() - other.center()))


class PDBAtom(ChainTagged, InsertionCoded, Occupancy, BFactor, FormalCharge, Atom):
    """Atom carrying every attribute of a PDB ATOM/HETATM record."""


class ChargedAtom(PartialCharge, Atom):
    """Atom with a partial charge (force-field style input)."""


class Bond(LeafNode):
    """
    Connection between two atoms, stored in the tree.

    A bond registers its pair in the connection table of the document it
    belongs to. It follows the subtree it sits in: detaching that subtree,
    or attaching it under another root, moves the registration along.
    Attaching a second bond for an already bonded pair is refused.
    """

    kind = Kind.BOND

    def __init__(self, atom1: AtomNode, atom2: AtomNode, **kwargs):
        super().__init__(**kwargs)
        if atom1 is atom2:
            raise ValueError("A bond needs two distinct atoms")
        self.atom1 = atom1
        self.atom2 = atom2
        self._table: Optional[ConnectionTable] = None

    def __repr__(self) -> str:
        return f"Bond({self.atom1!r}, {self.atom2!r})"

    @property
    def src(self) -> AtomNode:
        return self.atom1

    @property
    def dst(self) -> AtomNode:
        return self.atom2

    def other(self, atom: AtomNode) -> AtomNode:
        """The partner of the given atom in this bond."""
        if atom is self.atom1:
            return self.atom2
        if atom is self.atom2:
            return self.atom1
        raise ValueError(f"{atom!r} is not part of {self!r}")

    def _check_new_parent(self, parent) -> None:
        table = getattr(parent.root(), "connections", None)
        if table is None:
            return
        existing = table.bond(self.atom1, self.atom2)
        if existing is not None and existing is not self:
            raise ValueError(f"{self.atom1!r} and {self.atom2!r} are already bonded")

    def _on_root_changed(self) -> None:
        table = None
        if self._parent is not None:
            table = getattr(self.root(), "connections", None)
        if table is self._table:
            return
        old_table, self._table = self._table, table
        # only the bond recorded for the pair owns the connection
        if old_table is not None and old_table.bond(self.atom1, self.atom2) is self:
            old_table.remove_connection(self.atom1, self.atom2)
        if table is not None and table.bond(self.atom1, self.atom2) is None:
            table.add_connection(self.atom1, self.atom2, self)


def make_bond(atom1: AtomNode, atom2: AtomNode) -> Bond:
    """
    Bond two atoms of the same document.

    The bond is attached to the lowest common ancestor of the two atoms.
    Bonding an already bonded pair returns the existing bond.

    Raises:
        ValueError: If the atoms are the same, share no ancestor, or do
            not belong to a document root with a connection table
    """
    if atom1 is atom2:
        raise ValueError("Cannot bond an atom to itself")
    ancestor = atom1.common_ancestor(atom2)
    if ancestor is None:
        raise ValueError(f"{atom1!r} and {atom2!r} have no common ancestor")
    table = getattr(ancestor.root(), "connections", None)
    if table is None:
        raise ValueError("Bonds can only be made inside a document root")
    existing = table.bond(atom1, atom2)
    if existing is not None:
        return existing
    bond = Bond(atom1, atom2)
    ancestor.add(bond)
    return bond
