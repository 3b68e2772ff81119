"""
Undirected adjacency table between atoms.

Each document root owns one table. Connections are kept symmetric: every
add or remove touches both directions. A pair is stored at most once, so
repeated add_connection() calls are harmless.
"""

from typing import Dict, Iterator, List, Optional, Tuple


class ConnectionTable:
    """
    Maps atom identity to its bonded neighbors.

    Neighbor lists keep insertion order. The bond object that created a
    connection, if any, is remembered per unordered pair.
    """

    def __init__(self):
        self._neighbors: Dict[object, List[object]] = {}
        self._bonds: Dict[frozenset, object] = {}

    def __len__(self) -> int:
        """Number of connections (unordered pairs)."""
        return sum(len(n) for n in self._neighbors.values()) // 2

    def __contains__(self, atom) -> bool:
        return atom in self._neighbors

    def add_connection(self, a, b, bond=None) -> bool:
        """
        Connect two atoms.

        Args:
            a: First atom
            b: Second atom
            bond: Optional bond object to associate with the pair

        Returns:
            True if the connection is new, False if it already existed

        Raises:
            ValueError: If a and b are the same atom
        """
        if a is b:
            raise ValueError("An atom cannot be connected to itself")
        key = frozenset((a, b))
        if self.have_connection(a, b):
            if bond is not None:
                self._bonds[key] = bond
            return False
        self._neighbors.setdefault(a, []).append(b)
        self._neighbors.setdefault(b, []).append(a)
        if bond is not None:
            self._bonds[key] = bond
        return True

    def remove_connection(self, a, b) -> bool:
        """
        Disconnect two atoms. Unknown pairs are ignored.

        Returns:
            True if a connection was removed
        """
        if not self.have_connection(a, b):
            return False
        self._discard(a, b)
        self._discard(b, a)
        self._bonds.pop(frozenset((a, b)), None)
        return True

    def _discard(self, atom, neighbor) -> None:
        nbrs = self._neighbors[atom]
        for i, n in enumerate(nbrs):
            if n is neighbor:
                del nbrs[i]
                break
        if not nbrs:
            del self._neighbors[atom]

    def remove_atom(self, atom) -> List[object]:
        """
        Drop every connection of an atom.

        Returns:
            Bond objects that were associated with the removed connections
        """
        bonds = []
        for nbr in list(self._neighbors.get(atom, ())):
            bond = self._bonds.get(frozenset((atom, nbr)))
            if bond is not None:
                bonds.append(bond)
            self.remove_connection(atom, nbr)
        return bonds

    def have_connection(self, a, b) -> bool:
        """True if a and b are connected. Linear in the degree of a."""
        for n in self._neighbors.get(a, ()):
            if n is b:
                return True
        return False

    def neighbors(self, atom) -> Tuple[object, ...]:
        return tuple(self._neighbors.get(atom, ()))

    def degree(self, atom) -> int:
        return len(self._neighbors.get(atom, ()))

    def bond(self, a, b) -> Optional[object]:
        """Bond object associated with a connected pair, if any."""
        if not self.have_connection(a, b):
            return None
        return self._bonds.get(frozenset((a, b)))

    def pairs(self) -> Iterator[Tuple[object, object]]:
        """Each connection once, in insertion order of the first atom."""
        seen = set()
        for atom, nbrs in self._neighbors.items():
            for n in nbrs:
                key = frozenset((atom, n))
                if key not in seen:
                    seen.add(key)
                    yield atom, n

    def clear(self) -> None:
        self._neighbors.clear()
        self._bonds.clear()
