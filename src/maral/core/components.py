"""
Capability mixins for node types.

A concrete node type picks the attributes it carries by inheriting the
matching mixins, e.g. ``class Atom(Named, Ordered, Positioned, AtomNode)``.
Mixins take keyword-only constructor arguments and pass the rest along,
so they compose in any order ahead of the node base class.

Algorithms check for a capability with has_capability() (or
require_capability() to fail early) instead of assuming an attribute.
"""

from typing import Iterable, Optional

import numpy as np

from maral.core.constants import AXES, get_covalent_radius, get_element_symbol
from maral.core.coordinates import CoordinateRepository, InlinePosition, LinkedPosition


class Named:
    """Carries a name (atom name, residue name, model title)."""

    def __init__(self, *, name: str = "", **kwargs):
        super().__init__(**kwargs)
        self.name = name


class Ordered:
    """Carries a serial ordinal (atom serial, residue sequence number)."""

    def __init__(self, *, order: int = 0, **kwargs):
        super().__init__(**kwargs)
        self.order = order


class ChainTagged:
    """Carries a one-character chain identifier."""

    def __init__(self, *, chain_id: str = " ", **kwargs):
        super().__init__(**kwargs)
        self.chain_id = chain_id


class InsertionCoded:
    """Carries a PDB insertion code."""

    def __init__(self, *, icode: str = " ", **kwargs):
        super().__init__(**kwargs)
        self.icode = icode


class Occupancy:
    def __init__(self, *, occupancy: float = 1.0, **kwargs):
        super().__init__(**kwargs)
        self.occupancy = occupancy


class BFactor:
    """Carries a temperature factor."""

    def __init__(self, *, b_factor: float = 0.0, **kwargs):
        super().__init__(**kwargs)
        self.b_factor = b_factor


class FormalCharge:
    def __init__(self, *, formal_charge: int = 0, **kwargs):
        super().__init__(**kwargs)
        self.formal_charge = formal_charge


class PartialCharge:
    def __init__(self, *, partial_charge: float = 0.0, **kwargs):
        super().__init__(**kwargs)
        self.partial_charge = partial_charge


class AtomicNumber:
    """Carries an atomic number; 0 means unknown."""

    def __init__(self, *, atomic_number: int = 0, **kwargs):
        super().__init__(**kwargs)
        self.atomic_number = atomic_number

    @property
    def element(self) -> str:
        return get_element_symbol(self.atomic_number)


class CovalentRadius:
    """
    Carries a covalent radius.

    An explicit radius wins; otherwise the radius is looked up from the
    atomic number when the node also has the AtomicNumber capability.
    """

    def __init__(self, *, covalent_radius: Optional[float] = None, **kwargs):
        super().__init__(**kwargs)
        self._covalent_radius = covalent_radius

    @property
    def covalent_radius(self) -> float:
        if self._covalent_radius is not None:
            return self._covalent_radius
        return get_covalent_radius(getattr(self, "atomic_number", 0))

    @covalent_radius.setter
    def covalent_radius(self, value: Optional[float]):
        self._covalent_radius = value


class Positioned:
    """
    Carries a 3D position, stored inline or linked into a repository.

    Args:
        center: Initial position
        coordinates: Repository to link the position into. Without one the
            position is stored inline.
        position: Ready-made InlinePosition or LinkedPosition, overrides
            center and coordinates
    """

    def __init__(
        self,
        *,
        center=(0.0, 0.0, 0.0),
        coordinates: Optional[CoordinateRepository] = None,
        position=None,
        **kwargs,
    ):
        super().__init__(**kwargs)
        if position is None:
            if coordinates is not None:
                position = LinkedPosition(coordinates, center)
            else:
                position = InlinePosition(center)
        self.position = position

    @property
    def is_linked(self) -> bool:
        return isinstance(self.position, LinkedPosition)

    def center(self) -> np.ndarray:
        """Mutable reference to the primary-frame position."""
        return self.position.center()

    def get_center(self) -> np.ndarray:
        """Copy of the primary-frame position."""
        return self.position.get_center()

    def set_center(self, coord) -> None:
        self.position.set_center(coord)

    def frames_size(self) -> int:
        return self.position.frames_size()

    def frame_center(self, frame: int) -> np.ndarray:
        """Mutable reference to the position in the given frame."""
        return self.position.frame_center(frame)

    def coord(self, axis: int, frame: int = 0) -> float:
        """One component of the position in the given frame."""
        return float(self.position.frame_center(frame)[_axis_index(axis)])

    def set_coord(self, axis: int, value: float, frame: int = 0) -> None:
        self.position.frame_center(frame)[_axis_index(axis)] = value

    def __getitem__(self, axis) -> float:
        return float(self.position.center()[_axis_index(axis)])

    def __setitem__(self, axis, value: float) -> None:
        self.position.center()[_axis_index(axis)] = value

    @property
    def x(self) -> float:
        return self[0]

    @x.setter
    def x(self, value: float):
        self[0] = value

    @property
    def y(self) -> float:
        return self[1]

    @y.setter
    def y(self, value: float):
        self[1] = value

    @property
    def z(self) -> float:
        return self[2]

    @z.setter
    def z(self, value: float):
        self[2] = value


def _axis_index(axis) -> int:
    if isinstance(axis, str):
        try:
            return AXES[axis]
        except KeyError:
            raise IndexError(f"Unknown axis {axis!r}") from None
    if not 0 <= axis < 3:
        raise IndexError(f"Axis index {axis} out of range")
    return axis


def has_capability(node, *capabilities: type) -> bool:
    """True if the node's type implements every given capability mixin."""
    return all(isinstance(node, cap) for cap in capabilities)


def require_capability(nodes: Iterable, *capabilities: type) -> list:
    """
    Materialize nodes and check that each implements the capabilities.

    Returns:
        The nodes as a list

    Raises:
        TypeError: Naming the first node missing a capability
    """
    checked = list(nodes)
    for node in checked:
        for cap in capabilities:
            if not isinstance(node, cap):
                raise TypeError(
                    f"{type(node).__name__} does not provide the "
                    f"{cap.__name__} capability"
                )
    return checked
