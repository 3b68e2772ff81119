"""
Root mean square deviation between positioned nodes.
"""

from typing import Iterable

import numpy as np

from maral.core.components import Positioned, require_capability
from maral.core.geometry import distance as point_distance
from maral.core.geometry import superimpose


def distance(node1: Positioned, node2: Positioned) -> float:
    """Distance between the primary-frame centers of two nodes."""
    return point_distance(node1.center(), node2.center())


def _paired_coords(atoms1: Iterable, atoms2: Iterable, frame1: int = 0, frame2: int = 0):
    list1 = require_capability(atoms1, Positioned)
    list2 = require_capability(atoms2, Positioned)
    if len(list1) != len(list2):
        raise ValueError(
            f"Size of two ranges must be equal ({len(list1)} != {len(list2)})"
        )
    if not list1:
        raise ValueError("RMSD of empty ranges is undefined")
    coords1 = np.array([a.frame_center(frame1) for a in list1], dtype=np.float64)
    coords2 = np.array([a.frame_center(frame2) for a in list2], dtype=np.float64)
    return coords1, coords2


def rmsd(atoms1: Iterable, atoms2: Iterable, frame: int = 0) -> float:
    """
    RMSD between two equally long ranges of positioned nodes, paired in order.

    Args:
        atoms1: First range
        atoms2: Second range
        frame: Coordinate frame to read from both ranges

    Returns:
        sqrt(mean squared distance), without superposition
    """
    coords1, coords2 = _paired_coords(atoms1, atoms2, frame, frame)
    diff = coords1 - coords2
    return float(np.sqrt(np.mean(np.sum(diff**2, axis=1))))


def frame_rmsd(atoms: Iterable, frame_a: int, frame_b: int) -> float:
    """RMSD of the same atoms between two coordinate frames."""
    atom_list = list(atoms)
    coords1, coords2 = _paired_coords(atom_list, atom_list, frame_a, frame_b)
    diff = coords1 - coords2
    return float(np.sqrt(np.mean(np.sum(diff**2, axis=1))))


def superposed_rmsd(atoms1: Iterable, atoms2: Iterable, frame: int = 0) -> float:
    """RMSD after optimal superposition of atoms2 onto atoms1."""
    coords1, coords2 = _paired_coords(atoms1, atoms2, frame, frame)
    return superimpose(coords1, coords2)[0]
