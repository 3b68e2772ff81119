"""
Point and vector primitives.

Points and vectors are fixed-size numpy arrays of length 2 or 3. All
helpers accept anything numpy can turn into such an array.
"""

import numpy as np
from scipy.spatial.transform import Rotation
from typing import Tuple

from maral.core.constants import COORD_DTYPE


def point2(x: float = 0.0, y: float = 0.0) -> np.ndarray:
    """Create a 2D point."""
    return np.array([x, y], dtype=COORD_DTYPE)


def point3(x: float = 0.0, y: float = 0.0, z: float = 0.0) -> np.ndarray:
    """Create a 3D point."""
    return np.array([x, y, z], dtype=COORD_DTYPE)


def as_point(p, dim: int = 3) -> np.ndarray:
    """
    Convert a sequence to a fresh point array of the given dimension.

    Args:
        p: Sequence of coordinates
        dim: Expected number of components (2 or 3)

    Returns:
        New numpy array owning its data

    Raises:
        ValueError: If the number of components does not match ``dim``
    """
    arr = np.array(p, dtype=COORD_DTYPE).reshape(-1)
    if arr.shape[0] != dim:
        raise ValueError(f"Expected a {dim}D point, got {arr.shape[0]} components")
    return arr


def distance2(p1: np.ndarray, p2: np.ndarray) -> float:
    """
    Squared Euclidean distance between two points.

    Args:
        p1: First point
        p2: Second point

    Returns:
        Squared distance
    """
    diff = np.asarray(p1, dtype=COORD_DTYPE) - np.asarray(p2, dtype=COORD_DTYPE)
    return float(np.dot(diff, diff))


def distance(p1: np.ndarray, p2: np.ndarray) -> float:
    """
    Euclidean distance between two points.

    Args:
        p1: First point
        p2: Second point

    Returns:
        Distance between points
    """
    dist_sq = distance2(p1, p2)
    if dist_sq > 0:
        return float(np.sqrt(dist_sq))
    return 0.0


def superimpose(
    coords1: np.ndarray,
    coords2: np.ndarray,
) -> Tuple[float, np.ndarray, np.ndarray, np.ndarray]:
    """
    Superimpose coords2 onto coords1 using the Kabsch algorithm.

    Finds the rotation and translation that minimize the RMSD between
    coords1 (target) and coords2 (mobile).

    Args:
        coords1: Target coordinates, shape (N, 3)
        coords2: Mobile coordinates to be superimposed, shape (N, 3)

    Returns:
        Tuple of:
        - rmsd: Root mean square deviation after superposition
        - transformed: Transformed coords2 after superposition
        - rotation_matrix: 3x3 rotation matrix
        - translation: Translation vector
    """
    if len(coords1) != len(coords2):
        raise ValueError("Coordinate arrays must have same length")

    center1 = coords1.mean(axis=0)
    center2 = coords2.mean(axis=0)

    coords1_centered = coords1 - center1
    coords2_centered = coords2 - center2

    # Rotation.align_vectors solves the Kabsch problem via SVD
    rotation, _ = Rotation.align_vectors(coords1_centered, coords2_centered)
    rotation_matrix = rotation.as_matrix()

    transformed = coords2_centered @ rotation_matrix.T + center1

    diff = coords1 - transformed
    rmsd = float(np.sqrt(np.mean(np.sum(diff**2, axis=1))))

    translation = center1 - center2 @ rotation_matrix.T

    return rmsd, transformed, rotation_matrix, translation
