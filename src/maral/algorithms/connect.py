"""
Bond inference from spatial proximity.

Atoms are sorted along z and swept: for each atom, later atoms are tested
until their z-distance exceeds the pair cutoff (sum of covalent radii plus
a tolerance). Because the atoms are z-sorted, no farther atom can be in
range once that happens.
"""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Iterable, List, Sequence

import numpy as np

from maral.core.components import CovalentRadius, Positioned, require_capability
from maral.core.constants import DEFAULT_BOND_TOLERANCE, SORT_AXIS
from maral.core.structures import make_bond

logger = logging.getLogger(__name__)


@dataclass
class ConnectConfig:
    """Configuration for proximity bonding."""

    tolerance: float = DEFAULT_BOND_TOLERANCE
    # Skip sorting when the caller already passes atoms in ascending z
    presorted: bool = False
    # Threads sharing the outer loop; bond creation is serialized
    workers: int = 1


def connect(
    atoms: Iterable,
    tolerance: float = DEFAULT_BOND_TOLERANCE,
    presorted: bool = False,
    workers: int = 1,
) -> int:
    """
    Create bonds between atoms closer than their covalent cutoff.

    Args:
        atoms: Atoms exposing a position and a covalent radius. The
            caller's sequence is never reordered.
        tolerance: Added to the sum of covalent radii (Angstroms)
        presorted: The atoms are already in ascending z order
        workers: Number of threads for the outer loop

    Returns:
        Number of bonds created (pairs already bonded are not counted)

    Raises:
        TypeError: If an atom lacks the Positioned or CovalentRadius
            capability. Checked before any bond is made.
    """
    config = ConnectConfig(tolerance=tolerance, presorted=presorted, workers=workers)
    return connect_with_config(atoms, config)


def connect_with_config(atoms: Iterable, config: ConnectConfig) -> int:
    """Run connect() with settings taken from a ConnectConfig."""
    atom_list = require_capability(atoms, Positioned, CovalentRadius)
    n = len(atom_list)
    if n < 2:
        return 0

    centers = np.array([a.get_center() for a in atom_list], dtype=np.float64)
    radii = np.array([a.covalent_radius for a in atom_list], dtype=np.float64)

    if config.presorted:
        order = np.arange(n)
    else:
        order = np.argsort(centers[:, SORT_AXIS], kind="stable")
    centers = centers[order]
    radii = radii[order]
    sorted_atoms = [atom_list[i] for i in order]

    lock = threading.Lock()
    created = [0]

    def sweep(indices: Sequence[int]) -> None:
        for i in indices:
            ci = centers[i]
            ri = radii[i] + config.tolerance
            zi = ci[SORT_AXIS]
            for j in range(i + 1, n):
                cutoff = ri + radii[j]
                if centers[j, SORT_AXIS] - zi > cutoff:
                    break
                diff = centers[j] - ci
                if np.dot(diff, diff) < cutoff * cutoff:
                    _bond(sorted_atoms[i], sorted_atoms[j], lock, created)

    workers = max(1, min(config.workers, n))
    if workers == 1:
        sweep(range(n))
    else:
        # Interleave indices so each worker gets a mix of short and long scans
        chunks: List[range] = [range(w, n, workers) for w in range(workers)]
        with ThreadPoolExecutor(max_workers=workers) as pool:
            for future in [pool.submit(sweep, chunk) for chunk in chunks]:
                future.result()

    logger.debug(
        "connect: %d atoms, tolerance %.2f, %d bonds created",
        n,
        config.tolerance,
        created[0],
    )
    return created[0]


def _bond(atom1, atom2, lock: threading.Lock, created: list) -> None:
    with lock:
        if atom1.is_connected_to(atom2):
            return
        make_bond(atom1, atom2)
        created[0] += 1
