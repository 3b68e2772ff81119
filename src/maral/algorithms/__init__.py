"""Algorithms operating on node ranges."""

from maral.algorithms.connect import ConnectConfig, connect, connect_with_config
from maral.algorithms.remove import remove, remove_if
from maral.algorithms.rmsd import distance, frame_rmsd, rmsd, superposed_rmsd

__all__ = [
    "ConnectConfig",
    "connect",
    "connect_with_config",
    "remove",
    "remove_if",
    "distance",
    "rmsd",
    "frame_rmsd",
    "superposed_rmsd",
]
