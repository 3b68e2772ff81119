"""
Frame-indexed coordinate storage.

A CoordinateRepository holds an ordered list of frames, each a dense list
of 3D points. Atoms with a LinkedPosition keep only an index into the
repository, so one topology can carry many conformations (a trajectory,
or the MODEL records of a multi-model PDB file). Atoms with an
InlinePosition own a single point. Both expose the same access contract.
"""

import logging
import threading
from typing import List, Optional

import numpy as np

from maral.core.constants import COORD_DTYPE
from maral.core.geometry import as_point

logger = logging.getLogger(__name__)


class CoordinateRepository:
    """
    Append-only storage of positions organised in frames.

    Frame 0 is the primary frame used by default accessors. Indices
    returned by add_coord() stay valid when frames are appended.

    The repository lifetime is tracked with a reference count: every
    LinkedPosition acquires it, and releasing the last reference clears
    the frames. Frame-level operations (add_frame, level_coords,
    clear_frames, remove_last_frame) must not run concurrently with
    coordinate reads or writes.
    """

    def __init__(self, dim: int = 3):
        self.dim = dim
        self._frames: List[List[np.ndarray]] = []
        self._ref_count = 0
        self._lock = threading.Lock()

    def __repr__(self) -> str:
        return (
            f"CoordinateRepository(frames={self.frames_size()}, "
            f"coords={self.coords_size()}, refs={self._ref_count})"
        )

    # Reference counting

    @property
    def ref_count(self) -> int:
        """Number of outstanding references (linked positions, documents)."""
        return self._ref_count

    def acquire(self) -> int:
        """Register a new reference. Returns the new count."""
        with self._lock:
            self._ref_count += 1
            return self._ref_count

    def release(self) -> int:
        """
        Drop a reference. The frames are cleared when the count reaches zero.

        Returns:
            The new reference count

        Raises:
            RuntimeError: If the repository is not referenced
        """
        with self._lock:
            if self._ref_count == 0:
                raise RuntimeError("Releasing an unreferenced coordinate repository")
            self._ref_count -= 1
            count = self._ref_count
            if count == 0:
                self._frames.clear()
                logger.debug("Last reference released, frames cleared")
        return count

    # Sizes and hints

    def frames_size(self) -> int:
        """Number of frames."""
        return len(self._frames)

    def coords_size(self) -> int:
        """Number of coordinates in the primary frame."""
        return len(self._frames[0]) if self._frames else 0

    def frame_size(self, frame: int) -> int:
        """Number of coordinates in the given frame."""
        return len(self._frames[self._check_frame(frame)])

    def reserve_frames_size(self, size: int) -> None:
        """Capacity hint for the number of frames. Has no observable effect."""

    def reserve_coords_size(self, size: int) -> None:
        """Capacity hint for the number of coordinates. Has no observable effect."""

    # Frame operations

    def add_frame(self, num: int = 1, skip: int = 0, size: Optional[int] = None) -> int:
        """
        Append new frames.

        Args:
            num: Number of frames to append
            skip: Copy this many leading coordinates from the previous frame
                into each new frame (for trajectories where only the tail
                of the coordinate list changes)
            size: Capacity hint, ignored

        Returns:
            Index of the last frame added

        Raises:
            ValueError: If skip exceeds the size of the previous frame
        """
        with self._lock:
            for _ in range(num):
                frame: List[np.ndarray] = []
                if skip:
                    if not self._frames:
                        raise ValueError("Cannot copy a prefix without a previous frame")
                    prev = self._frames[-1]
                    if skip > len(prev):
                        raise ValueError(
                            f"Cannot copy {skip} coordinates from a frame of {len(prev)}"
                        )
                    frame.extend(p.copy() for p in prev[:skip])
                self._frames.append(frame)
            return len(self._frames) - 1

    def remove_last_frame(self) -> None:
        """Drop the most recently added frame."""
        with self._lock:
            if not self._frames:
                raise IndexError("No frame to remove")
            self._frames.pop()

    def level_coords(self) -> None:
        """
        Pad shorter frames with the tail of the previous frame.

        After leveling, frame i (i >= 1) has at least the length of frame
        i-1; the padding entries are copies of frame i-1's entries at the
        same indices.
        """
        with self._lock:
            for i in range(1, len(self._frames)):
                prev = self._frames[i - 1]
                cur = self._frames[i]
                if len(cur) < len(prev):
                    cur.extend(p.copy() for p in prev[len(cur):])

    def clear_frames(self) -> None:
        """
        Discard all frames.

        Raises:
            RuntimeError: If positions still reference this repository
        """
        with self._lock:
            if self._ref_count:
                raise RuntimeError(
                    f"Coordinate repository still has {self._ref_count} references"
                )
            self._frames.clear()

    # Coordinate operations

    def add_coord(self, coord, frame: int = 0) -> int:
        """
        Append a coordinate to a frame.

        A primary frame is created if the repository is empty.

        Args:
            coord: Point to store (copied)
            frame: Target frame index

        Returns:
            Index of the new coordinate within the frame
        """
        point = as_point(coord, self.dim)
        if not self._frames:
            self.add_frame()
        target = self._frames[self._check_frame(frame)]
        target.append(point)
        return len(target) - 1

    def coord(self, index: int, frame: int = 0) -> np.ndarray:
        """
        Mutable reference to a stored coordinate.

        Raises:
            IndexError: For an invalid frame or coordinate index
        """
        target = self._frames[self._check_frame(frame)]
        if not 0 <= index < len(target):
            raise IndexError(
                f"Coordinate index {index} out of range for frame {frame} "
                f"of size {len(target)}"
            )
        return target[index]

    def set_coord(self, index: int, coord, frame: int = 0) -> None:
        """Overwrite a stored coordinate in place."""
        self.coord(index, frame)[:] = as_point(coord, self.dim)

    def frame_array(self, frame: int = 0) -> np.ndarray:
        """Copy of a frame as an (N, dim) array."""
        target = self._frames[self._check_frame(frame)]
        if not target:
            return np.empty((0, self.dim), dtype=COORD_DTYPE)
        return np.array(target, dtype=COORD_DTYPE)

    def _check_frame(self, frame: int) -> int:
        if not 0 <= frame < len(self._frames):
            raise IndexError(
                f"Frame index {frame} out of range ({len(self._frames)} frames)"
            )
        return frame


class InlinePosition:
    """A position stored directly in the atom. Has exactly one frame."""

    __slots__ = ("_point",)

    def __init__(self, coord=(0.0, 0.0, 0.0)):
        self._point = as_point(coord)

    def center(self) -> np.ndarray:
        return self._point

    def get_center(self) -> np.ndarray:
        return self._point.copy()

    def set_center(self, coord) -> None:
        self._point[:] = as_point(coord)

    def frames_size(self) -> int:
        return 1

    def frame_center(self, frame: int) -> np.ndarray:
        if frame != 0:
            raise IndexError(f"Inline position has no frame {frame}")
        return self._point

    def release(self) -> None:
        """Inline storage holds no shared resource."""

    def copy(self) -> "InlinePosition":
        return InlinePosition(self._point)


class LinkedPosition:
    """
    A position stored in a CoordinateRepository.

    The position owns one index, valid in every frame of the repository
    once the frames are leveled.
    """

    __slots__ = ("_repository", "_index")

    def __init__(self, repository: CoordinateRepository, coord=(0.0, 0.0, 0.0)):
        self._index = repository.add_coord(coord)
        self._repository = repository
        repository.acquire()

    @property
    def index(self) -> int:
        return self._index

    @property
    def repository(self) -> Optional[CoordinateRepository]:
        return self._repository

    def _repo(self) -> CoordinateRepository:
        if self._repository is None:
            raise RuntimeError("Linked position has been released")
        return self._repository

    def center(self) -> np.ndarray:
        return self._repo().coord(self._index)

    def get_center(self) -> np.ndarray:
        return self._repo().coord(self._index).copy()

    def set_center(self, coord) -> None:
        self._repo().set_coord(self._index, coord)

    def frames_size(self) -> int:
        return self._repo().frames_size()

    def frame_center(self, frame: int) -> np.ndarray:
        return self._repo().coord(self._index, frame)

    def release(self) -> None:
        """Give up the repository reference. Further access raises."""
        if self._repository is not None:
            repository, self._repository = self._repository, None
            repository.release()

    def copy(self) -> "LinkedPosition":
        """New linked position in the same repository, primary frame value copied."""
        return LinkedPosition(self._repo(), self.get_center())
