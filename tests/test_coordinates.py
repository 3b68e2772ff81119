"""Tests for the coordinate repository and position storage."""

import numpy as np
import pytest

from maral.core.coordinates import CoordinateRepository, InlinePosition, LinkedPosition
from maral.core.hierarchy import Kind
from maral.core.structures import Atom, Residue, Root


class TestRepository:
    """Test frame and coordinate bookkeeping."""

    def test_empty(self, repository):
        assert repository.frames_size() == 0
        assert repository.coords_size() == 0

    def test_add_coord_roundtrip(self, repository):
        repository.add_frame()
        idx = repository.add_coord([1.0, 2.0, 3.0])
        assert idx == 0
        assert np.allclose(repository.coord(idx), [1.0, 2.0, 3.0])

    def test_add_coord_creates_primary_frame(self, repository):
        repository.add_coord([1.0, 2.0, 3.0])
        assert repository.frames_size() == 1
        assert repository.coords_size() == 1

    def test_indices_stable_across_frames(self, repository):
        repository.add_frame()
        points = [[float(i), 0.0, -float(i)] for i in range(10)]
        indices = [repository.add_coord(p) for p in points]
        for _ in range(5):
            repository.add_frame()
        assert repository.frames_size() == 6
        for idx, p in zip(indices, points):
            assert np.allclose(repository.coord(idx), p)
            assert np.allclose(repository.coord(idx, 0), p)

    def test_add_coord_to_frame(self, repository):
        repository.add_coord([0.0, 0.0, 0.0])
        frame = repository.add_frame()
        idx = repository.add_coord([4.0, 5.0, 6.0], frame)
        assert frame == 1
        assert idx == 0
        assert np.allclose(repository.coord(0, 1), [4.0, 5.0, 6.0])

    def test_add_frame_copies_prefix(self, repository):
        for i in range(4):
            repository.add_coord([float(i), 0.0, 0.0])
        frame = repository.add_frame(skip=2)
        assert repository.frame_size(frame) == 2
        assert np.allclose(repository.coord(1, frame), [1.0, 0.0, 0.0])
        repository.coord(1, frame)[0] = 10.0
        assert repository.coord(1, 0)[0] == 1.0

    def test_add_frame_skip_too_large(self, repository):
        repository.add_coord([0.0, 0.0, 0.0])
        with pytest.raises(ValueError):
            repository.add_frame(skip=5)

    def test_add_several_frames(self, repository):
        last = repository.add_frame(num=3)
        assert last == 2
        assert repository.frames_size() == 3

    def test_level_coords(self, repository):
        for i in range(5):
            repository.add_coord([float(i), 0.0, 0.0])
        f1 = repository.add_frame()
        for i in range(3):
            repository.add_coord([float(i), 1.0, 0.0], f1)
        f2 = repository.add_frame()
        for i in range(3):
            repository.add_coord([float(i), 2.0, 0.0], f2)

        repository.level_coords()

        assert [repository.frame_size(f) for f in range(3)] == [5, 5, 5]
        for idx in (3, 4):
            assert np.allclose(repository.coord(idx, 1), repository.coord(idx, 0))
            assert np.allclose(repository.coord(idx, 2), repository.coord(idx, 1))
        # entries that were present are untouched
        assert np.allclose(repository.coord(2, 2), [2.0, 2.0, 0.0])

    def test_level_coords_copies(self, repository):
        for i in range(3):
            repository.add_coord([float(i), 0.0, 0.0])
        repository.add_frame()
        repository.level_coords()
        repository.coord(2, 0)[1] = 99.0
        assert repository.coord(2, 1)[1] == 0.0

    def test_bounds(self, repository):
        repository.add_coord([0.0, 0.0, 0.0])
        with pytest.raises(IndexError):
            repository.coord(1)
        with pytest.raises(IndexError):
            repository.coord(-1)
        with pytest.raises(IndexError):
            repository.coord(0, 1)
        with pytest.raises(IndexError):
            repository.add_coord([0.0, 0.0, 0.0], 3)

    def test_reserve_is_a_hint(self, repository):
        repository.reserve_frames_size(100)
        repository.reserve_coords_size(10000)
        assert repository.frames_size() == 0
        assert repository.coords_size() == 0

    def test_remove_last_frame(self, repository):
        repository.add_frame(num=2)
        repository.remove_last_frame()
        assert repository.frames_size() == 1

    def test_frame_array(self, repository):
        repository.add_coord([1.0, 2.0, 3.0])
        repository.add_coord([4.0, 5.0, 6.0])
        arr = repository.frame_array()
        assert arr.shape == (2, 3)
        arr[0, 0] = 100.0
        assert repository.coord(0)[0] == 1.0

    def test_wrong_dimension(self, repository):
        with pytest.raises(ValueError):
            repository.add_coord([1.0, 2.0])


class TestLifetime:
    """Test reference counting of the repository."""

    def test_linked_position_acquires(self, repository):
        pos = LinkedPosition(repository, [1.0, 2.0, 3.0])
        assert repository.ref_count == 1
        with pytest.raises(RuntimeError):
            repository.clear_frames()
        pos.release()
        assert repository.ref_count == 0
        assert repository.frames_size() == 0

    def test_clear_frames_unreferenced(self, repository):
        repository.add_coord([1.0, 2.0, 3.0])
        repository.clear_frames()
        assert repository.frames_size() == 0

    def test_released_position_unusable(self, repository):
        pos = LinkedPosition(repository)
        pos.release()
        pos.release()
        with pytest.raises(RuntimeError):
            pos.center()

    def test_release_unreferenced_raises(self, repository):
        with pytest.raises(RuntimeError):
            repository.release()

    def test_document_close(self, repository, linked_document):
        assert repository.ref_count == 1 + 12
        assert repository.coords_size() == 12
        linked_document.close()
        assert repository.ref_count == 0
        assert repository.frames_size() == 0
        linked_document.close()

    def test_document_context_manager(self, repository):
        with Root(name="doc", coordinates=repository) as root:
            residue = root.add(Residue(name="ALA"))
            residue.add(Atom(name="CA", coordinates=repository))
            assert repository.ref_count == 2
        assert repository.ref_count == 0

    def test_shared_repository(self, repository):
        doc1 = Root(name="one", coordinates=repository)
        doc2 = Root(name="two", coordinates=repository)
        doc1.add(Residue(name="A")).add(Atom(name="X", coordinates=repository))
        doc2.add(Residue(name="B")).add(Atom(name="Y", coordinates=repository))
        doc1.close()
        # still referenced by the second document
        assert repository.coords_size() == 2
        y = doc2.range(Kind.ATOM).first()
        assert y.position.index == 1
        doc2.close()
        assert repository.frames_size() == 0


@pytest.fixture(params=["inline", "linked"])
def any_position(request):
    if request.param == "inline":
        return InlinePosition([1.0, 2.0, 3.0])
    return LinkedPosition(CoordinateRepository(), [1.0, 2.0, 3.0])


class TestPositionContract:
    """Inline and linked positions behave the same."""

    def test_center_reference(self, any_position):
        any_position.center()[2] = 30.0
        assert np.allclose(any_position.get_center(), [1.0, 2.0, 30.0])

    def test_get_center_copy(self, any_position):
        copy = any_position.get_center()
        copy[0] = -5.0
        assert any_position.center()[0] == 1.0

    def test_set_center(self, any_position):
        any_position.set_center([7.0, 8.0, 9.0])
        assert np.allclose(any_position.center(), [7.0, 8.0, 9.0])

    def test_primary_frame(self, any_position):
        assert any_position.frames_size() == 1
        assert np.allclose(any_position.frame_center(0), [1.0, 2.0, 3.0])
        with pytest.raises(IndexError):
            any_position.frame_center(1)

    def test_copy(self, any_position):
        other = any_position.copy()
        other.center()[0] = 50.0
        assert any_position.center()[0] == 1.0


class TestLinkedAtoms:
    """Atoms reading positions from several frames."""

    def test_atom_frames(self, repository, linked_document):
        atoms = list(linked_document.range(Kind.ATOM))
        frame = repository.add_frame()
        for atom in atoms:
            repository.add_coord(atom.get_center() + [0.0, 0.0, 10.0], frame)
        first = atoms[0]
        assert first.is_linked
        assert first.frames_size() == 2
        assert first.coord(2, frame) == pytest.approx(first.z + 10.0)
        assert first.coord("z", 0) == pytest.approx(first.z)
        first.set_coord(0, 3.5, frame)
        assert first.frame_center(frame)[0] == 3.5
        assert first.x == pytest.approx(0.0)

    def test_atom_indices_follow_creation_order(self, linked_document):
        indices = [a.position.index for a in linked_document.range(Kind.ATOM)]
        assert indices == list(range(12))

    def test_invalid_frame(self, linked_document):
        atom = linked_document.range(Kind.ATOM).first()
        with pytest.raises(IndexError):
            atom.coord(0, 3)
