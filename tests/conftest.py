"""Pytest configuration and fixtures for MARAL tests."""

import numpy as np
import pytest

from maral.core.coordinates import CoordinateRepository
from maral.core.structures import Atom, Chain, Model, Residue, Root

# Planar zig-zag backbone: consecutive bonds alternate between these two
# directions, giving 120 degree angles at every atom.
UP_RIGHT = np.array([0.5, 0.0, np.sqrt(3) / 2])
UP_LEFT = np.array([-0.5, 0.0, np.sqrt(3) / 2])

# Backbone bond lengths (Angstroms)
N_CA = 1.46
CA_C = 1.52
C_O = 1.23
C_N = 1.33


def backbone_coords(nres: int = 3) -> list:
    """
    Coordinates of a planar peptide backbone, four atoms per residue.

    Returns:
        List of (name, atomic_number, xyz) tuples per residue
    """
    residues = []
    pos = np.zeros(3)
    directions = [UP_RIGHT, UP_LEFT]
    step = 0
    for _ in range(nres):
        n = pos.copy()
        ca = n + N_CA * directions[step % 2]
        c = ca + CA_C * directions[(step + 1) % 2]
        d_in = directions[(step + 1) % 2]
        d_out = directions[(step + 2) % 2]
        o = c + C_O * (d_in - d_out)
        residues.append([("N", 7, n), ("CA", 6, ca), ("C", 6, c), ("O", 8, o)])
        pos = c + C_N * d_out
        step += 3
    return residues


def build_document(nres: int = 3, coordinates: CoordinateRepository = None) -> Root:
    """Root -> model -> chain A -> nres residues x 4 backbone atoms."""
    root = Root(name="test", coordinates=coordinates)
    model = root.add(Model(order=1))
    chain = model.add(Chain(name="A", chain_id="A"))
    serial = 0
    for i, atoms in enumerate(backbone_coords(nres)):
        residue = chain.add(Residue(name="ALA", order=i + 1))
        for name, z, xyz in atoms:
            serial += 1
            residue.add(
                Atom(
                    name=name,
                    order=serial,
                    atomic_number=z,
                    center=xyz,
                    coordinates=coordinates,
                )
            )
    return root


@pytest.fixture
def document():
    """Three-residue backbone with inline positions (12 atoms)."""
    return build_document()


@pytest.fixture
def repository():
    return CoordinateRepository()


@pytest.fixture
def linked_document(repository):
    """Three-residue backbone with positions linked into a repository."""
    return build_document(coordinates=repository)


def pdb_atom_line(
    serial: int,
    name: str,
    res_name: str,
    chain: str,
    res_num: int,
    xyz,
    element: str,
) -> str:
    """Format one ATOM record with strict PDB columns."""
    atom_name_fmt = f" {name:<3}" if len(name) < 4 else f"{name:<4}"
    x, y, z = xyz
    # fmt: off
    return (
        f"ATOM  "
        f"{serial:>5d} "
        f"{atom_name_fmt}"
        f" "
        f"{res_name:<3} "
        f"{chain:1}"
        f"{res_num:>4d}"
        f" "
        f"   "
        f"{x:>8.3f}"
        f"{y:>8.3f}"
        f"{z:>8.3f}"
        f"{1.0:>6.2f}"
        f"{0.0:>6.2f}"
        f"          "
        f"{element:>2}"
    )
    # fmt: on


def write_pdb_models(path, models) -> None:
    """
    Write a multi-model PDB file.

    Args:
        path: Output path
        models: List of models, each a list of
            (name, res_name, chain, res_num, xyz, element) tuples
    """
    lines = []
    for m, atoms in enumerate(models, start=1):
        lines.append(f"MODEL     {m:>4d}")
        for serial, (name, res_name, chain, res_num, xyz, element) in enumerate(
            atoms, start=1
        ):
            lines.append(pdb_atom_line(serial, name, res_name, chain, res_num, xyz, element))
        lines.append("ENDMDL")
    lines.append("END")
    path.write_text("\n".join(lines) + "\n")


@pytest.fixture
def tripeptide_atoms():
    """Backbone atoms of three residues as PDB tuples."""
    atoms = []
    for i, residue in enumerate(backbone_coords(3)):
        for name, _, xyz in residue:
            atoms.append((name, "ALA", "A", i + 1, tuple(xyz), name[0]))
    return atoms


@pytest.fixture
def single_model_pdb(tmp_path, tripeptide_atoms):
    path = tmp_path / "tripeptide.pdb"
    write_pdb_models(path, [tripeptide_atoms])
    return path


@pytest.fixture
def two_model_pdb(tmp_path, tripeptide_atoms):
    """Second model shifted by +1 A along x."""
    shifted = [
        (name, res, ch, num, (x + 1.0, y, z), el)
        for name, res, ch, num, (x, y, z), el in tripeptide_atoms
    ]
    path = tmp_path / "traj.pdb"
    write_pdb_models(path, [tripeptide_atoms, shifted])
    return path
