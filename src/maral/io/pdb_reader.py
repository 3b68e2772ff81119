"""
Build a document tree from a PDB file using BioPython.

Multi-model files can be read two ways: every MODEL as its own subtree
with inline positions, or the first MODEL as the tree and the following
ones as extra frames of a shared coordinate repository.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from Bio.PDB import PDBParser
from Bio.PDB.Structure import Structure

from maral.core.constants import get_atomic_number
from maral.core.coordinates import CoordinateRepository
from maral.core.structures import Chain, Model, PDBAtom, Residue, Root

logger = logging.getLogger(__name__)

AtomKey = Tuple[str, tuple, str]


@dataclass
class ReaderConfig:
    """Options for reading PDB files."""

    # Later MODEL records become coordinate frames instead of subtrees
    multiframe: bool = True
    skip_water: bool = False
    skip_hetero: bool = False


def read_pdb(
    filename: Union[str, Path],
    coordinates: Optional[CoordinateRepository] = None,
    multiframe: bool = True,
    skip_water: bool = False,
    skip_hetero: bool = False,
) -> Root:
    """
    Read a PDB file into a Root document.

    Args:
        filename: Path to PDB file
        coordinates: Repository for linked positions in multiframe mode. A
            new one is created when omitted. It may hold coordinates of
            other documents but at most one frame.
        multiframe: Read later models as frames of the first one
        skip_water: Ignore water residues
        skip_hetero: Ignore all HETATM residues

    Returns:
        Root document. Close it (or use it as a context manager) to release
        the repository.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the repository already holds several frames
    """
    path = Path(filename)
    if not path.exists():
        raise FileNotFoundError(f"PDB file not found: {path}")

    config = ReaderConfig(
        multiframe=multiframe, skip_water=skip_water, skip_hetero=skip_hetero
    )
    parser = PDBParser(QUIET=True)
    structure = parser.get_structure(path.stem, str(path))

    return convert_structure(structure, config, coordinates)


def convert_structure(
    structure: Structure,
    config: Optional[ReaderConfig] = None,
    coordinates: Optional[CoordinateRepository] = None,
) -> Root:
    """
    Convert a BioPython Structure into a Root document.

    Args:
        structure: BioPython Structure object
        config: Reader options (defaults to ReaderConfig())
        coordinates: Repository for multiframe mode, see read_pdb()

    Returns:
        Root document
    """
    if config is None:
        config = ReaderConfig()

    models = list(structure.get_models())

    if not config.multiframe:
        root = Root(name=structure.id)
        for bio_model in models:
            _add_model(root, bio_model, config, None)
        logger.info("Read %d models, %d atoms", len(models), root.natoms)
        return root

    if coordinates is None:
        coordinates = CoordinateRepository()
    if coordinates.frames_size() > 1:
        raise ValueError(
            "Multiframe reading needs a coordinate repository with at most one frame"
        )

    root = Root(name=structure.id, coordinates=coordinates)
    if not models:
        return root

    offset = coordinates.coords_size()
    keys = _add_model(root, models[0], config, coordinates)

    for bio_model in models[1:]:
        _add_frame(coordinates, bio_model, keys, offset, config)
    coordinates.level_coords()

    logger.info(
        "Read %d atoms in %d frames from %d models",
        len(keys),
        coordinates.frames_size(),
        len(models),
    )
    return root


def _residue_is_skipped(bio_residue, config: ReaderConfig) -> bool:
    hetfield = bio_residue.get_id()[0]
    if config.skip_water and hetfield == "W":
        return True
    if config.skip_hetero and hetfield != " ":
        return True
    return False


def _add_model(
    root: Root,
    bio_model,
    config: ReaderConfig,
    coordinates: Optional[CoordinateRepository],
) -> List[AtomKey]:
    """Add one BioPython model as a subtree. Returns the atom keys in order."""
    serial = _model_serial(bio_model)
    model = root.add(Model(order=serial))
    keys: List[AtomKey] = []

    for bio_chain in bio_model:
        chain_id = bio_chain.get_id()
        chain = model.add(Chain(name=chain_id, chain_id=chain_id))

        for bio_residue in bio_chain:
            if _residue_is_skipped(bio_residue, config):
                continue
            _, res_num, icode = bio_residue.get_id()
            residue = chain.add(
                Residue(name=bio_residue.get_resname(), order=res_num, icode=icode)
            )

            for bio_atom in bio_residue:
                position_args = {"center": bio_atom.get_coord()}
                if coordinates is not None:
                    position_args["coordinates"] = coordinates
                residue.add(
                    PDBAtom(
                        name=bio_atom.get_name(),
                        order=bio_atom.get_serial_number() or 0,
                        atomic_number=get_atomic_number(bio_atom.element or ""),
                        chain_id=chain_id,
                        icode=icode,
                        occupancy=float(bio_atom.get_occupancy() or 0.0),
                        b_factor=float(bio_atom.get_bfactor() or 0.0),
                        **position_args,
                    )
                )
                keys.append((chain_id, bio_residue.get_id(), bio_atom.get_name()))

    return keys


def _add_frame(
    coordinates: CoordinateRepository,
    bio_model,
    keys: List[AtomKey],
    offset: int,
    config: ReaderConfig,
) -> None:
    """
    Append a model's positions as a new frame, in the first model's atom order.

    Atoms missing from the model keep the previous frame's position;
    missing trailing atoms are filled later by level_coords().
    """
    found: Dict[AtomKey, object] = {}
    for bio_chain in bio_model:
        for bio_residue in bio_chain:
            if _residue_is_skipped(bio_residue, config):
                continue
            for bio_atom in bio_residue:
                key = (bio_chain.get_id(), bio_residue.get_id(), bio_atom.get_name())
                found[key] = bio_atom.get_coord()

    present = [found.get(key) for key in keys]
    last = len(present) - 1
    while last >= 0 and present[last] is None:
        last -= 1

    # the previous frame must hold every index before it can be a fallback
    coordinates.level_coords()
    frame = coordinates.add_frame(skip=offset)
    for i in range(last + 1):
        coord = present[i]
        if coord is None:
            coord = coordinates.coord(offset + i, frame - 1)
        coordinates.add_coord(coord, frame)

    unmatched = len(found.keys() - set(keys))
    if unmatched:
        logger.warning(
            "Model %s has %d atoms not present in the first model, ignored",
            _model_serial(bio_model),
            unmatched,
        )


def _model_serial(bio_model) -> int:
    serial = getattr(bio_model, "serial_num", None)
    if serial is None:
        return bio_model.id + 1
    return serial
