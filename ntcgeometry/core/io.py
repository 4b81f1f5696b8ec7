"""Structure file handling and conversion of GEMMI models to step atoms."""

import logging
from pathlib import Path

import gemmi

from ntcgeometry.core.errors import InvalidArgumentError
from ntcgeometry.core.structure import NO_ALTID, Atom, Structure

logger = logging.getLogger(__name__)

# GEMMI supports .pdb, .cif, .ent (PDB), .mmcif
SUPPORTED_FORMATS = {".pdb", ".cif", ".ent", ".mmcif"}


def file_type(file_path: Path) -> str:
    """Get the file extension in lowercase."""
    return str(file_path.suffix).lower()


def validate_file(file_path: Path) -> bool:
    """Check that a file has a supported extension and a first model with atoms."""
    ftype = file_type(file_path)
    if ftype not in SUPPORTED_FORMATS:
        return False

    try:
        structure = gemmi.read_structure(str(file_path))
        if len(structure) == 0 or structure[0].count_atom_sites() == 0:
            logger.warning("No valid model can be extracted from %s", file_path)
            return False
        return True
    except (OSError, RuntimeError, ValueError) as e:
        logger.warning("File %s could not be parsed as %s file: %s", file_path, ftype, e)
        return False


def get_structure(file_path: Path) -> gemmi.Structure | None:
    """Load and return structure from file, or None if invalid."""
    if not validate_file(file_path):
        return None

    try:
        structure = gemmi.read_structure(str(file_path))
    except (OSError, RuntimeError, ValueError):
        logger.exception("Error loading structure from %s", file_path)
        return None

    # PDB files carry no label_* identifiers, let GEMMI assign them
    structure.setup_entities()
    return structure


def _alt_id(altloc: str) -> str:
    return NO_ALTID if altloc in ("\0", " ", "") else altloc


def _ins_code(icode: str) -> str:
    return "" if icode in ("\0", " ", "") else icode


def structure_from_gemmi(structure: gemmi.Structure, model_index: int | None = None) -> Structure:
    """
    Convert a GEMMI structure into a Structure of atoms.

    Args:
        structure: Structure read by GEMMI
        model_index: Convert only the model at this position (all models by default)

    Returns:
        Structure with atoms in file order

    Raises:
        InvalidArgumentError: If model_index does not select a model of the structure
    """
    if model_index is not None and not 0 <= model_index < len(structure):
        raise InvalidArgumentError(
            f"Model index {model_index} out of range, the structure has {len(structure)} model(s)"
        )
    models = [structure[model_index]] if model_index is not None else list(structure)

    atoms = []
    for model in models:
        for chain in model:
            for residue in chain:
                seq_id = residue.label_seq if residue.label_seq is not None else residue.seqid.num
                for atom in residue:
                    atoms.append(
                        Atom(
                            type_symbol=atom.element.name,
                            label_atom_id=atom.name,
                            label_entity_id=residue.entity_id,
                            label_comp_id=residue.name,
                            label_asym_id=residue.subchain or chain.name,
                            auth_atom_id=atom.name,
                            auth_comp_id=residue.name,
                            auth_asym_id=chain.name,
                            coords=(atom.pos.x, atom.pos.y, atom.pos.z),
                            id=atom.serial,
                            label_seq_id=seq_id,
                            auth_seq_id=residue.seqid.num,
                            pdbx_PDB_model_num=model.num,
                            pdbx_PDB_ins_code=_ins_code(residue.seqid.icode),
                            label_alt_id=_alt_id(atom.altloc),
                        )
                    )

    logger.debug("Converted %d atoms from %d model(s)", len(atoms), len(models))
    return Structure(atoms)


def load_structure(file_path: Path, model_index: int | None = None) -> Structure | None:
    """Read a structure file into a Structure, or None if the file is invalid."""
    structure = get_structure(file_path)
    if structure is None:
        return None
    return structure_from_gemmi(structure, model_index=model_index)
