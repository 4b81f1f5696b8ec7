"""
Shared test fixtures and helpers: synthetic nucleotide geometry and GEMMI mocks
"""

from unittest.mock import Mock

import numpy as np
import pytest

from ntcgeometry.analysis.references import ReferenceConformer, ReferenceTable
from ntcgeometry.core.metrics import calculate_step_metrics
from ntcgeometry.core.structure import Atom, Structure

# Sugar-backbone atoms of one nucleotide, angstroms. P, OP1 and OP2 are placed
# by make_residue so that consecutive residues are bonded.
SUGAR_TEMPLATE = {
    "O5'": (-1.2, 0.8, 0.3),
    "C5'": (0.0, 0.0, 0.0),
    "C4'": (1.3, 0.7, 0.4),
    "O4'": (1.6, 1.8, -0.5),
    "C3'": (2.5, -0.2, 0.4),
    "O3'": (3.4, 0.1, 1.5),
    "C2'": (3.0, 0.0, -1.0),
    "C1'": (2.7, 1.4, -1.3),
}

# First and second base atom of each residue sit at these positions
BASE_POSITIONS = ((3.7, 2.2, -2.0), (4.9, 2.0, -2.6))

# Offset between consecutive residues and the O3'(i) -> P(i+1) bond vector
RESIDUE_SHIFT = np.array([1.0, 0.5, 3.4])
O3P_BOND = np.array([0.9, -0.6, 1.1])

PURINE_BASE_NAMES = ("N9", "C4")
PYRIMIDINE_BASE_NAMES = ("N1", "C2")


def base_names_for(comp_id):
    """Base atom names of a standard residue"""
    return PURINE_BASE_NAMES if comp_id in ("A", "G", "DA", "DG", "I", "DI") else PYRIMIDINE_BASE_NAMES


def _residue_coordinates(base_names):
    coords = {name: np.array(pos) for name, pos in SUGAR_TEMPLATE.items()}
    p = coords["O3'"] + O3P_BOND - RESIDUE_SHIFT
    coords["P"] = p
    coords["OP1"] = p + np.array([0.5, -1.3, 0.2])
    coords["OP2"] = p + np.array([-1.2, -0.6, -0.4])
    for name, pos in zip(base_names, BASE_POSITIONS, strict=True):
        coords[name] = np.array(pos)
    return coords


def make_residue(
    comp_id,
    seq_id,
    index=None,
    asym_id="A",
    model_num=1,
    alt_id="",
    skip=(),
    rename=None,
    base_names=None,
    serial_start=1,
):
    """
    Create the atoms of one synthetic nucleotide.

    Args:
        comp_id: Residue name
        seq_id: label_seq_id (auth_seq_id is the same)
        index: Position along the chain, defaults to seq_id - 1
        skip: Atom names to leave out
        rename: Map of template atom names to the names to use instead
        base_names: Names of the two base atoms, derived from comp_id by default
    """
    if index is None:
        index = seq_id - 1
    rename = rename or {}
    base_names = base_names or base_names_for(comp_id)

    order = ["P", "OP1", "OP2", "O5'", "C5'", "C4'", "O4'", "C3'", "O3'", "C2'", "C1'", *base_names]
    coords = _residue_coordinates(base_names)

    atoms = []
    serial = serial_start
    for name in order:
        if name in skip:
            continue
        pos = coords[name] + index * RESIDUE_SHIFT
        atom_name = rename.get(name, name)
        atoms.append(
            Atom(
                type_symbol=atom_name[0],
                label_atom_id=atom_name,
                label_entity_id="1",
                label_comp_id=comp_id,
                label_asym_id=asym_id,
                auth_atom_id=atom_name,
                auth_comp_id=comp_id,
                auth_asym_id=asym_id,
                coords=tuple(float(c) for c in pos),
                id=serial,
                label_seq_id=seq_id,
                auth_seq_id=seq_id,
                pdbx_PDB_model_num=model_num,
                label_alt_id=alt_id,
            )
        )
        serial += 1
    return atoms


def make_chain(comp_ids, asym_id="A", model_num=1, first_seq_id=1):
    """Create a continuous single-stranded chain of residues"""
    atoms = []
    for offset, comp_id in enumerate(comp_ids):
        atoms.extend(
            make_residue(
                comp_id,
                first_seq_id + offset,
                index=offset,
                asym_id=asym_id,
                model_num=model_num,
                serial_start=len(atoms) + 1,
            )
        )
    return Structure(atoms)


def rotation_matrix(axis, angle):
    """Rotation matrix about an axis (Rodrigues formula)"""
    axis = np.asarray(axis, dtype=float)
    axis = axis / np.linalg.norm(axis)
    k = np.array([[0, -axis[2], axis[1]], [axis[2], 0, -axis[0]], [-axis[1], axis[0], 0]])
    return np.identity(3) + np.sin(angle) * k + (1 - np.cos(angle)) * (k @ k)


def moved_structure(structure, rotation, translation):
    """Copy of a structure with every atom rotated and then translated"""
    coords = structure.coordinates() @ np.asarray(rotation).T + np.asarray(translation)
    moved = structure.copy()
    moved.set_coordinates(coords)
    return moved


@pytest.fixture
def step():
    """A DA-DC dinucleotide step"""
    return make_chain(["DA", "DC"])


@pytest.fixture
def trinucleotide():
    """A DG-DA-DT chain holding two overlapping steps"""
    return make_chain(["DG", "DA", "DT"])


@pytest.fixture
def overlapping_steps(trinucleotide):
    """The two steps of the trinucleotide, sharing the middle residue"""
    atoms = trinucleotide.atoms
    first = Structure([a for a in atoms if a.label_seq_id in (1, 2)])
    second = Structure([a for a in atoms if a.label_seq_id in (2, 3)])
    return first, second


@pytest.fixture
def reference_table(overlapping_steps):
    """Reference table built from the trinucleotide steps"""
    first, second = overlapping_steps
    return ReferenceTable(
        [
            ReferenceConformer("BB00", first, calculate_step_metrics(first)),
            ReferenceConformer("BB01", second, calculate_step_metrics(second)),
        ]
    )


def create_mock_gemmi_atom(name, pos=(0.0, 0.0, 0.0), serial=1, altloc="\0", element=None):
    """Create a GEMMI-compatible mock atom"""
    atom = Mock()
    atom.name = name
    atom.serial = serial
    atom.altloc = altloc

    position = Mock()
    position.x, position.y, position.z = pos
    atom.pos = position

    elem = Mock()
    elem.name = element or name[0]
    atom.element = elem
    return atom


def create_mock_gemmi_residue(resname, atoms, seqid_num=1, icode=" ", label_seq=None, subchain="A", entity_id="1"):
    """Create a GEMMI-compatible mock residue"""
    residue = Mock()
    residue.name = resname

    # GEMMI uses seqid with num and icode attributes
    seqid = Mock()
    seqid.num = seqid_num
    seqid.icode = icode
    residue.seqid = seqid

    residue.label_seq = label_seq
    residue.subchain = subchain
    residue.entity_id = entity_id
    residue.__iter__ = lambda self: iter(atoms)
    return residue


def create_mock_gemmi_chain(chain_name, residues):
    """Create a GEMMI-compatible mock chain"""
    chain = Mock()
    chain.name = chain_name
    chain.__iter__ = lambda self: iter(residues)
    return chain


def create_mock_gemmi_model(chains, num=1):
    """Create a GEMMI-compatible mock model"""
    model = Mock()
    model.num = num
    model.__iter__ = lambda self: iter(chains)
    return model


def create_mock_gemmi_structure(models):
    """Create a GEMMI-compatible mock structure"""
    structure = Mock()
    structure.__iter__ = lambda self: iter(models)
    structure.__len__ = lambda self: len(models)
    structure.__getitem__ = lambda self, idx: models[idx]
    return structure
