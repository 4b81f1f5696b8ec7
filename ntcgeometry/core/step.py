"""
Dinucleotide steps: validation, atom extraction and splitting

A step is a Structure holding two consecutive nucleotide residues, first
residue atoms before second residue atoms. Functions in this module that
extract atoms identify the residues by the first and the last atom of the
structure.
"""

import logging
from dataclasses import dataclass

from ntcgeometry.core.errors import (
    InvalidArgumentError,
    MismatchingDataError,
    MismatchingSizesError,
    MissingAtomsError,
    MultipleAltIdsError,
)
from ntcgeometry.core.geometry import spatial_distance
from ntcgeometry.core.residues import (
    BaseKind,
    Bone,
    extended_names,
    find_base_kind,
    find_bone,
    is_known_residue,
    plain_names,
)
from ntcgeometry.core.structure import (
    NO_ALTID,
    Atom,
    AtomCollection,
    AtomToExtract,
    Structure,
    extract_atoms,
    find_atom_by_name,
    split_by_alt_ids,
)

logger = logging.getLogger(__name__)

# Longest O3'-P bond still considered a covalent link between two residues
MAX_O3_P_DISTANCE = 1.9


@dataclass(frozen=True)
class StepInfo:
    """Identity of a validated step."""

    first_seq_id: int
    first_seq_id_auth: int
    second_seq_id: int
    second_seq_id_auth: int
    first_base_kind: BaseKind
    second_base_kind: BaseKind


@dataclass(frozen=True)
class StepResidues:
    """Identification of the two residues of a step and their Bones."""

    model_num: int
    asym_id: str
    first_seq_id: int
    first_comp_id: str
    second_seq_id: int
    second_comp_id: str
    first_bone: Bone
    second_bone: Bone

    def wanted(self, residue: int, name: str) -> AtomToExtract:
        """Extraction request for an atom of the first (1) or second (2) residue."""
        if residue == 1:
            return AtomToExtract(self.model_num, self.asym_id, self.first_seq_id, self.first_comp_id, name)
        return AtomToExtract(self.model_num, self.asym_id, self.second_seq_id, self.second_comp_id, name)


def _atom_of_residue(structure: AtomCollection, seq_id: int) -> Atom:
    for atom in structure:
        if atom.label_seq_id == seq_id:
            return atom
    raise MissingAtomsError(f"No atoms of residue {seq_id} in the step")


def step_residues(structure: AtomCollection, info: StepInfo | None = None) -> StepResidues:
    """
    Identify the residues of a step.

    With a StepInfo from structure_is_step the residues are the ones
    validation found. Without it they are taken from the first and last atom.

    Raises:
        MissingAtomsError: If the structure is empty
        UnknownResidueError: If a residue is not in the knowledge base
    """
    if len(structure) == 0:
        raise MissingAtomsError("Structure contains no atoms")

    if info is None:
        first = structure[0]
        second = structure[len(structure) - 1]
    else:
        first = _atom_of_residue(structure, info.first_seq_id)
        second = _atom_of_residue(structure, info.second_seq_id)
    return StepResidues(
        model_num=first.pdbx_PDB_model_num,
        asym_id=first.label_asym_id,
        first_seq_id=first.label_seq_id,
        first_comp_id=first.label_comp_id,
        second_seq_id=second.label_seq_id,
        second_comp_id=second.label_comp_id,
        first_bone=find_bone(first.label_comp_id),
        second_bone=find_bone(second.label_comp_id),
    )


def _extract(
    structure: AtomCollection, residues: StepResidues, names: list[tuple[int, str]], as_view: bool
) -> AtomCollection:
    wanted = [residues.wanted(residue, name) for residue, name in names]
    return extract_atoms(structure, wanted, as_view=as_view)


def extract_backbone(structure: AtomCollection, as_view: bool = False) -> AtomCollection:
    """Extract the plain sugar-phosphate backbone (12 atoms) of a step."""
    residues = step_residues(structure, structure_is_step(structure))
    names = [(1, n) for n in plain_names(residues.first_bone.first_residue)]
    names += [(2, n) for n in plain_names(residues.second_bone.second_residue)]
    return _extract(structure, residues, names, as_view)


def extract_extended_backbone(structure: AtomCollection, as_view: bool = False) -> AtomCollection:
    """
    Extract the extended backbone (18 atoms) of a step.

    The extended backbone adds the C1' anchor and the two base atoms of each
    residue to the plain backbone. It is the atom set used to superpose steps.

    Raises:
        NtCGeometryError: If the structure is not a valid step
        MissingAtomsError: If any of the atoms is not present
    """
    residues = step_residues(structure, structure_is_step(structure))
    first, second = residues.first_bone, residues.second_bone
    names = [(1, n) for n in extended_names(first.first_residue)]
    names += [(1, n) for n in first.base]
    names += [(2, n) for n in extended_names(second.second_residue)]
    names += [(2, n) for n in second.base]
    return _extract(structure, residues, names, as_view)


def extract_metrics_structure(structure: AtomCollection, as_view: bool = False) -> AtomCollection:
    """Extract all atoms (20) needed to calculate the step metrics."""
    residues = step_residues(structure, structure_is_step(structure))
    first, second = residues.first_bone, residues.second_bone
    names = [(1, n) for n in first.first_residue]
    names += [(1, n) for n in first.base]
    names += [(2, n) for n in second.second_residue]
    names += [(2, n) for n in second.base]
    return _extract(structure, residues, names, as_view)


def _check_single_alt_id(atoms: list[Atom], which: str) -> None:
    alt_ids = {atom.label_alt_id for atom in atoms if atom.label_alt_id != NO_ALTID}
    if len(alt_ids) > 1:
        raise MultipleAltIdsError(
            f"{which.capitalize()} residue has multiple alternate positions: {sorted(alt_ids)}"
        )


def _check_has_atoms(atoms: list[Atom], names: tuple[str, ...], which: str) -> None:
    present = {atom.label_atom_id for atom in atoms}
    missing = [name for name in names if name not in present]
    if missing:
        raise MissingAtomsError(f"{which.capitalize()} residue is missing atoms {missing}")


def _check_has_base_atoms(atoms: list[Atom], seq_id: int, bone: Bone, which: str) -> None:
    for name in bone.base:
        if not any(a.label_seq_id == seq_id and a.label_atom_id == name for a in atoms):
            raise MissingAtomsError(f"{which.capitalize()} residue {seq_id} is missing base atom {name}")


def _base_kind(atom: Atom) -> BaseKind:
    kind = find_base_kind(atom.label_comp_id)
    if kind is None:
        raise InvalidArgumentError(f"Cannot determine base kind of residue {atom.label_comp_id}")
    return kind


def structure_is_step(structure: AtomCollection) -> StepInfo:
    """
    Check that a structure is a complete dinucleotide step.

    The first residue is the one with the lowest sequence id among atoms that
    carry first-residue backbone names. Every other residue carrying
    second-residue backbone names forms the second residue.

    Returns:
        StepInfo describing the step

    Raises:
        MissingAtomsError: If the structure is empty or lacks backbone or base atoms
        MultipleAltIdsError: If a residue has more than one alternate position
        MismatchingSizesError: If a residue has an unexpected number of backbone atoms
        MismatchingDataError: If the second residue atoms do not share a sequence id
        InvalidArgumentError: If the base kind of a residue cannot be determined
    """
    atoms = list(structure)
    if not atoms:
        raise MissingAtomsError("Structure contains no atoms")

    first_bone = find_bone(atoms[0].label_comp_id)
    second_bone = find_bone(atoms[-1].label_comp_id)
    first_names = extended_names(first_bone.first_residue)
    second_names = extended_names(second_bone.second_residue)

    first_atoms = [a for a in atoms if a.label_atom_id in first_names]
    second_atoms = [a for a in atoms if a.label_atom_id in second_names]
    if not first_atoms:
        raise MissingAtomsError("First residue has no backbone atoms")

    first_seq_id = min(a.label_seq_id for a in first_atoms)
    first_atoms = [a for a in first_atoms if a.label_seq_id == first_seq_id]
    second_atoms = [a for a in second_atoms if a.label_seq_id != first_seq_id]

    _check_single_alt_id(first_atoms, "first")
    _check_single_alt_id(second_atoms, "second")

    _check_has_atoms(first_atoms, plain_names(first_bone.first_residue), "first")
    _check_has_atoms(second_atoms, plain_names(second_bone.second_residue), "second")

    if len(first_atoms) != len(first_names):
        raise MismatchingSizesError(
            f"First residue has {len(first_atoms)} backbone atoms, expected {len(first_names)}"
        )
    if len(second_atoms) != len(second_names):
        raise MismatchingSizesError(
            f"Second residue has {len(second_atoms)} backbone atoms, expected {len(second_names)}"
        )

    second_seq_id = second_atoms[0].label_seq_id
    if any(a.label_seq_id != second_seq_id for a in second_atoms):
        raise MismatchingDataError("Second residue atoms do not share one sequence id")

    first_kind = _base_kind(first_atoms[0])
    second_kind = _base_kind(second_atoms[0])

    _check_has_base_atoms(atoms, first_seq_id, first_bone, "first")
    _check_has_base_atoms(atoms, second_seq_id, second_bone, "second")

    return StepInfo(
        first_seq_id=first_seq_id,
        first_seq_id_auth=first_atoms[0].auth_seq_id,
        second_seq_id=second_seq_id,
        second_seq_id_auth=second_atoms[0].auth_seq_id,
        first_base_kind=first_kind,
        second_base_kind=second_kind,
    )


def _residue_atoms(atoms: list[Atom], start: int) -> list[Atom]:
    """Collect the contiguous run of atoms of the residue starting at start."""
    head = atoms[start]
    end = start
    while end < len(atoms):
        atom = atoms[end]
        if (
            atom.pdbx_PDB_model_num != head.pdbx_PDB_model_num
            or atom.label_asym_id != head.label_asym_id
            or atom.label_seq_id != head.label_seq_id
        ):
            break
        end += 1
    return atoms[start:end]


def _is_same_chain(a: Atom, b: Atom) -> bool:
    return a.pdbx_PDB_model_num == b.pdbx_PDB_model_num and a.label_asym_id == b.label_asym_id


def dinucleotide_to_steps(first: AtomCollection, second: AtomCollection) -> list[Structure]:
    """
    Join two consecutive residues into steps.

    Each alternate position of one residue is paired with each alternate
    position of the other. A pair becomes a step only if the O3' atom of the
    first residue and the P atom of the second residue are bonded.
    """
    steps = []
    for _, first_alt in split_by_alt_ids(first):
        o3 = find_atom_by_name(first_alt, "O3'")
        if o3 is None:
            continue
        for _, second_alt in split_by_alt_ids(second):
            p = find_atom_by_name(second_alt, "P")
            if p is None:
                continue

            dist = spatial_distance(o3.position, p.position)
            if dist <= MAX_O3_P_DISTANCE:
                steps.append(Structure(first_alt.atoms + second_alt.atoms))
            else:
                logger.debug(
                    "Residues %s %d and %s %d are not linked, O3'-P distance %.3f",
                    o3.label_comp_id, o3.label_seq_id, p.label_comp_id, p.label_seq_id, dist,
                )
    return steps


def split_to_dinucleotide_steps(structure: AtomCollection) -> list[Structure]:
    """
    Split a structure into all its dinucleotide steps.

    Residues are taken in the order they appear in the structure. Residues
    that are not known nucleotides are skipped, consecutive residues must
    belong to the same model and chain.
    """
    atoms = list(structure)
    steps: list[Structure] = []

    idx = 0
    while idx < len(atoms):
        atom = atoms[idx]
        if not is_known_residue(atom.label_comp_id):
            idx += 1
            continue

        first = _residue_atoms(atoms, idx)
        idx += len(first)
        if idx >= len(atoms):
            break

        next_atom = atoms[idx]
        if not _is_same_chain(atom, next_atom):
            continue

        second = _residue_atoms(atoms, idx)
        steps.extend(dinucleotide_to_steps(Structure(first), Structure(second)))

    logger.debug("Found %d dinucleotide steps", len(steps))
    return steps
