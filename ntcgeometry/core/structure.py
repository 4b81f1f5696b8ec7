"""
Atom and structure containers

A Structure owns an ordered list of immutable Atom records. A StructureView
borrows a Structure: it keeps a reference to its source and a tuple of indices
into it, so a view can never outlive the atoms it points at. Views do not copy
atoms; modifying the source after creating a view changes what the view reads.
"""

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field, replace

import numpy as np

from ntcgeometry.core.errors import MissingAtomsError

NO_ALTID = ""


@dataclass(frozen=True)
class Atom:
    """
    One atom of a structure, named after the mmCIF atom_site items.

    Attributes:
        type_symbol: Element symbol
        label_atom_id: Atom name
        label_entity_id: Entity identifier
        label_comp_id: Residue (compound) name
        label_asym_id: Structural chain identifier
        auth_atom_id: Author-assigned atom name
        auth_comp_id: Author-assigned residue name
        auth_asym_id: Author-assigned chain identifier
        coords: Cartesian coordinates in angstroms
        id: Atom serial number
        label_seq_id: Structural sequence number of the residue
        auth_seq_id: Author-assigned sequence number of the residue
        pdbx_PDB_model_num: Model number
        pdbx_PDB_ins_code: Insertion code, empty if none
        label_alt_id: Alternate position identifier, NO_ALTID if none
    """

    type_symbol: str
    label_atom_id: str
    label_entity_id: str
    label_comp_id: str
    label_asym_id: str
    auth_atom_id: str
    auth_comp_id: str
    auth_asym_id: str
    coords: tuple[float, float, float]
    id: int
    label_seq_id: int
    auth_seq_id: int
    pdbx_PDB_model_num: int
    pdbx_PDB_ins_code: str = ""
    label_alt_id: str = NO_ALTID

    @property
    def position(self) -> np.ndarray:
        """Coordinates as a numpy vector."""
        return np.array(self.coords, dtype=float)

    def moved_to(self, coords: Iterable[float]) -> "Atom":
        """Return a copy of the atom placed at new coordinates."""
        x, y, z = (float(c) for c in coords)
        return replace(self, coords=(x, y, z))


@dataclass
class Structure:
    """Ordered, owning collection of atoms."""

    atoms: list[Atom] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.atoms)

    def __iter__(self) -> Iterator[Atom]:
        return iter(self.atoms)

    def __getitem__(self, idx: int) -> Atom:
        return self.atoms[idx]

    def append(self, atom: Atom) -> None:
        self.atoms.append(atom)

    def extend(self, atoms: Iterable[Atom]) -> None:
        self.atoms.extend(atoms)

    def copy(self) -> "Structure":
        return Structure(list(self.atoms))

    def coordinates(self) -> np.ndarray:
        """Return an (N, 3) array of atom coordinates."""
        return _coordinates(self.atoms)

    def set_coordinates(self, coords: np.ndarray) -> None:
        """Move every atom to the matching row of an (N, 3) array."""
        if len(coords) != len(self.atoms):
            raise ValueError(
                f"Expected {len(self.atoms)} coordinate rows, got {len(coords)}"
            )
        self.atoms = [atom.moved_to(row) for atom, row in zip(self.atoms, coords, strict=True)]

    def view(self, indices: Iterable[int] | None = None) -> "StructureView":
        """Borrow the atoms at the given indices (all atoms by default)."""
        if indices is None:
            indices = range(len(self.atoms))
        return StructureView(self, tuple(indices))


@dataclass(frozen=True)
class StructureView:
    """
    Ordered, non-owning view into a Structure.

    Attributes:
        source: Structure the view borrows from
        indices: Positions of the viewed atoms in source.atoms
    """

    source: Structure
    indices: tuple[int, ...]

    def __len__(self) -> int:
        return len(self.indices)

    def __iter__(self) -> Iterator[Atom]:
        atoms = self.source.atoms
        return (atoms[idx] for idx in self.indices)

    def __getitem__(self, idx: int) -> Atom:
        return self.source.atoms[self.indices[idx]]

    def coordinates(self) -> np.ndarray:
        """Return an (N, 3) array of the viewed atom coordinates."""
        return _coordinates(list(self))

    def to_structure(self) -> Structure:
        """Copy the viewed atoms into a new owning Structure."""
        return Structure(list(self))


AtomCollection = Structure | StructureView


def _coordinates(atoms: Sequence[Atom]) -> np.ndarray:
    if not atoms:
        return np.zeros((0, 3), dtype=float)
    return np.array([atom.coords for atom in atoms], dtype=float)


@dataclass(frozen=True)
class AtomToExtract:
    """Identification of an atom to look up in a structure."""

    model_num: int
    asym_id: str
    seq_id: int
    comp_id: str
    atom_id: str
    alt_id: str = NO_ALTID


def get_matching_atom(atoms: Sequence[Atom], wanted: AtomToExtract) -> int | None:
    """
    Find the first atom matching an extraction request.

    An atom matches when its model number, sequence id, chain, residue name and
    atom name are equal to the requested ones. Atoms without an alternate
    position always match; atoms with one match only if no particular
    alternate position was requested or if it is the requested one.

    Returns:
        Index of the matching atom, or None if there is no such atom
    """
    for idx, atom in enumerate(atoms):
        if (
            atom.pdbx_PDB_model_num == wanted.model_num
            and atom.label_seq_id == wanted.seq_id
            and atom.label_asym_id == wanted.asym_id
            and atom.label_comp_id == wanted.comp_id
            and atom.label_atom_id == wanted.atom_id
        ):
            if wanted.alt_id == NO_ALTID:
                return idx
            if atom.label_alt_id in (NO_ALTID, wanted.alt_id):
                return idx
    return None


def _source_and_indices(structure: AtomCollection) -> tuple[Structure, Sequence[int]]:
    if isinstance(structure, StructureView):
        return structure.source, structure.indices
    return structure, range(len(structure))


def extract_atoms(
    structure: AtomCollection,
    wanted: Sequence[AtomToExtract],
    as_view: bool = False,
) -> AtomCollection:
    """
    Pick the requested atoms out of a structure, in the requested order.

    Args:
        structure: Structure or view to search
        wanted: Atoms to extract
        as_view: Return a StructureView borrowing the source instead of a copy

    Returns:
        Structure (or StructureView) with exactly len(wanted) atoms

    Raises:
        MissingAtomsError: If any of the requested atoms is not present
    """
    source, source_indices = _source_and_indices(structure)
    atoms = [source.atoms[idx] for idx in source_indices]

    picked = []
    for ate in wanted:
        idx = get_matching_atom(atoms, ate)
        if idx is None:
            raise MissingAtomsError(
                f"Atom {ate.atom_id} of residue {ate.comp_id} {ate.seq_id} "
                f"(chain {ate.asym_id}, model {ate.model_num}) not found"
            )
        picked.append(source_indices[idx])

    if as_view:
        return StructureView(source, tuple(picked))
    return Structure([source.atoms[idx] for idx in picked])


def find_atom_by_name(structure: AtomCollection, name: str) -> Atom | None:
    """Return the first atom with the given label_atom_id."""
    for atom in structure:
        if atom.label_atom_id == name:
            return atom
    return None


def split_by_alt_ids(structure: AtomCollection) -> list[tuple[str, Structure]]:
    """
    Split a structure into one structure per alternate position.

    Every split structure contains the atoms without an alternate position
    and the atoms of one alternate position. A structure with no alternate
    positions is returned as a single copy tagged with NO_ALTID.

    Returns:
        List of (alt_id, structure) tuples in order of first appearance
    """
    alt_ids: list[str] = []
    for atom in structure:
        if atom.label_alt_id != NO_ALTID and atom.label_alt_id not in alt_ids:
            alt_ids.append(atom.label_alt_id)

    if not alt_ids:
        return [(NO_ALTID, Structure(list(structure)))]

    return [
        (
            alt_id,
            Structure([a for a in structure if a.label_alt_id in (NO_ALTID, alt_id)]),
        )
        for alt_id in alt_ids
    ]
