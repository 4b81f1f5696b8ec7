"""
Single nucleotide utilities: residue extraction, ribose geometry and sugar pucker
"""

import math
from dataclasses import dataclass
from enum import Enum

from ntcgeometry.core.errors import BadDataError, MissingAtomsError
from ntcgeometry.core.geometry import TWO_PI, dihedral_angle
from ntcgeometry.core.residues import is_known_residue
from ntcgeometry.core.structure import (
    AtomCollection,
    AtomToExtract,
    Structure,
    StructureView,
    extract_atoms,
)

RIBOSE_CORE_ATOMS = ("C4'", "O4'", "C1'", "C2'", "C3'")

# tau_2 closer to zero than this is clamped to avoid dividing by zero
PSEUDOROTATION_TAU2_EPSILON = 5.0e-5


class NameBrevity(Enum):
    VERY_TERSE = "very_terse"
    TERSE = "terse"
    FANCY = "fancy"


class SugarPucker(Enum):
    """Sugar pucker conformations, ordered by pseudorotation phase in 36 degree bins."""

    C3_ENDO = 0
    C4_EXO = 1
    O4_ENDO = 2
    C1_EXO = 3
    C2_ENDO = 4
    C3_EXO = 5
    C4_ENDO = 6
    O4_EXO = 7
    C1_ENDO = 8
    C2_EXO = 9

    @property
    def atom(self) -> str:
        return self.name.split("_")[0]

    @property
    def is_endo(self) -> bool:
        return self.name.endswith("ENDO")


def sugar_pucker_name(pucker: SugarPucker, brevity: NameBrevity = NameBrevity.TERSE) -> str:
    """
    Name of a sugar pucker, e.g. "C2end", "C2endo" or "C2' endo".
    """
    if brevity is NameBrevity.FANCY:
        return f"{pucker.atom}' {'endo' if pucker.is_endo else 'exo'}"
    if brevity is NameBrevity.VERY_TERSE:
        return f"{pucker.atom}{'end' if pucker.is_endo else 'exo'}"
    return f"{pucker.atom}{'endo' if pucker.is_endo else 'exo'}"


def _name_variants(atom: str, endo: bool) -> list[str]:
    if endo:
        return [f"{atom}end", f"{atom}endo", f"{atom}'end", f"{atom}'endo", f"{atom}' endo"]
    return [f"{atom}exo", f"{atom}'exo", f"{atom}' exo"]


def _build_name_table() -> dict[str, SugarPucker]:
    table = {}
    for pucker in SugarPucker:
        # O1' is the ring oxygen name used by some modified residues
        atoms = [pucker.atom, "O1"] if pucker.atom == "O4" else [pucker.atom]
        for atom in atoms:
            for name in _name_variants(atom, pucker.is_endo):
                table[name] = pucker
    return table


_NAME_TO_SUGAR_PUCKER = _build_name_table()


def name_to_sugar_pucker(name: str) -> SugarPucker | None:
    """Parse a sugar pucker name such as "C3endo" or "C3' endo"."""
    return _NAME_TO_SUGAR_PUCKER.get(name)


@dataclass(frozen=True)
class RiboseMetrics:
    """
    Ring geometry of a (deoxy)ribose.

    Attributes:
        nu_0 ... nu_4: Endocyclic torsions of the ring, radians
        P: Pseudorotation phase, radians in [0, 2pi)
        t_max: Pseudorotation amplitude, radians
        pucker: Sugar pucker conformation derived from P
    """

    nu_0: float
    nu_1: float
    nu_2: float
    nu_3: float
    nu_4: float
    P: float
    t_max: float
    pucker: SugarPucker


def is_nucleotide_compound(comp_id: str) -> bool:
    return is_known_residue(comp_id)


def extract_nucleotide(
    structure: AtomCollection, model_num: int, asym_id: str, seq_id: int, as_view: bool = False
) -> AtomCollection:
    """
    Extract all atoms of one nucleotide residue.

    Atoms at the given position that belong to a different compound than the
    first recognised nucleotide (microheterogeneity) are left out. An empty
    result is returned if there is no nucleotide at the position.
    """
    source = structure.source if isinstance(structure, StructureView) else structure
    positions = structure.indices if isinstance(structure, StructureView) else range(len(structure))

    candidates = [
        idx for idx in positions
        if source.atoms[idx].pdbx_PDB_model_num == model_num
        and source.atoms[idx].label_asym_id == asym_id
        and source.atoms[idx].label_seq_id == seq_id
    ]
    comp_id = next(
        (source.atoms[idx].label_comp_id for idx in candidates if is_known_residue(source.atoms[idx].label_comp_id)),
        None,
    )
    picked = [idx for idx in candidates if source.atoms[idx].label_comp_id == comp_id]

    if as_view:
        return StructureView(source, tuple(picked))
    return Structure([source.atoms[idx] for idx in picked])


def extract_ribose(structure: AtomCollection, as_view: bool = False) -> AtomCollection:
    """
    Extract the five ring atoms of the ribose of the nucleotide in a structure.

    The residue is identified by the first atom of the structure.

    Raises:
        MissingAtomsError: If the structure is empty or lacks a ring atom
    """
    if len(structure) == 0:
        raise MissingAtomsError("Structure contains no atoms")

    atom = structure[0]
    wanted = [
        AtomToExtract(atom.pdbx_PDB_model_num, atom.label_asym_id, atom.label_seq_id, atom.label_comp_id, name)
        for name in RIBOSE_CORE_ATOMS
    ]
    return extract_atoms(structure, wanted, as_view=as_view)


def ribose_pseudorotation(taus: tuple[float, float, float, float, float]) -> tuple[float, float]:
    """
    Calculate pseudorotation phase and amplitude from the five ring torsions.

    Returns:
        tuple: (P, t_max) in radians
    """
    tau0, tau1, tau2, tau3, tau4 = taus
    if -PSEUDOROTATION_TAU2_EPSILON <= tau2 <= PSEUDOROTATION_TAU2_EPSILON:
        tau2 = math.copysign(PSEUDOROTATION_TAU2_EPSILON, tau2)

    tan_p = (tau4 + tau1 - tau3 - tau0) / (
        2.0 * tau2 * (math.sin(math.radians(36.0)) + math.sin(math.radians(72.0)))
    )
    phase = math.atan(tan_p)
    if tau2 < 0.0:
        phase += math.pi
    elif tan_p < 0.0:
        phase += TWO_PI

    t_max = abs(tau2 / math.cos(phase))
    return phase, t_max


def pseudorotation_to_sugar_pucker(phase: float) -> SugarPucker:
    """Classify a pseudorotation phase into one of the ten 36 degree pucker bins."""
    if phase < 0.0:
        phase += TWO_PI
    bin_idx = int(math.degrees(phase) // 36.0)
    return SugarPucker(min(bin_idx, 9))


def ribose_metrics(structure: AtomCollection) -> RiboseMetrics:
    """
    Measure the ribose ring of the nucleotide in a structure.

    Raises:
        MissingAtomsError: If any ring atom is missing
        BadDataError: If the ring geometry is degenerate
    """
    ring = [atom.position for atom in extract_ribose(structure)]

    nus = []
    for start in range(5):
        a, b, c, d = (ring[(start + k) % 5] for k in range(4))
        nu = dihedral_angle(a, b, c, d)
        if math.isnan(nu):
            raise BadDataError(f"Ribose torsion nu_{start} is undefined")
        nus.append(nu)

    phase, t_max = ribose_pseudorotation(tuple(nus))
    return RiboseMetrics(*nus, P=phase, t_max=t_max, pucker=pseudorotation_to_sugar_pucker(phase))


def sugar_pucker(structure: AtomCollection) -> SugarPucker:
    """Sugar pucker of the nucleotide in a structure."""
    return ribose_metrics(structure).pucker
