"""
Step metrics: backbone and base torsions, cross-residue distances and torsion

Every step is described by twelve values: seven backbone torsions
(delta_1 ... delta_2), the two glycosidic torsions (chi_1, chi_2), the C1'-C1'
distance (CC), the distance between the first base atoms of the two
residues (NN) and the torsion spanning both bases (mu). Angles are in radians,
distances in angstroms.
"""

import math
from dataclasses import astuple, dataclass, fields
from enum import Enum

from ntcgeometry.core.errors import BadDataError, MissingAtomsError
from ntcgeometry.core.geometry import angle_difference, dihedral_angle, spatial_distance
from ntcgeometry.core.residues import backbone_quads, find_bone
from ntcgeometry.core.step import StepInfo, StepResidues, step_residues, structure_is_step
from ntcgeometry.core.structure import Atom, AtomCollection, StructureView, get_matching_atom


class DinucleotideTorsion(Enum):
    """Torsion angles of a step, in the order of StepMetrics."""

    DELTA_1 = 0
    EPSILON_1 = 1
    ZETA_1 = 2
    ALPHA_2 = 3
    BETA_2 = 4
    GAMMA_2 = 5
    DELTA_2 = 6
    CHI_1 = 7
    CHI_2 = 8


class CrossResidueMetric(Enum):
    """Metrics measured across the two residues of a step."""

    CC = 0
    NN = 1
    MU = 2


_TORSION_NAMES = {
    DinucleotideTorsion.DELTA_1: ("delta_1", "δ_1"),
    DinucleotideTorsion.EPSILON_1: ("epsilon_1", "ε_1"),
    DinucleotideTorsion.ZETA_1: ("zeta_1", "ζ_1"),
    DinucleotideTorsion.ALPHA_2: ("alpha_2", "α_2"),
    DinucleotideTorsion.BETA_2: ("beta_2", "β_2"),
    DinucleotideTorsion.GAMMA_2: ("gamma_2", "γ_2"),
    DinucleotideTorsion.DELTA_2: ("delta_2", "δ_2"),
    DinucleotideTorsion.CHI_1: ("chi_1", "χ_1"),
    DinucleotideTorsion.CHI_2: ("chi_2", "χ_2"),
}

_CROSS_RESIDUE_METRIC_NAMES = {
    CrossResidueMetric.CC: ("CC", "CC"),
    CrossResidueMetric.NN: ("NN", "NN"),
    CrossResidueMetric.MU: ("mu", "μ"),
}


def torsion_name(torsion: DinucleotideTorsion, greek: bool = False) -> str:
    """Human readable name of a torsion, e.g. "alpha_2" or "α_2"."""
    return _TORSION_NAMES[torsion][1 if greek else 0]


def cross_residue_metric_name(metric: CrossResidueMetric, greek: bool = False) -> str:
    """Human readable name of a cross-residue metric, e.g. "mu" or "μ"."""
    return _CROSS_RESIDUE_METRIC_NAMES[metric][1 if greek else 0]


@dataclass(frozen=True)
class StepMetrics:
    """Geometric descriptors of a step."""

    delta_1: float
    epsilon_1: float
    zeta_1: float
    alpha_2: float
    beta_2: float
    gamma_2: float
    delta_2: float
    chi_1: float
    chi_2: float
    cc: float
    nn: float
    mu: float

    def torsion(self, torsion: DinucleotideTorsion) -> float:
        return astuple(self)[torsion.value]

    def as_dict(self, degrees: bool = False) -> dict[str, float]:
        """Map metric names to values, optionally with angles in degrees."""
        values = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if degrees and f.name not in ("cc", "nn"):
                value = math.degrees(value)
            values[f.name] = value
        return values


def _residue_atom_index(structure: AtomCollection, residues: StepResidues, residue: int, name: str) -> int:
    idx = get_matching_atom(structure, residues.wanted(residue, name))
    if idx is None:
        raise MissingAtomsError(f"Atom {name} of residue {residue} of the step not found")
    return idx


def _residue_atom(structure: AtomCollection, residues: StepResidues, residue: int, name: str) -> Atom:
    return structure[_residue_atom_index(structure, residues, residue, name)]


def _check_value(value: float, what: str) -> float:
    if math.isnan(value):
        raise BadDataError(f"Calculation of {what} gave NaN, the geometry is degenerate")
    return value


def _torsion_indices(
    structure: AtomCollection, residues: StepResidues, torsion: DinucleotideTorsion
) -> list[int]:
    if torsion is DinucleotideTorsion.CHI_1:
        quad = [(1, n) for n in residues.first_bone.base_quad]
    elif torsion is DinucleotideTorsion.CHI_2:
        quad = [(2, n) for n in residues.second_bone.base_quad]
    else:
        quad = backbone_quads(residues.first_bone, residues.second_bone)[torsion.value]
        quad = [(qa.residue, qa.name) for qa in quad]
    return [_residue_atom_index(structure, residues, residue, name) for residue, name in quad]


def _torsion_atoms(
    structure: AtomCollection, residues: StepResidues, torsion: DinucleotideTorsion
) -> list[Atom]:
    return [structure[idx] for idx in _torsion_indices(structure, residues, torsion)]


def _cross_residue_atoms(
    structure: AtomCollection, residues: StepResidues, metric: CrossResidueMetric
) -> list[Atom]:
    first_base = residues.first_bone.base[0]
    second_base = residues.second_bone.base[0]

    if metric is CrossResidueMetric.CC:
        names = [(1, "C1'"), (2, "C1'")]
    elif metric is CrossResidueMetric.NN:
        names = [(1, first_base), (2, second_base)]
    else:
        names = [(1, first_base), (1, "C1'"), (2, "C1'"), (2, second_base)]
    return [_residue_atom(structure, residues, residue, name) for residue, name in names]


def _torsion_unchecked(
    structure: AtomCollection, residues: StepResidues, torsion: DinucleotideTorsion
) -> float:
    a, b, c, d = (atom.position for atom in _torsion_atoms(structure, residues, torsion))
    return _check_value(dihedral_angle(a, b, c, d), torsion_name(torsion))


def _cross_residue_unchecked(
    structure: AtomCollection, residues: StepResidues, metric: CrossResidueMetric
) -> float:
    points = [atom.position for atom in _cross_residue_atoms(structure, residues, metric)]
    if metric is CrossResidueMetric.MU:
        value = dihedral_angle(*points)
    else:
        value = spatial_distance(*points)
    return _check_value(value, cross_residue_metric_name(metric))


def dinucleotide_torsion_atoms(structure: AtomCollection, torsion: DinucleotideTorsion) -> StructureView:
    """
    Return the four atoms that define a torsion of a step.

    Raises:
        NtCGeometryError: If the structure is not a valid step
    """
    residues = step_residues(structure, structure_is_step(structure))
    indices = _torsion_indices(structure, residues, torsion)
    if isinstance(structure, StructureView):
        return StructureView(structure.source, tuple(structure.indices[idx] for idx in indices))
    return StructureView(structure, tuple(indices))


def dinucleotide_torsion(structure: AtomCollection, torsion: DinucleotideTorsion) -> float:
    """
    Calculate one torsion angle of a step.

    Raises:
        NtCGeometryError: If the structure is not a valid step
        BadDataError: If the torsion is undefined for the atom positions
    """
    residues = step_residues(structure, structure_is_step(structure))
    return _torsion_unchecked(structure, residues, torsion)


def cross_residue_metric(structure: AtomCollection, metric: CrossResidueMetric) -> float:
    """
    Calculate one cross-residue metric of a step.

    Raises:
        NtCGeometryError: If the structure is not a valid step
        BadDataError: If the metric is undefined for the atom positions
    """
    residues = step_residues(structure, structure_is_step(structure))
    return _cross_residue_unchecked(structure, residues, metric)


def calculate_step_metrics_unchecked(structure: AtomCollection, info: StepInfo | None = None) -> StepMetrics:
    """Calculate all metrics of a structure already known to be a valid step."""
    residues = step_residues(structure, info)
    torsions = [_torsion_unchecked(structure, residues, t) for t in DinucleotideTorsion]
    cross = [_cross_residue_unchecked(structure, residues, m) for m in CrossResidueMetric]
    return StepMetrics(*torsions, *cross)


def calculate_step_metrics(structure: AtomCollection) -> StepMetrics:
    """
    Calculate all twelve metrics of a step.

    Raises:
        NtCGeometryError: If the structure is not a valid step
        BadDataError: If any metric is undefined for the atom positions
    """
    return calculate_step_metrics_unchecked(structure, structure_is_step(structure))


def step_metrics_difference(metrics: StepMetrics, reference: StepMetrics) -> StepMetrics:
    """
    Difference of two sets of metrics.

    Angles are compared along the shorter arc, distances are subtracted.
    """
    values = {}
    for f in fields(StepMetrics):
        a = getattr(metrics, f.name)
        b = getattr(reference, f.name)
        values[f.name] = a - b if f.name in ("cc", "nn") else angle_difference(a, b)
    return StepMetrics(**values)


def dinucleotide_torsion_atom_names(
    first_comp_id: str, second_comp_id: str, torsion: DinucleotideTorsion
) -> tuple[str, str, str, str]:
    """
    Names of the atoms defining a torsion of a step made of the given residues.

    Raises:
        UnknownResidueError: If either residue is not in the knowledge base
    """
    first = find_bone(first_comp_id)
    second = find_bone(second_comp_id)

    if torsion is DinucleotideTorsion.CHI_1:
        return first.base_quad
    if torsion is DinucleotideTorsion.CHI_2:
        return second.base_quad
    return tuple(qa.name for qa in backbone_quads(first, second)[torsion.value])


def cross_residue_metric_atom_names(
    first_comp_id: str, second_comp_id: str, metric: CrossResidueMetric
) -> tuple[str, ...]:
    """
    Names of the atoms defining a cross-residue metric.

    Returns two names for the distances and four names for the mu torsion.

    Raises:
        UnknownResidueError: If either residue is not in the knowledge base
    """
    first = find_bone(first_comp_id)
    second = find_bone(second_comp_id)

    if metric is CrossResidueMetric.CC:
        return ("C1'", "C1'")
    if metric is CrossResidueMetric.NN:
        return (first.base[0], second.base[0])
    return (first.base[0], "C1'", "C1'", second.base[0])
