"""
Connectivity and similarity of dinucleotide steps

Connectivity tells whether two steps placed at consecutive positions of a
molecule join into a continuous backbone. Each step is superposed onto the
extended backbone of its position and the distances between the C5' and O3'
atoms of the residue the two steps share are measured.

Similarity compares an observed step to a reference conformer by the RMSD of
the superposed extended backbones and by a weighted Euclidean distance of the
step metrics.

Batch variants stop at the first failing item and raise its error.
"""

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass, fields

from ntcgeometry.analysis.references import ReferenceTable
from ntcgeometry.core.errors import MissingAtomsError
from ntcgeometry.core.geometry import angle_difference, spatial_distance
from ntcgeometry.core.metrics import (
    StepMetrics,
    calculate_step_metrics,
    step_metrics_difference,
)
from ntcgeometry.core.step import extract_extended_backbone
from ntcgeometry.core.structure import Atom, AtomCollection, Structure
from ntcgeometry.core.superposition import superpose

logger = logging.getLogger(__name__)

# Weight of CC and NN differences (angstroms) relative to angle differences (degrees)
XR_DISTANCE_MULTIPLIER = 32.0

_DISTANCE_FIELDS = ("cc", "nn")


@dataclass(frozen=True)
class Connectivity:
    """Distances between the shared residue of two consecutive superposed steps."""

    c5prime_distance: float
    o3prime_distance: float


@dataclass(frozen=True)
class Similarity:
    """Similarity of a step to a reference."""

    rmsd: float
    euclidean_distance: float


def _placed_backbone(step: AtomCollection, position_backbone: Structure) -> Structure:
    """Extended backbone of step superposed onto an already extracted position backbone."""
    moved = extract_extended_backbone(step)
    fit = superpose(moved, position_backbone)
    logger.debug("Placed step onto position with backbone RMSD %.3f", fit)
    return moved


def _superposed_backbone(step: AtomCollection, position: AtomCollection) -> Structure:
    """Extended backbone of step superposed onto the extended backbone of position."""
    return _placed_backbone(step, extract_extended_backbone(position, as_view=True))


def _backbone_atom(backbone: Structure, residue: int, name: str) -> Atom:
    seq_id = backbone[0].label_seq_id if residue == 1 else backbone[len(backbone) - 1].label_seq_id
    for atom in backbone:
        if atom.label_seq_id == seq_id and atom.label_atom_id == name:
            return atom
    raise MissingAtomsError(f"Atom {name} of residue {seq_id} not found in the step backbone")


def _connectivity(first: Structure, second: Structure) -> Connectivity:
    """Measure connectivity of two already superposed extended backbones."""
    c5_first = _backbone_atom(first, 2, "C5'")
    c5_second = _backbone_atom(second, 1, "C5'")
    o3_first = _backbone_atom(first, 2, "O3'")
    o3_second = _backbone_atom(second, 1, "O3'")

    return Connectivity(
        c5prime_distance=spatial_distance(c5_first.position, c5_second.position),
        o3prime_distance=spatial_distance(o3_first.position, o3_second.position),
    )


def measure_step_connectivity_structures(
    position_first: AtomCollection,
    dinu_first: AtomCollection,
    position_second: AtomCollection,
    dinu_second: AtomCollection,
) -> Connectivity:
    """
    Measure connectivity of two steps placed at two consecutive positions.

    Args:
        position_first: Step defining where the first step is placed
        dinu_first: Step placed at the first position
        position_second: Step defining where the second step is placed
        dinu_second: Step placed at the second position

    Raises:
        NtCGeometryError: If any of the structures is not a valid step
    """
    first = _superposed_backbone(dinu_first, position_first)
    second = _superposed_backbone(dinu_second, position_second)
    return _connectivity(first, second)


def measure_step_connectivity_structures_multiple(
    position_first: AtomCollection,
    dinu_first: AtomCollection,
    position_second: AtomCollection,
    dinus_second: Sequence[AtomCollection],
) -> list[Connectivity]:
    """Measure connectivity of one first step with several candidate second steps."""
    first = _superposed_backbone(dinu_first, position_first)
    position_backbone = extract_extended_backbone(position_second, as_view=True)
    return [_connectivity(first, _placed_backbone(dinu_second, position_backbone)) for dinu_second in dinus_second]


def measure_step_connectivity_ntcs(
    position_first: AtomCollection,
    ntc_first: str,
    position_second: AtomCollection,
    ntc_second: str,
    references: ReferenceTable,
) -> Connectivity:
    """
    Measure connectivity of two reference conformers placed at two consecutive positions.

    Raises:
        InvalidArgumentError: If an NtC is unknown or missing from the reference table
        NtCGeometryError: If a position is not a valid step
    """
    return measure_step_connectivity_structures(
        position_first,
        references.get_conformer(ntc_first).structure,
        position_second,
        references.get_conformer(ntc_second).structure,
    )


def measure_step_connectivity_ntcs_multiple_first(
    position_first: AtomCollection,
    ntcs_first: Sequence[str],
    position_second: AtomCollection,
    ntc_second: str,
    references: ReferenceTable,
) -> list[Connectivity]:
    """Measure connectivity of several first-step conformers with one second-step conformer."""
    second = _superposed_backbone(references.get_conformer(ntc_second).structure, position_second)
    position_backbone = extract_extended_backbone(position_first, as_view=True)
    return [
        _connectivity(_placed_backbone(references.get_conformer(ntc).structure, position_backbone), second)
        for ntc in ntcs_first
    ]


def measure_step_connectivity_ntcs_multiple_second(
    position_first: AtomCollection,
    ntc_first: str,
    position_second: AtomCollection,
    ntcs_second: Sequence[str],
    references: ReferenceTable,
) -> list[Connectivity]:
    """Measure connectivity of one first-step conformer with several second-step conformers."""
    first = _superposed_backbone(references.get_conformer(ntc_first).structure, position_first)
    position_backbone = extract_extended_backbone(position_second, as_view=True)
    return [
        _connectivity(first, _placed_backbone(references.get_conformer(ntc).structure, position_backbone))
        for ntc in ntcs_second
    ]


def metrics_euclidean_distance(metrics: StepMetrics, reference: StepMetrics) -> float:
    """
    Weighted Euclidean distance between two sets of step metrics.

    Angle differences enter in degrees along the shorter arc, CC and NN
    differences in angstroms scaled by XR_DISTANCE_MULTIPLIER.
    """
    total = 0.0
    for f in fields(StepMetrics):
        a = getattr(metrics, f.name)
        b = getattr(reference, f.name)
        if f.name in _DISTANCE_FIELDS:
            diff = XR_DISTANCE_MULTIPLIER * abs(a - b)
        else:
            diff = math.degrees(angle_difference(a, b))
        total += diff * diff
    return math.sqrt(total)


def _similarity(
    step_metrics: StepMetrics,
    step_backbone: AtomCollection,
    reference: AtomCollection,
    reference_metrics: StepMetrics,
) -> Similarity:
    moved = extract_extended_backbone(reference)
    rmsd = superpose(moved, step_backbone)
    return Similarity(rmsd=rmsd, euclidean_distance=metrics_euclidean_distance(step_metrics, reference_metrics))


def measure_step_similarity_ntc(step: AtomCollection, ntc: str, references: ReferenceTable) -> Similarity:
    """
    Measure similarity of a step to a reference conformer.

    Raises:
        InvalidArgumentError: If the NtC is unknown or missing from the reference table
        NtCGeometryError: If the structure is not a valid step
    """
    conformer = references.get_conformer(ntc)
    metrics = calculate_step_metrics(step)
    backbone = extract_extended_backbone(step, as_view=True)
    return _similarity(metrics, backbone, conformer.structure, conformer.metrics)


def measure_step_similarity_ntc_multiple(
    step: AtomCollection, ntcs: Sequence[str], references: ReferenceTable
) -> list[Similarity]:
    """Measure similarity of a step to several reference conformers."""
    metrics = calculate_step_metrics(step)
    backbone = extract_extended_backbone(step, as_view=True)

    results = []
    for ntc in ntcs:
        conformer = references.get_conformer(ntc)
        results.append(_similarity(metrics, backbone, conformer.structure, conformer.metrics))
    return results


def measure_step_similarity_structure(step: AtomCollection, reference: AtomCollection) -> Similarity:
    """
    Measure similarity of a step to an arbitrary reference step.

    Raises:
        NtCGeometryError: If either structure is not a valid step
    """
    metrics = calculate_step_metrics(step)
    reference_metrics = calculate_step_metrics(reference)
    backbone = extract_extended_backbone(step, as_view=True)
    return _similarity(metrics, backbone, reference, reference_metrics)


def calculate_step_metrics_difference_against_reference(
    step: AtomCollection, ntc: str, references: ReferenceTable
) -> StepMetrics:
    """
    Difference between the metrics of a step and the averaged metrics of an NtC.

    Raises:
        InvalidArgumentError: If the NtC is unknown or missing from the reference table
        NtCGeometryError: If the structure is not a valid step
    """
    conformer = references.get_conformer(ntc)
    return step_metrics_difference(calculate_step_metrics(step), conformer.metrics)
