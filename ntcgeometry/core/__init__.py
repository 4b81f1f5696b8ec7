"""Core modules for step extraction, validation, metrics and superposition."""

from ntcgeometry.core.errors import (
    BadDataError,
    ErrorKind,
    InvalidArgumentError,
    MismatchingDataError,
    MismatchingSizesError,
    MissingAtomsError,
    MultipleAltIdsError,
    NtCGeometryError,
    UnknownResidueError,
)
from ntcgeometry.core.io import get_structure, load_structure, structure_from_gemmi, validate_file
from ntcgeometry.core.metrics import (
    CrossResidueMetric,
    DinucleotideTorsion,
    StepMetrics,
    calculate_step_metrics,
    cross_residue_metric,
    dinucleotide_torsion,
)
from ntcgeometry.core.residues import BaseKind, Bone, find_bone, is_known_residue
from ntcgeometry.core.step import (
    StepInfo,
    extract_backbone,
    extract_extended_backbone,
    extract_metrics_structure,
    split_to_dinucleotide_steps,
    structure_is_step,
)
from ntcgeometry.core.structure import Atom, AtomToExtract, Structure, StructureView, extract_atoms
from ntcgeometry.core.superposition import rmsd, superpose, superposition_matrix

__all__ = [
    "Atom",
    "AtomToExtract",
    "BadDataError",
    "BaseKind",
    "Bone",
    "CrossResidueMetric",
    "DinucleotideTorsion",
    "ErrorKind",
    "InvalidArgumentError",
    "MismatchingDataError",
    "MismatchingSizesError",
    "MissingAtomsError",
    "MultipleAltIdsError",
    "NtCGeometryError",
    "StepInfo",
    "StepMetrics",
    "Structure",
    "StructureView",
    "UnknownResidueError",
    "calculate_step_metrics",
    "cross_residue_metric",
    "dinucleotide_torsion",
    "extract_atoms",
    "extract_backbone",
    "extract_extended_backbone",
    "extract_metrics_structure",
    "find_bone",
    "get_structure",
    "is_known_residue",
    "load_structure",
    "rmsd",
    "split_to_dinucleotide_steps",
    "structure_from_gemmi",
    "structure_is_step",
    "superpose",
    "superposition_matrix",
    "validate_file",
]
