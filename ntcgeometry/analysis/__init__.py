"""
Reference conformers, connectivity, similarity and whole-structure measurement
"""

from ntcgeometry.analysis.connectivity_similarity import (
    Connectivity,
    Similarity,
    measure_step_connectivity_ntcs,
    measure_step_connectivity_structures,
    measure_step_similarity_ntc,
    measure_step_similarity_structure,
)
from ntcgeometry.analysis.measurement import StepMeasurement, measure_structure_steps
from ntcgeometry.analysis.references import ReferenceConformer, ReferenceTable, load_reference_table

__all__ = [
    "Connectivity",
    "ReferenceConformer",
    "ReferenceTable",
    "Similarity",
    "StepMeasurement",
    "load_reference_table",
    "measure_step_connectivity_ntcs",
    "measure_step_connectivity_structures",
    "measure_step_similarity_ntc",
    "measure_step_similarity_structure",
    "measure_structure_steps",
]
