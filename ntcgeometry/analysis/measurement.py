"""
Per-step measurement of whole structures.

Splits a structure into its dinucleotide steps, calculates the metrics of
every step and, when reference conformers are given, the similarity of every
step to a chosen NtC. Results can be exported as a pandas DataFrame or CSV.
"""

import logging
import math
from dataclasses import dataclass
from pathlib import Path

import pandas as pd

from ntcgeometry.analysis.connectivity_similarity import measure_step_similarity_ntc
from ntcgeometry.analysis.references import ReferenceTable
from ntcgeometry.core.errors import InvalidArgumentError, NtCGeometryError
from ntcgeometry.core.metrics import StepMetrics, calculate_step_metrics
from ntcgeometry.core.step import split_to_dinucleotide_steps
from ntcgeometry.core.structure import NO_ALTID, Atom, AtomCollection

logger = logging.getLogger(__name__)


@dataclass
class StepMeasurement:
    """
    Container for the measured geometry of one step.

    Attributes:
        name: DNATCO-style step name (e.g. "1bna_A_DC_1_DG_2")
        model_num: Model number
        chain_id: Author chain identifier
        first_comp_id: Residue name of the first nucleotide
        first_seq_id: Author residue number of the first nucleotide
        second_comp_id: Residue name of the second nucleotide
        second_seq_id: Author residue number of the second nucleotide
        metrics: Step metrics (angles in radians)
        ntc: NtC the step was compared to, None if no comparison was made
        rmsd: RMSD of the superposed extended backbones against the NtC
        euclidean_distance: Weighted distance of the metrics from the NtC averages
    """

    name: str
    model_num: int
    chain_id: str
    first_comp_id: str
    first_seq_id: int
    second_comp_id: str
    second_seq_id: int
    metrics: StepMetrics
    ntc: str | None = None
    rmsd: float | None = None
    euclidean_distance: float | None = None


def _residue_alt_id(atoms: list[Atom]) -> str:
    for atom in atoms:
        if atom.label_alt_id != NO_ALTID:
            return atom.label_alt_id
    return NO_ALTID


def _residue_label(comp_id: str, alt_id: str, seq_id: int, ins_code: str) -> str:
    comp = f"{comp_id}.{alt_id}" if alt_id != NO_ALTID else comp_id
    seq = f"{seq_id}.{ins_code}" if ins_code else str(seq_id)
    return f"{comp}_{seq}"


def step_name(entry_id: str, step: AtomCollection, multiple_models: bool = False) -> str:
    """
    Build the DNATCO name of a step.

    The name has the form
    ``{entry}[-m{model}]_{chain}_{comp1}[.alt1]_{seq1}[.ins1]_{comp2}[.alt2]_{seq2}[.ins2]``
    with author identifiers and a lowercase entry id.

    Args:
        entry_id: PDB entry identifier
        step: The step
        multiple_models: Add the model number, for entries with more than one model

    Raises:
        InvalidArgumentError: If the step does not contain two residues
    """
    atoms = list(step)
    if not atoms:
        raise InvalidArgumentError("Step has no atoms")

    first, last = atoms[0], atoms[-1]
    first_atoms = [a for a in atoms if a.label_seq_id == first.label_seq_id]
    second_atoms = [a for a in atoms if a.label_seq_id != first.label_seq_id]
    if not second_atoms:
        raise InvalidArgumentError("Step contains only one residue")

    prefix = entry_id.lower()
    if multiple_models:
        prefix += f"-m{first.pdbx_PDB_model_num}"

    first_label = _residue_label(
        first.auth_comp_id, _residue_alt_id(first_atoms), first.auth_seq_id, first.pdbx_PDB_ins_code
    )
    second_label = _residue_label(
        last.auth_comp_id, _residue_alt_id(second_atoms), last.auth_seq_id, last.pdbx_PDB_ins_code
    )
    return f"{prefix}_{first.auth_asym_id}_{first_label}_{second_label}"


def measure_structure_steps(
    structure: AtomCollection,
    entry_id: str,
    references: ReferenceTable | None = None,
    ntc: str | None = None,
) -> list[StepMeasurement]:
    """
    Measure every dinucleotide step of a structure.

    Steps that fail validation or give undefined metrics are logged and left
    out of the result.

    Args:
        structure: Structure to measure
        entry_id: Entry identifier used to name the steps
        references: Reference conformers, required when ntc is given
        ntc: Compare every step to this NtC

    Returns:
        List of StepMeasurement objects in structure order

    Raises:
        InvalidArgumentError: If ntc is given without references or is not a valid NtC
    """
    if ntc is not None:
        if references is None:
            raise InvalidArgumentError("Comparing steps to an NtC requires reference conformers")
        references.get_conformer(ntc)

    steps = split_to_dinucleotide_steps(structure)
    multiple_models = len({atom.pdbx_PDB_model_num for atom in structure}) > 1

    measurements = []
    for step in steps:
        name = step_name(entry_id, step, multiple_models=multiple_models)
        try:
            metrics = calculate_step_metrics(step)
            similarity = None
            if ntc is not None:
                similarity = measure_step_similarity_ntc(step, ntc, references)
        except NtCGeometryError as e:
            logger.info("Skipping step %s: %s", name, e)
            continue

        first, last = step[0], step[len(step) - 1]
        measurements.append(
            StepMeasurement(
                name=name,
                model_num=first.pdbx_PDB_model_num,
                chain_id=first.auth_asym_id,
                first_comp_id=first.label_comp_id,
                first_seq_id=first.auth_seq_id,
                second_comp_id=last.label_comp_id,
                second_seq_id=last.auth_seq_id,
                metrics=metrics,
                ntc=ntc,
                rmsd=similarity.rmsd if similarity else None,
                euclidean_distance=similarity.euclidean_distance if similarity else None,
            )
        )

    logger.info("Measured %d of %d steps", len(measurements), len(steps))
    return measurements


def to_dataframe(measurements: list[StepMeasurement]) -> pd.DataFrame:
    """
    Convert step measurements to a pandas DataFrame.

    Angles are reported in degrees, CC and NN in angstroms.

    Returns:
        DataFrame with one row per step: step identification columns, the
        twelve metrics and, if any step was compared to an NtC, the ntc,
        rmsd and euclidean_distance columns
    """
    compared = any(m.ntc is not None for m in measurements)

    data = []
    for m in measurements:
        row = {
            "step": m.name,
            "model": m.model_num,
            "chain": m.chain_id,
            "first_comp_id": m.first_comp_id,
            "first_seq_id": m.first_seq_id,
            "second_comp_id": m.second_comp_id,
            "second_seq_id": m.second_seq_id,
        }
        row.update(m.metrics.as_dict(degrees=True))
        if compared:
            row["ntc"] = m.ntc
            row["rmsd"] = m.rmsd if m.rmsd is not None else math.nan
            row["euclidean_distance"] = (
                m.euclidean_distance if m.euclidean_distance is not None else math.nan
            )
        data.append(row)
    return pd.DataFrame(data)


def save_to_csv(measurements: list[StepMeasurement], output_path: Path) -> None:
    """
    Export step measurements to a CSV file.

    Creates parent directories if they don't exist.

    Raises:
        OSError: If the file cannot be written
    """
    try:
        df = to_dataframe(measurements)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        df.to_csv(output_path, index=False, float_format="%.3f")
    except OSError as e:
        raise OSError(f"Failed to save CSV to {output_path}: {e}") from e
