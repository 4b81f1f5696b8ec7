"""
Reference NtC conformers

An NtC is one of 96 canonical conformations of a dinucleotide step. Each
reference conformer provides a model step structure, used as a superposition
target, and the averaged step metrics of the conformer class. The reference
data are not bundled; load them with load_reference_table() or build a
ReferenceTable directly.
"""

import logging
import math
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from pathlib import Path

import pandas as pd

from ntcgeometry.core.errors import InvalidArgumentError
from ntcgeometry.core.io import load_structure
from ntcgeometry.core.metrics import StepMetrics
from ntcgeometry.core.structure import Structure

logger = logging.getLogger(__name__)

NTC_NAMES = (
    "AA00", "AA02", "AA03", "AA04", "AA08", "AA09", "AA01", "AA05", "AA06", "AA10", "AA11", "AA07", "AA12", "AA13",
    "AB01", "AB02", "AB03", "AB04", "AB05",
    "BA01", "BA05", "BA09", "BA08", "BA10", "BA13", "BA16", "BA17",
    "BB00", "BB01", "BB17", "BB02", "BB03", "BB11", "BB16", "BB04", "BB05", "BB07", "BB08", "BB10", "BB12",
    "BB13", "BB14", "BB15", "BB20",
    "IC01", "IC02", "IC03", "IC04", "IC05", "IC06", "IC07",
    "OP01", "OP02", "OP03", "OP04", "OP05", "OP06", "OP07", "OP08", "OP09", "OP10", "OP11", "OP12", "OP13",
    "OP14", "OP15", "OP16", "OP17", "OP18", "OP19", "OP20", "OP21", "OP22", "OP23", "OP24", "OP25", "OP26",
    "OP27", "OP28", "OP29", "OP30", "OP31", "OPS1", "OP1S",
    "AAS1", "AB1S", "AB2S",
    "BB1S", "BB2S", "BBS1",
    "ZZ01", "ZZ02", "ZZ1S", "ZZ2S", "ZZS1", "ZZS2",
)

CANA_NAMES = ("AAA", "AAw", "AAu", "A-B", "B-A", "BBB", "BBw", "B12", "BB2", "miB", "ICL", "OPN", "SYN", "ZZZ")

# Column order of the averages table; angles in degrees, CC and NN in angstroms
METRICS_COLUMNS = (
    "delta_1", "epsilon_1", "zeta_1", "alpha_2", "beta_2", "gamma_2", "delta_2",
    "chi_1", "chi_2", "CC", "NN", "mu",
)


def is_valid_ntc(name: str) -> bool:
    return name in NTC_NAMES


def is_valid_cana(name: str) -> bool:
    return name in CANA_NAMES


@dataclass(frozen=True)
class ReferenceConformer:
    """
    Reference data of one NtC class.

    Attributes:
        ntc: NtC name
        structure: Model step of the conformer
        metrics: Averaged step metrics of the conformer class
    """

    ntc: str
    structure: Structure
    metrics: StepMetrics


class ReferenceTable(Mapping):
    """Read-only collection of reference conformers keyed by NtC name."""

    def __init__(self, conformers: list[ReferenceConformer]):
        self._conformers: dict[str, ReferenceConformer] = {}
        for conformer in conformers:
            if not is_valid_ntc(conformer.ntc):
                raise InvalidArgumentError(f"'{conformer.ntc}' is not a valid NtC name")
            self._conformers[conformer.ntc] = conformer

    def __getitem__(self, ntc: str) -> ReferenceConformer:
        return self.get_conformer(ntc)

    def __iter__(self) -> Iterator[str]:
        return iter(self._conformers)

    def __len__(self) -> int:
        return len(self._conformers)

    def get_conformer(self, ntc: str) -> ReferenceConformer:
        """
        Look up a reference conformer.

        Raises:
            InvalidArgumentError: If the name is not a valid NtC or it has no reference data
        """
        if not is_valid_ntc(ntc):
            raise InvalidArgumentError(f"'{ntc}' is not a valid NtC name")
        conformer = self._conformers.get(ntc)
        if conformer is None:
            raise InvalidArgumentError(f"No reference data for NtC {ntc}")
        return conformer


def _metrics_from_row(row: pd.Series) -> StepMetrics:
    values = []
    for column in METRICS_COLUMNS:
        value = float(row[column])
        values.append(value if column in ("CC", "NN") else math.radians(value))
    return StepMetrics(*values)


def load_reference_metrics(csv_path: Path) -> dict[str, StepMetrics]:
    """
    Read averaged NtC metrics from a semicolon separated table.

    The table needs an ``NtC`` column and the columns in METRICS_COLUMNS.

    Raises:
        InvalidArgumentError: If a column is missing or an NtC name is invalid
    """
    df = pd.read_csv(csv_path, sep=";")

    missing = [c for c in ("NtC", *METRICS_COLUMNS) if c not in df.columns]
    if missing:
        raise InvalidArgumentError(f"Reference metrics table {csv_path} lacks columns {missing}")

    averages = {}
    for _, row in df.iterrows():
        ntc = str(row["NtC"]).strip()
        if not is_valid_ntc(ntc):
            raise InvalidArgumentError(f"'{ntc}' in {csv_path} is not a valid NtC name")
        averages[ntc] = _metrics_from_row(row)

    logger.info("Loaded averaged metrics of %d NtCs from %s", len(averages), csv_path)
    return averages


def load_reference_table(structures_dir: Path, metrics_csv: Path) -> ReferenceTable:
    """
    Load reference conformers from a directory of structures and an averages table.

    Every NtC listed in the averages table must have a ``<NtC>.cif`` file
    in structures_dir.

    Raises:
        InvalidArgumentError: If a reference structure is missing or unreadable
    """
    averages = load_reference_metrics(metrics_csv)

    conformers = []
    for ntc, metrics in averages.items():
        path = Path(structures_dir) / f"{ntc}.cif"
        structure = load_structure(path)
        if structure is None:
            raise InvalidArgumentError(f"Cannot read reference structure of {ntc} from {path}")
        conformers.append(ReferenceConformer(ntc, structure, metrics))

    return ReferenceTable(conformers)
