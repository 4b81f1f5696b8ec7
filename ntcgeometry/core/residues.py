"""
Residue knowledge base

Maps residue names to Bones, the descriptors of which atom names play which
structural role in a nucleotide. Standard residues share one purine and one
pyrimidine Bone; modified residues come from the generated table in
``residue_table``.
"""

import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple

from ntcgeometry.core.errors import UnknownResidueError
from ntcgeometry.core.residue_table import NON_STANDARD_RESIDUES

logger = logging.getLogger(__name__)


class BaseKind(Enum):
    """Kind of the nucleobase of a residue."""

    PURINE = "purine"
    PYRIMIDINE = "pyrimidine"
    NON_STANDARD_BASE = "non_standard_base"


@dataclass(frozen=True)
class Bone:
    """
    Atom naming descriptor of one residue type.

    Attributes:
        name: Residue name the bone describes
        first_residue: Backbone atom names when the residue is first in a step
        second_residue: Backbone atom names when the residue is second in a step
        base: The two base atoms used for cross-residue metrics
        base_quad: Four atoms defining the glycosidic torsion (chi)
        has_standard_backbone: Backbone uses the standard atom names
        has_standard_base: Base uses the standard purine/pyrimidine atom names
    """

    name: str
    first_residue: tuple[str, ...]
    second_residue: tuple[str, ...]
    base: tuple[str, str]
    base_quad: tuple[str, str, str, str]
    has_standard_backbone: bool
    has_standard_base: bool


STANDARD_FIRST_RESIDUE = ("C5'", "C4'", "O4'", "C3'", "O3'", "C1'", "O4'")
STANDARD_SECOND_RESIDUE = ("P", "O5'", "C5'", "C4'", "O4'", "C3'", "O3'", "C1'", "O4'")

PURINE_BASE = ("N9", "C4")
PYRIMIDINE_BASE = ("N1", "C2")

STANDARD_PURINE_BONE = Bone(
    name="purine",
    first_residue=STANDARD_FIRST_RESIDUE,
    second_residue=STANDARD_SECOND_RESIDUE,
    base=PURINE_BASE,
    base_quad=("O4'", "C1'", *PURINE_BASE),
    has_standard_backbone=True,
    has_standard_base=True,
)

STANDARD_PYRIMIDINE_BONE = Bone(
    name="pyrimidine",
    first_residue=STANDARD_FIRST_RESIDUE,
    second_residue=STANDARD_SECOND_RESIDUE,
    base=PYRIMIDINE_BASE,
    base_quad=("O4'", "C1'", *PYRIMIDINE_BASE),
    has_standard_backbone=True,
    has_standard_base=True,
)

# Looked up before anything else, these cover nearly all real-world residues
PRIORITY_RESIDUES = ("DA", "DC", "DG", "DT", "A", "C", "G", "U")

STANDARD_RESIDUE_BASES: dict[str, BaseKind] = {
    "A": BaseKind.PURINE,
    "G": BaseKind.PURINE,
    "I": BaseKind.PURINE,
    "DA": BaseKind.PURINE,
    "DG": BaseKind.PURINE,
    "DI": BaseKind.PURINE,
    "C": BaseKind.PYRIMIDINE,
    "U": BaseKind.PYRIMIDINE,
    "T": BaseKind.PYRIMIDINE,
    "DC": BaseKind.PYRIMIDINE,
    "DT": BaseKind.PYRIMIDINE,
    "DU": BaseKind.PYRIMIDINE,
}


def _make_non_standard_bone(
    name: str, base: tuple[str, str], second_residue: tuple[str, ...] | None
) -> Bone:
    # The first residue never carries the two phosphate-side atoms
    if second_residue is None:
        second_residue = STANDARD_SECOND_RESIDUE
        first_residue = STANDARD_FIRST_RESIDUE
        standard_backbone = True
    else:
        first_residue = second_residue[2:]
        standard_backbone = False

    return Bone(
        name=name,
        first_residue=first_residue,
        second_residue=second_residue,
        base=base,
        base_quad=("O4'", "C1'", *base),
        has_standard_backbone=standard_backbone,
        has_standard_base=False,
    )


KNOWN_NON_STANDARD_RESIDUES: dict[str, Bone] = {
    name: _make_non_standard_bone(name, base, second)
    for name, base, second in NON_STANDARD_RESIDUES
}


def is_standard_residue(name: str) -> bool:
    """Check whether the residue is one of the standard nucleotides."""
    if name in PRIORITY_RESIDUES:
        return True
    return name in STANDARD_RESIDUE_BASES


def is_known_residue(name: str) -> bool:
    """Check whether the residue is a standard or a known modified nucleotide."""
    return is_standard_residue(name) or name in KNOWN_NON_STANDARD_RESIDUES


def find_base_kind(name: str) -> BaseKind | None:
    """Return the base kind of a residue, or None for unknown residues."""
    kind = STANDARD_RESIDUE_BASES.get(name)
    if kind is not None:
        return kind
    if name in KNOWN_NON_STANDARD_RESIDUES:
        return BaseKind.NON_STANDARD_BASE
    return None


def find_bone(name: str) -> Bone:
    """
    Look up the Bone describing a residue.

    Raises:
        UnknownResidueError: If the residue is not in the knowledge base
    """
    if is_standard_residue(name):
        if STANDARD_RESIDUE_BASES[name] is BaseKind.PURINE:
            return STANDARD_PURINE_BONE
        return STANDARD_PYRIMIDINE_BONE

    bone = KNOWN_NON_STANDARD_RESIDUES.get(name)
    if bone is None:
        raise UnknownResidueError(name)
    return bone


def extended_names(names: tuple[str, ...]) -> tuple[str, ...]:
    """Backbone names without the trailing ring atom repeated for chi."""
    return names[:-1]


def plain_names(names: tuple[str, ...]) -> tuple[str, ...]:
    """Backbone names without the base anchor and the trailing ring atom."""
    return names[:-2]


NUM_FIRST_EXTENDED_ATOMS = len(extended_names(STANDARD_FIRST_RESIDUE))
NUM_SECOND_EXTENDED_ATOMS = len(extended_names(STANDARD_SECOND_RESIDUE))
NUM_PLAIN_ATOMS = len(plain_names(STANDARD_FIRST_RESIDUE)) + len(plain_names(STANDARD_SECOND_RESIDUE))
NUM_EXTENDED_ATOMS = NUM_FIRST_EXTENDED_ATOMS + NUM_SECOND_EXTENDED_ATOMS + 2 * len(PURINE_BASE)
NUM_METRICS_ATOMS = len(STANDARD_FIRST_RESIDUE) + len(STANDARD_SECOND_RESIDUE) + 2 * len(PURINE_BASE)


class QuadAtom(NamedTuple):
    """Atom name tagged with the residue (1 or 2) of the step it belongs to."""

    name: str
    residue: int


BackboneQuad = tuple[QuadAtom, QuadAtom, QuadAtom, QuadAtom]
BackboneQuads = tuple[BackboneQuad, ...]


def _quad(*atoms: tuple[str, int]) -> BackboneQuad:
    return tuple(QuadAtom(name, residue) for name, residue in atoms)


# delta_1, epsilon_1, zeta_1, alpha_2, beta_2, gamma_2, delta_2
STANDARD_BACKBONE_QUADS: BackboneQuads = (
    _quad(("C5'", 1), ("C4'", 1), ("C3'", 1), ("O3'", 1)),
    _quad(("C4'", 1), ("C3'", 1), ("O3'", 1), ("P", 2)),
    _quad(("C3'", 1), ("O3'", 1), ("P", 2), ("O5'", 2)),
    _quad(("O3'", 1), ("P", 2), ("O5'", 2), ("C5'", 2)),
    _quad(("P", 2), ("O5'", 2), ("C5'", 2), ("C4'", 2)),
    _quad(("O5'", 2), ("C5'", 2), ("C4'", 2), ("C3'", 2)),
    _quad(("C5'", 2), ("C4'", 2), ("C3'", 2), ("O3'", 2)),
)

# Window over the first seven second-residue names, starting at C5'
_WINDOW_LENGTH = 7
_WINDOW_OFFSET = 2

_quads_cache: dict[tuple[str, str], BackboneQuads] = {}
_quads_lock = threading.Lock()


def synthesize_backbone_quads(first: Bone, second: Bone) -> BackboneQuads:
    """
    Build the seven backbone torsion quads for an arbitrary pair of Bones.

    The first seven second-residue names of a Bone are read as a circular
    buffer starting at what is C5' on a standard backbone. Quad n takes the
    four names from position n + 2 on, wrapping past O3' back to P. Atom k of
    quad n belongs to residue 2 once n > 3 - k; such atoms are named by the
    first Bone, the others by the second Bone.
    """
    quads = []
    for n in range(_WINDOW_LENGTH):
        quad = []
        for k in range(4):
            wrapped = n > 3 - k
            bone = first if wrapped else second
            name = bone.second_residue[(n + _WINDOW_OFFSET + k) % _WINDOW_LENGTH]
            quad.append(QuadAtom(name, 2 if wrapped else 1))
        quads.append(tuple(quad))
    return tuple(quads)


def backbone_quads(first: Bone, second: Bone) -> BackboneQuads:
    """
    Return the backbone torsion quads for a pair of Bones.

    Pairs of standard backbones use STANDARD_BACKBONE_QUADS. Other pairs are
    synthesized once and cached for the lifetime of the process. The cache is
    safe to use from multiple threads.
    """
    if first.has_standard_backbone and second.has_standard_backbone:
        return STANDARD_BACKBONE_QUADS

    key = (first.name, second.name)
    quads = _quads_cache.get(key)
    if quads is not None:
        return quads

    with _quads_lock:
        quads = _quads_cache.get(key)
        if quads is None:
            quads = synthesize_backbone_quads(first, second)
            _quads_cache[key] = quads
            logger.debug("Cached backbone quads for %s-%s", first.name, second.name)
    return quads
