"""Exceptions raised by step geometry calculations."""

from enum import Enum


class ErrorKind(Enum):
    """Stable identifier of a failure category."""

    INVALID_ARGUMENT = "invalid_argument"
    UNKNOWN_RESIDUE = "unknown_residue"
    MISMATCHING_SIZES = "mismatching_sizes"
    MISSING_ATOMS = "missing_atoms"
    MISMATCHING_DATA = "mismatching_data"
    MULTIPLE_ALT_IDS = "multiple_alt_ids"
    BAD_DATA = "bad_data"


class NtCGeometryError(Exception):
    """Base class for all errors raised by ntcgeometry."""

    kind: ErrorKind


class InvalidArgumentError(NtCGeometryError, ValueError):
    """Malformed or out-of-range input."""

    kind = ErrorKind.INVALID_ARGUMENT


class UnknownResidueError(InvalidArgumentError):
    """Residue name is not present in the residue knowledge base."""

    kind = ErrorKind.UNKNOWN_RESIDUE

    def __init__(self, name: str):
        super().__init__(f"Unknown residue '{name}'")
        self.name = name


class MismatchingSizesError(NtCGeometryError):
    """Two collections expected to correspond one-to-one differ in length."""

    kind = ErrorKind.MISMATCHING_SIZES


class MissingAtomsError(NtCGeometryError):
    """A required named atom is absent."""

    kind = ErrorKind.MISSING_ATOMS


class MismatchingDataError(NtCGeometryError):
    """Residue grouping of the input is inconsistent."""

    kind = ErrorKind.MISMATCHING_DATA


class MultipleAltIdsError(NtCGeometryError):
    """More than one alternate position is present where one is required."""

    kind = ErrorKind.MULTIPLE_ALT_IDS


class BadDataError(NtCGeometryError):
    """A computed value is not a number, usually due to degenerate geometry."""

    kind = ErrorKind.BAD_DATA
