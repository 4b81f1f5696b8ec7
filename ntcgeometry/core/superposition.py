"""
Rigid-body superposition and RMSD calculations

Point sets are matched one-to-one by position: the i-th point of one set
corresponds to the i-th point of the other. The optimal rotation is found
with the Kabsch algorithm (SVD of the cross-covariance matrix with reflection
correction) as implemented by Biopython's SVDSuperimposer.

All functions accept (N, 3) numpy arrays, Structures and StructureViews.
Functions that move points modify numpy arrays and Structures in place;
StructureViews borrow their atoms and cannot be moved.
"""

import numpy as np
from Bio.SVDSuperimposer import SVDSuperimposer

from ntcgeometry.core.errors import InvalidArgumentError, MismatchingSizesError
from ntcgeometry.core.structure import Structure, StructureView

Points = np.ndarray | Structure | StructureView


def _as_points(points: Points) -> np.ndarray:
    if isinstance(points, (Structure, StructureView)):
        return points.coordinates()
    return np.asarray(points, dtype=float).reshape(-1, 3)


def _store_points(target: Points, coords: np.ndarray) -> None:
    if isinstance(target, Structure):
        target.set_coordinates(coords)
    elif isinstance(target, np.ndarray):
        target[...] = coords.reshape(target.shape)
    else:
        raise InvalidArgumentError(
            f"Cannot move points of {type(target).__name__}, pass a Structure or a numpy array"
        )


def _check_sizes(what: np.ndarray, onto: np.ndarray) -> None:
    if len(what) != len(onto):
        raise MismatchingSizesError(
            f"Point sets must have the same size. Got {len(what)} and {len(onto)}"
        )


def _superimposer(what: np.ndarray, onto: np.ndarray) -> SVDSuperimposer:
    """Run the Kabsch fit of what onto onto."""
    superimposer = SVDSuperimposer()
    superimposer.set(onto, what)
    superimposer.run()
    return superimposer


def centroid(points: Points) -> np.ndarray:
    """Arithmetic mean of the points, the origin for an empty set."""
    coords = _as_points(points)
    if len(coords) == 0:
        return np.zeros(3)
    return coords.mean(axis=0)


def rmsd(a: Points, b: Points) -> float:
    """
    Root-mean-square distance between corresponding points, without fitting.

    Raises:
        MismatchingSizesError: If the point sets differ in size
    """
    coords_a = _as_points(a)
    coords_b = _as_points(b)
    _check_sizes(coords_a, coords_b)

    if len(coords_a) == 0:
        return 0.0

    squared_dists = np.sum((coords_a - coords_b) ** 2, axis=1)
    return float(np.sqrt(np.mean(squared_dists)))


def superpose(what: np.ndarray | Structure, onto: Points) -> float:
    """
    Superpose a point set onto another one in place.

    After the call ``what`` is rotated and translated so that it fits ``onto``
    with the smallest possible RMSD.

    Args:
        what: Points to move, numpy array or Structure
        onto: Target points

    Returns:
        RMSD of the fitted points

    Raises:
        MismatchingSizesError: If the point sets differ in size
        InvalidArgumentError: If the point sets are empty
    """
    what_coords = _as_points(what)
    onto_coords = _as_points(onto)
    _check_sizes(what_coords, onto_coords)
    if len(what_coords) == 0:
        raise InvalidArgumentError("Cannot superpose empty point sets")

    superimposer = _superimposer(what_coords, onto_coords)
    _store_points(what, superimposer.get_transformed())

    return float(superimposer.get_rms())


def superposition_matrix(what: Points, onto: Points) -> np.ndarray:
    """
    Calculate the transformation that superposes one point set onto another.

    The transformation is returned as a 4x4 homogeneous matrix acting on
    column vectors. It translates ``what`` to the origin, rotates it and moves
    it to the centroid of ``onto``. Neither input is modified.

    Raises:
        MismatchingSizesError: If the point sets differ in size
        InvalidArgumentError: If the point sets are empty
    """
    what_coords = _as_points(what)
    onto_coords = _as_points(onto)
    _check_sizes(what_coords, onto_coords)
    if len(what_coords) == 0:
        raise InvalidArgumentError("No transformation is defined for empty point sets")

    rotation, translation = _superimposer(what_coords, onto_coords).get_rotran()

    # SVDSuperimposer works with row vectors: x' = x . rot + tran
    matrix = np.identity(4)
    matrix[:3, :3] = rotation.T
    matrix[:3, 3] = translation
    return matrix


def apply_transformation(what: np.ndarray | Structure, matrix: np.ndarray) -> None:
    """
    Transform points in place by a 4x4 homogeneous matrix.

    Raises:
        InvalidArgumentError: If the matrix is not 4x4
    """
    matrix = np.asarray(matrix, dtype=float)
    if matrix.shape != (4, 4):
        raise InvalidArgumentError(f"Transformation matrix must be 4x4, got {matrix.shape}")

    coords = _as_points(what)
    homogeneous = np.hstack([coords, np.ones((len(coords), 1))])
    transformed = homogeneous @ matrix.T
    _store_points(what, transformed[:, :3])
