"""Elementary geometric measurements on points."""

import math

import numpy as np

TWO_PI = 2.0 * math.pi


def spatial_distance(a: np.ndarray, b: np.ndarray) -> float:
    """Euclidean distance between two points."""
    return float(np.linalg.norm(np.asarray(b, dtype=float) - np.asarray(a, dtype=float)))


def dihedral_angle(a: np.ndarray, b: np.ndarray, c: np.ndarray, d: np.ndarray) -> float:
    """
    Calculate the signed dihedral angle defined by four points.

    Args:
        a, b, c, d: Points of the dihedral, the rotation axis runs through b and c

    Returns:
        Angle in radians in the range (-pi, pi]. NaN if any three consecutive
        points are collinear or coincide.
    """
    a, b, c, d = (np.asarray(p, dtype=float) for p in (a, b, c, d))

    ab = a - b
    cb = c - b
    dc = d - c

    abc = np.cross(ab, cb)
    bcd = np.cross(-cb, dc)
    if not np.any(abc) or not np.any(bcd):
        return math.nan

    # Sine part is signed by the orientation of the two planes along the b-c axis
    sin_part = np.dot(cb, np.cross(abc, bcd)) / np.linalg.norm(cb)
    cos_part = np.dot(abc, bcd)
    angle = math.atan2(sin_part, cos_part)

    # atan2 gives -pi for a trans quad with a negative zero sine
    return math.pi if angle == -math.pi else angle


def angle_difference(a: float, b: float) -> float:
    """
    Smallest signed difference between two angles, wrapping around the circle.

    Returns:
        Difference a - b in radians in the range [-pi, pi]
    """
    a = a - TWO_PI * int(a / TWO_PI)
    b = b - TWO_PI * int(b / TWO_PI)

    diff = a - b
    while abs(diff) > math.pi:
        diff -= math.copysign(TWO_PI, diff)
    return diff
