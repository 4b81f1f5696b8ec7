"""Tests for RMSD, Kabsch superposition and homogeneous transformations."""

import math

import numpy as np
import pytest
from hypothesis import given, settings, strategies as st

from ntcgeometry.core.errors import InvalidArgumentError, MismatchingSizesError
from ntcgeometry.core.step import extract_extended_backbone
from ntcgeometry.core.superposition import (
    apply_transformation,
    centroid,
    rmsd,
    superpose,
    superposition_matrix,
)

from conftest import make_chain, moved_structure, rotation_matrix

POINTS = np.array(
    [
        [0.0, 0.0, 0.0],
        [1.5, 0.0, 0.0],
        [1.5, 1.5, 0.0],
        [0.0, 1.5, 0.7],
        [0.4, 0.9, 2.1],
    ]
)


class TestRmsd:
    """Test the plain RMSD."""

    def test_reflexive(self):
        """Test that a point set has zero RMSD to itself."""
        assert rmsd(POINTS, POINTS) == 0.0

    def test_translation(self):
        """Test that a uniform shift gives the shift length."""
        assert rmsd(POINTS, POINTS + np.array([3.0, 4.0, 0.0])) == pytest.approx(5.0)

    def test_symmetric(self):
        """Test that RMSD does not depend on argument order."""
        other = POINTS[::-1]
        assert rmsd(POINTS, other) == pytest.approx(rmsd(other, POINTS))

    def test_mismatching_sizes(self):
        """Test that point sets of different size are rejected."""
        with pytest.raises(MismatchingSizesError):
            rmsd(POINTS, POINTS[:3])

    def test_empty(self):
        """Test that two empty sets have zero RMSD."""
        assert rmsd(np.zeros((0, 3)), np.zeros((0, 3))) == 0.0

    def test_structures(self, step):
        """Test RMSD of a Structure against its view."""
        assert rmsd(step, step.view()) == 0.0


class TestCentroid:
    """Test point set centroids."""

    def test_centroid(self):
        """Test the mean of a point set."""
        np.testing.assert_allclose(centroid(POINTS), POINTS.mean(axis=0))

    def test_empty(self):
        """Test that an empty set has its centroid at the origin."""
        np.testing.assert_array_equal(centroid(np.zeros((0, 3))), np.zeros(3))


class TestSuperpose:
    """Test in-place superposition."""

    def test_recovers_rigid_motion(self):
        """Test that a rotated and shifted copy is fitted back exactly."""
        target = POINTS @ rotation_matrix((1.0, 2.0, 0.5), 1.1).T + np.array([4.0, -2.0, 7.0])
        moving = POINTS.copy()

        result = superpose(moving, target)
        assert result == pytest.approx(0.0, abs=1e-9)
        np.testing.assert_allclose(moving, target, atol=1e-9)

    def test_rmsd_not_larger_than_before(self):
        """Test that superposition never increases the RMSD."""
        target = POINTS + np.random.default_rng(7).normal(scale=0.3, size=POINTS.shape)
        before = rmsd(POINTS, target)
        moving = POINTS.copy()
        after = superpose(moving, target)
        assert after <= before + 1e-12
        assert rmsd(moving, target) == pytest.approx(after)

    def test_superpose_structure(self, step):
        """Test that a Structure is moved in place."""
        moved = moved_structure(step, rotation_matrix((0.0, 1.0, 0.0), 2.0), (10.0, 0.0, 0.0))
        result = superpose(moved, step)
        assert result == pytest.approx(0.0, abs=1e-9)
        np.testing.assert_allclose(moved.coordinates(), step.coordinates(), atol=1e-9)

    def test_onto_not_modified(self, step):
        """Test that the target stays in place."""
        before = step.coordinates()
        superpose(moved_structure(step, np.identity(3), (1.0, 1.0, 1.0)), step)
        np.testing.assert_array_equal(step.coordinates(), before)

    def test_view_cannot_move(self, step):
        """Test that a borrowed view is not a valid superposition source."""
        with pytest.raises(InvalidArgumentError):
            superpose(step.view(), step)

    def test_mismatching_sizes(self):
        """Test that point sets of different size are rejected."""
        with pytest.raises(MismatchingSizesError):
            superpose(POINTS.copy(), POINTS[:4])

    def test_empty(self):
        """Test that empty point sets are rejected."""
        with pytest.raises(InvalidArgumentError):
            superpose(np.zeros((0, 3)), np.zeros((0, 3)))

    @settings(max_examples=25, deadline=None)
    @given(
        st.tuples(*[st.floats(min_value=-1.0, max_value=1.0) for _ in range(3)]),
        st.floats(min_value=-math.pi, max_value=math.pi),
        st.tuples(*[st.floats(min_value=-100.0, max_value=100.0) for _ in range(3)]),
    )
    def test_rmsd_invariant_under_rigid_motion(self, axis, angle, translation):
        """Property-based test that moving the target does not change the fitted RMSD."""
        if np.linalg.norm(axis) < 0.1:
            axis = (1.0, 0.0, 0.0)
        step = extract_extended_backbone(_noisy_step())
        reference = extract_extended_backbone(_noisy_step(seed=3))

        baseline = superpose(reference.copy(), step)
        moved = moved_structure(step, rotation_matrix(axis, angle), translation)
        assert superpose(reference.copy(), moved) == pytest.approx(baseline, abs=1e-8)


def _noisy_step(seed=1):
    step = make_chain(["DA", "DC"])
    noise = np.random.default_rng(seed).normal(scale=0.2, size=(len(step), 3))
    step.set_coordinates(step.coordinates() + noise)
    return step


class TestSuperpositionMatrix:
    """Test the homogeneous superposition matrix."""

    def test_matrix_reproduces_superpose(self):
        """Test that applying the matrix equals superposing directly."""
        target = POINTS @ rotation_matrix((0.2, -1.0, 0.4), -0.7).T + np.array([1.0, 2.0, 3.0])
        target = target + np.random.default_rng(11).normal(scale=0.1, size=POINTS.shape)

        matrix = superposition_matrix(POINTS, target)
        transformed = POINTS.copy()
        apply_transformation(transformed, matrix)

        direct = POINTS.copy()
        superpose(direct, target)
        np.testing.assert_allclose(transformed, direct, atol=1e-9)

    def test_matrix_is_rigid(self):
        """Test that the matrix is a proper rotation plus translation."""
        target = POINTS @ rotation_matrix((1.0, 1.0, 0.0), 0.5).T
        matrix = superposition_matrix(POINTS, target)
        rotation = matrix[:3, :3]
        np.testing.assert_allclose(rotation @ rotation.T, np.identity(3), atol=1e-9)
        assert np.linalg.det(rotation) == pytest.approx(1.0)
        np.testing.assert_array_equal(matrix[3], [0.0, 0.0, 0.0, 1.0])

    def test_inputs_not_modified(self):
        """Test that computing the matrix moves nothing."""
        what = POINTS.copy()
        superposition_matrix(what, POINTS + 1.0)
        np.testing.assert_array_equal(what, POINTS)

    def test_empty(self):
        """Test that no transformation exists for empty sets."""
        with pytest.raises(InvalidArgumentError):
            superposition_matrix(np.zeros((0, 3)), np.zeros((0, 3)))

    def test_mismatching_sizes(self):
        """Test that point sets of different size are rejected."""
        with pytest.raises(MismatchingSizesError):
            superposition_matrix(POINTS, POINTS[:2])


class TestApplyTransformation:
    """Test homogeneous transformations of point sets."""

    def test_translation(self):
        """Test a pure translation."""
        matrix = np.identity(4)
        matrix[:3, 3] = [1.0, -2.0, 0.5]
        points = POINTS.copy()
        apply_transformation(points, matrix)
        np.testing.assert_allclose(points, POINTS + [1.0, -2.0, 0.5])

    def test_structure(self, step):
        """Test transforming a Structure in place."""
        matrix = np.identity(4)
        matrix[:3, :3] = rotation_matrix((0.0, 0.0, 1.0), math.pi / 2)
        before = step.coordinates()
        apply_transformation(step, matrix)
        np.testing.assert_allclose(step.coordinates()[:, 2], before[:, 2])
        np.testing.assert_allclose(step.coordinates()[:, 0], -before[:, 1], atol=1e-12)

    @pytest.mark.parametrize("shape", [(3, 3), (4, 3), (16,)])
    def test_wrong_shape(self, shape):
        """Test that only 4x4 matrices are accepted."""
        with pytest.raises(InvalidArgumentError):
            apply_transformation(POINTS.copy(), np.zeros(shape))
