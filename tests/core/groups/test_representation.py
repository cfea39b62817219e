"""Tests for conversions between pairs and homogeneous matrices."""

import numpy as np
import pytest

from rigidgroup.core.groups.representation import (
    affine_matrix,
    check_homogeneous_row,
    copy_components,
    inverse_affine_matrix,
    pad_point,
    pad_vector,
    screw_matrix,
    submanifold_components,
    to_pose,
    to_twist,
)
from rigidgroup.core.models.elements import Identity, Pose, Twist


def planar_rotation(theta):
    return np.array([[np.cos(theta), -np.sin(theta)], [np.sin(theta), np.cos(theta)]])


class TestAffineMatrix:
    """Test point conversions."""

    def test_pose_to_affine(self):
        R = planar_rotation(0.3)
        pmat = affine_matrix(2, Pose([1.0, 2.0], R))

        expected = np.eye(3)
        expected[:2, :2] = R
        expected[:2, 2] = [1.0, 2.0]
        np.testing.assert_array_equal(pmat, expected)

    def test_matrix_is_returned_unchanged(self):
        pmat = np.eye(4)
        assert affine_matrix(3, pmat) is pmat

    def test_identity_fast_path(self):
        np.testing.assert_array_equal(affine_matrix(3, Identity(3)), np.eye(4))

        with pytest.raises(ValueError):
            affine_matrix(3, Identity(2))

    def test_to_pose_copies(self):
        pmat = affine_matrix(2, Pose([1.0, 2.0], planar_rotation(0.3)))
        p = to_pose(2, pmat)
        p.translation[0] = 7.0

        assert pmat[0, 2] == 1.0

    def test_inverse_affine_matrix(self):
        pmat = affine_matrix(2, Pose([1.0, -2.0], planar_rotation(1.1)))
        np.testing.assert_allclose(inverse_affine_matrix(2, pmat) @ pmat, np.eye(3), atol=1e-14)
        np.testing.assert_allclose(inverse_affine_matrix(2, pmat), np.linalg.inv(pmat), atol=1e-14)


class TestScrewMatrix:
    """Test Lie algebra conversions."""

    def test_twist_to_screw(self):
        Omega = np.array([[0.0, -0.5], [0.5, 0.0]])
        Xmat = screw_matrix(2, Twist([3.0, 4.0], Omega))

        expected = np.zeros((3, 3))
        expected[:2, :2] = Omega
        expected[:2, 2] = [3.0, 4.0]
        np.testing.assert_array_equal(Xmat, expected)

    def test_matrix_is_returned_unchanged(self):
        Xmat = np.zeros((3, 3))
        assert screw_matrix(2, Xmat) is Xmat

    def test_to_twist(self):
        X = to_twist(2, screw_matrix(2, Twist([3.0, 4.0], np.zeros((2, 2)))))
        assert isinstance(X, Twist)
        np.testing.assert_array_equal(X.translation, [3.0, 4.0])


class TestSubmanifoldComponents:
    """Test block access."""

    def test_matrix_blocks_are_views(self):
        """Writing through the blocks mutates the backing matrix."""
        pmat = np.eye(4)
        t, R = submanifold_components(3, pmat)
        t[:] = [1.0, 2.0, 3.0]
        R[0, 0] = -1.0

        np.testing.assert_array_equal(pmat[:3, 3], [1.0, 2.0, 3.0])
        assert pmat[0, 0] == -1.0
        assert np.shares_memory(t, pmat)
        assert np.shares_memory(R, pmat)

    def test_identity_components(self):
        t, R = submanifold_components(2, Identity(2))
        np.testing.assert_array_equal(t, np.zeros(2))
        np.testing.assert_array_equal(R, np.eye(2))

    def test_dimension_mismatch(self):
        with pytest.raises(ValueError):
            submanifold_components(3, np.eye(3))

        with pytest.raises(ValueError):
            submanifold_components(3, Pose(np.zeros(2), np.eye(2)))

    def test_unsupported_type(self):
        with pytest.raises(TypeError):
            submanifold_components(2, [[1.0, 0.0], [0.0, 1.0]])

    def test_copy_components_between_representations(self):
        pmat = affine_matrix(2, Pose([5.0, 6.0], planar_rotation(0.2)))
        p = Pose(np.zeros(2), np.eye(2))
        copy_components(2, p, pmat)

        np.testing.assert_array_equal(p.translation, [5.0, 6.0])
        np.testing.assert_array_equal(p.rotation, pmat[:2, :2])


class TestPadding:
    """Test homogeneous rows."""

    def test_pad_point(self):
        q = np.full((3, 3), 9.0)
        pad_point(2, q)
        np.testing.assert_array_equal(q[2], [0.0, 0.0, 1.0])
        assert q[0, 0] == 9.0

    def test_pad_vector(self):
        X = np.full((4, 4), 9.0)
        pad_vector(3, X)
        np.testing.assert_array_equal(X[3], np.zeros(4))

    def test_check_homogeneous_row(self):
        pmat = np.eye(4)
        assert check_homogeneous_row(3, pmat, 1) is None

        pmat[3, 2] = 1.0
        err = check_homogeneous_row(3, pmat, 1)
        assert err is not None
        np.testing.assert_array_equal(err.value, [0.0, 0.0, 1.0, 1.0])

        assert check_homogeneous_row(3, np.zeros((4, 4)), 0) is None
