"""Tests for linear algebra helpers."""

import numpy as np
import pytest

from rigidgroup.core.math.linalg import (
    isapprox,
    matrix_exp,
    matrix_log,
    skew_part,
    skew_symmetric,
    unskew,
)


class TestIsApprox:
    """Test norm-based approximate equality."""

    def test_exact_equality(self):
        """Identical arrays are equal with default tolerances."""
        x = np.array([0.0, 0.0, 1.0])
        assert isapprox(x, x.copy())

    def test_relative_default(self):
        """Default relative tolerance is sqrt(eps)."""
        x = np.array([0.0, 0.0, 1.0])
        assert isapprox(x, x + 1e-12)
        assert not isapprox(x, x + 1e-6)

    def test_zero_requires_exact_match_by_default(self):
        """Comparison against zero with atol=0 only passes for exact zeros."""
        zero = np.zeros(3)
        assert isapprox(zero, np.zeros(3))
        assert not isapprox(np.array([0.0, 1e-12, 0.0]), zero)

    def test_absolute_tolerance(self):
        """An absolute tolerance accepts small deviations from zero."""
        zero = np.zeros(3)
        assert isapprox(np.array([0.0, 1e-12, 0.0]), zero, atol=1e-10)

    def test_shape_mismatch(self):
        """Arrays of different shapes are never equal."""
        assert not isapprox(np.zeros(3), np.zeros(4))


class TestSkew:
    """Test skew-symmetric helpers."""

    def test_skew_symmetric(self):
        """Test skew-symmetric matrix construction."""
        v = np.array([1, 2, 3])
        S = skew_symmetric(v)

        expected = np.array([[0, -3, 2], [3, 0, -1], [-2, 1, 0]])

        np.testing.assert_allclose(S, expected)
        np.testing.assert_allclose(S, -S.T)

    def test_unskew_inverts_skew(self):
        """unskew recovers the vector."""
        v = np.array([0.3, -1.2, 2.5])
        np.testing.assert_allclose(unskew(skew_symmetric(v)), v)

    def test_skew_matches_cross_product(self):
        """skew(a) b equals a x b."""
        a = np.array([1.0, -2.0, 0.5])
        b = np.array([0.2, 0.4, -3.0])
        np.testing.assert_allclose(skew_symmetric(a) @ b, np.cross(a, b))

    def test_skew_part(self):
        """skew_part keeps only the antisymmetric component."""
        A = np.array([[1.0, 2.0], [4.0, 3.0]])
        np.testing.assert_allclose(skew_part(A), [[0.0, -1.0], [1.0, 0.0]])

    def test_invalid_shapes(self):
        """Test error handling for invalid input shapes."""
        with pytest.raises(ValueError):
            skew_symmetric(np.array([1.0, 2.0]))

        with pytest.raises(ValueError):
            unskew(np.eye(2))


class TestMatrixFunctions:
    """Test general matrix exponential and logarithm."""

    def test_exp_of_zero(self):
        """exp(0) = I."""
        np.testing.assert_allclose(matrix_exp(np.zeros((4, 4))), np.eye(4), atol=1e-15)

    def test_exp_of_planar_rotation(self):
        """Exponential of a 2x2 generator is a rotation."""
        theta = 0.7
        E = matrix_exp(np.array([[0.0, -theta], [theta, 0.0]]))
        expected = np.array([
            [np.cos(theta), -np.sin(theta)],
            [np.sin(theta), np.cos(theta)],
        ])
        np.testing.assert_allclose(E, expected, atol=1e-12)

    def test_log_is_real(self):
        """The logarithm of a rotation by 90 degrees is real."""
        R = np.array([[0.0, -1.0], [1.0, 0.0]])
        L = matrix_log(R)

        assert not np.iscomplexobj(L)
        np.testing.assert_allclose(L, [[0.0, -np.pi / 2], [np.pi / 2, 0.0]], atol=1e-10)

    def test_round_trip(self):
        """log(exp(A)) = A for small A."""
        rng = np.random.default_rng(3)
        A = 0.2 * rng.standard_normal((4, 4))
        np.testing.assert_allclose(matrix_log(matrix_exp(A)), A, atol=1e-10)
