"""Tests for point and tangent vector validation."""

import numpy as np
import pytest

from rigidgroup.core.errors import CompositeManifoldError, ManifoldDomainError, collect_errors
from rigidgroup.core.groups.special_euclidean import SpecialEuclidean
from rigidgroup.core.models.elements import Pose, Twist
from rigidgroup.core.models.settings import NumericalSettings


class TestCollectErrors:
    """Test error aggregation."""

    def test_no_errors(self):
        assert collect_errors([None, None]) is None
        assert collect_errors([]) is None

    def test_single_error_passes_through(self):
        err = ManifoldDomainError(1.0, "bad")
        assert collect_errors([None, err, None]) is err

    def test_several_errors_are_combined(self):
        e1 = ManifoldDomainError(1, "first")
        e2 = ManifoldDomainError(2, "second")
        err = collect_errors([e1, None, e2])

        assert isinstance(err, CompositeManifoldError)
        assert len(err) == 2
        assert err.errors == [e1, e2]
        assert "first" in str(err) and "second" in str(err)


class TestCheckPoint:
    """Test membership checks for points."""

    def test_valid_points(self):
        G = SpecialEuclidean(3)
        p = G.exp_lie(G.hat(np.array([1.0, 2.0, 3.0, 0.4, -0.5, 0.6])))

        assert G.check_point(p) is None
        assert G.check_point(G.affine_matrix(p)) is None
        assert G.check_point(G.identity) is None
        assert G.is_point(p)

    def test_bad_last_row_only(self):
        """A single violation is reported as itself."""
        G = SpecialEuclidean(3)
        pmat = np.eye(4)
        pmat[3, 2] = 1.0

        err = G.check_point(pmat)
        assert isinstance(err, ManifoldDomainError)
        assert not isinstance(err, CompositeManifoldError)
        assert "is not homogeneous, i.e. of form [0,..,0,1]" in err.message
        np.testing.assert_array_equal(err.value, [0.0, 0.0, 1.0, 1.0])

    def test_bad_last_row_and_rotation(self):
        """Independent violations are all reported."""
        G = SpecialEuclidean(3)
        pmat = np.eye(4)
        pmat[3, 2] = 1.0
        pmat[:3, :3] = 2 * np.eye(3)

        err = G.check_point(pmat)
        assert isinstance(err, CompositeManifoldError)
        assert len(err) == 2
        assert "not orthogonal" in err.errors[1].message

    def test_reflection(self):
        G = SpecialEuclidean(2)
        err = G.check_point(Pose([0.0, 0.0], [[1.0, 0.0], [0.0, -1.0]]))

        assert err is not None
        assert "determinant" in err.message

    def test_non_finite_translation(self):
        G = SpecialEuclidean(2)
        err = G.check_point(Pose([np.nan, 0.0], np.eye(2)))

        assert err is not None
        assert "finite" in err.message

    def test_wrong_size(self):
        G = SpecialEuclidean(3)

        assert G.check_point(np.eye(3)) is not None
        assert G.check_point(Pose(np.zeros(2), np.eye(2))) is not None
        assert G.check_point([[1.0]]) is not None

    def test_raise_error(self):
        G = SpecialEuclidean(2)
        pmat = np.eye(3)
        pmat[2, 0] = 0.5

        assert not G.is_point(pmat)
        with pytest.raises(ManifoldDomainError):
            G.is_point(pmat, raise_error=True)
        with pytest.raises(ValueError):
            G.is_point(pmat, raise_error=True)

    def test_tolerances(self):
        """Small perturbations pass once the tolerance admits them."""
        G = SpecialEuclidean(3)
        pmat = np.eye(4)
        pmat[0, 1] = 1e-6

        assert G.check_point(pmat) is not None
        assert G.check_point(pmat, atol=1e-5) is None
        assert SpecialEuclidean(3, NumericalSettings(check_atol=1e-5)).check_point(pmat) is None

    def test_relative_tolerance(self):
        G = SpecialEuclidean(2)
        pmat = np.eye(3)
        pmat[2, 0] = 1e-6

        assert G.check_point(pmat) is not None
        assert G.check_point(pmat, rtol=1e-5) is None


class TestCheckVector:
    """Test membership checks for tangent vectors."""

    def test_valid_vectors(self):
        G = SpecialEuclidean(3)
        X = G.hat(np.array([1.0, 2.0, 3.0, 0.4, -0.5, 0.6]))

        assert G.check_vector(G.identity, X) is None
        assert G.check_vector(G.identity, G.screw_matrix(X)) is None
        assert G.is_vector(G.identity, X)

    def test_bad_last_row_only(self):
        G = SpecialEuclidean(2)
        Xmat = np.zeros((3, 3))
        Xmat[2, 2] = 1.0

        err = G.check_vector(G.identity, Xmat)
        assert isinstance(err, ManifoldDomainError)
        assert not isinstance(err, CompositeManifoldError)
        assert "[0,..,0,0]" in err.message

    def test_bad_last_row_and_rotation(self):
        G = SpecialEuclidean(2)
        Xmat = np.zeros((3, 3))
        Xmat[2, 2] = 1.0
        Xmat[0, 0] = 1.0

        err = G.check_vector(G.identity, Xmat)
        assert isinstance(err, CompositeManifoldError)
        assert len(err) == 2
        assert "skew-symmetric" in err.errors[1].message

    def test_non_skew_twist(self):
        G = SpecialEuclidean(3)
        err = G.check_vector(G.identity, Twist(np.zeros(3), np.eye(3)))

        assert err is not None
        with pytest.raises(ManifoldDomainError):
            G.is_vector(G.identity, Twist(np.zeros(3), np.eye(3)), raise_error=True)

    def test_wrong_size(self):
        G = SpecialEuclidean(3)
        assert G.check_vector(G.identity, Twist(np.zeros(2), np.zeros((2, 2)))) is not None
