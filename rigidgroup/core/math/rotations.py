"""Special orthogonal group SO(n) and its action on translations."""

import logging
from typing import Optional

import numpy as np

from ..errors import ManifoldDomainError
from .linalg import SQRT_EPS, isapprox, matrix_exp, matrix_log, skew_part, skew_symmetric, unskew
from .translations import TranslationGroup

logger = logging.getLogger(__name__)


class SpecialOrthogonal:
    """The rotation group SO(n).

    Points are n x n orthogonal matrices with determinant +1. Tangent vectors
    are represented in the Lie algebra so(n), i.e. as skew-symmetric matrices,
    so the exponential map at p is ``p @ exp(X)``.

    Closed forms are used for n = 2 and n = 3; other dimensions use the
    general matrix exponential and logarithm.
    """

    def __init__(self, n: int, angle_tolerance: float = SQRT_EPS):
        if n < 1:
            raise ValueError(f"Dimension must be positive, got {n}")
        self.n = n
        self.angle_tolerance = angle_tolerance

    def __repr__(self) -> str:
        return f"SpecialOrthogonal({self.n})"

    def manifold_dimension(self) -> int:
        return self.n * (self.n - 1) // 2

    def identity_element(self) -> np.ndarray:
        return np.eye(self.n)

    def compose(self, p: np.ndarray, q: np.ndarray) -> np.ndarray:
        return p @ q

    def inv(self, p: np.ndarray) -> np.ndarray:
        return p.T.copy()

    def norm(self, X: np.ndarray) -> float:
        """Frobenius norm of a Lie algebra element.

        For n = 2, 3 the rotation angle is ``norm(X) / sqrt(2)``.
        """
        return float(np.linalg.norm(X))

    def lie_bracket(self, X: np.ndarray, Y: np.ndarray) -> np.ndarray:
        return X @ Y - Y @ X

    def exp_lie(self, X: np.ndarray) -> np.ndarray:
        """Group exponential so(n) -> SO(n).

        Args:
            X: Skew-symmetric n x n matrix

        Returns:
            Rotation matrix exp(X)
        """
        if X.shape != (self.n, self.n):
            raise ValueError(f"X must be {self.n}x{self.n} matrix, got shape {X.shape}")

        if self.n == 2:
            theta = X[1, 0]
            c, s = np.cos(theta), np.sin(theta)
            return np.array([[c, -s], [s, c]])

        if self.n == 3:
            theta = self.norm(X) / np.sqrt(2)
            if abs(theta) <= self.angle_tolerance:
                # Rodrigues coefficients, Taylor expanded
                a = 1 - theta**2 / 6
                b = 0.5 - theta**2 / 24
            else:
                a = np.sin(theta) / theta
                b = 2 * np.sin(theta / 2)**2 / theta**2
            return np.eye(3) + a * X + b * (X @ X)

        logger.debug(f"SO({self.n}) exponential via general matrix exponential")
        return matrix_exp(X)

    def log_lie(self, R: np.ndarray) -> np.ndarray:
        """Group logarithm SO(n) -> so(n).

        Args:
            R: Rotation matrix

        Returns:
            Skew-symmetric matrix X with exp(X) = R and rotation angle in [0, pi]
        """
        if R.shape != (self.n, self.n):
            raise ValueError(f"R must be {self.n}x{self.n} matrix, got shape {R.shape}")

        if self.n == 2:
            theta = np.arctan2(R[1, 0], R[0, 0])
            return np.array([[0.0, -theta], [theta, 0.0]])

        if self.n == 3:
            return self._log_so3(R)

        logger.debug(f"SO({self.n}) logarithm via general matrix logarithm")
        return skew_part(matrix_log(R))

    def rotation_angle(self, R: np.ndarray) -> float:
        """Rotation angle in [0, pi] of a 3 x 3 rotation matrix.

        Uses both the trace and the skew part, so the angle stays accurate
        near 0 and near pi where arccos of the trace alone does not.
        """
        sin_theta = np.linalg.norm(unskew(R - R.T)) / 2
        cos_theta = (np.trace(R) - 1) / 2
        return float(np.arctan2(sin_theta, cos_theta))

    def _log_so3(self, R: np.ndarray) -> np.ndarray:
        theta = self.rotation_angle(R)
        w = unskew(R - R.T)
        cos_theta = np.cos(theta)

        if 1 + cos_theta <= SQRT_EPS:
            # Near pi the skew part vanishes; recover the axis from the
            # symmetric part, sym(R) = cos(theta) I + (1 - cos(theta)) a a^T
            A = (0.5 * (R + R.T) - cos_theta * np.eye(3)) / (1 - cos_theta)
            k = int(np.argmax(np.diag(A)))
            axis = A[:, k] / np.sqrt(max(A[k, k], np.finfo(float).tiny))
            axis = axis / np.linalg.norm(axis)
            if np.dot(axis, w) < 0:
                axis = -axis
            return skew_symmetric(theta * axis)

        if abs(theta) <= self.angle_tolerance:
            return (0.5 + theta**2 / 12) * (R - R.T)
        # |w| = 2 sin(theta), so the axis is exactly unit length
        return skew_symmetric(theta * w / np.linalg.norm(w))

    def exp(self, p: np.ndarray, X: np.ndarray, t: float = 1.0) -> np.ndarray:
        """Exponential map at p for a Lie algebra tangent vector X."""
        return p @ self.exp_lie(t * X)

    def log(self, p: np.ndarray, q: np.ndarray) -> np.ndarray:
        """Logarithmic map at p, returned in the Lie algebra."""
        return self.log_lie(p.T @ q)

    def vee(self, X: np.ndarray) -> np.ndarray:
        """Coordinates of a skew-symmetric matrix.

        n = 2 gives ``[X[1, 0]]``, n = 3 the usual axis-angle vector. Other
        dimensions list the strictly lower triangle row by row.
        """
        if X.shape != (self.n, self.n):
            raise ValueError(f"X must be {self.n}x{self.n} matrix, got shape {X.shape}")

        if self.n == 3:
            return unskew(X)
        rows, cols = np.tril_indices(self.n, k=-1)
        return np.array(X[rows, cols], dtype=float)

    def hat(self, c: np.ndarray) -> np.ndarray:
        """Inverse of :meth:`vee`."""
        c = np.asarray(c, dtype=float)
        dim = self.manifold_dimension()
        if c.shape != (dim,):
            raise ValueError(f"Coordinates must have shape ({dim},), got {c.shape}")

        if self.n == 3:
            return skew_symmetric(c)
        X = np.zeros((self.n, self.n))
        rows, cols = np.tril_indices(self.n, k=-1)
        X[rows, cols] = c
        X[cols, rows] = -c
        return X

    def check_point(
        self,
        p: np.ndarray,
        atol: float = 0.0,
        rtol: Optional[float] = None
    ) -> Optional[ManifoldDomainError]:
        """Check that p is orthogonal with determinant +1."""
        p = np.asarray(p)
        if p.shape != (self.n, self.n):
            return ManifoldDomainError(
                p.shape,
                f"The point of {self} must have shape ({self.n}, {self.n}), got {p.shape}."
            )
        if not isapprox(p.T @ p, np.eye(self.n), atol=atol, rtol=rtol):
            return ManifoldDomainError(
                np.linalg.norm(p.T @ p - np.eye(self.n)),
                f"The point {p} is not orthogonal, i.e. p^T p != I."
            )
        if np.linalg.det(p) <= 0:
            return ManifoldDomainError(
                np.linalg.det(p),
                f"The determinant of {p} is not positive."
            )
        return None

    def check_vector(
        self,
        p: np.ndarray,
        X: np.ndarray,
        atol: float = 0.0,
        rtol: Optional[float] = None
    ) -> Optional[ManifoldDomainError]:
        """Check that X is skew-symmetric."""
        X = np.asarray(X)
        if X.shape != (self.n, self.n):
            return ManifoldDomainError(
                X.shape,
                f"The tangent vector of {self} must have shape ({self.n}, {self.n}), got {X.shape}."
            )
        if not isapprox(X, -X.T, atol=atol, rtol=rtol):
            return ManifoldDomainError(
                np.linalg.norm(X + X.T),
                f"The tangent vector {X} is not skew-symmetric."
            )
        return None


class RotationAction:
    """Left action of SO(n) on T(n) by rotating vectors."""

    def __init__(self, translations: TranslationGroup, rotations: SpecialOrthogonal):
        if translations.n != rotations.n:
            raise ValueError(
                f"Dimension mismatch: {translations} and {rotations}"
            )
        self.translations = translations
        self.rotations = rotations

    def __repr__(self) -> str:
        return f"RotationAction({self.translations}, {self.rotations})"

    def apply(self, R: np.ndarray, t: np.ndarray) -> np.ndarray:
        """Rotate t by R."""
        return R @ t

    def inverse_apply(self, R: np.ndarray, t: np.ndarray) -> np.ndarray:
        """Rotate t by the inverse of R."""
        return R.T @ t

    def apply_diff(self, R: np.ndarray, t: np.ndarray, X: np.ndarray) -> np.ndarray:
        """Differential of ``t -> R t`` at t, applied to X."""
        return R @ X
