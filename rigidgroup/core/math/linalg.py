"""Dense linear algebra helpers shared by the group implementations."""

import logging
from typing import Optional

import numpy as np
from scipy.linalg import expm, logm

logger = logging.getLogger(__name__)

SQRT_EPS = float(np.sqrt(np.finfo(float).eps))


def isapprox(
    x: np.ndarray,
    y: np.ndarray,
    atol: float = 0.0,
    rtol: Optional[float] = None
) -> bool:
    """Norm-based approximate equality.

    Two arrays are equal when ``||x - y|| <= max(atol, rtol * max(||x||, ||y||))``.

    Args:
        x: First array
        y: Second array
        atol: Absolute tolerance
        rtol: Relative tolerance; defaults to sqrt(eps) when atol is zero, else 0

    Returns:
        True if the arrays are approximately equal
    """
    if rtol is None:
        rtol = SQRT_EPS if atol == 0 else 0.0

    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)
    if x.shape != y.shape:
        return False

    diff = np.linalg.norm(x - y)
    scale = max(np.linalg.norm(x), np.linalg.norm(y))
    return bool(diff <= max(atol, rtol * scale))


def skew_symmetric(v: np.ndarray) -> np.ndarray:
    """Create skew-symmetric matrix from 3D vector."""
    v = np.asarray(v, dtype=float)
    if v.shape != (3,):
        raise ValueError(f"v must be 3-element vector, got shape {v.shape}")

    return np.array([
        [0.0, -v[2], v[1]],
        [v[2], 0.0, -v[0]],
        [-v[1], v[0], 0.0]
    ])


def unskew(S: np.ndarray) -> np.ndarray:
    """Extract 3D vector from skew-symmetric matrix."""
    if S.shape != (3, 3):
        raise ValueError(f"S must be 3x3 matrix, got shape {S.shape}")

    return np.array([S[2, 1], S[0, 2], S[1, 0]])


def skew_part(A: np.ndarray) -> np.ndarray:
    """Project a square matrix onto the skew-symmetric matrices."""
    return 0.5 * (A - A.T)


def matrix_exp(A: np.ndarray) -> np.ndarray:
    """General matrix exponential.

    Args:
        A: Square matrix

    Returns:
        exp(A) computed with scipy's Pade approximation
    """
    return expm(np.asarray(A, dtype=float))


def matrix_log(A: np.ndarray) -> np.ndarray:
    """General matrix logarithm, real part.

    scipy may return a complex principal logarithm with negligible imaginary
    parts for real matrices; only the real part is kept.

    Args:
        A: Square matrix with no eigenvalues on the closed negative real axis

    Returns:
        Real part of log(A)
    """
    L = logm(np.asarray(A, dtype=float))
    if np.iscomplexobj(L):
        imag = np.max(np.abs(L.imag)) if L.size else 0.0
        if imag > SQRT_EPS:
            logger.debug(f"Discarding imaginary part of matrix logarithm (max {imag:.3e})")
        L = L.real
    return np.array(L, dtype=float)
