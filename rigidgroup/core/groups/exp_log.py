"""Group exponential and logarithm of SE(n).

Closed forms are used for n = 2 and n = 3, the general matrix exponential and
logarithm of the screw/affine matrix for every other n. Each closed form
branches on the rotation angle: at or below ``atol`` the coefficients come
from their Taylor series, which avoids dividing by a vanishing angle. The
same threshold is used in both directions so exp and log stay inverse to each
other across the switch.

Nothing here validates its input; a non-orthogonal rotation block gives a
meaningless result, not an exception.
"""

import logging
from enum import Enum
from typing import Optional, Tuple

import numpy as np

from ..math.linalg import matrix_exp, matrix_log
from ..math.rotations import SpecialOrthogonal
from ..math.translations import TranslationGroup
from ..models.elements import Pose, Twist
from .representation import (
    Element,
    affine_matrix,
    copy_components,
    pad_point,
    pad_vector,
    screw_matrix,
    submanifold_components,
)

logger = logging.getLogger(__name__)


class DimensionVariant(Enum):
    """Which exp/log implementation serves a given dimension."""
    GENERIC = "generic"
    DIM2 = "dim2"
    DIM3 = "dim3"

    @classmethod
    def for_dimension(cls, n: int) -> "DimensionVariant":
        if n == 2:
            return cls.DIM2
        if n == 3:
            return cls.DIM3
        return cls.GENERIC


# --- coefficients -----------------------------------------------------------


def se2_exp_coefficients(theta: float, atol: float) -> Tuple[float, float]:
    """Coefficients of U(theta) = alpha I + beta J for the SE(2) exponential.

    Args:
        theta: Rotation angle
        atol: Angles with |theta| <= atol use the series

    Returns:
        (alpha, beta) with alpha = sin(theta)/theta, beta = (1 - cos(theta))/theta
    """
    if abs(theta) <= atol:
        return 1 - theta**2 / 6, theta / 2
    # 1 - cos(theta) = 2 sin^2(theta / 2) without cancellation
    return np.sin(theta) / theta, 2 * np.sin(theta / 2)**2 / theta


def se3_exp_coefficients(theta: float, atol: float) -> Tuple[float, float, float]:
    """Coefficients of the SO(3) Rodrigues formula and the left Jacobian.

    Args:
        theta: Rotation angle
        atol: Angles with |theta| <= atol use the series

    Returns:
        (alpha, beta, gamma) with
        alpha = sin(theta)/theta,
        beta = (1 - cos(theta))/theta^2,
        gamma = (1 - alpha)/theta^2
    """
    theta2 = theta**2
    if abs(theta) <= atol:
        return 1 - theta2 / 6, 0.5 - theta2 / 24, 1 / 6 - theta2 / 120
    alpha = np.sin(theta) / theta
    beta = 2 * np.sin(theta / 2)**2 / theta2
    gamma = (1 - alpha) / theta2
    return alpha, beta, gamma


def se2_log_coefficients(theta: float, atol: float) -> Tuple[float, float]:
    """Coefficients of U(theta)^-1 for the SE(2) logarithm.

    Returns:
        (alpha, beta) with beta = theta/2 and alpha = beta cot(beta)
    """
    beta = theta / 2
    if abs(theta) <= atol:
        return 1 - beta**2 / 3, beta
    return beta / np.tan(beta), beta


def se3_log_coefficients(theta: float, atol: float) -> Tuple[float, float]:
    """Coefficients of the SO(3) logarithm and the inverse left Jacobian.

    Returns:
        (alpha, beta) with alpha = theta / (2 sin(theta)) and
        beta = 1/theta^2 - (1 + cos(theta)) / (2 theta sin(theta))
    """
    theta2 = theta**2
    if abs(theta) <= atol:
        return 0.5 + theta2 / 12, 1 / 12 + theta2 / 720
    alpha = theta / np.sin(theta) / 2
    # (1 + cos(theta)) / sin(theta) = cot(theta / 2), finite up to theta = pi
    beta = 1 / theta2 - 1 / (2 * theta * np.tan(theta / 2))
    return alpha, beta


# --- group exponential ------------------------------------------------------


def _write_point(n: int, q: Element, t: np.ndarray, R: np.ndarray) -> Element:
    tq, Rq = submanifold_components(n, q)
    np.copyto(tq, t)
    np.copyto(Rq, R)
    if isinstance(q, np.ndarray):
        pad_point(n, q)
    return q


def _write_vector(n: int, X: Element, b: np.ndarray, Omega: np.ndarray) -> Element:
    bX, OmegaX = submanifold_components(n, X)
    np.copyto(bX, b)
    np.copyto(OmegaX, Omega)
    if isinstance(X, np.ndarray):
        pad_vector(n, X)
    return X


def _exp_lie_generic(n: int, rotations: SpecialOrthogonal, q: Element, X: Element, atol: float) -> Element:
    logger.debug(f"SE({n}) exponential via general matrix exponential")
    qmat = matrix_exp(screw_matrix(n, X))
    copy_components(n, q, qmat)
    if isinstance(q, np.ndarray):
        pad_point(n, q)
    return q


def _exp_lie_dim2(n: int, rotations: SpecialOrthogonal, q: Element, X: Element, atol: float) -> Element:
    b, Omega = submanifold_components(n, X)
    theta = rotations.vee(Omega)[0]
    alpha, beta = se2_exp_coefficients(theta, atol)

    c, s = np.cos(theta), np.sin(theta)
    R = np.array([[c, -s], [s, c]])
    t = np.array([
        alpha * b[0] - beta * b[1],
        alpha * b[1] + beta * b[0],
    ])
    return _write_point(n, q, t, R)


def _exp_lie_dim3(n: int, rotations: SpecialOrthogonal, q: Element, X: Element, atol: float) -> Element:
    b, Omega = submanifold_components(n, X)
    theta = rotations.norm(Omega) / np.sqrt(2)
    alpha, beta, gamma = se3_exp_coefficients(theta, atol)

    I = np.eye(3)
    Omega2 = Omega @ Omega
    J_left = I + beta * Omega + gamma * Omega2
    R = I + alpha * Omega + beta * Omega2
    return _write_point(n, q, J_left @ b, R)


_EXP_LIE = {
    DimensionVariant.GENERIC: _exp_lie_generic,
    DimensionVariant.DIM2: _exp_lie_dim2,
    DimensionVariant.DIM3: _exp_lie_dim3,
}


def exp_lie_into(
    n: int,
    rotations: SpecialOrthogonal,
    q: Element,
    X: Element,
    atol: float,
    variant: Optional[DimensionVariant] = None
) -> Element:
    """Group exponential of X = (b, Omega), written into q.

    Args:
        n: Dimension of the group
        rotations: SO(n) collaborator
        q: Output buffer, affine matrix or Pose
        X: Screw matrix or Twist
        atol: Series switch threshold for the rotation angle
        variant: Override the implementation chosen from n

    Returns:
        q
    """
    variant = variant or DimensionVariant.for_dimension(n)
    return _EXP_LIE[variant](n, rotations, q, X, atol)


def exp_lie(
    n: int,
    rotations: SpecialOrthogonal,
    X: Element,
    atol: float,
    variant: Optional[DimensionVariant] = None
) -> Element:
    """Group exponential; a screw matrix maps to an affine matrix, a Twist to a Pose."""
    if isinstance(X, np.ndarray):
        q = np.empty((n + 1, n + 1))
    else:
        q = Pose(np.empty(n), np.empty((n, n)))
    return exp_lie_into(n, rotations, q, X, atol, variant)


# --- group logarithm --------------------------------------------------------


def _log_lie_generic(n: int, rotations: SpecialOrthogonal, X: Element, q: Element, atol: float) -> Element:
    logger.debug(f"SE({n}) logarithm via general matrix logarithm")
    Xmat = matrix_log(affine_matrix(n, q))
    # numerical leakage into the homogeneous row is discarded
    pad_vector(n, Xmat)
    copy_components(n, X, Xmat)
    if isinstance(X, np.ndarray):
        pad_vector(n, X)
    return X


def _log_lie_dim2(n: int, rotations: SpecialOrthogonal, X: Element, q: Element, atol: float) -> Element:
    t, R = submanifold_components(n, q)
    Omega = rotations.log_lie(R)
    theta = Omega[1, 0]
    alpha, beta = se2_log_coefficients(theta, atol)

    b = np.array([
        alpha * t[0] + beta * t[1],
        alpha * t[1] - beta * t[0],
    ])
    return _write_vector(n, X, b, Omega)


def _log_lie_dim3(n: int, rotations: SpecialOrthogonal, X: Element, q: Element, atol: float) -> Element:
    t, R = submanifold_components(n, q)
    Omega = rotations.log_lie(R)
    theta = rotations.norm(Omega) / np.sqrt(2)
    _, beta = se3_log_coefficients(theta, atol)

    J_left_inv = np.eye(3) - Omega / 2 + beta * (Omega @ Omega)
    return _write_vector(n, X, J_left_inv @ t, Omega)


_LOG_LIE = {
    DimensionVariant.GENERIC: _log_lie_generic,
    DimensionVariant.DIM2: _log_lie_dim2,
    DimensionVariant.DIM3: _log_lie_dim3,
}


def log_lie_into(
    n: int,
    rotations: SpecialOrthogonal,
    X: Element,
    q: Element,
    atol: float,
    variant: Optional[DimensionVariant] = None
) -> Element:
    """Group logarithm of q = (t, R), written into X.

    Args:
        n: Dimension of the group
        rotations: SO(n) collaborator
        X: Output buffer, screw matrix or Twist
        q: Affine matrix or Pose
        atol: Series switch threshold for the rotation angle
        variant: Override the implementation chosen from n

    Returns:
        X
    """
    variant = variant or DimensionVariant.for_dimension(n)
    return _LOG_LIE[variant](n, rotations, X, q, atol)


def log_lie(
    n: int,
    rotations: SpecialOrthogonal,
    q: Element,
    atol: float,
    variant: Optional[DimensionVariant] = None
) -> Element:
    """Group logarithm; an affine matrix maps to a screw matrix, a Pose to a Twist."""
    if isinstance(q, np.ndarray):
        X = np.empty((n + 1, n + 1))
    else:
        X = Twist(np.empty(n), np.empty((n, n)))
    return log_lie_into(n, rotations, X, q, atol, variant)


# --- Riemannian exp/log on T(n) x SO(n) -------------------------------------


def exp_into(
    n: int,
    translations: TranslationGroup,
    rotations: SpecialOrthogonal,
    q: Element,
    p: Element,
    X: Element,
    t: float = 1.0
) -> Element:
    """Componentwise exponential map at p, written into q."""
    tp, Rp = submanifold_components(n, p)
    bX, OmegaX = submanifold_components(n, X)
    return _write_point(
        n,
        q,
        translations.exp(tp, bX, t),
        rotations.exp(Rp, OmegaX, t),
    )


def log_into(
    n: int,
    translations: TranslationGroup,
    rotations: SpecialOrthogonal,
    X: Element,
    p: Element,
    q: Element
) -> Element:
    """Componentwise logarithmic map at p, written into X."""
    tp, Rp = submanifold_components(n, p)
    tq, Rq = submanifold_components(n, q)
    return _write_vector(
        n,
        X,
        translations.log(tp, tq),
        rotations.log(Rp, Rq),
    )
