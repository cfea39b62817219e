"""Conversions between structured pairs and homogeneous matrices.

An SE(n) point (t, R) corresponds to the affine matrix ``[[R, t], [0, 1]]``
and an se(n) element (b, Omega) to the screw matrix ``[[Omega, b], [0, 0]]``.

``submanifold_components`` on a matrix returns *views*: writing into the
returned translation or rotation block writes into the matrix itself. The
in-place group operations rely on this.
"""

from typing import Optional, Tuple, Union

import numpy as np

from ..errors import ManifoldDomainError
from ..math.linalg import isapprox
from ..models.elements import Identity, PartitionedElement, Pose, Twist

Element = Union[np.ndarray, PartitionedElement]


def check_shape(n: int, p: np.ndarray) -> None:
    """Raise if a matrix is not (n+1) x (n+1)."""
    if p.shape != (n + 1, n + 1):
        raise ValueError(f"Expected {n + 1}x{n + 1} matrix, got shape {p.shape}")


def submanifold_components(n: int, p: Element) -> Tuple[np.ndarray, np.ndarray]:
    """Split an element into its (translation, rotation) blocks.

    Args:
        n: Dimension of the group
        p: Affine/screw matrix, Pose, Twist or Identity

    Returns:
        Tuple (t, R). For matrices these are views into ``p``; for pairs they
        are the pair's own arrays. Identity yields fresh arrays.
    """
    if isinstance(p, np.ndarray):
        check_shape(n, p)
        return p[:n, n], p[:n, :n]

    if isinstance(p, PartitionedElement):
        if p.n != n:
            raise ValueError(f"Expected element of dimension {n}, got {p.n}")
        return p.components()

    if isinstance(p, Identity):
        return np.zeros(n), np.eye(n)

    raise TypeError(f"Unsupported element type {type(p).__name__}")


def pad_point(n: int, q: np.ndarray) -> np.ndarray:
    """Write the homogeneous row ``[0, ..., 0, 1]`` into an affine matrix."""
    q[n, :n] = 0
    q[n, n] = 1
    return q


def pad_vector(n: int, X: np.ndarray) -> np.ndarray:
    """Zero the last row of a screw matrix."""
    X[n, :] = 0
    return X


def identity_matrix(n: int) -> np.ndarray:
    return np.eye(n + 1)


def affine_matrix(n: int, p: Union[Element, Identity]) -> np.ndarray:
    """Represent a point of SE(n) as an affine matrix.

    A matrix is returned unchanged (the same object), so call sites can
    convert unconditionally. The identity element goes straight to
    ``numpy.eye(n + 1)``.
    """
    if isinstance(p, np.ndarray):
        return p
    if isinstance(p, Identity):
        if p.n != n:
            raise ValueError(f"Expected identity of dimension {n}, got {p.n}")
        return identity_matrix(n)

    t, R = submanifold_components(n, p)
    pmat = np.empty((n + 1, n + 1))
    pmat[:n, n] = t
    pmat[:n, :n] = R
    return pad_point(n, pmat)


def inverse_affine_matrix(n: int, p: Union[Element, Identity]) -> np.ndarray:
    """Affine matrix of the inverse point, ``[[R^T, -R^T t], [0, 1]]``."""
    t, R = submanifold_components(n, p)
    qmat = np.empty((n + 1, n + 1))
    qmat[:n, :n] = R.T
    qmat[:n, n] = -(R.T @ t)
    return pad_point(n, qmat)


def screw_matrix(n: int, X: Element) -> np.ndarray:
    """Represent a Lie algebra element of se(n) as a screw matrix.

    This embeds se(n) into gl(n+1) but is not a homomorphic embedding; see
    :class:`rigidgroup.core.groups.embedding.SpecialEuclideanInGeneralLinear`.
    """
    if isinstance(X, np.ndarray):
        return X

    b, Omega = submanifold_components(n, X)
    Xmat = np.empty((n + 1, n + 1))
    Xmat[:n, n] = b
    Xmat[:n, :n] = Omega
    return pad_vector(n, Xmat)


def to_pose(n: int, p: Union[Element, Identity]) -> Pose:
    """Copy a point into a structured Pose."""
    t, R = submanifold_components(n, p)
    return Pose(t.copy(), R.copy())


def to_twist(n: int, X: Element) -> Twist:
    """Copy a Lie algebra element into a structured Twist."""
    b, Omega = submanifold_components(n, X)
    return Twist(b.copy(), Omega.copy())


def allocate_like(n: int, p: Element) -> Element:
    """Uninitialized buffer with the same representation as ``p``."""
    if isinstance(p, np.ndarray):
        return np.empty((n + 1, n + 1))
    if isinstance(p, Twist):
        return Twist(np.empty(n), np.empty((n, n)))
    return Pose(np.empty(n), np.empty((n, n)))


def copy_components(n: int, dst: Element, src: Element) -> Element:
    """Copy the translation and rotation blocks of ``src`` into ``dst``."""
    for d, s in zip(submanifold_components(n, dst), submanifold_components(n, src)):
        np.copyto(d, s)
    return dst


def check_homogeneous_row(
    n: int,
    p: np.ndarray,
    last: float,
    atol: float = 0.0,
    rtol: Optional[float] = None
) -> Optional[ManifoldDomainError]:
    """Check the last row of a matrix against ``[0, ..., 0, last]``.

    Args:
        n: Dimension of the group
        p: (n+1) x (n+1) matrix
        last: 1 for affine matrices, 0 for screw matrices
        atol: Absolute tolerance
        rtol: Relative tolerance

    Returns:
        None if the row matches, otherwise the violation
    """
    expected = np.zeros(n + 1)
    expected[n] = last
    row = p[n, :]
    if isapprox(row, expected, atol=atol, rtol=rtol):
        return None

    form = "[0,..,0,1]" if last else "[0,..,0,0]"
    return ManifoldDomainError(
        row.copy(),
        f"The last row {row.tolist()} is not homogeneous, i.e. of form {form}."
    )
