"""Isometric, homomorphic embedding of SE(n) into GL(n+1)."""

from typing import Union

import numpy as np

from ..models.elements import Identity, Pose, Twist
from .representation import (
    Element,
    affine_matrix,
    copy_components,
    pad_point,
    pad_vector,
    submanifold_components,
)


class SpecialEuclideanInGeneralLinear:
    """SE(n) embedded in GL(n+1) and se(n) embedded in gl(n+1).

    Points embed as their affine matrix. Tangent vectors do *not* embed as
    their screw matrix: the translation part is rotated by the inverse of the
    point's rotation, which makes the Lie algebra embedding a homomorphism
    compatible with the right trivialization of GL(n+1).
    """

    def __init__(self, n: int):
        if n < 1:
            raise ValueError(f"Dimension must be positive, got {n}")
        self.n = n

    def __repr__(self) -> str:
        return f"SpecialEuclideanInGeneralLinear({self.n})"

    def embed_point(self, p: Union[Element, Identity]) -> np.ndarray:
        """Affine matrix of p, as a new array."""
        return np.array(affine_matrix(self.n, p), dtype=float)

    def embed_point_into(self, q: np.ndarray, p: Union[Element, Identity]) -> np.ndarray:
        np.copyto(q, affine_matrix(self.n, p))
        return q

    def embed_tangent(self, p: Union[Element, Identity], X: Element) -> np.ndarray:
        """Embed a tangent vector X at p.

        Args:
            p: Point of SE(n), any representation
            X: Lie algebra element (b, Omega), Twist or screw matrix

        Returns:
            (n+1) x (n+1) matrix with blocks Omega and R^T b and a zero last row
        """
        n = self.n
        _, R = submanifold_components(n, p)
        b, Omega = submanifold_components(n, X)
        Y = np.empty((n + 1, n + 1))
        Y[:n, :n] = Omega
        Y[:n, n] = R.T @ b
        return pad_vector(n, Y)

    def embed_tangent_into(self, Y: np.ndarray, p: Union[Element, Identity], X: Element) -> np.ndarray:
        np.copyto(Y, self.embed_tangent(p, X))
        return Y

    def project_point(self, q: np.ndarray) -> Pose:
        """Extract (t, R) from a GL(n+1) matrix assumed to lie in the image of SE(n)."""
        t, R = submanifold_components(self.n, q)
        return Pose(t.copy(), R.copy())

    def project_point_into(self, p: Element, q: np.ndarray) -> Element:
        copy_components(self.n, p, q)
        if isinstance(p, np.ndarray):
            pad_point(self.n, p)
        return p

    def project_tangent(self, p: Union[Element, Identity], Y: np.ndarray) -> Twist:
        """Undo :meth:`embed_tangent`: the translation block is rotated back by R."""
        n = self.n
        _, R = submanifold_components(n, p)
        nY, hY = submanifold_components(n, Y)
        return Twist(R @ nY, hY.copy())

    def project_tangent_into(self, X: Element, p: Union[Element, Identity], Y: np.ndarray) -> Element:
        copy_components(self.n, X, self.project_tangent(p, Y))
        if isinstance(X, np.ndarray):
            pad_vector(self.n, X)
        return X
