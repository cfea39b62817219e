"""Translation group T(n): vectors of R^n under addition."""

from typing import Optional

import numpy as np

from ..errors import ManifoldDomainError


class TranslationGroup:
    """The translation group T(n).

    Points and tangent vectors are both plain vectors of length n. The group
    operation is addition, so the exponential and logarithm are the identity.
    """

    def __init__(self, n: int):
        if n < 1:
            raise ValueError(f"Dimension must be positive, got {n}")
        self.n = n

    def __repr__(self) -> str:
        return f"TranslationGroup({self.n})"

    def manifold_dimension(self) -> int:
        return self.n

    def identity_element(self) -> np.ndarray:
        return np.zeros(self.n)

    def compose(self, p: np.ndarray, q: np.ndarray) -> np.ndarray:
        return p + q

    def inv(self, p: np.ndarray) -> np.ndarray:
        return -p

    def exp_lie(self, X: np.ndarray) -> np.ndarray:
        return np.array(X, dtype=float)

    def log_lie(self, p: np.ndarray) -> np.ndarray:
        return np.array(p, dtype=float)

    def exp(self, p: np.ndarray, X: np.ndarray, t: float = 1.0) -> np.ndarray:
        """Exponential map at p: p + t X."""
        return p + t * X

    def log(self, p: np.ndarray, q: np.ndarray) -> np.ndarray:
        """Logarithmic map at p: q - p."""
        return q - p

    def vee(self, X: np.ndarray) -> np.ndarray:
        return np.array(X, dtype=float)

    def hat(self, c: np.ndarray) -> np.ndarray:
        c = np.asarray(c, dtype=float)
        if c.shape != (self.n,):
            raise ValueError(f"Coordinates must have shape ({self.n},), got {c.shape}")
        return c.copy()

    def check_point(self, p: np.ndarray, **kwargs) -> Optional[ManifoldDomainError]:
        """Check that p is a finite real vector of length n."""
        return self._check_finite_vector(p, "point")

    def check_vector(self, p: np.ndarray, X: np.ndarray, **kwargs) -> Optional[ManifoldDomainError]:
        """Check that X is a finite real vector of length n."""
        return self._check_finite_vector(X, "tangent vector")

    def _check_finite_vector(self, v: np.ndarray, what: str) -> Optional[ManifoldDomainError]:
        v = np.asarray(v)
        if v.shape != (self.n,):
            return ManifoldDomainError(
                v.shape,
                f"The {what} of {self} must have shape ({self.n},), got {v.shape}."
            )
        if np.iscomplexobj(v) or not np.all(np.isfinite(v)):
            return ManifoldDomainError(
                v,
                f"The {what} {v} of {self} is not a finite real vector."
            )
        return None
