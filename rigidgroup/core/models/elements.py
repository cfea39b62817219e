"""Structured representations of SE(n) points and tangent vectors.

A point can be stored either as a ``Pose`` (translation, rotation) pair or as
an (n+1) x (n+1) affine ``numpy`` matrix; a Lie algebra element either as a
``Twist`` pair or as a screw matrix. The pair types below are the structured
variant. Conversions live in :mod:`rigidgroup.core.groups.representation`.
"""

from dataclasses import dataclass
from typing import Tuple

import numpy as np


@dataclass(eq=False)
class PartitionedElement:
    """A (translation, rotation) pair of arrays.

    ``translation`` has shape (n,) and ``rotation`` has shape (n, n). The
    arrays are owned by the element and may be mutated in place by the
    ``*_into`` group operations.
    """

    translation: np.ndarray
    rotation: np.ndarray

    def __post_init__(self):
        """Convert components to float arrays and check their shapes."""
        self.translation = np.array(self.translation, dtype=float)
        self.rotation = np.array(self.rotation, dtype=float)

        n = self.translation.shape[0] if self.translation.ndim == 1 else -1
        if self.translation.ndim != 1:
            raise ValueError(f"translation must be a vector, got shape {self.translation.shape}")
        if self.rotation.shape != (n, n):
            raise ValueError(
                f"rotation must be {n}x{n} to match translation, got shape {self.rotation.shape}"
            )

    @property
    def n(self) -> int:
        return self.translation.shape[0]

    def components(self) -> Tuple[np.ndarray, np.ndarray]:
        """Return the (translation, rotation) arrays themselves, not copies."""
        return self.translation, self.rotation

    def copy(self):
        return type(self)(self.translation.copy(), self.rotation.copy())

    def allclose(self, other: "PartitionedElement", atol: float = 1e-10) -> bool:
        """Componentwise comparison with another element of the same kind."""
        return (
            self.translation.shape == other.translation.shape
            and np.allclose(self.translation, other.translation, atol=atol)
            and np.allclose(self.rotation, other.rotation, atol=atol)
        )

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(translation={self.translation.tolist()}, "
            f"rotation={self.rotation.tolist()})"
        )


class Pose(PartitionedElement):
    """Point of SE(n): translation t and rotation matrix R."""


class Twist(PartitionedElement):
    """Element of se(n): translation part b and skew-symmetric rotation part Omega."""


@dataclass(frozen=True)
class Identity:
    """The identity element of SE(n), without any storage."""

    n: int

    def __post_init__(self):
        if self.n < 1:
            raise ValueError(f"Dimension must be positive, got {self.n}")
