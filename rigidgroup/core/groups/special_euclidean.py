"""The special Euclidean group SE(n) = T(n) x| SO(n)."""

import logging
from typing import Optional, Union

import numpy as np

from ..errors import ManifoldDomainError, collect_errors
from ..math.rotations import RotationAction, SpecialOrthogonal
from ..math.translations import TranslationGroup
from ..models.elements import Identity, PartitionedElement, Pose, Twist
from ..models.settings import NumericalSettings
from . import algebra, exp_log
from .representation import (
    Element,
    affine_matrix,
    allocate_like,
    check_homogeneous_row,
    inverse_affine_matrix,
    screw_matrix,
    submanifold_components,
    to_pose,
    to_twist,
)

Point = Union[Element, Identity]


class SpecialEuclidean:
    """Special Euclidean group SE(n), the group of rigid motions of R^n.

    SE(n) is the semidirect product of the translation group T(n) and the
    rotation group SO(n), where SO(n) acts on T(n) by rotating vectors.

    Points are either ``Pose(t, R)`` pairs or (n+1) x (n+1) affine matrices
    ``[[R, t], [0, 1]]``. Lie algebra elements are either ``Twist(b, Omega)``
    pairs or screw matrices ``[[Omega, b], [0, 0]]``. Operations return the
    representation they were given. Arithmetic never validates its input;
    use :meth:`check_point` / :meth:`check_vector` for that.

    Args:
        n: Dimension of the space being moved
        settings: Numerical tolerances
    """

    def __init__(self, n: int, settings: Optional[NumericalSettings] = None):
        if n < 1:
            raise ValueError(f"Dimension must be positive, got {n}")
        self.n = n
        self.settings = settings or NumericalSettings()

        self.translations = TranslationGroup(n)
        self.rotations = SpecialOrthogonal(n, angle_tolerance=self.settings.angle_tolerance)
        self.action = RotationAction(self.translations, self.rotations)
        self.variant = exp_log.DimensionVariant.for_dimension(n)
        self.logger = logging.getLogger(__name__)

    def __repr__(self) -> str:
        return f"SpecialEuclidean({self.n})"

    def manifold_dimension(self) -> int:
        return self.translations.manifold_dimension() + self.rotations.manifold_dimension()

    # Representations

    @property
    def identity(self) -> Identity:
        return Identity(self.n)

    def identity_element(self, representation: str = "matrix") -> Element:
        """Fresh identity element as an affine matrix or a Pose."""
        if representation == "matrix":
            return np.eye(self.n + 1)
        if representation == "pose":
            return Pose(self.translations.identity_element(), self.rotations.identity_element())
        raise ValueError(f"Unknown representation: {representation}")

    def affine_matrix(self, p: Point) -> np.ndarray:
        return affine_matrix(self.n, p)

    def screw_matrix(self, X: Element) -> np.ndarray:
        return screw_matrix(self.n, X)

    def submanifold_components(self, p: Point):
        """(translation, rotation) blocks; views when p is a matrix."""
        return submanifold_components(self.n, p)

    def to_pose(self, p: Point) -> Pose:
        return to_pose(self.n, p)

    def to_twist(self, X: Element) -> Twist:
        return to_twist(self.n, X)

    # Group operations

    def compose(self, p: Point, q: Point) -> Point:
        """Group operation p * q.

        Matrices are multiplied; pairs combine as ``(R1 t2 + t1, R1 R2)``.
        Mixing a matrix with a Pose raises TypeError.
        """
        if isinstance(p, Identity):
            return q if isinstance(q, Identity) else q.copy()
        if isinstance(q, Identity):
            return p.copy()

        if isinstance(p, np.ndarray) and isinstance(q, np.ndarray):
            return p @ q
        if isinstance(p, PartitionedElement) and isinstance(q, PartitionedElement):
            t1, R1 = submanifold_components(self.n, p)
            t2, R2 = submanifold_components(self.n, q)
            return Pose(self.action.apply(R1, t2) + t1, R1 @ R2)

        raise TypeError(
            f"Cannot compose {type(p).__name__} with {type(q).__name__}; convert explicitly"
        )

    def compose_into(self, x: Element, p: Point, q: Point) -> Element:
        """Group operation written into x.

        x may be the same object as p or q: the product is formed in a
        temporary before it is copied.
        """
        if isinstance(x, np.ndarray):
            product = affine_matrix(self.n, p) @ affine_matrix(self.n, q)
            np.copyto(x, product)
            return x

        t1, R1 = submanifold_components(self.n, p)
        t2, R2 = submanifold_components(self.n, q)
        t = self.action.apply(R1, t2) + t1
        R = R1 @ R2
        tx, Rx = submanifold_components(self.n, x)
        np.copyto(tx, t)
        np.copyto(Rx, R)
        return x

    def inv(self, p: Point) -> Point:
        """Inverse element ``(-R^T t, R^T)``."""
        if isinstance(p, Identity):
            return p
        if isinstance(p, np.ndarray):
            return inverse_affine_matrix(self.n, p)

        t, R = submanifold_components(self.n, p)
        return Pose(-self.action.inverse_apply(R, t), self.rotations.inv(R))

    def inv_into(self, x: Element, p: Point) -> Element:
        """Inverse written into x; x may be p."""
        inverse = inverse_affine_matrix(self.n, p)
        if isinstance(x, np.ndarray):
            np.copyto(x, inverse)
            return x
        tx, Rx = submanifold_components(self.n, x)
        t, R = submanifold_components(self.n, inverse)
        np.copyto(tx, t)
        np.copyto(Rx, R)
        return x

    # Exponential and logarithm

    def exp_lie(self, X: Element) -> Element:
        """Group exponential se(n) -> SE(n)."""
        return exp_log.exp_lie(self.n, self.rotations, X, self.settings.angle_tolerance, self.variant)

    def exp_lie_into(self, q: Element, X: Element) -> Element:
        return exp_log.exp_lie_into(self.n, self.rotations, q, X, self.settings.angle_tolerance, self.variant)

    def log_lie(self, p: Point) -> Element:
        """Group logarithm SE(n) -> se(n)."""
        if isinstance(p, Identity):
            return Twist(np.zeros(self.n), np.zeros((self.n, self.n)))
        return exp_log.log_lie(self.n, self.rotations, p, self.settings.angle_tolerance, self.variant)

    def log_lie_into(self, X: Element, p: Point) -> Element:
        return exp_log.log_lie_into(self.n, self.rotations, X, p, self.settings.angle_tolerance, self.variant)

    def exp(self, p: Point, X: Element, t: float = 1.0) -> Element:
        """Exponential map of the product manifold T(n) x SO(n) at p."""
        return self.exp_into(allocate_like(self.n, p), p, X, t)

    def exp_into(self, q: Element, p: Point, X: Element, t: float = 1.0) -> Element:
        return exp_log.exp_into(self.n, self.translations, self.rotations, q, p, X, t)

    def log(self, p: Point, q: Point) -> Element:
        """Logarithmic map of the product manifold T(n) x SO(n) at p."""
        if isinstance(q, np.ndarray):
            X = np.empty((self.n + 1, self.n + 1))
        else:
            X = Twist(np.empty(self.n), np.empty((self.n, self.n)))
        return self.log_into(X, p, q)

    def log_into(self, X: Element, p: Point, q: Point) -> Element:
        return exp_log.log_into(self.n, self.translations, self.rotations, X, p, q)

    # Lie algebra

    def lie_bracket(self, X: Element, Y: Element) -> Element:
        return algebra.lie_bracket(self.n, self.rotations, X, Y)

    def lie_bracket_into(self, Z: Element, X: Element, Y: Element) -> Element:
        return algebra.lie_bracket_into(self.n, self.rotations, Z, X, Y)

    def translate_diff(self, p: Point, q: Point, X: Element, side: str = algebra.LEFT) -> np.ndarray:
        return algebra.translate_diff(self.n, p, q, X, side)

    def inverse_translate_diff(self, p: Point, q: Point, X: Element, side: str = algebra.LEFT) -> np.ndarray:
        return algebra.inverse_translate_diff(self.n, p, q, X, side)

    def adjoint_action(self, p: Point, X: Union[Element, np.ndarray]) -> Union[Element, np.ndarray]:
        """Adjoint action Ad_p(X) on a Twist, screw matrix or coordinate vector."""
        return algebra.adjoint_action(self.n, self.translations, self.rotations, p, X)

    def vee(self, X: Element) -> np.ndarray:
        return algebra.vee(self.n, self.translations, self.rotations, X)

    def hat(self, c: np.ndarray) -> Twist:
        return algebra.hat(self.n, self.translations, self.rotations, c)

    get_coordinates = vee
    get_vector = hat

    # Validation

    def check_size(self, p: Point) -> Optional[ManifoldDomainError]:
        """Check the shape of a matrix or the dimension of a pair."""
        if isinstance(p, np.ndarray):
            if p.shape != (self.n + 1, self.n + 1):
                return ManifoldDomainError(
                    p.shape,
                    f"Elements of {self} must have shape ({self.n + 1}, {self.n + 1}), got {p.shape}."
                )
            return None
        if isinstance(p, (PartitionedElement, Identity)):
            if p.n != self.n:
                return ManifoldDomainError(
                    p.n,
                    f"Elements of {self} must have dimension {self.n}, got {p.n}."
                )
            return None
        return ManifoldDomainError(type(p), f"Unsupported element type {type(p).__name__}.")

    def check_point(
        self,
        p: Point,
        atol: Optional[float] = None,
        rtol: Optional[float] = None
    ) -> Optional[ManifoldDomainError]:
        """Check that p is a point of SE(n).

        Affine matrices must have the homogeneous last row ``[0, ..., 0, 1]``;
        the translation block is checked by T(n) and the rotation block by
        SO(n). Every failing check is reported.

        Args:
            p: Affine matrix, Pose or Identity
            atol: Absolute tolerance (defaults to the settings)
            rtol: Relative tolerance (defaults to the settings)

        Returns:
            None, a single ManifoldDomainError, or a CompositeManifoldError
        """
        err = self.check_size(p)
        if err is None and not isinstance(p, Identity):
            tol = self.settings.tolerances(atol, rtol)
            errs = []
            if isinstance(p, np.ndarray):
                errs.append(check_homogeneous_row(self.n, p, 1, **tol))
            t, R = submanifold_components(self.n, p)
            errs.append(self.translations.check_point(t, **tol))
            errs.append(self.rotations.check_point(R, **tol))
            err = collect_errors(errs)

        if err is not None:
            self.logger.debug(f"Point check failed on {self}: {err.message}")
        return err

    def check_vector(
        self,
        p: Point,
        X: Element,
        atol: Optional[float] = None,
        rtol: Optional[float] = None
    ) -> Optional[ManifoldDomainError]:
        """Check that X is a tangent vector at p.

        Screw matrices must have a zero last row; the translation block is
        checked by T(n) and the rotation block must be skew-symmetric.
        """
        err = self.check_size(X)
        if err is None:
            tol = self.settings.tolerances(atol, rtol)
            errs = []
            if isinstance(X, np.ndarray):
                errs.append(check_homogeneous_row(self.n, X, 0, **tol))
            tp, Rp = submanifold_components(self.n, p)
            b, Omega = submanifold_components(self.n, X)
            errs.append(self.translations.check_vector(tp, b, **tol))
            errs.append(self.rotations.check_vector(Rp, Omega, **tol))
            err = collect_errors(errs)

        if err is not None:
            self.logger.debug(f"Vector check failed on {self}: {err.message}")
        return err

    def is_point(self, p: Point, raise_error: bool = False, **kwargs) -> bool:
        err = self.check_point(p, **kwargs)
        if err is not None and raise_error:
            raise err
        return err is None

    def is_vector(self, p: Point, X: Element, raise_error: bool = False, **kwargs) -> bool:
        err = self.check_vector(p, X, **kwargs)
        if err is not None and raise_error:
            raise err
        return err is None
