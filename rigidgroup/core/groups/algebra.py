"""Lie algebra operations on se(n): bracket, adjoint action, vee and hat."""

from typing import Union

import numpy as np

from ..math.rotations import SpecialOrthogonal
from ..math.translations import TranslationGroup
from ..models.elements import Identity, Twist
from .representation import (
    Element,
    affine_matrix,
    inverse_affine_matrix,
    pad_vector,
    screw_matrix,
    submanifold_components,
    to_twist,
)

LEFT = "left"
RIGHT = "right"


def lie_bracket(n: int, rotations: SpecialOrthogonal, X: Element, Y: Element) -> Element:
    """Lie bracket of two se(n) elements.

    For screw matrices this is the commutator ``XY - YX``. For Twists it is
    ``(Omega_X b_Y - Omega_Y b_X, [Omega_X, Omega_Y])``, the rotation part
    coming from SO(n).
    """
    if isinstance(X, np.ndarray) and isinstance(Y, np.ndarray):
        return X @ Y - Y @ X
    if isinstance(X, np.ndarray) or isinstance(Y, np.ndarray):
        raise TypeError("Cannot take the bracket of a matrix and a Twist; convert one first")

    bX, OmegaX = submanifold_components(n, X)
    bY, OmegaY = submanifold_components(n, Y)
    return Twist(OmegaX @ bY - OmegaY @ bX, rotations.lie_bracket(OmegaX, OmegaY))


def lie_bracket_into(n: int, rotations: SpecialOrthogonal, Z: Element, X: Element, Y: Element) -> Element:
    """Lie bracket written into Z (matrix or Twist); Z may not alias X or Y."""
    bX, OmegaX = submanifold_components(n, X)
    bY, OmegaY = submanifold_components(n, Y)
    bZ, OmegaZ = submanifold_components(n, Z)
    np.copyto(OmegaZ, rotations.lie_bracket(OmegaX, OmegaY))
    np.copyto(bZ, OmegaX @ bY - OmegaY @ bX)
    if isinstance(Z, np.ndarray):
        pad_vector(n, Z)
    return Z


def translate_diff(
    n: int,
    p: Union[Element, Identity],
    q: Union[Element, Identity],
    X: Element,
    side: str = LEFT
) -> np.ndarray:
    """Differential of translation by p, at q, applied to X.

    Tangent vectors are (n+1) x (n+1) matrix velocities in GL(n+1); left
    translation ``q -> p q`` maps X to ``P X`` and right translation
    ``q -> q p`` maps X to ``X P``. Both are linear, so q only fixes where X
    is attached.

    Args:
        n: Dimension of the group
        p: Translating point
        q: Point at which X is tangent
        X: Matrix velocity (a screw matrix or Twist at the identity)
        side: "left" or "right"

    Returns:
        Matrix velocity at the translated point
    """
    P = affine_matrix(n, p)
    Xmat = screw_matrix(n, X)
    if side == LEFT:
        return P @ Xmat
    if side == RIGHT:
        return Xmat @ P
    raise ValueError(f"Unknown translation side: {side}")


def inverse_translate_diff(
    n: int,
    p: Union[Element, Identity],
    q: Union[Element, Identity],
    X: Element,
    side: str = LEFT
) -> np.ndarray:
    """Differential of translation by the inverse of p, at q, applied to X."""
    P_inv = inverse_affine_matrix(n, p)
    Xmat = screw_matrix(n, X)
    if side == LEFT:
        return P_inv @ Xmat
    if side == RIGHT:
        return Xmat @ P_inv
    raise ValueError(f"Unknown translation side: {side}")


def adjoint_action_se3_coordinates(p: Element, c: np.ndarray) -> np.ndarray:
    """Adjoint action of an SE(3) point on 6 coordinates [r, omega].

    Returns:
        ``[t x (R omega) + R r, R omega]``
    """
    t, R = submanifold_components(3, p)
    r = c[:3]
    omega = c[3:]
    R_omega = R @ omega
    return np.concatenate([np.cross(t, R_omega) + R @ r, R_omega])


def adjoint_action(
    n: int,
    translations: TranslationGroup,
    rotations: SpecialOrthogonal,
    p: Union[Element, Identity],
    X: Union[Element, np.ndarray]
) -> Union[Element, np.ndarray]:
    """Adjoint action of p on a Lie algebra element X.

    X is pushed forward from the identity to p by left translation and pulled
    back to the identity by right translation at p, i.e. ``P X P^-1``.

    Args:
        n: Dimension of the group
        translations: T(n) collaborator
        rotations: SO(n) collaborator
        p: Point of SE(n)
        X: Screw matrix, Twist, or coordinate vector (n = 2, 3)

    Returns:
        Ad_p(X) in the representation of X
    """
    if isinstance(X, np.ndarray) and X.ndim == 1:
        if n == 3:
            return adjoint_action_se3_coordinates(p, X)
        Y = adjoint_action(n, translations, rotations, p, hat(n, translations, rotations, X))
        return vee(n, translations, rotations, Y)

    X_p = translate_diff(n, p, Identity(n), X, LEFT)
    Y = inverse_translate_diff(n, p, p, X_p, RIGHT)
    pad_vector(n, Y)
    if isinstance(X, np.ndarray):
        return Y
    return to_twist(n, Y)


def _check_coordinate_dimension(n: int) -> None:
    if n not in (2, 3):
        raise ValueError(f"vee/hat are only defined for n = 2 or 3, got {n}")


def vee(n: int, translations: TranslationGroup, rotations: SpecialOrthogonal, X: Element) -> np.ndarray:
    """Coordinates of an se(n) element: translation part first, then rotation.

    n = 2 gives 3 coordinates ``[b1, b2, theta]``, n = 3 gives 6 coordinates
    ``[b1, b2, b3, w1, w2, w3]``.
    """
    _check_coordinate_dimension(n)
    b, Omega = submanifold_components(n, X)
    return np.concatenate([translations.vee(b), rotations.vee(Omega)])


def hat(n: int, translations: TranslationGroup, rotations: SpecialOrthogonal, c: np.ndarray) -> Twist:
    """Twist with the given coordinates; inverse of :func:`vee`."""
    _check_coordinate_dimension(n)
    c = np.asarray(c, dtype=float)
    dim = n + rotations.manifold_dimension()
    if c.shape != (dim,):
        raise ValueError(f"Coordinates must have shape ({dim},), got {c.shape}")
    return Twist(translations.hat(c[:n]), rotations.hat(c[n:]))
