"""Math primitives for rigidgroup."""

from .linalg import isapprox, skew_symmetric, unskew, skew_part, matrix_exp, matrix_log
from .translations import TranslationGroup
from .rotations import SpecialOrthogonal, RotationAction

__all__ = [
    "isapprox",
    "skew_symmetric",
    "unskew",
    "skew_part",
    "matrix_exp",
    "matrix_log",
    "TranslationGroup",
    "SpecialOrthogonal",
    "RotationAction",
]
