"""SE(n) group, its Lie algebra and its embedding in GL(n+1)."""

from .special_euclidean import SpecialEuclidean
from .embedding import SpecialEuclideanInGeneralLinear
from .exp_log import DimensionVariant
from .representation import affine_matrix, screw_matrix, submanifold_components

__all__ = [
    "SpecialEuclidean",
    "SpecialEuclideanInGeneralLinear",
    "DimensionVariant",
    "affine_matrix",
    "screw_matrix",
    "submanifold_components",
]
