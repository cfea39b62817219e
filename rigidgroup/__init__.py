"""rigidgroup - the special Euclidean group SE(n)

Rigid motions of n-dimensional space as a Lie group: composition, inversion,
exponential and logarithm maps, Lie bracket, adjoint action, and an embedding
into the general linear group.
"""

__version__ = "0.1.0"

# Group and embedding
from .core.groups.special_euclidean import SpecialEuclidean
from .core.groups.embedding import SpecialEuclideanInGeneralLinear

# Data models
from .core.models.elements import Pose, Twist, Identity
from .core.models.settings import NumericalSettings

# Collaborators
from .core.math.translations import TranslationGroup
from .core.math.rotations import SpecialOrthogonal, RotationAction

# Errors
from .core.errors import ManifoldDomainError, CompositeManifoldError

__all__ = [
    # Version
    "__version__",
    # Groups
    "SpecialEuclidean",
    "SpecialEuclideanInGeneralLinear",
    "TranslationGroup",
    "SpecialOrthogonal",
    "RotationAction",
    # Models
    "Pose",
    "Twist",
    "Identity",
    "NumericalSettings",
    # Errors
    "ManifoldDomainError",
    "CompositeManifoldError",
]
