"""Data models for rigidgroup."""

from .elements import PartitionedElement, Pose, Twist, Identity
from .settings import NumericalSettings

__all__ = [
    "PartitionedElement",
    "Pose",
    "Twist",
    "Identity",
    "NumericalSettings",
]
