"""Numerical settings."""

from typing import Optional

import numpy as np
from pydantic import BaseModel, Field, field_validator

from ..math.linalg import SQRT_EPS


class NumericalSettings(BaseModel):
    """Tolerances used by branch selection and validation."""

    angle_tolerance: float = Field(
        default=SQRT_EPS,
        ge=0,
        description="Rotation angles with |theta| at or below this use Taylor series"
    )
    check_atol: float = Field(
        default=0.0,
        ge=0,
        description="Absolute tolerance for membership checks"
    )
    check_rtol: Optional[float] = Field(
        default=None,
        ge=0,
        description="Relative tolerance for membership checks (sqrt(eps) when atol is 0)"
    )

    @field_validator('angle_tolerance', 'check_atol')
    @classmethod
    def validate_finite(cls, v):
        if not np.isfinite(v):
            raise ValueError("tolerance must be finite")
        return v

    def tolerances(self, atol: Optional[float] = None, rtol: Optional[float] = None) -> dict:
        """Check tolerances, with explicit arguments taking precedence."""
        return {
            "atol": self.check_atol if atol is None else atol,
            "rtol": self.check_rtol if rtol is None else rtol,
        }
