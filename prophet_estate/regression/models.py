"""Data models for the regression engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, NamedTuple

import numpy as np


@dataclass(frozen=True)
class ModelParameters:
    """
    The four learned scalars of the price model.

    Value type: update steps always return a new instance, so any holder of
    an older snapshot keeps seeing consistent values.
    """

    w_sqft: float  # price per square foot
    w_beds: float  # price per bedroom
    w_baths: float  # price per bathroom
    bias: float  # intercept

    @classmethod
    def zeros(cls) -> ModelParameters:
        """All-zero parameters."""
        return cls(w_sqft=0.0, w_beds=0.0, w_baths=0.0, bias=0.0)

    @property
    def weights(self) -> np.ndarray:
        """Feature weights as a (3,) array in sqft, bedrooms, bathrooms order."""
        return np.array([self.w_sqft, self.w_beds, self.w_baths], dtype=np.float64)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "w_sqft": self.w_sqft,
            "w_beds": self.w_beds,
            "w_baths": self.w_baths,
            "bias": self.bias,
        }


class StepResult(NamedTuple):
    """Outcome of one gradient-descent step."""

    parameters: ModelParameters
    """Updated parameters (a new instance)."""

    loss: float
    """Mean squared error measured at the input parameters."""
