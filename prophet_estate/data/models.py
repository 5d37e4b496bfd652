"""Data models for synthetic housing datasets."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import asdict, dataclass
from typing import Any, Protocol

import numpy as np


class PropertyFeatures(Protocol):
    """Anything exposing the three model features (records and requests alike)."""

    @property
    def sqft(self) -> int: ...

    @property
    def bedrooms(self) -> int: ...

    @property
    def bathrooms(self) -> int: ...


@dataclass(frozen=True)
class PredictionInput:
    """A property to be priced by the regression model."""

    sqft: int
    bedrooms: int
    bathrooms: int

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)


@dataclass(frozen=True)
class HousingRecord:
    """
    One synthetic labeled observation.

    Immutable once generated. Carries the same feature attributes as
    PredictionInput, so it can be passed anywhere a request is expected.
    """

    id: int
    sqft: int  # 800-3499
    bedrooms: int
    bathrooms: int  # >= 1
    price: int  # derived price + noise, rounded

    def to_input(self) -> PredictionInput:
        """Strip identifier and label."""
        return PredictionInput(
            sqft=self.sqft, bedrooms=self.bedrooms, bathrooms=self.bathrooms
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)


def records_to_arrays(
    records: Sequence[HousingRecord],
) -> tuple[np.ndarray, np.ndarray]:
    """
    Split records into a feature matrix and a price vector.

    Returns:
        Tuple of (features, prices) where:
        - features: (N, 3) float64 array of sqft, bedrooms, bathrooms
        - prices: (N,) float64 array
    """
    features = np.array(
        [[r.sqft, r.bedrooms, r.bathrooms] for r in records], dtype=np.float64
    ).reshape(-1, 3)
    prices = np.array([r.price for r in records], dtype=np.float64)
    return features, prices
