"""Data models for valuations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from prophet_estate.analysis import AnalysisResult
    from prophet_estate.data import PredictionInput


@dataclass(frozen=True)
class Valuation:
    """Regression estimate for one property, with its contribution breakdown."""

    request: PredictionInput
    price: float
    """Unrounded model output."""

    sqft_impact: float
    """sqft * w_sqft"""

    feature_value: float
    """bedrooms * w_beds + bathrooms * w_baths"""

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "request": self.request.to_dict(),
            "price": round(self.price, 2),
            "sqft_impact": round(self.sqft_impact, 2),
            "feature_value": round(self.feature_value, 2),
        }


@dataclass(frozen=True)
class Appraisal:
    """Valuation plus the optional market analysis."""

    valuation: Valuation
    analysis: AnalysisResult | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "valuation": self.valuation.to_dict(),
            "analysis": self.analysis.to_dict() if self.analysis else None,
        }
