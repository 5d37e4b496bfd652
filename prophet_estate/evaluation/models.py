"""Data models for evaluation module."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np


@dataclass(frozen=True)
class PredictionMetrics:
    """
    All computed metrics for a model's predictions on a dataset.

    All percentage-based metrics are stored as decimals (e.g., 0.085 for 8.5%).
    """

    # Error metrics (lower is better)
    mse: float  # Mean Squared Error ($²), the training loss
    mae: float  # Mean Absolute Error ($)
    rmse: float  # Root Mean Squared Error ($)
    mape: float  # Mean Absolute Percentage Error (0.0-1.0+)

    # Fraction of predictions within each threshold (keys as decimals)
    within_threshold: dict[float, float]

    # Explanatory metrics
    r2: float  # Coefficient of determination (-inf, 1]

    n_samples: int

    @property
    def accuracy(self) -> float:
        """R² clamped at 0, the figure reported during training. NaN stays NaN."""
        return float(np.maximum(0.0, self.r2))

    def get_within(self, threshold: float) -> float | None:
        """Get fraction within a specific threshold, or None if not computed."""
        return self.within_threshold.get(threshold)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "mse": round(self.mse, 2),
            "mae": round(self.mae, 2),
            "rmse": round(self.rmse, 2),
            "mape": round(self.mape, 6),
            "r2": round(self.r2, 4),
            "accuracy": round(self.accuracy, 4),
            "n_samples": self.n_samples,
            "within_threshold": {
                f"{threshold:.0%}": round(value, 4)
                for threshold, value in sorted(self.within_threshold.items())
            },
        }
