"""
Prediction quality metrics for the house price model.

Two entry points:
- calculate_accuracy: the clamped R² figure sampled while training.
  Total function, never raises; degenerate inputs surface as NaN.
- calculate_metrics / evaluate_parameters: a full report (MSE, MAE, RMSE,
  MAPE, R², within-X% fractions) for a trained model. Validates its inputs.

All percentage-based metrics are returned as decimals (0.0-1.0 scale).
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from prophet_estate.data import HousingRecord, records_to_arrays
from prophet_estate.regression import ModelParameters, predict_many

from .errors import EmptyDatasetError, MetricsError
from .models import PredictionMetrics


@dataclass(frozen=True)
class MetricsConfig:
    """Configuration for the metric report."""

    thresholds: tuple[float, ...] = (0.05, 0.10, 0.15)
    """Thresholds for within-X% fractions (as decimals). Default: 5%, 10%, 15%."""


def calculate_accuracy(y_true: np.ndarray, y_pred: np.ndarray) -> float:
    """
    Coefficient of determination clamped at 0.

    Formula: accuracy = max(0, 1 - SS_res / SS_tot)

    There is no upper clamp. NaN predictions (a diverged model) and an empty
    input both yield NaN instead of being hidden behind the clamp.

    Args:
        y_true: Actual prices
        y_pred: Predicted prices

    Returns:
        Accuracy in [0, 1] for well-formed inputs, otherwise NaN.
    """
    y_true = np.asarray(y_true, dtype=np.float64).flatten()
    y_pred = np.asarray(y_pred, dtype=np.float64).flatten()

    if len(y_true) == 0:
        return float("nan")

    # np.maximum propagates NaN, the builtin max() would swallow it
    return float(np.maximum(0.0, _calculate_r2(y_true, y_pred)))


def calculate_metrics(
    y_true: np.ndarray,
    y_pred: np.ndarray,
    config: MetricsConfig | None = None,
) -> PredictionMetrics:
    """
    Calculate the full metric report.

    Args:
        y_true: Actual prices (1D array)
        y_pred: Predicted prices (1D array)
        config: Metrics configuration.

    Returns:
        PredictionMetrics with all computed values

    Raises:
        MetricsError: If arrays have different lengths or contain zero prices
        EmptyDatasetError: If arrays are empty

    Example:
        >>> y_true = np.array([200_000, 500_000, 1_000_000])
        >>> y_pred = np.array([210_000, 450_000, 1_100_000])
        >>> metrics = calculate_metrics(y_true, y_pred)
        >>> print(f"MAPE: {metrics.mape:.4f}")
        MAPE: 0.0833
    """
    config = config or MetricsConfig()

    y_true = np.asarray(y_true, dtype=np.float64).flatten()
    y_pred = np.asarray(y_pred, dtype=np.float64).flatten()

    if len(y_true) != len(y_pred):
        raise MetricsError(
            f"Array length mismatch: y_true={len(y_true)}, y_pred={len(y_pred)}"
        )

    if len(y_true) == 0:
        raise EmptyDatasetError("Empty input arrays")

    if np.any(y_true == 0):
        raise MetricsError("Ground truth contains zero prices")

    mse = float(np.mean((y_true - y_pred) ** 2))
    within = {
        threshold: _calculate_within_threshold(y_true, y_pred, threshold)
        for threshold in config.thresholds
    }

    return PredictionMetrics(
        mse=mse,
        mae=float(np.mean(np.abs(y_true - y_pred))),
        rmse=float(np.sqrt(mse)),
        mape=float(np.mean(np.abs(y_true - y_pred) / y_true)),
        within_threshold=within,
        r2=_calculate_r2(y_true, y_pred),
        n_samples=len(y_true),
    )


def evaluate_parameters(
    dataset: Sequence[HousingRecord],
    params: ModelParameters,
    config: MetricsConfig | None = None,
) -> PredictionMetrics:
    """Score a parameter set against a labeled dataset."""
    _, prices = records_to_arrays(dataset)
    return calculate_metrics(prices, predict_many(dataset, params), config)


def _calculate_r2(y_true: np.ndarray, y_pred: np.ndarray) -> float:
    """
    Calculate R² (Coefficient of Determination).

    Formula: R² = 1 - (SS_res / SS_tot)
    where SS_res = sum((y_true - y_pred)²)
    and SS_tot = sum((y_true - mean(y_true))²)

    Returns:
        R² value (can be negative if model is worse than mean, NaN for a
        perfect fit on identical prices, -inf for any miss on them)
    """
    ss_res = np.sum((y_true - y_pred) ** 2)
    ss_tot = np.sum((y_true - np.mean(y_true)) ** 2)

    # Identical prices: 0/0 is NaN, any miss is -inf
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(1 - (ss_res / ss_tot))


def _calculate_within_threshold(
    y_true: np.ndarray,
    y_pred: np.ndarray,
    threshold: float,
) -> float:
    """Fraction of predictions within threshold of actual (0.0-1.0)."""
    pct_errors = np.abs(y_true - y_pred) / y_true
    if np.isnan(pct_errors).any():
        return float("nan")
    return float(np.mean(pct_errors < threshold))
