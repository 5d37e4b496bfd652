"""
Evaluation module for scoring the regression model.

This module provides:
- The clamped R² accuracy sampled during training
- A full prediction metric report (MSE, MAE, RMSE, MAPE, R², within-X%)

Usage:
    from prophet_estate.evaluation import calculate_accuracy, evaluate_parameters

    accuracy = calculate_accuracy(prices, predictions)
    metrics = evaluate_parameters(dataset, params)
    print(f"RMSE: ${metrics.rmse:,.0f}, R²: {metrics.r2:.4f}")
"""

from .errors import EmptyDatasetError, EvaluationError, MetricsError
from .metrics import (
    MetricsConfig,
    calculate_accuracy,
    calculate_metrics,
    evaluate_parameters,
)
from .models import PredictionMetrics

__all__ = [
    # Metrics
    "calculate_accuracy",
    "calculate_metrics",
    "evaluate_parameters",
    "MetricsConfig",
    # Models
    "PredictionMetrics",
    # Errors
    "EvaluationError",
    "MetricsError",
    "EmptyDatasetError",
]
