"""
Regression engine for the four-parameter house price model.

Usage:
    from prophet_estate.regression import initialize_weights, predict_price, train_step

    params = initialize_weights()
    for _ in range(200):
        params, loss = train_step(dataset, params)
    price = predict_price(request, params)
"""

from .engine import (
    DEFAULT_LEARNING_RATE,
    INITIAL_BIAS_SCALE,
    initialize_weights,
    predict_many,
    predict_price,
    train_step,
)
from .models import ModelParameters, StepResult

__all__ = [
    # Engine
    "initialize_weights",
    "predict_price",
    "predict_many",
    "train_step",
    "DEFAULT_LEARNING_RATE",
    "INITIAL_BIAS_SCALE",
    # Models
    "ModelParameters",
    "StepResult",
]
