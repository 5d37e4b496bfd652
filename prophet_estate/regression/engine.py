"""
Linear regression engine.

Pure functions over explicit ModelParameters:

    price = w_sqft * sqft + w_beds * bedrooms + w_baths * bathrooms + bias

Training uses full-batch gradient descent on mean squared error. Every step
consumes the whole dataset and returns fresh parameters; nothing here holds
state.

Numerical behavior:
    The default learning rate (1e-7) is tuned to the feature scale of the
    synthetic data (sqft up to 3500, prices in the hundreds of thousands).
    Noticeably larger rates diverge and the loss grows to Inf/NaN. Such values
    are returned as-is so divergence stays visible to the caller; likewise an
    empty dataset yields NaN rather than an exception.
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from prophet_estate.data import HousingRecord, PropertyFeatures, records_to_arrays

from .models import ModelParameters, StepResult

DEFAULT_LEARNING_RATE = 1e-7
INITIAL_BIAS_SCALE = 1000.0


def initialize_weights(rng: np.random.Generator | None = None) -> ModelParameters:
    """
    Draw a random starting point.

    Weights are uniform in [0, 1), bias is uniform in [0, 1000).

    Args:
        rng: Random source. A new unseeded generator is used if omitted.
    """
    rng = rng if rng is not None else np.random.default_rng()
    w_sqft, w_beds, w_baths = rng.random(3)
    return ModelParameters(
        w_sqft=float(w_sqft),
        w_beds=float(w_beds),
        w_baths=float(w_baths),
        bias=float(rng.random() * INITIAL_BIAS_SCALE),
    )


def predict_price(request: PropertyFeatures, params: ModelParameters) -> float:
    """Predict the price of a single property. Not rounded."""
    return (
        params.w_sqft * request.sqft
        + params.w_beds * request.bedrooms
        + params.w_baths * request.bathrooms
        + params.bias
    )


def predict_many(
    records: Sequence[HousingRecord], params: ModelParameters
) -> np.ndarray:
    """Predict prices for every record. Returns a (N,) float64 array."""
    features, _ = records_to_arrays(records)
    return features @ params.weights + params.bias


def train_step(
    dataset: Sequence[HousingRecord],
    params: ModelParameters,
    learning_rate: float = DEFAULT_LEARNING_RATE,
) -> StepResult:
    """
    Run one full-batch gradient-descent step.

    Per-record gradients 2 * error * feature are summed over the dataset,
    then divided by N at update time:

        param_new = param - learning_rate * sum(2 * error * feature) / N

    Args:
        dataset: Training records (all of them are used).
        params: Current parameters. Not modified.
        learning_rate: Step size.

    Returns:
        StepResult(parameters, loss) where loss is the MSE at `params`.

    Example:
        >>> record = HousingRecord(id=0, sqft=1000, bedrooms=2, bathrooms=1, price=300_000)
        >>> new_params, loss = train_step([record], ModelParameters.zeros())
        >>> loss
        90000000000.0
    """
    features, prices = records_to_arrays(dataset)
    n = len(prices)

    errors = features @ params.weights + params.bias - prices

    # Sums stay numpy scalars so an empty dataset divides to NaN
    loss = np.sum(errors**2) / n
    weight_grads = 2.0 * (features.T @ errors)
    bias_grad = 2.0 * np.sum(errors)

    new_weights = params.weights - learning_rate * weight_grads / n
    new_bias = params.bias - learning_rate * bias_grad / n

    return StepResult(
        parameters=ModelParameters(
            w_sqft=float(new_weights[0]),
            w_beds=float(new_weights[1]),
            w_baths=float(new_weights[2]),
            bias=float(new_bias),
        ),
        loss=float(loss),
    )
