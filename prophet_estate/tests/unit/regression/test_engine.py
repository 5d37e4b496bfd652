"""Tests for the linear regression engine."""

import numpy as np
import pytest

from prophet_estate.data import PredictionInput
from prophet_estate.regression import (
    DEFAULT_LEARNING_RATE,
    ModelParameters,
    initialize_weights,
    predict_many,
    predict_price,
    train_step,
)


class TestInitializeWeights:
    """Tests for initialize_weights function."""

    def test_ranges(self, rng) -> None:
        """Weights in [0, 1), bias in [0, 1000)."""
        for _ in range(100):
            params = initialize_weights(rng)
            for weight in (params.w_sqft, params.w_beds, params.w_baths):
                assert 0.0 <= weight < 1.0
            assert 0.0 <= params.bias < 1000.0

    def test_same_seed_same_parameters(self) -> None:
        """Seeded generators give identical starting points."""
        first = initialize_weights(np.random.default_rng(3))
        second = initialize_weights(np.random.default_rng(3))

        assert first == second

    def test_without_rng(self) -> None:
        """Works with no random source supplied."""
        assert isinstance(initialize_weights(), ModelParameters)


class TestPredict:
    """Tests for predict_price and predict_many."""

    def test_predict_price_formula(self) -> None:
        """Price is the weighted sum of features plus bias."""
        params = ModelParameters(w_sqft=200.0, w_beds=25_000.0, w_baths=15_000.0, bias=50_000.0)
        request = PredictionInput(sqft=2000, bedrooms=3, bathrooms=2)

        assert predict_price(request, params) == 555_000.0

    def test_zero_parameters_predict_zero(self) -> None:
        """All-zero model predicts 0 for any input."""
        request = PredictionInput(sqft=3000, bedrooms=4, bathrooms=3)

        assert predict_price(request, ModelParameters.zeros()) == 0.0

    def test_prediction_is_deterministic(self, rng) -> None:
        """Same inputs always give the same output."""
        params = initialize_weights(rng)
        request = PredictionInput(sqft=1500, bedrooms=2, bathrooms=1)

        assert predict_price(request, params) == predict_price(request, params)

    def test_accepts_records(self, single_record) -> None:
        """Training records can be priced directly."""
        params = ModelParameters(w_sqft=1.0, w_beds=10.0, w_baths=100.0, bias=1000.0)

        assert predict_price(single_record, params) == 2120.0

    def test_predict_many_matches_single(self, dataset, rng) -> None:
        """Vectorized predictions match per-record predictions."""
        params = initialize_weights(rng)

        predictions = predict_many(dataset, params)

        assert predictions.shape == (len(dataset),)
        for record, predicted in zip(dataset, predictions):
            assert predicted == pytest.approx(predict_price(record, params))


class TestTrainStep:
    """Tests for train_step function."""

    def test_default_learning_rate(self) -> None:
        """Default step size is 1e-7."""
        assert DEFAULT_LEARNING_RATE == 1e-7

    def test_single_record_update(self, single_record) -> None:
        """One update from zeros moves each parameter by lr * 2 * error * feature."""
        result = train_step([single_record], ModelParameters.zeros())

        assert result.loss == pytest.approx(9e10)
        assert result.parameters.w_sqft == pytest.approx(60.0)
        assert result.parameters.w_beds == pytest.approx(0.12)
        assert result.parameters.w_baths == pytest.approx(0.06)
        assert result.parameters.bias == pytest.approx(0.06)

    def test_returns_new_parameters(self, single_record) -> None:
        """Input parameters are never modified."""
        params = ModelParameters(w_sqft=1.0, w_beds=2.0, w_baths=3.0, bias=4.0)

        result = train_step([single_record], params)

        assert params == ModelParameters(w_sqft=1.0, w_beds=2.0, w_baths=3.0, bias=4.0)
        assert result.parameters is not params

    def test_loss_measured_at_input_parameters(self, dataset, rng) -> None:
        """Reported loss is the MSE before the update."""
        params = initialize_weights(rng)
        prices = np.array([r.price for r in dataset], dtype=np.float64)
        expected = np.mean((predict_many(dataset, params) - prices) ** 2)

        _, loss = train_step(dataset, params)

        assert loss == pytest.approx(expected)

    def test_gradient_is_averaged_over_dataset(self, single_record) -> None:
        """Duplicating every record leaves the update unchanged."""
        single = train_step([single_record], ModelParameters.zeros())
        doubled = train_step([single_record, single_record], ModelParameters.zeros())

        assert doubled.parameters.w_sqft == pytest.approx(single.parameters.w_sqft)
        assert doubled.loss == pytest.approx(single.loss)

    def test_perfect_fit_is_fixed_point(self, single_record) -> None:
        """Zero error means zero loss and no movement."""
        params = ModelParameters(w_sqft=300.0, w_beds=0.0, w_baths=0.0, bias=0.0)

        result = train_step([single_record], params)

        assert result.loss == 0.0
        assert result.parameters == params

    @pytest.mark.filterwarnings("ignore::RuntimeWarning")
    def test_empty_dataset_yields_nan(self) -> None:
        """An empty dataset produces NaN loss and parameters without raising."""
        result = train_step([], ModelParameters.zeros())

        assert np.isnan(result.loss)
        assert np.isnan(result.parameters.w_sqft)
        assert np.isnan(result.parameters.bias)

    def test_loss_decreases_at_default_rate(self, dataset, rng) -> None:
        """At the default learning rate the loss goes down step after step."""
        params = initialize_weights(rng)
        losses = []
        for _ in range(200):
            params, loss = train_step(dataset, params)
            losses.append(loss)

        decreasing = sum(b <= a for a, b in zip(losses, losses[1:]))

        assert decreasing >= 0.9 * (len(losses) - 1)
        assert losses[-1] < losses[0]

    @pytest.mark.filterwarnings("ignore::RuntimeWarning")
    def test_large_learning_rate_diverges(self, dataset, rng) -> None:
        """A step size far above the default blows up instead of converging."""
        params = initialize_weights(rng)
        _, initial_loss = train_step(dataset, params)

        loss = initial_loss
        for _ in range(50):
            params, loss = train_step(dataset, params, learning_rate=1e-5)

        assert not np.isfinite(loss) or loss > initial_loss * 1e6
