"""Tests for regression data models."""

import dataclasses

import numpy as np
import pytest

from prophet_estate.regression import ModelParameters, StepResult


class TestModelParameters:
    """Tests for ModelParameters."""

    def test_zeros(self) -> None:
        """zeros() gives an all-zero model."""
        assert ModelParameters.zeros().to_dict() == {
            "w_sqft": 0.0,
            "w_beds": 0.0,
            "w_baths": 0.0,
            "bias": 0.0,
        }

    def test_weights_order(self) -> None:
        """weights are sqft, bedrooms, bathrooms (bias excluded)."""
        params = ModelParameters(w_sqft=1.0, w_beds=2.0, w_baths=3.0, bias=4.0)

        np.testing.assert_array_equal(params.weights, [1.0, 2.0, 3.0])

    def test_is_frozen(self) -> None:
        """Parameters cannot be mutated in place."""
        params = ModelParameters.zeros()

        with pytest.raises(dataclasses.FrozenInstanceError):
            params.w_sqft = 1.0  # type: ignore[misc]


class TestStepResult:
    """Tests for StepResult."""

    def test_unpacks_as_tuple(self) -> None:
        """StepResult unpacks into (parameters, loss)."""
        params, loss = StepResult(parameters=ModelParameters.zeros(), loss=1.5)

        assert params == ModelParameters.zeros()
        assert loss == 1.5
