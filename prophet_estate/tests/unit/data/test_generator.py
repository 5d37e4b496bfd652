"""Tests for synthetic dataset generation."""

import numpy as np

from prophet_estate.data import (
    DEFAULT_DATASET_SIZE,
    GeneratorConfig,
    HousingRecord,
    PredictionInput,
    generate_dataset,
    records_to_arrays,
)


class TestGenerateDataset:
    """Tests for generate_dataset function."""

    def test_returns_requested_count(self, rng) -> None:
        """Generates exactly `count` records."""
        assert len(generate_dataset(50, rng=rng)) == 50

    def test_default_count(self, rng) -> None:
        """Default dataset size is 100."""
        assert len(generate_dataset(rng=rng)) == DEFAULT_DATASET_SIZE == 100

    def test_zero_count_returns_empty(self, rng) -> None:
        """count=0 yields an empty list."""
        assert generate_dataset(0, rng=rng) == []

    def test_ids_are_sequential(self, rng) -> None:
        """Ids run 0..count-1 in order."""
        records = generate_dataset(20, rng=rng)

        assert [r.id for r in records] == list(range(20))

    def test_feature_bounds(self, rng) -> None:
        """Every record respects the feature ranges."""
        for record in generate_dataset(500, rng=rng):
            assert 800 <= record.sqft < 3500
            assert record.bedrooms >= record.sqft // 800
            assert record.bedrooms <= record.sqft // 800 + 1
            assert record.bathrooms >= 1
            assert record.price > 0

    def test_price_within_noise_of_formula(self, rng) -> None:
        """Price is the formula price plus at most ±20,000 noise."""
        config = GeneratorConfig()

        for record in generate_dataset(200, rng=rng):
            expected = config.price_for(record.sqft, record.bedrooms, record.bathrooms)
            # +1 for rounding to whole dollars
            assert abs(record.price - expected) <= 20_001

    def test_prices_are_integers(self, rng) -> None:
        """Prices are rounded to whole dollars."""
        assert all(isinstance(r.price, int) for r in generate_dataset(20, rng=rng))

    def test_same_seed_is_deterministic(self) -> None:
        """Same seed produces the same dataset."""
        first = generate_dataset(30, rng=np.random.default_rng(7))
        second = generate_dataset(30, rng=np.random.default_rng(7))

        assert first == second

    def test_fresh_draws_differ(self, rng) -> None:
        """Two draws from one generator are different datasets."""
        assert generate_dataset(30, rng=rng) != generate_dataset(30, rng=rng)

    def test_custom_config(self, rng) -> None:
        """Noise-free config reproduces the formula exactly."""
        config = GeneratorConfig(noise_amplitude=0.0)

        for record in generate_dataset(20, rng=rng, config=config):
            assert record.price == round(
                config.price_for(record.sqft, record.bedrooms, record.bathrooms)
            )


class TestModels:
    """Tests for record models and array conversion."""

    def test_record_to_input_strips_label(self, single_record) -> None:
        """to_input keeps only the features."""
        assert single_record.to_input() == PredictionInput(
            sqft=1000, bedrooms=2, bathrooms=1
        )

    def test_record_to_dict(self, single_record) -> None:
        """to_dict exposes all fields."""
        assert single_record.to_dict() == {
            "id": 0,
            "sqft": 1000,
            "bedrooms": 2,
            "bathrooms": 1,
            "price": 300_000,
        }

    def test_records_to_arrays(self) -> None:
        """Features come out as (N, 3) in sqft, bedrooms, bathrooms order."""
        records = [
            HousingRecord(id=0, sqft=1000, bedrooms=2, bathrooms=1, price=300_000),
            HousingRecord(id=1, sqft=2000, bedrooms=3, bathrooms=2, price=500_000),
        ]

        features, prices = records_to_arrays(records)

        assert features.shape == (2, 3)
        assert features.dtype == np.float64
        np.testing.assert_array_equal(features[1], [2000, 3, 2])
        np.testing.assert_array_equal(prices, [300_000, 500_000])

    def test_records_to_arrays_empty(self) -> None:
        """Empty input keeps the (0, 3) feature shape."""
        features, prices = records_to_arrays([])

        assert features.shape == (0, 3)
        assert prices.shape == (0,)
