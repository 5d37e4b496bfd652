"""Shared fixtures for unit tests."""

import numpy as np
import pytest

from prophet_estate.data import HousingRecord, generate_dataset


@pytest.fixture
def rng() -> np.random.Generator:
    """Seeded random source so every test run sees the same data."""
    return np.random.default_rng(42)


@pytest.fixture
def dataset(rng: np.random.Generator) -> list[HousingRecord]:
    """Small synthetic dataset (50 records)."""
    return generate_dataset(50, rng=rng)


@pytest.fixture
def single_record() -> HousingRecord:
    """One hand-written record with easy arithmetic."""
    return HousingRecord(id=0, sqft=1000, bedrooms=2, bathrooms=1, price=300_000)
