"""
Synthetic housing dataset generation.

Prices follow a known linear formula plus uniform noise, so a correctly
trained regression should recover weights close to the configured ones:

    price = 200 * sqft + 25_000 * bedrooms + 15_000 * bathrooms + 50_000 ± 20_000
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np

from .models import HousingRecord

logger = logging.getLogger(__name__)

DEFAULT_DATASET_SIZE = 100


@dataclass(frozen=True)
class GeneratorConfig:
    """Pricing formula and feature ranges used for synthetic records."""

    min_sqft: int = 800
    max_sqft: int = 3500
    """Exclusive upper bound."""

    sqft_per_bedroom: int = 800
    """Every full multiple of this adds one guaranteed bedroom."""

    price_per_sqft: float = 200.0
    price_per_bedroom: float = 25_000.0
    price_per_bathroom: float = 15_000.0
    base_price: float = 50_000.0

    noise_amplitude: float = 20_000.0
    """Noise is drawn uniformly from [-amplitude, +amplitude)."""

    def price_for(self, sqft: int, bedrooms: int, bathrooms: int) -> float:
        """Noise-free price of a property."""
        return (
            self.price_per_sqft * sqft
            + self.price_per_bedroom * bedrooms
            + self.price_per_bathroom * bathrooms
            + self.base_price
        )


def generate_dataset(
    count: int = DEFAULT_DATASET_SIZE,
    rng: np.random.Generator | None = None,
    config: GeneratorConfig | None = None,
) -> list[HousingRecord]:
    """
    Generate a fresh synthetic housing dataset.

    Args:
        count: Number of records to generate.
        rng: Random source. A new unseeded generator is used if omitted.
        config: Pricing formula. Defaults to GeneratorConfig().

    Returns:
        List of HousingRecord with ids 0..count-1.

    Example:
        >>> records = generate_dataset(50, rng=np.random.default_rng(42))
        >>> len(records)
        50
    """
    rng = rng if rng is not None else np.random.default_rng()
    config = config or GeneratorConfig()

    records: list[HousingRecord] = []
    for i in range(count):
        sqft = int(rng.uniform(config.min_sqft, config.max_sqft))
        bedrooms = sqft // config.sqft_per_bedroom + int(rng.random() * 2)
        extra_bath = 1 if rng.random() > 0.5 else 0
        bathrooms = max(1, int(bedrooms / 1.5) + extra_bath)

        noise = (rng.random() - 0.5) * 2 * config.noise_amplitude
        price = round(config.price_for(sqft, bedrooms, bathrooms) + noise)

        records.append(
            HousingRecord(
                id=i,
                sqft=sqft,
                bedrooms=bedrooms,
                bathrooms=bathrooms,
                price=price,
            )
        )

    logger.debug(f"Generated {len(records)} synthetic housing records")
    return records
