"""Data module for synthetic housing records."""

from .generator import DEFAULT_DATASET_SIZE, GeneratorConfig, generate_dataset
from .models import (
    HousingRecord,
    PredictionInput,
    PropertyFeatures,
    records_to_arrays,
)

__all__ = [
    # Generation
    "generate_dataset",
    "GeneratorConfig",
    "DEFAULT_DATASET_SIZE",
    # Models
    "HousingRecord",
    "PredictionInput",
    "PropertyFeatures",
    "records_to_arrays",
]
