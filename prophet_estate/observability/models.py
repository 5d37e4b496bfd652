"""Data models for observability and WandB logging."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass
class PropertyPredictionLog:
    """
    Log entry for a single record prediction of the final model.

    One row of the predictions table logged when a run completes.
    """

    record_id: int

    sqft: int
    predicted_price: float
    ground_truth_price: float

    # Computed fields
    absolute_error: float | None = None
    percentage_error: float | None = None

    def __post_init__(self) -> None:
        """Compute derived fields."""
        if self.absolute_error is None:
            self.absolute_error = abs(self.predicted_price - self.ground_truth_price)
        if self.percentage_error is None and self.ground_truth_price > 0:
            self.percentage_error = self.absolute_error / self.ground_truth_price

    def to_row(self) -> list[Any]:
        """Row values in PREDICTION_COLUMNS order."""
        return [
            self.record_id,
            self.sqft,
            round(self.predicted_price, 2),
            round(self.ground_truth_price, 2),
            round(self.absolute_error, 2) if self.absolute_error is not None else None,
            (
                round(self.percentage_error, 6)
                if self.percentage_error is not None
                else None
            ),
        ]


PREDICTION_COLUMNS = [
    "record_id",
    "sqft",
    "predicted_price",
    "ground_truth_price",
    "absolute_error",
    "percentage_error",
]


@dataclass
class TrainingRunLog:
    """
    Summary of a completed training run.

    Logged as scalars; per-record predictions go to a separate table.
    """

    timestamp: datetime

    # Run setup
    dataset_size: int
    epochs: int
    learning_rate: float

    # Final model
    w_sqft: float
    w_beds: float
    w_baths: float
    bias: float

    # Final metrics (from the last training sample)
    final_loss: float
    final_accuracy: float

    # Optional full report (from evaluation.evaluate_parameters)
    rmse: float | None = None
    mae: float | None = None
    mape: float | None = None

    predictions: list[PropertyPredictionLog] = field(default_factory=list)

    def to_summary_dict(self) -> dict[str, Any]:
        """Convert to dictionary for WandB scalar logging."""
        return {
            "timestamp": self.timestamp.isoformat(),
            "dataset_size": self.dataset_size,
            "epochs": self.epochs,
            "learning_rate": self.learning_rate,
            "final/w_sqft": self.w_sqft,
            "final/w_beds": self.w_beds,
            "final/w_baths": self.w_baths,
            "final/bias": self.bias,
            "final/loss": self.final_loss,
            "final/accuracy": round(self.final_accuracy, 6),
            "final/rmse": round(self.rmse, 2) if self.rmse is not None else None,
            "final/mae": round(self.mae, 2) if self.mae is not None else None,
            "final/mape": round(self.mape, 6) if self.mape is not None else None,
        }


@dataclass
class WandbConfig:
    """Configuration for WandB logging."""

    # Project settings
    project: str = "prophet-estate"
    entity: str | None = None  # WandB team/user, None = default

    # Authentication
    api_key: str | None = None  # WandB API key, or set WANDB_API_KEY env var

    # Run settings
    run_name: str | None = None  # Auto-generated if None
    tags: list[str] = field(default_factory=list)

    # Feature flags
    enabled: bool = True
    offline: bool = False  # Run in offline mode

    # What to log
    log_predictions_table: bool = True  # Per-record predictions of final model
