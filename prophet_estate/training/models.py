"""Data models for training runs."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from prophet_estate.regression import DEFAULT_LEARNING_RATE, ModelParameters


class TrainingState(str, Enum):
    """Lifecycle of a training run."""

    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class TrainingConfig:
    """Configuration for the training controller."""

    max_epochs: int = 200
    """Total number of gradient-descent updates in one run."""

    steps_per_tick: int = 5
    """Updates performed before one metric sample is published."""

    learning_rate: float = DEFAULT_LEARNING_RATE

    dataset_size: int = 50
    """Records generated when no dataset is supplied."""

    history_size: int = 50
    """Number of most recent samples kept in the metrics window."""

    tick_interval: float = 0.0
    """Seconds the async driver sleeps between ticks (0 = just yield)."""

    def __post_init__(self) -> None:
        if self.max_epochs < 1:
            raise ValueError(f"max_epochs must be >= 1, got {self.max_epochs}")
        if self.steps_per_tick < 1:
            raise ValueError(
                f"steps_per_tick must be >= 1, got {self.steps_per_tick}"
            )
        if self.history_size < 1:
            raise ValueError(f"history_size must be >= 1, got {self.history_size}")
        if self.tick_interval < 0:
            raise ValueError(
                f"tick_interval must be >= 0, got {self.tick_interval}"
            )


@dataclass(frozen=True)
class TrainingSample:
    """
    One point of the metrics stream.

    `epoch` is a display counter: the 0-based index of the last update step
    in the tick that produced this sample (4, 9, 14, ... with 5 steps/tick).
    """

    epoch: int
    loss: float  # MSE
    accuracy: float  # R² clamped at 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        return {"epoch": self.epoch, "loss": self.loss, "accuracy": self.accuracy}


@dataclass(frozen=True)
class TrainingSnapshot:
    """Immutable view of a controller, safe to hand to any reader."""

    state: TrainingState
    epoch: int
    """Updates performed so far in the current run."""

    max_epochs: int
    parameters: ModelParameters
    metrics: tuple[TrainingSample, ...]

    @property
    def progress(self) -> float:
        """Percent of the epoch budget consumed (0-100)."""
        return 100.0 * self.epoch / self.max_epochs

    @property
    def latest(self) -> TrainingSample | None:
        """Most recent sample, or None before the first tick."""
        return self.metrics[-1] if self.metrics else None
