"""Training controller - drives gradient descent over a fixed dataset."""

from __future__ import annotations

import asyncio
import logging
from collections import deque
from collections.abc import Callable, Sequence

import numpy as np

from prophet_estate.data import HousingRecord, generate_dataset, records_to_arrays
from prophet_estate.evaluation import calculate_accuracy
from prophet_estate.regression import (
    DEFAULT_LEARNING_RATE,
    ModelParameters,
    initialize_weights,
    predict_many,
    train_step,
)

from .models import TrainingConfig, TrainingSample, TrainingSnapshot, TrainingState

logger = logging.getLogger(__name__)


class TrainingController:
    """
    Run a training session as a sequence of ticks.

    Each tick performs `steps_per_tick` consecutive update steps and then
    publishes one TrainingSample. When `max_epochs` updates have run, the
    final parameters are delivered to `on_model_ready` exactly once.

    State machine:
        IDLE --start()--> RUNNING --(budget exhausted)--> COMPLETED
        RUNNING --cancel()--> CANCELLED
        any state --reset()--> IDLE

    The controller is the only writer of the current parameters. Readers
    get immutable ModelParameters / TrainingSnapshot values.

    Usage:
        controller = TrainingController(on_model_ready=service.on_model_ready)
        params = await controller.run_async()

        # or, step by step from a host loop:
        controller.start()
        while controller.state is TrainingState.RUNNING:
            controller.tick()
    """

    def __init__(
        self,
        config: TrainingConfig | None = None,
        dataset: Sequence[HousingRecord] | None = None,
        rng: np.random.Generator | None = None,
        on_model_ready: Callable[[ModelParameters], None] | None = None,
        on_sample: Callable[[TrainingSample], None] | None = None,
    ):
        """
        Initialize controller.

        Args:
            config: Training configuration.
            dataset: Training records. Generated from `rng` if omitted.
            rng: Random source for dataset generation and initial parameters.
            on_model_ready: Receives the final parameters of a completed run.
            on_sample: Receives every published TrainingSample.
        """
        self._config = config or TrainingConfig()
        self._rng = rng if rng is not None else np.random.default_rng()
        self._on_model_ready = on_model_ready
        self._on_sample = on_sample

        if dataset is None:
            dataset = generate_dataset(self._config.dataset_size, self._rng)
        self._set_dataset(dataset)

        self._parameters = initialize_weights(self._rng)
        self._metrics: deque[TrainingSample] = deque(
            maxlen=self._config.history_size
        )
        self._state = TrainingState.IDLE
        self._epoch = 0
        # Bumped on start/reset so a stale async driver notices and stops
        self._run_id = 0

    def _set_dataset(self, dataset: Sequence[HousingRecord]) -> None:
        self._dataset = tuple(dataset)
        _, self._prices = records_to_arrays(self._dataset)

    # --- Read-only views ---

    @property
    def config(self) -> TrainingConfig:
        return self._config

    @property
    def state(self) -> TrainingState:
        return self._state

    @property
    def dataset(self) -> tuple[HousingRecord, ...]:
        return self._dataset

    @property
    def parameters(self) -> ModelParameters:
        """Current parameters (immutable snapshot)."""
        return self._parameters

    @property
    def epoch(self) -> int:
        """Updates performed so far in the current run."""
        return self._epoch

    @property
    def metrics(self) -> tuple[TrainingSample, ...]:
        """Most recent samples, oldest first."""
        return tuple(self._metrics)

    @property
    def progress(self) -> float:
        """Percent of the epoch budget consumed (0-100)."""
        return 100.0 * self._epoch / self._config.max_epochs

    def snapshot(self) -> TrainingSnapshot:
        """Consistent immutable view of the controller."""
        return TrainingSnapshot(
            state=self._state,
            epoch=self._epoch,
            max_epochs=self._config.max_epochs,
            parameters=self._parameters,
            metrics=tuple(self._metrics),
        )

    # --- Lifecycle ---

    def start(self) -> bool:
        """
        Begin a run.

        Only valid from IDLE. Repeated calls while RUNNING are no-ops, and a
        COMPLETED or CANCELLED run must be reset before starting again.

        Returns:
            True if a new run was started.
        """
        if self._state is TrainingState.RUNNING:
            logger.debug("Training already running, ignoring start")
            return False

        if self._state is not TrainingState.IDLE:
            logger.warning(
                f"Cannot start training from state {self._state.value}; reset first"
            )
            return False

        self._state = TrainingState.RUNNING
        self._run_id += 1
        logger.info(
            f"Training started: {self._config.max_epochs} epochs on "
            f"{len(self._dataset)} records (lr={self._config.learning_rate:g})"
        )
        return True

    def tick(self) -> TrainingSample | None:
        """
        Perform one batch of update steps and publish one sample.

        The last tick of a run is shortened so exactly `max_epochs` updates
        run in total.

        Returns:
            The published sample, or None if no run is in progress.
        """
        if self._state is not TrainingState.RUNNING:
            return None

        steps = min(
            self._config.steps_per_tick, self._config.max_epochs - self._epoch
        )

        params = self._parameters
        loss = float("nan")
        for _ in range(steps):
            params, loss = train_step(
                self._dataset, params, self._config.learning_rate
            )
        self._parameters = params

        accuracy = calculate_accuracy(
            self._prices, predict_many(self._dataset, params)
        )
        sample = TrainingSample(
            epoch=self._epoch + steps - 1, loss=loss, accuracy=accuracy
        )
        self._epoch += steps
        self._metrics.append(sample)

        logger.debug(
            f"Epoch {sample.epoch}: loss={sample.loss:.0f}, "
            f"accuracy={sample.accuracy:.4f}"
        )

        if self._on_sample is not None:
            self._on_sample(sample)

        if self._epoch >= self._config.max_epochs and (
            self._state is TrainingState.RUNNING
        ):
            self._complete()

        return sample

    def _complete(self) -> None:
        self._state = TrainingState.COMPLETED
        latest = self._metrics[-1]
        logger.info(
            f"Training complete after {self._epoch} epochs: "
            f"loss={latest.loss:.0f}, accuracy={latest.accuracy:.4f}"
        )
        if self._on_model_ready is not None:
            self._on_model_ready(self._parameters)

    def run(self) -> ModelParameters | None:
        """
        Drive a run to completion synchronously.

        Returns:
            Final parameters if the run completed, None if it could not start
            or was cancelled/reset from a callback.
        """
        if not self.start():
            return None

        run_id = self._run_id
        while self._state is TrainingState.RUNNING and self._run_id == run_id:
            self.tick()

        return self._finished_parameters(run_id)

    async def run_async(self) -> ModelParameters | None:
        """
        Drive a run cooperatively, yielding to the event loop between ticks.

        A cancel() or reset() issued by another task takes effect at the next
        tick boundary.

        Returns:
            Final parameters if the run completed, otherwise None.
        """
        if not self.start():
            return None

        run_id = self._run_id
        while self._state is TrainingState.RUNNING and self._run_id == run_id:
            self.tick()
            if self._state is TrainingState.RUNNING:
                await asyncio.sleep(self._config.tick_interval)

        return self._finished_parameters(run_id)

    def _finished_parameters(self, run_id: int) -> ModelParameters | None:
        if self._run_id == run_id and self._state is TrainingState.COMPLETED:
            return self._parameters
        return None

    def cancel(self) -> None:
        """
        Stop an in-progress run at the current tick boundary.

        Partial parameters and metrics stay available for display but are
        never delivered to `on_model_ready`. No-op unless RUNNING.
        """
        if self._state is not TrainingState.RUNNING:
            return

        self._state = TrainingState.CANCELLED
        logger.info(
            f"Training cancelled at epoch {self._epoch}/{self._config.max_epochs}"
        )

    def reset(self, regenerate_dataset: bool = False) -> None:
        """
        Return to IDLE from any state with freshly initialized parameters.

        Args:
            regenerate_dataset: Also replace the dataset with a fresh sample
                of the same size.
        """
        self._run_id += 1
        self._state = TrainingState.IDLE
        self._epoch = 0
        self._metrics.clear()

        if regenerate_dataset:
            self._set_dataset(generate_dataset(len(self._dataset), self._rng))

        self._parameters = initialize_weights(self._rng)
        logger.info("Training reset")


def create_controller(
    max_epochs: int = 200,
    steps_per_tick: int = 5,
    learning_rate: float = DEFAULT_LEARNING_RATE,
    dataset_size: int = 50,
    seed: int | None = None,
    on_model_ready: Callable[[ModelParameters], None] | None = None,
    on_sample: Callable[[TrainingSample], None] | None = None,
) -> TrainingController:
    """
    Create a training controller with a freshly generated dataset.

    Args:
        max_epochs: Total update steps per run
        steps_per_tick: Update steps per published sample
        learning_rate: Gradient-descent step size (default 1e-7)
        dataset_size: Number of synthetic records
        seed: Seed for dataset and initial parameters. None = nondeterministic.
        on_model_ready: Completion callback
        on_sample: Per-sample observer

    Example:
        controller = create_controller(seed=42, on_model_ready=print)
        controller.run()
    """
    config = TrainingConfig(
        max_epochs=max_epochs,
        steps_per_tick=steps_per_tick,
        learning_rate=learning_rate,
        dataset_size=dataset_size,
    )
    return TrainingController(
        config=config,
        rng=np.random.default_rng(seed),
        on_model_ready=on_model_ready,
        on_sample=on_sample,
    )
