"""WandB logging for training runs."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from prophet_estate.regression import predict_price

from .models import (
    PREDICTION_COLUMNS,
    PropertyPredictionLog,
    TrainingRunLog,
    WandbConfig,
)

if TYPE_CHECKING:
    import wandb
    from prophet_estate.data import HousingRecord
    from prophet_estate.evaluation import PredictionMetrics
    from prophet_estate.regression import ModelParameters
    from prophet_estate.training import TrainingConfig, TrainingSample

logger = logging.getLogger(__name__)


class WandbLogger:
    """
    WandB logger for training runs.

    Handles:
    - Initialization of WandB run
    - Logging loss/accuracy per training sample
    - Logging the final model summary and per-record predictions table

    Logging failures are reported and swallowed; they never stop training.

    Usage:
        wandb_logger = WandbLogger(WandbConfig(project="prophet-estate"))
        wandb_logger.start_run(training_config=controller.config)

        controller = TrainingController(on_sample=wandb_logger.log_sample)
        params = controller.run()

        wandb_logger.log_completion(params, controller.dataset, controller.metrics)
        wandb_logger.finish()
    """

    def __init__(self, config: WandbConfig):
        """
        Initialize WandB logger.

        Args:
            config: WandB configuration
        """
        self._config = config
        self._run: wandb.sdk.wandb_run.Run | None = None
        self._wandb: Any = None  # Lazy import
        self._learning_rate: float | None = None

    def _import_wandb(self) -> Any:
        """Lazy import wandb so disabled logging never loads it."""
        if self._wandb is None:
            try:
                import wandb

                self._wandb = wandb
            except ImportError as e:
                logger.error("wandb not installed. Install with: pip install wandb")
                raise ImportError(
                    "wandb is required for WandbLogger. Install with: pip install wandb"
                ) from e
        return self._wandb

    @property
    def is_enabled(self) -> bool:
        """Check if logging is enabled."""
        return self._config.enabled

    @property
    def is_running(self) -> bool:
        """Check if a run is currently active."""
        return self._run is not None

    def start_run(
        self,
        run_name: str | None = None,
        training_config: TrainingConfig | None = None,
    ) -> None:
        """
        Start a new WandB run.

        Args:
            run_name: Optional run name override
            training_config: Hyperparameters recorded as the run config
        """
        if not self._config.enabled:
            logger.info("WandB logging is disabled")
            return

        # Set API key if provided (wandb also checks WANDB_API_KEY env var)
        if self._config.api_key:
            import os

            os.environ["WANDB_API_KEY"] = self._config.api_key

        wandb = self._import_wandb()

        if run_name is None:
            run_name = self._config.run_name
        if run_name is None:
            timestamp = datetime.now(UTC).strftime("%Y%m%d-%H%M%S")
            run_name = f"training-{timestamp}"

        run_config: dict[str, Any] = {}
        if training_config is not None:
            self._learning_rate = training_config.learning_rate
            run_config = {
                "max_epochs": training_config.max_epochs,
                "steps_per_tick": training_config.steps_per_tick,
                "learning_rate": training_config.learning_rate,
                "dataset_size": training_config.dataset_size,
            }

        mode = "offline" if self._config.offline else "online"

        self._run = wandb.init(
            project=self._config.project,
            entity=self._config.entity,
            name=run_name,
            tags=list(self._config.tags),
            config=run_config,
            mode=mode,
        )

        logger.info(f"WandB run started: {self._run.name} ({self._run.url})")

    def finish(self) -> None:
        """Finish the current WandB run."""
        if self._run is not None:
            self._run.finish()
            logger.info("WandB run finished")
            self._run = None

    def log_sample(self, sample: TrainingSample) -> None:
        """Log one training sample. Usable directly as on_sample callback."""
        if not self._config.enabled or self._run is None:
            return

        try:
            self._run.log(
                {"train/loss": sample.loss, "train/accuracy": sample.accuracy},
                step=sample.epoch,
            )
        except Exception as e:
            logger.error(f"Failed to log training sample to WandB: {e}")

    def log_completion(
        self,
        params: ModelParameters,
        dataset: Sequence[HousingRecord],
        samples: Sequence[TrainingSample],
        metrics: PredictionMetrics | None = None,
    ) -> None:
        """
        Log the final model of a completed run.

        Args:
            params: Final parameters
            dataset: Records the model was trained on
            samples: Metrics window of the run (the last one is reported)
            metrics: Optional full evaluation report
        """
        if not self._config.enabled:
            return

        if self._run is None:
            logger.warning("WandB run not started. Call start_run() first.")
            return

        try:
            run_log = self._build_run_log(params, dataset, samples, metrics)
            self._run.log(run_log.to_summary_dict())

            if self._config.log_predictions_table:
                self._log_predictions_table(run_log.predictions)

            logger.info(
                f"Logged training run: loss={run_log.final_loss:.0f}, "
                f"accuracy={run_log.final_accuracy:.4f}"
            )

        except Exception as e:
            logger.error(f"Failed to log training run to WandB: {e}", exc_info=True)

    def _build_run_log(
        self,
        params: ModelParameters,
        dataset: Sequence[HousingRecord],
        samples: Sequence[TrainingSample],
        metrics: PredictionMetrics | None,
    ) -> TrainingRunLog:
        """Build TrainingRunLog from the final model."""
        latest = samples[-1] if samples else None

        predictions = [
            PropertyPredictionLog(
                record_id=record.id,
                sqft=record.sqft,
                predicted_price=predict_price(record, params),
                ground_truth_price=float(record.price),
            )
            for record in dataset
        ]

        return TrainingRunLog(
            timestamp=datetime.now(UTC),
            dataset_size=len(dataset),
            epochs=latest.epoch + 1 if latest else 0,
            learning_rate=self._learning_rate or 0.0,
            w_sqft=params.w_sqft,
            w_beds=params.w_beds,
            w_baths=params.w_baths,
            bias=params.bias,
            final_loss=latest.loss if latest else float("nan"),
            final_accuracy=latest.accuracy if latest else float("nan"),
            rmse=metrics.rmse if metrics else None,
            mae=metrics.mae if metrics else None,
            mape=metrics.mape if metrics else None,
            predictions=predictions,
        )

    def _log_predictions_table(self, predictions: list[PropertyPredictionLog]) -> None:
        """Log per-record predictions as a WandB table."""
        wandb = self._import_wandb()

        table = wandb.Table(columns=PREDICTION_COLUMNS)
        for prediction in predictions:
            table.add_data(*prediction.to_row())

        self._run.log({"record_predictions": table})
        logger.debug(f"Logged {len(predictions)} record predictions")


def create_wandb_logger(
    project: str = "prophet-estate",
    entity: str | None = None,
    api_key: str | None = None,
    enabled: bool = True,
    offline: bool = False,
    log_predictions_table: bool = True,
) -> WandbLogger:
    """
    Create a WandB logger with common configuration.

    Args:
        project: WandB project name
        entity: WandB entity (team/user)
        api_key: WandB API key (or set WANDB_API_KEY env var)
        enabled: Whether logging is enabled
        offline: Run in offline mode
        log_predictions_table: Log per-record predictions of the final model

    Example:
        logger = create_wandb_logger(enabled=config.wandb_on)
        logger.start_run()
        ...
        logger.finish()
    """
    config = WandbConfig(
        project=project,
        entity=entity or None,
        api_key=api_key or None,
        enabled=enabled,
        offline=offline,
        log_predictions_table=log_predictions_table,
    )
    return WandbLogger(config)
