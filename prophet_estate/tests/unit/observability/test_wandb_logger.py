"""Tests for WandB logger."""

from unittest.mock import MagicMock

import pytest

from prophet_estate.data import HousingRecord
from prophet_estate.observability import WandbConfig, WandbLogger, create_wandb_logger
from prophet_estate.regression import ModelParameters
from prophet_estate.training import TrainingConfig, TrainingSample

PARAMS = ModelParameters(w_sqft=200.0, w_beds=25_000.0, w_baths=15_000.0, bias=50_000.0)

RECORDS = [
    HousingRecord(id=0, sqft=1000, bedrooms=1, bathrooms=1, price=300_000),
    HousingRecord(id=1, sqft=2000, bedrooms=3, bathrooms=2, price=560_000),
]

SAMPLES = [
    TrainingSample(epoch=194, loss=4.0e8, accuracy=0.91),
    TrainingSample(epoch=199, loss=3.9e8, accuracy=0.92),
]


def create_started_logger(**config_kwargs) -> tuple[WandbLogger, MagicMock]:
    """Helper to create a logger with a mocked wandb module and active run."""
    logger = WandbLogger(WandbConfig(enabled=True, **config_kwargs))

    mock_wandb = MagicMock()
    mock_run = MagicMock()
    mock_run.name = "test-run"
    mock_run.url = "https://wandb.ai/test"
    mock_wandb.init.return_value = mock_run
    logger._wandb = mock_wandb

    logger.start_run(training_config=TrainingConfig())
    return logger, mock_run


class TestWandbLoggerDisabledBehavior:
    """Tests for disabled logger behavior."""

    def test_start_run_does_nothing_when_disabled(self) -> None:
        """Test start_run is no-op when disabled."""
        logger = WandbLogger(WandbConfig(enabled=False))

        logger.start_run()

        assert logger._run is None
        assert logger.is_running is False

    def test_log_sample_does_nothing_when_disabled(self) -> None:
        """Test log_sample is no-op when disabled."""
        logger = WandbLogger(WandbConfig(enabled=False))

        # Should not raise
        logger.log_sample(SAMPLES[0])

    def test_log_completion_warns_when_not_started(self) -> None:
        """Test log_completion warns when run not started."""
        logger = WandbLogger(WandbConfig(enabled=True))

        # Should not raise, just warn (no run started)
        logger.log_completion(PARAMS, RECORDS, SAMPLES)

        assert logger._run is None


class TestWandbLoggerStartRun:
    """Tests for start_run method."""

    def test_start_run_calls_wandb_init_with_config(self) -> None:
        """Test that start_run calls wandb.init with correct parameters."""
        logger = WandbLogger(
            WandbConfig(project="test-project", entity="test-entity", tags=["ci"])
        )
        mock_wandb = MagicMock()
        logger._wandb = mock_wandb

        logger.start_run(run_name="my-custom-run", training_config=TrainingConfig())

        mock_wandb.init.assert_called_once()
        call_kwargs = mock_wandb.init.call_args.kwargs
        assert call_kwargs["project"] == "test-project"
        assert call_kwargs["entity"] == "test-entity"
        assert call_kwargs["name"] == "my-custom-run"
        assert call_kwargs["tags"] == ["ci"]
        assert call_kwargs["mode"] == "online"
        assert call_kwargs["config"]["learning_rate"] == 1e-7
        assert call_kwargs["config"]["max_epochs"] == 200

    def test_start_run_generates_run_name_if_not_provided(self) -> None:
        """Test that start_run generates a run name if not provided."""
        logger = WandbLogger(WandbConfig(offline=True))
        mock_wandb = MagicMock()
        logger._wandb = mock_wandb

        logger.start_run()

        call_kwargs = mock_wandb.init.call_args.kwargs
        assert call_kwargs["name"].startswith("training-")
        assert call_kwargs["mode"] == "offline"

    def test_finish_closes_run(self) -> None:
        """Test that finish ends the active run."""
        logger, mock_run = create_started_logger()

        logger.finish()

        mock_run.finish.assert_called_once()
        assert logger.is_running is False


class TestWandbLoggerLogging:
    """Tests for sample and completion logging."""

    def test_log_sample(self) -> None:
        """Samples are logged at their epoch."""
        logger, mock_run = create_started_logger()

        logger.log_sample(SAMPLES[0])

        mock_run.log.assert_called_once_with(
            {"train/loss": 4.0e8, "train/accuracy": 0.91}, step=194
        )

    def test_log_sample_swallows_errors(self) -> None:
        """A failing WandB call never interrupts training."""
        logger, mock_run = create_started_logger()
        mock_run.log.side_effect = RuntimeError("network down")

        # Should not raise
        logger.log_sample(SAMPLES[0])

    def test_log_completion_summary(self) -> None:
        """Completion logs final parameters and the last sample."""
        logger, mock_run = create_started_logger(log_predictions_table=False)

        logger.log_completion(PARAMS, RECORDS, SAMPLES)

        summary = mock_run.log.call_args_list[0].args[0]
        assert summary["final/w_sqft"] == 200.0
        assert summary["final/loss"] == 3.9e8
        assert summary["final/accuracy"] == 0.92
        assert summary["epochs"] == 200
        assert summary["dataset_size"] == 2
        assert summary["learning_rate"] == 1e-7
        assert summary["final/rmse"] is None

    def test_log_completion_predictions_table(self) -> None:
        """Per-record predictions are logged as a table."""
        logger, mock_run = create_started_logger()
        table = logger._wandb.Table.return_value

        logger.log_completion(PARAMS, RECORDS, SAMPLES)

        assert mock_run.log.call_count == 2
        assert mock_run.log.call_args_list[1].args[0] == {"record_predictions": table}
        assert table.add_data.call_count == 2
        # 200*1000 + 25000 + 15000 + 50000
        first_row = table.add_data.call_args_list[0].args
        assert first_row[:4] == (0, 1000, 290_000.0, 300_000.0)
        assert first_row[4] == 10_000.0

    def test_build_run_log_without_samples(self) -> None:
        """An empty metrics window yields NaN final metrics."""
        logger, _ = create_started_logger()

        run_log = logger._build_run_log(PARAMS, RECORDS, [], None)

        assert run_log.epochs == 0
        assert run_log.final_loss != run_log.final_loss  # NaN


class TestCreateWandbLogger:
    """Tests for create_wandb_logger factory."""

    def test_empty_strings_become_none(self) -> None:
        """CLI defaults of '' map to unset entity/api key."""
        logger = create_wandb_logger(entity="", api_key="", enabled=False)

        assert logger._config.entity is None
        assert logger._config.api_key is None
        assert logger.is_enabled is False

    @pytest.mark.parametrize("enabled", [True, False])
    def test_enabled_flag(self, enabled) -> None:
        """enabled flag is passed through."""
        assert create_wandb_logger(enabled=enabled).is_enabled is enabled
