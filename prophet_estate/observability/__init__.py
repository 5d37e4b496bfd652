"""
Observability module for training run logging.

This module provides WandB integration for logging loss/accuracy curves and
the final model of each training run.

Usage:
    from prophet_estate.observability import create_wandb_logger

    wandb_logger = create_wandb_logger(project="prophet-estate", enabled=True)
    wandb_logger.start_run(training_config=controller.config)

    # Log each sample (pass as the controller's on_sample callback)
    wandb_logger.log_sample(sample)

    # Log the final model, then finish
    wandb_logger.log_completion(params, controller.dataset, controller.metrics)
    wandb_logger.finish()

Logged Data:
    - train/loss, train/accuracy per sample
    - Final parameters and metrics (scalars)
    - Record predictions table: per-record predicted vs actual price
"""

from .models import PropertyPredictionLog, TrainingRunLog, WandbConfig
from .wandb_logger import WandbLogger, create_wandb_logger

__all__ = [
    # Main entry point
    "create_wandb_logger",
    # Classes
    "WandbLogger",
    "WandbConfig",
    # Log models
    "TrainingRunLog",
    "PropertyPredictionLog",
]
