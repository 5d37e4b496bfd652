"""
CLI configuration management.
"""

from __future__ import annotations

import argparse
import logging
import os
from typing import Any

from prophet_estate.analysis import DEFAULT_MODEL
from prophet_estate.regression import DEFAULT_LEARNING_RATE


def _optional_int(value: str | None) -> int | None:
    return int(value) if value not in (None, "") else None


def add_args(parser: argparse.ArgumentParser) -> None:
    """
    Add shared training/analysis arguments to the parser.

    Arguments can be overridden by environment variables.
    """

    parser.add_argument(
        "--seed",
        type=int,
        help="Seed for dataset generation and initial weights.",
        default=_optional_int(os.environ.get("SEED")),
    )

    parser.add_argument(
        "--dataset.size",
        dest="dataset_size",
        type=int,
        help="Number of synthetic housing records to train on.",
        default=int(os.environ.get("DATASET_SIZE", "50")),
    )

    parser.add_argument(
        "--training.max_epochs",
        dest="max_epochs",
        type=int,
        help="Total gradient-descent updates per run.",
        default=int(os.environ.get("MAX_EPOCHS", "200")),
    )

    parser.add_argument(
        "--training.steps_per_tick",
        dest="steps_per_tick",
        type=int,
        help="Updates performed between reported metric samples.",
        default=int(os.environ.get("STEPS_PER_TICK", "5")),
    )

    parser.add_argument(
        "--training.learning_rate",
        dest="learning_rate",
        type=float,
        help="Gradient-descent step size. Larger values diverge at this data scale.",
        default=float(os.environ.get("LEARNING_RATE", str(DEFAULT_LEARNING_RATE))),
    )

    parser.add_argument(
        "--analysis.api_key",
        dest="analysis_api_key",
        type=str,
        help="Gemini API key for market analysis.",
        default=os.environ.get("GEMINI_API_KEY", ""),
    )

    parser.add_argument(
        "--analysis.model",
        dest="analysis_model",
        type=str,
        help="Gemini model used for market analysis.",
        default=os.environ.get("ANALYSIS_MODEL", DEFAULT_MODEL),
    )

    parser.add_argument(
        "--analysis.timeout",
        dest="analysis_timeout",
        type=float,
        help="Timeout in seconds for the market analysis request.",
        default=float(os.environ.get("ANALYSIS_TIMEOUT", "30")),
    )

    parser.add_argument(
        "--log_level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level.",
        default=os.environ.get("LOG_LEVEL", "WARNING"),
    )

    parser.add_argument(
        "--wandb.on",
        dest="wandb_on",
        action="store_true",
        help="Enable WandB logging of the training run.",
        default=os.environ.get("WANDB_ON", "false").lower() == "true",
    )

    parser.add_argument(
        "--wandb.project",
        dest="wandb_project",
        type=str,
        help="WandB project name.",
        default=os.environ.get("WANDB_PROJECT", "prophet-estate"),
    )

    parser.add_argument(
        "--wandb.entity",
        dest="wandb_entity",
        type=str,
        help="WandB entity.",
        default=os.environ.get("WANDB_ENTITY", ""),
    )


def check_config(config: argparse.Namespace) -> None:
    """
    Validate configuration.

    Raises:
        ValueError: If configuration is invalid.
    """
    if config.dataset_size < 1:
        raise ValueError("--dataset.size must be at least 1 (or set DATASET_SIZE)")

    if config.max_epochs < 1:
        raise ValueError(
            "--training.max_epochs must be at least 1 (or set MAX_EPOCHS)"
        )

    if config.steps_per_tick < 1:
        raise ValueError(
            "--training.steps_per_tick must be at least 1 (or set STEPS_PER_TICK)"
        )

    if config.learning_rate <= 0:
        raise ValueError(
            "--training.learning_rate must be positive (or set LEARNING_RATE)"
        )


def config_to_dict(config: argparse.Namespace) -> dict[str, Any]:
    """Convert config to dictionary for logging."""
    return {
        "seed": config.seed,
        "dataset_size": config.dataset_size,
        "max_epochs": config.max_epochs,
        "steps_per_tick": config.steps_per_tick,
        "learning_rate": config.learning_rate,
        "analysis_api_key": "***" if config.analysis_api_key else "",
        "analysis_model": config.analysis_model,
        "analysis_timeout": config.analysis_timeout,
        "log_level": config.log_level,
        "wandb_on": config.wandb_on,
        "wandb_project": config.wandb_project,
        "wandb_entity": config.wandb_entity,
    }


def setup_logging(level: str) -> None:
    """Configure logging."""
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
