"""
ProphetEstate CLI - train a house price regression and price properties.

Usage:
    prophet-estate generate --count 50 --seed 7
    prophet-estate train --seed 7 --training.max_epochs 200
    prophet-estate predict --sqft 2000 --bedrooms 3 --bathrooms 2
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys

import numpy as np
from dotenv import load_dotenv

from prophet_estate.analysis import AnalysisError, create_analysis_client
from prophet_estate.data import PredictionInput, generate_dataset
from prophet_estate.evaluation import (
    EvaluationError,
    PredictionMetrics,
    evaluate_parameters,
)
from prophet_estate.observability import create_wandb_logger
from prophet_estate.regression import ModelParameters
from prophet_estate.training import (
    TrainingController,
    TrainingSample,
    create_controller,
)
from prophet_estate.valuation import ValuationError, ValuationService

from .config import add_args, check_config, config_to_dict, setup_logging

logger = logging.getLogger(__name__)


def _print_progress(sample: TrainingSample, max_epochs: int) -> None:
    # Overwrite line with progress
    print(
        f"\r  Epoch {sample.epoch + 1:>5}/{max_epochs}"
        f"  loss={sample.loss:>16,.0f}  accuracy={sample.accuracy:6.1%}",
        end="",
        flush=True,
    )


def _print_parameters(params: ModelParameters) -> None:
    print("Learned parameters:")
    print(f"  $/sqft:     {params.w_sqft:,.2f}")
    print(f"  $/bedroom:  {params.w_beds:,.2f}")
    print(f"  $/bathroom: {params.w_baths:,.2f}")
    print(f"  Bias:       {params.bias:,.2f}")
    print()


def _print_metrics(metrics: PredictionMetrics) -> None:
    print("Training-set metrics:")
    print(f"  Accuracy (R²): {metrics.accuracy:.2%}")
    print(f"  MAE:           ${metrics.mae:,.0f}")
    print(f"  RMSE:          ${metrics.rmse:,.0f}")
    print(f"  MAPE:          {metrics.mape:.2%}")
    for threshold, value in sorted(metrics.within_threshold.items()):
        label = f"Within {threshold:.0%}:"
        print(f"  {label:<15}{value:.2%}")
    print()


async def _run_training(
    config: argparse.Namespace,
    service: ValuationService | None = None,
) -> tuple[TrainingController, ModelParameters | None]:
    """Train one model with the cooperative driver and optional WandB logging."""
    wandb_logger = create_wandb_logger(
        project=config.wandb_project,
        entity=config.wandb_entity,
        enabled=config.wandb_on,
    )

    def on_sample(sample: TrainingSample) -> None:
        _print_progress(sample, config.max_epochs)
        wandb_logger.log_sample(sample)

    controller = create_controller(
        max_epochs=config.max_epochs,
        steps_per_tick=config.steps_per_tick,
        learning_rate=config.learning_rate,
        dataset_size=config.dataset_size,
        seed=config.seed,
        on_model_ready=service.on_model_ready if service else None,
        on_sample=on_sample,
    )

    print(
        f"Training on {len(controller.dataset)} synthetic records "
        f"for {config.max_epochs} epochs..."
    )
    wandb_logger.start_run(training_config=controller.config)
    try:
        params = await controller.run_async()
        print()
        print()

        if params is not None:
            wandb_logger.log_completion(
                params,
                controller.dataset,
                controller.metrics,
                evaluate_parameters(controller.dataset, params),
            )
    finally:
        wandb_logger.finish()

    return controller, params


def cmd_generate(args: argparse.Namespace) -> int:
    """Execute the generate command."""
    records = generate_dataset(args.count, rng=np.random.default_rng(args.seed))
    print(json.dumps([r.to_dict() for r in records], indent=2))
    return 0


def cmd_train(args: argparse.Namespace) -> int:
    """Execute the train command."""
    controller, params = asyncio.run(_run_training(args))

    if params is None:
        print("ERROR: Training did not complete", file=sys.stderr)
        return 1

    _print_parameters(params)
    _print_metrics(evaluate_parameters(controller.dataset, params))

    print("✓ Training complete.")
    return 0


async def _predict(args: argparse.Namespace) -> int:
    analysis_client = None
    if not args.no_analysis:
        analysis_client = create_analysis_client(
            api_key=args.analysis_api_key,
            model=args.analysis_model,
            timeout=args.analysis_timeout,
        )

    service = ValuationService(analysis_client=analysis_client)
    await _run_training(args, service)

    request = PredictionInput(
        sqft=args.sqft, bedrooms=args.bedrooms, bathrooms=args.bathrooms
    )
    appraisal = await service.appraise(request)
    valuation = appraisal.valuation

    print("Base Model Estimate:")
    print(f"  Price:         ${valuation.price:,.0f}")
    print(f"  SqFt impact:   +${valuation.sqft_impact:,.0f}")
    print(f"  Feature value: +${valuation.feature_value:,.0f}")
    print()

    if appraisal.analysis is not None:
        analysis = appraisal.analysis
        print("Market Analysis:")
        print(f"  Refined valuation: {analysis.price_range}")
        print(f"  Market sentiment:  {analysis.sentiment}")
        print("  Key value drivers:")
        for factor in analysis.key_factors:
            print(f"    - {factor}")
        print()

    return 0


def cmd_predict(args: argparse.Namespace) -> int:
    """Execute the predict command."""
    return asyncio.run(_predict(args))


def parse_args(args: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="prophet-estate",
        description="ProphetEstate - train a linear regression on synthetic housing data",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
        help="Command to execute",
    )

    # Shared training/analysis options
    common = argparse.ArgumentParser(add_help=False)
    add_args(common)

    # ─────────────────────────────────────────────────────────────────────────
    # GENERATE command
    # ─────────────────────────────────────────────────────────────────────────
    generate_parser = subparsers.add_parser(
        "generate",
        help="Print a synthetic housing dataset as JSON",
    )

    generate_parser.add_argument(
        "--count",
        type=int,
        default=100,
        metavar="N",
        help="Number of records (default: 100)",
    )

    generate_parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed (default: nondeterministic)",
    )

    # ─────────────────────────────────────────────────────────────────────────
    # TRAIN command
    # ─────────────────────────────────────────────────────────────────────────
    subparsers.add_parser(
        "train",
        parents=[common],
        help="Train the model and report its metrics",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    # ─────────────────────────────────────────────────────────────────────────
    # PREDICT command
    # ─────────────────────────────────────────────────────────────────────────
    predict_parser = subparsers.add_parser(
        "predict",
        parents=[common],
        help="Train the model, then price a property",
        description="Models are not persisted, so every prediction trains first.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    predict_parser.add_argument("--sqft", type=int, required=True)
    predict_parser.add_argument("--bedrooms", type=int, required=True)
    predict_parser.add_argument("--bathrooms", type=int, required=True)

    predict_parser.add_argument(
        "--no-analysis",
        dest="no_analysis",
        action="store_true",
        help="Skip the market analysis request",
    )

    return parser.parse_args(args)


def main(args: list[str] | None = None) -> int:
    """CLI entry point."""
    # .env must be loaded before argparse reads environment defaults
    load_dotenv()
    config = parse_args(args)

    if config.command != "generate":
        setup_logging(config.log_level)
        try:
            check_config(config)
        except ValueError as e:
            print(f"ERROR: {e}", file=sys.stderr)
            return 2
        logger.debug(f"Configuration: {config_to_dict(config)}")

    try:
        if config.command == "generate":
            return cmd_generate(config)
        elif config.command == "train":
            return cmd_train(config)
        elif config.command == "predict":
            return cmd_predict(config)
        else:
            print(f"ERROR: Unknown command: {config.command}", file=sys.stderr)
            return 2

    except (ValuationError, EvaluationError, AnalysisError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted")
        return 130
    except Exception as e:
        print(f"ERROR: Unexpected error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
