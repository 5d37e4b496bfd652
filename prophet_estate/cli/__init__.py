"""
Command-line interface for ProphetEstate.

This module provides commands to:
- Print a synthetic housing dataset
- Train the regression model and report its metrics
- Train, then price a property with an optional market analysis

Usage:
    # Print 50 reproducible records as JSON
    prophet-estate generate --count 50 --seed 7

    # Train and report
    prophet-estate train --seed 7 --wandb.on

    # Price a property
    prophet-estate predict --sqft 2000 --bedrooms 3 --bathrooms 2

Training options can also be set with environment variables (or a .env
file), e.g. MAX_EPOCHS, LEARNING_RATE and GEMINI_API_KEY.
"""

from .cli import main, parse_args
from .config import add_args, check_config, config_to_dict, setup_logging

__all__ = [
    # Entry point
    "main",
    "parse_args",
    # Configuration
    "add_args",
    "check_config",
    "config_to_dict",
    "setup_logging",
]
