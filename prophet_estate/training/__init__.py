"""
Training module - drives gradient descent and tracks loss/accuracy.

This module provides:
- TrainingController: IDLE/RUNNING/COMPLETED/CANCELLED state machine with
  synchronous, step-by-step and asyncio drivers
- TrainingSample: one point of the bounded metrics stream

Usage:
    from prophet_estate.training import create_controller

    controller = create_controller(seed=42, on_model_ready=service.on_model_ready)
    params = await controller.run_async()
"""

from .controller import TrainingController, create_controller
from .models import TrainingConfig, TrainingSample, TrainingSnapshot, TrainingState

__all__ = [
    # Factory (main entry point)
    "create_controller",
    # Controller
    "TrainingController",
    "TrainingConfig",
    # Models
    "TrainingSample",
    "TrainingSnapshot",
    "TrainingState",
]
