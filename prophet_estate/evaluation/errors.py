"""Custom exceptions for evaluation module."""


class EvaluationError(Exception):
    """Base exception for evaluation-related errors."""

    pass


class MetricsError(EvaluationError):
    """
    Raised when the metric report cannot be calculated.

    This can happen when:
    - Input arrays have different lengths
    - Ground truth contains zero prices (percentage errors undefined)
    """

    pass


class EmptyDatasetError(MetricsError):
    """
    Raised when the metric report is requested for an empty dataset.

    The per-tick training accuracy never raises this; it returns NaN instead.
    """

    pass
