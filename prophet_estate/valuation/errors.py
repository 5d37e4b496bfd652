"""Custom exceptions for valuation module."""


class ValuationError(Exception):
    """Base exception for valuation errors."""

    pass


class ModelNotTrainedError(ValuationError):
    """
    Raised when a price is requested before any training run completed.

    The service only prices properties once a controller has delivered
    final parameters through on_model_ready().
    """

    pass
