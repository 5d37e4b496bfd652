"""
Valuation - prices properties once a training run delivered its model.

Usage:
    from prophet_estate.valuation import ValuationService

    service = ValuationService(analysis_client=client)
    controller = create_controller(on_model_ready=service.on_model_ready)
    controller.run()
    valuation = service.estimate(PredictionInput(sqft=2000, bedrooms=3, bathrooms=2))
"""

from .errors import ModelNotTrainedError, ValuationError
from .models import Appraisal, Valuation
from .service import ValuationService

__all__ = [
    "ValuationService",
    # Models
    "Valuation",
    "Appraisal",
    # Errors
    "ValuationError",
    "ModelNotTrainedError",
]
