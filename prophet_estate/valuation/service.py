"""Valuation service - prices properties with the trained model."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from prophet_estate.data import PredictionInput
from prophet_estate.regression import ModelParameters, predict_price

from .errors import ModelNotTrainedError
from .models import Appraisal, Valuation

if TYPE_CHECKING:
    from prophet_estate.analysis import AnalysisClient

logger = logging.getLogger(__name__)


class ValuationService:
    """
    Consumer of trained models.

    Register on_model_ready() as the controller's completion callback.
    Until a model is delivered every estimate raises ModelNotTrainedError.

    Usage:
        service = ValuationService(analysis_client=client)
        controller = TrainingController(on_model_ready=service.on_model_ready)
        await controller.run_async()
        appraisal = await service.appraise(PredictionInput(2000, 3, 2))
    """

    def __init__(self, analysis_client: AnalysisClient | None = None):
        """
        Initialize service.

        Args:
            analysis_client: Optional market analysis collaborator.
        """
        self._analysis_client = analysis_client
        self._parameters: ModelParameters | None = None

    @property
    def is_model_trained(self) -> bool:
        return self._parameters is not None

    @property
    def parameters(self) -> ModelParameters | None:
        return self._parameters

    def on_model_ready(self, params: ModelParameters) -> None:
        """Accept final parameters from a completed training run."""
        self._parameters = params
        logger.info(
            f"Model ready: w_sqft={params.w_sqft:.2f}, w_beds={params.w_beds:.2f}, "
            f"w_baths={params.w_baths:.2f}, bias={params.bias:.2f}"
        )

    def estimate(self, request: PredictionInput) -> Valuation:
        """
        Price a property with the current model.

        Raises:
            ModelNotTrainedError: If no model has been delivered yet
        """
        params = self._parameters
        if params is None:
            raise ModelNotTrainedError("Train a model before requesting estimates")

        return Valuation(
            request=request,
            price=predict_price(request, params),
            sqft_impact=request.sqft * params.w_sqft,
            feature_value=(
                request.bedrooms * params.w_beds + request.bathrooms * params.w_baths
            ),
        )

    async def appraise(self, request: PredictionInput) -> Appraisal:
        """
        Estimate a price and enrich it with the market analysis.

        Analysis failures never propagate; the client degrades to a canned
        answer. Without a client the analysis is None.

        Raises:
            ModelNotTrainedError: If no model has been delivered yet
        """
        valuation = self.estimate(request)

        if self._analysis_client is None:
            return Appraisal(valuation=valuation)

        analysis = await self._analysis_client.analyze(request, valuation.price)
        return Appraisal(valuation=valuation, analysis=analysis)
