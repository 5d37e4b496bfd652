"""Market analysis client backed by the Gemini generateContent API."""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_fixed,
)

from prophet_estate.data import PropertyFeatures

from .errors import (
    AnalysisAuthError,
    AnalysisError,
    AnalysisRequestError,
    AnalysisResponseError,
)
from .models import DEFAULT_MODEL, AnalysisConfig, AnalysisResult

logger = logging.getLogger(__name__)

RESPONSE_SCHEMA: dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "estimatedPriceRange": {
            "type": "STRING",
            "description": "e.g., $450k - $480k",
        },
        "marketSentiment": {
            "type": "STRING",
            "description": "1-2 sentences on market demand.",
        },
        "keyFactors": {
            "type": "ARRAY",
            "items": {"type": "STRING"},
            "description": "List of 3 factors.",
        },
    },
}

MISSING_KEY_RESULT = AnalysisResult(
    price_range="N/A",
    sentiment="API Key Missing",
    key_factors=["Ensure GEMINI_API_KEY is set in environment variables."],
)


def build_prompt(request: PropertyFeatures, predicted_price: float) -> str:
    """Appraiser prompt for a property and the regression estimate."""
    # Grouped, up to 3 decimals: 512,345.678 or 512,345
    price = f"{predicted_price:,.3f}".rstrip("0").rstrip(".")
    return (
        "You are a luxury real estate appraiser.\n"
        "A simple linear regression model has estimated a house price at "
        f"${price}\n"
        "for a property with the following specs:\n"
        f"- Square Footage: {request.sqft} sqft\n"
        f"- Bedrooms: {request.bedrooms}\n"
        f"- Bathrooms: {request.bathrooms}\n"
        "\n"
        "Please provide a refined analysis.\n"
        "1. A realistic price range considering modern market volatility.\n"
        "2. A brief sentiment analysis of the market for this size of home.\n"
        "3. Three key factors that would increase this specific property's value.\n"
    )


def fallback_result(predicted_price: float) -> AnalysisResult:
    """Standard ±5% variance answer used when the service is unavailable."""
    return AnalysisResult(
        price_range=f"${predicted_price * 0.95:.0f} - ${predicted_price * 1.05:.0f}",
        sentiment=(
            "Unable to retrieve real-time market data. Showing standard variance."
        ),
        key_factors=["Location", "Condition", "Market Trends"],
    )


def _create_retry_decorator(max_retries: int, delay_seconds: float):
    """Create a tenacity retry decorator with given config."""
    return retry(
        wait=wait_fixed(delay_seconds),
        stop=stop_after_attempt(max_retries),
        retry=retry_if_exception_type(AnalysisRequestError),
        reraise=True,
    )


class AnalysisClient:
    """
    Client for the external market analysis service.

    analyze() is the collaborator used by the valuation service: it never
    raises and degrades to a canned answer. fetch_analysis() is the raw call
    and raises AnalysisError subclasses.
    """

    def __init__(self, config: AnalysisConfig):
        """
        Initialize analysis client.

        Args:
            config: Analysis configuration
        """
        self._config = config
        self._base_url = config.base_url.rstrip("/")

        # Create retry decorator once at init
        self._retry_decorator = _create_retry_decorator(
            config.max_retries,
            config.retry_delay_seconds,
        )

    @property
    def has_credentials(self) -> bool:
        return bool(self._config.api_key)

    def _build_payload(
        self, request: PropertyFeatures, predicted_price: float
    ) -> dict[str, Any]:
        return {
            "contents": [
                {"parts": [{"text": build_prompt(request, predicted_price)}]}
            ],
            "generationConfig": {
                "responseMimeType": "application/json",
                "responseSchema": RESPONSE_SCHEMA,
            },
        }

    async def _request(self, payload: dict[str, Any]) -> Any:
        """
        POST a generateContent request.

        Returns:
            JSON response data

        Raises:
            AnalysisAuthError: If the API key is rejected
            AnalysisRequestError: If the request fails
            AnalysisResponseError: If the body is not JSON
        """
        url = f"{self._base_url}/models/{self._config.model}:generateContent"
        headers = {"x-goog-api-key": self._config.api_key or ""}

        async with httpx.AsyncClient(timeout=self._config.timeout) as client:
            try:
                response = await client.request(
                    "POST",
                    url,
                    headers=headers,
                    json=payload,
                )

                if response.status_code == 401:
                    raise AnalysisAuthError(f"Authentication failed: {response.text}")

                if response.status_code == 403:
                    raise AnalysisAuthError(f"API key not authorized: {response.text}")

                response.raise_for_status()

                try:
                    return response.json()
                except ValueError as e:
                    raise AnalysisResponseError(
                        f"Invalid JSON response from analysis service: {e}"
                    ) from e

            except httpx.HTTPStatusError as e:
                raise AnalysisRequestError(
                    f"Request failed: {e.response.status_code} - {e.response.text}"
                ) from e
            except httpx.RequestError as e:
                raise AnalysisRequestError(f"Connection error: {e}") from e

    async def fetch_analysis(
        self, request: PropertyFeatures, predicted_price: float
    ) -> AnalysisResult:
        """
        Ask the service for a refined analysis (single attempt).

        Raises:
            AnalysisAuthError: If the API key is missing or rejected
            AnalysisRequestError: If the request fails
            AnalysisResponseError: If the response cannot be parsed
        """
        if not self.has_credentials:
            raise AnalysisAuthError("No API key configured")

        data = await self._request(self._build_payload(request, predicted_price))

        try:
            text = data["candidates"][0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError) as e:
            raise AnalysisResponseError("No response text from analysis service") from e

        if not text:
            raise AnalysisResponseError("Empty response text from analysis service")

        try:
            parsed = json.loads(text)
        except ValueError as e:
            raise AnalysisResponseError(f"Analysis text is not valid JSON: {e}") from e

        return AnalysisResult.from_dict(parsed)

    async def fetch_with_retry(
        self, request: PropertyFeatures, predicted_price: float
    ) -> AnalysisResult:
        """
        Fetch analysis with retry logic.

        Only retries on AnalysisRequestError (not auth or response errors).
        """
        return await self._retry_decorator(self.fetch_analysis)(
            request, predicted_price
        )

    async def analyze(
        self, request: PropertyFeatures, predicted_price: float
    ) -> AnalysisResult:
        """
        Get a market analysis, falling back to a canned answer on any failure.

        Returns:
            AnalysisResult (never raises AnalysisError)
        """
        if not self.has_credentials:
            logger.error("Analysis API key not found")
            return MISSING_KEY_RESULT

        try:
            result = await self.fetch_with_retry(request, predicted_price)
        except AnalysisError as e:
            logger.warning(f"Market analysis failed, using fallback: {e}")
            return fallback_result(predicted_price)

        logger.info(f"Market analysis received: {result.price_range}")
        return result


def create_analysis_client(
    api_key: str | None = None,
    model: str = DEFAULT_MODEL,
    timeout: float = 30.0,
    max_retries: int = 3,
) -> AnalysisClient:
    """
    Create an analysis client.

    Example:
        client = create_analysis_client(api_key=os.environ.get("GEMINI_API_KEY"))
        result = await client.analyze(request, 512_000.0)
    """
    config = AnalysisConfig(
        api_key=api_key or None,
        timeout=timeout,
        max_retries=max_retries,
        model=model,
    )
    return AnalysisClient(config)
