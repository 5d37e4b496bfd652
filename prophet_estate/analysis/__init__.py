"""
Market analysis module - LLM enrichment of regression estimates.

Usage:
    from prophet_estate.analysis import create_analysis_client

    client = create_analysis_client(api_key=os.environ.get("GEMINI_API_KEY"))
    result = await client.analyze(request, predicted_price)
    print(result.price_range, result.sentiment, result.key_factors)
"""

from .client import (
    MISSING_KEY_RESULT,
    RESPONSE_SCHEMA,
    AnalysisClient,
    build_prompt,
    create_analysis_client,
    fallback_result,
)
from .errors import (
    AnalysisAuthError,
    AnalysisError,
    AnalysisRequestError,
    AnalysisResponseError,
)
from .models import DEFAULT_BASE_URL, DEFAULT_MODEL, AnalysisConfig, AnalysisResult

__all__ = [
    # Factory (main entry point)
    "create_analysis_client",
    # Client
    "AnalysisClient",
    "AnalysisConfig",
    "build_prompt",
    "fallback_result",
    "MISSING_KEY_RESULT",
    "RESPONSE_SCHEMA",
    "DEFAULT_BASE_URL",
    "DEFAULT_MODEL",
    # Models
    "AnalysisResult",
    # Errors
    "AnalysisError",
    "AnalysisAuthError",
    "AnalysisRequestError",
    "AnalysisResponseError",
]
