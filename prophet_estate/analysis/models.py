"""Data models for market analysis."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .errors import AnalysisResponseError

DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_MODEL = "gemini-2.5-flash"


@dataclass(frozen=True)
class AnalysisConfig:
    """Configuration for analysis client."""

    api_key: str | None = None
    """Gemini API key. No key = canned response, no network call."""

    model: str = DEFAULT_MODEL
    base_url: str = DEFAULT_BASE_URL
    timeout: float = 30.0

    # Retry configuration
    max_retries: int = 3
    retry_delay_seconds: float = 2.0


@dataclass(frozen=True)
class AnalysisResult:
    """Refined appraisal returned by the analysis service."""

    price_range: str  # e.g. "$450k - $480k"
    sentiment: str  # 1-2 sentences on market demand
    key_factors: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> AnalysisResult:
        """
        Build from the service's JSON object.

        Raises:
            AnalysisResponseError: If required keys are missing or mistyped
        """
        if not isinstance(data, dict):
            raise AnalysisResponseError(
                f"Expected JSON object, got {type(data).__name__}"
            )

        try:
            price_range = data["estimatedPriceRange"]
            sentiment = data["marketSentiment"]
            key_factors = data.get("keyFactors", [])
        except KeyError as e:
            raise AnalysisResponseError(f"Analysis missing field: {e}") from e

        if not isinstance(key_factors, list):
            raise AnalysisResponseError("keyFactors must be a list")

        return cls(
            price_range=str(price_range),
            sentiment=str(sentiment),
            key_factors=[str(f) for f in key_factors],
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "price_range": self.price_range,
            "sentiment": self.sentiment,
            "key_factors": list(self.key_factors),
        }
