"""Custom exceptions for analysis module."""


class AnalysisError(Exception):
    """Base exception for market analysis errors."""

    pass


class AnalysisAuthError(AnalysisError):
    """
    Raised when the analysis service rejects the credentials.

    This can happen when:
    - API key is invalid or revoked (401)
    - API key lacks access to the requested model (403)

    Not retried.
    """

    pass


class AnalysisRequestError(AnalysisError):
    """
    Raised when the request to the analysis service fails.

    This can happen when:
    - Network/connection error
    - Timeout
    - Non-success status code (429, 5xx, ...)

    Retried with a fixed delay.
    """

    pass


class AnalysisResponseError(AnalysisError):
    """
    Raised when the service answers but the payload is unusable.

    This can happen when:
    - Response body is not JSON
    - No candidate text in the response
    - Candidate text is not a JSON object with the expected keys
    """

    pass
