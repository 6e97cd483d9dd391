"""Failures of the analysis pipeline.

Each class carries the HTTP status and the user-facing message the endpoint
returns as ``{"error": message}``. Nothing here is retried; the first failure
ends the request.
"""

UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred. Please try again."


class AnalysisError(Exception):
    status_code: int = 500
    message: str = UNEXPECTED_ERROR_MESSAGE

    def __init__(self, message: str | None = None, *, status_code: int | None = None) -> None:
        if message is not None:
            self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class InputValidationError(AnalysisError):
    """Missing, malformed, oversized or unsupported image."""

    status_code = 400


class ConfigurationError(AnalysisError):
    status_code = 500
    message = "API key not configured. Please set PERPLEXITY_API_KEY in your environment."


class ProviderError(AnalysisError):
    """The provider answered with a non-success status, or could not be reached."""

    status_code = 500
    message = "Failed to analyze design. Please try again."


class ProviderAuthError(ProviderError):
    status_code = 401
    message = "Invalid API key. Please check your PERPLEXITY_API_KEY."


class ProviderRateLimitError(ProviderError):
    status_code = 429
    message = "Rate limit exceeded. Please try again in a moment."


class ProviderBadRequestError(ProviderError):
    status_code = 400
    message = "Invalid request. The image may be too large (max 50MB) or in an unsupported format."


class ProviderContentMissingError(AnalysisError):
    status_code = 500
    message = "No analysis received from AI. Please try again."


class ResponseMalformedError(AnalysisError):
    status_code = 500


class ResponseParseError(ResponseMalformedError):
    message = "Failed to parse AI response. The model returned invalid JSON. Please try again."


class MissingFieldsError(ResponseMalformedError):
    message = "AI response missing required fields. Please try again."
