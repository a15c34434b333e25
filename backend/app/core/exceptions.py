"""
Core Exceptions

One exception family for the whole application. Provider errors form a tagged
set of variants, one per normalized failure kind, built once at the adapter
boundary by error_from_status(); nothing past the adapters looks at transport
status codes.
"""

from typing import Optional


class SegmentStudioError(Exception):
    """Base exception for all application errors."""

    http_status = 500
    error_label = "Internal server error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(SegmentStudioError):
    """Malformed or too-short script, malformed config, bad continuation token."""

    http_status = 400
    error_label = "Invalid request"


class PipelineIntegrityError(SegmentStudioError):
    """Continuity state or voice profile missing/malformed mid-run. Always fatal to the run."""

    http_status = 502
    error_label = "Pipeline integrity failure"


class PersistenceError(SegmentStudioError):
    """Writing or reading a persisted run failed."""

    error_label = "Persistence failure"


class ProviderError(SegmentStudioError):
    """Any non-2xx answer from an external AI provider."""

    http_status = 502
    error_label = "Provider error"
    kind = "provider_error"

    def __init__(
        self,
        message: str,
        provider: str,
        status_code: Optional[int] = None,
        segment_number: Optional[int] = None,
    ):
        super().__init__(message)
        self.provider = provider
        self.status_code = status_code
        self.segment_number = segment_number


class ProviderAuthError(ProviderError):
    """Bad or missing credential."""

    http_status = 401
    error_label = "Provider authentication failed"
    kind = "auth"


class ProviderQuotaError(ProviderError):
    """Insufficient balance or credits."""

    http_status = 402
    error_label = "Provider quota exhausted"
    kind = "quota"


class ProviderRateLimitError(ProviderError):
    """Provider answered 429."""

    http_status = 429
    error_label = "Provider rate limit exceeded"
    kind = "rate_limit"


class ProviderBadRequestError(ProviderError):
    """Provider rejected the request as malformed."""

    http_status = 400
    error_label = "Provider rejected request"
    kind = "bad_request"


class ProviderTransientError(ProviderError):
    """Timeout or network failure."""

    http_status = 504
    error_label = "Provider unreachable"
    kind = "transient"


class ProviderUnavailableError(ProviderError):
    """Adapter is not configured (no credential)."""

    http_status = 503
    error_label = "Provider unavailable"
    kind = "unavailable"


_STATUS_VARIANTS = {
    400: (ProviderBadRequestError, "Invalid request"),
    401: (ProviderAuthError, "Invalid API key"),
    402: (ProviderQuotaError, "Insufficient credits"),
    403: (ProviderAuthError, "Access denied"),
    408: (ProviderTransientError, "Request timeout"),
    429: (ProviderRateLimitError, "Rate limit exceeded. Please wait and try again"),
    504: (ProviderTransientError, "Gateway timeout"),
}


def error_from_status(
    provider: str,
    status_code: int,
    detail: Optional[str] = None,
    segment_number: Optional[int] = None,
) -> ProviderError:
    """Map a provider HTTP status code to its normalized error variant."""
    variant, summary = _STATUS_VARIANTS.get(status_code, (ProviderError, f"{provider} API error ({status_code})"))
    message = f"{summary}: {detail}" if detail else summary
    return variant(message, provider=provider, status_code=status_code, segment_number=segment_number)


__all__ = [
    "SegmentStudioError",
    "ValidationError",
    "PipelineIntegrityError",
    "PersistenceError",
    "ProviderError",
    "ProviderAuthError",
    "ProviderQuotaError",
    "ProviderRateLimitError",
    "ProviderBadRequestError",
    "ProviderTransientError",
    "ProviderUnavailableError",
    "error_from_status",
]
