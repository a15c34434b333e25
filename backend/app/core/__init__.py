"""
Core Module - Cross-cutting concerns and shared infrastructure

This module contains foundational utilities used across the entire application.
These are not business logic, but rather infrastructure and common patterns.

Organization:
    - logging.py: Structured logging configuration and utilities
    - exceptions.py: Application exception family and provider error variants
    - rate_limiter.py: Per-client sliding-window request limiter
    - tokens.py: Signed continuation tokens
    - security.py: Run id and path validation
    - runtime.py: Startup checks

Usage:
    from app.core import get_logger, ValidationError, ClientRateLimiter
"""

# Logging
from .logging import (
    setup_logging,
    get_logger,
    set_request_id,
    set_run_id,
    clear_context,
    LogTimer,
)

# Exceptions
from .exceptions import (
    SegmentStudioError,
    ValidationError,
    PipelineIntegrityError,
    PersistenceError,
    ProviderError,
    ProviderAuthError,
    ProviderQuotaError,
    ProviderRateLimitError,
    ProviderBadRequestError,
    ProviderTransientError,
    ProviderUnavailableError,
    error_from_status,
)

# Rate limiting
from .rate_limiter import ClientRateLimiter, RateLimitDecision

# Continuation tokens
from .tokens import ContinuationTokenCodec

# Security
from .security import validate_run_id, validate_path_within_directory

# Runtime checks
from .runtime import assert_directory_writable, run_startup_checks

__all__ = [
    "setup_logging",
    "get_logger",
    "set_request_id",
    "set_run_id",
    "clear_context",
    "LogTimer",
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
    "ClientRateLimiter",
    "RateLimitDecision",
    "ContinuationTokenCodec",
    "validate_run_id",
    "validate_path_within_directory",
    "assert_directory_writable",
    "run_startup_checks",
]
