"""
httpx helpers shared by the HTTP-based provider adapters.

Both helpers build normalized provider errors so adapters never leak httpx
exceptions or raw status codes.
"""

from typing import Optional

import httpx

from app.core.exceptions import ProviderError, ProviderTransientError, error_from_status


def response_error_detail(response: httpx.Response) -> Optional[str]:
    try:
        body = response.json()
    except ValueError:
        text = response.text.strip()
        return text[:200] or None

    if isinstance(body, dict):
        for key in ("error", "detail", "message", "msg"):
            value = body.get(key)
            if value:
                return value if isinstance(value, str) else str(value)
    return None


def raise_for_provider_status(
    provider: str,
    response: httpx.Response,
    segment_number: Optional[int] = None,
) -> None:
    if response.is_success:
        return
    raise error_from_status(
        provider,
        response.status_code,
        detail=response_error_detail(response),
        segment_number=segment_number,
    )


def transport_error(provider: str, exc: httpx.RequestError, segment_number: Optional[int] = None) -> ProviderError:
    if isinstance(exc, httpx.TimeoutException):
        message = "Request timeout. Video generation is taking longer than expected"
    else:
        message = "Network error. Please check your internet connection"
    return ProviderTransientError(message, provider=provider, segment_number=segment_number)
