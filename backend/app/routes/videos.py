"""
Video generation routes

- POST /api/generate-videos/{provider}: one video per segment, partial failure allowed
- GET /api/{provider}-status: availability probe for one provider
"""

from datetime import datetime, UTC

from fastapi import APIRouter, Depends, HTTPException

from ..context import AppContext, get_context
from ..core import ProviderUnavailableError, get_logger
from ..models import ProviderStatusResponse, VideoGenerationRequest, VideoGenerationResponse

router = APIRouter(prefix="/api", tags=["videos"])
logger = get_logger(__name__, component="video_routes")


@router.post(
    "/generate-videos/{provider}",
    response_model=VideoGenerationResponse,
    response_model_exclude_none=True,
)
async def generate_videos(
    provider: str,
    request: VideoGenerationRequest,
    context: AppContext = Depends(get_context),
):
    fanout = context.video_fanout(provider)
    if not fanout.provider.is_configured():
        raise ProviderUnavailableError(
            f"{provider} service not initialized. Please configure its API key",
            provider=provider,
        )

    result = await fanout.run(request.segments, request.options)
    return result.to_response()


@router.get("/{provider}-status", response_model=ProviderStatusResponse, response_model_exclude_none=True)
async def provider_status(provider: str, context: AppContext = Depends(get_context)):
    registry = context.providers
    if provider == registry.text.name:
        adapter = registry.text
    elif provider in registry.video:
        adapter = registry.video[provider]
    else:
        raise HTTPException(status_code=404, detail=f"Unknown provider '{provider}'")

    status = await adapter.status()
    return ProviderStatusResponse(
        provider=provider,
        available=status.available,
        reason=status.reason,
        timestamp=datetime.now(UTC).isoformat(),
    )
