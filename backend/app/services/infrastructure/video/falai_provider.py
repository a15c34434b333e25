"""
FalAI Veo3 video provider

Always calls the fast endpoint. One synchronous POST per segment; the
response carries the finished video URL.
"""

from typing import Any, Dict, Optional

import httpx

from app.config import PROVIDER_FALAI
from app.core.exceptions import ProviderError, ProviderUnavailableError
from app.core.logging import LogTimer, get_logger
from app.models.video import VideoOptions

from ..base import NOT_CONFIGURED_REASON, ProviderStatus
from ..http import raise_for_provider_status, transport_error
from .base import VideoProvider, VideoResult, segment_number_of
from .pricing import compute_cost
from .prompts import build_video_prompt

logger = get_logger(__name__, component="falai_provider")

FALAI_BASE_URL = "https://fal.run/fal-ai/veo3"
FAST_ENDPOINT = "/fast"


class FalAIVideoProvider(VideoProvider):

    name = PROVIDER_FALAI

    def __init__(
        self,
        api_key: Optional[str] = None,
        timeout: float = 300.0,
        base_url: str = FALAI_BASE_URL,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.timeout = timeout
        self.base_url = base_url
        self._transport = transport

    def is_configured(self) -> bool:
        return bool(self.api_key)

    def _client(self, timeout: Optional[float] = None) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            headers={"Authorization": f"Key {self.api_key}", "Content-Type": "application/json"},
            timeout=timeout or self.timeout,
            transport=self._transport,
        )

    async def generate_video(self, segment: Dict[str, Any], options: VideoOptions, segment_index: int) -> VideoResult:
        segment_number = segment_number_of(segment, segment_index)
        if not self.is_configured():
            raise ProviderUnavailableError(
                "FalAI service not initialized. Please configure FALAI_API_KEY",
                provider=self.name,
                segment_number=segment_number,
            )

        prompt = build_video_prompt(segment)
        payload = {
            "prompt": prompt,
            "aspect_ratio": options.aspect_ratio,
            "duration": options.duration,
            "resolution": options.resolution,
            "generate_audio": options.generate_audio,
            **options.provider_options,
        }

        try:
            with LogTimer(logger, f"FalAI video generation (segment {segment_number})", segment_number=segment_number):
                async with self._client() as client:
                    response = await client.post(FAST_ENDPOINT, json=payload)
        except httpx.RequestError as exc:
            raise transport_error(self.name, exc, segment_number) from exc

        raise_for_provider_status(self.name, response, segment_number)

        try:
            data = response.json()
        except ValueError as exc:
            raise ProviderError("FalAI returned a non-JSON response", provider=self.name, segment_number=segment_number) from exc

        video = data.get("video") if isinstance(data, dict) else None
        if not isinstance(video, dict) or not video.get("url"):
            raise ProviderError(
                "FalAI returned an unexpected response: no video url",
                provider=self.name,
                segment_number=segment_number,
            )

        return VideoResult(
            success=True,
            segment_number=segment_number,
            video_url=video["url"],
            status=data.get("status") or "completed",
            duration=payload["duration"],
            cost=compute_cost(self.name, payload["duration"], payload["generate_audio"]),
            request_id=data.get("request_id"),
            metadata={
                "prompt": prompt,
                "aspectRatio": payload["aspect_ratio"],
                "resolution": payload["resolution"],
                "generateAudio": payload["generate_audio"],
            },
        )

    async def status(self) -> ProviderStatus:
        if not self.is_configured():
            return ProviderStatus(available=False, reason=NOT_CONFIGURED_REASON)
        try:
            async with self._client(timeout=5.0) as client:
                response = await client.get("/health")
        except httpx.RequestError as exc:
            logger.warning("FalAI health check failed", extra={"error": str(exc)})
            return ProviderStatus(available=False, reason="Service unavailable")
        if response.is_success:
            return ProviderStatus(available=True)
        logger.warning("FalAI health check failed", extra={"status_code": response.status_code})
        return ProviderStatus(available=False, reason="Service unavailable")
