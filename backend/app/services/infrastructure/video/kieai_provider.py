"""
Kie.ai Veo3 video provider

Kie.ai is task based: generate returns a task id, record-info is polled
until the task succeeds or fails. The API reports failures in the JSON body
("code") as well as through HTTP status codes; both go through
error_from_status.
"""

import asyncio
import time
from typing import Any, Awaitable, Callable, Dict, Optional

import httpx

from app.config import PROVIDER_KIEAI
from app.core.exceptions import ProviderError, ProviderTransientError, ProviderUnavailableError, error_from_status
from app.core.logging import LogTimer, get_logger
from app.models.video import VideoOptions

from ..http import raise_for_provider_status, transport_error
from .base import VideoProvider, VideoResult, segment_number_of
from .pricing import compute_cost
from .prompts import build_video_prompt

logger = get_logger(__name__, component="kieai_provider")

KIEAI_BASE_URL = "https://api.kie.ai"
GENERATE_PATH = "/api/v1/veo/generate"
RECORD_INFO_PATH = "/api/v1/veo/record-info"
KIEAI_MODEL = "veo3_fast"

# record-info successFlag values
TASK_GENERATING = 0
TASK_SUCCEEDED = 1


class KieAIVideoProvider(VideoProvider):

    name = PROVIDER_KIEAI

    def __init__(
        self,
        api_key: Optional[str] = None,
        timeout: float = 300.0,
        poll_interval: float = 10.0,
        base_url: str = KIEAI_BASE_URL,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.api_key = api_key
        self.timeout = timeout
        self.poll_interval = poll_interval
        self.base_url = base_url
        self._transport = transport
        self._sleep = sleep

    def is_configured(self) -> bool:
        return bool(self.api_key)

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            headers={"Authorization": f"Bearer {self.api_key}", "Content-Type": "application/json"},
            timeout=self.timeout,
            transport=self._transport,
        )

    def _unwrap(self, response: httpx.Response, segment_number: int) -> Dict[str, Any]:
        raise_for_provider_status(self.name, response, segment_number)
        try:
            body = response.json()
        except ValueError as exc:
            raise ProviderError("Kie.ai returned a non-JSON response", provider=self.name, segment_number=segment_number) from exc

        if not isinstance(body, dict):
            raise self._unexpected(segment_number)
        try:
            code = int(body.get("code", 200))
        except (TypeError, ValueError) as exc:
            raise self._unexpected(segment_number) from exc
        if code != 200:
            raise error_from_status(self.name, code, detail=body.get("msg"), segment_number=segment_number)

        data = body.get("data") or {}
        if not isinstance(data, dict):
            raise self._unexpected(segment_number)
        return data

    def _unexpected(self, segment_number: int) -> ProviderError:
        return ProviderError("Kie.ai returned an unexpected response", provider=self.name, segment_number=segment_number)

    async def generate_video(self, segment: Dict[str, Any], options: VideoOptions, segment_index: int) -> VideoResult:
        segment_number = segment_number_of(segment, segment_index)
        if not self.is_configured():
            raise ProviderUnavailableError(
                "Kie.ai service not initialized. Please configure KIEAI_API_KEY",
                provider=self.name,
                segment_number=segment_number,
            )

        prompt = build_video_prompt(segment)
        payload = {
            "prompt": prompt,
            "model": KIEAI_MODEL,
            "aspectRatio": options.aspect_ratio,
            **options.provider_options,
        }

        try:
            with LogTimer(logger, f"Kie.ai video generation (segment {segment_number})", segment_number=segment_number):
                async with self._client() as client:
                    submitted = self._unwrap(await client.post(GENERATE_PATH, json=payload), segment_number)
                    task_id = submitted.get("taskId")
                    if not task_id:
                        raise ProviderError("Kie.ai did not return a task id", provider=self.name, segment_number=segment_number)
                    record = await self._wait_for_task(client, task_id, segment_number)
        except httpx.RequestError as exc:
            raise transport_error(self.name, exc, segment_number) from exc

        task_response = record.get("response") or {}
        result_urls = task_response.get("resultUrls") if isinstance(task_response, dict) else None
        if not isinstance(result_urls, list):
            result_urls = []
        return VideoResult(
            success=True,
            segment_number=segment_number,
            video_url=result_urls[0] if result_urls else None,
            status="completed",
            duration=options.duration,
            cost=compute_cost(self.name, options.duration, options.generate_audio),
            request_id=task_id,
            metadata={"prompt": prompt, "aspectRatio": options.aspect_ratio, "model": KIEAI_MODEL},
        )

    async def _wait_for_task(self, client: httpx.AsyncClient, task_id: str, segment_number: int) -> Dict[str, Any]:
        deadline = time.monotonic() + self.timeout
        while True:
            record = self._unwrap(
                await client.get(RECORD_INFO_PATH, params={"taskId": task_id}),
                segment_number,
            )
            flag = record.get("successFlag", TASK_GENERATING)
            if flag == TASK_SUCCEEDED:
                return record
            if flag != TASK_GENERATING:
                reason = record.get("errorMessage") or "Video generation failed"
                raise ProviderError(f"Kie.ai task {task_id} failed: {reason}", provider=self.name, segment_number=segment_number)
            if time.monotonic() >= deadline:
                raise ProviderTransientError(
                    f"Kie.ai task {task_id} did not finish within {int(self.timeout)}s",
                    provider=self.name,
                    segment_number=segment_number,
                )
            await self._sleep(self.poll_interval)
