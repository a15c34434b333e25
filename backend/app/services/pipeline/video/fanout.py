"""
Video Generation Fan-out

One video call per segment, strictly in order, with a fixed pause between
calls. Unlike the segment pipeline, a failed call is recorded and the batch
moves on: each video stands alone, so a gap costs nothing downstream.
"""

import asyncio
from dataclasses import dataclass, field
from datetime import datetime, UTC
from typing import Any, Awaitable, Callable, Dict, List

from app.core.exceptions import ProviderError, ValidationError
from app.core.logging import get_logger
from app.models.video import (
    VideoBatchMetadata,
    VideoErrorModel,
    VideoGenerationResponse,
    VideoOptions,
    VideoResultModel,
)
from app.services.infrastructure.video import VideoProvider, VideoResult, segment_dialogue, segment_number_of

logger = get_logger(__name__, component="video_fanout")


def validate_video_segments(segments: Any) -> List[Dict[str, Any]]:
    """
    Segments are trusted as supplied, but each must at least carry dialogue
    or a character description for a prompt to be built from it.
    """
    if not isinstance(segments, list) or not segments:
        raise ValidationError("Invalid segments data")

    for position, segment in enumerate(segments, start=1):
        if not isinstance(segment, dict):
            raise ValidationError(f"Segment {position} must be an object")
        description = segment.get("description") if isinstance(segment.get("description"), dict) else {}
        has_character = segment.get("character_description") or description.get("character_description")
        if not segment_dialogue(segment) and not has_character:
            raise ValidationError(f"Segment {position} is missing dialogue and character description")
    return segments


@dataclass
class FanoutResult:
    provider: str
    results: List[VideoResult] = field(default_factory=list)
    errors: List[VideoErrorModel] = field(default_factory=list)

    @property
    def success_count(self) -> int:
        return sum(1 for result in self.results if result.success)

    @property
    def failure_count(self) -> int:
        return len(self.errors)

    @property
    def total_cost(self) -> float:
        return round(sum(result.cost or 0.0 for result in self.results if result.success), 2)

    def to_response(self) -> VideoGenerationResponse:
        return VideoGenerationResponse(
            success=self.success_count > 0,
            videos=[VideoResultModel(**vars(result)) for result in self.results],
            metadata=VideoBatchMetadata(
                total_segments=len(self.results),
                success_count=self.success_count,
                failure_count=self.failure_count,
                total_cost=self.total_cost,
                provider=self.provider,
                timestamp=datetime.now(UTC).isoformat(),
            ),
            errors=self.errors or None,
        )


class VideoFanout:
    """
    Sequential per-segment video generation with partial-failure tolerance.

    Usage:
        fanout = VideoFanout(provider, delay_seconds=1.0)
        result = await fanout.run(segments, options)
    """

    def __init__(
        self,
        provider: VideoProvider,
        delay_seconds: float = 1.0,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.provider = provider
        self.delay_seconds = delay_seconds
        self._sleep = sleep

    async def run(self, segments: List[Dict[str, Any]], options: VideoOptions) -> FanoutResult:
        segments = validate_video_segments(segments)
        outcome = FanoutResult(provider=self.provider.name)
        total = len(segments)

        logger.info(
            f"Generating {total} videos with {self.provider.name}",
            extra={"provider": self.provider.name, "total_segments": total},
        )

        for index, segment in enumerate(segments, start=1):
            segment_number = segment_number_of(segment, index)
            try:
                result = await self.provider.generate_video(segment, options, index)
            except (ProviderError, ValidationError) as exc:
                error_type = getattr(exc, "kind", "validation")
                logger.warning(
                    f"Video {index}/{total} failed: {exc.message}",
                    extra={"provider": self.provider.name, "segment_number": segment_number, "error_type": error_type},
                )
                result = VideoResult(
                    success=False,
                    segment_number=segment_number,
                    status="failed",
                    error=exc.message,
                    error_type=error_type,
                )
                outcome.errors.append(VideoErrorModel(
                    segment_index=index,
                    segment_number=segment_number,
                    error=exc.message,
                    error_type=error_type,
                ))
            outcome.results.append(result)

            if index < total and self.delay_seconds > 0:
                await self._sleep(self.delay_seconds)

        logger.info(
            f"Video batch finished: {outcome.success_count} succeeded, {outcome.failure_count} failed",
            extra={
                "provider": self.provider.name,
                "success_count": outcome.success_count,
                "failure_count": outcome.failure_count,
                "total_cost": outcome.total_cost,
            },
        )
        return outcome
