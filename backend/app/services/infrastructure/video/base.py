"""
Base classes for video-generation providers
"""

from abc import abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from app.models.video import VideoOptions

from ..base import ProviderAdapter


def segment_number_of(segment: Dict[str, Any], fallback: int) -> int:
    """Segment number from a caller-supplied segment, in either known shape."""
    number = segment.get("segment_number")
    if number is None:
        number = (segment.get("segment_info") or {}).get("segment_number")
    try:
        return int(number) if number is not None else fallback
    except (TypeError, ValueError):
        return fallback


@dataclass
class VideoResult:
    """Outcome of one video call. Independent of the segment it references."""
    success: bool
    segment_number: int
    video_url: Optional[str] = None
    description: Optional[str] = None
    status: Optional[str] = None
    duration: Optional[str] = None
    cost: Optional[float] = None
    request_id: Optional[str] = None
    error: Optional[str] = None
    error_type: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)


class VideoProvider(ProviderAdapter):
    """Abstract video adapter: one call per segment"""

    @abstractmethod
    async def generate_video(
        self,
        segment: Dict[str, Any],
        options: VideoOptions,
        segment_index: int,
    ) -> VideoResult:
        """Generate (or describe) the video for one segment.

        Args:
            segment: Segment object as supplied by the caller
            options: Batch-wide generation options
            segment_index: 1-based position of the segment in the batch

        Raises:
            ProviderError (or one of its variants) on failure.
        """
