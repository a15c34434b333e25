"""
API schemas for video generation endpoints

Response keys are camelCase on the wire (successCount, totalCost, ...).
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..config import DEFAULT_ASPECT_RATIO, DEFAULT_RESOLUTION, DEFAULT_VIDEO_DURATION


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class VideoOptions(CamelModel):
    """Generation options shared by every segment in a batch"""
    aspect_ratio: str = DEFAULT_ASPECT_RATIO
    duration: str = DEFAULT_VIDEO_DURATION
    resolution: str = DEFAULT_RESOLUTION
    generate_audio: bool = True
    provider_options: Dict[str, Any] = Field(default_factory=dict)


class VideoGenerationRequest(BaseModel):
    segments: List[Dict[str, Any]]
    options: VideoOptions = Field(default_factory=VideoOptions)


class VideoResultModel(CamelModel):
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
    metadata: Dict[str, Any] = Field(default_factory=dict)


class VideoErrorModel(CamelModel):
    segment_index: int
    segment_number: int
    error: str
    error_type: str


class VideoBatchMetadata(CamelModel):
    total_segments: int
    success_count: int
    failure_count: int
    total_cost: float
    currency: str = "USD"
    provider: str
    timestamp: str


class VideoGenerationResponse(CamelModel):
    success: bool
    videos: List[VideoResultModel]
    metadata: VideoBatchMetadata
    errors: Optional[List[VideoErrorModel]] = None


class ProviderStatusResponse(BaseModel):
    provider: str
    available: bool
    reason: Optional[str] = None
    timestamp: str
