"""
Pydantic models for API request/response schemas
"""

from .generation import (
    OutputFormat,
    GenerationConfig,
    Segment,
    RunMetadata,
    GenerateRequest,
    GenerateResponse,
    ContinuationRequest,
    ContinuationResponse,
    DownloadRequest,
)
from .video import (
    VideoOptions,
    VideoGenerationRequest,
    VideoResultModel,
    VideoErrorModel,
    VideoBatchMetadata,
    VideoGenerationResponse,
    ProviderStatusResponse,
)
from .runs import StoredRun, RunListResponse
from .status import RunState

__all__ = [
    "OutputFormat",
    "GenerationConfig",
    "Segment",
    "RunMetadata",
    "GenerateRequest",
    "GenerateResponse",
    "ContinuationRequest",
    "ContinuationResponse",
    "DownloadRequest",
    "VideoOptions",
    "VideoGenerationRequest",
    "VideoResultModel",
    "VideoErrorModel",
    "VideoBatchMetadata",
    "VideoGenerationResponse",
    "ProviderStatusResponse",
    "StoredRun",
    "RunListResponse",
    "RunState",
]
