"""
Services package - Core business logic and integrations

Organized by domain responsibility:

Pipeline (Core Generation Flow):
    - pipeline/segmentation: Script splitting, prompt contracts, segment pipeline
    - pipeline/video: Per-segment video fan-out

Infrastructure (Technical Concerns):
    - infrastructure/llm: Text provider adapters (OpenAI)
    - infrastructure/video: Video provider adapters (Gemini, Vertex, FalAI, Kie.ai)
    - infrastructure/storage: Run persistence and download archives
    - infrastructure/parsing: JSON parsing utilities
    - infrastructure/registry.py: Provider registry built from settings

Architecture Principles:
    - Dependency Injection: Services accept their providers and settings
    - Async-first: All provider I/O uses async/await
    - Fail-fast text pipeline, partial-failure video fan-out
"""

from .pipeline import ContinuationSession, SegmentPipeline, VideoFanout
from .infrastructure.registry import ProviderRegistry, build_provider_registry

__all__ = [
    "ContinuationSession",
    "SegmentPipeline",
    "VideoFanout",
    "ProviderRegistry",
    "build_provider_registry",
]
