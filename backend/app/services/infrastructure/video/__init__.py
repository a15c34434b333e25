"""
Video-generation providers

- falai:  FalAI Veo3 (actual video, per-second pricing)
- kieai:  Kie.ai Veo3 (actual video, task polling)
- gemini: Gemini API video descriptions (no video file, free)
- vertex: the same descriptions through Vertex AI
"""

from .base import VideoProvider, VideoResult, segment_number_of
from .falai_provider import FalAIVideoProvider
from .kieai_provider import KieAIVideoProvider
from .gemini_provider import GeminiVideoProvider, build_vertex_provider
from .pricing import compute_cost, parse_duration_seconds
from .prompts import build_video_prompt, segment_dialogue

__all__ = [
    "VideoProvider",
    "VideoResult",
    "segment_number_of",
    "FalAIVideoProvider",
    "KieAIVideoProvider",
    "GeminiVideoProvider",
    "build_vertex_provider",
    "compute_cost",
    "parse_duration_seconds",
    "build_video_prompt",
    "segment_dialogue",
]
