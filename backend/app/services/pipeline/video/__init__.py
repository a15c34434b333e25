"""Video generation fan-out over a batch of segments."""

from .fanout import FanoutResult, VideoFanout, validate_video_segments

__all__ = ["FanoutResult", "VideoFanout", "validate_video_segments"]
