"""
Pipeline services - script to segments to videos.

Pipeline Stages:
1. Segmentation - split the script and generate one structured segment per part
2. Video Fan-out - one video (or video description) per segment
"""

from .segmentation import ContinuationSession, SegmentPipeline, split_script
from .video import VideoFanout

__all__ = [
    "ContinuationSession",
    "SegmentPipeline",
    "split_script",
    "VideoFanout",
]
