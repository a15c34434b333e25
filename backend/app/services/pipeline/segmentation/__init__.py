"""
Segment generation - script splitting, prompt contracts and the segment pipeline.
"""

from .splitter import ScriptPart, split_script
from .templates import SegmentTemplate, select_template
from .contracts import ResponseContract, DEFAULT_RESPONSE_CONTRACT, resolve_path
from .pipeline import PipelineResult, Run, SegmentPipeline, SegmentStep, validate_script
from .continuation import ContinuationSession

__all__ = [
    "ScriptPart",
    "split_script",
    "SegmentTemplate",
    "select_template",
    "ResponseContract",
    "DEFAULT_RESPONSE_CONTRACT",
    "resolve_path",
    "PipelineResult",
    "Run",
    "SegmentPipeline",
    "SegmentStep",
    "validate_script",
    "ContinuationSession",
]
