"""
API schemas for persisted runs
"""

from typing import List

from pydantic import BaseModel

from .generation import GenerationConfig, RunMetadata, Segment


class StoredRun(BaseModel):
    """A run as written to disk: inputs and outputs together"""
    run_id: str
    script: str
    config: GenerationConfig
    segments: List[Segment]
    metadata: RunMetadata


class RunListResponse(BaseModel):
    runs: List[str]
