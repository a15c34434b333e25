"""
API schemas for segment generation endpoints

Request/Response models for script segmentation and continuation.
"""

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

OutputFormat = Literal["standard", "enhanced", "continuation"]


class GenerationConfig(BaseModel):
    """User-chosen generation parameters. Immutable once a run starts.

    Unknown attributes are kept and passed through to the prompts, so the
    front end can add character or scene fields without a schema change.
    """
    model_config = ConfigDict(frozen=True, extra="allow")

    format: OutputFormat = "standard"

    # Character
    age_range: str = "25-34"
    gender: str = "female"
    ethnicity: Optional[str] = None
    physical_features: Optional[str] = None
    character_name: Optional[str] = None

    # Clothing and environment
    clothing: Optional[str] = None
    setting: str = "home"
    environment_details: Optional[str] = None
    lighting: Optional[str] = None

    # Voice and delivery
    voice_type: str = "warm"
    energy_level: str = "medium"
    accent: Optional[str] = None

    # Marketing context
    product: Optional[str] = None
    camera_style: Optional[str] = None

    def prompt_fields(self) -> Dict[str, Any]:
        """All populated attributes except the format switch."""
        data = self.model_dump(exclude_none=True)
        data.pop("format", None)
        return data


class Segment(BaseModel):
    """One 8-second unit of output"""
    segment_number: int
    dialogue: str
    word_count: int
    description: Dict[str, Any] = Field(default_factory=dict)
    continuity_state: Optional[Dict[str, Any]] = None


class RunMetadata(BaseModel):
    """Timing and size information attached to an assembled run"""
    run_id: Optional[str] = None
    format: OutputFormat
    model: str
    segment_count: int
    total_words: int
    words_per_segment: List[int]
    started_at: str
    completed_at: str
    duration_seconds: float
    persisted: bool = False


class GenerateRequest(BaseModel):
    """Request to split a script and generate every segment in one call"""
    script: str
    config: GenerationConfig = Field(default_factory=GenerationConfig)
    persist: Optional[bool] = None  # Overrides PERSIST_RUNS when set


class GenerateResponse(BaseModel):
    segments: List[Segment]
    metadata: RunMetadata


class ContinuationRequest(BaseModel):
    """First call carries script+config, later calls carry only the token"""
    script: Optional[str] = None
    config: Optional[GenerationConfig] = None
    continuation_token: Optional[str] = None


class ContinuationResponse(BaseModel):
    segment: Segment
    total_segments: int
    is_complete: bool
    continuation_token: Optional[str] = None
    voice_profile: Optional[Dict[str, Any]] = None


class DownloadRequest(BaseModel):
    """Segments to bundle into a zip archive (trusted as supplied)"""
    segments: List[Dict[str, Any]]
