"""
Model Configuration for Pipeline Steps

Each text-generation step in the segment pipeline has its own model settings so
the base description call and the per-segment calls can be tuned separately.

Set OPENAI_MODEL to switch the model used by every step. Temperatures and token
ceilings stay per step.
"""

from dataclasses import dataclass, replace
from typing import Optional


@dataclass(frozen=True)
class ModelConfig:
    """Configuration for a single text-generation step"""
    model_name: str
    temperature: float = 0.7
    max_tokens: Optional[int] = None
    description: str = ""


@dataclass(frozen=True)
class PipelineModels:
    """Model configuration for each step of the segment pipeline"""

    # One call per run: character, clothing and environment shared by all segments
    base_description: ModelConfig = ModelConfig(
        model_name="gpt-4o",
        temperature=0.7,
        max_tokens=4000,
        description="Base character/clothing/environment description",
    )

    # One call per segment
    segment: ModelConfig = ModelConfig(
        model_name="gpt-4o",
        temperature=0.7,
        max_tokens=6000,
        description="Per-segment structured description",
    )

    def with_model(self, model_name: str) -> "PipelineModels":
        """Return a copy with every step pointed at model_name"""
        return PipelineModels(
            base_description=replace(self.base_description, model_name=model_name),
            segment=replace(self.segment, model_name=model_name),
        )


DEFAULT_PIPELINE_MODELS = PipelineModels()

DEFAULT_OPENAI_MODEL = "gpt-4o"
DEFAULT_GEMINI_MODEL = "gemini-2.5-flash"

__all__ = [
    "ModelConfig",
    "PipelineModels",
    "DEFAULT_PIPELINE_MODELS",
    "DEFAULT_OPENAI_MODEL",
    "DEFAULT_GEMINI_MODEL",
]
