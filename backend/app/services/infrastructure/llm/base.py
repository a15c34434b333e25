"""
Base classes for text-generation providers

Defines the normalized request/response contract the segment pipeline uses to
talk to a text provider.
"""

from abc import abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from ..base import ProviderAdapter


@dataclass
class TextGenerationRequest:
    """Normalized text-generation request"""
    prompt: str
    system_instruction: Optional[str] = None
    model: Optional[str] = None
    temperature: float = 0.7
    max_tokens: Optional[int] = None
    # Which segment this call belongs to (None for the base description call)
    segment_number: Optional[int] = None
    # Structured inputs the prompt was built from, kept for logging and inspection
    context: Dict[str, Any] = field(default_factory=dict)


@dataclass
class UsageStats:
    """Token usage statistics"""
    input_tokens: int = 0
    output_tokens: int = 0
    total_tokens: int = 0

    def __post_init__(self):
        if self.total_tokens == 0:
            self.total_tokens = self.input_tokens + self.output_tokens


@dataclass
class TextGenerationResult:
    """Normalized response: the parsed JSON object plus provenance"""
    data: Dict[str, Any]
    raw_text: str
    model: str
    provider: str
    usage: Optional[UsageStats] = None


class TextProvider(ProviderAdapter):
    """Abstract text-generation adapter"""

    @abstractmethod
    async def invoke(self, request: TextGenerationRequest) -> TextGenerationResult:
        """Run one generation call.

        Raises:
            ProviderError (or one of its variants) on any provider failure.
        """
