"""
Text-generation providers

Usage:
    from app.services.infrastructure.llm import OpenAITextProvider, TextGenerationRequest

    provider = OpenAITextProvider(api_key=settings.openai_api_key)
    result = await provider.invoke(TextGenerationRequest(prompt="..."))
    result.data  # parsed JSON object
"""

from .base import (
    TextProvider,
    TextGenerationRequest,
    TextGenerationResult,
    UsageStats,
)
from .openai_provider import OpenAITextProvider

__all__ = [
    "TextProvider",
    "TextGenerationRequest",
    "TextGenerationResult",
    "UsageStats",
    "OpenAITextProvider",
]
