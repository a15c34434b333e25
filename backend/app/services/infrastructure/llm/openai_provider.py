"""
OpenAI text provider

Chat completions in JSON mode. No retries: max_retries=0 so a failure
surfaces immediately to the pipeline's fail-fast policy.
"""

from typing import Any, Optional

import openai
from openai import AsyncOpenAI

from app.config import DEFAULT_OPENAI_MODEL, PROVIDER_OPENAI
from app.core.exceptions import (
    ProviderError,
    ProviderQuotaError,
    ProviderTransientError,
    ProviderUnavailableError,
    error_from_status,
)
from app.core.logging import LogTimer, get_logger

from ..parsing import parse_json_object
from .base import TextGenerationRequest, TextGenerationResult, TextProvider, UsageStats

logger = get_logger(__name__, component="openai_provider")


class OpenAITextProvider(TextProvider):
    """OpenAI adapter for the segment pipeline"""

    name = PROVIDER_OPENAI

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = DEFAULT_OPENAI_MODEL,
        timeout: float = 300.0,
        client: Optional[AsyncOpenAI] = None,
    ):
        """
        Args:
            api_key: OpenAI API key; without it the adapter reports unavailable
            model: Default model when a request does not name one
            timeout: Per-call ceiling in seconds
            client: Pre-built client (tests inject a double here)
        """
        self.model = model
        self.timeout = timeout
        self._client = client
        if self._client is None and api_key:
            self._client = AsyncOpenAI(api_key=api_key, timeout=timeout, max_retries=0)

    def is_configured(self) -> bool:
        return self._client is not None

    async def invoke(self, request: TextGenerationRequest) -> TextGenerationResult:
        if not self.is_configured():
            raise ProviderUnavailableError(
                "OpenAI provider not configured. Set OPENAI_API_KEY",
                provider=self.name,
                segment_number=request.segment_number,
            )

        model = request.model or self.model
        messages = []
        if request.system_instruction:
            messages.append({"role": "system", "content": request.system_instruction})
        messages.append({"role": "user", "content": request.prompt})

        kwargs: dict[str, Any] = {
            "model": model,
            "messages": messages,
            "temperature": request.temperature,
            "response_format": {"type": "json_object"},
        }
        if request.max_tokens:
            kwargs["max_tokens"] = request.max_tokens

        label = f"segment {request.segment_number}" if request.segment_number else "base description"
        try:
            with LogTimer(logger, f"OpenAI completion ({label})", model=model, segment_number=request.segment_number):
                response = await self._client.chat.completions.create(**kwargs)
        except openai.APITimeoutError as exc:
            raise ProviderTransientError(
                "Request timeout. Generation is taking longer than expected",
                provider=self.name,
                segment_number=request.segment_number,
            ) from exc
        except openai.APIConnectionError as exc:
            raise ProviderTransientError(
                "Network error. Could not reach OpenAI",
                provider=self.name,
                segment_number=request.segment_number,
            ) from exc
        except openai.APIStatusError as exc:
            raise self._classify(exc, request.segment_number) from exc

        raw_text = ""
        if response.choices:
            raw_text = response.choices[0].message.content or ""
        data = parse_json_object(raw_text)
        if data is None:
            raise ProviderError(
                "OpenAI returned a response that is not a JSON object",
                provider=self.name,
                segment_number=request.segment_number,
            )

        return TextGenerationResult(
            data=data,
            raw_text=raw_text,
            model=getattr(response, "model", None) or model,
            provider=self.name,
            usage=self._extract_usage(response),
        )

    def _classify(self, exc: "openai.APIStatusError", segment_number: Optional[int]) -> ProviderError:
        # OpenAI reports exhausted credit as a 429 with code insufficient_quota
        if exc.status_code == 429 and getattr(exc, "code", None) == "insufficient_quota":
            return ProviderQuotaError(
                "Insufficient credits. Please add funds to your OpenAI account",
                provider=self.name,
                status_code=exc.status_code,
                segment_number=segment_number,
            )
        return error_from_status(self.name, exc.status_code, detail=exc.message, segment_number=segment_number)

    @staticmethod
    def _extract_usage(response: Any) -> Optional[UsageStats]:
        usage = getattr(response, "usage", None)
        if not usage:
            return None
        return UsageStats(
            input_tokens=getattr(usage, "prompt_tokens", 0) or 0,
            output_tokens=getattr(usage, "completion_tokens", 0) or 0,
        )
