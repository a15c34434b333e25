"""
Tests for the OpenAI text provider

The SDK client is replaced by a double passed to the constructor; error
classes are the real openai exceptions.
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import httpx
import openai
import pytest

from app.core.exceptions import (
    ProviderAuthError,
    ProviderError,
    ProviderQuotaError,
    ProviderRateLimitError,
    ProviderTransientError,
    ProviderUnavailableError,
)
from app.services.infrastructure.llm import OpenAITextProvider, TextGenerationRequest

OPENAI_URL = "https://api.openai.com/v1/chat/completions"


def _completion(content: str):
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=content))],
        model="gpt-4o-2024-08-06",
        usage=SimpleNamespace(prompt_tokens=120, completion_tokens=80),
    )


def _client(**create_kwargs) -> MagicMock:
    client = MagicMock()
    client.chat.completions.create = AsyncMock(**create_kwargs)
    return client


def _status_error(cls, status_code: int, body=None):
    request = httpx.Request("POST", OPENAI_URL)
    response = httpx.Response(status_code, request=request)
    return cls("provider said no", response=response, body=body)


def _request(**kwargs) -> TextGenerationRequest:
    return TextGenerationRequest(prompt="Describe segment 2", system_instruction="JSON only", segment_number=2, **kwargs)


class TestOpenAITextProvider:

    def test_unconfigured_without_key(self):
        assert not OpenAITextProvider(api_key=None).is_configured()
        assert OpenAITextProvider(api_key="sk-test").is_configured()

    @pytest.mark.asyncio
    async def test_unconfigured_invoke_raises(self):
        with pytest.raises(ProviderUnavailableError):
            await OpenAITextProvider().invoke(_request())

    @pytest.mark.asyncio
    async def test_status_reports_missing_key(self):
        status = await OpenAITextProvider().status()
        assert not status.available
        assert status.reason == "API key not configured"

    @pytest.mark.asyncio
    async def test_invoke_parses_json(self):
        client = _client(return_value=_completion('{"continuity": {"end_position": "standing"}}'))
        provider = OpenAITextProvider(model="gpt-4o", client=client)

        result = await provider.invoke(_request(max_tokens=500))

        assert result.data == {"continuity": {"end_position": "standing"}}
        assert result.provider == "openai"
        assert result.model == "gpt-4o-2024-08-06"
        assert result.usage.total_tokens == 200

        kwargs = client.chat.completions.create.await_args.kwargs
        assert kwargs["model"] == "gpt-4o"
        assert kwargs["response_format"] == {"type": "json_object"}
        assert kwargs["max_tokens"] == 500
        assert kwargs["messages"][0] == {"role": "system", "content": "JSON only"}
        assert kwargs["messages"][1]["role"] == "user"

    @pytest.mark.asyncio
    async def test_non_json_answer_is_provider_error(self):
        provider = OpenAITextProvider(client=_client(return_value=_completion("Sorry, I cannot help")))

        with pytest.raises(ProviderError) as exc_info:
            await provider.invoke(_request())

        assert type(exc_info.value) is ProviderError
        assert exc_info.value.segment_number == 2

    @pytest.mark.asyncio
    async def test_auth_error(self):
        provider = OpenAITextProvider(client=_client(side_effect=_status_error(openai.AuthenticationError, 401)))

        with pytest.raises(ProviderAuthError) as exc_info:
            await provider.invoke(_request())

        assert exc_info.value.status_code == 401
        assert exc_info.value.http_status == 401

    @pytest.mark.asyncio
    async def test_rate_limit(self):
        provider = OpenAITextProvider(client=_client(side_effect=_status_error(openai.RateLimitError, 429)))

        with pytest.raises(ProviderRateLimitError):
            await provider.invoke(_request())

    @pytest.mark.asyncio
    async def test_insufficient_quota_is_quota_error(self):
        error = _status_error(openai.RateLimitError, 429, body={"code": "insufficient_quota"})
        provider = OpenAITextProvider(client=_client(side_effect=error))

        with pytest.raises(ProviderQuotaError):
            await provider.invoke(_request())

    @pytest.mark.asyncio
    async def test_timeout_is_transient(self):
        error = openai.APITimeoutError(request=httpx.Request("POST", OPENAI_URL))
        provider = OpenAITextProvider(client=_client(side_effect=error))

        with pytest.raises(ProviderTransientError):
            await provider.invoke(_request())

    @pytest.mark.asyncio
    async def test_server_error_is_generic(self):
        provider = OpenAITextProvider(client=_client(side_effect=_status_error(openai.InternalServerError, 500)))

        with pytest.raises(ProviderError) as exc_info:
            await provider.invoke(_request())

        assert exc_info.value.http_status == 502
