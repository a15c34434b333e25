"""
Tests for the Gemini/Vertex descriptive video provider

A client double stands in for genai.Client; errors are real google-genai errors.
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from google.auth.exceptions import DefaultCredentialsError, RefreshError
from google.genai import errors as genai_errors

from app.core.exceptions import ProviderAuthError, ProviderError, ProviderRateLimitError, ProviderUnavailableError
from app.models.video import VideoOptions
from app.services.infrastructure.video import GeminiVideoProvider, build_vertex_provider

SEGMENT = {"segment_number": 1, "dialogue": "Morning routine, simplified"}


def _client(**kwargs) -> MagicMock:
    client = MagicMock()
    client.aio.models.generate_content = AsyncMock(**kwargs)
    return client


class TestGeminiVideoProvider:

    def test_configuration_flags(self):
        assert GeminiVideoProvider(api_key="g").is_configured()
        assert not GeminiVideoProvider().is_configured()
        assert build_vertex_provider("/creds.json", "proj", "us-central1").is_configured()
        assert not build_vertex_provider(None, "proj", "us-central1").is_configured()
        assert build_vertex_provider(None, None, "us-central1").name == "vertex"

    @pytest.mark.asyncio
    async def test_description_result(self):
        client = _client(return_value=SimpleNamespace(text="Shot 1: close-up, warm light"))
        provider = GeminiVideoProvider(model="gemini-2.5-flash", client=client)

        result = await provider.generate_video(SEGMENT, VideoOptions(), segment_index=1)

        assert result.success
        assert result.description == "Shot 1: close-up, warm light"
        assert result.video_url is None
        assert result.cost == 0.0
        kwargs = client.aio.models.generate_content.await_args.kwargs
        assert kwargs["model"] == "gemini-2.5-flash"
        assert "Morning routine, simplified" in kwargs["contents"]

    @pytest.mark.asyncio
    async def test_api_error_mapped(self):
        error = genai_errors.ClientError(429, {"error": {"code": 429, "message": "quota", "status": "RESOURCE_EXHAUSTED"}})
        provider = GeminiVideoProvider(client=_client(side_effect=error))

        with pytest.raises(ProviderRateLimitError):
            await provider.generate_video(SEGMENT, VideoOptions(), 1)

    @pytest.mark.asyncio
    async def test_empty_text(self):
        provider = GeminiVideoProvider(client=_client(return_value=SimpleNamespace(text="")))

        with pytest.raises(ProviderError):
            await provider.generate_video(SEGMENT, VideoOptions(), 1)

    @pytest.mark.asyncio
    async def test_unconfigured(self):
        with pytest.raises(ProviderUnavailableError):
            await GeminiVideoProvider().generate_video(SEGMENT, VideoOptions(), 1)

    @pytest.mark.asyncio
    async def test_vertex_credentials_failure_is_unavailable(self):
        provider = build_vertex_provider("/missing/creds.json", "proj", "us-central1")

        with patch(
            "app.services.infrastructure.video.gemini_provider.genai.Client",
            side_effect=DefaultCredentialsError("File /missing/creds.json was not found."),
        ):
            with pytest.raises(ProviderUnavailableError) as exc_info:
                await provider.generate_video(SEGMENT, VideoOptions(), 1)

        assert exc_info.value.provider == "vertex"

    @pytest.mark.asyncio
    async def test_credential_refresh_failure_is_auth_error(self):
        provider = GeminiVideoProvider(client=_client(side_effect=RefreshError("token expired")))

        with pytest.raises(ProviderAuthError):
            await provider.generate_video(SEGMENT, VideoOptions(), 1)
