"""
Tests for the multi-call continuation protocol
"""

import pytest

from app.core.exceptions import ValidationError
from app.core.tokens import ContinuationTokenCodec
from app.models.generation import GenerationConfig
from app.services.pipeline.segmentation import ContinuationSession, SegmentPipeline


@pytest.fixture
def codec():
    return ContinuationTokenCodec("s")


@pytest.fixture
def provider(text_provider_factory):
    return text_provider_factory()


@pytest.fixture
def session(provider, codec):
    return ContinuationSession(SegmentPipeline(provider), codec)


class TestContinuationSession:

    @pytest.mark.asyncio
    async def test_start_returns_first_segment_and_token(self, session, provider, script_45_words):
        response = await session.start(script_45_words, GenerationConfig(format="continuation"))

        assert response.segment.segment_number == 1
        assert response.total_segments == 3
        assert response.is_complete is False
        assert response.continuation_token
        assert response.voice_profile == {"baseline_voice": "warm alto", "pace": "relaxed"}
        assert [r.segment_number for r in provider.requests] == [None, 1]

    @pytest.mark.asyncio
    async def test_advance_until_complete(self, session, provider, script_45_words):
        response = await session.start(script_45_words, GenerationConfig(format="continuation"))
        segments = [response.segment]
        while not response.is_complete:
            response = await session.advance(response.continuation_token)
            segments.append(response.segment)

        assert [s.segment_number for s in segments] == [1, 2, 3]
        assert response.continuation_token is None
        assert " ".join(s.dialogue for s in segments) == script_45_words
        # The base description is generated once, on the first call only
        assert [r.segment_number for r in provider.requests] == [None, 1, 2, 3]

    @pytest.mark.asyncio
    async def test_previous_continuity_carried_in_token(self, session, provider, codec, script_45_words):
        first = await session.start(script_45_words, GenerationConfig(format="continuation"))

        state = codec.decode(first.continuation_token)
        assert state["next_segment"] == 2
        assert state["previous_continuity"] == first.segment.continuity_state

        await session.advance(first.continuation_token)
        assert provider.requests[-1].context["previous_continuity"] == {"end_position": "pos-1", "end_expression": "smile"}
        assert provider.requests[-1].context["template"] == "continuation_next"

    @pytest.mark.asyncio
    async def test_tampered_token_rejected(self, session, provider, script_45_words):
        first = await session.start(script_45_words, GenerationConfig(format="continuation"))
        body, signature = first.continuation_token.split(".")
        calls_before = len(provider.requests)

        with pytest.raises(ValidationError):
            await session.advance(f"{body}x.{signature}")

        assert len(provider.requests) == calls_before

    @pytest.mark.asyncio
    async def test_token_from_other_secret_rejected(self, session, provider, script_45_words):
        first = await session.start(script_45_words, GenerationConfig(format="continuation"))
        other = ContinuationSession(SegmentPipeline(provider), ContinuationTokenCodec("other"))

        with pytest.raises(ValidationError):
            await other.advance(first.continuation_token)

    @pytest.mark.asyncio
    async def test_token_without_run_state_rejected(self, session, codec):
        with pytest.raises(ValidationError, match="missing run state"):
            await session.advance(codec.encode({"next_segment": 2}))

    @pytest.mark.asyncio
    async def test_token_pointing_past_end_rejected(self, session, codec):
        token = codec.encode({
            "parts": ["one two", "three four"],
            "config": GenerationConfig(format="continuation").model_dump(mode="json"),
            "next_segment": 3,
        })

        with pytest.raises(ValidationError):
            await session.advance(token)

    @pytest.mark.asyncio
    async def test_short_script_rejected_without_calls(self, session, provider):
        with pytest.raises(ValidationError):
            await session.start("short", GenerationConfig(format="continuation"))

        assert provider.requests == []
