"""
Tests for the segment pipeline

The text provider is a recording double; these tests check call ordering,
continuity threading and the fail-fast policy.
"""

import pytest

from app.core.exceptions import (
    PipelineIntegrityError,
    ProviderRateLimitError,
    ProviderUnavailableError,
    ValidationError,
)
from app.models.generation import GenerationConfig
from app.models.status import RunState
from app.services.pipeline.segmentation import SegmentPipeline
from app.services.pipeline.segmentation.pipeline import Run

LONG_SCRIPT = " ".join(f"word{i}" for i in range(1, 101)) + "."


class TestValidation:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("script", ["", "   ", "Too short to be a script."])
    async def test_short_script_makes_no_calls(self, text_provider_factory, script):
        provider = text_provider_factory()

        with pytest.raises(ValidationError):
            await SegmentPipeline(provider).run(script, GenerationConfig())

        assert provider.requests == []

    @pytest.mark.asyncio
    async def test_unconfigured_provider_fails_before_segments(self, text_provider_factory):
        provider = text_provider_factory(error=ProviderUnavailableError("no key", provider="openai"), fail_on_segment=None)

        with pytest.raises(ProviderUnavailableError):
            await SegmentPipeline(provider).run(LONG_SCRIPT, GenerationConfig())

        assert len(provider.requests) == 1


class TestStandardRun:

    @pytest.mark.asyncio
    async def test_one_base_call_then_one_call_per_segment(self, text_provider_factory, script_45_words):
        provider = text_provider_factory()

        result = await SegmentPipeline(provider).run(script_45_words, GenerationConfig(format="standard"))

        assert len(result.segments) == 3
        assert [r.segment_number for r in provider.requests] == [None, 1, 2, 3]
        assert [s.segment_number for s in result.segments] == [1, 2, 3]
        assert " ".join(s.dialogue for s in result.segments) == script_45_words
        assert all(s.continuity_state is None for s in result.segments)
        assert result.run.state is RunState.DONE

    @pytest.mark.asyncio
    async def test_base_description_reaches_every_segment_prompt(self, text_provider_factory, script_45_words):
        provider = text_provider_factory()

        await SegmentPipeline(provider).run(script_45_words, GenerationConfig())

        for request in provider.segment_requests:
            assert "bright kitchen" in request.prompt

    @pytest.mark.asyncio
    async def test_metadata(self, text_provider_factory, script_45_words):
        result = await SegmentPipeline(text_provider_factory()).run(
            script_45_words, GenerationConfig(), run_id="20261018T101530123456Z-1a2b3c4d"
        )

        metadata = result.metadata
        assert metadata.run_id == "20261018T101530123456Z-1a2b3c4d"
        assert metadata.segment_count == 3
        assert metadata.total_words == 45
        assert metadata.words_per_segment == [15, 15, 15]
        assert metadata.format == "standard"
        assert metadata.duration_seconds >= 0
        assert metadata.persisted is False


class TestContinuityThreading:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("output_format", ["enhanced", "continuation"])
    async def test_each_segment_receives_previous_output(self, text_provider_factory, output_format):
        provider = text_provider_factory()

        result = await SegmentPipeline(provider).run(LONG_SCRIPT, GenerationConfig(format=output_format))

        segments = result.segments
        requests = provider.segment_requests
        assert len(segments) == 5
        assert requests[0].context["previous_continuity"] is None
        for i in range(1, len(segments)):
            assert requests[i].context["previous_continuity"] == segments[i - 1].continuity_state
            assert requests[i].context["previous_continuity"] == {"end_position": f"pos-{i}", "end_expression": "smile"}

    @pytest.mark.asyncio
    async def test_continuation_templates_and_voice_profile(self, text_provider_factory):
        provider = text_provider_factory()

        await SegmentPipeline(provider).run(LONG_SCRIPT, GenerationConfig(format="continuation"))

        templates = [r.context["template"] for r in provider.segment_requests]
        assert templates == ["continuation_first"] + ["continuation_next"] * 4
        for request in provider.segment_requests:
            assert "warm alto" in request.prompt

    @pytest.mark.asyncio
    async def test_voice_profile_derived_from_first_segment_when_base_lacks_it(self, text_provider_factory):
        def responder(request):
            if request.segment_number is None:
                return {"character_description": {"physical": "x"}}
            data = {"continuity": {"end_position": f"pos-{request.segment_number}"}}
            if request.segment_number == 1:
                data["voice_profile"] = {"baseline_voice": "bright soprano"}
            return data

        provider = text_provider_factory(responder=responder)

        await SegmentPipeline(provider).run(LONG_SCRIPT, GenerationConfig(format="continuation"))

        assert "bright soprano" not in provider.segment_requests[0].prompt
        assert all("bright soprano" in r.prompt for r in provider.segment_requests[1:])

    @pytest.mark.asyncio
    async def test_missing_continuity_is_integrity_failure(self, text_provider_factory):
        def responder(request):
            if request.segment_number == 2:
                return {"segment_info": {"segment_number": 2}}
            return {"continuity": {"end_position": "x"}}

        provider = text_provider_factory(responder=responder)

        with pytest.raises(PipelineIntegrityError):
            await SegmentPipeline(provider).run(LONG_SCRIPT, GenerationConfig(format="enhanced"))

        assert [r.segment_number for r in provider.requests] == [None, 1, 2]

    @pytest.mark.asyncio
    async def test_last_segment_may_omit_continuity(self, text_provider_factory, script_45_words):
        def responder(request):
            if request.segment_number == 3:
                return {"segment_info": {"segment_number": 3}}
            return {"continuity": {"end_position": "x"}}

        result = await SegmentPipeline(text_provider_factory(responder=responder)).run(
            script_45_words, GenerationConfig(format="enhanced")
        )

        assert result.segments[-1].continuity_state is None


class TestFailFast:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("output_format", ["standard", "continuation"])
    async def test_failure_on_segment_k_aborts_run(self, text_provider_factory, output_format):
        error = ProviderRateLimitError("Rate limit exceeded", provider="openai", segment_number=3)
        provider = text_provider_factory(fail_on_segment=3, error=error)

        with pytest.raises(ProviderRateLimitError):
            await SegmentPipeline(provider).run(LONG_SCRIPT, GenerationConfig(format=output_format))

        assert [r.segment_number for r in provider.requests] == [None, 1, 2, 3]


class TestRun:

    def test_transition_after_terminal_state(self):
        run = Run(run_id="r", script="s", config=GenerationConfig())
        run.fail(ValueError("boom"))

        assert run.state is RunState.FAILED
        assert run.error == "boom"
        with pytest.raises(RuntimeError):
            run.transition(RunState.ASSEMBLING)
