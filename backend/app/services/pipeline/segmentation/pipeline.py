"""
Segment Pipeline

Turns a script into an ordered list of segments:

    SPLITTING -> GENERATING_BASE -> GENERATING_SEGMENT(1..N) -> ASSEMBLING -> DONE

FAILED is reachable from every non-terminal state. Segments are generated as a
strict left-to-right fold: the continuity block produced by segment i is the
continuity input of segment i+1, so no segment call starts before the
previous one has returned. Any provider failure aborts the run.
"""

from dataclasses import dataclass, field
from datetime import datetime, UTC
from typing import Any, Dict, List, Optional, Tuple

from app.config import (
    DEFAULT_PIPELINE_MODELS,
    FORMAT_CONTINUATION,
    MIN_SCRIPT_LENGTH,
    WORDS_PER_SEGMENT_MAX,
    WORDS_PER_SEGMENT_MIN,
    PipelineModels,
)
from app.core.exceptions import PipelineIntegrityError, ValidationError
from app.core.logging import get_logger, run_id_var
from app.models.generation import GenerationConfig, RunMetadata, Segment
from app.models.status import RunState
from app.services.infrastructure.llm import TextGenerationRequest, TextProvider
from app.services.infrastructure.storage import new_run_id

from .contracts import DEFAULT_RESPONSE_CONTRACT, ResponseContract
from .prompts import SEGMENT_SYSTEM, build_base_prompt, build_segment_prompt
from .splitter import ScriptPart, split_script
from .templates import select_template

logger = get_logger(__name__, component="segment_pipeline")


def validate_script(script: Optional[str]) -> str:
    """Reject missing or too-short scripts before any provider call"""
    if not isinstance(script, str) or not script.strip():
        raise ValidationError("Script is required")
    script = script.strip()
    if len(script) < MIN_SCRIPT_LENGTH:
        raise ValidationError(f"Script must be at least {MIN_SCRIPT_LENGTH} characters long")
    return script


@dataclass
class SegmentStep:
    """Output of one fold step"""
    segment: Segment
    continuity: Optional[Dict[str, Any]]
    voice_profile: Optional[Dict[str, Any]]


@dataclass
class Run:
    """One script-to-segments generation, tracked through its states"""
    run_id: str
    script: str
    config: GenerationConfig
    state: RunState = RunState.SPLITTING
    parts: List[ScriptPart] = field(default_factory=list)
    base_description: Optional[Dict[str, Any]] = None
    voice_profile: Optional[Dict[str, Any]] = None
    segments: List[Segment] = field(default_factory=list)
    current_segment: Optional[int] = None
    error: Optional[str] = None
    started_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def transition(self, state: RunState, segment_number: Optional[int] = None) -> None:
        if self.state.is_terminal():
            raise RuntimeError(f"Run {self.run_id} is already {self.state.value}")
        self.state = state
        self.current_segment = segment_number
        label = f"{state.value}({segment_number})" if segment_number else state.value
        logger.info(f"Run state: {label}", extra={"state": state.value, "segment_number": segment_number})

    def fail(self, error: Exception) -> None:
        self.error = str(error)
        self.state = RunState.FAILED
        logger.error(
            f"Run failed in {self.current_segment or 'setup'}: {error}",
            extra={"state": RunState.FAILED.value, "segment_number": self.current_segment},
        )


@dataclass
class PipelineResult:
    segments: List[Segment]
    metadata: RunMetadata
    run: Run


class SegmentPipeline:
    """
    Orchestrates splitting, the base description call and the segment fold.

    One instance can serve many runs; all per-run state lives on Run.

    Usage:
        pipeline = SegmentPipeline(text_provider)
        result = await pipeline.run(script, config)
    """

    def __init__(
        self,
        text_provider: TextProvider,
        models: PipelineModels = DEFAULT_PIPELINE_MODELS,
        contract: ResponseContract = DEFAULT_RESPONSE_CONTRACT,
        min_words: int = WORDS_PER_SEGMENT_MIN,
        max_words: int = WORDS_PER_SEGMENT_MAX,
    ):
        self.text_provider = text_provider
        self.models = models
        self.contract = contract
        self.min_words = min_words
        self.max_words = max_words

    def split(self, script: str) -> List[ScriptPart]:
        parts = split_script(script, self.min_words, self.max_words)
        if not parts:
            raise ValidationError("Script produced no segments")
        return parts

    async def run(self, script: str, config: GenerationConfig, run_id: Optional[str] = None) -> PipelineResult:
        script = validate_script(script)
        run = Run(run_id=run_id or new_run_id(), script=script, config=config)
        token = run_id_var.set(run.run_id)
        try:
            return await self._execute(run)
        except Exception as exc:
            run.fail(exc)
            raise
        finally:
            run_id_var.reset(token)

    async def _execute(self, run: Run) -> PipelineResult:
        logger.info(
            "Run started",
            extra={"format": run.config.format, "script_chars": len(run.script)},
        )
        run.transition(RunState.SPLITTING)
        run.parts = self.split(run.script)

        run.transition(RunState.GENERATING_BASE)
        run.base_description, run.voice_profile = await self.generate_base(run.script, run.config, len(run.parts))

        previous_continuity: Optional[Dict[str, Any]] = None
        total = len(run.parts)
        for number, part in enumerate(run.parts, start=1):
            run.transition(RunState.GENERATING_SEGMENT, number)
            step = await self.generate_segment(
                config=run.config,
                part=part,
                segment_number=number,
                total_segments=total,
                base_description=run.base_description,
                previous_continuity=previous_continuity,
                voice_profile=run.voice_profile,
            )
            run.segments.append(step.segment)
            run.voice_profile = step.voice_profile
            previous_continuity = step.continuity

        run.transition(RunState.ASSEMBLING)
        metadata = self.assemble_metadata(run)
        run.transition(RunState.DONE)
        logger.info(
            "Run completed",
            extra={"segment_count": metadata.segment_count, "duration_seconds": metadata.duration_seconds},
        )
        return PipelineResult(segments=list(run.segments), metadata=metadata, run=run)

    async def generate_base(
        self, script: str, config: GenerationConfig, total_segments: int
    ) -> Tuple[Dict[str, Any], Optional[Dict[str, Any]]]:
        """One call per run: shared description, plus the voice profile in continuation mode"""
        is_continuation = config.format == FORMAT_CONTINUATION
        step = self.models.base_description
        result = await self.text_provider.invoke(TextGenerationRequest(
            prompt=build_base_prompt(script, config.prompt_fields(), total_segments, with_voice_profile=is_continuation),
            system_instruction=SEGMENT_SYSTEM.template,
            model=step.model_name,
            temperature=step.temperature,
            max_tokens=step.max_tokens,
            context={"step": "base_description", "format": config.format},
        ))
        voice_profile = self.contract.voice_profile(result.data) if is_continuation else None
        return result.data, voice_profile

    async def generate_segment(
        self,
        config: GenerationConfig,
        part: ScriptPart,
        segment_number: int,
        total_segments: int,
        base_description: Optional[Dict[str, Any]],
        previous_continuity: Optional[Dict[str, Any]],
        voice_profile: Optional[Dict[str, Any]],
    ) -> SegmentStep:
        """
        One fold step: build the prompt for segment_number from the previous
        step's output, call the provider and extract what the next step needs.

        Raises:
            ProviderError: Provider call failed
            PipelineIntegrityError: Continuity or voice profile missing when the next step needs it
        """
        is_first = segment_number == 1
        is_last = segment_number == total_segments
        template = select_template(config.format, is_first, voice_profile is not None)
        if template.carries_continuity and not is_first and previous_continuity is None:
            raise PipelineIntegrityError(f"Segment {segment_number} requires the previous segment's continuity state")

        step = self.models.segment
        result = await self.text_provider.invoke(TextGenerationRequest(
            prompt=build_segment_prompt(
                template.prompt,
                dialogue=part.text,
                word_count=part.word_count,
                segment_number=segment_number,
                total_segments=total_segments,
                base_description=base_description,
                previous_continuity=previous_continuity,
                voice_profile=voice_profile,
            ),
            system_instruction=SEGMENT_SYSTEM.template,
            model=step.model_name,
            temperature=step.temperature,
            max_tokens=step.max_tokens,
            segment_number=segment_number,
            context={
                "step": "segment",
                "template": template.value,
                "previous_continuity": previous_continuity,
            },
        ))

        continuity = None
        if template.carries_continuity:
            continuity = self.contract.continuity(result.data, required=not is_last, segment_number=segment_number)

        if config.format == FORMAT_CONTINUATION and voice_profile is None:
            # Not returned by the base call: derive it once from segment 1
            voice_profile = self.contract.voice_profile(result.data, required=not is_last, segment_number=segment_number)

        segment = Segment(
            segment_number=segment_number,
            dialogue=part.text,
            word_count=part.word_count,
            description=result.data,
            continuity_state=continuity,
        )
        logger.info(
            f"Segment {segment_number}/{total_segments} generated",
            extra={"segment_number": segment_number, "template": template.value, "word_count": part.word_count},
        )
        return SegmentStep(segment=segment, continuity=continuity, voice_profile=voice_profile)

    def assemble_metadata(self, run: Run) -> RunMetadata:
        completed_at = datetime.now(UTC)
        return RunMetadata(
            run_id=run.run_id,
            format=run.config.format,
            model=self.models.segment.model_name,
            segment_count=len(run.segments),
            total_words=sum(segment.word_count for segment in run.segments),
            words_per_segment=[segment.word_count for segment in run.segments],
            started_at=run.started_at.isoformat(),
            completed_at=completed_at.isoformat(),
            duration_seconds=round((completed_at - run.started_at).total_seconds(), 3),
        )
