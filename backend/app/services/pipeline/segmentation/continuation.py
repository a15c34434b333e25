"""
Continuation protocol

Segment-by-segment generation over several HTTP calls. The first call carries
script and config and returns segment 1; every later call carries only the
token from the previous response and returns the next segment. The server
keeps nothing between calls: split script, config, base description, voice
profile and the last continuity block all travel in the signed token.
"""

from typing import Any, Dict, List, Optional

from pydantic import ValidationError as PydanticValidationError

from app.core.exceptions import ValidationError
from app.core.logging import get_logger
from app.core.tokens import ContinuationTokenCodec
from app.models.generation import ContinuationResponse, GenerationConfig

from .pipeline import SegmentPipeline, validate_script
from .splitter import ScriptPart

logger = get_logger(__name__, component="continuation")


class ContinuationSession:
    """Stateless driver for the multi-call protocol"""

    def __init__(self, pipeline: SegmentPipeline, codec: ContinuationTokenCodec):
        self.pipeline = pipeline
        self.codec = codec

    async def start(self, script: str, config: GenerationConfig) -> ContinuationResponse:
        script = validate_script(script)
        parts = self.pipeline.split(script)
        base_description, voice_profile = await self.pipeline.generate_base(script, config, len(parts))
        return await self._step(
            parts=parts,
            config=config,
            base_description=base_description,
            voice_profile=voice_profile,
            segment_number=1,
            previous_continuity=None,
        )

    async def advance(self, token: str) -> ContinuationResponse:
        state = self.codec.decode(token)
        try:
            parts = [ScriptPart(text=text, word_count=len(text.split())) for text in state["parts"]]
            config = GenerationConfig.model_validate(state["config"])
            segment_number = int(state["next_segment"])
            base_description = state.get("base_description")
            voice_profile = state.get("voice_profile")
            previous_continuity = state.get("previous_continuity")
        except (KeyError, TypeError, ValueError, PydanticValidationError) as exc:
            raise ValidationError("Continuation token is missing run state") from exc

        if not 1 < segment_number <= len(parts):
            raise ValidationError("Continuation token does not point at a pending segment")

        return await self._step(
            parts=parts,
            config=config,
            base_description=base_description,
            voice_profile=voice_profile,
            segment_number=segment_number,
            previous_continuity=previous_continuity,
        )

    async def _step(
        self,
        parts: List[ScriptPart],
        config: GenerationConfig,
        base_description: Optional[Dict[str, Any]],
        voice_profile: Optional[Dict[str, Any]],
        segment_number: int,
        previous_continuity: Optional[Dict[str, Any]],
    ) -> ContinuationResponse:
        total = len(parts)
        step = await self.pipeline.generate_segment(
            config=config,
            part=parts[segment_number - 1],
            segment_number=segment_number,
            total_segments=total,
            base_description=base_description,
            previous_continuity=previous_continuity,
            voice_profile=voice_profile,
        )

        is_complete = segment_number == total
        next_token = None
        if not is_complete:
            next_token = self.codec.encode({
                "parts": [part.text for part in parts],
                "config": config.model_dump(mode="json"),
                "base_description": base_description,
                "voice_profile": step.voice_profile,
                "next_segment": segment_number + 1,
                "previous_continuity": step.continuity,
            })

        logger.info(
            f"Continuation segment {segment_number}/{total} generated",
            extra={"segment_number": segment_number, "is_complete": is_complete},
        )
        return ContinuationResponse(
            segment=step.segment,
            total_segments=total,
            is_complete=is_complete,
            continuation_token=next_token,
            voice_profile=step.voice_profile,
        )
