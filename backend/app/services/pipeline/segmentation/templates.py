"""
Template Selector

Pure mapping from (format, is_first_segment, has_voice_profile) to one of four
segment contracts. No I/O and no state.
"""

from enum import Enum

from app.config import FORMAT_CONTINUATION, FORMAT_ENHANCED, FORMAT_STANDARD
from app.core.exceptions import PipelineIntegrityError, ValidationError
from app.services.infrastructure.llm.prompt_template import PromptTemplate

from .prompts import (
    CONTINUATION_FIRST_SEGMENT,
    CONTINUATION_NEXT_SEGMENT,
    ENHANCED_SEGMENT,
    STANDARD_SEGMENT,
)


class SegmentTemplate(str, Enum):
    STANDARD = "standard"
    ENHANCED = "enhanced"
    CONTINUATION_FIRST = "continuation_first"
    CONTINUATION_NEXT = "continuation_next"

    @property
    def prompt(self) -> PromptTemplate:
        return _PROMPTS[self]

    @property
    def carries_continuity(self) -> bool:
        """True when the contract asks for a continuity block to hand forward"""
        return self is not SegmentTemplate.STANDARD


_PROMPTS = {
    SegmentTemplate.STANDARD: STANDARD_SEGMENT,
    SegmentTemplate.ENHANCED: ENHANCED_SEGMENT,
    SegmentTemplate.CONTINUATION_FIRST: CONTINUATION_FIRST_SEGMENT,
    SegmentTemplate.CONTINUATION_NEXT: CONTINUATION_NEXT_SEGMENT,
}


def select_template(output_format: str, is_first_segment: bool, has_voice_profile: bool) -> SegmentTemplate:
    """
    Pick the segment contract.

    Raises:
        ValidationError: Unknown format
        PipelineIntegrityError: A later continuation segment without a voice profile
    """
    if output_format == FORMAT_STANDARD:
        return SegmentTemplate.STANDARD
    if output_format == FORMAT_ENHANCED:
        return SegmentTemplate.ENHANCED
    if output_format == FORMAT_CONTINUATION:
        if is_first_segment:
            return SegmentTemplate.CONTINUATION_FIRST
        if not has_voice_profile:
            raise PipelineIntegrityError("Continuation segment requested without a voice profile")
        return SegmentTemplate.CONTINUATION_NEXT
    raise ValidationError(f"Unknown output format: {output_format}")
