"""
Tests for the template selector
"""

import pytest

from app.core.exceptions import PipelineIntegrityError, ValidationError
from app.services.pipeline.segmentation.templates import SegmentTemplate, select_template


@pytest.mark.parametrize(
    "output_format, is_first, has_profile, expected",
    [
        ("standard", True, False, SegmentTemplate.STANDARD),
        ("standard", False, True, SegmentTemplate.STANDARD),
        ("enhanced", True, False, SegmentTemplate.ENHANCED),
        ("enhanced", False, False, SegmentTemplate.ENHANCED),
        ("continuation", True, False, SegmentTemplate.CONTINUATION_FIRST),
        ("continuation", True, True, SegmentTemplate.CONTINUATION_FIRST),
        ("continuation", False, True, SegmentTemplate.CONTINUATION_NEXT),
    ],
)
def test_selection(output_format, is_first, has_profile, expected):
    assert select_template(output_format, is_first, has_profile) is expected


def test_later_continuation_without_profile():
    with pytest.raises(PipelineIntegrityError):
        select_template("continuation", False, False)


def test_unknown_format():
    with pytest.raises(ValidationError):
        select_template("cinematic", True, False)


def test_only_standard_skips_continuity():
    assert not SegmentTemplate.STANDARD.carries_continuity
    assert all(t.carries_continuity for t in SegmentTemplate if t is not SegmentTemplate.STANDARD)


def test_next_contract_references_profile_not_character():
    prompt = SegmentTemplate.CONTINUATION_NEXT.prompt.template
    assert "{voice_profile}" in prompt
    assert "{previous_continuity}" in prompt
    assert "character_description" not in prompt
