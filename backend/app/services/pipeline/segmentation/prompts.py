"""
Segment Generation Prompts

- System instruction shared by every call
- Base description prompt (one call per run)
- Four segment prompts, one per output contract (see templates.py)
"""

import json
from typing import Any, Dict, Optional

from app.services.infrastructure.llm.prompt_template import PromptTemplate


# =============================================================================
# SYSTEM INSTRUCTION
# =============================================================================

SEGMENT_SYSTEM = PromptTemplate(
    template="""You are a UGC video director writing shot descriptions for Veo3.
Every answer is a single JSON object and nothing else. Never change the dialogue
you are given: it is spoken word for word in an 8-second clip.
Keep the same person, clothing and location across every segment of a video.""",
    description="System instruction for all segment-generation calls",
)


# =============================================================================
# BASE DESCRIPTION (once per run)
# =============================================================================

BASE_DESCRIPTION = PromptTemplate(
    template="""Create the shared base description for a {total_segments}-segment UGC video.

Full script:
\"\"\"{script}\"\"\"

Creative settings:
{settings}

Return JSON:
{
  "character_description": {
    "physical": "age, build, face, hair, skin (minimum 100 words)",
    "clothing": "exact outfit, colours, fabrics (minimum 50 words)",
    "voice": "pitch, pace, timbre, accent (minimum 50 words)"
  },
  "scene_continuity": {
    "environment": "room or location with fixed props (minimum 75 words)",
    "lighting": "light sources and direction",
    "camera": "framing and lens"
  }{voice_profile_field}
}""",
    description="Base character and scene description",
)

VOICE_PROFILE_FIELD = """,
  "voice_profile": {
    "baseline_voice": "the exact vocal identity to keep for every segment",
    "pitch": "", "pace": "", "timbre": "", "accent": "", "delivery_style": ""
  }"""


# =============================================================================
# SEGMENT CONTRACTS
# =============================================================================

STANDARD_SEGMENT = PromptTemplate(
    template="""Segment {segment_number} of {total_segments}.

Dialogue (spoken exactly, {word_count} words):
\"\"\"{dialogue}\"\"\"

Base description (copy it, do not reinvent):
{base_description}

Return JSON:
{
  "segment_info": {"segment_number": {segment_number}, "total_segments": {total_segments}, "duration": "00:00-00:08"},
  "character_description": "copied from the base description (minimum 200 words)",
  "scene_continuity": "copied from the base description (minimum 150 words)",
  "action_timeline": {
    "dialogue": "{dialogue}",
    "synchronized_actions": {"0:00-0:02": "", "0:02-0:04": "", "0:04-0:06": "", "0:06-0:08": ""}
  }
}""",
    description="Standard segment",
)

ENHANCED_SEGMENT = PromptTemplate(
    template="""Segment {segment_number} of {total_segments}, enhanced continuity.

Dialogue (spoken exactly, {word_count} words):
\"\"\"{dialogue}\"\"\"

Base description:
{base_description}

Where the previous segment ended (start exactly here):
{previous_continuity}

Return JSON:
{
  "segment_info": {"segment_number": {segment_number}, "total_segments": {total_segments}, "duration": "00:00-00:08"},
  "character_description": "copied from the base description (minimum 200 words)",
  "scene_continuity": "copied from the base description (minimum 150 words)",
  "continuity_markers": {
    "start_position": "", "end_position": "", "start_expression": "", "end_expression": "",
    "start_gesture": "", "end_gesture": "", "visual_flow": ""
  },
  "action_timeline": {
    "dialogue": "{dialogue}",
    "synchronized_actions": {"0:00-0:02": "", "0:02-0:04": "", "0:04-0:06": "", "0:06-0:08": ""},
    "micro_expressions": "", "eye_movements": "", "breathing_rhythm": ""
  },
  "continuity": {"end_position": "", "end_expression": "", "end_gesture": "", "props_state": ""}
}""",
    description="Enhanced-continuity segment",
)

CONTINUATION_FIRST_SEGMENT = PromptTemplate(
    template="""Segment 1 of {total_segments}, continuation mode. This segment sets the look and
voice that every later segment copies.

Dialogue (spoken exactly, {word_count} words):
\"\"\"{dialogue}\"\"\"

Base description:
{base_description}

Voice profile (use verbatim):
{voice_profile}

Return JSON:
{
  "segment_info": {"segment_number": 1, "total_segments": {total_segments}, "duration": "00:00-00:08"},
  "character_description": "full physical, clothing and voice description (minimum 200 words)",
  "scene_continuity": "full environment, lighting and camera description (minimum 150 words)",
  "voice_profile": "the voice profile, unchanged",
  "action_timeline": {
    "dialogue": "{dialogue}",
    "synchronized_actions": {"0:00-0:02": "", "0:02-0:04": "", "0:04-0:06": "", "0:06-0:08": ""}
  },
  "continuity": {"end_position": "", "end_expression": "", "end_gesture": "", "props_state": ""}
}""",
    description="Continuation mode, first segment",
)

CONTINUATION_NEXT_SEGMENT = PromptTemplate(
    template="""Segment {segment_number} of {total_segments}, continuation mode.
Character, scene and voice are unchanged from segment 1; do not describe them again.

Dialogue (spoken exactly, {word_count} words):
\"\"\"{dialogue}\"\"\"

Voice profile (copy, do not re-derive):
{voice_profile}

Where the previous segment ended (start exactly here):
{previous_continuity}

Return JSON:
{
  "segment_info": {"segment_number": {segment_number}, "total_segments": {total_segments}, "duration": "00:00-00:08"},
  "action_timeline": {
    "dialogue": "{dialogue}",
    "synchronized_actions": {"0:00-0:02": "", "0:02-0:04": "", "0:04-0:06": "", "0:06-0:08": ""}
  },
  "continuity": {"end_position": "", "end_expression": "", "end_gesture": "", "props_state": ""}
}""",
    description="Continuation mode, subsequent segment",
)


def _as_json(value: Optional[Dict[str, Any]]) -> str:
    if not value:
        return "(none)"
    return json.dumps(value, indent=2, ensure_ascii=False)


def build_base_prompt(script: str, settings: Dict[str, Any], total_segments: int, with_voice_profile: bool) -> str:
    return BASE_DESCRIPTION.format(
        total_segments=total_segments,
        script=script,
        settings=_as_json(settings),
        voice_profile_field=VOICE_PROFILE_FIELD if with_voice_profile else "",
    )


def build_segment_prompt(
    template: PromptTemplate,
    dialogue: str,
    word_count: int,
    segment_number: int,
    total_segments: int,
    base_description: Optional[Dict[str, Any]] = None,
    previous_continuity: Optional[Dict[str, Any]] = None,
    voice_profile: Optional[Dict[str, Any]] = None,
) -> str:
    """Fill one segment contract. Unused placeholders are simply absent from the template."""
    return template.format(
        segment_number=segment_number,
        total_segments=total_segments,
        word_count=word_count,
        dialogue=dialogue,
        base_description=_as_json(base_description),
        previous_continuity=_as_json(previous_continuity),
        voice_profile=_as_json(voice_profile),
    )
