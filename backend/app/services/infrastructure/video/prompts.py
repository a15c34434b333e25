"""
Video prompt assembly.

Turns one (caller-supplied) segment into a single prompt string for a video
model. Segments produced by this service keep their structured payload under
"description"; segments built elsewhere may carry the same keys at top level.
"""

import re
from typing import Any, Dict

from app.config import VIDEO_PROMPT_MAX_CHARS

UGC_STYLE = "Authentic user-generated content, handheld camera, natural lighting, casual and relatable"


def _payload(segment: Dict[str, Any]) -> Dict[str, Any]:
    description = segment.get("description")
    if isinstance(description, dict):
        return {**segment, **description}
    return segment


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def segment_dialogue(segment: Dict[str, Any]) -> str:
    if segment.get("dialogue"):
        return str(segment["dialogue"])
    timeline = _as_dict(_payload(segment).get("action_timeline"))
    return str(timeline.get("dialogue") or "")


def is_enhanced_segment(segment: Dict[str, Any]) -> bool:
    payload = _payload(segment)
    info = _as_dict(payload.get("segment_info"))
    return bool(
        payload.get("continuity_markers")
        or info.get("continuity_markers")
        or segment.get("continuity_state")
    )


def _format_actions(actions: Any) -> str:
    if isinstance(actions, dict):
        return ", ".join(f"{time}: {action}" for time, action in actions.items())
    if isinstance(actions, list):
        return ", ".join(str(action) for action in actions)
    return str(actions)


def build_video_prompt(segment: Dict[str, Any]) -> str:
    """Single-line prompt, whitespace collapsed, capped at VIDEO_PROMPT_MAX_CHARS."""
    payload = _payload(segment)
    character = payload.get("character_description") or {}
    timeline = _as_dict(payload.get("action_timeline"))
    scene = _as_dict(payload.get("scene_continuity"))

    current_state = character.get("current_state") if isinstance(character, dict) else character
    dialogue = segment_dialogue(segment)

    if is_enhanced_segment(segment):
        parts = [
            f"UGC style video: {current_state or 'Natural presenter'}.",
            f'Dialogue: "{dialogue}"',
            f"Actions: {_format_actions(timeline.get('synchronized_actions') or {})}",
            f"Camera: {scene.get('camera_position') or 'Medium shot, eye level'}",
            f"Environment: {scene.get('props_in_frame') or 'Consistent with previous segment'}",
            f"Style: {UGC_STYLE}, {timeline.get('micro_expressions') or 'natural facial expressions'}",
        ]
    else:
        parts = [
            f"UGC style video: {current_state or 'Natural presenter'}.",
            f'Dialogue: "{dialogue}"',
            f"Actions: {_format_actions(timeline.get('synchronized_actions') or 'Natural gestures while speaking')}",
            f"Camera: {scene.get('camera_position') or 'Medium shot, eye level'}",
            f"Style: {UGC_STYLE}",
        ]

    prompt = re.sub(r"\s+", " ", " ".join(parts)).strip()
    return prompt[:VIDEO_PROMPT_MAX_CHARS]
