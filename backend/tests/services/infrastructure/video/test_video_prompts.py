"""
Tests for video prompt assembly
"""

from app.services.infrastructure.video.prompts import build_video_prompt, is_enhanced_segment, segment_dialogue


def test_dialogue_from_top_level_or_timeline():
    assert segment_dialogue({"dialogue": "Top level"}) == "Top level"
    assert segment_dialogue({"description": {"action_timeline": {"dialogue": "Nested"}}}) == "Nested"
    assert segment_dialogue({}) == ""


def test_enhanced_detection():
    assert is_enhanced_segment({"description": {"continuity_markers": {"end_position": "x"}}})
    assert is_enhanced_segment({"continuity_state": {"end_position": "x"}})
    assert not is_enhanced_segment({"dialogue": "hi"})


def test_standard_prompt_defaults():
    prompt = build_video_prompt({"dialogue": "Try   this\n serum"})

    assert 'Dialogue: "Try this serum"' in prompt
    assert "Natural gestures while speaking" in prompt
    assert "\n" not in prompt


def test_enhanced_prompt_includes_actions_and_environment():
    segment = {
        "dialogue": "It works",
        "continuity_state": {"end_position": "leaning"},
        "description": {
            "action_timeline": {"synchronized_actions": {"0:00-0:02": "smiles"}},
            "scene_continuity": {"props_in_frame": "bottle on counter"},
        },
    }
    prompt = build_video_prompt(segment)

    assert "0:00-0:02: smiles" in prompt
    assert "Environment: bottle on counter" in prompt


def test_prompt_capped_at_1000_chars():
    assert len(build_video_prompt({"dialogue": "word " * 500})) == 1000
