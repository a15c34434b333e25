"""
Tests for app.services.infrastructure.parsing.json_parser
"""

from app.services.infrastructure.parsing.json_parser import (
    extract_largest_balanced_json,
    fix_json_escapes,
    parse_json_object,
    strip_code_fences,
)


class TestJsonEscapes:
    """Test fixing common JSON escape sequence issues."""

    def test_fix_json_escapes_basic(self):
        text = r'{"key": "value\nwith\invalid\escape"}'
        fixed = fix_json_escapes(text)
        assert r'\n' in fixed
        assert r'\\i' in fixed

    def test_fix_json_escapes_lone_backslash(self):
        assert fix_json_escapes(r"C:\Users\Name") == r"C:\\Users\\Name"

    def test_unicode_escape_kept(self):
        assert fix_json_escapes(r'"\u00e9"') == r'"\u00e9"'


class TestStripCodeFences:

    def test_json_fence(self):
        assert strip_code_fences('```json\n{"a": 1}\n```') == '{"a": 1}'

    def test_no_fence(self):
        assert strip_code_fences('  {"a": 1} ') == '{"a": 1}'


class TestBalancedExtraction:

    def test_picks_largest_object(self):
        text = 'noise {"a": 1} more {"b": {"c": 2}, "d": "}"} tail'
        assert extract_largest_balanced_json(text) == '{"b": {"c": 2}, "d": "}"}'

    def test_none_without_object(self):
        assert extract_largest_balanced_json("no braces here") is None


class TestParseJsonObject:

    def test_plain_object(self):
        assert parse_json_object('{"segment": 1}') == {"segment": 1}

    def test_fenced_with_commentary(self):
        text = 'Here you go:\n{"continuity": {"end_position": "seated"}}\nHope this helps'
        assert parse_json_object(text) == {"continuity": {"end_position": "seated"}}

    def test_invalid_escape_recovered(self):
        assert parse_json_object(r'{"path": "C:\temp\x"}') == {"path": "C:\temp\\x"}

    def test_array_is_not_an_object(self):
        assert parse_json_object("[1, 2]") is None

    def test_empty_and_garbage(self):
        assert parse_json_object("") is None
        assert parse_json_object(None) is None
        assert parse_json_object("not json") is None
