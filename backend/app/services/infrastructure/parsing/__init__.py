"""
Parsing Module

Recovers JSON objects from text-provider responses.

Usage:
    from app.services.infrastructure.parsing import parse_json_object
"""

from .json_parser import (
    parse_json_object,
    strip_code_fences,
    extract_largest_balanced_json,
    fix_json_escapes,
)

__all__ = [
    "parse_json_object",
    "strip_code_fences",
    "extract_largest_balanced_json",
    "fix_json_escapes",
]
