"""
JSON recovery for LLM responses.

Text providers are asked for a JSON object but occasionally wrap it in
markdown fences, prepend commentary, or emit invalid escape sequences. These
helpers recover the object when it is recoverable and return None otherwise.
"""

import json
import re
from typing import Any, Dict, List, Optional

_VALID_ESCAPE = re.compile(r'\\(["\\/bfnrt]|u[0-9a-fA-F]{4})')


def strip_code_fences(text: str) -> str:
    """Drop ``` fence lines while keeping their content."""
    text = text.strip()
    if not text.startswith("```"):
        return text
    lines = [line for line in text.split("\n") if not line.strip().startswith("```")]
    return "\n".join(lines).strip()


def extract_largest_balanced_json(text: str) -> Optional[str]:
    """Return the largest balanced {...} block in text, respecting string literals."""
    if not text:
        return None

    in_string = False
    escape = False
    depth = 0
    start_idx: Optional[int] = None
    best: Optional[str] = None

    for i, ch in enumerate(text):
        if in_string:
            if escape:
                escape = False
            elif ch == "\\":
                escape = True
            elif ch == '"':
                in_string = False
            continue

        if ch == '"':
            in_string = True
        elif ch == "{":
            if depth == 0:
                start_idx = i
            depth += 1
        elif ch == "}" and depth:
            depth -= 1
            if depth == 0 and start_idx is not None:
                candidate = text[start_idx:i + 1]
                if best is None or len(candidate) > len(best):
                    best = candidate
                start_idx = None

    return best


def fix_json_escapes(text: str) -> str:
    """Double any backslash that does not start a valid JSON escape."""
    parts: List[str] = []
    pos = 0
    while True:
        idx = text.find("\\", pos)
        if idx == -1:
            parts.append(text[pos:])
            break
        parts.append(text[pos:idx])
        match = _VALID_ESCAPE.match(text, idx)
        if match:
            parts.append(match.group(0))
            pos = match.end()
        else:
            parts.append("\\\\")
            pos = idx + 1
    return "".join(parts)


def parse_json_object(text: Optional[str]) -> Optional[Dict[str, Any]]:
    """Parse a JSON object from an LLM response, or None if unrecoverable.

    Tries, in order: the fence-stripped text, the same with escapes fixed, and
    the largest balanced object found anywhere in the text.
    """
    if not text:
        return None

    cleaned = strip_code_fences(text)
    candidates = [cleaned, fix_json_escapes(cleaned)]
    balanced = extract_largest_balanced_json(cleaned)
    if balanced:
        candidates.extend([balanced, fix_json_escapes(balanced)])

    for candidate in candidates:
        try:
            parsed = json.loads(candidate)
        except json.JSONDecodeError:
            continue
        if isinstance(parsed, dict):
            return parsed
    return None
