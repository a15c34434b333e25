"""
Response contracts

Where in a provider's JSON answer the voice profile and the continuity block
live. Paths are dotted keys ("a.b.c") so a different prompt shape only needs a
different contract, not a different parser.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from app.core.exceptions import PipelineIntegrityError


def resolve_path(data: Any, path: str) -> Any:
    """Follow a dotted key path through nested dicts; None when any step is missing"""
    current = data
    for key in path.split("."):
        if not isinstance(current, dict) or key not in current:
            return None
        current = current[key]
    return current


@dataclass(frozen=True)
class ResponseContract:
    voice_profile_path: str = "voice_profile"
    continuity_path: str = "continuity"

    def _extract(self, data: Dict[str, Any], path: str, label: str, required: bool, segment_number: Optional[int]) -> Optional[Dict[str, Any]]:
        value = resolve_path(data, path)
        where = f"segment {segment_number}" if segment_number else "base description"
        if value is None or value == {}:
            if required:
                raise PipelineIntegrityError(f"{label} missing from {where} response (expected at '{path}')")
            return None
        if not isinstance(value, dict):
            raise PipelineIntegrityError(
                f"{label} in {where} response is malformed: expected an object at '{path}', got {type(value).__name__}"
            )
        return value

    def voice_profile(self, data: Dict[str, Any], required: bool = False, segment_number: Optional[int] = None) -> Optional[Dict[str, Any]]:
        return self._extract(data, self.voice_profile_path, "Voice profile", required, segment_number)

    def continuity(self, data: Dict[str, Any], required: bool = False, segment_number: Optional[int] = None) -> Optional[Dict[str, Any]]:
        return self._extract(data, self.continuity_path, "Continuity state", required, segment_number)


DEFAULT_RESPONSE_CONTRACT = ResponseContract()
