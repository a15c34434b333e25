"""
Cost estimates for video generation.

Deterministic: requested duration times a fixed per-second rate chosen by
provider and audio flag. An estimate returned with results, not a billing
figure confirmed by the provider.
"""

import re
from typing import Union

from app.config import SEGMENT_DURATION_SECONDS, VIDEO_RATE_TABLE


def parse_duration_seconds(duration: Union[str, int, float, None]) -> int:
    """'8s' -> 8. Anything without digits falls back to the segment length."""
    if isinstance(duration, (int, float)) and duration > 0:
        return int(duration)
    digits = re.sub(r"[^0-9]", "", str(duration or ""))
    return int(digits) if digits and int(digits) > 0 else SEGMENT_DURATION_SECONDS


def compute_cost(provider: str, duration: Union[str, int, float, None], generate_audio: bool = True) -> float:
    rates = VIDEO_RATE_TABLE.get(provider)
    if rates is None:
        raise KeyError(f"No rate table entry for provider '{provider}'")
    return round(parse_duration_seconds(duration) * rates[bool(generate_audio)], 4)
