"""
Segment Splitter

Partitions a script into consecutive word runs sized for an 8-second spoken
segment. The number of segments is fixed up front (ceil(words / max)) and each
boundary is then placed inside the window that keeps every remaining segment
within the band, snapping to a sentence end, else a clause end, nearest to an
even split.
"""

import math
from dataclasses import dataclass
from typing import List

from app.config import WORDS_PER_SEGMENT_MAX, WORDS_PER_SEGMENT_MIN

SENTENCE_ENDINGS = (".", "!", "?", ".\"", "!\"", "?\"", "...")
CLAUSE_ENDINGS = (",", ";", ":", "—", "-")


@dataclass(frozen=True)
class ScriptPart:
    """One contiguous run of script words"""
    text: str
    word_count: int


def _ends_with(word: str, endings) -> bool:
    return word.endswith(endings)


def _nearest(candidates: List[int], ideal: int) -> int:
    # ties go to the earlier boundary
    return min(candidates, key=lambda cut: (abs(cut - ideal), cut))


def _choose_cut(words: List[str], lo: int, hi: int, ideal: int) -> int:
    """Index of the first word of the next part, lo <= cut <= hi."""
    window = range(lo, hi + 1)
    sentence_cuts = [cut for cut in window if _ends_with(words[cut - 1], SENTENCE_ENDINGS)]
    if sentence_cuts:
        return _nearest(sentence_cuts, ideal)
    clause_cuts = [cut for cut in window if _ends_with(words[cut - 1], CLAUSE_ENDINGS)]
    if clause_cuts:
        return _nearest(clause_cuts, ideal)
    return ideal


def split_script(
    script: str,
    min_words: int = WORDS_PER_SEGMENT_MIN,
    max_words: int = WORDS_PER_SEGMENT_MAX,
) -> List[ScriptPart]:
    """
    Split a script into ordered, non-overlapping parts.

    Whitespace is normalized to single spaces; no word is dropped or
    duplicated, so joining the parts with spaces gives back the normalized
    script. A script of at most max_words words yields exactly one part and
    an empty script yields none.

    Args:
        script: Raw script text
        min_words: Lower end of the words-per-segment band
        max_words: Upper end of the words-per-segment band

    Returns:
        List of ScriptPart in script order
    """
    if min_words < 1 or max_words < min_words:
        raise ValueError(f"Invalid words-per-segment band: {min_words}-{max_words}")

    words = script.split()
    total = len(words)
    if total == 0:
        return []
    if total <= max_words:
        return [ScriptPart(text=" ".join(words), word_count=total)]

    count = math.ceil(total / max_words)
    parts: List[ScriptPart] = []
    start = 0
    for index in range(count - 1):
        remaining = count - index
        ideal = start + round((total - start) / remaining)
        lo = max(start + min_words, total - (remaining - 1) * max_words)
        hi = min(start + max_words, total - (remaining - 1) * min_words)
        if lo > hi:
            # Script too short to keep every part inside the band; keep parts non-empty
            lo = start + 1
            hi = total - (remaining - 1)
        ideal = min(max(ideal, lo), hi)

        cut = _choose_cut(words, lo, hi, ideal)
        parts.append(ScriptPart(text=" ".join(words[start:cut]), word_count=cut - start))
        start = cut

    parts.append(ScriptPart(text=" ".join(words[start:]), word_count=total - start))
    return parts
