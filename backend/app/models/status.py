"""
Run state enumeration.

The segment pipeline walks these states in order; FAILED is reachable from
any non-terminal state.
"""

from enum import Enum


class RunState(Enum):
    """States of a single segment-generation run."""

    SPLITTING = "splitting"
    GENERATING_BASE = "generating_base"
    GENERATING_SEGMENT = "generating_segment"
    ASSEMBLING = "assembling"
    DONE = "done"
    FAILED = "failed"

    def is_terminal(self) -> bool:
        """Check if this state is terminal (no further transitions)."""
        return self in (RunState.DONE, RunState.FAILED)


__all__ = ["RunState"]
