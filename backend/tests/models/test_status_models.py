"""
Tests for models/status module
"""

from app.models.status import RunState


class TestRunState:

    def test_values(self):
        assert [state.value for state in RunState] == [
            "splitting",
            "generating_base",
            "generating_segment",
            "assembling",
            "done",
            "failed",
        ]

    def test_terminal_states(self):
        assert RunState.DONE.is_terminal()
        assert RunState.FAILED.is_terminal()
        assert not RunState.GENERATING_SEGMENT.is_terminal()
