"""
Tests for the segment splitter
"""

import pytest

from app.services.pipeline.segmentation.splitter import split_script


def _words(n: int, ending: str = "") -> str:
    return " ".join(f"w{i}" for i in range(1, n + 1)) + ending


class TestSplitScript:

    def test_forty_five_word_sentence(self, script_45_words):
        parts = split_script(script_45_words)

        assert 2 <= len(parts) <= 3
        assert all(15 <= part.word_count <= 22 for part in parts)
        assert " ".join(part.text for part in parts) == script_45_words

    def test_short_script_is_one_segment(self):
        parts = split_script("Just a handful of words here.")

        assert len(parts) == 1
        assert parts[0].word_count == 6

    def test_empty_script(self):
        assert split_script("   \n ") == []

    def test_whitespace_normalized_only(self):
        script = "Line one has words.\n\n  Line two   has more words,\tand a tab " * 6
        parts = split_script(script)

        assert " ".join(part.text for part in parts) == " ".join(script.split())

    @pytest.mark.parametrize("total", [23, 30, 44, 45, 60, 100, 137, 500])
    def test_no_words_dropped_or_duplicated(self, total):
        script = _words(total)
        parts = split_script(script)

        assert sum(part.word_count for part in parts) == total
        assert " ".join(part.text for part in parts).split() == script.split()
        assert all(part.word_count > 0 for part in parts)
        assert all(part.word_count <= 22 for part in parts)

    @pytest.mark.parametrize("total", [30, 44, 45, 60, 100, 137, 500])
    def test_band_respected_when_feasible(self, total):
        parts = split_script(_words(total))
        assert all(15 <= part.word_count <= 22 for part in parts)

    def test_prefers_sentence_boundary(self):
        first = "This is the first sentence and it runs on for exactly seventeen words in total okay."
        second = "Then the second sentence carries on with its own set of words to the end."
        parts = split_script(f"{first} {second}")

        assert parts[0].text == first
        assert parts[1].text == second

    def test_prefers_clause_over_mid_clause(self):
        text = (
            "one two three four five six seven eight nine ten eleven twelve thirteen fourteen fifteen sixteen, "
            "one two three four five six seven eight nine ten eleven twelve thirteen fourteen fifteen sixteen"
        )
        parts = split_script(text)

        assert parts[0].text.endswith("sixteen,")
        assert [part.word_count for part in parts] == [16, 16]

    def test_invalid_band(self):
        with pytest.raises(ValueError):
            split_script("a b c", min_words=10, max_words=5)
