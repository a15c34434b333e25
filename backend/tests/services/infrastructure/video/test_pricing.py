"""
Tests for video cost estimates
"""

import pytest

from app.services.infrastructure.video.pricing import compute_cost, parse_duration_seconds


@pytest.mark.parametrize("duration, seconds", [("8s", 8), ("5s", 5), (6, 6), ("", 8), (None, 8), ("abc", 8)])
def test_parse_duration(duration, seconds):
    assert parse_duration_seconds(duration) == seconds


def test_falai_audio_flag():
    assert compute_cost("falai", "8s", True) == pytest.approx(3.2)
    assert compute_cost("falai", "8s", False) == pytest.approx(1.6)


def test_kieai_flat_rate():
    assert compute_cost("kieai", "8s", True) == pytest.approx(0.4)
    assert compute_cost("kieai", "8s", False) == pytest.approx(0.4)


def test_descriptive_providers_are_free():
    assert compute_cost("gemini", "8s") == 0.0
    assert compute_cost("vertex", "8s") == 0.0


def test_unknown_provider():
    with pytest.raises(KeyError):
        compute_cost("sora", "8s")
