"""
Shared fixtures

Provider doubles are injected through constructors and the app factory; no
third-party module is replaced.
"""

import json
from typing import Any, Callable, Dict, Iterable, List, Optional

import pytest

from app.config import Settings
from app.core.exceptions import ProviderRateLimitError
from app.models.video import VideoOptions
from app.services.infrastructure.llm import TextGenerationRequest, TextGenerationResult, TextProvider
from app.services.infrastructure.video import VideoProvider, VideoResult, segment_number_of

FORTY_FIVE_WORD_SCRIPT = (
    "I never thought a morning routine could change how I feel all day "
    "but this bottle of serum made my skin look brighter within a week "
    "and now my friends keep asking what I am doing differently so I decided to share it with you."
)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Keep real credentials and .env values out of every test"""
    for name in (
        "OPENAI_API_KEY",
        "GOOGLE_GEMINI_API_KEY",
        "GOOGLE_APPLICATION_CREDENTIALS",
        "FAL_AI_API_KEY",
        "FALAI_API_KEY",
        "KIEAI_API_KEY",
        "PERSIST_RUNS",
        "APP_ENV",
        "ENV",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("RUNS_DIR", str(tmp_path / "runs"))


def default_responder(request: TextGenerationRequest) -> Dict[str, Any]:
    """Base call returns a description and a voice profile; segment n returns continuity 'pos-n'"""
    if request.segment_number is None:
        return {
            "character_description": {"physical": "woman in her late twenties"},
            "scene_continuity": {"environment": "bright kitchen"},
            "voice_profile": {"baseline_voice": "warm alto", "pace": "relaxed"},
        }
    n = request.segment_number
    return {
        "segment_info": {"segment_number": n},
        "action_timeline": {"dialogue": f"dialogue {n}"},
        "continuity": {"end_position": f"pos-{n}", "end_expression": "smile"},
    }


class ScriptedTextProvider(TextProvider):
    """TextProvider double that records every request"""

    name = "openai"

    def __init__(
        self,
        responder: Callable[[TextGenerationRequest], Dict[str, Any]] = default_responder,
        fail_on_segment: Optional[int] = None,
        error: Optional[Exception] = None,
        configured: bool = True,
    ):
        self.responder = responder
        self.fail_on_segment = fail_on_segment
        self.error = error
        self.configured = configured
        self.requests: List[TextGenerationRequest] = []

    def is_configured(self) -> bool:
        return self.configured

    async def invoke(self, request: TextGenerationRequest) -> TextGenerationResult:
        self.requests.append(request)
        if self.error is not None and request.segment_number == self.fail_on_segment:
            raise self.error
        data = self.responder(request)
        return TextGenerationResult(data=data, raw_text=json.dumps(data), model="test-model", provider=self.name)

    @property
    def segment_requests(self) -> List[TextGenerationRequest]:
        return [r for r in self.requests if r.segment_number is not None]


@pytest.fixture
def script_45_words() -> str:
    return FORTY_FIVE_WORD_SCRIPT


@pytest.fixture
def text_provider_factory():
    return ScriptedTextProvider


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    return Settings(
        openai_api_key="sk-test",
        environment="test",
        runs_dir=tmp_path / "runs",
        video_request_delay_seconds=0.0,
        continuation_token_secret="test-secret",
    )


class RecordingVideoProvider(VideoProvider):
    """VideoProvider double; segment indexes listed in fail_on raise the given error"""

    def __init__(
        self,
        name: str = "falai",
        fail_on: Iterable[int] = (),
        error: Optional[Exception] = None,
        cost: float = 1.2,
        configured: bool = True,
    ):
        self.name = name
        self.fail_on = set(fail_on)
        self.error = error
        self.cost = cost
        self.configured = configured
        self.calls: List[int] = []

    def is_configured(self) -> bool:
        return self.configured

    async def generate_video(self, segment: Dict[str, Any], options: VideoOptions, segment_index: int) -> VideoResult:
        self.calls.append(segment_index)
        if segment_index in self.fail_on:
            raise self.error or ProviderRateLimitError("Rate limit exceeded", provider=self.name, status_code=429)
        number = segment_number_of(segment, segment_index)
        return VideoResult(
            success=True,
            segment_number=number,
            video_url=f"https://cdn.example.com/{self.name}/{number}.mp4",
            status="completed",
            duration=options.duration,
            cost=self.cost,
        )


@pytest.fixture
def video_provider_factory():
    return RecordingVideoProvider


@pytest.fixture
def video_segments() -> List[Dict[str, Any]]:
    return [
        {"segment_number": n, "dialogue": f"line {n}", "character_description": "woman, late twenties"}
        for n in (1, 2, 3)
    ]
