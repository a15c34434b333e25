"""
Application context

Everything a request handler needs that outlives a single request: settings,
the per-client rate limiter, provider adapters, the run repository and the
continuation token codec. One instance is built by create_app() and stored on
app.state; handlers reach it through the get_context dependency.
"""

from dataclasses import dataclass, field
from datetime import datetime, UTC
from typing import Optional

from fastapi import Request

from .config import DEFAULT_PIPELINE_MODELS, Settings
from .core.rate_limiter import ClientRateLimiter
from .core.tokens import ContinuationTokenCodec
from .services.infrastructure.registry import ProviderRegistry, build_provider_registry
from .services.infrastructure.storage import FileRunRepository, RunRepository
from .services.pipeline.segmentation import ContinuationSession, SegmentPipeline
from .services.pipeline.video import VideoFanout


@dataclass
class AppContext:
    settings: Settings
    rate_limiter: ClientRateLimiter
    providers: ProviderRegistry
    runs: RunRepository
    tokens: ContinuationTokenCodec
    started_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        providers: Optional[ProviderRegistry] = None,
        runs: Optional[RunRepository] = None,
    ) -> "AppContext":
        return cls(
            settings=settings,
            rate_limiter=ClientRateLimiter(
                max_requests=settings.rate_limit_requests,
                window_seconds=settings.rate_limit_window_seconds,
            ),
            providers=providers or build_provider_registry(settings),
            runs=runs or FileRunRepository(settings.runs_dir),
            tokens=ContinuationTokenCodec(settings.continuation_token_secret),
        )

    def segment_pipeline(self) -> SegmentPipeline:
        return SegmentPipeline(
            self.providers.text,
            models=DEFAULT_PIPELINE_MODELS.with_model(self.settings.openai_model),
            min_words=self.settings.words_per_segment_min,
            max_words=self.settings.words_per_segment_max,
        )

    def continuation_session(self) -> ContinuationSession:
        return ContinuationSession(self.segment_pipeline(), self.tokens)

    def video_fanout(self, provider_name: str) -> VideoFanout:
        return VideoFanout(
            self.providers.get_video(provider_name),
            delay_seconds=self.settings.video_request_delay_seconds,
        )

    def uptime_seconds(self) -> float:
        return (datetime.now(UTC) - self.started_at).total_seconds()


def get_context(request: Request) -> AppContext:
    """FastAPI dependency returning the context of the app serving this request"""
    return request.app.state.context
