"""
Runtime settings

All environment-driven configuration is read once into an immutable Settings
object which is passed to the application factory. Nothing else in the app
reads os.environ directly.
"""

import os
import secrets
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

from .constants import WORDS_PER_SEGMENT_MAX, WORDS_PER_SEGMENT_MIN
from .models import DEFAULT_GEMINI_MODEL, DEFAULT_OPENAI_MODEL
from .paths import DEFAULT_RUNS_DIR


def parse_bool_env(value: Optional[str], default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


@dataclass(frozen=True)
class Settings:
    """Application settings resolved from the environment"""

    openai_api_key: Optional[str] = None
    openai_model: str = DEFAULT_OPENAI_MODEL

    gemini_api_key: Optional[str] = None
    gemini_model: str = DEFAULT_GEMINI_MODEL
    google_application_credentials: Optional[str] = None
    gcp_project_id: Optional[str] = None
    gcp_location: str = "us-central1"

    falai_api_key: Optional[str] = None
    kieai_api_key: Optional[str] = None

    environment: str = "production"
    log_level: str = "INFO"
    log_file: Optional[Path] = None
    use_json_logs: bool = False

    rate_limit_enabled: bool = True
    rate_limit_requests: int = 10
    rate_limit_window_seconds: int = 60

    persist_runs: bool = False
    runs_dir: Path = DEFAULT_RUNS_DIR

    video_request_delay_seconds: float = 1.0
    provider_timeout_seconds: float = 300.0

    continuation_token_secret: str = field(default_factory=lambda: secrets.token_hex(32))

    words_per_segment_min: int = WORDS_PER_SEGMENT_MIN
    words_per_segment_max: int = WORDS_PER_SEGMENT_MAX

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from environment variables (os.environ by default)"""
        env = os.environ if environ is None else environ

        log_file = _clean(env.get("LOG_FILE"))
        runs_dir = _clean(env.get("RUNS_DIR"))
        token_secret = _clean(env.get("CONTINUATION_TOKEN_SECRET"))

        kwargs = dict(
            openai_api_key=_clean(env.get("OPENAI_API_KEY")),
            openai_model=_clean(env.get("OPENAI_MODEL")) or DEFAULT_OPENAI_MODEL,
            gemini_api_key=_clean(env.get("GOOGLE_GEMINI_API_KEY")),
            gemini_model=_clean(env.get("GEMINI_MODEL")) or DEFAULT_GEMINI_MODEL,
            google_application_credentials=_clean(env.get("GOOGLE_APPLICATION_CREDENTIALS")),
            gcp_project_id=_clean(env.get("GCP_PROJECT_ID")),
            gcp_location=_clean(env.get("GCP_LOCATION")) or "us-central1",
            falai_api_key=_clean(env.get("FAL_AI_API_KEY")) or _clean(env.get("FALAI_API_KEY")),
            kieai_api_key=_clean(env.get("KIEAI_API_KEY")),
            environment=(_clean(env.get("APP_ENV")) or _clean(env.get("ENV")) or "production").lower(),
            log_level=_clean(env.get("LOG_LEVEL")) or "INFO",
            log_file=Path(log_file) if log_file else None,
            use_json_logs=parse_bool_env(env.get("JSON_LOGS"), default=False),
            rate_limit_enabled=parse_bool_env(env.get("RATE_LIMIT_ENABLED"), default=True),
            rate_limit_requests=int(env.get("RATE_LIMIT_REQUESTS_PER_MINUTE", "10")),
            rate_limit_window_seconds=int(env.get("RATE_LIMIT_WINDOW_SECONDS", "60")),
            persist_runs=parse_bool_env(env.get("PERSIST_RUNS"), default=False),
            runs_dir=Path(runs_dir) if runs_dir else DEFAULT_RUNS_DIR,
            video_request_delay_seconds=float(env.get("VIDEO_REQUEST_DELAY_SECONDS", "1.0")),
            provider_timeout_seconds=float(env.get("PROVIDER_TIMEOUT_SECONDS", "300")),
            words_per_segment_min=int(env.get("WORDS_PER_SEGMENT_MIN", str(WORDS_PER_SEGMENT_MIN))),
            words_per_segment_max=int(env.get("WORDS_PER_SEGMENT_MAX", str(WORDS_PER_SEGMENT_MAX))),
        )
        if token_secret:
            kwargs["continuation_token_secret"] = token_secret
        return cls(**kwargs)


__all__ = ["Settings", "parse_bool_env"]
