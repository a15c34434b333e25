"""
Provider registry

Built once per application from Settings. Holds the single text adapter and
every video adapter by name, whether or not each one is configured; an
unconfigured adapter stays in the registry so it can report itself as
unavailable.
"""

from dataclasses import dataclass, field
from typing import Dict, List

from app.config import (
    PROVIDER_FALAI,
    PROVIDER_GEMINI,
    PROVIDER_KIEAI,
    PROVIDER_OPENAI,
    PROVIDER_VERTEX,
    VIDEO_PROVIDERS,
    Settings,
)
from app.core.exceptions import ValidationError

from .llm import OpenAITextProvider, TextProvider
from .video import (
    FalAIVideoProvider,
    GeminiVideoProvider,
    KieAIVideoProvider,
    VideoProvider,
    build_vertex_provider,
)


@dataclass
class ProviderRegistry:
    text: TextProvider
    video: Dict[str, VideoProvider] = field(default_factory=dict)

    def get_video(self, name: str) -> VideoProvider:
        provider = self.video.get(name)
        if provider is None:
            raise ValidationError(
                f"Unknown video provider '{name}'. Expected one of: {', '.join(sorted(self.video))}"
            )
        return provider

    def video_names(self) -> List[str]:
        return list(self.video)

    def configured_flags(self) -> Dict[str, bool]:
        """Credential presence per provider, as reported by /api/health"""
        flags = {PROVIDER_OPENAI: self.text.is_configured()}
        for name in VIDEO_PROVIDERS:
            provider = self.video.get(name)
            flags[name] = bool(provider and provider.is_configured())
        return flags


def build_provider_registry(settings: Settings) -> ProviderRegistry:
    """Create every adapter from settings. No network calls are made here."""
    timeout = settings.provider_timeout_seconds
    text = OpenAITextProvider(
        api_key=settings.openai_api_key,
        model=settings.openai_model,
        timeout=timeout,
    )
    video: Dict[str, VideoProvider] = {
        PROVIDER_GEMINI: GeminiVideoProvider(
            name=PROVIDER_GEMINI,
            model=settings.gemini_model,
            api_key=settings.gemini_api_key,
        ),
        PROVIDER_VERTEX: build_vertex_provider(
            credentials_path=settings.google_application_credentials,
            project=settings.gcp_project_id,
            location=settings.gcp_location,
            model=settings.gemini_model,
        ),
        PROVIDER_FALAI: FalAIVideoProvider(api_key=settings.falai_api_key, timeout=timeout),
        PROVIDER_KIEAI: KieAIVideoProvider(api_key=settings.kieai_api_key, timeout=timeout),
    }
    return ProviderRegistry(text=text, video=video)
