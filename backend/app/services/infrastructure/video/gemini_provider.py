"""
Gemini video description provider

Produces a detailed textual description of the video a segment would become,
rather than a video file. The same adapter serves the Gemini API (API key)
and Vertex AI (service-account credentials) backends.
"""

from typing import Any, Dict, Optional

import httpx
from google import genai
from google.auth.exceptions import GoogleAuthError
from google.genai import errors as genai_errors
from google.genai import types

from app.config import DEFAULT_GEMINI_MODEL, PROVIDER_GEMINI, PROVIDER_VERTEX
from app.core.exceptions import ProviderAuthError, ProviderError, ProviderUnavailableError, error_from_status
from app.core.logging import LogTimer, get_logger
from app.models.video import VideoOptions

from ..http import transport_error
from .base import VideoProvider, VideoResult, segment_number_of
from .pricing import compute_cost
from .prompts import build_video_prompt

logger = get_logger(__name__, component="gemini_provider")

DESCRIPTION_INSTRUCTION = (
    "You are a video director. Describe, shot by shot, the {duration} video below "
    "as it should be filmed ({aspect_ratio}, {resolution}). Cover framing, movement, "
    "facial expression, lip-sync timing for the dialogue, lighting and sound."
)


class GeminiVideoProvider(VideoProvider):
    """Descriptive video adapter backed by google-genai"""

    def __init__(
        self,
        name: str = PROVIDER_GEMINI,
        model: str = DEFAULT_GEMINI_MODEL,
        api_key: Optional[str] = None,
        use_vertex: bool = False,
        credentials_path: Optional[str] = None,
        project: Optional[str] = None,
        location: str = "us-central1",
        client: Optional[Any] = None,
    ):
        """
        Args:
            name: Provider id reported to callers ("gemini" or "vertex")
            model: Gemini model used for the descriptions
            api_key: Gemini API key (Gemini API backend)
            use_vertex: Use Vertex AI instead of the Gemini API
            credentials_path: GOOGLE_APPLICATION_CREDENTIALS (Vertex backend)
            project: GCP project id (Vertex backend)
            location: GCP region (Vertex backend)
            client: Pre-built genai client (tests inject a double here)
        """
        self.name = name
        self.model = model
        self.api_key = api_key
        self.use_vertex = use_vertex
        self.credentials_path = credentials_path
        self.project = project
        self.location = location
        self._client = client

    def is_configured(self) -> bool:
        if self._client is not None:
            return True
        if self.use_vertex:
            return bool(self.credentials_path)
        return bool(self.api_key)

    def _get_client(self, segment_number: Optional[int] = None) -> Any:
        if self._client is not None:
            return self._client
        if not self.is_configured():
            raise ProviderUnavailableError(
                f"{self.name} provider not configured",
                provider=self.name,
                segment_number=segment_number,
            )
        try:
            if self.use_vertex:
                self._client = genai.Client(vertexai=True, project=self.project, location=self.location)
            else:
                self._client = genai.Client(api_key=self.api_key)
        except (ValueError, GoogleAuthError) as exc:
            raise ProviderUnavailableError(
                f"{self.name} client could not be initialized: {exc}",
                provider=self.name,
                segment_number=segment_number,
            ) from exc
        return self._client

    async def generate_video(self, segment: Dict[str, Any], options: VideoOptions, segment_index: int) -> VideoResult:
        segment_number = segment_number_of(segment, segment_index)
        client = self._get_client(segment_number)

        prompt = build_video_prompt(segment)
        config = types.GenerateContentConfig(
            temperature=0.7,
            system_instruction=DESCRIPTION_INSTRUCTION.format(
                duration=options.duration,
                aspect_ratio=options.aspect_ratio,
                resolution=options.resolution,
            ),
        )

        try:
            with LogTimer(logger, f"{self.name} video description (segment {segment_number})", segment_number=segment_number):
                response = await client.aio.models.generate_content(model=self.model, contents=prompt, config=config)
        except genai_errors.APIError as exc:
            raise error_from_status(self.name, exc.code, detail=exc.message, segment_number=segment_number) from exc
        except GoogleAuthError as exc:
            raise ProviderAuthError(
                f"{self.name} credentials rejected: {exc}",
                provider=self.name,
                segment_number=segment_number,
            ) from exc
        except httpx.RequestError as exc:
            raise transport_error(self.name, exc, segment_number) from exc

        description = getattr(response, "text", None)
        if not description:
            raise ProviderError(f"{self.name} returned an empty description", provider=self.name, segment_number=segment_number)

        return VideoResult(
            success=True,
            segment_number=segment_number,
            description=description,
            status="described",
            duration=options.duration,
            cost=compute_cost(self.name, options.duration, options.generate_audio),
            metadata={"prompt": prompt, "model": self.model},
        )


def build_vertex_provider(
    credentials_path: Optional[str],
    project: Optional[str],
    location: str,
    model: str = DEFAULT_GEMINI_MODEL,
) -> GeminiVideoProvider:
    return GeminiVideoProvider(
        name=PROVIDER_VERTEX,
        model=model,
        use_vertex=True,
        credentials_path=credentials_path,
        project=project,
        location=location,
    )
