"""Video transcript retrieval via the external transcript service.

    POST {TRANSCRIPT_API_URL}/get-transcript   {"video_url": "..."}
         →  {"title": "...", "transcript": "..."}

The transcript service is usually deployed next to the scraper, so its
base URL falls back to ``SCRAPER_API_URL`` when not set separately.
"""

from __future__ import annotations

import httpx
import structlog

from src.config.settings import Settings
from src.interfaces.content_extraction_provider import ITranscriptProvider, VideoTranscript
from src.utils.errors import ConfigurationError, IngestionError
from src.utils.json_parsing import tolerant_json

logger = structlog.get_logger(logger_name=__name__)


class TranscriptServiceProvider(ITranscriptProvider):
    """Transcript fetcher backed by the transcript microservice."""

    def __init__(self, settings: Settings, http_client: httpx.AsyncClient) -> None:
        self._base_url = settings.effective_transcript_api_url.rstrip("/")
        self._client = http_client

    async def fetch_transcript(self, video_url: str) -> VideoTranscript:
        if not self._base_url:
            raise ConfigurationError(
                message="Missing transcript service configuration",
                provider_name=self.get_provider_name(),
            )

        try:
            response = await self._client.post(
                f"{self._base_url}/get-transcript", json={"video_url": video_url}
            )
        except httpx.HTTPError as exc:
            raise IngestionError(
                message=f"Transcript service failed: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        if response.is_error:
            raise IngestionError(
                message=f"Transcript service failed: {response.reason_phrase}",
                provider_name=self.get_provider_name(),
            )

        parsed = tolerant_json(response.content, expect=dict)
        if not parsed.ok:
            raise IngestionError(
                message="Transcript service failed: unexpected response body",
                provider_name=self.get_provider_name(),
            )

        body = parsed.value
        transcript = VideoTranscript(
            video_url=video_url,
            title=str(body.get("title") or ""),
            transcript=str(body.get("transcript") or ""),
        )
        logger.info(
            "transcript_fetched",
            video_url=video_url,
            chars=len(transcript.transcript),
        )
        return transcript

    def get_provider_name(self) -> str:
        return "transcript"
