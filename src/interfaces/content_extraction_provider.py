"""Abstract base classes for the external extraction microservices.

Web pages and video transcripts are extracted by separate services; this
console only forwards the target URL and normalizes the answer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class ScrapedPage:
    """Text extracted from a web page by the scraping service."""

    url: str
    content: str


@dataclass(frozen=True)
class VideoTranscript:
    """Transcript returned by the transcript service."""

    video_url: str
    title: str
    transcript: str


# Concrete implementation: ScraperServiceProvider (src/providers/extraction/)
class IPageScraper(ABC):
    @abstractmethod
    async def scrape(self, url: str) -> ScrapedPage:
        """Extract readable text from *url*.

        Raises
        ------
        src.utils.errors.IngestionError
            On a non-success status, carrying the upstream status text.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier."""


# Concrete implementation: TranscriptServiceProvider (src/providers/extraction/)
class ITranscriptProvider(ABC):
    @abstractmethod
    async def fetch_transcript(self, video_url: str) -> VideoTranscript:
        """Fetch the transcript and title of a video.

        Raises
        ------
        src.utils.errors.IngestionError
            On a non-success status, carrying the upstream status text.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier."""
