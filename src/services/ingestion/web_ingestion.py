"""URL and video ingestion adapters.

Both delegate extraction to an external microservice and only normalize
the answer.  One attempt, no retry; a failing service surfaces as an
:class:`~src.utils.errors.IngestionError` carrying its status text.
"""

from __future__ import annotations

import structlog

from src.interfaces.content_extraction_provider import IPageScraper, ITranscriptProvider
from src.models.document import ExtractedDocument, FileType
from src.utils.errors import InvalidInputError
from src.utils.logging import get_logger

logger: structlog.BoundLogger = get_logger(__name__)

MSG_MISSING_URL_OR_TITLE = "Missing URL or title"
MSG_MISSING_VIDEO_URL = "Missing YouTube video URL"


class UrlIngestionAdapter:
    """Web page → :class:`ExtractedDocument` with ``file_type="url"``."""

    def __init__(self, scraper: IPageScraper) -> None:
        self._scraper = scraper

    async def ingest(self, url: str | None, title: str | None) -> ExtractedDocument:
        clean_url = (url or "").strip()
        clean_title = (title or "").strip()
        if not clean_url or not clean_title:
            raise InvalidInputError(MSG_MISSING_URL_OR_TITLE)

        page = await self._scraper.scrape(clean_url)
        logger.info("url_ingested", url=clean_url, chars=len(page.content))
        return ExtractedDocument.from_text(
            source=clean_url,
            content=page.content,
            title=clean_title,
            file_type=FileType.URL,
        )


class VideoIngestionAdapter:
    """Video URL → transcript document with ``file_type="video"``.

    The title comes from the transcript service, not from the caller.
    """

    def __init__(self, transcripts: ITranscriptProvider) -> None:
        self._transcripts = transcripts

    async def ingest(self, video_url: str | None) -> ExtractedDocument:
        clean_url = (video_url or "").strip()
        if not clean_url:
            raise InvalidInputError(MSG_MISSING_VIDEO_URL)

        result = await self._transcripts.fetch_transcript(clean_url)
        logger.info("video_ingested", video_url=clean_url, chars=len(result.transcript))
        return ExtractedDocument.from_text(
            source=clean_url,
            content=result.transcript,
            title=result.title,
            file_type=FileType.VIDEO,
        )
