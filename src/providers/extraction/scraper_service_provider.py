"""Web-page text extraction via the external scraping service.

The scraper renders the page and strips boilerplate on its side; this
adapter only forwards the URL::

    POST {SCRAPER_API_URL}/scrape   {"url": "..."}   →   {"content": "..."}
"""

from __future__ import annotations

import httpx
import structlog

from src.config.settings import Settings
from src.interfaces.content_extraction_provider import IPageScraper, ScrapedPage
from src.utils.errors import ConfigurationError, IngestionError
from src.utils.json_parsing import tolerant_json

logger = structlog.get_logger(logger_name=__name__)


class ScraperServiceProvider(IPageScraper):
    """Page scraper backed by the scraping microservice."""

    def __init__(self, settings: Settings, http_client: httpx.AsyncClient) -> None:
        self._base_url = settings.scraper_api_url.rstrip("/")
        self._client = http_client

    async def scrape(self, url: str) -> ScrapedPage:
        if not self._base_url:
            raise ConfigurationError(
                message="Missing scraper service configuration",
                provider_name=self.get_provider_name(),
            )

        try:
            response = await self._client.post(f"{self._base_url}/scrape", json={"url": url})
        except httpx.HTTPError as exc:
            raise IngestionError(
                message=f"Scraper failed: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        if response.is_error:
            raise IngestionError(
                message=f"Scraper failed: {response.reason_phrase}",
                provider_name=self.get_provider_name(),
            )

        parsed = tolerant_json(response.content, expect=dict)
        if not parsed.ok:
            raise IngestionError(
                message="Scraper failed: unexpected response body",
                provider_name=self.get_provider_name(),
            )

        content = parsed.value.get("content") or ""
        if not isinstance(content, str):
            content = str(content)
        logger.info("page_scraped", url=url, chars=len(content))
        return ScrapedPage(url=url, content=content)

    def get_provider_name(self) -> str:
        return "scraper"
