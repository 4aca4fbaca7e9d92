"""Adapters for the external page-scraping and transcript services."""

from src.providers.extraction.scraper_service_provider import ScraperServiceProvider
from src.providers.extraction.transcript_service_provider import TranscriptServiceProvider

__all__ = ["ScraperServiceProvider", "TranscriptServiceProvider"]
