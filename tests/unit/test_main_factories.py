"""Unit tests for the composition root in src/main.py.

Covers ``_build_all`` component assembly and the ``create_app`` factory.
boto3 client construction is patched so no AWS credentials are needed.
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from fastapi import FastAPI

from src.providers.document_store import HttpDocumentStore
from src.providers.search import DocumentDBVectorSearchProvider, GoogleSearchProvider
from src.services.answer_synthesizer import AnswerSynthesizer
from src.services.document_catalog import DocumentCatalog
from src.services.ingestion import PdfIngestionAdapter, UrlIngestionAdapter, VideoIngestionAdapter
from src.services.search_aggregator import SearchAggregator
from tests.conftest import build_settings

_EXPECTED_KEYS = {
    "http_client",
    "llm",
    "web_search",
    "vector_search",
    "document_store",
    "document_catalog",
    "pdf_ingestion",
    "url_ingestion",
    "video_ingestion",
    "search_aggregator",
    "answer_synthesizer",
    "provider_registry",
}


# ======================================================================
# _build_all
# ======================================================================


class TestBuildAll:
    @pytest.mark.asyncio
    async def test_returns_expected_components(self) -> None:
        from src.main import _build_all

        with patch("src.providers.storage.s3_provider.boto3.client", return_value=MagicMock()):
            components = _build_all(build_settings(), {"assistant": {"domain": "Cisco UCS"}})

        try:
            assert set(components) == _EXPECTED_KEYS
            assert isinstance(components["web_search"], GoogleSearchProvider)
            assert isinstance(components["vector_search"], DocumentDBVectorSearchProvider)
            assert isinstance(components["document_store"], HttpDocumentStore)
            assert isinstance(components["document_catalog"], DocumentCatalog)
            assert isinstance(components["pdf_ingestion"], PdfIngestionAdapter)
            assert isinstance(components["url_ingestion"], UrlIngestionAdapter)
            assert isinstance(components["video_ingestion"], VideoIngestionAdapter)
            assert isinstance(components["search_aggregator"], SearchAggregator)
            assert isinstance(components["answer_synthesizer"], AnswerSynthesizer)
        finally:
            await components["http_client"].aclose()

    @pytest.mark.asyncio
    async def test_provider_registry_reflects_settings(self) -> None:
        from src.main import _build_all

        settings = build_settings(openai_api_key="", security_token="t")
        with patch("src.providers.storage.s3_provider.boto3.client", return_value=MagicMock()):
            components = _build_all(settings, {})

        try:
            assert components["provider_registry"]["llm"] is False
            assert components["provider_registry"]["document_db"] is True
        finally:
            await components["http_client"].aclose()

    @pytest.mark.asyncio
    async def test_one_shared_http_client(self) -> None:
        from src.main import _build_all

        with patch("src.providers.storage.s3_provider.boto3.client", return_value=MagicMock()):
            components = _build_all(build_settings(), {})

        try:
            shared = components["http_client"]
            assert components["web_search"]._client is shared
            assert components["document_store"]._client is shared
        finally:
            await shared.aclose()


# ======================================================================
# create_app
# ======================================================================


class TestCreateApp:
    def test_returns_fastapi_instance(self, tmp_path: Path) -> None:
        from src.main import create_app

        application = create_app(build_settings(), config_path=str(tmp_path / "none.yaml"))
        assert isinstance(application, FastAPI)
        assert application.title == "Knowledge Base Console API"

    def test_state_holds_settings_and_config(self, tmp_path: Path) -> None:
        from src.main import create_app

        settings = build_settings()
        application = create_app(settings, config_path=str(tmp_path / "none.yaml"))
        assert application.state.settings is settings
        assert application.state.config["search"]["distance"] == 0.4

    def test_registers_api_routes(self, tmp_path: Path) -> None:
        from src.main import create_app

        application = create_app(build_settings(), config_path=str(tmp_path / "none.yaml"))
        paths = {getattr(route, "path", None) for route in application.routes}
        for expected in (
            "/api/auth",
            "/api/add-url",
            "/api/add-yt-video",
            "/api/upload-pdf",
            "/api/documents",
            "/api/documents/check",
            "/api/documents/{document_id}",
            "/api/documents/{document_id}/history",
            "/api/search",
            "/api/google-search",
            "/api/unified-search-ai",
            "/api/health",
        ):
            assert expected in paths

    def test_module_level_app_is_fastapi(self) -> None:
        from src.main import app

        assert isinstance(app, FastAPI)
