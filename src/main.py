"""Knowledge-base console FastAPI application entry point.

Wires together all providers, services, and routes via dependency injection.
Loads configuration from ``.env`` and ``config/config.yaml``, configures
structured logging, and builds every external client exactly once per
process (one shared ``httpx.AsyncClient``, one S3 client, one Textract
client, one OpenAI client).

# ─── COMPOSITION ROOT (Junior Developer Guide) ────────────────────────
#
#   Settings ─┬─▶ providers (src/providers/)  ──▶ services (src/services/)
#   config   ─┘                                          │
#                                                        ▼
#                                                   app.state.*  ──▶ routes
#
# Nothing else in the codebase constructs a client.  Tests build the app
# with create_app() and place fakes on app.state directly.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any

import httpx
import structlog
import uvicorn
from fastapi import FastAPI

from src.api.auth_middleware import AuthMiddleware
from src.api.auth_routes import auth_router
from src.api.middleware import (
    ErrorHandlingMiddleware,
    RequestLoggingMiddleware,
    configure_cors,
)
from src.api.routes import APP_VERSION
from src.api.routes import router as api_router
from src.config.loader import load_config
from src.config.settings import Settings
from src.providers.document_store import HttpDocumentStore
from src.providers.extraction import ScraperServiceProvider, TranscriptServiceProvider
from src.providers.llm import OpenAILLMProvider
from src.providers.ocr import TextractOCRProvider
from src.providers.search import DocumentDBVectorSearchProvider, GoogleSearchProvider
from src.providers.storage import S3StorageProvider
from src.services.answer_synthesizer import AnswerSynthesizer
from src.services.document_catalog import DocumentCatalog
from src.services.ingestion import (
    PdfIngestionAdapter,
    TextractJobPoller,
    UrlIngestionAdapter,
    VideoIngestionAdapter,
)
from src.services.search_aggregator import SearchAggregator
from src.utils.logging import configure_logging, get_logger

# ---------------------------------------------------------------------------
# Module-level settings & logging
# ---------------------------------------------------------------------------

settings = Settings()

configure_logging(
    log_level=settings.log_level,
    json_output=(settings.app_env == "production"),
)
_logger: structlog.BoundLogger = get_logger(__name__)

# Upstream calls are forwarded 1:1; this is the only timeout we add.
_HTTP_TIMEOUT = httpx.Timeout(60.0, connect=10.0)


def _build_all(app_settings: Settings, config: dict[str, Any]) -> dict[str, Any]:
    """Construct every provider and service instance for the application.

    Returns a flat dict of named components to be stored on ``app.state``.
    """
    # -- Shared resources --
    http_client = httpx.AsyncClient(timeout=_HTTP_TIMEOUT)

    # -- Providers --
    llm = OpenAILLMProvider(settings=app_settings)
    web_search = GoogleSearchProvider(settings=app_settings, http_client=http_client)
    vector_search = DocumentDBVectorSearchProvider(settings=app_settings, http_client=http_client)
    document_store = HttpDocumentStore(settings=app_settings, http_client=http_client)
    storage = S3StorageProvider(settings=app_settings)
    ocr = TextractOCRProvider(settings=app_settings)
    scraper = ScraperServiceProvider(settings=app_settings, http_client=http_client)
    transcripts = TranscriptServiceProvider(settings=app_settings, http_client=http_client)

    # -- Services --
    poller = TextractJobPoller(
        ocr=ocr,
        interval_seconds=app_settings.textract_poll_interval_seconds,
        max_attempts=app_settings.textract_max_attempts,
    )
    pdf_ingestion = PdfIngestionAdapter(
        storage=storage,
        ocr=ocr,
        poller=poller,
        key_prefix=app_settings.s3_key_prefix,
        grace_seconds=app_settings.upload_grace_seconds,
    )
    search_aggregator = SearchAggregator(web_search=web_search, vector_search=vector_search)
    answer_synthesizer = AnswerSynthesizer(
        llm=llm,
        assistant_config=config.get("assistant", {}),
        search_model=app_settings.openai_search_model,
    )

    return {
        "http_client": http_client,
        "llm": llm,
        "web_search": web_search,
        "vector_search": vector_search,
        "document_store": document_store,
        "document_catalog": DocumentCatalog(store=document_store),
        "pdf_ingestion": pdf_ingestion,
        "url_ingestion": UrlIngestionAdapter(scraper=scraper),
        "video_ingestion": VideoIngestionAdapter(transcripts=transcripts),
        "search_aggregator": search_aggregator,
        "answer_synthesizer": answer_synthesizer,
        "provider_registry": app_settings.get_configured_providers(),
    }


# ---------------------------------------------------------------------------
# Application lifespan (startup / shutdown)
# ---------------------------------------------------------------------------


@asynccontextmanager
async def _lifespan(application: FastAPI):  # noqa: ANN201
    """Initialise all providers and services on startup, clean up on shutdown."""
    app_settings: Settings = application.state.settings
    components = _build_all(app_settings, application.state.config)

    for key, value in components.items():
        setattr(application.state, key, value)

    _logger.info(
        "app_startup",
        version=APP_VERSION,
        environment=app_settings.app_env,
        auth_enabled=bool(app_settings.security_token),
        providers=components["provider_registry"],
    )

    yield

    # -- Shutdown: close shared httpx client --
    http_client: httpx.AsyncClient = components["http_client"]
    await http_client.aclose()
    _logger.info("app_shutdown", message="HTTP client closed")


# ---------------------------------------------------------------------------
# FastAPI application factory
# ---------------------------------------------------------------------------


def create_app(
    app_settings: Settings | None = None,
    config_path: str = "config/config.yaml",
) -> FastAPI:
    """Build and configure the FastAPI application."""
    app_settings = app_settings or settings
    application = FastAPI(
        title="Knowledge Base Console API",
        version=APP_VERSION,
        description=(
            "Ingest PDFs, web pages and video transcripts into a knowledge base, "
            "manage stored documents, and answer questions from vector and "
            "keyword search results."
        ),
        lifespan=_lifespan,
    )
    application.state.settings = app_settings
    application.state.config = load_config(config_path, settings=app_settings)

    # -- Middleware (order matters: last added = first executed) --
    application.add_middleware(ErrorHandlingMiddleware)
    application.add_middleware(
        AuthMiddleware,
        secret=app_settings.security_token,
        max_age_seconds=app_settings.auth_cookie_max_age_seconds,
    )
    application.add_middleware(RequestLoggingMiddleware)
    configure_cors(application)

    # -- API routes --
    application.include_router(auth_router)
    application.include_router(api_router)

    return application


app = create_app()

# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    uvicorn.run(
        "src.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=(settings.app_env == "development"),
    )
