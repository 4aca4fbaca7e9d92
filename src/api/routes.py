"""FastAPI API routes for the knowledge-base console.

Provides REST endpoints for ingestion (PDF / URL / video), the document
database proxy, vector and keyword search, the unified search + answer
endpoint, and the health check.  Service dependencies are resolved from
``app.state`` via FastAPI's ``Depends`` using the ``Annotated`` pattern.

# ─── API ROUTE MAP (Junior Developer Guide) ───────────────────────────
#
# Endpoint                          Method          Description
# ─────────────────────────────────────────────────────────────────────
# /api/add-url                      POST            Scrape a web page
# /api/add-yt-video                 POST            Fetch a video transcript
# /api/upload-pdf                   POST            S3 upload → Textract OCR
# /api/documents                    GET / POST      List / create documents
# /api/documents/check              POST            Existence check by source
# /api/documents/{id}               GET/PUT/DELETE  Proxy to the database
# /api/documents/{id}/history       GET             Stored chunks
# /api/search                       POST            Vector search
# /api/google-search                POST            Keyword search
# /api/unified-search-ai            POST            Both searches + AI answer
# /api/health                       GET             Liveness + configured providers
#
# Auth endpoints (/api/auth) live in auth_routes.py.
#
# DEPENDENCY INJECTION PATTERN:
# Each route function declares its dependencies as type-annotated params.
# FastAPI resolves these via Depends() which calls helper functions that
# read from app.state (populated at startup in main.py's _build_all).
#
# ERRORS:
# Routes never catch provider errors.  InvalidInputError → 400 and every
# other KnowledgeBaseError → 500 (or the database's own 4xx) is done by
# ErrorHandlingMiddleware.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from typing import Annotated, Any

import structlog
from fastapi import APIRouter, Body, Depends, File, Form, Query, Request, UploadFile
from fastapi.responses import JSONResponse

from src.api.schemas import (
    AddUrlRequest,
    AddVideoRequest,
    DocumentCheckRequest,
    ErrorResponse,
    GoogleSearchRequest,
    GoogleSearchResponse,
    HealthResponse,
    MessageResponse,
    UnifiedSearchRequest,
    UnifiedSearchResponse,
    VectorSearchRequest,
)
from src.interfaces.document_store import IDocumentStore
from src.interfaces.vector_search_provider import IVectorSearchProvider
from src.interfaces.web_search_provider import IWebSearchProvider
from src.models.document import ExistenceCheck, ExtractedDocument
from src.models.search import SearchHit
from src.services.answer_synthesizer import AnswerSynthesizer
from src.services.document_catalog import DocumentCatalog
from src.services.ingestion import PdfIngestionAdapter, UrlIngestionAdapter, VideoIngestionAdapter
from src.services.search_aggregator import SearchAggregator
from src.utils.errors import InvalidInputError
from src.utils.logging import get_logger

_logger: structlog.BoundLogger = get_logger(__name__)

router = APIRouter(prefix="/api")

APP_VERSION = "0.1.0"

MSG_QUERY_REQUIRED = "Query is required"
MSG_SOURCE_REQUIRED = "Source URL is required"
MSG_NO_RESULTS = "No search results found"


# ---------------------------------------------------------------------------
# Dependency injection helpers: resolve singletons from app.state
# ---------------------------------------------------------------------------


def _get_search_defaults(request: Request) -> dict[str, Any]:
    """Return the ``search`` section of the loaded config."""
    return request.app.state.config.get("search", {})


def _get_document_store(request: Request) -> IDocumentStore:
    return request.app.state.document_store


def _get_document_catalog(request: Request) -> DocumentCatalog:
    return request.app.state.document_catalog


def _get_web_search(request: Request) -> IWebSearchProvider:
    return request.app.state.web_search


def _get_vector_search(request: Request) -> IVectorSearchProvider:
    return request.app.state.vector_search


def _get_aggregator(request: Request) -> SearchAggregator:
    return request.app.state.search_aggregator


def _get_synthesizer(request: Request) -> AnswerSynthesizer:
    return request.app.state.answer_synthesizer


def _get_pdf_ingestion(request: Request) -> PdfIngestionAdapter:
    return request.app.state.pdf_ingestion


def _get_url_ingestion(request: Request) -> UrlIngestionAdapter:
    return request.app.state.url_ingestion


def _get_video_ingestion(request: Request) -> VideoIngestionAdapter:
    return request.app.state.video_ingestion


SearchDefaultsDep = Annotated[dict[str, Any], Depends(_get_search_defaults)]
DocumentStoreDep = Annotated[IDocumentStore, Depends(_get_document_store)]
DocumentCatalogDep = Annotated[DocumentCatalog, Depends(_get_document_catalog)]
WebSearchDep = Annotated[IWebSearchProvider, Depends(_get_web_search)]
VectorSearchDep = Annotated[IVectorSearchProvider, Depends(_get_vector_search)]
AggregatorDep = Annotated[SearchAggregator, Depends(_get_aggregator)]
SynthesizerDep = Annotated[AnswerSynthesizer, Depends(_get_synthesizer)]
PdfIngestionDep = Annotated[PdfIngestionAdapter, Depends(_get_pdf_ingestion)]
UrlIngestionDep = Annotated[UrlIngestionAdapter, Depends(_get_url_ingestion)]
VideoIngestionDep = Annotated[VideoIngestionAdapter, Depends(_get_video_ingestion)]


def _require_query(query: str | None) -> str:
    if not query or not query.strip():
        raise InvalidInputError(MSG_QUERY_REQUIRED)
    return query


def _pick(value: Any, defaults: dict[str, Any], key: str, fallback: Any) -> Any:
    """Request value if given, else the config default, else *fallback*."""
    if value is not None:
        return value
    return defaults.get(key, fallback)


# ---------------------------------------------------------------------------
# Ingestion
# ---------------------------------------------------------------------------


@router.post(
    "/add-url",
    response_model=ExtractedDocument,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Extract a web page via the scraping service",
)
async def add_url(body: AddUrlRequest, adapter: UrlIngestionDep) -> ExtractedDocument:
    return await adapter.ingest(body.url, body.title)


@router.post(
    "/add-yt-video",
    response_model=ExtractedDocument,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Fetch a video transcript via the transcript service",
)
async def add_video(body: AddVideoRequest, adapter: VideoIngestionDep) -> ExtractedDocument:
    return await adapter.ingest(body.video_url)


@router.post(
    "/upload-pdf",
    response_model=ExtractedDocument,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Upload a PDF to object storage and OCR it",
)
async def upload_pdf(
    adapter: PdfIngestionDep,
    file: Annotated[UploadFile | None, File()] = None,
    title: Annotated[str | None, Form()] = None,
) -> ExtractedDocument:
    """Run the full PDF path.  This call can take minutes while OCR runs."""
    if file is None:
        return await adapter.ingest(None, "", None, title)

    data = await file.read()
    return await adapter.ingest(data, file.filename or "document.pdf", file.content_type, title)


# ---------------------------------------------------------------------------
# Document database proxy
# ---------------------------------------------------------------------------


@router.get("/documents", summary="List documents")
async def list_documents(
    catalog: DocumentCatalogDep,
    include_chunks: Annotated[bool, Query()] = False,
) -> list[dict[str, Any]]:
    return await catalog.list_documents(include_chunks=include_chunks)


@router.post("/documents", status_code=201, summary="Create a document")
async def create_document(
    store: DocumentStoreDep,
    body: Annotated[dict[str, Any], Body()],
) -> Any:
    return await store.create_document(body)


@router.post(
    "/documents/check",
    response_model=ExistenceCheck,
    response_model_exclude_none=True,
    responses={400: {"model": ErrorResponse}},
    summary="Check whether a source was already ingested",
)
async def check_document(body: DocumentCheckRequest, store: DocumentStoreDep) -> ExistenceCheck:
    if not body.source or not body.source.strip():
        raise InvalidInputError(MSG_SOURCE_REQUIRED)
    return await store.check_exists(body.source)


@router.get("/documents/{document_id}", summary="Fetch one document")
async def get_document(document_id: str, store: DocumentStoreDep) -> Any:
    return await store.get_document(document_id)


@router.put("/documents/{document_id}", response_model=MessageResponse, summary="Update a document")
async def update_document(
    document_id: str,
    store: DocumentStoreDep,
    body: Annotated[dict[str, Any], Body()],
) -> MessageResponse:
    await store.update_document(document_id, body)
    return MessageResponse(message="Document updated successfully")


@router.delete(
    "/documents/{document_id}", response_model=MessageResponse, summary="Soft-delete a document"
)
async def delete_document(document_id: str, store: DocumentStoreDep) -> MessageResponse:
    await store.delete_document(document_id)
    return MessageResponse(message="Document deleted successfully")


@router.get("/documents/{document_id}/history", summary="List a document's stored chunks")
async def document_history(document_id: str, store: DocumentStoreDep) -> list[dict[str, Any]]:
    return await store.document_history(document_id)


# ---------------------------------------------------------------------------
# Search
# ---------------------------------------------------------------------------


@router.post(
    "/search",
    response_model=list[SearchHit],
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Vector similarity search",
)
async def vector_search(
    body: VectorSearchRequest,
    provider: VectorSearchDep,
    defaults: SearchDefaultsDep,
) -> list[SearchHit]:
    query = _require_query(body.query)
    return await provider.search(
        query,
        limit=_pick(body.limit, defaults, "limit", 10),
        distance=_pick(body.distance, defaults, "distance", 0.4),
    )


@router.post(
    "/google-search",
    response_model=GoogleSearchResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
    summary="Keyword web search",
)
async def google_search(
    body: GoogleSearchRequest,
    provider: WebSearchDep,
    defaults: SearchDefaultsDep,
) -> Any:
    query = _require_query(body.query)
    hits = await provider.search(
        query, num_results=_pick(body.resultsLimit, defaults, "results_limit", 10)
    )
    if not hits:
        return JSONResponse(status_code=404, content={"error": MSG_NO_RESULTS})
    return GoogleSearchResponse(searchResults=hits)


@router.post(
    "/unified-search-ai",
    response_model=UnifiedSearchResponse,
    responses={400: {"model": ErrorResponse}},
    summary="Search both sources and synthesize an answer",
)
async def unified_search_ai(
    body: UnifiedSearchRequest,
    aggregator: AggregatorDep,
    synthesizer: SynthesizerDep,
    defaults: SearchDefaultsDep,
) -> UnifiedSearchResponse:
    """Aggregate search results and answer from them.

    Past input validation this never fails: provider failures become empty
    result lists and model failures become a fixed error string.
    """
    query = _require_query(body.query)
    use_google = _pick(body.useGoogleSearch, defaults, "use_google_search", False)
    use_vector = _pick(body.useVectorSearch, defaults, "use_vector_search", True)

    results = await aggregator.aggregate(
        query,
        results_limit=_pick(body.resultsLimit, defaults, "results_limit", 10),
        limit=_pick(body.limit, defaults, "limit", 10),
        distance=_pick(body.distance, defaults, "distance", 0.4),
        use_google_search=use_google,
        use_vector_search=use_vector,
    )
    answer = await synthesizer.answer(query, body.conversation, results)

    _logger.info(
        "unified_search_complete",
        google=use_google,
        vector=use_vector,
        turns=len(body.conversation),
    )
    return UnifiedSearchResponse(searchResults=results, aiResponse=answer)


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------


@router.get("/health", response_model=HealthResponse, summary="Health check")
async def health_check(request: Request) -> HealthResponse:
    """Report liveness and which external collaborators are configured.

    Nothing is called upstream; "degraded" means the answer path (LLM +
    document database) is missing configuration.
    """
    providers: dict[str, Any] = dict(getattr(request.app.state, "provider_registry", {}))
    critical_ok = providers.get("llm", False) and providers.get("document_db", False)
    return HealthResponse(
        status="healthy" if critical_ok else "degraded",
        version=APP_VERSION,
        providers=providers,
    )
