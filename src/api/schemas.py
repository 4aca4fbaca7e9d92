"""Pydantic request/response schemas for the knowledge-base console API.

# ─── HOW SCHEMAS WORK (Junior Developer Guide) ────────────────────────
#
# These models define the *shape* of every JSON body the dashboard sends
# and receives.  Field names follow the dashboard's wire format, which is
# why some are camelCase (``resultsLimit``, ``useGoogleSearch``).
#
# Required request fields are declared Optional on purpose: a missing
# field must produce the console's own 400 message ("Query is required",
# "Missing URL or title", ...) rather than FastAPI's generic 422.  Routes
# check presence and raise InvalidInputError.
#
# Search knobs default to ``None`` so the route can fall back to the
# ``search`` section of config/config.yaml.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from src.models.conversation import ChatTurn
from src.models.search import AggregatedSearchResults, SearchHit

# ---------------------------------------------------------------------------
# Ingestion
# ---------------------------------------------------------------------------


class AddUrlRequest(BaseModel):
    url: str | None = None
    title: str | None = None


class AddVideoRequest(BaseModel):
    video_url: str | None = None


class DocumentCheckRequest(BaseModel):
    source: str | None = None


# ---------------------------------------------------------------------------
# Search
# ---------------------------------------------------------------------------

# Counts and distances are forwarded unchecked, as the dashboard sends them;
# a zero or oversized count is the backend's to interpret.


class VectorSearchRequest(BaseModel):
    query: str | None = None
    limit: int | None = None
    distance: float | None = None


class GoogleSearchRequest(BaseModel):
    query: str | None = None
    resultsLimit: int | None = None  # noqa: N815


class GoogleSearchResponse(BaseModel):
    searchResults: list[SearchHit]  # noqa: N815


class UnifiedSearchRequest(BaseModel):
    """Body of ``POST /api/unified-search-ai``.

    ``conversation`` is the full prior chat, oldest first.  The server keeps
    no conversation state; the dashboard resends it every turn.
    """

    query: str | None = None
    resultsLimit: int | None = None  # noqa: N815
    limit: int | None = None
    distance: float | None = None
    conversation: list[ChatTurn] = Field(default_factory=list)
    useGoogleSearch: bool | None = None  # noqa: N815
    useVectorSearch: bool | None = None  # noqa: N815


class UnifiedSearchResponse(BaseModel):
    searchResults: AggregatedSearchResults  # noqa: N815
    aiResponse: str  # noqa: N815


# ---------------------------------------------------------------------------
# Auth / misc
# ---------------------------------------------------------------------------


class AuthRequest(BaseModel):
    token: str | None = None


class AuthStatusResponse(BaseModel):
    isAuthenticated: bool  # noqa: N815


class MessageResponse(BaseModel):
    message: str


class HealthResponse(BaseModel):
    """Application health check response."""

    status: str
    version: str
    providers: dict[str, Any]


class ErrorResponse(BaseModel):
    """Standard error response body."""

    error: str
    detail: str | None = None
