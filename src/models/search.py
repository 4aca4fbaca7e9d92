"""Search result models shared by both search providers and the aggregator.

Keyword (Google) and vector (document database) providers answer in
different shapes upstream.  Both are normalized into :class:`SearchHit`
so the aggregator, the synthesizer prompt and API consumers deal with
one shape:

    field          keyword result        vector result
    -----------    ------------------    -------------------
    title          item.title            row.title
    source         item.link             row.source
    snippet        item.snippet          row.chunk
    score          (none)                row.distance
    source_type    "google"              "vector"
    display_link   item.displayLink      (none)
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class SourceType(str, Enum):
    GOOGLE = "google"
    VECTOR = "vector"


class SearchHit(BaseModel):
    """One ranked result from either provider."""

    model_config = ConfigDict(frozen=True, use_enum_values=True)

    title: str | None = None
    source: str | None = None
    snippet: str | None = None
    # Vector distance (lower is closer); ``None`` for keyword results.
    score: float | None = None
    source_type: SourceType
    display_link: str | None = None
    document_id: str | None = None

    @classmethod
    def from_google_item(cls, item: dict[str, Any]) -> SearchHit:
        return cls(
            title=item.get("title"),
            source=item.get("link") or item.get("url"),
            snippet=item.get("snippet"),
            display_link=item.get("displayLink"),
            source_type=SourceType.GOOGLE,
        )

    @classmethod
    def from_vector_row(cls, row: dict[str, Any]) -> SearchHit:
        distance = row.get("distance", row.get("score"))
        doc_id = row.get("document_id", row.get("id"))
        return cls(
            title=row.get("title"),
            source=row.get("source"),
            snippet=row.get("chunk", row.get("snippet")),
            score=float(distance) if isinstance(distance, (int, float)) else None,
            document_id=str(doc_id) if doc_id is not None else None,
            source_type=SourceType.VECTOR,
        )


class AggregatedSearchResults(BaseModel):
    """Both providers' results, kept separate and never ``None``.

    The camelCase field names are the wire contract consumed by the
    dashboard.
    """

    model_config = ConfigDict(frozen=True)

    googleResults: list[SearchHit] = Field(default_factory=list)  # noqa: N815
    vectorResults: list[SearchHit] = Field(default_factory=list)  # noqa: N815

    @classmethod
    def empty(cls) -> AggregatedSearchResults:
        return cls()

    def top_vector(self, n: int) -> list[SearchHit]:
        return list(self.vectorResults[:n])
