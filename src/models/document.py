"""Document models produced by ingestion and consumed by the document store.

Defines Pydantic v2 models for the normalized ``ExtractedDocument`` that
every ingestion adapter returns, plus the existence-check answer used by
the dashboard before ingesting.  All models use frozen config.

Lifecycle:
    1. An ingestion adapter (PDF / URL / video) builds ExtractedDocument
    2. A human may edit it in the dashboard  → with_content() / with_title()
    3. The dashboard POSTs it to /api/documents, and the remote database
       assigns ``id`` and ``ingested_at`` (we never model those here)
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class FileType(str, Enum):
    """Kind of raw input a document was extracted from."""

    PDF = "pdf"
    URL = "url"
    VIDEO = "video"
    TEXT = "text"


class Confidentiality(str, Enum):
    PUBLIC = "public"
    INTERNAL = "internal"
    CONFIDENTIAL = "confidential"


class DocumentMetadata(BaseModel):
    """Fixed-shape metadata attached to every extracted document."""

    model_config = ConfigDict(frozen=True, use_enum_values=True)

    title: str
    # Character count of ``content`` for URL/video/text; original upload
    # byte size for PDFs.
    size: int = Field(ge=0)
    file_type: FileType
    confidentiality: Confidentiality = Confidentiality.PUBLIC


class ExtractedDocument(BaseModel):
    """The normalized output of any ingestion adapter.

    ``source`` is the canonical origin URI (S3 object URL, web URL or video
    URL) and acts as the natural dedup key in the document database.
    ``content`` may be empty when extraction found nothing; the record is
    still returned so a human can fill it in.
    """

    model_config = ConfigDict(frozen=True)

    source: str = Field(min_length=1)
    content: str = ""
    metadata: DocumentMetadata

    @classmethod
    def from_text(
        cls,
        *,
        source: str,
        content: str,
        title: str,
        file_type: FileType,
        confidentiality: Confidentiality = Confidentiality.PUBLIC,
    ) -> ExtractedDocument:
        """Build a document whose ``size`` is the character count of *content*."""
        return cls(
            source=source,
            content=content,
            metadata=DocumentMetadata(
                title=title,
                size=len(content),
                file_type=file_type,
                confidentiality=confidentiality,
            ),
        )

    def with_content(self, content: str) -> ExtractedDocument:
        """Return a copy with edited content; ``size`` tracks the new length."""
        metadata = self.metadata.model_copy(update={"size": len(content)})
        return self.model_copy(update={"content": content, "metadata": metadata})

    def with_title(self, title: str) -> ExtractedDocument:
        metadata = self.metadata.model_copy(update={"title": title})
        return self.model_copy(update={"metadata": metadata})


class ExistenceCheck(BaseModel):
    """Answer to "is this source already in the knowledge base?".

    Three states drive the dashboard:
      - ``exists=False``                        → ingestion may proceed
      - ``exists=True, reactivation=True``      → soft-deleted, offer reactivation
      - ``exists=True, reactivation=False``     → already active
    """

    model_config = ConfigDict(frozen=True)

    exists: bool
    reactivation: bool | None = None
    message: str
    document_id: str | None = None
