"""Pydantic v2 data models for the knowledge-base console."""

from src.models.conversation import ChatTurn
from src.models.document import (
    Confidentiality,
    DocumentMetadata,
    ExistenceCheck,
    ExtractedDocument,
    FileType,
)
from src.models.ocr import BackendJobStatus, OCRJobState, TextDetectionPage, TextractJob
from src.models.search import AggregatedSearchResults, SearchHit, SourceType

__all__ = [
    "AggregatedSearchResults",
    "BackendJobStatus",
    "ChatTurn",
    "Confidentiality",
    "DocumentMetadata",
    "ExistenceCheck",
    "ExtractedDocument",
    "FileType",
    "OCRJobState",
    "SearchHit",
    "SourceType",
    "TextDetectionPage",
    "TextractJob",
]
