"""Unit tests for the Pydantic domain models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from src.models.conversation import ChatTurn
from src.models.document import (
    Confidentiality,
    DocumentMetadata,
    ExistenceCheck,
    ExtractedDocument,
    FileType,
)
from src.models.ocr import BackendJobStatus, OCRJobState, TextractJob
from src.models.search import AggregatedSearchResults, SearchHit, SourceType


# ======================================================================
# ExtractedDocument
# ======================================================================


class TestExtractedDocument:
    def test_from_text_sets_size_to_content_length(self) -> None:
        doc = ExtractedDocument.from_text(
            source="https://intersight.com/help/policy",
            content="Policies define server configuration.",
            title="Policy Guide",
            file_type=FileType.URL,
        )
        assert doc.metadata.size == len("Policies define server configuration.")
        assert doc.metadata.file_type == "url"
        assert doc.metadata.confidentiality == "public"

    def test_empty_content_is_allowed(self) -> None:
        doc = ExtractedDocument.from_text(
            source="https://x.test", content="", title="Empty", file_type=FileType.URL
        )
        assert doc.content == ""
        assert doc.metadata.size == 0

    def test_with_content_keeps_size_in_sync(self) -> None:
        doc = ExtractedDocument.from_text(
            source="https://x.test", content="abc", title="T", file_type=FileType.TEXT
        )
        edited = doc.with_content("abcdefgh")
        assert edited.content == "abcdefgh"
        assert edited.metadata.size == 8
        # original untouched
        assert doc.metadata.size == 3

    def test_with_title(self) -> None:
        doc = ExtractedDocument.from_text(
            source="https://x.test", content="abc", title="Old", file_type=FileType.TEXT
        )
        assert doc.with_title("New").metadata.title == "New"
        assert doc.with_title("New").metadata.size == 3

    def test_frozen(self) -> None:
        doc = ExtractedDocument.from_text(
            source="https://x.test", content="abc", title="T", file_type=FileType.TEXT
        )
        with pytest.raises(ValidationError):
            doc.content = "changed"  # type: ignore[misc]

    def test_source_required(self) -> None:
        with pytest.raises(ValidationError):
            ExtractedDocument(
                source="",
                content="x",
                metadata=DocumentMetadata(title="T", size=1, file_type=FileType.PDF),
            )

    def test_negative_size_rejected(self) -> None:
        with pytest.raises(ValidationError):
            DocumentMetadata(title="T", size=-1, file_type=FileType.PDF)

    def test_invalid_file_type_rejected(self) -> None:
        with pytest.raises(ValidationError):
            DocumentMetadata(title="T", size=1, file_type="docx")

    def test_serializes_to_wire_shape(self) -> None:
        doc = ExtractedDocument.from_text(
            source="https://v.test/watch?v=1",
            content="hello",
            title="Video",
            file_type=FileType.VIDEO,
            confidentiality=Confidentiality.INTERNAL,
        )
        assert doc.model_dump() == {
            "source": "https://v.test/watch?v=1",
            "content": "hello",
            "metadata": {
                "title": "Video",
                "size": 5,
                "file_type": "video",
                "confidentiality": "internal",
            },
        }


class TestExistenceCheck:
    def test_not_found_has_no_reactivation(self) -> None:
        check = ExistenceCheck(exists=False, message="Document can be ingested.")
        assert check.reactivation is None
        assert check.model_dump(exclude_none=True) == {
            "exists": False,
            "message": "Document can be ingested.",
        }


# ======================================================================
# Search
# ======================================================================


class TestSearchHit:
    def test_from_google_item(self) -> None:
        hit = SearchHit.from_google_item(
            {
                "title": "Intersight Docs",
                "link": "https://intersight.com/help",
                "snippet": "Help center",
                "displayLink": "intersight.com",
            }
        )
        assert hit.source == "https://intersight.com/help"
        assert hit.snippet == "Help center"
        assert hit.display_link == "intersight.com"
        assert hit.score is None
        assert hit.source_type == "google"

    def test_from_vector_row(self) -> None:
        hit = SearchHit.from_vector_row(
            {
                "id": 42,
                "title": "Policy Guide",
                "source": "https://s3/policy.pdf",
                "chunk": "Policies define...",
                "distance": 0.21,
            }
        )
        assert hit.snippet == "Policies define..."
        assert hit.score == pytest.approx(0.21)
        assert hit.document_id == "42"
        assert hit.source_type == "vector"

    def test_from_vector_row_non_numeric_distance(self) -> None:
        hit = SearchHit.from_vector_row({"chunk": "x", "distance": "far"})
        assert hit.score is None


class TestAggregatedSearchResults:
    def test_empty_lists_never_none(self) -> None:
        results = AggregatedSearchResults.empty()
        assert results.googleResults == []
        assert results.vectorResults == []

    def test_top_vector(self) -> None:
        hits = [
            SearchHit(snippet=str(i), source_type=SourceType.VECTOR) for i in range(5)
        ]
        results = AggregatedSearchResults(vectorResults=hits)
        assert [h.snippet for h in results.top_vector(2)] == ["0", "1"]
        assert results.top_vector(10) == hits


# ======================================================================
# OCR / conversation
# ======================================================================


class TestOCRModels:
    @pytest.mark.parametrize(
        "state,terminal",
        [
            (OCRJobState.STARTED, False),
            (OCRJobState.POLLING, False),
            (OCRJobState.SUCCEEDED, True),
            (OCRJobState.FAILED, True),
            (OCRJobState.TIMED_OUT, True),
        ],
    )
    def test_is_terminal(self, state: OCRJobState, terminal: bool) -> None:
        assert state.is_terminal is terminal

    def test_job_defaults(self) -> None:
        job = TextractJob(job_id="job-1")
        assert job.state == OCRJobState.STARTED
        assert job.attempt == 0
        assert job.backend_status is None

    def test_backend_status_values(self) -> None:
        assert BackendJobStatus("IN_PROGRESS") is BackendJobStatus.IN_PROGRESS


class TestChatTurn:
    def test_as_message(self) -> None:
        assert ChatTurn(role="user", content="hi").as_message() == {
            "role": "user",
            "content": "hi",
        }

    def test_unknown_role_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ChatTurn(role="tool", content="x")
