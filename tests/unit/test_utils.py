"""Unit tests for tolerant JSON parsing, settled fan-out, and the error hierarchy."""

from __future__ import annotations

import asyncio

import pytest

from src.utils.concurrency import gather_settled, settled_values
from src.utils.errors import (
    DocumentStoreError,
    IngestionError,
    KnowledgeBaseError,
    OCRExtractionError,
)
from src.utils.json_parsing import ParseOutcome, tolerant_json


# ======================================================================
# tolerant_json
# ======================================================================


class TestTolerantJson:
    def test_valid_array(self) -> None:
        outcome = tolerant_json('[{"a": 1}]', expect=list)
        assert outcome == ParseOutcome(ok=True, value=[{"a": 1}])

    def test_bytes_input(self) -> None:
        assert tolerant_json(b'{"a": 1}').value == {"a": 1}

    @pytest.mark.parametrize("text", ["", "not json", "{broken", None])
    def test_invalid_input_fails_without_raising(self, text: str | None) -> None:
        outcome = tolerant_json(text)
        assert outcome.ok is False
        assert outcome.value is None

    def test_shape_mismatch_fails(self) -> None:
        assert tolerant_json('{"searchResults": []}', expect=list).ok is False
        assert tolerant_json("[1, 2]", expect=dict).ok is False

    def test_json_null_is_ok_without_expectation(self) -> None:
        outcome = tolerant_json("null")
        assert outcome.ok is True
        assert outcome.value is None


# ======================================================================
# gather_settled / settled_values
# ======================================================================


class TestGatherSettled:
    @pytest.mark.asyncio
    async def test_empty(self) -> None:
        assert await gather_settled() == []

    @pytest.mark.asyncio
    async def test_results_in_input_order_not_completion_order(self) -> None:
        async def slow() -> str:
            await asyncio.sleep(0.02)
            return "slow"

        async def fast() -> str:
            return "fast"

        assert await gather_settled(slow(), fast()) == ["slow", "fast"]

    @pytest.mark.asyncio
    async def test_failure_does_not_cancel_sibling(self) -> None:
        finished: list[str] = []

        async def boom() -> str:
            raise RuntimeError("down")

        async def ok() -> str:
            await asyncio.sleep(0.01)
            finished.append("ok")
            return "ok"

        results = await gather_settled(boom(), ok())
        assert isinstance(results[0], RuntimeError)
        assert results[1] == "ok"
        assert finished == ["ok"]


class TestSettledValues:
    @pytest.mark.asyncio
    async def test_failed_slots_get_default(self) -> None:
        async def fetch(n: int) -> list[int]:
            if n == 2:
                raise ValueError("bad")
            return [n]

        values = await settled_values(fetch, [{"n": 1}, {"n": 2}, {"n": 3}], default=list)
        assert values == [[1], [], [3]]


# ======================================================================
# Errors
# ======================================================================


class TestErrors:
    def test_str_includes_provider(self) -> None:
        err = KnowledgeBaseError("boom", provider_name="textract")
        assert str(err) == "[textract] boom"
        assert err.message == "boom"

    def test_ocr_error_is_ingestion_error(self) -> None:
        err = OCRExtractionError("took too long", state="timed_out")
        assert isinstance(err, IngestionError)
        assert err.state == "timed_out"

    def test_document_store_error_defaults(self) -> None:
        err = DocumentStoreError("Failed to fetch", status_code=404)
        assert err.provider_name == "document_db"
        assert err.status_code == 404

    def test_exported_hierarchy(self) -> None:
        import src.utils as utils

        exported = {
            name
            for name in utils.__all__
            if isinstance(getattr(utils, name), type)
            and issubclass(getattr(utils, name), KnowledgeBaseError)
        }
        assert exported == {
            "ConfigurationError",
            "DocumentStoreError",
            "IngestionError",
            "InvalidInputError",
            "KnowledgeBaseError",
            "LLMError",
            "OCRExtractionError",
            "SearchError",
        }
