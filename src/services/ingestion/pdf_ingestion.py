"""PDF ingestion: upload to object storage, OCR with Textract, normalize.

Pipeline for one upload::

    validate ──▶ put_object ──▶ grace sleep ──▶ start OCR job ──▶ poll ──▶ ExtractedDocument

The stored object is the document's ``source``.  If OCR fails after the
upload, the object stays in the bucket; nothing deletes it.
"""

from __future__ import annotations

import asyncio
import uuid
from pathlib import PurePosixPath

import structlog

from src.interfaces.object_storage_provider import IObjectStorageProvider
from src.interfaces.ocr_provider import IOCRProvider
from src.models.document import (
    Confidentiality,
    DocumentMetadata,
    ExtractedDocument,
    FileType,
)
from src.services.ingestion.textract_poller import SleepFn, TextractJobPoller
from src.utils.errors import InvalidInputError, OCRExtractionError
from src.utils.logging import get_logger

logger: structlog.BoundLogger = get_logger(__name__)

PDF_CONTENT_TYPE = "application/pdf"

MSG_MISSING_FILE_OR_TITLE = "Missing file or title"
MSG_NOT_A_PDF = "Only PDF files are supported"
MSG_OCR_NOT_STARTED = "Textract failed to start document analysis"


def build_object_key(filename: str, prefix: str = "uploads/") -> str:
    """Return ``<prefix><uuid4>-<basename>`` for an uploaded file name."""
    basename = PurePosixPath(filename.replace("\\", "/")).name or "document.pdf"
    return f"{prefix}{uuid.uuid4()}-{basename}"


class PdfIngestionAdapter:
    """Turns an uploaded PDF into an :class:`ExtractedDocument`.

    Parameters
    ----------
    storage:
        Object storage adapter (S3).
    ocr:
        Asynchronous text-detection adapter (Textract).
    poller:
        Drives the OCR job to completion.
    key_prefix:
        Prefix for stored object keys.
    grace_seconds:
        Delay between a successful upload and the OCR job submission.
    sleep:
        Async sleep used for the grace delay; injectable for tests.
    """

    def __init__(
        self,
        storage: IObjectStorageProvider,
        ocr: IOCRProvider,
        poller: TextractJobPoller,
        key_prefix: str = "uploads/",
        grace_seconds: float = 2.0,
        sleep: SleepFn | None = None,
    ) -> None:
        self._storage = storage
        self._ocr = ocr
        self._poller = poller
        self._key_prefix = key_prefix
        self._grace_seconds = grace_seconds
        self._sleep: SleepFn = sleep or asyncio.sleep

    async def ingest(
        self,
        data: bytes | None,
        filename: str,
        content_type: str | None,
        title: str | None,
    ) -> ExtractedDocument:
        """Store, OCR and normalize one PDF.

        Raises
        ------
        InvalidInputError
            If the file or title is missing, or the file is not a PDF.
        IngestionError
            If the storage upload fails.
        OCRExtractionError
            If the OCR job cannot be started, fails, or times out.
        """
        clean_title = (title or "").strip()
        if not data or not clean_title:
            raise InvalidInputError(MSG_MISSING_FILE_OR_TITLE)
        if (content_type or "").split(";")[0].strip().lower() != PDF_CONTENT_TYPE:
            raise InvalidInputError(MSG_NOT_A_PDF)

        key = build_object_key(filename, self._key_prefix)
        log = logger.bind(key=key, bytes=len(data))

        stored = await self._storage.put_object(key, data, PDF_CONTENT_TYPE)
        log.info("pdf_uploaded", bucket=stored.bucket)

        if self._grace_seconds > 0:
            await self._sleep(self._grace_seconds)

        job_id = await self._ocr.start_text_detection(stored.bucket, stored.key)
        if not job_id:
            raise OCRExtractionError(
                message=MSG_OCR_NOT_STARTED,
                provider_name=self._ocr.get_provider_name(),
                state="failed",
            )

        content = await self._poller.run(job_id)
        log.info("pdf_ingested", job_id=job_id, chars=len(content))

        # size is the upload's byte count, not the extracted text length.
        return ExtractedDocument(
            source=stored.public_url,
            content=content,
            metadata=DocumentMetadata(
                title=clean_title,
                size=len(data),
                file_type=FileType.PDF,
                confidentiality=Confidentiality.PUBLIC,
            ),
        )
