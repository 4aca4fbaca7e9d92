"""AWS Textract provider implementing IOCRProvider.

Uses the asynchronous document text-detection API, which reads the PDF
directly from S3:

    start_document_text_detection  →  JobId
    get_document_text_detection    →  JobStatus + Blocks (+ NextToken)

Only ``LINE`` blocks with text are kept; their order is the order
Textract returned them in.
"""

from __future__ import annotations

import asyncio
from typing import Any

import structlog
from botocore.exceptions import BotoCoreError, ClientError

from src.config.settings import Settings
from src.interfaces.ocr_provider import IOCRProvider
from src.models.ocr import BackendJobStatus, TextDetectionPage
from src.providers.storage.s3_provider import build_boto_client
from src.utils.errors import OCRExtractionError

logger = structlog.get_logger(logger_name=__name__)


class TextractOCRProvider(IOCRProvider):
    """Asynchronous text detection via AWS Textract."""

    def __init__(self, settings: Settings, client: Any | None = None) -> None:
        self._client = client if client is not None else build_boto_client("textract", settings)

    async def start_text_detection(self, bucket: str, key: str) -> str | None:
        try:
            response = await asyncio.to_thread(
                self._client.start_document_text_detection,
                DocumentLocation={"S3Object": {"Bucket": bucket, "Name": key}},
            )
        except (BotoCoreError, ClientError) as exc:
            raise OCRExtractionError(
                message=f"Textract failed to start document analysis: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        job_id = response.get("JobId")
        logger.info("textract_job_submitted", key=key, job_id=job_id)
        return job_id or None

    async def get_text_detection(
        self, job_id: str, next_token: str | None = None
    ) -> TextDetectionPage:
        kwargs: dict[str, Any] = {"JobId": job_id}
        if next_token:
            kwargs["NextToken"] = next_token
        try:
            response = await asyncio.to_thread(self._client.get_document_text_detection, **kwargs)
        except (BotoCoreError, ClientError) as exc:
            raise OCRExtractionError(
                message=f"Textract status request failed: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        raw_status = response.get("JobStatus", BackendJobStatus.IN_PROGRESS.value)
        try:
            status = BackendJobStatus(raw_status)
        except ValueError:
            logger.warning("textract_unknown_status", job_id=job_id, status=raw_status)
            status = BackendJobStatus.IN_PROGRESS

        lines = [
            block["Text"]
            for block in response.get("Blocks") or []
            if block.get("BlockType") == "LINE" and block.get("Text")
        ]
        return TextDetectionPage(
            status=status,
            lines=lines,
            next_token=response.get("NextToken"),
            status_message=response.get("StatusMessage"),
        )

    def get_provider_name(self) -> str:
        return "textract"
