"""Abstract base class for asynchronous OCR (text detection) services.

Implementations wrap a start-job / poll-job backend such as AWS Textract.
Polling policy (interval, attempt ceiling) is NOT the provider's concern;
it lives in :class:`src.services.ingestion.textract_poller.TextractJobPoller`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from src.models.ocr import TextDetectionPage


# Concrete implementation: TextractOCRProvider (src/providers/ocr/)
class IOCRProvider(ABC):
    """Contract for asynchronous document text detection."""

    @abstractmethod
    async def start_text_detection(self, bucket: str, key: str) -> str | None:
        """Submit a text-detection job for a stored object.

        Returns
        -------
        str | None
            The opaque job id, or ``None`` if the backend returned none.

        Raises
        ------
        src.utils.errors.OCRExtractionError
            If the submission call itself fails.
        """

    @abstractmethod
    async def get_text_detection(
        self, job_id: str, next_token: str | None = None
    ) -> TextDetectionPage:
        """Fetch one page of job status / results.

        ``lines`` holds the text of every LINE block on the page, in
        backend order.  ``next_token`` is set when more result pages exist.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier, e.g. ``"textract"``."""
