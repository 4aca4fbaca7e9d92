"""Poll-to-completion driver for asynchronous OCR jobs.

# ─── STATE MACHINE (Junior Developer Guide) ───────────────────────────
#
#   STARTED ──first poll──▶ POLLING ──SUCCEEDED──▶ SUCCEEDED
#                              │  ╰────FAILED────▶ FAILED
#                              ╰──attempts used──▶ TIMED_OUT
#
# Each attempt is "sleep one interval, then ask for the status", so a job
# that never finishes costs roughly ``interval * max_attempts`` seconds
# (7s * 20 = ~140s with the defaults).  There is no backoff and no job
# cancellation; the attempt ceiling is the only bound.
#
# ``sleep`` is injected so tests can run every terminal outcome without
# waiting on a real clock.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable

import structlog

from src.interfaces.ocr_provider import IOCRProvider
from src.models.ocr import BackendJobStatus, OCRJobState, TextDetectionPage, TextractJob
from src.utils.errors import OCRExtractionError
from src.utils.logging import get_logger

logger: structlog.BoundLogger = get_logger(__name__)

SleepFn = Callable[[float], Awaitable[None]]

MSG_OCR_FAILED = "Textract failed to process the document"
MSG_OCR_TIMED_OUT = "Document processing took too long"

# Hard stop on result pagination; a runaway NextToken chain is a backend bug.
_MAX_RESULT_PAGES = 1000


def advance(job: TextractJob, page: TextDetectionPage, max_attempts: int) -> TextractJob:
    """Return the job state after observing one status *page*.

    Pure transition function; the caller has already counted the attempt.
    """
    if page.status in (BackendJobStatus.SUCCEEDED, BackendJobStatus.PARTIAL_SUCCESS):
        state = OCRJobState.SUCCEEDED
    elif page.status == BackendJobStatus.FAILED:
        state = OCRJobState.FAILED
    elif job.attempt >= max_attempts:
        state = OCRJobState.TIMED_OUT
    else:
        state = OCRJobState.POLLING
    return job.model_copy(update={"state": state, "backend_status": page.status})


class TextractJobPoller:
    """Drives one OCR job to a terminal state and returns its text.

    Parameters
    ----------
    ocr:
        The OCR backend adapter.
    interval_seconds:
        Fixed delay before every status request.
    max_attempts:
        Number of status requests allowed before the job is timed out.
    sleep:
        Async sleep callable; defaults to :func:`asyncio.sleep`.
    """

    def __init__(
        self,
        ocr: IOCRProvider,
        interval_seconds: float = 7.0,
        max_attempts: int = 20,
        sleep: SleepFn | None = None,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self._ocr = ocr
        self._interval = interval_seconds
        self._max_attempts = max_attempts
        self._sleep: SleepFn = sleep or asyncio.sleep

    async def run(self, job_id: str) -> str:
        """Poll *job_id* until it finishes and return the space-joined LINE text.

        Raises
        ------
        OCRExtractionError
            With ``state="failed"`` when the backend reports failure, or
            ``state="timed_out"`` when the attempt budget is exhausted.
        """
        job = TextractJob(job_id=job_id)
        log = logger.bind(job_id=job_id)
        log.info("textract_job_started", max_attempts=self._max_attempts)

        while not job.state.is_terminal:
            await self._sleep(self._interval)
            job = job.model_copy(update={"attempt": job.attempt + 1})
            page = await self._ocr.get_text_detection(job_id)
            job = advance(job, page, self._max_attempts)
            log.debug(
                "textract_job_polled",
                attempt=job.attempt,
                backend_status=page.status.value,
                state=job.state.value,
            )

            if job.state == OCRJobState.SUCCEEDED:
                lines = await self._collect_lines(job_id, page)
                log.info("textract_job_succeeded", attempts=job.attempt, lines=len(lines))
                return " ".join(lines)

            if job.state == OCRJobState.FAILED:
                log.error("textract_job_failed", attempts=job.attempt, detail=page.status_message)
                raise OCRExtractionError(
                    message=MSG_OCR_FAILED,
                    provider_name=self._ocr.get_provider_name(),
                    state=OCRJobState.FAILED.value,
                )

        log.error("textract_job_timed_out", attempts=job.attempt)
        raise OCRExtractionError(
            message=MSG_OCR_TIMED_OUT,
            provider_name=self._ocr.get_provider_name(),
            state=OCRJobState.TIMED_OUT.value,
        )

    async def _collect_lines(self, job_id: str, first_page: TextDetectionPage) -> list[str]:
        """Gather LINE text from *first_page* and every following result page."""
        lines = list(first_page.lines)
        next_token = first_page.next_token
        pages = 1
        while next_token and pages < _MAX_RESULT_PAGES:
            page = await self._ocr.get_text_detection(job_id, next_token=next_token)
            lines.extend(page.lines)
            next_token = page.next_token
            pages += 1
        return lines
