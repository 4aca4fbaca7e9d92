"""OCR job models for the asynchronous PDF text-detection path.

A :class:`TextractJob` exists only for the duration of one ingestion
call.  The poller moves it through::

    STARTED ──▶ POLLING ──▶ SUCCEEDED
                   │  ╰───▶ FAILED
                   ╰──────▶ TIMED_OUT   (attempt budget exhausted)
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class BackendJobStatus(str, Enum):
    """Status values reported by the OCR backend."""

    IN_PROGRESS = "IN_PROGRESS"
    SUCCEEDED = "SUCCEEDED"
    FAILED = "FAILED"
    PARTIAL_SUCCESS = "PARTIAL_SUCCESS"


class OCRJobState(str, Enum):
    """Local poller state."""

    STARTED = "started"
    POLLING = "polling"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    TIMED_OUT = "timed_out"

    @property
    def is_terminal(self) -> bool:
        return self in (OCRJobState.SUCCEEDED, OCRJobState.FAILED, OCRJobState.TIMED_OUT)


class TextractJob(BaseModel):
    """Ephemeral polling handle for one OCR job."""

    model_config = ConfigDict(frozen=True)

    job_id: str = Field(min_length=1)
    state: OCRJobState = OCRJobState.STARTED
    attempt: int = Field(default=0, ge=0)
    backend_status: BackendJobStatus | None = None


class TextDetectionPage(BaseModel):
    """One page of a text-detection result as returned by the OCR provider."""

    model_config = ConfigDict(frozen=True)

    status: BackendJobStatus
    lines: list[str] = Field(default_factory=list)
    next_token: str | None = None
    status_message: str | None = None
