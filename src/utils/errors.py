"""Custom exception hierarchy for the knowledge-base console.

All application exceptions inherit from :class:`KnowledgeBaseError`, which
carries an optional ``provider_name`` so error handlers can identify which
external service (e.g. "openai", "textract", "document_db") caused the
failure.

    KnowledgeBaseError  (base)
    +-- ConfigurationError       (endpoint / credential unset at call time)
    +-- IngestionError           (PDF / URL / video ingestion failed)
    |   +-- OCRExtractionError   (Textract job failed or timed out)
    +-- SearchError              (keyword or vector search call failed)
    +-- LLMError                 (language-model call failed)
    +-- DocumentStoreError       (remote document database call failed)
    +-- InvalidInputError        (missing or malformed request field, 400)

Nothing in this hierarchy is retried automatically.  Routes let these
propagate to :class:`src.api.middleware.ErrorHandlingMiddleware`, which
logs them and returns a sanitized JSON body.
"""

from __future__ import annotations


class KnowledgeBaseError(Exception):
    """Base exception for all knowledge-base console errors.

    ``__str__`` prefixes the provider name in brackets for log output,
    e.g. ``[textract] Document processing took too long``.
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        provider_name: str | None = None,
    ) -> None:
        self._message = message
        self._provider_name = provider_name
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def provider_name(self) -> str | None:
        return self._provider_name

    def __str__(self) -> str:
        if self._provider_name:
            return f"[{self._provider_name}] {self._message}"
        return self._message


class ConfigurationError(KnowledgeBaseError):
    """Raised when a required endpoint or credential is not configured."""

    def __init__(
        self,
        message: str = "Invalid or missing configuration",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Ingestion
# ---------------------------------------------------------------------------

class IngestionError(KnowledgeBaseError):
    """Raised when an ingestion adapter cannot produce a document."""

    def __init__(
        self,
        message: str = "Document ingestion failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class OCRExtractionError(IngestionError):
    """Raised when the OCR job ends in ``failed`` or ``timed_out``.

    ``state`` holds the terminal poller state so callers can tell a
    backend failure from an exhausted attempt budget.
    """

    def __init__(
        self,
        message: str = "OCR text extraction failed",
        provider_name: str | None = None,
        state: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)
        self._state = state

    @property
    def state(self) -> str | None:
        return self._state


# ---------------------------------------------------------------------------
# Search / LLM
# ---------------------------------------------------------------------------

class SearchError(KnowledgeBaseError):
    """Raised when a keyword or vector search provider call fails."""

    def __init__(
        self,
        message: str = "Search request failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class LLMError(KnowledgeBaseError):
    """Raised when an LLM API call fails or returns an unusable response."""

    def __init__(
        self,
        message: str = "LLM API call failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Document store / availability
# ---------------------------------------------------------------------------

class DocumentStoreError(KnowledgeBaseError):
    """Raised when the remote document database rejects or fails a call.

    ``status_code`` is the upstream HTTP status when one was received, so
    client errors (e.g. 404 on an unknown id) can be passed through.
    """

    def __init__(
        self,
        message: str = "Document database request failed",
        provider_name: str | None = "document_db",
        status_code: int | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)
        self._status_code = status_code

    @property
    def status_code(self) -> int | None:
        return self._status_code


class InvalidInputError(KnowledgeBaseError):
    """Raised when a caller omits or malforms a required field.

    The error middleware answers these with 400 instead of 500; nothing
    has touched an external service yet when one is raised.
    """

    def __init__(
        self,
        message: str = "Invalid request",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)
