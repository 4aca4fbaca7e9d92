"""HTTP adapter for the remote document database.

Every call carries ``Authorization: Bearer <SECURITY_TOKEN>`` and JSON
content type.  Non-success statuses become :class:`DocumentStoreError`
with the upstream status code and reason phrase attached, so the API
layer can pass 4xx answers through unchanged.

# ─── REMOTE ENDPOINTS ───────────────────────────────────────────────
#
#   GET    /documents                  list all documents
#   POST   /documents                  create
#   GET    /documents/{id}             fetch one
#   PUT    /documents/{id}             update
#   DELETE /documents/{id}             soft-delete
#   GET    /documents/{id}/history     stored chunks
#   GET    /documents/exist?source=    existence check
# ─────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from typing import Any

import httpx
import structlog

from src.config.settings import Settings
from src.interfaces.document_store import IDocumentStore
from src.models.document import ExistenceCheck
from src.utils.errors import ConfigurationError, DocumentStoreError
from src.utils.json_parsing import tolerant_json

logger = structlog.get_logger(logger_name=__name__)

MSG_CAN_INGEST = "Document can be ingested."
MSG_REACTIVATE = "This document was previously deleted. Do you want to reactivate it?"
MSG_ALREADY_INGESTED = "This document has already been ingested."


def bearer_headers(token: str) -> dict[str, str]:
    """Headers shared by every call to the document database."""
    return {
        "Content-Type": "application/json",
        "Authorization": f"Bearer {token}",
    }


class HttpDocumentStore(IDocumentStore):
    """Thin authenticated proxy to the document database."""

    def __init__(self, settings: Settings, http_client: httpx.AsyncClient) -> None:
        self._base_url = settings.document_db_url.rstrip("/")
        self._token = settings.security_token
        self._client = http_client

    # ------------------------------------------------------------------
    # Internal request helper
    # ------------------------------------------------------------------

    async def _request(
        self,
        method: str,
        path: str,
        *,
        action: str,
        json_body: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> httpx.Response:
        if not self.is_available():
            raise ConfigurationError(
                message="Missing database configuration",
                provider_name="document_db",
            )

        url = f"{self._base_url}{path}"
        try:
            response = await self._client.request(
                method,
                url,
                headers=bearer_headers(self._token),
                json=json_body,
                params=params,
            )
        except httpx.HTTPError as exc:
            raise DocumentStoreError(message=f"Failed to {action}: {exc}") from exc

        logger.debug("document_db_response", method=method, path=path, status=response.status_code)
        if response.is_error:
            detail = response.reason_phrase
            if response.status_code >= 400 and response.text:
                detail = response.text.strip() or detail
            raise DocumentStoreError(
                message=f"Failed to {action}: {detail}",
                status_code=response.status_code,
            )
        return response

    @staticmethod
    def _json(response: httpx.Response, *, action: str) -> Any:
        parsed = tolerant_json(response.content)
        if not parsed.ok:
            raise DocumentStoreError(message=f"Failed to {action}: invalid JSON from database")
        return parsed.value

    # ------------------------------------------------------------------
    # IDocumentStore implementation
    # ------------------------------------------------------------------

    async def list_documents(self) -> list[dict[str, Any]]:
        response = await self._request("GET", "/documents", action="fetch documents")
        parsed = tolerant_json(response.content, expect=list)
        return parsed.value if parsed.ok else []

    async def get_document(self, document_id: str) -> dict[str, Any]:
        response = await self._request(
            "GET", f"/documents/{document_id}", action="fetch document"
        )
        return self._json(response, action="fetch document")

    async def create_document(self, body: dict[str, Any]) -> dict[str, Any]:
        response = await self._request(
            "POST", "/documents", action="create document", json_body=body
        )
        created = self._json(response, action="create document")
        logger.info("document_created", source=body.get("source"))
        return created

    async def update_document(self, document_id: str, body: dict[str, Any]) -> None:
        await self._request(
            "PUT", f"/documents/{document_id}", action="update document", json_body=body
        )
        logger.info("document_updated", document_id=document_id)

    async def delete_document(self, document_id: str) -> None:
        await self._request("DELETE", f"/documents/{document_id}", action="delete document")
        logger.info("document_deleted", document_id=document_id)

    async def document_history(self, document_id: str) -> list[dict[str, Any]]:
        response = await self._request(
            "GET", f"/documents/{document_id}/history", action="fetch chunks"
        )
        data = self._json(response, action="fetch chunks")
        return data if isinstance(data, list) else []

    async def check_exists(self, source: str) -> ExistenceCheck:
        response = await self._request(
            "GET",
            "/documents/exist",
            action="check document existence",
            params={"source": source},
        )
        data = self._json(response, action="check document existence")
        if not isinstance(data, dict) or not data.get("exists"):
            return ExistenceCheck(exists=False, message=MSG_CAN_INGEST)

        document = data.get("document")
        if not isinstance(document, dict):
            document = {}
        doc_id = document.get("id")
        document_id = str(doc_id) if doc_id is not None else None
        if document.get("status") == "deleted":
            return ExistenceCheck(
                exists=True,
                reactivation=True,
                message=MSG_REACTIVATE,
                document_id=document_id,
            )
        return ExistenceCheck(
            exists=True,
            reactivation=False,
            message=MSG_ALREADY_INGESTED,
            document_id=document_id,
        )

    def is_available(self) -> bool:
        return bool(self._base_url and self._token)
