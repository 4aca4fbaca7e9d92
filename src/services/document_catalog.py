"""Document listing with optional chunk enrichment.

Plain listing is a straight pass-through to the document database.  With
``include_chunks`` every document's history is fetched concurrently and
attached as ``chunks``; a failed history fetch degrades to an empty list
instead of failing the whole listing.
"""

from __future__ import annotations

from typing import Any

import structlog

from src.interfaces.document_store import IDocumentStore
from src.utils.concurrency import settled_values
from src.utils.logging import get_logger

logger: structlog.BoundLogger = get_logger(__name__)

# Embedding vectors are large and useless to the dashboard table.
_DROPPED_CHUNK_FIELDS = frozenset({"chunk_embedding", "embedding"})


def _slim_chunk(chunk: Any) -> Any:
    if not isinstance(chunk, dict):
        return chunk
    return {k: v for k, v in chunk.items() if k not in _DROPPED_CHUNK_FIELDS}


class DocumentCatalog:
    """Read-side view over :class:`IDocumentStore` for the dashboard table."""

    def __init__(self, store: IDocumentStore) -> None:
        self._store = store

    async def list_documents(self, include_chunks: bool = False) -> list[dict[str, Any]]:
        documents = await self._store.list_documents()
        if not include_chunks or not documents:
            return documents

        with_ids = [doc for doc in documents if isinstance(doc, dict) and doc.get("id") is not None]
        histories = await settled_values(
            self._store.document_history,
            [{"document_id": str(doc["id"])} for doc in with_ids],
            default=list,
            logger=logger,
            error_msg="document_history_failed",
        )
        chunks_by_id = {
            str(doc["id"]): [_slim_chunk(c) for c in history]
            for doc, history in zip(with_ids, histories)
        }

        enriched = []
        for doc in documents:
            if isinstance(doc, dict):
                doc_id = doc.get("id")
                doc = {**doc, "chunks": chunks_by_id.get(str(doc_id), [])}
            enriched.append(doc)

        logger.info("documents_listed", count=len(enriched), include_chunks=True)
        return enriched
