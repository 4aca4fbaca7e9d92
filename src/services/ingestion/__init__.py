"""Ingestion adapters: raw input → normalized ExtractedDocument.

Three entry points, one per input form:

1. **PDF** (pdf_ingestion.py / PdfIngestionAdapter) -- upload to S3,
   run Textract text detection, poll it to completion
   (textract_poller.py / TextractJobPoller), join the LINE blocks.

2. **URL** (web_ingestion.py / UrlIngestionAdapter) -- delegate to the
   scraping service.

3. **Video** (web_ingestion.py / VideoIngestionAdapter) -- delegate to
   the transcript service.

None of them persist anything in the document database; the dashboard
reviews the result and POSTs it to /api/documents.
"""

from src.services.ingestion.pdf_ingestion import PdfIngestionAdapter, build_object_key
from src.services.ingestion.textract_poller import TextractJobPoller
from src.services.ingestion.web_ingestion import UrlIngestionAdapter, VideoIngestionAdapter

__all__ = [
    "PdfIngestionAdapter",
    "TextractJobPoller",
    "UrlIngestionAdapter",
    "VideoIngestionAdapter",
    "build_object_key",
]
