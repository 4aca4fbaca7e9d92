"""OCR provider implementations for PDF text extraction.

One implementation of IOCRProvider:
    TextractOCRProvider — AWS Textract asynchronous text detection. Reads
    the PDF straight from S3, so the file must be uploaded first.  The
    polling loop lives in src/services/ingestion/textract_poller.py.
"""

from src.providers.ocr.textract_provider import TextractOCRProvider

__all__ = ["TextractOCRProvider"]
