"""Structured-document OCR through Google Document AI."""

import json

from google.api_core import exceptions as google_exceptions
from google.api_core.client_options import ClientOptions
from google.cloud import documentai
from google.oauth2 import service_account

from screening.logging.logger import Log
from screening.ocr.base import BaseOcrAdapter
from screening.ocr.exceptions import (
    OcrConfigurationError,
    OcrError,
    OcrNetworkError,
    OcrRateLimitedError,
)
from screening.ocr.models import DocumentOcrProvider
from screening.pdf.exceptions import PdfPageError
from screening.pdf.pages import split_into_chunks

PAGE_BREAK = "\n\n--- Page Break ---\n\n"
PDF_MIME_TYPE = "application/pdf"


class DocumentAiAdapter(BaseOcrAdapter):
    """Sends page-range chunks to a Document AI processor and joins the text.

    Large documents are cut into consecutive sub-documents of at most
    ``max_pages_per_request`` pages so each request stays within the
    processor's page limit.
    """

    name = "document_ai"

    def __init__(
        self,
        provider: DocumentOcrProvider,
        client: documentai.DocumentProcessorServiceClient | None = None,
    ) -> None:
        self._provider = provider
        self._client = client if client is not None else self._build_client(provider)
        self._processor_name = self._client.processor_path(
            provider.project_id, provider.location, provider.processor_id
        )

    @staticmethod
    def _build_client(
        provider: DocumentOcrProvider,
    ) -> documentai.DocumentProcessorServiceClient:
        try:
            info = json.loads(provider.service_account_json)
            credentials = service_account.Credentials.from_service_account_info(info)
        except (ValueError, KeyError) as exc:
            raise OcrConfigurationError(
                f"Invalid Document AI service account JSON: {exc}"
            ) from exc
        return documentai.DocumentProcessorServiceClient(
            credentials=credentials,
            client_options=ClientOptions(
                api_endpoint=f"{provider.location}-documentai.googleapis.com"
            ),
        )

    def ocr(self, pdf_bytes: bytes) -> str:
        try:
            chunks = split_into_chunks(pdf_bytes, self._provider.max_pages_per_request)
        except PdfPageError as exc:
            raise OcrError(f"Document AI pre-processing failed: {exc}") from exc

        if len(chunks) > 1:
            Log.info(
                f"Document AI: splitting {chunks[-1].last_page} pages into "
                f"{len(chunks)} requests"
            )
        texts = []
        for chunk in chunks:
            text = self._process_chunk(chunk.pdf_bytes)
            Log.debug(
                f"Document AI pages {chunk.first_page}-{chunk.last_page}: {len(text)} chars"
            )
            texts.append(text)
        return PAGE_BREAK.join(text for text in texts if text)

    def _process_chunk(self, pdf_bytes: bytes) -> str:
        request = documentai.ProcessRequest(
            name=self._processor_name,
            raw_document=documentai.RawDocument(content=pdf_bytes, mime_type=PDF_MIME_TYPE),
        )
        try:
            result = self._client.process_document(request=request)
        except google_exceptions.TooManyRequests as exc:
            raise OcrRateLimitedError(f"Document AI rate limited: {exc}") from exc
        except google_exceptions.GoogleAPICallError as exc:
            raise OcrNetworkError(f"Document AI request failed: {exc}") from exc
        except google_exceptions.RetryError as exc:
            raise OcrNetworkError(f"Document AI retries exhausted: {exc}") from exc
        return (result.document.text or "").strip()
