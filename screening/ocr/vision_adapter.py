"""Page-by-page OCR through the Google Cloud Vision REST API."""

import base64
from typing import Any

import httpx

from screening.logging.logger import Log
from screening.ocr.base import BaseOcrAdapter
from screening.ocr.document_ai_adapter import PAGE_BREAK
from screening.ocr.exceptions import OcrError, OcrNetworkError, OcrRateLimitedError
from screening.ocr.models import VisionApiProvider
from screening.pdf.exceptions import PdfPageError
from screening.pdf.pages import render_pages_png

VISION_ENDPOINT = "https://vision.googleapis.com/v1/images:annotate"


class VisionApiAdapter(BaseOcrAdapter):
    name = "google_vision"

    def __init__(
        self,
        provider: VisionApiProvider,
        http_client: httpx.Client | None = None,
    ) -> None:
        self._provider = provider
        self._http = http_client if http_client is not None else httpx.Client(
            timeout=provider.timeout_seconds
        )

    def ocr(self, pdf_bytes: bytes) -> str:
        try:
            pages = render_pages_png(pdf_bytes)
        except PdfPageError as exc:
            raise OcrError(f"Vision OCR pre-processing failed: {exc}") from exc
        texts = [self.ocr_png(png) for png in pages]
        Log.debug(f"Vision OCR read {len(pages)} pages")
        return PAGE_BREAK.join(text for text in texts if text)

    def ocr_png(self, png_bytes: bytes) -> str:
        body = {
            "requests": [
                {
                    "image": {"content": base64.b64encode(png_bytes).decode("ascii")},
                    "features": [{"type": "TEXT_DETECTION"}],
                }
            ]
        }
        try:
            response = self._http.post(
                VISION_ENDPOINT,
                params={"key": self._provider.api_key},
                json=body,
            )
        except httpx.HTTPError as exc:
            raise OcrNetworkError(f"Vision API network error: {exc}") from exc

        if response.status_code == 429:
            raise OcrRateLimitedError("Vision API rate limited")
        if response.status_code >= 400:
            raise OcrError(f"Vision API HTTP {response.status_code}")
        try:
            payload = response.json()
        except ValueError as exc:
            raise OcrError(f"Vision API returned a non-JSON body: {exc}") from exc
        return self._read_text(payload)

    @staticmethod
    def _read_text(payload: dict[str, Any]) -> str:
        responses = payload.get("responses") or [{}]
        first = responses[0] or {}
        if "error" in first:
            raise OcrError(f"Vision API error: {first['error'].get('message', '')}")
        full = (first.get("fullTextAnnotation") or {}).get("text")
        if full:
            return str(full).strip()
        annotations = first.get("textAnnotations") or []
        if annotations:
            return str(annotations[0].get("description", "")).strip()
        return ""
