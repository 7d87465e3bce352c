"""Language-model OCR: the PDF is sent inline to a Gemini model."""

import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from screening.logging.logger import Log
from screening.ocr.base import BaseOcrAdapter
from screening.ocr.exceptions import OcrError, OcrNetworkError, OcrRateLimitedError
from screening.ocr.models import LanguageModelOcrProvider

OCR_PROMPT = """Extract ALL text from this legal document PDF. Focus on:
- Case number (format: "Case #: XXXX-XXXXX" or "Case XXXX-XXXXX"), usually in the first page header
- Defendant name (format: "Last, First" or "First Last")
- Criminal charges and code citations (Utah Code XX-X-XXX, West Valley City Code)
- Criminal history sections with prior arrests/convictions
- Officer narratives
- "Booked Into Jail: Yes/No" field

Return ONLY the extracted text, preserving the case number and defendant name exactly as they appear."""


class GeminiOcrAdapter(BaseOcrAdapter):
    name = "gemini"

    def __init__(
        self,
        provider: LanguageModelOcrProvider,
        client: genai.Client | None = None,
    ) -> None:
        self._provider = provider
        self._client = client if client is not None else genai.Client(
            api_key=provider.api_key,
            http_options=types.HttpOptions(base_url=provider.base_url, api_version=""),
        )

    def ocr(self, pdf_bytes: bytes) -> str:
        if len(pdf_bytes) > self._provider.max_bytes:
            size_mb = len(pdf_bytes) / (1024 * 1024)
            Log.warning(f"PDF too large for inline OCR ({size_mb:.2f} MB), skipping")
            return ""

        contents = [
            types.Content(
                role="user",
                parts=[
                    types.Part.from_text(text=OCR_PROMPT),
                    types.Part.from_bytes(data=pdf_bytes, mime_type="application/pdf"),
                ],
            )
        ]
        try:
            response = self._client.models.generate_content(
                model=self._provider.model,
                contents=contents,
            )
        except genai_errors.APIError as exc:
            if exc.code == 429:
                raise OcrRateLimitedError(f"Gemini OCR rate limited: {exc}") from exc
            raise OcrError(f"Gemini OCR failed: {exc}") from exc
        except httpx.HTTPError as exc:
            raise OcrNetworkError(f"Gemini OCR network error: {exc}") from exc
        return (response.text or "").strip()
