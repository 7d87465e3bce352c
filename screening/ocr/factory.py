import json

from screening.config.settings import Settings
from screening.logging.logger import Log
from screening.ocr.base import BaseOcrAdapter
from screening.ocr.document_ai_adapter import DocumentAiAdapter
from screening.ocr.exceptions import OcrConfigurationError
from screening.ocr.gemini_adapter import GeminiOcrAdapter
from screening.ocr.models import (
    DocumentOcrProvider,
    LanguageModelOcrProvider,
    NoOcrProvider,
    OcrProviderChoice,
    VisionApiProvider,
)
from screening.ocr.vision_adapter import VisionApiAdapter

SERVICE_ACCOUNT_REQUIRED_KEYS = ("client_email", "private_key", "token_uri")


def is_usable_service_account(raw: str) -> bool:
    """True when the JSON parses to an object with the keys google-auth needs."""
    try:
        info = json.loads(raw)
    except ValueError:
        return False
    return isinstance(info, dict) and all(info.get(key) for key in SERVICE_ACCOUNT_REQUIRED_KEYS)


def resolve_ocr_provider(settings: Settings) -> OcrProviderChoice:
    """Pick the OCR provider for this run; the first satisfied rule wins.

    1. Document AI when none other is requested and all four credentials are set
       and the service account JSON is usable.
    2. Gemini when its API key and base URL are set.
    3. Cloud Vision when its API key is set and no other provider is requested.
    4. No OCR.
    """
    requested = settings.ocr_provider.strip().lower()
    document_ai_fields = (
        settings.document_ai_project_id,
        settings.document_ai_location,
        settings.document_ai_processor_id,
        settings.document_ai_service_account_json,
    )
    document_ai_configured = requested in ("", "document_ai") and all(
        f.strip() for f in document_ai_fields
    )
    if document_ai_configured and not is_usable_service_account(
        settings.document_ai_service_account_json
    ):
        Log.warning("Document AI service account JSON is invalid, skipping Document AI OCR")
        document_ai_configured = False
    if document_ai_configured:
        return DocumentOcrProvider(
            project_id=settings.document_ai_project_id.strip(),
            location=settings.document_ai_location.strip(),
            processor_id=settings.document_ai_processor_id.strip(),
            service_account_json=settings.document_ai_service_account_json,
            max_pages_per_request=settings.document_ai_max_pages_per_request,
        )
    if (
        settings.ai_integrations_gemini_api_key.strip()
        and settings.ai_integrations_gemini_base_url.strip()
    ):
        return LanguageModelOcrProvider(
            api_key=settings.ai_integrations_gemini_api_key.strip(),
            base_url=settings.ai_integrations_gemini_base_url.strip(),
            model=settings.gemini_ocr_model,
            max_bytes=settings.gemini_ocr_max_bytes,
        )
    if requested in ("", "google_vision") and settings.google_vision_api_key.strip():
        return VisionApiProvider(
            api_key=settings.google_vision_api_key.strip(),
            timeout_seconds=settings.google_vision_timeout_seconds,
        )
    return NoOcrProvider()


class OcrAdapterFactory:
    """Builds the adapter that serves a resolved provider choice."""

    @classmethod
    def create(cls, provider: OcrProviderChoice) -> BaseOcrAdapter | None:
        if isinstance(provider, DocumentOcrProvider):
            try:
                return DocumentAiAdapter(provider)
            except OcrConfigurationError as exc:
                Log.warning(f"Document AI OCR disabled: {exc}")
                return None
        if isinstance(provider, LanguageModelOcrProvider):
            return GeminiOcrAdapter(provider)
        if isinstance(provider, VisionApiProvider):
            return VisionApiAdapter(provider)
        return None
