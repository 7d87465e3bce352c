"""OCR provider selection, resolved once per process from settings."""

from dataclasses import dataclass
from enum import Enum


class OcrProviderKind(str, Enum):
    NONE = "none"
    VISION_API = "vision_api"
    LANGUAGE_MODEL = "language_model"
    DOCUMENT_OCR = "document_ocr"


@dataclass(frozen=True)
class NoOcrProvider:
    kind: OcrProviderKind = OcrProviderKind.NONE


@dataclass(frozen=True)
class VisionApiProvider:
    api_key: str
    timeout_seconds: int = 60
    kind: OcrProviderKind = OcrProviderKind.VISION_API


@dataclass(frozen=True)
class LanguageModelOcrProvider:
    api_key: str
    base_url: str
    model: str = "gemini-2.5-flash"
    max_bytes: int = 7 * 1024 * 1024
    kind: OcrProviderKind = OcrProviderKind.LANGUAGE_MODEL


@dataclass(frozen=True)
class DocumentOcrProvider:
    project_id: str
    location: str
    processor_id: str
    service_account_json: str
    max_pages_per_request: int = 30
    kind: OcrProviderKind = OcrProviderKind.DOCUMENT_OCR


OcrProviderChoice = (
    NoOcrProvider | VisionApiProvider | LanguageModelOcrProvider | DocumentOcrProvider
)
