"""Decides when to OCR a document and which text survives."""

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum

from screening.logging.logger import Log
from screening.ocr.base import BaseOcrAdapter
from screening.ocr.exceptions import OcrError
from screening.ocr.models import OcrProviderChoice, OcrProviderKind
from screening.quality.models import TextQualityVerdict
from screening.quality.sanitize import sanitize_text

MIN_USABLE_CHARS = 200


class TextSource(str, Enum):
    EXTRACTED = "extracted"
    OCR = "ocr"


@dataclass(frozen=True)
class TextCandidates:
    """Sanitized naive text and OCR text competing for one document."""

    extracted: str
    ocr: str
    verdict: TextQualityVerdict


@dataclass(frozen=True)
class SelectionRule:
    name: str
    applies: Callable[[TextCandidates], bool]
    source: TextSource


def _garbled_with_usable_ocr(c: TextCandidates) -> bool:
    return c.verdict.garbled and len(c.ocr) > MIN_USABLE_CHARS


def _short_extraction_with_usable_ocr(c: TextCandidates) -> bool:
    return len(c.ocr) > MIN_USABLE_CHARS and len(c.extracted) < MIN_USABLE_CHARS


# Evaluated in order; the first rule that applies picks the text.
SELECTION_RULES: tuple[SelectionRule, ...] = (
    SelectionRule("garbled_extraction", _garbled_with_usable_ocr, TextSource.OCR),
    SelectionRule("short_extraction", _short_extraction_with_usable_ocr, TextSource.OCR),
    SelectionRule("keep_extraction", lambda c: True, TextSource.EXTRACTED),
)


class OcrOrchestrator:
    """Runs OCR for garbled documents and reconciles it with the naive text.

    The adapters are tried in order until one returns text; every failure is
    logged and absorbed so a bad document never stops a batch.
    """

    def __init__(
        self,
        provider: OcrProviderChoice,
        adapters: Sequence[BaseOcrAdapter] = (),
        rules: Sequence[SelectionRule] = SELECTION_RULES,
    ) -> None:
        self._provider = provider
        self._adapters = tuple(adapters)
        self._rules = tuple(rules)

    @property
    def enabled(self) -> bool:
        return self._provider.kind != OcrProviderKind.NONE and bool(self._adapters)

    def ocr(self, pdf_bytes: bytes) -> str:
        """Return OCR text or an empty string; never raises for backend failures."""
        for adapter in self._adapters:
            try:
                text = adapter.ocr(pdf_bytes)
            except OcrError as exc:
                Log.warning(f"OCR via {adapter.name} failed: {exc}")
                continue
            except Exception as exc:
                Log.warning(f"OCR via {adapter.name} failed unexpectedly: {exc!r}")
                continue
            if text:
                Log.info(f"OCR via {adapter.name} extracted {len(text)} chars")
                return text
            Log.warning(f"OCR via {adapter.name} returned no text")
        return ""

    def ocr_if_needed(self, pdf_bytes: bytes, verdict: TextQualityVerdict) -> str:
        if not verdict.garbled or not self.enabled:
            return ""
        Log.info(
            "Extracted text looks garbled, running OCR",
            provider=self._provider.kind.value,
            reasons=",".join(verdict.reasons),
        )
        return self.ocr(pdf_bytes)

    def choose(
        self,
        extracted_text: str,
        ocr_text: str,
        verdict: TextQualityVerdict,
    ) -> tuple[str, TextSource]:
        """Pick the sanitized text that survives for this document."""
        candidates = TextCandidates(
            extracted=sanitize_text(extracted_text),
            ocr=sanitize_text(ocr_text),
            verdict=verdict,
        )
        for rule in self._rules:
            if rule.applies(candidates):
                Log.debug(f"Text selection rule '{rule.name}' chose {rule.source.value}")
                if rule.source is TextSource.OCR:
                    return candidates.ocr, TextSource.OCR
                return candidates.extracted, TextSource.EXTRACTED
        return candidates.extracted, TextSource.EXTRACTED
