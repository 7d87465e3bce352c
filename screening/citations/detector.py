"""Finds statute and ordinance citations in merged text."""

import re

from screening.citations.models import Citation, Jurisdiction

_DASH = r"\s*[-–—]\s*"
_CITATION = re.compile(
    rf"\b(\d{{1,3}}[A-Za-z]?){_DASH}(\d{{1,4}}[A-Za-z]?){_DASH}(\d{{1,4}}(?:\.\d+)?)\b"
)
_MUNICIPAL_HINTS = ("west valley", "wvc")
CONTEXT_WINDOW = 80
MAX_TITLE = 99


def normalize_key(title: str, chapter: str, section: str) -> str:
    """Canonical ``TITLE-chapter-section`` form, e.g. ``58-37a-5`` or ``78B-7-603``."""
    return f"{title.upper()}-{chapter.lower()}-{section}"


def looks_like_date(title: str, chapter: str, section: str) -> bool:
    """True for MM-DD-YYYY shaped numbers that OCR turns into code-like tokens."""
    if not (title.isdigit() and chapter.isdigit() and section.isdigit()):
        return False
    return (
        1 <= int(title) <= 12
        and 1 <= int(chapter) <= 31
        and len(section) == 4
        and 1900 <= int(section) <= 2099
    )


class CitationDetector:
    """Scans text for ``T-C-S`` citations and tags their jurisdiction.

    A citation is municipal (WVC) when West Valley City is mentioned within
    80 characters of it, otherwise state (UT). Results are in document order
    and unique per ``(jurisdiction, normalized_key)``.
    """

    def detect(self, text: str) -> list[Citation]:
        seen: set[tuple[str, str]] = set()
        citations: list[Citation] = []
        for match in _CITATION.finditer(text or ""):
            title, chapter, section = match.groups()
            if not self._plausible(title, chapter, section):
                continue
            citation = Citation(
                raw=match.group(0),
                normalized_key=normalize_key(title, chapter, section),
                jurisdiction=self._jurisdiction(text, match.start(), match.end()),
            )
            if citation.cache_key in seen:
                continue
            seen.add(citation.cache_key)
            citations.append(citation)
        return citations

    @staticmethod
    def _plausible(title: str, chapter: str, section: str) -> bool:
        title_digits = re.match(r"\d+", title)
        if title_digits is None or int(title_digits.group(0)) > MAX_TITLE:
            return False
        return not looks_like_date(title, chapter, section)

    @staticmethod
    def _jurisdiction(text: str, start: int, end: int) -> Jurisdiction:
        window = text[max(0, start - CONTEXT_WINDOW) : end + CONTEXT_WINDOW].lower()
        if any(hint in window for hint in _MUNICIPAL_HINTS):
            return Jurisdiction.WEST_VALLEY_CITY
        return Jurisdiction.UTAH
