"""Gate between fetched text and anything that is cached or returned."""

import re
from dataclasses import dataclass

from screening.citations.models import Jurisdiction
from screening.statutes.models import ValidationResult

# Multi-word phrases only: single words such as "search", "home" or "contact"
# also occur in statutes ("search warrant", "home detention").
CRITICAL_NAV_PHRASES: tuple[str, ...] = (
    "skip to content",
    "skip to main content",
    "skip to navigation",
    "skip navigation",
    "accessibility settings",
    "use the settings button",
    "all legislators",
    "find legislators",
    "view bills",
    "find a bill",
    "utah state legislature",
    "main navigation",
    "site navigation",
    "navigation menu",
    "main menu",
    "site menu",
    "my account",
    "site map",
    "privacy policy",
    "terms of use",
    "house bills",
    "senate bills",
    "quick links",
    "download as pdf",
    "download as rtf",
    "select a title from",
    "select a chapter from",
    "browse by title",
    "browse by chapter",
    "click to view",
    "click to download",
    "click to expand",
    "expand all sections",
    "collapse all sections",
    "legislative calendar",
    "bill status",
    "bill tracking",
)

NAVIGATION_KEYWORDS: tuple[str, ...] = (
    "find a bill",
    "house bills",
    "senate bills",
    "session information",
    "legislative meetings",
    "interim meetings",
    "utah state legislature",
    "bills, memorials",
    "quick links",
    "legislative schedule",
    "skip to content",
    "main navigation",
    "site navigation",
    "all legislators",
    "find legislators",
    "keyword search",
    "browse by",
)
MAX_NAVIGATION_KEYWORDS = 2

SUBSECTION_MARKER = re.compile(r"\(\d+\)|\([a-z]\)|\([ivx]+\)", re.IGNORECASE)


@dataclass(frozen=True)
class JurisdictionRules:
    min_length: int
    require_subsection_markers: bool


DEFAULT_RULES: dict[Jurisdiction, JurisdictionRules] = {
    Jurisdiction.UTAH: JurisdictionRules(min_length=400, require_subsection_markers=True),
    Jurisdiction.WEST_VALLEY_CITY: JurisdictionRules(
        min_length=100, require_subsection_markers=False
    ),
}


class ContentValidator:
    """Decides whether text is statute content or website chrome."""

    def __init__(self, rules: dict[Jurisdiction, JurisdictionRules] | None = None) -> None:
        self._rules = rules if rules is not None else DEFAULT_RULES

    def validate(self, jurisdiction: Jurisdiction, text: str | None) -> ValidationResult:
        rules = self._rules[jurisdiction]
        length = len(text or "")
        if not text or length < rules.min_length:
            return ValidationResult(
                False, f"Text too short (<{rules.min_length} chars, got {length})"
            )

        lowered = text.lower()
        for phrase in CRITICAL_NAV_PHRASES:
            if phrase in lowered:
                return ValidationResult(False, f"Contains navigation phrase: '{phrase}'")

        keyword_hits = sum(1 for keyword in NAVIGATION_KEYWORDS if keyword in lowered)
        if keyword_hits > MAX_NAVIGATION_KEYWORDS:
            return ValidationResult(False, f"Contains {keyword_hits} navigation keywords")

        if rules.require_subsection_markers and not SUBSECTION_MARKER.search(text):
            return ValidationResult(
                False, "Missing required subsection markers like (1), (a), (i)"
            )
        return ValidationResult(True)

    def is_valid(self, jurisdiction: Jurisdiction, text: str | None) -> bool:
        return self.validate(jurisdiction, text).valid
