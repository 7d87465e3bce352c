"""Officer narrative and case synopsis extraction."""

import re

from screening.extraction.layout import DocumentLayout
from screening.extraction.sections import SectionScanner

SYNOPSIS_MIN_CHARS = 20
SYNOPSIS_MAX_CHARS = 5000
SYNOPSIS_PREVIEW_CHARS = 800
NARRATIVE_FALLBACK_CHARS = 12000

_SECTION_LOOKAHEAD = (
    r"(?=OFFICER['’]?S\s+ACTIONS|EVIDENCE|WITNESSES|ADDITIONAL\s+INFO|PROPERTY|"
    r"VEHICLES?|SUSPECTS?|VICTIMS?|NARRATIVE|CASE\s+STATUS|\Z)"
)
_RECORD_LOOKAHEAD = r"(?=OFFICER['’]?S\s+ACTIONS|EVIDENCE|WITNESSES|NARRATIVE|\Z)"

# Applied in order; each removes one shape of prior-record content.
CRIMINAL_HISTORY_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"Criminal\s+History\s*:\s*[\s\S]*?" + _SECTION_LOOKAHEAD, re.IGNORECASE),
    re.compile(r"^.*Criminal\s+History\s*[-–:].*$", re.IGNORECASE | re.MULTILINE),
    re.compile(r"^[ \t]*\d+\s+arrests?\.?\s*Convictions?:.*$", re.IGNORECASE | re.MULTILINE),
    re.compile(
        r"^[ \t]*\d+\s+prior\s+(?:offenses?|records?|convictions?).*$",
        re.IGNORECASE | re.MULTILINE,
    ),
    re.compile(r"\(\+\d+\s+more\s+records?\)", re.IGNORECASE),
    re.compile(r"Utah\s+BCI[\s\S]*?" + _RECORD_LOOKAHEAD, re.IGNORECASE),
    re.compile(r"NCIC[\s\S]*?" + _RECORD_LOOKAHEAD, re.IGNORECASE),
    re.compile(
        r"^[ \t]*\d{1,2}/\d{1,2}/\d{2,4}\s*:\s*[A-Z][A-Z \t/]+;?[ \t]*$",
        re.IGNORECASE | re.MULTILINE,
    ),
    re.compile(
        r"^[ \t]*(?:Prior\s+(?:offenses?|arrests?|convictions?)|Past\s+criminal|Criminal\s+record).*$",
        re.IGNORECASE | re.MULTILINE,
    ),
)


def strip_criminal_history(text: str) -> str:
    """Remove prior-record sections and lines, keeping the surrounding narrative."""
    if not text:
        return ""
    result = text
    for pattern in CRIMINAL_HISTORY_PATTERNS:
        result = pattern.sub("", result)
    return re.sub(r"\n{3,}", "\n\n", result).strip()


class NarrativeExtractor:
    def __init__(self, layout: DocumentLayout) -> None:
        self._layout = layout
        self._general_offense = SectionScanner(layout.section("general_offense"))
        self._officer_actions = SectionScanner(layout.section("officer_actions"))
        self._narrative = SectionScanner(layout.section("narrative"))

    def strip_page_headers(self, text: str) -> str:
        """Drop lines matching the layout's repeating page headers; blank lines stay."""
        kept = [
            line
            for line in text.split("\n")
            if not line.strip()
            or not any(p.search(line.strip()) for p in self._layout.page_headers)
        ]
        return "\n".join(kept)

    def extract_case_synopsis(self, text: str) -> str | None:
        """Officer's Actions text from the General Offense Hardcopy section.

        Falls back to an Officer's Actions block anywhere in the document.
        Long synopses are cut to 800 characters with a trailing ellipsis.
        """
        text = text or ""
        # The hardcopy heading is also a page header, so find it before stripping.
        hardcopy = self._general_offense.scan(text)
        scopes = [hardcopy.body, text] if hardcopy is not None else [text]
        for scope in scopes:
            synopsis = self._officer_actions_in(self.strip_page_headers(scope))
            if synopsis is not None:
                return synopsis
        return None

    def extract_officer_narrative(self, text: str) -> str:
        """Officer's Actions, else a narrative/probable cause section, else the document head."""
        text = text or ""
        actions = self._officer_actions.scan(text)
        if actions is not None:
            body = strip_criminal_history(self.strip_page_headers(actions.body))
            if len(body) > SYNOPSIS_MIN_CHARS:
                return body
        section = self._narrative.scan(text)
        if section is not None:
            return section.body
        return text[:NARRATIVE_FALLBACK_CHARS].strip()

    def _officer_actions_in(self, scope: str) -> str | None:
        section = self._officer_actions.scan(scope)
        if section is None:
            return None
        actions = strip_criminal_history(self.strip_page_headers(section.body))
        if not SYNOPSIS_MIN_CHARS < len(actions) < SYNOPSIS_MAX_CHARS:
            return None
        if len(actions) > SYNOPSIS_PREVIEW_CHARS:
            return actions[:SYNOPSIS_PREVIEW_CHARS] + "..."
        return actions
