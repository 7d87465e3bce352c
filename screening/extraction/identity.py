"""Case number, defendant name and booking status from report text."""

import re

from screening.extraction.models import CaseIdentity
from screening.logging.logger import Log

CASE_NUMBER_PATTERNS: tuple[re.Pattern[str], ...] = tuple(
    re.compile(p, re.IGNORECASE)
    for p in (
        r"\bWV\d{2}-\d{5,6}\b",
        r"Case\s*#\s*:?\s*(WV\d{2}-\d{5,6})",
        r"Case\s*#\s*:?\s*(\d{4}-\d{5})",
        r"Case\s*#\s*:?\s*(\d{2}-\d{5})",
        r"Case\s+(\d{4}-\d{5})",
        r"Case\s+(\d{2}-\d{5})",
        r"Police\s+Case[:\s#]*(\d{2,4}[-/]\d+)",
        r"Case\s*(?:No\.?|Number)[:\s]*(\d{2,4}[-/]\d+)",
    )
) + (re.compile(r"\b(\d{4}-\d{5})\b"),)
MIN_CASE_NUMBER_LENGTH = 6

_NAME = r"([A-Za-z][A-Za-z\-'.\s,]+?)"
# Ordered by how reliably the label names the defendant.
NAME_LABEL_PATTERNS: tuple[re.Pattern[str], ...] = tuple(
    re.compile(p, re.IGNORECASE)
    for p in (
        rf"NAME\s+USED\s+AT\s+ARREST[:\s]+{_NAME}(?=\s*(?:AGENCY|CHARGE|DATE|\n|$))",
        rf"NAME\s+USED\s+AT\s+COURT[:\s]+{_NAME}(?=\s*(?:LAW|AGENCY|DATE|\n|$))",
        rf"(?:TRUE|FULL|LEGAL)\s+NAME[:\s]+{_NAME}(?=\s*(?:DOB|DATE|ALIAS|\n|$))",
        rf"ARRESTEE[:\s]+{_NAME}(?=\s*(?:DOB|DATE|ADDRESS|AGE|\n|$))",
        rf"(?:^|\n)SUBJECT[:\s]+{_NAME}(?=\s*(?:DOB|DATE|ADDRESS|AGE|\n|$))",
        rf"SUSPECT\s+NAME[:\s]+{_NAME}(?=\s*(?:DOB|DATE|ADDRESS|AGE|\n|$))",
        rf"DEFENDANT\s*[:\-]?\s*{_NAME}(?=\s*(?:DOB|DATE|ADDRESS|CASE|\n|$))",
    )
)
OFFICER_CONTEXT_PATTERNS: tuple[re.Pattern[str], ...] = tuple(
    re.compile(p, re.IGNORECASE)
    for p in (
        r"OFFICER\s*NAME",
        r"ARRESTING\s+OFFICER",
        r"OFFICER[:\s]",
        r"DEPUTY\s+NAME",
        r"DEPUTY[:\s]",
        r"REPORTING\s+OFFICER",
        r"INVESTIGATING\s+OFFICER",
    )
)
OFFICER_CONTEXT_CHARS = 30

NAME_STOPWORDS = frozenset(
    {
        "AUTHORIZED", "PERSON", "OFFICER", "ADDRESS", "PHONE", "DOB", "DATE", "CASE",
        "CHARGE", "AGENCY", "LAW", "THE", "AND", "FOR", "WITH", "FROM", "INTO", "UPON",
        "HORIZED", "IZED",
    }
)
NAME_SUFFIXES = ("Jr", "Jr.", "Sr", "Sr.", "II", "III", "IV")
MIN_FIRST_NAME_LENGTH = 3
MIN_NAME_LENGTH = 5

BOOKED_YES_PATTERNS: tuple[re.Pattern[str], ...] = tuple(
    re.compile(p, re.IGNORECASE)
    for p in (
        r"BOOKED\s+INTO\s+JAIL[:\s]*(?:\[?X\]?|YES)",
        r"\[X\]\s*BOOKED\s+INTO\s+JAIL",
        r"JAIL[:\s]*YES",
    )
)
BOOKED_NO_PATTERNS: tuple[re.Pattern[str], ...] = tuple(
    re.compile(p, re.IGNORECASE)
    for p in (
        r"BOOKED\s+INTO\s+JAIL[:\s]*(?:\[\s*\]|NO)",
        r"\[\s*\]\s*BOOKED\s+INTO\s+JAIL",
        r"JAIL[:\s]*NO",
    )
)


def _title_word(word: str) -> str:
    if word.upper().rstrip(".") in ("II", "III", "IV"):
        return word.upper()
    if word.isupper() or word.islower():
        return re.sub(r"[A-Za-z]+", lambda m: m.group(0).capitalize(), word)
    return word


def _clean_candidate(raw: str) -> str:
    line = raw.splitlines()[0] if raw.strip() else ""
    line = re.sub(r"[^a-zA-Z\s,.\-']", "", line)
    tokens: list[str] = []
    for token in re.split(r"(\s+|,)", line):
        if token.strip(" ,.").upper() in NAME_STOPWORDS and tokens:
            break
        tokens.append(token)
    return "".join(tokens).strip(" ,")


def format_last_first(raw: str) -> str | None:
    """Normalize a captured name to ``Last, First [Suffix]``; None when not a usable name."""
    cleaned = _clean_candidate(raw)
    if len(cleaned) < 3:
        return None

    if "," in cleaned:
        last, rest = (part.strip() for part in cleaned.split(",", 1))
        words = rest.split()
        if not last or not words:
            return None
    else:
        parts = cleaned.split()
        if len(parts) < 2:
            return None
        last, words = "", parts[:]
    suffix = ""
    if words and words[-1].rstrip(".") in {s.rstrip(".") for s in NAME_SUFFIXES}:
        suffix = words.pop()
    if not last:
        if len(words) < 2:
            return None
        last = words.pop()
    if not words:
        return None

    first = " ".join(_title_word(w) for w in words)
    last = " ".join(_title_word(w) for w in last.split())
    name = f"{last}, {first}" + (f" {_title_word(suffix)}" if suffix else "")
    if len(words[0].strip(".")) < MIN_FIRST_NAME_LENGTH or len(name) < MIN_NAME_LENGTH:
        return None
    return name


def _more_complete(current: str, candidate: str) -> bool:
    """True when ``candidate`` is the same person with a fuller first name."""
    current_last, _, current_first = current.partition(", ")
    candidate_last, _, candidate_first = candidate.partition(", ")
    if current_last.lower() != candidate_last.lower():
        return False
    return len(candidate_first) > len(current_first) and candidate_first.lower().startswith(
        current_first.lower()
    )


class IdentityExtractor:
    """Recovers the case identity fields; pure and never raises."""

    def extract(self, text: str) -> CaseIdentity:
        text = text or ""
        return CaseIdentity(
            case_number=self.extract_case_number(text),
            defendant_name=self.extract_defendant_name(text),
            booked_into_jail=self.extract_booking_status(text),
        )

    @staticmethod
    def extract_case_number(text: str) -> str | None:
        for pattern in CASE_NUMBER_PATTERNS:
            match = pattern.search(text)
            if match is None:
                continue
            captured = (match.group(1) if match.groups() else match.group(0)).strip()
            if len(captured) >= MIN_CASE_NUMBER_LENGTH:
                return captured
        return None

    def extract_defendant_name(self, text: str) -> str | None:
        accepted: str | None = None
        for pattern in NAME_LABEL_PATTERNS:
            for match in pattern.finditer(text):
                if self._near_officer_label(text, match.start()):
                    Log.debug(f"Skipping officer-related name match: {match.group(1)!r}")
                    continue
                candidate = format_last_first(match.group(1))
                if candidate is None:
                    continue
                if accepted is None or _more_complete(accepted, candidate):
                    accepted = candidate
        return accepted

    @staticmethod
    def extract_booking_status(text: str) -> bool | None:
        if any(p.search(text) for p in BOOKED_YES_PATTERNS):
            return True
        if any(p.search(text) for p in BOOKED_NO_PATTERNS):
            return False
        return None

    @staticmethod
    def _near_officer_label(text: str, index: int) -> bool:
        window = text[max(0, index - OFFICER_CONTEXT_CHARS) : index + OFFICER_CONTEXT_CHARS]
        return any(p.search(window) for p in OFFICER_CONTEXT_PATTERNS)
