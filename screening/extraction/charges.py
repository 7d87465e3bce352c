"""Current-case charges from the bounded screening-sheet section."""

import re

from screening.citations.detector import looks_like_date, normalize_key
from screening.extraction.layout import DocumentLayout
from screening.extraction.models import ChargeCandidate
from screening.extraction.sections import SectionScanner
from screening.logging.logger import Log

CHARGE_PATTERN = re.compile(
    r"(\d{2,3}[a-z]?)\s*[-–]\s*(\d{1,4}[a-z]?)\s*[-–]\s*(\d+(?:\.\d+)?)"
    r"\s*[\(\[]?\s*([A-Z][A-Z0-9]{1,3})\s*[\)\]]?",
    re.IGNORECASE,
)

# Keyed by "title-chapter" in normalized form.
OCR_CORRECTIONS: dict[str, str] = {
    "57-37a": "58-37a",
    "57-37": "58-37",
}

KNOWN_CHARGES: dict[str, str] = {
    "58-37-8": "Prohibited Acts - Controlled Substances",
    "58-37a-5": "Drug Paraphernalia",
    "76-6-602": "Retail Theft",
    "76-6-404": "Theft",
    "76-6-206": "Criminal Trespass",
    "76-8-305": "Interference with Arresting Officer",
    "76-9-702": "Disorderly Conduct",
    "76-10-503": "Carrying a Concealed Dangerous Weapon",
    "76-5-102": "Assault",
    "76-5-103": "Aggravated Assault",
    "41-6a-502": "DUI",
    "41-6a-517": "Open Container",
    "41-6a-401.3": "Failure to Remain at Accident Scene",
    "41-6a-401": "Duty to Stop at Accident",
    "53-3-217": "No Valid License in Possession",
    "53-3-227": "Driving on Suspended License",
    "76-6-408": "Receiving Stolen Property",
    "76-5-109": "Child Abuse",
    "76-10-508": "Discharge of Firearm",
    "41-12a-302": "No Proof of Insurance",
    "41-1a-1303": "Driving Without Registration",
    "77-7-21": "Failure to Appear on Citation",
    "64-13-29": "Parole Violation",
}

CHARGE_ABBREVIATIONS: dict[str, str] = {
    "RT": "Retail Theft",
    "PACS": "Prohibited Acts - Controlled Substances",
    "DP": "Drug Paraphernalia",
    "DUI": "Driving Under the Influence",
    "CM": "Criminal Mischief",
    "DC": "Disorderly Conduct",
    "POCS": "Possession of Controlled Substance",
    "PODP": "Possession of Drug Paraphernalia",
    "DV": "Domestic Violence",
}

CHARGE_CLASSES: dict[str, str] = {
    "MB": "Class B Misdemeanor",
    "MA": "Class A Misdemeanor",
    "MC": "Class C Misdemeanor",
    "F3": "Third Degree Felony",
    "F2": "Second Degree Felony",
    "F1": "First Degree Felony",
    "IN": "Infraction",
}

VALID_TITLES = frozenset(
    {
        "7", "9", "10", "13", "17", "24", "26", "31A", "32B", "34", "41", "53", "58",
        "59", "62A", "63", "64", "72", "76", "77", "78A", "78B",
    }
)
# Titles at or above this number are accepted without being listed.
OPEN_TITLE_FLOOR = 41
MAX_TITLE = 99
MAX_CHAPTER = 500
MAX_SECTION = 2000

VALID_SUFFIXES = frozenset(
    {
        "MB", "MA", "MC", "F1", "F2", "F3", "IN", "RT", "PACS", "DP", "DUI", "CM", "DC",
        "POCS", "PODP", "DV",
        "RE", "FA", "NC", "PO", "LI", "JU", "NO", "UT",
        "RETA", "FAIL", "NCIC", "JURI", "SIGN", "POSS", "RECE", "OPER", "DRIV", "REFU",
        "ASSA", "DISO", "CRIM", "BURG", "ROBB", "DRUG", "PARA", "THEF", "FORG", "FRAU",
    }
)


def _leading_number(value: str) -> int:
    digits = re.match(r"\d+", value)
    return int(digits.group(0)) if digits else 0


def correct_ocr_misreads(title: str, chapter: str) -> tuple[str, str]:
    """Repair known title/chapter misreads, e.g. ``57-37a`` for ``58-37a``."""
    corrected = OCR_CORRECTIONS.get(f"{title.upper()}-{chapter.lower()}")
    if corrected is None:
        return title, chapter
    fixed_title, fixed_chapter = corrected.split("-", 1)
    Log.debug(f"OCR correction: {title}-{chapter} -> {corrected}")
    return fixed_title, fixed_chapter


def is_valid_charge_code(title: str, chapter: str, section: str, suffix: str) -> bool:
    title_number = _leading_number(title)
    if looks_like_date(title, chapter, section):
        return False
    if title_number > MAX_TITLE:
        return False
    if title.lstrip("0").upper() not in VALID_TITLES and title_number < OPEN_TITLE_FLOOR:
        return False
    if _leading_number(chapter) > MAX_CHAPTER or _leading_number(section) > MAX_SECTION:
        return False
    return suffix.upper() in VALID_SUFFIXES


class ChargeExtractor:
    """Charges listed in the screening sheet; never reads past its stop markers."""

    def __init__(self, layout: DocumentLayout) -> None:
        self._scanner = SectionScanner(layout.section("screening_sheet"))

    def extract(self, text: str) -> list[ChargeCandidate]:
        section = self._scanner.scan(text or "")
        if section is None:
            Log.debug("No screening sheet section found")
            return []

        matches = list(CHARGE_PATTERN.finditer(section.body))
        # Blank sheets print a sample code in the column header.
        if "example" in section.body.lower() and len(matches) > 1:
            matches = matches[1:]

        charges: list[ChargeCandidate] = []
        seen: set[str] = set()
        for match in matches:
            title, chapter, section_number, suffix = match.groups()
            title, chapter = correct_ocr_misreads(title, chapter)
            if not is_valid_charge_code(title, chapter, section_number, suffix):
                Log.debug(f"Rejected charge candidate: {match.group(0).strip()}")
                continue
            code = normalize_key(title, chapter, section_number)
            if code in seen:
                continue
            seen.add(code)
            suffix = suffix.upper()
            charges.append(
                ChargeCandidate(
                    code=code,
                    charge_name=CHARGE_ABBREVIATIONS.get(suffix)
                    or KNOWN_CHARGES.get(code)
                    or f"Utah Code {code}",
                    charge_class=CHARGE_CLASSES.get(suffix),
                )
            )
        Log.info(
            "Screening sheet charges extracted",
            count=len(charges),
            stop_marker=section.stop_marker,
        )
        return charges
