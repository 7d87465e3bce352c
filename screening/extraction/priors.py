"""Prior-offense records from a bounded criminal-history section."""

import re

from screening.extraction.layout import DocumentLayout
from screening.extraction.models import PriorIncident, PriorOffenseEntry, PriorsSummary
from screening.extraction.sections import SectionScanner
from screening.logging.logger import Log

INCIDENT_HEADER = re.compile(r"Incident\s+(\d+)\s+of\s+(\d+)", re.IGNORECASE)
ARREST_DATE = re.compile(r"DATE\s+OF\s+ARREST[:\s]+(\d{1,2}/\d{1,2}/\d{4})", re.IGNORECASE)
TRACKING_NUMBER = re.compile(
    r"OFFENSE\s+TRACKING\s*#\s*\(OTN\)[:\s]+([A-Z0-9]+)", re.IGNORECASE
)
OFFENSE_LITERAL = re.compile(
    r"OFFENSE\s+LITERAL[:\s]+([A-Z][A-Z \t/\-()]+?)"
    r"(?=\s+STATUTE[:\s]|\s+NCIC|\s+JURISDICTION|[ \t]*(?:\n|\Z))",
    re.IGNORECASE,
)
ARRESTING_CHARGE = re.compile(
    r"ARRESTING\s+CHARGE[:\s]+([A-Z][A-Z \t/\-()]+?)"
    r"(?=\s+STATUTE|\s+OFFENSE|[ \t]*(?:\n|\Z))",
    re.IGNORECASE,
)
YEAR_OFFENSE = re.compile(
    r"'(\d{2})\s+([A-Z]{2,}[A-Za-z \t]*?)(?:[-–]|\s+(?:WVC|WJ|Midvale|Salt Lake|Utah))",
    re.IGNORECASE,
)
ARREST_COUNT = re.compile(r"(\d+)\s+arrests?", re.IGNORECASE)
CONVICTIONS = re.compile(r"Convictions?[:\s]+(.+?)(?:\n|$)", re.IGNORECASE)
OFFENSE_MENTIONS: tuple[re.Pattern[str], ...] = tuple(
    re.compile(p, re.IGNORECASE)
    for p in (
        r"MB\s+RT",
        r"MB\s+theft",
        r"MA\s+obstruction",
        r"MA\s+POCS",
        r"POCS",
        r"possession",
        r"theft",
        r"retail\s+theft",
        r"obstruction",
    )
)

INLINE_INCIDENT_LABEL = "Criminal History Summary"
UNKNOWN_DATE = "Unknown"
MAX_LITERAL_CHARS = 80
MAX_CONVICTION_CHARS = 100
SUMMARY_ENTRY_LIMIT = 5


def _block_charges(block: str) -> list[PriorOffenseEntry]:
    date_match = ARREST_DATE.search(block)
    tracking_match = TRACKING_NUMBER.search(block)
    date_of_arrest = date_match.group(1) if date_match else None
    tracking = tracking_match.group(1) if tracking_match else None

    entries: list[PriorOffenseEntry] = []
    seen: set[str] = set()
    for pattern in (OFFENSE_LITERAL, ARRESTING_CHARGE):
        for match in pattern.finditer(block):
            offense = match.group(1).strip()[:MAX_LITERAL_CHARS]
            if len(offense) <= 3 or offense.lower() in seen:
                continue
            seen.add(offense.lower())
            entries.append(PriorOffenseEntry(tracking, date_of_arrest, offense))
        if entries:
            break
    return entries


def _inline_charges(section: str) -> list[PriorOffenseEntry]:
    entries = [
        PriorOffenseEntry(None, f"20{m.group(1)}", m.group(2).strip())
        for m in YEAR_OFFENSE.finditer(section)
    ]

    if not entries:
        arrests = ARREST_COUNT.search(section)
        if arrests is not None:
            for pattern in OFFENSE_MENTIONS:
                entries.extend(
                    PriorOffenseEntry(None, UNKNOWN_DATE, m.group(0).strip())
                    for m in pattern.finditer(section)
                )
            count = int(arrests.group(1))
            if not entries and count > 0:
                entries.append(
                    PriorOffenseEntry(None, UNKNOWN_DATE, f"{count} prior arrests on record")
                )

    for conviction in CONVICTIONS.finditer(section):
        for part in conviction.group(1).split(","):
            part = part.strip()
            if len(part) <= 3:
                continue
            if any(part[:10] in entry.charge_text for entry in entries):
                continue
            entries.append(PriorOffenseEntry(None, UNKNOWN_DATE, part[:MAX_CONVICTION_CHARS]))
    return entries


class PriorsParser:
    """Parses criminal history only inside a labelled section.

    Returns None when no such section exists; the rest of the document is
    never scanned for priors.
    """

    def __init__(self, layout: DocumentLayout) -> None:
        self._scanner = SectionScanner(layout.section("criminal_history"))

    def extract(self, text: str) -> PriorsSummary | None:
        section = self._scanner.scan(text or "")
        if section is None:
            Log.debug("No criminal history section found")
            return None

        headers = list(INCIDENT_HEADER.finditer(section.body))
        incidents: list[PriorIncident] = []
        if headers:
            for index, header in enumerate(headers):
                end = headers[index + 1].start() if index + 1 < len(headers) else len(section.body)
                block = section.body[header.start() : end]
                incidents.append(
                    PriorIncident(
                        incident_label=f"Incident {header.group(1)} of {header.group(2)}",
                        charges=tuple(_block_charges(block)),
                    )
                )
        else:
            inline = _inline_charges(section.body)
            if inline:
                incidents.append(PriorIncident(INLINE_INCIDENT_LABEL, tuple(inline)))

        charge_count = sum(len(incident.charges) for incident in incidents)
        Log.info(
            "Criminal history parsed",
            marker=section.start_marker,
            incidents=len(incidents),
            charges=charge_count,
        )
        if charge_count == 0:
            return None
        return PriorsSummary(
            incident_count=len(incidents),
            charge_count=charge_count,
            incidents=tuple(incidents),
        )


def summarize_priors(summary: PriorsSummary | None) -> str | None:
    """One-line ``date: offense; ...`` digest of the first few prior entries."""
    if summary is None:
        return None
    entries = summary.entries()
    if not entries:
        return None
    shown = "; ".join(
        f"{entry.date_of_arrest or UNKNOWN_DATE}: {entry.charge_text}"
        for entry in entries[:SUMMARY_ENTRY_LIMIT]
    )
    remaining = len(entries) - SUMMARY_ENTRY_LIMIT
    return shown + (f" (+{remaining} more records)" if remaining > 0 else "")
