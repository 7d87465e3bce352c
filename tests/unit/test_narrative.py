import pytest

from screening.extraction.layout import load_layout
from screening.extraction.narrative import NarrativeExtractor, strip_criminal_history

ACTIONS = (
    "I responded to Walmart on a report of a shoplifter. "
    "Loss prevention detained the suspect with unpaid merchandise."
)


@pytest.fixture()
def extractor() -> NarrativeExtractor:
    return NarrativeExtractor(load_layout())


class TestStripCriminalHistory:
    def test_removes_history_block_before_next_heading(self) -> None:
        text = "I arrived on scene.\nCriminal History: 16 arrests, 4 convictions.\nEVIDENCE: none"
        assert strip_criminal_history(text) == "I arrived on scene.\nEVIDENCE: none"

    def test_removes_summary_lines(self) -> None:
        text = (
            "Suspect was cooperative.\n"
            "16 arrests. Convictions: '22 MB RT\n"
            "3 prior offenses on file\n"
            "He was released."
        )
        assert strip_criminal_history(text) == "Suspect was cooperative.\n\nHe was released."

    def test_removes_more_records_marker(self) -> None:
        assert strip_criminal_history("Theft (+3 more records)") == "Theft"

    def test_keeps_plain_narrative(self) -> None:
        assert strip_criminal_history(ACTIONS) == ACTIONS


class TestStripPageHeaders:
    def test_drops_header_lines(self, extractor: NarrativeExtractor) -> None:
        text = "Page 1 of 3\nOfficer text\nWest Valley City Police Department\n\nMore"
        assert extractor.strip_page_headers(text) == "Officer text\n\nMore"


class TestCaseSynopsis:
    def test_officer_actions_from_hardcopy(self, extractor: NarrativeExtractor) -> None:
        text = (
            "General Offense Hardcopy\nPage 1 of 2\n"
            f"OFFICER'S ACTIONS:\n{ACTIONS}\nEVIDENCE:\nVideo\n"
            "Criminal History: 3 prior offenses\n"
        )
        assert extractor.extract_case_synopsis(text) == ACTIONS

    def test_actions_outside_hardcopy(self, extractor: NarrativeExtractor) -> None:
        text = f"Report\nOFFICER'S ACTIONS:\n{ACTIONS}\nWITNESSES:\nNone"
        assert extractor.extract_case_synopsis(text) == ACTIONS

    def test_long_synopsis_is_truncated(self, extractor: NarrativeExtractor) -> None:
        long_actions = "The suspect walked past the registers without paying. " * 20
        text = f"OFFICER'S ACTIONS:\n{long_actions}\nEVIDENCE:\n"
        synopsis = extractor.extract_case_synopsis(text)
        assert synopsis is not None
        assert len(synopsis) == 803
        assert synopsis.endswith("...")

    def test_too_short_actions(self, extractor: NarrativeExtractor) -> None:
        assert extractor.extract_case_synopsis("OFFICER'S ACTIONS:\nNone.\nEVIDENCE:\n") is None

    def test_history_inside_actions_is_removed(self, extractor: NarrativeExtractor) -> None:
        text = f"OFFICER'S ACTIONS:\n{ACTIONS}\n16 arrests. Convictions: '22 MB RT\nEVIDENCE:\n"
        assert extractor.extract_case_synopsis(text) == ACTIONS

    def test_absent(self, extractor: NarrativeExtractor) -> None:
        assert extractor.extract_case_synopsis("Nothing useful here.") is None


class TestOfficerNarrative:
    def test_prefers_officer_actions(self, extractor: NarrativeExtractor) -> None:
        text = f"OFFICER'S ACTIONS:\n{ACTIONS}\nEVIDENCE:\nVideo"
        assert extractor.extract_officer_narrative(text) == ACTIONS

    def test_narrative_section(self, extractor: NarrativeExtractor) -> None:
        body = "On the listed date I observed the defendant conceal items in a bag. " * 4
        text = f"Header line\nOFFICER NARRATIVE\n{body}"
        assert extractor.extract_officer_narrative(text) == body.strip()

    def test_falls_back_to_document_head(self, extractor: NarrativeExtractor) -> None:
        assert extractor.extract_officer_narrative("  Just a short note.  ") == "Just a short note."
