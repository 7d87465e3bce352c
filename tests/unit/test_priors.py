import pytest

from screening.extraction.layout import load_layout
from screening.extraction.models import PriorIncident, PriorOffenseEntry, PriorsSummary
from screening.extraction.priors import PriorsParser, summarize_priors

BCI_RECORD = """UTAH CRIMINAL HISTORY RECORD
Incident 1 of 2
DATE OF ARREST: 03/14/2019
OFFENSE TRACKING # (OTN): 12345678
OFFENSE LITERAL: RETAIL THEFT STATUTE: 76-6-602
OFFENSE LITERAL: POSSESSION OF DRUG PARAPHERNALIA
Incident 2 of 2
DATE OF ARREST: 07/01/2021
ARRESTING CHARGE: DISORDERLY CONDUCT
OFFICER'S ACTIONS:
I responded to the store and spoke with loss prevention.
"""


@pytest.fixture()
def parser() -> PriorsParser:
    return PriorsParser(load_layout())


class TestIncidentBlocks:
    def test_parses_each_incident(self, parser: PriorsParser) -> None:
        summary = parser.extract(BCI_RECORD)
        assert summary is not None
        assert summary.incident_count == 2
        assert summary.charge_count == 3
        first, second = summary.incidents
        assert first.incident_label == "Incident 1 of 2"
        assert first.charges == (
            PriorOffenseEntry("12345678", "03/14/2019", "RETAIL THEFT"),
            PriorOffenseEntry("12345678", "03/14/2019", "POSSESSION OF DRUG PARAPHERNALIA"),
        )
        assert second.charges == (
            PriorOffenseEntry(None, "07/01/2021", "DISORDERLY CONDUCT"),
        )

    def test_stops_at_next_report_section(self, parser: PriorsParser) -> None:
        summary = parser.extract(BCI_RECORD)
        assert summary is not None
        assert all("loss prevention" not in e.charge_text.lower() for e in summary.entries())


class TestInlineSummary:
    def test_year_offense_entries(self, parser: PriorsParser) -> None:
        text = (
            "Criminal History - 16 arrests. Convictions: '22 MB RT WVC - 221701631, "
            "'21 MA obstruction of justice\n"
            "General Offense Hardcopy\n"
        )
        summary = parser.extract(text)
        assert summary is not None
        assert summary.incident_count == 1
        assert summary.incidents[0].incident_label == "Criminal History Summary"
        entries = summary.entries()
        assert entries[0] == PriorOffenseEntry(None, "2022", "MB RT")
        assert [e.charge_text for e in entries[1:]] == [
            "'22 MB RT WVC - 221701631",
            "'21 MA obstruction of justice",
        ]

    def test_arrest_count_only(self, parser: PriorsParser) -> None:
        summary = parser.extract("Criminal History: 5 arrests on file, details unavailable\n")
        assert summary is not None
        assert summary.entries() == [
            PriorOffenseEntry(None, "Unknown", "5 prior arrests on record")
        ]

    def test_offense_mentions(self, parser: PriorsParser) -> None:
        summary = parser.extract("Criminal History: 2 arrests for retail theft and possession\n")
        assert summary is not None
        texts = [e.charge_text.lower() for e in summary.entries()]
        assert "possession" in texts
        assert "theft" in texts


class TestNoPriors:
    def test_no_section(self, parser: PriorsParser) -> None:
        assert parser.extract("Suspect said he had 3 prior arrests for theft.") is None

    def test_section_without_records(self, parser: PriorsParser) -> None:
        assert parser.extract("Criminal History: none on file for this subject today") is None

    def test_empty_text(self, parser: PriorsParser) -> None:
        assert parser.extract("") is None


class TestSummarizePriors:
    def _summary(self, count: int) -> PriorsSummary:
        entries = tuple(
            PriorOffenseEntry(None, f"0{i}/01/2020", f"OFFENSE {i}") for i in range(1, count + 1)
        )
        return PriorsSummary(1, count, (PriorIncident("Incident 1 of 1", entries),))

    def test_lists_entries(self) -> None:
        assert summarize_priors(self._summary(2)) == (
            "01/01/2020: OFFENSE 1; 02/01/2020: OFFENSE 2"
        )

    def test_caps_at_five_entries(self) -> None:
        digest = summarize_priors(self._summary(7))
        assert digest is not None
        assert digest.count(";") == 4
        assert digest.endswith(" (+2 more records)")

    def test_none(self) -> None:
        assert summarize_priors(None) is None
