import io

import pytest
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

REPORT_LINES = (
    "West Valley City Police Department",
    "Case #: 2023-12345",
    "NAME USED AT ARREST: Roberts, Chandee",
    "BOOKED INTO JAIL: YES",
    "Patrol Screening Sheet",
    "Offense Information",
    "58-37-8 F3 Possession of a controlled substance",
    "58-37a-5 MB Possession of drug paraphernalia",
    "General Offense Hardcopy",
    "OFFICER'S ACTIONS:",
    "I responded to a report of a person acting suspiciously near the store.",
    "The subject knowingly possessed a controlled substance and a glass pipe.",
    "EVIDENCE:",
    "Glass pipe and one bag of a crystal substance were booked into evidence.",
    "Criminal History: 3 arrests. Convictions: '21 MB RT WVC - 2117001",
)


def _pdf(pages: list[list[str]]) -> bytes:
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    for lines in pages:
        y = 740
        for line in lines:
            c.drawString(40, y, line)
            y -= 16
        c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF with known text content."""
    return _pdf([["Hello PDF World"]])


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """Generate a two-page PDF with known text on each page."""
    return _pdf([["Page one content"], ["Page two content"]])


@pytest.fixture()
def empty_pdf_bytes() -> bytes:
    """Generate a valid PDF with no text content (blank page)."""
    return _pdf([[]])


@pytest.fixture()
def report_pdf_bytes() -> bytes:
    """A one-page police report with a readable text layer."""
    return _pdf([list(REPORT_LINES)])


GARBLED_LINES = tuple(
    f"(cid:{n})(cid:{n + 7})(cid:{n + 13}) Of(cid:41)ficer (cid:8)obs(cid:19)erved (cid:27)(cid:3)"
    for n in range(10, 70, 10)
)

CITATION_REPORT_LINES = (
    "West Valley City Police Department",
    "Case #: 2023-67890",
    "General Offense Hardcopy",
    "OFFICER'S ACTIONS:",
    "The subject was cited for a violation of West Valley City Code 3-1-101.",
    "The subject knowingly entered posted property after being told to leave.",
)


@pytest.fixture()
def garbled_pdf_bytes() -> bytes:
    """A report whose text layer extracts as unmapped (cid:N) glyph markers."""
    return _pdf([list(GARBLED_LINES)])


@pytest.fixture()
def citation_report_pdf_bytes() -> bytes:
    """A report with a municipal code citation and no screening-sheet charges."""
    return _pdf([list(CITATION_REPORT_LINES)])


STATUTE_ROWS = (
    ("(1)", "Prohibited acts A -- Penalties and reinstatement:"),
    (
        "(a)",
        "Except as authorized by this chapter, it is unlawful for a person to knowingly "
        "and intentionally produce, manufacture, or dispense, or to possess with intent "
        "to produce, manufacture, or dispense, a controlled or counterfeit substance;",
    ),
    (
        "(ii)",
        "distribute a controlled or counterfeit substance, or to agree, consent, offer, "
        "or arrange to distribute a controlled or counterfeit substance;",
    ),
    (
        "(2)",
        "Prohibited acts B -- Penalties and reinstatement: it is unlawful for a person "
        "knowingly and intentionally to possess or use a controlled substance analog or "
        "a controlled substance, unless it was obtained under a valid prescription.",
    ),
)


def build_versioned_html(rows: tuple[tuple[str, str], ...] = STATUTE_ROWS, extra: str = "") -> str:
    cells = "".join(
        f"<tr><td>{marker}</td><td>{body}</td></tr>" for marker, body in rows
    )
    return (
        "<html><body><nav>Skip to Content | All Legislators</nav>"
        '<div id="secdiv"><b>58-37-8.</b> <b>Prohibited acts -- Penalties.</b>'
        f"<table>{cells}</table>{extra}</div></body></html>"
    )


@pytest.fixture()
def versioned_statute_html() -> str:
    """A versioned code page whose ``#secdiv`` holds a subsection table."""
    return build_versioned_html()


@pytest.fixture()
def utah_statute_text() -> str:
    """Statute text that passes validation for Utah Code."""
    return "58-37-8. Prohibited acts -- Penalties.\n\n" + "\n".join(
        f"{marker} {body}" for marker, body in STATUTE_ROWS
    )


@pytest.fixture()
def versioned_html_builder():  # type: ignore[no-untyped-def]
    """Builder for versioned pages with custom rows or trailing markup."""
    return build_versioned_html
