from dataclasses import dataclass


@dataclass(frozen=True)
class ExtractionResult:
    """Best-effort text layer of one PDF."""

    text: str
    page_count: int | None = None
    image_count: int = 0

    @classmethod
    def empty(cls) -> "ExtractionResult":
        return cls(text="", page_count=None, image_count=0)


@dataclass(frozen=True)
class PageChunk:
    """A contiguous page range cut out of a larger PDF (1-based, inclusive)."""

    first_page: int
    last_page: int
    pdf_bytes: bytes
