"""Page-level PDF helpers used by the OCR adapters."""

import pymupdf

from screening.pdf.exceptions import PdfPageError
from screening.pdf.models import PageChunk


def count_pages(pdf_bytes: bytes) -> int:
    try:
        with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
            return int(doc.page_count)
    except Exception as exc:
        raise PdfPageError(f"Cannot count pages: {exc}") from exc


def split_into_chunks(pdf_bytes: bytes, max_pages: int) -> list[PageChunk]:
    """Cut a PDF into consecutive sub-documents of at most ``max_pages`` pages.

    A document that already fits is returned as a single chunk holding the
    original bytes.
    """
    if max_pages < 1:
        raise ValueError("max_pages must be at least 1")
    try:
        with pymupdf.open(stream=pdf_bytes, filetype="pdf") as src:  # type: ignore[no-untyped-call]
            total = src.page_count
            if total <= max_pages:
                return [PageChunk(first_page=1, last_page=total, pdf_bytes=pdf_bytes)]
            chunks: list[PageChunk] = []
            for start in range(0, total, max_pages):
                end = min(start + max_pages, total) - 1
                with pymupdf.open() as part:  # type: ignore[no-untyped-call]
                    part.insert_pdf(src, from_page=start, to_page=end)
                    chunks.append(
                        PageChunk(
                            first_page=start + 1,
                            last_page=end + 1,
                            pdf_bytes=part.tobytes(),
                        )
                    )
            return chunks
    except PdfPageError:
        raise
    except Exception as exc:
        raise PdfPageError(f"Cannot split PDF into page ranges: {exc}") from exc


def render_pages_png(pdf_bytes: bytes, dpi: int = 200) -> list[bytes]:
    """Render every page to a PNG image."""
    try:
        with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
            return [page.get_pixmap(dpi=dpi).tobytes("png") for page in doc]
    except Exception as exc:
        raise PdfPageError(f"Cannot render PDF pages: {exc}") from exc
