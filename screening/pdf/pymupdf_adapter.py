import pymupdf

from screening.pdf.base import BasePdfExtractor
from screening.pdf.exceptions import PdfExtractionError
from screening.pdf.models import ExtractionResult


class PyMuPdfAdapter(BasePdfExtractor):
    """Reads the PDF text layer with PyMuPDF."""

    def extract(self, pdf_bytes: bytes) -> ExtractionResult:
        try:
            with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                texts = [page.get_text() for page in doc]
                image_count = sum(len(page.get_images(full=True)) for page in doc)
                page_count = doc.page_count
        except Exception as exc:
            raise PdfExtractionError(f"pymupdf extraction failed: {exc}") from exc
        return ExtractionResult(
            text="\n".join(texts).strip(),
            page_count=page_count,
            image_count=image_count,
        )
