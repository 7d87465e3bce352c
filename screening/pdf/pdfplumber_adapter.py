import io

import pdfplumber

from screening.pdf.base import BasePdfExtractor
from screening.pdf.exceptions import PdfExtractionError
from screening.pdf.models import ExtractionResult


class PdfPlumberAdapter(BasePdfExtractor):
    """Reads the PDF text layer with pdfplumber."""

    def extract(self, pdf_bytes: bytes) -> ExtractionResult:
        try:
            with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
                texts = [page.extract_text() or "" for page in pdf.pages]
                image_count = sum(len(page.images) for page in pdf.pages)
                page_count = len(pdf.pages)
        except Exception as exc:
            raise PdfExtractionError(f"pdfplumber extraction failed: {exc}") from exc
        return ExtractionResult(
            text="\n".join(texts).strip(),
            page_count=page_count,
            image_count=image_count,
        )
