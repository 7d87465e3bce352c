from abc import ABC, abstractmethod

from screening.pdf.models import ExtractionResult


class BasePdfExtractor(ABC):
    """Contract for all PDF text extraction adapters."""

    @abstractmethod
    def extract(self, pdf_bytes: bytes) -> ExtractionResult:
        """Extract the text layer, page count and image count from PDF bytes.

        Args:
            pdf_bytes: Raw PDF file content.

        Returns:
            ExtractionResult with page texts joined by newlines.

        Raises:
            PdfExtractionError: if the document cannot be read at all.
        """
