from abc import ABC, abstractmethod


class BaseOcrAdapter(ABC):
    """Contract for OCR backends."""

    name: str = "ocr"

    @abstractmethod
    def ocr(self, pdf_bytes: bytes) -> str:
        """Return the recognized text of a whole PDF.

        Raises:
            OcrError: on any backend failure.
        """
