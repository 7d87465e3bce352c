class PdfExtractionError(Exception):
    """Raised when a PDF cannot be opened or its text layer read."""


class PdfPageError(PdfExtractionError):
    """Raised when pages cannot be split or rendered."""
