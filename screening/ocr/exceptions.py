class OcrError(Exception):
    """Raised when an OCR backend cannot produce text."""


class OcrConfigurationError(OcrError):
    """Raised when provider credentials are missing or malformed."""


class OcrNetworkError(OcrError):
    """Raised when the OCR service cannot be reached or returns a server error."""


class OcrRateLimitedError(OcrNetworkError):
    """Raised when the OCR service rejects the call with a rate limit."""
