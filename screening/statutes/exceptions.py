from screening.statutes.models import FailureReason


class StatuteError(Exception):
    """Base exception for statute lookups."""


class StatuteFetchError(StatuteError):
    """Raised when a statute page cannot be fetched; carries the failure reason."""

    def __init__(self, reason: FailureReason, message: str, url: str | None = None) -> None:
        super().__init__(message)
        self.reason = reason
        self.url = url


class BrowserFetchError(StatuteError):
    """Raised when the headless browser cannot load or read a page."""


class StatuteCacheError(StatuteError):
    """Raised when the statute cache backend is unavailable."""
