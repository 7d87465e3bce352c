class ProcessorError(Exception):
    """Base exception for all processor-related errors."""


class CaseNotFoundError(ProcessorError):
    """Raised when a case cannot be found in the database."""


class NoDocumentsError(ProcessorError):
    """Raised when a case has no documents to analyze."""


class UnsupportedStorageDiskError(ProcessorError):
    """Raised when a document uses an unsupported storage disk type."""


class FileReadError(ProcessorError):
    """Raised when a file cannot be read from disk."""
