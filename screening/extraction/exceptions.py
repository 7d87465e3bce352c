class LayoutError(Exception):
    """Raised when a document layout file is missing or malformed."""
