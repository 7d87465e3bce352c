class EvaluationError(Exception):
    """Raised when element evaluation fails."""


class EvaluationValidationError(EvaluationError):
    """Raised when a model response does not match the evaluation shape."""


class EvaluationNetworkError(EvaluationError):
    """Raised when the AI provider call fails due to network/infrastructure issues."""
