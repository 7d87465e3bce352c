from abc import ABC, abstractmethod

from screening.evaluation.models import ElementEvaluation


class BaseElementEvaluator(ABC):
    """Contract for all element evaluators."""

    @abstractmethod
    def evaluate(self, narrative: str, statute_text: str) -> ElementEvaluation:
        """Compare the officer narrative against a statute's elements.

        Args:
            narrative: Officer narrative extracted from the report.
            statute_text: Validated statute text.

        Returns:
            ElementEvaluation with an overall status and per-element checks.
        """
