from abc import ABC, abstractmethod

from screening.summary.models import CaseFacts


class BaseCaseSummarizer(ABC):
    """Contract for the reviewer-facing case summaries."""

    @abstractmethod
    def summarize_officer_actions(self, officer_actions: str, case_number: str | None) -> str:
        """Condense the officer's actions into a few sentences."""

    @abstractmethod
    def summarize_case(self, facts: CaseFacts) -> str | None:
        """Narrative summary of the whole case, or None when none can be written."""
