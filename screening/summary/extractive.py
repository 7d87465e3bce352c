from screening.summary.base import BaseCaseSummarizer
from screening.summary.models import CaseFacts

PREVIEW_CHARS = 300


def preview(text: str, limit: int = PREVIEW_CHARS) -> str:
    text = text.strip()
    return text[:limit] + ("..." if len(text) > limit else "")


class ExtractiveCaseSummarizer(BaseCaseSummarizer):
    """Summaries without a language model: the officer's actions trimmed, no case narrative."""

    def summarize_officer_actions(self, officer_actions: str, case_number: str | None) -> str:
        return preview(officer_actions)

    def summarize_case(self, facts: CaseFacts) -> str | None:
        return None
