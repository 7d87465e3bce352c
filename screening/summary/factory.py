from screening.config.settings import Settings
from screening.evaluation.factory import ElementEvaluatorFactory
from screening.summary.base import BaseCaseSummarizer
from screening.summary.extractive import ExtractiveCaseSummarizer
from screening.summary.llm_summarizer import LlmCaseSummarizer


class CaseSummarizerFactory:
    """Creates the configured case summarizer."""

    @classmethod
    def create(cls, settings: Settings) -> BaseCaseSummarizer:
        """Create a case summarizer from application settings.

        ``llm`` reuses the element evaluator's provider, credentials and model.
        """
        kind = settings.case_summarizer.strip().lower()
        extractive = ExtractiveCaseSummarizer()
        if kind == "extractive":
            return extractive
        if kind != "llm":
            raise ValueError(
                f"Unknown case summarizer '{kind}'. Choose from: ['extractive', 'llm']"
            )
        client = ElementEvaluatorFactory.create_client(settings)
        if client is None:
            raise ValueError("case_summarizer=llm requires a language-model element_evaluator")
        return LlmCaseSummarizer(
            client=client,
            model=settings.element_evaluator_model_name.strip(),
            fallback=extractive,
        )
