from screening.summary.base import BaseCaseSummarizer
from screening.summary.extractive import ExtractiveCaseSummarizer
from screening.summary.factory import CaseSummarizerFactory
from screening.summary.llm_summarizer import LlmCaseSummarizer

__all__ = [
    "BaseCaseSummarizer",
    "CaseSummarizerFactory",
    "ExtractiveCaseSummarizer",
    "LlmCaseSummarizer",
]
