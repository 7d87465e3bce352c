from screening.evaluation.base import BaseElementEvaluator
from screening.evaluation.factory import ElementEvaluatorFactory
from screening.evaluation.keyword_evaluator import KeywordElementEvaluator
from screening.evaluation.llm_evaluator import LlmElementEvaluator

__all__ = [
    "BaseElementEvaluator",
    "ElementEvaluatorFactory",
    "KeywordElementEvaluator",
    "LlmElementEvaluator",
]
