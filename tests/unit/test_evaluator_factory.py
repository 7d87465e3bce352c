"""Tests for ElementEvaluatorFactory."""

from unittest.mock import patch

import pytest

from screening.config.settings import Settings
from screening.evaluation.factory import ElementEvaluatorFactory
from screening.evaluation.keyword_evaluator import KeywordElementEvaluator
from screening.evaluation.llm_evaluator import LlmElementEvaluator


class TestElementEvaluatorFactory:
    def test_creates_keyword_evaluator_by_default(self) -> None:
        evaluator = ElementEvaluatorFactory.create(Settings(element_evaluator="keyword"))
        assert isinstance(evaluator, KeywordElementEvaluator)

    def test_creates_llm_evaluator(self) -> None:
        settings = Settings(
            element_evaluator="openai",
            element_evaluator_api_key="k",
            element_evaluator_model_name="gpt-4o-mini",
            element_evaluator_timeout_seconds=42,
        )
        with patch("screening.evaluation.factory.OpenAIClientAdapter") as mock_adapter:
            evaluator = ElementEvaluatorFactory.create(settings)
        assert isinstance(evaluator, LlmElementEvaluator)
        mock_adapter.assert_called_once_with(api_key="k", timeout_seconds=42, base_url=None)

    def test_requires_model_name(self) -> None:
        settings = Settings(element_evaluator="openai", element_evaluator_api_key="k")
        with pytest.raises(ValueError, match="element_evaluator_model_name is required"):
            ElementEvaluatorFactory.create(settings)

    def test_uses_provider_default_base_url(self) -> None:
        settings = Settings(
            element_evaluator="groq",
            element_evaluator_api_key="k",
            element_evaluator_model_name="m",
        )
        with patch("screening.evaluation.factory.OpenAIClientAdapter") as mock_adapter:
            ElementEvaluatorFactory.create(settings)
        mock_adapter.assert_called_once_with(
            api_key="k",
            timeout_seconds=30,
            base_url="https://api.groq.com/openai/v1",
        )

    def test_openai_compatible_requires_base_url(self) -> None:
        settings = Settings(
            element_evaluator="openai_compatible",
            element_evaluator_model_name="m",
        )
        with pytest.raises(ValueError, match="element_evaluator_base_url is required"):
            ElementEvaluatorFactory.create(settings)

    def test_unknown_provider_raises(self) -> None:
        settings = Settings(element_evaluator="nope", element_evaluator_model_name="m")
        with pytest.raises(ValueError, match="Unknown element evaluator"):
            ElementEvaluatorFactory.create(settings)

    def test_keyword_evaluator_has_no_client(self) -> None:
        assert ElementEvaluatorFactory.create_client(Settings(element_evaluator="keyword")) is None

    def test_creates_shared_client(self) -> None:
        settings = Settings(
            element_evaluator="openrouter",
            element_evaluator_api_key="k",
            element_evaluator_model_name="m",
        )
        with patch("screening.evaluation.factory.OpenAIClientAdapter") as mock_adapter:
            client = ElementEvaluatorFactory.create_client(settings)
        assert client is mock_adapter.return_value
        mock_adapter.assert_called_once_with(
            api_key="k", timeout_seconds=30, base_url="https://openrouter.ai/api/v1"
        )
