from typing import ClassVar

from screening.config.settings import Settings
from screening.evaluation.base import BaseElementEvaluator
from screening.evaluation.client_base import BaseEvaluationClient
from screening.evaluation.keyword_evaluator import KeywordElementEvaluator
from screening.evaluation.llm_evaluator import LlmElementEvaluator
from screening.evaluation.openai_client_adapter import OpenAIClientAdapter


class ElementEvaluatorFactory:
    """Creates the configured element evaluator."""

    OPENAI_COMPATIBLE_BASE_URLS: ClassVar[dict[str, str]] = {
        "openrouter": "https://openrouter.ai/api/v1",
        "groq": "https://api.groq.com/openai/v1",
        "together": "https://api.together.xyz/v1",
        "deepseek": "https://api.deepseek.com/v1",
        "ollama": "http://localhost:11434/v1",
    }

    @classmethod
    def create(cls, settings: Settings) -> BaseElementEvaluator:
        """Create an element evaluator from application settings."""
        keyword = KeywordElementEvaluator()
        client = cls.create_client(settings)
        if client is None:
            return keyword
        return LlmElementEvaluator(
            client=client,
            model=settings.element_evaluator_model_name.strip(),
            fallback=keyword,
        )

    @classmethod
    def create_client(cls, settings: Settings) -> BaseEvaluationClient | None:
        """Chat client for the configured provider; None for the keyword evaluator."""
        provider = settings.element_evaluator.lower()
        if provider == "keyword":
            return None
        if not settings.element_evaluator_model_name.strip():
            raise ValueError(
                f"element_evaluator_model_name is required for element_evaluator={provider}"
            )
        return OpenAIClientAdapter(
            api_key=settings.element_evaluator_api_key,
            timeout_seconds=settings.element_evaluator_timeout_seconds,
            base_url=cls._resolve_base_url(provider, settings),
        )

    @classmethod
    def _resolve_base_url(cls, provider: str, settings: Settings) -> str | None:
        configured = settings.element_evaluator_base_url.strip()
        if provider == "openai":
            return configured or None
        if provider == "openai_compatible":
            if not configured:
                raise ValueError(
                    "element_evaluator_base_url is required for "
                    "element_evaluator=openai_compatible"
                )
            return configured
        default_base_url = cls.OPENAI_COMPATIBLE_BASE_URLS.get(provider)
        if default_base_url is not None:
            return configured or default_base_url
        supported = [
            "keyword",
            "openai",
            "openai_compatible",
            *sorted(cls.OPENAI_COMPATIBLE_BASE_URLS),
        ]
        raise ValueError(
            f"Unknown element evaluator '{provider}'. Choose from: {supported}"
        )
