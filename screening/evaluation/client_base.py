from abc import ABC, abstractmethod


class BaseEvaluationClient(ABC):
    """Contract for provider-specific element evaluation AI clients."""

    @abstractmethod
    def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
        json_schema: dict[str, object],
        schema_name: str = "element_evaluation",
    ) -> str:
        """Return provider response as plain text."""
