import httpx
import openai

from screening.evaluation.client_base import BaseEvaluationClient
from screening.evaluation.exceptions import EvaluationError, EvaluationNetworkError


class OpenAIClientAdapter(BaseEvaluationClient):
    """Structured-output client built on the OpenAI-compatible chat API."""

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
        client: openai.OpenAI | None = None,
    ) -> None:
        self._client = client or openai.OpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
        )

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
        messages = [{"role": "user", "content": user_prompt}]
        if system_prompt:
            messages.insert(0, {"role": "system", "content": system_prompt})
        try:
            response = self._client.chat.completions.create(
                model=model,
                temperature=temperature,
                response_format={
                    "type": "json_schema",
                    "json_schema": {
                        "name": schema_name,
                        "strict": True,
                        "schema": json_schema,
                    },
                },
                messages=messages,
            )
        except (openai.APIConnectionError, httpx.HTTPError) as exc:
            raise EvaluationNetworkError(f"AI provider network error: {exc}") from exc
        except openai.APIError as exc:
            raise EvaluationNetworkError(f"AI provider API error: {exc}") from exc

        if not response.choices:
            raise EvaluationError("AI returned no choices")
        content = response.choices[0].message.content
        if content is None:
            raise EvaluationError("AI returned empty response")
        return content
