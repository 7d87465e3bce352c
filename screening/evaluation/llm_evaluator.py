"""Element evaluation through an OpenAI-compatible language model."""

import json
from pathlib import Path
from typing import Any

from screening.evaluation.base import BaseElementEvaluator
from screening.evaluation.client_base import BaseEvaluationClient
from screening.evaluation.exceptions import EvaluationError, EvaluationValidationError
from screening.evaluation.models import ElementCheck, ElementEvaluation, ElementStatus
from screening.evaluation.prompt_loader import load_json_schema, load_prompt_template
from screening.logging.logger import Log

MAX_STATUTE_CHARS = 8000
MAX_NARRATIVE_CHARS = 12000
MAX_ELEMENTS = 20
MODEL_NOTE = "Screening-only: language-model reading of the narrative against statute text."


def build_evaluation(data: dict[str, Any]) -> ElementEvaluation:
    """Validate a parsed model response and build an ElementEvaluation.

    Raises:
        EvaluationValidationError: when a field is missing or has the wrong type.
    """
    overall = _status(data.get("overall"), "overall")
    raw_elements = data.get("elements")
    if not isinstance(raw_elements, list):
        raise EvaluationValidationError("'elements' must be a list")
    if len(raw_elements) > MAX_ELEMENTS:
        raise EvaluationValidationError(
            f"Too many elements: {len(raw_elements)} (max {MAX_ELEMENTS})"
        )
    elements = tuple(_element(item, i) for i, item in enumerate(raw_elements))
    notes = data.get("notes", [])
    if not isinstance(notes, list) or not all(isinstance(n, str) for n in notes):
        raise EvaluationValidationError("'notes' must be a list of strings")
    return ElementEvaluation(overall=overall, elements=elements, notes=(MODEL_NOTE, *notes))


def _status(raw: Any, where: str) -> ElementStatus:
    try:
        return ElementStatus(raw)
    except ValueError as exc:
        raise EvaluationValidationError(f"'{where}' must be 'met' or 'unclear', got {raw!r}") from exc


def _element(raw: Any, index: int) -> ElementCheck:
    if not isinstance(raw, dict):
        raise EvaluationValidationError(f"Element at index {index} must be an object")
    element = raw.get("element")
    if not element or not isinstance(element, str):
        raise EvaluationValidationError(
            f"Element at index {index}: 'element' must be a non-empty string"
        )
    snippets = raw.get("evidence_snippets", [])
    if not isinstance(snippets, list) or not all(isinstance(s, str) for s in snippets):
        raise EvaluationValidationError(
            f"Element at index {index}: 'evidence_snippets' must be a list of strings"
        )
    return ElementCheck(
        element=element,
        status=_status(raw.get("status"), f"elements[{index}].status"),
        evidence_snippets=tuple(snippets),
    )


class LlmElementEvaluator(BaseElementEvaluator):
    """Asks a language model for the element checks.

    Any EvaluationError (network, bad JSON, bad shape) is logged and the
    keyword evaluator's answer is returned instead.
    """

    def __init__(
        self,
        *,
        client: BaseEvaluationClient,
        model: str,
        fallback: BaseElementEvaluator,
        temperature: float = 0.0,
        prompt_template_path: Path | None = None,
        json_schema_path: Path | None = None,
        system_prompt: str = "",
    ) -> None:
        self._client = client
        self._model = model
        self._fallback = fallback
        self._temperature = max(0.0, min(0.2, temperature))
        self._system_prompt = system_prompt
        self._prompt_template = load_prompt_template(prompt_template_path)
        self._json_schema = load_json_schema(json_schema_path)
        self._json_schema_dict = json.loads(self._json_schema)

    def evaluate(self, narrative: str, statute_text: str) -> ElementEvaluation:
        if not narrative.strip() or not statute_text.strip():
            return self._fallback.evaluate(narrative, statute_text)
        try:
            raw_response = self._client.create_chat_completion(
                model=self._model,
                temperature=self._temperature,
                system_prompt=self._system_prompt,
                user_prompt=self._build_prompt(narrative, statute_text),
                json_schema=self._json_schema_dict,
            )
            Log.debug(f"Element evaluation raw response:\n{raw_response}")
            result = build_evaluation(self._parse_json(raw_response))
        except EvaluationError as exc:
            Log.warning(f"Element evaluation by model failed, using keywords: {exc}")
            return self._fallback.evaluate(narrative, statute_text)

        Log.info(
            "Element evaluation complete",
            overall=result.overall.value,
            elements=len(result.elements),
        )
        return result

    def _build_prompt(self, narrative: str, statute_text: str) -> str:
        return self._prompt_template.format(
            statute_text=statute_text[:MAX_STATUTE_CHARS],
            narrative=narrative[:MAX_NARRATIVE_CHARS],
            json_schema=self._json_schema,
        )

    @staticmethod
    def _parse_json(raw: str) -> dict[str, Any]:
        cleaned = raw.strip()
        if cleaned.startswith("```"):
            lines = cleaned.splitlines()
            if lines and lines[0].startswith("```"):
                lines = lines[1:]
            if lines and lines[-1].strip() == "```":
                lines = lines[:-1]
            cleaned = "\n".join(lines)

        try:
            parsed = json.loads(cleaned)
        except json.JSONDecodeError as exc:
            raise EvaluationError(f"Invalid JSON response: {exc}") from exc

        if not isinstance(parsed, dict):
            raise EvaluationError("JSON response must be an object")
        return parsed
