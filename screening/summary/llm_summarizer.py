"""Case summaries written by an OpenAI-compatible language model."""

import json
from pathlib import Path

from screening.evaluation.client_base import BaseEvaluationClient
from screening.evaluation.exceptions import EvaluationError
from screening.evaluation.prompt_loader import load_json_schema, load_prompt_template
from screening.logging.logger import Log
from screening.summary.base import BaseCaseSummarizer
from screening.summary.models import CaseFacts

_PROMPT_DIR = Path(__file__).parent / "prompts"

MAX_OFFICER_ACTIONS_CHARS = 4000
MAX_CASE_TEXT_CHARS = 25000
SUMMARY_SCHEMA_NAME = "case_summary"


def read_summary(raw: str) -> str:
    """Pull the summary string out of a model response.

    Raises:
        EvaluationError: when the response is not the expected JSON object.
    """
    try:
        parsed = json.loads(raw.strip())
    except json.JSONDecodeError as exc:
        raise EvaluationError(f"Invalid JSON response: {exc}") from exc
    if not isinstance(parsed, dict) or not isinstance(parsed.get("summary"), str):
        raise EvaluationError("Response must be an object with a 'summary' string")
    return parsed["summary"].strip()


class LlmCaseSummarizer(BaseCaseSummarizer):
    """Asks a language model for the summaries.

    Model failures are logged and answered by ``fallback``.
    """

    def __init__(
        self,
        *,
        client: BaseEvaluationClient,
        model: str,
        fallback: BaseCaseSummarizer,
        temperature: float = 0.2,
    ) -> None:
        self._client = client
        self._model = model
        self._fallback = fallback
        self._temperature = temperature
        self._officer_prompt = load_prompt_template(_PROMPT_DIR / "officer_actions_prompt.txt")
        self._case_prompt = load_prompt_template(_PROMPT_DIR / "case_summary_prompt.txt")
        self._json_schema = load_json_schema(_PROMPT_DIR / "summary_schema.json")
        self._json_schema_dict = json.loads(self._json_schema)

    def summarize_officer_actions(self, officer_actions: str, case_number: str | None) -> str:
        prompt = self._officer_prompt.format(
            json_schema=self._json_schema,
            case_number=case_number or "Unknown",
            officer_actions=officer_actions[:MAX_OFFICER_ACTIONS_CHARS],
        )
        try:
            summary = self._complete(prompt)
        except EvaluationError as exc:
            Log.warning(f"Officer actions summary by model failed: {exc}", case_number=case_number)
            return self._fallback.summarize_officer_actions(officer_actions, case_number)
        return summary or self._fallback.summarize_officer_actions(officer_actions, case_number)

    def summarize_case(self, facts: CaseFacts) -> str | None:
        if not facts.merged_text.strip():
            return self._fallback.summarize_case(facts)
        charges = "\n".join(f"- {code}: {name}" for code, name in facts.charges) or "None listed."
        prompt = self._case_prompt.format(
            json_schema=self._json_schema,
            case_number=facts.case_number or "Unknown",
            defendant_name=facts.defendant_name or "Unknown",
            charges=charges,
            case_synopsis=facts.case_synopsis or "Not available.",
            case_text=facts.merged_text[:MAX_CASE_TEXT_CHARS],
        )
        try:
            summary = self._complete(prompt)
        except EvaluationError as exc:
            Log.warning(f"Case summary by model failed: {exc}", case_number=facts.case_number)
            return self._fallback.summarize_case(facts)
        Log.info("Case summary written", case_number=facts.case_number, chars=len(summary))
        return summary or self._fallback.summarize_case(facts)

    def _complete(self, prompt: str) -> str:
        raw = self._client.create_chat_completion(
            model=self._model,
            temperature=self._temperature,
            system_prompt="",
            user_prompt=prompt,
            json_schema=self._json_schema_dict,
            schema_name=SUMMARY_SCHEMA_NAME,
        )
        return read_summary(raw)
