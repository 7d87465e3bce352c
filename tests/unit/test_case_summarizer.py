import json
from unittest.mock import MagicMock

import pytest

from screening.evaluation.client_base import BaseEvaluationClient
from screening.evaluation.exceptions import EvaluationError, EvaluationNetworkError
from screening.summary.extractive import ExtractiveCaseSummarizer, preview
from screening.summary.llm_summarizer import (
    SUMMARY_SCHEMA_NAME,
    LlmCaseSummarizer,
    read_summary,
)
from screening.summary.models import CaseFacts

OFFICER_ACTIONS = (
    "I responded to a report of a person acting suspiciously near the store. "
    "The subject knowingly possessed a controlled substance and a glass pipe. "
) * 3
FACTS = CaseFacts(
    case_number="2023-12345",
    defendant_name="Roberts, Chandee",
    merged_text="Case #: 2023-12345\n" + OFFICER_ACTIONS,
    case_synopsis=OFFICER_ACTIONS,
    charges=(("58-37-8", "Possession of a controlled substance"),),
)


def _summarizer(response: str | Exception) -> tuple[LlmCaseSummarizer, MagicMock]:
    client = MagicMock(spec=BaseEvaluationClient)
    if isinstance(response, Exception):
        client.create_chat_completion.side_effect = response
    else:
        client.create_chat_completion.return_value = response
    summarizer = LlmCaseSummarizer(client=client, model="m", fallback=ExtractiveCaseSummarizer())
    return summarizer, client


class TestPreview:
    def test_short_text_is_kept(self) -> None:
        assert preview("  Officer arrived.  ") == "Officer arrived."

    def test_long_text_is_truncated(self) -> None:
        assert preview("x" * 301) == "x" * 300 + "..."


class TestExtractiveCaseSummarizer:
    def test_officer_actions_are_trimmed(self) -> None:
        summary = ExtractiveCaseSummarizer().summarize_officer_actions(OFFICER_ACTIONS, None)
        assert summary == OFFICER_ACTIONS.strip()[:300] + "..."

    def test_writes_no_case_narrative(self) -> None:
        assert ExtractiveCaseSummarizer().summarize_case(FACTS) is None


class TestReadSummary:
    def test_reads_summary(self) -> None:
        assert read_summary('{"summary": " Officer arrested the subject. "}') == (
            "Officer arrested the subject."
        )

    def test_rejects_invalid_json(self) -> None:
        with pytest.raises(EvaluationError, match="Invalid JSON"):
            read_summary("The officer arrested the subject.")

    def test_rejects_missing_summary(self) -> None:
        with pytest.raises(EvaluationError, match="'summary' string"):
            read_summary('{"text": "x"}')


class TestLlmCaseSummarizer:
    def test_officer_actions_summary(self) -> None:
        response = json.dumps({"summary": "The officer arrested the subject."})
        summarizer, client = _summarizer(response)

        assert summarizer.summarize_officer_actions(OFFICER_ACTIONS, "2023-12345") == (
            "The officer arrested the subject."
        )
        kwargs = client.create_chat_completion.call_args.kwargs
        assert kwargs["schema_name"] == SUMMARY_SCHEMA_NAME
        assert kwargs["json_schema"]["required"] == ["summary"]
        assert "CASE NUMBER: 2023-12345" in kwargs["user_prompt"]
        assert "glass pipe" in kwargs["user_prompt"]

    def test_officer_actions_fall_back_on_network_error(self) -> None:
        summarizer, _ = _summarizer(EvaluationNetworkError("down"))
        summary = summarizer.summarize_officer_actions(OFFICER_ACTIONS, "2023-12345")
        assert summary == preview(OFFICER_ACTIONS)

    def test_blank_model_summary_falls_back(self) -> None:
        summarizer, _ = _summarizer('{"summary": "   "}')
        summary = summarizer.summarize_officer_actions(OFFICER_ACTIONS, None)
        assert summary == preview(OFFICER_ACTIONS)

    def test_case_summary_prompt_carries_case_facts(self) -> None:
        summarizer, client = _summarizer('{"summary": "On the date of the incident..."}')

        assert summarizer.summarize_case(FACTS) == "On the date of the incident..."
        prompt = client.create_chat_completion.call_args.kwargs["user_prompt"]
        assert "DEFENDANT: Roberts, Chandee" in prompt
        assert "- 58-37-8: Possession of a controlled substance" in prompt

    def test_case_summary_falls_back_on_bad_response(self) -> None:
        summarizer, _ = _summarizer("not json")
        assert summarizer.summarize_case(FACTS) is None

    def test_empty_case_text_skips_model(self) -> None:
        summarizer, client = _summarizer('{"summary": "x"}')
        empty = CaseFacts(case_number=None, defendant_name=None, merged_text="  ")
        assert summarizer.summarize_case(empty) is None
        client.create_chat_completion.assert_not_called()
