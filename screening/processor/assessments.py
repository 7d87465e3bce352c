"""Pairs each extracted charge with its statute and element evaluation."""

from collections.abc import Mapping, Sequence

from screening.citations.models import Citation, Jurisdiction
from screening.evaluation.models import ElementEvaluation
from screening.extraction.models import ChargeCandidate
from screening.processor.models import ChargeAssessment
from screening.statutes.models import FailureReason, StatuteFailure, StatuteRecord, StatuteResult

FAILURE_DESCRIPTIONS: dict[FailureReason, str] = {
    FailureReason.NOT_FOUND: "Statute text was not found at the legal-code source.",
    FailureReason.NETWORK_ERROR: "The legal-code source could not be reached.",
    FailureReason.RATE_LIMITED: "The legal-code source is rate limiting requests.",
    FailureReason.PARSE_ERROR: "Statute text could not be extracted reliably.",
    FailureReason.UNSUPPORTED: "No legal-code source is configured for this jurisdiction.",
}

StatuteKey = tuple[str, str]


def describe_failure(failure: StatuteFailure) -> str:
    return f"{failure.normalized_key}: {FAILURE_DESCRIPTIONS[failure.reason]}"


def charge_statute_key(charge: ChargeCandidate) -> StatuteKey:
    return Jurisdiction.UTAH.value, charge.code


def citation_charge(citation: Citation, result: StatuteResult | None) -> ChargeCandidate:
    """Stand-in charge for a citation found in the text when no charge table exists."""
    title = result.title if isinstance(result, StatuteRecord) else None
    return ChargeCandidate(code=citation.normalized_key, charge_name=title or citation.raw)


def _assess(
    charge: ChargeCandidate,
    result: StatuteResult | None,
    evaluation: ElementEvaluation | None,
    citation: Citation | None = None,
) -> ChargeAssessment:
    if isinstance(result, StatuteRecord):
        return ChargeAssessment(
            charge=charge, statute=result, evaluation=evaluation, citation=citation
        )
    failure = result if isinstance(result, StatuteFailure) else None
    return ChargeAssessment(
        charge=charge,
        failure=failure,
        needs_manual_review=True,
        review_reason=describe_failure(failure)
        if failure is not None
        else f"{charge.code}: Statute was not looked up.",
        citation=citation,
    )


def build_assessments(
    charges: Sequence[ChargeCandidate],
    citations: Sequence[Citation],
    statute_results: Mapping[StatuteKey, StatuteResult],
    evaluations: Mapping[StatuteKey, ElementEvaluation],
) -> list[ChargeAssessment]:
    """One assessment per charge; unresolved statutes need manual review.

    Without a charge table the detected citations are assessed instead, one per
    distinct ``(jurisdiction, key)``.
    """
    if charges:
        return [
            _assess(
                charge,
                statute_results.get(charge_statute_key(charge)),
                evaluations.get(charge_statute_key(charge)),
            )
            for charge in charges
        ]

    seen: set[StatuteKey] = set()
    assessments: list[ChargeAssessment] = []
    for citation in citations:
        if citation.cache_key in seen:
            continue
        seen.add(citation.cache_key)
        result = statute_results.get(citation.cache_key)
        assessments.append(
            _assess(
                citation_charge(citation, result),
                result,
                evaluations.get(citation.cache_key),
                citation=citation,
            )
        )
    return assessments
