from dataclasses import asdict, dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from screening.citations.models import Citation, Jurisdiction
from screening.evaluation.models import ElementEvaluation
from screening.extraction.models import CaseIdentity, ChargeCandidate, PriorsSummary
from screening.ocr.orchestrator import TextSource
from screening.statutes.models import StatuteFailure, StatuteRecord, StatuteResult


@dataclass(frozen=True)
class RawDocument:
    """PDF bytes for one case document."""

    document_id: int | None
    filename: str
    pdf_bytes: bytes


@dataclass(frozen=True)
class DocumentSummary:
    page_count: int
    text_length: int
    image_count: int
    ocr_used: bool


@dataclass(frozen=True)
class DocumentText:
    """Final text of one document and how it was obtained."""

    document_id: int | None
    filename: str
    text: str
    source: TextSource
    garbled: bool
    garble_reasons: tuple[str, ...]
    summary: DocumentSummary


@dataclass(frozen=True)
class ChargeAssessment:
    """A charge, or a detected citation standing in for one, with its statute and evaluation."""

    charge: ChargeCandidate
    statute: StatuteRecord | None = None
    failure: StatuteFailure | None = None
    evaluation: ElementEvaluation | None = None
    needs_manual_review: bool = False
    review_reason: str | None = None
    citation: Citation | None = None


@dataclass(frozen=True)
class StatuteEvaluation:
    """Element evaluation of one resolved statute against the officer narrative."""

    jurisdiction: Jurisdiction
    normalized_key: str
    evaluation: ElementEvaluation


@dataclass(frozen=True)
class AnalysisBundle:
    """Everything the analysis produced for one case, ready to persist."""

    documents: tuple[DocumentText, ...]
    merged_text: str
    citations: tuple[Citation, ...]
    statutes: tuple[StatuteResult, ...]
    identity: CaseIdentity
    charges: tuple[ChargeCandidate, ...]
    priors: PriorsSummary | None
    priors_summary: str | None
    case_synopsis: str | None
    officer_narrative: str
    assessments: tuple[ChargeAssessment, ...] = field(default_factory=tuple)
    evaluations: tuple[StatuteEvaluation, ...] = field(default_factory=tuple)
    officer_actions_summary: str | None = None
    case_summary: str | None = None

    @property
    def needs_review(self) -> bool:
        return any(a.needs_manual_review for a in self.assessments)

    def to_payload(self) -> dict[str, Any]:
        """JSON-ready dict: enums become values, datetimes ISO strings."""
        return asdict(self, dict_factory=_json_dict)


def _json_value(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, (list, tuple)):
        return [_json_value(item) for item in value]
    return value


def _json_dict(items: list[tuple[str, Any]]) -> dict[str, Any]:
    return {key: _json_value(value) for key, value in items}
