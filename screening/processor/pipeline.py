from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from screening.citations.models import Citation
from screening.evaluation.models import ElementEvaluation
from screening.extraction.models import CaseIdentity, ChargeCandidate, PriorsSummary
from screening.processor.models import ChargeAssessment, DocumentText, RawDocument
from screening.statutes.models import StatuteResult


@dataclass(slots=True)
class PipelineContext:
    documents: list[RawDocument]
    document_texts: list[DocumentText] = field(default_factory=list)
    merged_text: str = ""
    citations: list[Citation] = field(default_factory=list)
    identity: CaseIdentity = field(default_factory=CaseIdentity)
    charges: list[ChargeCandidate] = field(default_factory=list)
    case_synopsis: str | None = None
    officer_narrative: str = ""
    priors: PriorsSummary | None = None
    priors_summary: str | None = None
    statute_results: dict[tuple[str, str], StatuteResult] = field(default_factory=dict)
    evaluations: dict[tuple[str, str], ElementEvaluation] = field(default_factory=dict)
    assessments: list[ChargeAssessment] = field(default_factory=list)
    officer_actions_summary: str | None = None
    case_summary: str | None = None


class PipelineStep(ABC):
    @abstractmethod
    def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError
