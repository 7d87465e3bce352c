from collections.abc import Sequence
from pathlib import Path

from screening.citations.detector import CitationDetector
from screening.citations.models import Jurisdiction
from screening.config.settings import Settings
from screening.database.repositories.case_repository import CaseRepository
from screening.evaluation.factory import ElementEvaluatorFactory
from screening.extraction.charges import ChargeExtractor
from screening.extraction.identity import IdentityExtractor
from screening.extraction.layout import load_layout
from screening.extraction.narrative import NarrativeExtractor
from screening.extraction.priors import PriorsParser
from screening.logging.logger import Log
from screening.ocr.factory import OcrAdapterFactory
from screening.ocr.models import OcrProviderChoice
from screening.ocr.orchestrator import OcrOrchestrator
from screening.pdf.factory import PdfExtractorFactory
from screening.processor.exceptions import NoDocumentsError
from screening.processor.file_loader import FileLoader
from screening.processor.models import AnalysisBundle, RawDocument, StatuteEvaluation
from screening.processor.pipeline import PipelineContext, PipelineStep
from screening.processor.steps import (
    BuildAssessmentsStep,
    DetectCitationsStep,
    EvaluateElementsStep,
    ExtractFieldsStep,
    MergeTextStep,
    ParsePriorsStep,
    ReadDocumentsStep,
    ResolveStatutesStep,
    SummarizeCaseStep,
)
from screening.quality.garble_detector import GarbleDetector
from screening.statutes.resolver import StatuteResolver
from screening.summary.factory import CaseSummarizerFactory

STATUS_ANALYZED = "analyzed"
STATUS_NEEDS_REVIEW = "needs_review"


class Processor:
    """Runs the analysis steps over a case's documents.

    Pipeline: read -> merge -> citations -> fields -> priors -> statutes ->
    elements -> assessments -> summaries. A document that yields no text still flows
    through and produces empty results.
    """

    def __init__(self, steps: Sequence[PipelineStep]) -> None:
        self._steps = tuple(steps)

    def analyze(self, documents: Sequence[RawDocument]) -> AnalysisBundle:
        context = PipelineContext(documents=list(documents))
        for step in self._steps:
            context = step.run(context)
        return AnalysisBundle(
            documents=tuple(context.document_texts),
            merged_text=context.merged_text,
            citations=tuple(context.citations),
            statutes=tuple(context.statute_results.values()),
            identity=context.identity,
            charges=tuple(context.charges),
            priors=context.priors,
            priors_summary=context.priors_summary,
            case_synopsis=context.case_synopsis,
            officer_narrative=context.officer_narrative,
            assessments=tuple(context.assessments),
            evaluations=tuple(
                StatuteEvaluation(
                    jurisdiction=Jurisdiction(jurisdiction),
                    normalized_key=key,
                    evaluation=evaluation,
                )
                for (jurisdiction, key), evaluation in context.evaluations.items()
            ),
            officer_actions_summary=context.officer_actions_summary,
            case_summary=context.case_summary,
        )


class CaseProcessor:
    """Loads a case's files, analyzes them and stores the bundle."""

    def __init__(
        self,
        processor: Processor,
        case_repo: CaseRepository,
        file_loader: FileLoader,
    ) -> None:
        self._processor = processor
        self._case_repo = case_repo
        self._file_loader = file_loader

    def process(self, case_id: int, job_id: int) -> AnalysisBundle:
        """Analyze every document of a case and persist the result.

        Raises:
            CaseNotFoundError: if the case does not exist.
            NoDocumentsError: if the case has no documents.
            FileReadError: if a document file cannot be read.
        """
        Log.info(f"Processing case {case_id} for job {job_id}")
        records = self._case_repo.find_documents(case_id)
        if not records:
            raise NoDocumentsError(f"Case {case_id} has no documents to analyze")
        documents = [self._file_loader.load(record) for record in records]

        bundle = self._processor.analyze(documents)
        status = STATUS_NEEDS_REVIEW if bundle.needs_review else STATUS_ANALYZED
        self._case_repo.save_analysis(case_id, bundle.to_payload(), status)
        Log.info(
            f"Case {case_id} analyzed",
            status=status,
            documents=len(documents),
            charges=len(bundle.charges),
        )
        return bundle


def build_pipeline(
    settings: Settings,
    ocr_provider: OcrProviderChoice,
    statute_resolver: StatuteResolver,
) -> Processor:
    """Build the analysis pipeline with all required adapters."""
    layout = load_layout(settings.extraction_layout_path)
    ocr_adapter = OcrAdapterFactory.create(ocr_provider)
    ocr = OcrOrchestrator(ocr_provider, adapters=[ocr_adapter] if ocr_adapter else [])
    return Processor(
        steps=[
            ReadDocumentsStep(PdfExtractorFactory.create(settings), GarbleDetector(), ocr),
            MergeTextStep(),
            DetectCitationsStep(CitationDetector()),
            ExtractFieldsStep(
                IdentityExtractor(), ChargeExtractor(layout), NarrativeExtractor(layout)
            ),
            ParsePriorsStep(PriorsParser(layout)),
            ResolveStatutesStep(statute_resolver, settings.statute_resolve_workers),
            EvaluateElementsStep(ElementEvaluatorFactory.create(settings)),
            BuildAssessmentsStep(),
            SummarizeCaseStep(CaseSummarizerFactory.create(settings)),
        ]
    )


def build_processor(
    settings: Settings,
    ocr_provider: OcrProviderChoice,
    statute_resolver: StatuteResolver,
    files_root: Path | None = None,
) -> CaseProcessor:
    """Build a CaseProcessor backed by the database and the local file store."""
    return CaseProcessor(
        processor=build_pipeline(settings, ocr_provider, statute_resolver),
        case_repo=CaseRepository(),
        file_loader=FileLoader(files_root=files_root or settings.files_root),
    )
