from functools import reduce

from screening.citations.detector import CitationDetector
from screening.citations.models import Citation, Jurisdiction
from screening.evaluation.base import BaseElementEvaluator
from screening.extraction.charges import ChargeExtractor
from screening.extraction.identity import IdentityExtractor
from screening.extraction.narrative import NarrativeExtractor
from screening.extraction.priors import PriorsParser, summarize_priors
from screening.logging.logger import Log
from screening.ocr.orchestrator import OcrOrchestrator
from screening.pdf.base import BasePdfExtractor
from screening.pdf.exceptions import PdfExtractionError
from screening.pdf.models import ExtractionResult
from screening.processor.assessments import build_assessments
from screening.processor.models import DocumentSummary, DocumentText, RawDocument
from screening.processor.pipeline import PipelineContext, PipelineStep
from screening.quality.garble_detector import GarbleDetector
from screening.statutes.models import StatuteRecord
from screening.statutes.resolver import StatuteResolver
from screening.summary.base import BaseCaseSummarizer
from screening.summary.models import CaseFacts

MIN_SUMMARY_NARRATIVE_CHARS = 50


class ReadDocumentsStep(PipelineStep):
    """Extract -> assess -> OCR if garbled -> pick text, per document."""

    def __init__(
        self,
        pdf_extractor: BasePdfExtractor,
        garble_detector: GarbleDetector,
        ocr: OcrOrchestrator,
    ) -> None:
        self._pdf_extractor = pdf_extractor
        self._garble_detector = garble_detector
        self._ocr = ocr

    def run(self, context: PipelineContext) -> PipelineContext:
        context.document_texts = [self._read(document) for document in context.documents]
        return context

    def _read(self, document: RawDocument) -> DocumentText:
        try:
            extraction = self._pdf_extractor.extract(document.pdf_bytes)
        except PdfExtractionError as exc:
            Log.warning(f"Text extraction failed for '{document.filename}': {exc}")
            extraction = ExtractionResult.empty()

        verdict = self._garble_detector.assess(extraction.text)
        ocr_text = self._ocr.ocr_if_needed(document.pdf_bytes, verdict)
        text, source = self._ocr.choose(extraction.text, ocr_text, verdict)
        Log.info(
            f"Read document '{document.filename}'",
            source=source.value,
            chars=len(text),
            garbled=verdict.garbled,
        )
        return DocumentText(
            document_id=document.document_id,
            filename=document.filename,
            text=text,
            source=source,
            garbled=verdict.garbled,
            garble_reasons=verdict.reasons,
            summary=DocumentSummary(
                page_count=extraction.page_count or 0,
                text_length=len(text),
                image_count=extraction.image_count,
                ocr_used=bool(ocr_text.strip()),
            ),
        )


def _append_text(merged: str, document: DocumentText) -> str:
    if not document.text:
        return merged
    return f"{merged}\n\n{document.text}" if merged else document.text


class MergeTextStep(PipelineStep):
    def run(self, context: PipelineContext) -> PipelineContext:
        context.merged_text = reduce(_append_text, context.document_texts, "")
        Log.info(
            f"Merged text of {len(context.document_texts)} documents",
            chars=len(context.merged_text),
        )
        return context


class DetectCitationsStep(PipelineStep):
    def __init__(self, detector: CitationDetector) -> None:
        self._detector = detector

    def run(self, context: PipelineContext) -> PipelineContext:
        context.citations = self._detector.detect(context.merged_text)
        Log.info(f"Detected {len(context.citations)} citations")
        return context


class ExtractFieldsStep(PipelineStep):
    def __init__(
        self,
        identity: IdentityExtractor,
        charges: ChargeExtractor,
        narrative: NarrativeExtractor,
    ) -> None:
        self._identity = identity
        self._charges = charges
        self._narrative = narrative

    def run(self, context: PipelineContext) -> PipelineContext:
        text = context.merged_text
        context.identity = self._identity.extract(text)
        context.charges = self._charges.extract(text)
        context.case_synopsis = self._narrative.extract_case_synopsis(text)
        context.officer_narrative = self._narrative.extract_officer_narrative(text)
        Log.info(
            "Extracted case fields",
            case_number=context.identity.case_number,
            charges=len(context.charges),
            synopsis=context.case_synopsis is not None,
        )
        return context


class ParsePriorsStep(PipelineStep):
    def __init__(self, parser: PriorsParser) -> None:
        self._parser = parser

    def run(self, context: PipelineContext) -> PipelineContext:
        context.priors = self._parser.extract(context.merged_text)
        context.priors_summary = summarize_priors(context.priors)
        return context


class ResolveStatutesStep(PipelineStep):
    """Resolves detected citations and every charge code as a Utah citation."""

    def __init__(self, resolver: StatuteResolver, max_workers: int) -> None:
        self._resolver = resolver
        self._max_workers = max_workers

    def run(self, context: PipelineContext) -> PipelineContext:
        charge_citations = [
            Citation(raw=charge.code, normalized_key=charge.code, jurisdiction=Jurisdiction.UTAH)
            for charge in context.charges
        ]
        context.statute_results = self._resolver.resolve_all(
            [*context.citations, *charge_citations],
            max_workers=self._max_workers,
        )
        resolved = sum(1 for r in context.statute_results.values() if isinstance(r, StatuteRecord))
        Log.info(f"Resolved {resolved} of {len(context.statute_results)} statutes")
        return context


class EvaluateElementsStep(PipelineStep):
    """Evaluates every resolved statute, from charges and citations alike."""

    def __init__(self, evaluator: BaseElementEvaluator) -> None:
        self._evaluator = evaluator

    def run(self, context: PipelineContext) -> PipelineContext:
        for key, result in context.statute_results.items():
            if not isinstance(result, StatuteRecord):
                continue
            context.evaluations[key] = self._evaluator.evaluate(
                context.officer_narrative, result.text
            )
        Log.info(f"Evaluated elements of {len(context.evaluations)} statutes")
        return context


class BuildAssessmentsStep(PipelineStep):
    def run(self, context: PipelineContext) -> PipelineContext:
        context.assessments = build_assessments(
            context.charges, context.citations, context.statute_results, context.evaluations
        )
        flagged = sum(1 for a in context.assessments if a.needs_manual_review)
        if flagged:
            Log.warning(f"{flagged} assessments need manual review")
        return context


class SummarizeCaseStep(PipelineStep):
    """Reviewer-facing summaries of the officer's actions and of the whole case."""

    def __init__(self, summarizer: BaseCaseSummarizer) -> None:
        self._summarizer = summarizer

    def run(self, context: PipelineContext) -> PipelineContext:
        case_number = context.identity.case_number
        officer_actions = context.case_synopsis
        narrative = context.officer_narrative.strip()
        if not officer_actions and len(narrative) > MIN_SUMMARY_NARRATIVE_CHARS:
            officer_actions = narrative
        if officer_actions:
            context.officer_actions_summary = self._summarizer.summarize_officer_actions(
                officer_actions, case_number
            )
        context.case_summary = self._summarizer.summarize_case(
            CaseFacts(
                case_number=case_number,
                defendant_name=context.identity.defendant_name,
                merged_text=context.merged_text,
                case_synopsis=context.case_synopsis,
                charges=tuple((c.code, c.charge_name) for c in context.charges),
            )
        )
        return context
