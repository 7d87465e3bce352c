"""Keyword-overlap element evaluation."""

import math
import re

from screening.evaluation.base import BaseElementEvaluator
from screening.evaluation.models import ElementCheck, ElementEvaluation, ElementStatus

ELEMENT_TRIGGERS = ("commits", "is guilty", "shall", "may not", "unlawful", "a person", "must")
STOP_WORDS = frozenset(
    {
        "the", "and", "or", "of", "to", "in", "on", "for", "with", "without", "by",
        "from", "is", "are", "was", "were", "shall", "may", "must", "not", "person",
        "a", "an",
    }
)
MIN_ELEMENT_CHARS = 15
MAX_ELEMENT_CHARS = 500
MAX_ELEMENTS = 12
FALLBACK_ELEMENTS = 8
MIN_KEYWORD_CHARS = 4
MAX_KEYWORDS = 8
MIN_KEYWORDS_FOR_MET = 2
MAX_SNIPPETS = 3
SNIPPET_BEFORE = 80
SNIPPET_AFTER = 140
MET_FRACTION = 0.6
SCREENING_NOTE = "Screening-only: based on narrative keyword evidence vs statute text."


def build_elements(statute_text: str) -> list[str]:
    """Statute lines that read like elements; the first lines when none do."""
    lines = [
        line.strip()
        for line in re.split(r"\n+", statute_text or "")
        if MIN_ELEMENT_CHARS <= len(line.strip()) <= MAX_ELEMENT_CHARS
    ]
    elements: list[str] = []
    for line in lines:
        lowered = line.lower()
        if any(trigger in lowered for trigger in ELEMENT_TRIGGERS):
            elements.append(line)
        if len(elements) >= MAX_ELEMENTS:
            break
    return elements or lines[:FALLBACK_ELEMENTS]


def keywordize(element: str) -> list[str]:
    words = re.sub(r"[^a-z0-9\s]", " ", element.lower()).split()
    keywords: list[str] = []
    for word in words:
        if len(word) < MIN_KEYWORD_CHARS or word in STOP_WORDS or word in keywords:
            continue
        keywords.append(word)
    return keywords[:MAX_KEYWORDS]


def find_evidence(narrative: str, keywords: list[str]) -> list[str]:
    lowered = narrative.lower()
    snippets: list[str] = []
    for keyword in [k for k in keywords if k in lowered][:MAX_SNIPPETS]:
        index = lowered.index(keyword)
        start = max(0, index - SNIPPET_BEFORE)
        snippets.append(narrative[start : index + SNIPPET_AFTER].strip())
    return snippets


class KeywordElementEvaluator(BaseElementEvaluator):
    """Marks an element met when the narrative mentions its keywords.

    The overall verdict is met when at least 60% of the elements (and at
    least one) are met.
    """

    def evaluate(self, narrative: str, statute_text: str) -> ElementEvaluation:
        checks: list[ElementCheck] = []
        for element in build_elements(statute_text):
            keywords = keywordize(element)
            evidence = find_evidence(narrative or "", keywords)
            met = len(keywords) >= MIN_KEYWORDS_FOR_MET and bool(evidence)
            checks.append(
                ElementCheck(
                    element=element,
                    status=ElementStatus.MET if met else ElementStatus.UNCLEAR,
                    evidence_snippets=tuple(evidence),
                )
            )
        met_count = sum(1 for check in checks if check.status is ElementStatus.MET)
        threshold = max(1, math.floor(len(checks) * MET_FRACTION))
        return ElementEvaluation(
            overall=ElementStatus.MET if met_count >= threshold else ElementStatus.UNCLEAR,
            elements=tuple(checks),
            notes=(SCREENING_NOTE,),
        )
