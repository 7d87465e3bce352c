from dataclasses import dataclass, field
from enum import Enum


class ElementStatus(str, Enum):
    MET = "met"
    UNCLEAR = "unclear"


@dataclass(frozen=True)
class ElementCheck:
    """One statutory element and the narrative snippets that support it."""

    element: str
    status: ElementStatus
    evidence_snippets: tuple[str, ...] = ()


@dataclass(frozen=True)
class ElementEvaluation:
    """Screening-level verdict for one statute against one narrative."""

    overall: ElementStatus
    elements: tuple[ElementCheck, ...] = field(default_factory=tuple)
    notes: tuple[str, ...] = field(default_factory=tuple)
