"""Explicit before/in/after state machine for bounded report sections."""

from dataclasses import dataclass
from enum import Enum

from screening.extraction.layout import SectionMarkers


class SectionState(str, Enum):
    BEFORE = "before-section"
    IN = "in-section"
    AFTER = "after-section"


@dataclass(frozen=True)
class Transition:
    state: SectionState
    offset: int
    marker: str | None = None


@dataclass(frozen=True)
class Section:
    name: str
    body: str
    start: int
    end: int
    start_marker: str
    stop_marker: str | None


class SectionScanner:
    """Finds one bounded section in a text.

    BEFORE -> IN happens at the end of the first start marker (tried in
    priority order) whose body is long enough. IN -> AFTER happens at the
    earliest stop marker, at ``max_chars``, or at end of text.
    """

    def __init__(self, markers: SectionMarkers) -> None:
        self._markers = markers

    @property
    def name(self) -> str:
        return self._markers.name

    def scan(self, text: str) -> Section | None:
        for marker in self._markers.start:
            match = marker.pattern.search(text)
            if match is None:
                continue
            body_start = match.end()
            body_end, stop_name = self._find_exit(text, body_start)
            body = text[body_start:body_end].strip()
            if len(body) >= self._markers.min_body_chars:
                return Section(
                    name=self._markers.name,
                    body=body,
                    start=body_start,
                    end=body_end,
                    start_marker=marker.name,
                    stop_marker=stop_name,
                )
        return None

    def transitions(self, text: str) -> list[Transition]:
        steps = [Transition(SectionState.BEFORE, 0)]
        section = self.scan(text)
        if section is None:
            return steps
        steps.append(Transition(SectionState.IN, section.start, section.start_marker))
        steps.append(Transition(SectionState.AFTER, section.end, section.stop_marker))
        return steps

    def _find_exit(self, text: str, body_start: int) -> tuple[int, str | None]:
        end, stop_name = len(text), None
        for marker in self._markers.stop:
            match = marker.pattern.search(text, body_start)
            if match is not None and match.start() < end:
                end, stop_name = match.start(), marker.name
        if self._markers.max_chars is not None and body_start + self._markers.max_chars < end:
            end, stop_name = body_start + self._markers.max_chars, "max_chars"
        return end, stop_name
