"""Section boundary markers for one report layout, loaded from JSON.

New report vendors get a new layout file rather than new code.
"""

import json
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from screening.extraction.exceptions import LayoutError

DEFAULT_LAYOUT_PATH = Path(__file__).parent / "layouts" / "default.json"


@dataclass(frozen=True)
class BoundaryMarker:
    name: str
    pattern: re.Pattern[str]


@dataclass(frozen=True)
class SectionMarkers:
    name: str
    start: tuple[BoundaryMarker, ...]
    stop: tuple[BoundaryMarker, ...] = ()
    max_chars: int | None = None
    min_body_chars: int = 1


@dataclass(frozen=True)
class DocumentLayout:
    name: str
    sections: dict[str, SectionMarkers]
    page_headers: tuple[re.Pattern[str], ...] = ()

    def section(self, name: str) -> SectionMarkers:
        try:
            return self.sections[name]
        except KeyError as exc:
            raise LayoutError(f"Layout '{self.name}' has no section '{name}'") from exc


def _compile_marker(raw: dict[str, Any]) -> BoundaryMarker:
    flags = re.MULTILINE
    if raw.get("ignore_case", True):
        flags |= re.IGNORECASE
    return BoundaryMarker(name=str(raw["name"]), pattern=re.compile(raw["pattern"], flags))


def _build_section(name: str, raw: dict[str, Any]) -> SectionMarkers:
    start = tuple(_compile_marker(m) for m in raw.get("start", []))
    if not start:
        raise LayoutError(f"Section '{name}' needs at least one start marker")
    return SectionMarkers(
        name=name,
        start=start,
        stop=tuple(_compile_marker(m) for m in raw.get("stop", [])),
        max_chars=raw.get("max_chars"),
        min_body_chars=int(raw.get("min_body_chars", 1)),
    )


def load_layout(path: Path | None = None) -> DocumentLayout:
    """Load and compile a layout file.

    Raises:
        LayoutError: if the file cannot be read, parsed or compiled.
    """
    if path is None:
        path = DEFAULT_LAYOUT_PATH
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
        sections = {
            name: _build_section(name, section)
            for name, section in raw["sections"].items()
        }
        page_headers = tuple(
            re.compile(p, re.IGNORECASE) for p in raw.get("page_headers", [])
        )
    except OSError as exc:
        raise LayoutError(f"Failed to load layout {path}: {exc}") from exc
    except (json.JSONDecodeError, KeyError, TypeError, re.error) as exc:
        raise LayoutError(f"Invalid layout {path}: {exc}") from exc
    return DocumentLayout(
        name=str(raw.get("name", path.stem)),
        sections=sections,
        page_headers=page_headers,
    )
