import json
import re
from pathlib import Path

import pytest

from screening.extraction.exceptions import LayoutError
from screening.extraction.layout import load_layout


def _write(tmp_path: Path, content: object) -> Path:
    path = tmp_path / "layout.json"
    path.write_text(content if isinstance(content, str) else json.dumps(content))
    return path


class TestDefaultLayout:
    def test_has_all_sections(self) -> None:
        layout = load_layout()
        assert layout.name == "wvc_police_report"
        assert set(layout.sections) == {
            "screening_sheet",
            "criminal_history",
            "general_offense",
            "officer_actions",
            "narrative",
        }

    def test_section_limits(self) -> None:
        layout = load_layout()
        assert layout.section("screening_sheet").max_chars == 1500
        assert layout.section("criminal_history").min_body_chars == 21

    def test_markers_ignore_case_by_default(self) -> None:
        marker = load_layout().section("screening_sheet").start[0]
        assert marker.pattern.flags & re.IGNORECASE

    def test_caps_heading_is_case_sensitive(self) -> None:
        stops = {m.name: m for m in load_layout().section("officer_actions").stop}
        assert not stops["caps_heading"].pattern.flags & re.IGNORECASE

    def test_unknown_section_raises(self) -> None:
        with pytest.raises(LayoutError, match="no section 'charges'"):
            load_layout().section("charges")


class TestCustomLayout:
    def test_loads_custom_file(self, tmp_path: Path) -> None:
        path = _write(
            tmp_path,
            {
                "name": "other_vendor",
                "sections": {"screening_sheet": {"start": [{"name": "s", "pattern": "CHARGES"}]}},
                "page_headers": ["^Page \\d+$"],
            },
        )
        layout = load_layout(path)
        assert layout.name == "other_vendor"
        assert layout.section("screening_sheet").stop == ()
        assert len(layout.page_headers) == 1

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(LayoutError, match="Failed to load"):
            load_layout(tmp_path / "missing.json")

    def test_invalid_json_raises(self, tmp_path: Path) -> None:
        with pytest.raises(LayoutError, match="Invalid layout"):
            load_layout(_write(tmp_path, "{not json"))

    def test_bad_pattern_raises(self, tmp_path: Path) -> None:
        path = _write(
            tmp_path, {"sections": {"s": {"start": [{"name": "s", "pattern": "("}]}}}
        )
        with pytest.raises(LayoutError, match="Invalid layout"):
            load_layout(path)

    def test_section_without_start_raises(self, tmp_path: Path) -> None:
        path = _write(tmp_path, {"sections": {"s": {"start": []}}})
        with pytest.raises(LayoutError, match="at least one start marker"):
            load_layout(path)
