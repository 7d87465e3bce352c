import re
import time
from pathlib import Path

from screening.logging.logger import Log

RAW_HTML_LIMIT = 2000


class StatuteDebugDump:
    """Writes fetched HTML and extracted text to local files for troubleshooting."""

    def __init__(self, directory: Path, enabled: bool = False) -> None:
        self._directory = directory
        self._enabled = enabled

    @property
    def enabled(self) -> bool:
        return self._enabled

    def save(self, label: str, raw_html: str, extracted_text: str | None) -> list[Path]:
        if not self._enabled:
            return []
        safe_label = re.sub(r"[^a-zA-Z0-9-]", "_", label)
        stamp = int(time.time() * 1000)
        html_path = self._directory / f"{safe_label}_{stamp}_raw.html"
        text_path = self._directory / f"{safe_label}_{stamp}_extracted.txt"
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
            html_path.write_text(raw_html[:RAW_HTML_LIMIT], encoding="utf-8")
            text_path.write_text(
                extracted_text or "(NULL - extraction failed)", encoding="utf-8"
            )
        except OSError as exc:
            Log.warning(f"Failed to write statute debug files for {label}: {exc}")
            return []
        Log.debug(f"Saved statute debug files: {html_path}, {text_path}")
        return [html_path, text_path]
