"""HTML-to-statute-text conversions for the legal-code websites."""

import copy
import re

from bs4 import BeautifulSoup, Tag

from screening.logging.logger import Log

VERSION_MARKER = re.compile(r"versionDefault\s*=\s*[\"']([^\"']+)[\"']")
_PAGE_NAME = re.compile(r"[^/]+\.html$")

_CHROME_SELECTORS = (
    "nav, header, footer, script, style, noscript, iframe, .nav, .menu, .header, "
    ".footer, #toc, .toc, .breadcrumb, .breadcrumbs, [data-nav], .download, "
    ".downloads, .history, .links, .sidebar, .navigation, .table-of-contents"
)
_SECTION_NUMBER = re.compile(r"^\d+[A-Za-z]?-\d+[a-z]?-\S+\.?\s*$", re.IGNORECASE)

_NUMBERED = re.compile(r"^\(\d+\)$")
_LETTERED = re.compile(r"^\([a-z]\)$", re.IGNORECASE)
_ROMAN = re.compile(r"^\([ivxIVX]+\)$")
_CAPITAL = re.compile(r"^\([A-Z]\)$")

PARSER_GUARD_PHRASES: tuple[str, ...] = (
    "skip to content",
    "skip to main",
    "skip to navigation",
    "main menu",
    "site menu",
    "navigation menu",
    "utah state legislature",
    "all legislators",
    "find legislators",
    "find a bill",
    "view bills",
    "accessibility settings",
    "use the settings button",
    "download as pdf",
    "download as rtf",
    "browse by title",
    "browse by chapter",
    "select a title from",
    "select a chapter from",
)
MIN_PARSED_LENGTH = 400

_BROWSER_NAV_PHRASES: tuple[str, ...] = (
    "skip to content",
    "skip to main",
    "skip to navigation",
    "all legislators",
    "find legislators",
    "view bills",
    "quick links",
    "house bills",
    "senate bills",
    "find a bill",
    "utah state legislature",
    "main navigation",
    "site navigation",
    "download as pdf",
    "download as rtf",
    "browse by title",
    "browse by chapter",
    "select a title from",
    "select a chapter from",
)
_MUNICIPAL_NAV_LINE = re.compile(
    r"^(Accessibility|Skip to Content|Settings|Login|Legislature|House Home|"
    r"Senate Home|All Legislators|View Bills|Browse by Session)$",
    re.IGNORECASE,
)
_SECTION_HEADING = re.compile(r"Utah Code Section|^\d+-\d+[a-z]?-\d+", re.IGNORECASE)
_SECTION_START = re.compile(r"Utah Code Section \d+-\d+[a-z]?-\d+", re.IGNORECASE)


def find_version_marker(html: str) -> str | None:
    """Return the current-version identifier embedded in a code shell page."""
    match = VERSION_MARKER.search(html or "")
    return match.group(1) if match else None


def versioned_url(url: str, version: str) -> str:
    return _PAGE_NAME.sub(f"{version}.html", url)


def first_line(text: str, limit: int = 200) -> str | None:
    for line in text.splitlines():
        if line.strip():
            return line.strip()[:limit]
    return None


def _indent(part: str) -> str:
    marker = part.split(" ", 1)[0]
    if _NUMBERED.match(marker):
        return "\n" + part
    if _LETTERED.match(marker):
        return "\n  " + part
    if _ROMAN.match(marker) or _CAPITAL.match(marker):
        return "\n    " + part
    return "\n" + part


def _is_subsection_marker(text: str) -> bool:
    return any(p.match(text) for p in (_NUMBERED, _LETTERED, _ROMAN, _CAPITAL))


def _section_title(secdiv: Tag) -> str:
    bolds = [b.get_text().strip() for b in secdiv.find_all("b")]
    if len(bolds) < 2:
        return ""
    if _SECTION_NUMBER.match(bolds[0]):
        return f"{bolds[0]} {bolds[1]}"
    if _SECTION_NUMBER.match(bolds[1]):
        following = bolds[2] if len(bolds) > 2 else ""
        return f"{bolds[1]} {following}".strip()
    return ""


def parse_versioned_utah_html(html: str) -> str | None:
    """Rebuild statute text from the ``#secdiv`` subsection table of a versioned page.

    Returns None unless the result has a ``(1)`` marker, no navigation phrase
    and at least 400 characters.
    """
    if not html or not html.strip():
        return None
    soup = BeautifulSoup(html, "html.parser")
    secdiv = soup.select_one("#secdiv")
    if secdiv is None:
        Log.debug("Versioned page has no #secdiv")
        return None
    for element in secdiv.select(_CHROME_SELECTORS):
        element.decompose()

    parts: list[str] = []
    for row in secdiv.find_all("tr"):
        cells = row.find_all("td", recursive=False)
        if len(cells) < 2:
            continue
        marker = cells[0].get_text().strip()
        if not _is_subsection_marker(marker):
            continue
        content = copy.copy(cells[1])
        for nested in content.find_all("table"):
            nested.decompose()
        body = " ".join(content.get_text().split())
        if len(body) > 5:
            parts.append(f"{marker} {body}")

    if not parts:
        Log.debug("Versioned page has no subsection rows")
        return None

    title = _section_title(secdiv)
    body = "".join(_indent(p) for p in parts).lstrip("\n")
    result = ((title + "\n\n") if title else "") + body
    result = result.strip()

    lowered = result.lower()
    for phrase in PARSER_GUARD_PHRASES:
        if phrase in lowered:
            Log.debug(f"Parsed statute contains guard phrase '{phrase}'")
            return None
    if not re.search(r"\(\d+\)", result):
        Log.debug("Parsed statute lacks (1) style markers")
        return None
    if len(result) < MIN_PARSED_LENGTH:
        Log.debug(f"Parsed statute too short ({len(result)} chars)")
        return None
    return result


def clean_browser_text(text: str | None) -> str | None:
    """Drop navigation lines from rendered page text and put markers on their own lines."""
    if not text:
        return None
    lines = [" ".join(line.split()) for line in text.splitlines()]
    kept = [
        line
        for line in lines
        if line and not any(phrase in line.lower() for phrase in _BROWSER_NAV_PHRASES)
    ]
    cleaned = " ".join(kept)
    cleaned = re.sub(r"\s*(\(\d+\))\s*", r"\n\n\1 ", cleaned)
    cleaned = re.sub(r"\s*(\([a-z]\))\s*", r"\n  \1 ", cleaned)
    cleaned = re.sub(r"\s*(\([ivxIVX]{2,}\))\s*", r"\n    \1 ", cleaned)
    cleaned = re.sub(r"\n{3,}", "\n\n", cleaned).strip()
    return cleaned or None


def html_to_text(html: str) -> str | None:
    """Plain text of a municipal code page with site chrome removed."""
    if not html or not html.strip():
        return None
    soup = BeautifulSoup(html, "html.parser")
    for element in soup.select("script, style, nav, header, footer"):
        element.decompose()
    for br in soup.find_all("br"):
        br.replace_with("\n")

    text = soup.get_text("\n")
    text = "\n".join(" ".join(line.split()) for line in text.splitlines())
    text = re.sub(r"\n{3,}", "\n\n", text).strip()
    start = _SECTION_START.search(text)
    if start:
        text = text[start.start() :]

    kept: list[str] = []
    found_content = False
    for line in text.splitlines():
        stripped = line.strip()
        if not found_content and len(stripped) < 10:
            continue
        if _MUNICIPAL_NAV_LINE.match(stripped):
            continue
        if _SECTION_HEADING.search(stripped) or len(stripped) > 30:
            found_content = True
        if found_content:
            kept.append(stripped)

    result = "\n".join(kept).strip()
    return result if len(result) > 20 else None
