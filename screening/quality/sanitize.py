import re

_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0B\x0C\x0E-\x1F]")
_HORIZONTAL_WS = re.compile(r"[ \t\r\f\v\u00a0]+")
_SPACE_AROUND_NEWLINE = re.compile(r" *\n *")
_BLANK_LINES = re.compile(r"\n{3,}")


def strip_control_chars(text: str) -> str:
    """Drop NUL bytes and turn the remaining C0 control characters into spaces."""
    return _CONTROL_CHARS.sub(" ", (text or "").replace("\x00", ""))


def sanitize_text(text: str) -> str:
    """Normalize text for downstream extraction.

    Line breaks survive (section markers are line-anchored); every other
    whitespace run collapses to one space and blank-line runs to one blank line.
    """
    cleaned = strip_control_chars(text).replace("\r\n", "\n")
    cleaned = _HORIZONTAL_WS.sub(" ", cleaned)
    cleaned = _SPACE_AROUND_NEWLINE.sub("\n", cleaned)
    cleaned = _BLANK_LINES.sub("\n\n", cleaned)
    return cleaned.strip()
