"""Heuristics that tell readable text apart from extraction noise."""

import re

from screening.quality.models import TextQualityVerdict
from screening.quality.sanitize import strip_control_chars

MIN_TEXT_LENGTH = 120
MAX_SYMBOL_RUN = 18
SYMBOL_RATIO_LIMIT = 0.33
LETTER_RATIO_FLOOR = 0.22

PREFIX_WINDOW = 1200
PREFIX_MIN_LENGTH = 80
PREFIX_SYMBOL_RATIO_LIMIT = 0.45
PREFIX_PUNCTUATION_RATIO_LIMIT = 0.35

_BROKEN_GLYPH = re.compile(r"\(cid:\d+\)", re.IGNORECASE)
_PUNCT = r"!\"#$%&'()*+,\-./:;<=>?@\[\]\\^_`{|}~"
_SYMBOL_RUN = re.compile(rf"[{_PUNCT}0-9]{{{MAX_SYMBOL_RUN},}}")
_PUNCTUATION = re.compile(rf"[{_PUNCT}]")
_LETTER = re.compile(r"[A-Za-z]")
_ALNUM = re.compile(r"[A-Za-z0-9]")
_WHITESPACE = re.compile(r"\s")


class GarbleDetector:
    """Scores extracted text; both checks are pure functions of the input."""

    def assess(self, text: str) -> TextQualityVerdict:
        body_reasons, letter_ratio, symbol_ratio = self._check_body(text)
        prefix_reasons, prefix_symbol_ratio, prefix_punct_ratio = self._check_prefix(text)
        reasons = tuple(body_reasons + prefix_reasons)
        return TextQualityVerdict(
            garbled=bool(reasons),
            body_garbled=bool(body_reasons),
            prefix_garbled=bool(prefix_reasons),
            letter_ratio=letter_ratio,
            symbol_ratio=symbol_ratio,
            prefix_symbol_ratio=prefix_symbol_ratio,
            prefix_punctuation_ratio=prefix_punct_ratio,
            reasons=reasons,
        )

    def is_garbled(self, text: str) -> bool:
        return self.assess(text).garbled

    @staticmethod
    def _check_body(text: str) -> tuple[list[str], float, float]:
        if not text or len(text.strip()) < MIN_TEXT_LENGTH:
            return ["too_short"], 0.0, 0.0
        reasons: list[str] = []
        if _BROKEN_GLYPH.search(text):
            reasons.append("broken_glyph_marker")

        cleaned = strip_control_chars(text).strip()
        if len(cleaned) < MIN_TEXT_LENGTH:
            return reasons + ["too_short"], 0.0, 0.0
        if _SYMBOL_RUN.search(cleaned):
            reasons.append("symbol_run")

        letters = len(_LETTER.findall(cleaned))
        spaces = len(_WHITESPACE.findall(cleaned))
        symbols = max(0, len(cleaned) - letters - spaces)
        letter_ratio = letters / len(cleaned)
        symbol_ratio = symbols / len(cleaned)
        if symbol_ratio > SYMBOL_RATIO_LIMIT and letter_ratio < LETTER_RATIO_FLOOR:
            reasons.append("symbol_ratio")
        return reasons, letter_ratio, symbol_ratio

    @staticmethod
    def _check_prefix(text: str) -> tuple[list[str], float, float]:
        if not text:
            return ["prefix_too_short"], 0.0, 0.0
        compact = _WHITESPACE.sub("", strip_control_chars(text[:PREFIX_WINDOW]))
        if len(compact) < PREFIX_MIN_LENGTH:
            return ["prefix_too_short"], 0.0, 0.0

        reasons: list[str] = []
        symbols = len(compact) - len(_ALNUM.findall(compact))
        symbol_ratio = symbols / len(compact)
        punct_ratio = len(_PUNCTUATION.findall(compact)) / len(compact)
        if symbol_ratio > PREFIX_SYMBOL_RATIO_LIMIT:
            reasons.append("prefix_symbol_ratio")
        if punct_ratio > PREFIX_PUNCTUATION_RATIO_LIMIT:
            reasons.append("prefix_punctuation_ratio")
        return reasons, symbol_ratio, punct_ratio
